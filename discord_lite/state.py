# discord_lite/state.py
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .hierarchy import ChannelRow, build_channel_tree
from .models import Channel, Guild, GuildOrderingPreference, Identity, Message
from .ordering import visible_guilds
from .type_enums import PresenceState


class Overlay(Enum):
    NONE = "none"
    PROFILE_EDITOR = "profile_editor"
    USER_PROFILE = "user_profile"


@dataclass(frozen=True)
class SessionState:
    """
    Snapshot of everything the client knows. Only the dispatcher produces new
    snapshots; views read them.

    ``channels`` belong to ``selected_guild_id`` and ``messages`` to
    ``selected_channel_id``. Guild order and the channel tree are derived on
    read and never stored.
    """

    token_input: str = field(default="", repr=False)
    token: Optional[str] = field(default=None, repr=False)
    identity: Optional[Identity] = None

    guilds: List[Guild] = field(default_factory=list)
    ordering: Optional[GuildOrderingPreference] = None
    channels: List[Channel] = field(default_factory=list)
    messages: List[Message] = field(default_factory=list)

    selected_guild_id: Optional[str] = None
    selected_channel_id: Optional[str] = None

    message_input: str = ""

    presence: PresenceState = PresenceState.ONLINE
    presence_menu_open: bool = False

    overlay: Overlay = Overlay.NONE
    viewed_identity: Optional[Identity] = None

    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None and self.identity is not None

    def guild_list(self) -> List[Guild]:
        return visible_guilds(self.guilds, self.ordering)

    def channel_tree(self) -> List[ChannelRow]:
        return build_channel_tree(self.channels)

    def selected_guild(self) -> Optional[Guild]:
        return next((g for g in self.guilds if g.id == self.selected_guild_id), None)

    def selected_channel(self) -> Optional[Channel]:
        return next((c for c in self.channels if c.id == self.selected_channel_id), None)

    def find_channel(self, channel_id: str) -> Optional[Channel]:
        return next((c for c in self.channels if c.id == channel_id), None)
