# discord_lite/events.py
"""
Events fed to the dispatcher and the effects it asks the runtime to perform.

Result events carry the context their request was issued with (token, guild
or channel id) so late arrivals can be recognised as stale.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .models import Channel, Guild, GuildOrderingPreference, Identity, Message
from .type_enums import PresenceState


class Event:
    pass


class ResultEvent(Event):
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class GuildListing:
    guilds: List[Guild]
    ordering: Optional[GuildOrderingPreference] = None


# User input

@dataclass(frozen=True)
class TokenInputChanged(Event):
    text: str


@dataclass(frozen=True)
class Login(Event):
    pass


@dataclass(frozen=True)
class SelectGuild(Event):
    guild_id: str


@dataclass(frozen=True)
class SelectChannel(Event):
    channel_id: str


@dataclass(frozen=True)
class MessageInputChanged(Event):
    text: str


@dataclass(frozen=True)
class SendMessage(Event):
    pass


@dataclass(frozen=True)
class TogglePresenceMenu(Event):
    pass


@dataclass(frozen=True)
class ChangePresence(Event):
    presence: PresenceState


@dataclass(frozen=True)
class OpenProfileEditor(Event):
    pass


@dataclass(frozen=True)
class ViewUserProfile(Event):
    identity: Identity


@dataclass(frozen=True)
class CloseOverlay(Event):
    pass


# Network results

@dataclass(frozen=True)
class LoginResult(ResultEvent):
    token: str = field(repr=False)
    identity: Optional[Identity] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class GuildsLoaded(ResultEvent):
    token: str = field(repr=False)
    listing: Optional[GuildListing] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ChannelsLoaded(ResultEvent):
    guild_id: str
    channels: Optional[List[Channel]] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class MessagesLoaded(ResultEvent):
    channel_id: str
    messages: Optional[List[Message]] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class MessageSent(ResultEvent):
    channel_id: str
    error: Optional[str] = None


@dataclass(frozen=True)
class PresenceChanged(ResultEvent):
    presence: PresenceState
    error: Optional[str] = None


# Effects

class Effect:
    pass


@dataclass(frozen=True)
class VerifyIdentity(Effect):
    token: str = field(repr=False)


@dataclass(frozen=True)
class FetchGuilds(Effect):
    token: str = field(repr=False)


@dataclass(frozen=True)
class FetchChannels(Effect):
    token: str = field(repr=False)
    guild_id: str


@dataclass(frozen=True)
class FetchMessages(Effect):
    token: str = field(repr=False)
    channel_id: str


@dataclass(frozen=True)
class PostMessage(Effect):
    token: str = field(repr=False)
    channel_id: str
    content: str


@dataclass(frozen=True)
class UpdatePresence(Effect):
    token: str = field(repr=False)
    presence: PresenceState
