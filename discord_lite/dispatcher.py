# discord_lite/dispatcher.py
"""
The client state machine.

``reduce`` is a pure function from the current snapshot and one event to the
next snapshot plus the requests that should be issued. ``CommandDispatcher``
owns the live snapshot and feeds it events one at a time.
"""
import logging
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple, Type

from .events import (
    ChangePresence,
    ChannelsLoaded,
    CloseOverlay,
    Effect,
    Event,
    FetchChannels,
    FetchGuilds,
    FetchMessages,
    GuildsLoaded,
    Login,
    LoginResult,
    MessageInputChanged,
    MessageSent,
    MessagesLoaded,
    OpenProfileEditor,
    PostMessage,
    PresenceChanged,
    ResultEvent,
    SelectChannel,
    SelectGuild,
    SendMessage,
    TogglePresenceMenu,
    TokenInputChanged,
    UpdatePresence,
    VerifyIdentity,
    ViewUserProfile,
)
from .state import Overlay, SessionState

Transition = Tuple[SessionState, List[Effect]]

logger = logging.getLogger(__name__)


def _unchanged(state: SessionState) -> Transition:
    return state, []


def _failed(state: SessionState, context: str, error: Optional[str]) -> Transition:
    # Collections are left as they are; stale data beats an empty pane.
    return replace(state, error=f"{context}: {error}"), []


def _on_token_input(state: SessionState, event: TokenInputChanged) -> Transition:
    return replace(state, token_input=event.text), []


def _on_login(state: SessionState, event: Login) -> Transition:
    if not state.token_input:
        return _unchanged(state)
    return state, [VerifyIdentity(token=state.token_input)]


def _on_login_result(state: SessionState, event: LoginResult) -> Transition:
    if event.token != state.token_input:
        logger.debug("Discarding login result for a token that is no longer pending.")
        return _unchanged(state)
    if not event.ok:
        return _failed(state, "Login failed", event.error)
    state = replace(state, token=event.token, identity=event.identity, error=None)
    return state, [FetchGuilds(token=event.token)]


def _on_guilds_loaded(state: SessionState, event: GuildsLoaded) -> Transition:
    if event.token != state.token:
        logger.debug("Discarding guild list fetched for a previous session.")
        return _unchanged(state)
    if not event.ok:
        return _failed(state, "Failed to load guilds", event.error)
    listing = event.listing
    return replace(state, guilds=list(listing.guilds), ordering=listing.ordering, error=None), []


def _on_select_guild(state: SessionState, event: SelectGuild) -> Transition:
    if not state.is_authenticated:
        return _unchanged(state)
    state = replace(
        state,
        selected_guild_id=event.guild_id,
        selected_channel_id=None,
        channels=[],
        messages=[],
    )
    return state, [FetchChannels(token=state.token, guild_id=event.guild_id)]


def _on_channels_loaded(state: SessionState, event: ChannelsLoaded) -> Transition:
    if event.guild_id != state.selected_guild_id:
        logger.debug("Discarding channels for guild %s; guild %s is selected.", event.guild_id, state.selected_guild_id)
        return _unchanged(state)
    if not event.ok:
        return _failed(state, "Failed to load channels", event.error)

    channels = list(event.channels)
    selected_channel_id = state.selected_channel_id
    messages = state.messages
    if selected_channel_id is not None and all(c.id != selected_channel_id for c in channels):
        selected_channel_id = None
        messages = []
    state = replace(
        state,
        channels=channels,
        selected_channel_id=selected_channel_id,
        messages=messages,
        error=None,
    )
    return state, []


def _on_select_channel(state: SessionState, event: SelectChannel) -> Transition:
    if not state.is_authenticated or state.selected_guild_id is None:
        return _unchanged(state)
    channel = state.find_channel(event.channel_id)
    if channel is None or not channel.is_selectable:
        logger.debug("Ignoring selection of channel %s.", event.channel_id)
        return _unchanged(state)

    messages = state.messages if event.channel_id == state.selected_channel_id else []
    state = replace(state, selected_channel_id=event.channel_id, messages=messages)
    return state, [FetchMessages(token=state.token, channel_id=event.channel_id)]


def _on_messages_loaded(state: SessionState, event: MessagesLoaded) -> Transition:
    if event.channel_id != state.selected_channel_id:
        logger.debug("Discarding messages for channel %s; channel %s is selected.", event.channel_id, state.selected_channel_id)
        return _unchanged(state)
    if not event.ok:
        return _failed(state, "Failed to load messages", event.error)
    return replace(state, messages=list(event.messages), error=None), []


def _on_message_input(state: SessionState, event: MessageInputChanged) -> Transition:
    return replace(state, message_input=event.text), []


def _on_send_message(state: SessionState, event: SendMessage) -> Transition:
    content = state.message_input
    if not content.strip() or state.selected_channel_id is None or state.token is None:
        return _unchanged(state)
    # The input is cleared now; a failed send does not bring it back.
    state = replace(state, message_input="")
    return state, [PostMessage(token=state.token, channel_id=state.selected_channel_id, content=content)]


def _on_message_sent(state: SessionState, event: MessageSent) -> Transition:
    if not event.ok:
        return _failed(state, "Failed to send message", event.error)
    state = replace(state, error=None)
    if state.selected_channel_id is None or state.token is None:
        return state, []
    return state, [FetchMessages(token=state.token, channel_id=state.selected_channel_id)]


def _on_toggle_presence_menu(state: SessionState, event: TogglePresenceMenu) -> Transition:
    return replace(state, presence_menu_open=not state.presence_menu_open), []


def _on_change_presence(state: SessionState, event: ChangePresence) -> Transition:
    state = replace(state, presence=event.presence, presence_menu_open=False)
    if state.token is None:
        return state, []
    return state, [UpdatePresence(token=state.token, presence=event.presence)]


def _on_presence_changed(state: SessionState, event: PresenceChanged) -> Transition:
    if not event.ok:
        # The local presence stays as chosen.
        return _failed(state, "Failed to change status", event.error)
    return replace(state, error=None), []


def _on_open_profile_editor(state: SessionState, event: OpenProfileEditor) -> Transition:
    if not state.is_authenticated:
        return _unchanged(state)
    return replace(state, overlay=Overlay.PROFILE_EDITOR, viewed_identity=None), []


def _on_view_user_profile(state: SessionState, event: ViewUserProfile) -> Transition:
    return replace(state, overlay=Overlay.USER_PROFILE, viewed_identity=event.identity), []


def _on_close_overlay(state: SessionState, event: CloseOverlay) -> Transition:
    return replace(state, overlay=Overlay.NONE, viewed_identity=None), []


_HANDLERS: Dict[Type[Event], Callable[[SessionState, Event], Transition]] = {
    TokenInputChanged: _on_token_input,
    Login: _on_login,
    LoginResult: _on_login_result,
    GuildsLoaded: _on_guilds_loaded,
    SelectGuild: _on_select_guild,
    ChannelsLoaded: _on_channels_loaded,
    SelectChannel: _on_select_channel,
    MessagesLoaded: _on_messages_loaded,
    MessageInputChanged: _on_message_input,
    SendMessage: _on_send_message,
    MessageSent: _on_message_sent,
    TogglePresenceMenu: _on_toggle_presence_menu,
    ChangePresence: _on_change_presence,
    PresenceChanged: _on_presence_changed,
    OpenProfileEditor: _on_open_profile_editor,
    ViewUserProfile: _on_view_user_profile,
    CloseOverlay: _on_close_overlay,
}


def reduce(state: SessionState, event: Event) -> Transition:
    """
    Applies one event to a snapshot.

    Args:
        state (SessionState): The current snapshot. It is never modified.
        event (Event): The event to apply.

    Returns:
        Tuple[SessionState, List[Effect]]: The next snapshot and the requests to issue.

    Raises:
        TypeError: If the event type is unknown.
    """
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported event: {event!r}")
    return handler(state, event)


class CommandDispatcher:
    def __init__(self, state: Optional[SessionState] = None):
        """
        Initializes the dispatcher.

        Args:
            state (Optional[SessionState]): Starting snapshot. Defaults to an empty session.
        """
        self._state = state or SessionState()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, event: Event) -> List[Effect]:
        """
        Applies an event to the live snapshot and returns the requests it issued.
        """
        previous = self._state
        self._state, effects = reduce(previous, event)
        self.logger.debug(
            "Handled %s; issued %s.",
            type(event).__name__,
            ", ".join(type(effect).__name__ for effect in effects) or "nothing",
        )
        if isinstance(event, ResultEvent) and not event.ok and self._state is not previous:
            self.logger.warning("%s", self._state.error)
        return effects
