# discord_lite/gateway.py
import logging
from functools import partial
from typing import Callable, List, Optional

import requests

from .api import DiscordAPI
from .events import (
    ChannelsLoaded,
    Effect,
    Event,
    FetchChannels,
    FetchGuilds,
    FetchMessages,
    GuildListing,
    GuildsLoaded,
    LoginResult,
    MessageSent,
    MessagesLoaded,
    PostMessage,
    PresenceChanged,
    UpdatePresence,
    VerifyIdentity,
)
from .hierarchy import normalize_channels
from .models import Channel, Guild, GuildOrderingPreference, Identity, Message
from .type_enums import PresenceState
from .utils import FetchError, failure_text


class GatewayFailure(Exception):
    """A transport, status or decode failure reduced to a readable message."""


ApiFactory = Callable[[str], DiscordAPI]


class RemoteGateway:
    def __init__(
        self,
        api_factory: Optional[ApiFactory] = None,
        max_retries: int = 5,
        retry_time_buffer=(1.0, 1.0),
        message_limit: int = 50
    ):
        """
        Initializes the gateway.

        Args:
            api_factory (Optional[ApiFactory]): Builds a DiscordAPI for a token. Each call gets its own client.
            max_retries (int): Retries per request, used when no factory is given.
            retry_time_buffer (Tuple[float, float]): Rate limit buffer range, used when no factory is given.
            message_limit (int): Number of messages fetched per channel.
        """
        self.api_factory = api_factory or partial(
            DiscordAPI,
            max_retries=max_retries,
            retry_time_buffer=retry_time_buffer,
        )
        self.message_limit = message_limit
        self.logger = logging.getLogger(self.__class__.__name__)

    def _call(self, token: str, description: str, operation):
        try:
            return operation(self.api_factory(token))
        except (FetchError, requests.RequestException, ValueError) as exc:
            # Bad status, transport and decode failures all look the same upstream.
            self.logger.debug("Gateway call to %s failed: %s", description, exc)
            raise GatewayFailure(failure_text(exc)) from exc

    def verify_identity(self, token: str) -> Identity:
        payload = self._call(token, "verify identity", lambda api: api.get_current_user())
        return self._decode(Identity.from_payload, payload)

    def fetch_ordering_preference(self, token: str) -> GuildOrderingPreference:
        payload = self._call(token, "fetch user settings", lambda api: api.get_user_settings())
        return self._decode(GuildOrderingPreference.from_settings, payload)

    def fetch_guilds(self, token: str) -> GuildListing:
        """
        Fetches the guild list together with the saved ordering preference.

        The preference is optional: when it cannot be fetched the listing carries
        None and the guilds keep their fetched order.
        """
        payload = self._call(token, "fetch guilds", lambda api: api.get_guilds())
        guilds: List[Guild] = [self._decode(Guild.from_payload, g) for g in payload]
        self.logger.debug("Fetched %s guilds.", len(guilds))

        try:
            ordering = self.fetch_ordering_preference(token)
        except GatewayFailure as exc:
            self.logger.warning("Failed to fetch guild order, using default order: %s", exc)
            ordering = None
        return GuildListing(guilds=guilds, ordering=ordering)

    def fetch_channels(self, token: str, guild_id: str) -> List[Channel]:
        payload = self._call(token, "fetch channels", lambda api: api.get_guild_channels(guild_id))
        channels = normalize_channels(self._decode(Channel.from_payload, c) for c in payload)
        self.logger.debug("Fetched %s channels for guild %s.", len(channels), guild_id)
        return channels

    def fetch_messages(self, token: str, channel_id: str) -> List[Message]:
        payload = self._call(
            token,
            "fetch messages",
            lambda api: api.get_channel_messages(channel_id, limit=self.message_limit),
        )
        messages = [self._decode(Message.from_payload, m) for m in payload]
        # Discord returns newest first.
        messages.reverse()
        return messages

    def send_message(self, token: str, channel_id: str, content: str) -> None:
        self._call(token, "send message", lambda api: api.create_message(channel_id, content))

    def update_presence(self, token: str, presence: PresenceState) -> None:
        self._call(token, "update presence", lambda api: api.update_status(presence.token))

    def _decode(self, parser, payload):
        try:
            return parser(payload)
        except FetchError as exc:
            raise GatewayFailure(failure_text(exc)) from exc

    def execute(self, effect: Effect) -> Event:
        """
        Performs an effect and returns the event describing its outcome.

        Failures are reported inside the returned event; this method does not raise
        for gateway failures.

        Raises:
            TypeError: If the effect type is unknown.
        """
        try:
            if isinstance(effect, VerifyIdentity):
                return LoginResult(token=effect.token, identity=self.verify_identity(effect.token))
            if isinstance(effect, FetchGuilds):
                return GuildsLoaded(token=effect.token, listing=self.fetch_guilds(effect.token))
            if isinstance(effect, FetchChannels):
                return ChannelsLoaded(
                    guild_id=effect.guild_id,
                    channels=self.fetch_channels(effect.token, effect.guild_id),
                )
            if isinstance(effect, FetchMessages):
                return MessagesLoaded(
                    channel_id=effect.channel_id,
                    messages=self.fetch_messages(effect.token, effect.channel_id),
                )
            if isinstance(effect, PostMessage):
                self.send_message(effect.token, effect.channel_id, effect.content)
                return MessageSent(channel_id=effect.channel_id)
            if isinstance(effect, UpdatePresence):
                self.update_presence(effect.token, effect.presence)
                return PresenceChanged(presence=effect.presence)
        except GatewayFailure as exc:
            return self._failure_event(effect, str(exc))
        raise TypeError(f"Unsupported effect: {effect!r}")

    def _failure_event(self, effect: Effect, error: str) -> Event:
        if isinstance(effect, VerifyIdentity):
            return LoginResult(token=effect.token, error=error)
        if isinstance(effect, FetchGuilds):
            return GuildsLoaded(token=effect.token, error=error)
        if isinstance(effect, FetchChannels):
            return ChannelsLoaded(guild_id=effect.guild_id, error=error)
        if isinstance(effect, FetchMessages):
            return MessagesLoaded(channel_id=effect.channel_id, error=error)
        if isinstance(effect, PostMessage):
            return MessageSent(channel_id=effect.channel_id, error=error)
        return PresenceChanged(presence=effect.presence, error=error)
