# discord_lite/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .type_enums import ChannelKind, SELECTABLE_CHANNEL_KINDS
from .utils import DecodeError


def _require(payload: Dict[str, Any], key: str, resource: str) -> Any:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object for {resource}, got {type(payload).__name__}.")
    value = payload.get(key)
    if value is None:
        raise DecodeError(f"Missing field '{key}' in {resource} payload.")
    return value


@dataclass(frozen=True)
class Identity:
    id: str
    username: str
    discriminator: str = "0"
    avatar: Optional[str] = None

    @property
    def tag(self) -> str:
        if self.discriminator in ("", "0"):
            return self.username
        return f"{self.username}#{self.discriminator}"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Identity":
        return cls(
            id=str(_require(payload, "id", "user")),
            username=_require(payload, "username", "user"),
            discriminator=str(payload.get("discriminator") or "0"),
            avatar=payload.get("avatar"),
        )


@dataclass(frozen=True)
class Guild:
    id: str
    name: str
    icon: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return bool(self.name and self.name.strip())

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Guild":
        return cls(
            id=str(_require(payload, "id", "guild")),
            name=payload.get("name") or "",
            icon=payload.get("icon"),
        )


@dataclass(frozen=True)
class GuildFolder:
    guild_ids: Tuple[str, ...] = ()
    id: Optional[Any] = None
    name: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "GuildFolder":
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object for guild folder, got {type(payload).__name__}.")
        return cls(
            guild_ids=tuple(str(gid) for gid in payload.get("guild_ids") or []),
            id=payload.get("id"),
            name=payload.get("name"),
        )


@dataclass(frozen=True)
class GuildOrderingPreference:
    """
    The user's saved sidebar order: folders when present, otherwise the
    legacy flat list of guild positions.
    """

    folders: Tuple[GuildFolder, ...] = ()
    positions: Tuple[str, ...] = ()

    @classmethod
    def from_settings(cls, payload: Dict[str, Any]) -> "GuildOrderingPreference":
        if not isinstance(payload, dict):
            raise DecodeError(f"Expected a JSON object for user settings, got {type(payload).__name__}.")
        return cls(
            folders=tuple(GuildFolder.from_payload(f) for f in payload.get("guild_folders") or []),
            positions=tuple(str(gid) for gid in payload.get("guild_positions") or []),
        )


@dataclass(frozen=True)
class Channel:
    id: str
    kind: ChannelKind
    raw_type: int = 0
    name: Optional[str] = None
    position: int = 0
    parent_id: Optional[str] = None

    @property
    def is_selectable(self) -> bool:
        return self.kind in SELECTABLE_CHANNEL_KINDS

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Channel":
        raw_type = _require(payload, "type", "channel")
        if isinstance(raw_type, bool) or not isinstance(raw_type, int):
            raise DecodeError(f"Invalid type {raw_type!r} in channel payload.")
        parent_id = payload.get("parent_id")
        try:
            position = int(payload.get("position") or 0)
        except (TypeError, ValueError):
            raise DecodeError(f"Invalid position {payload.get('position')!r} in channel payload.")
        return cls(
            id=str(_require(payload, "id", "channel")),
            kind=ChannelKind.from_wire(raw_type),
            raw_type=raw_type,
            name=payload.get("name"),
            position=position,
            parent_id=str(parent_id) if parent_id is not None else None,
        )


@dataclass(frozen=True)
class Message:
    id: str
    content: str
    author: Identity
    timestamp: str = field(default="")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Message":
        return cls(
            id=str(_require(payload, "id", "message")),
            content=payload.get("content") or "",
            author=Identity.from_payload(_require(payload, "author", "message")),
            timestamp=_require(payload, "timestamp", "message"),
        )
