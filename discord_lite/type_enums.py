# discord_lite/type_enums.py
from enum import Enum
from typing import Tuple


class ChannelKind(Enum):
    TEXT = "text"
    VOICE = "voice"
    CATEGORY = "category"
    OTHER = "other"

    @classmethod
    def from_wire(cls, value) -> "ChannelKind":
        return _WIRE_CHANNEL_KINDS.get(value, cls.OTHER)


_WIRE_CHANNEL_KINDS = {
    0: ChannelKind.TEXT,
    2: ChannelKind.VOICE,
    4: ChannelKind.CATEGORY,
}

RENDERABLE_CHANNEL_KINDS = frozenset({ChannelKind.TEXT, ChannelKind.VOICE, ChannelKind.CATEGORY})
SELECTABLE_CHANNEL_KINDS = frozenset({ChannelKind.TEXT, ChannelKind.VOICE})


class PresenceState(Enum):
    """
    The user's visible availability. Each member carries its wire token,
    display label and colour as a static table.
    """

    ONLINE = ("online", "Online", (0.3, 0.8, 0.3))
    IDLE = ("idle", "Idle", (1.0, 0.7, 0.2))
    DO_NOT_DISTURB = ("dnd", "Do Not Disturb", (0.9, 0.3, 0.3))
    INVISIBLE = ("invisible", "Invisible", (0.5, 0.5, 0.5))

    def __init__(self, token: str, label: str, color: Tuple[float, float, float]):
        self.token = token
        self.label = label
        self.color = color

    @property
    def hex_color(self) -> str:
        red, green, blue = (round(channel * 255) for channel in self.color)
        return f"#{red:02x}{green:02x}{blue:02x}"

    @classmethod
    def from_token(cls, value: str) -> "PresenceState":
        needle = (value or "").strip().lower()
        for presence in cls:
            if needle in {presence.token, presence.label.lower(), presence.name.lower()}:
                return presence
        raise ValueError(f"Unknown presence status: {value!r}")
