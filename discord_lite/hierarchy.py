# discord_lite/hierarchy.py
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .models import Channel
from .type_enums import ChannelKind, RENDERABLE_CHANNEL_KINDS, SELECTABLE_CHANNEL_KINDS


@dataclass(frozen=True)
class ChannelRow:
    channel: Channel
    depth: int = 0
    is_header: bool = False


def normalize_channels(channels: Iterable[Channel]) -> List[Channel]:
    """
    Keeps text, voice and category channels and sorts them by position.

    The sort is stable, so channels sharing a position keep their fetch order.
    """
    kept = [channel for channel in channels if channel.kind in RENDERABLE_CHANNEL_KINDS]
    return sorted(kept, key=lambda channel: channel.position)


def build_channel_tree(channels: Iterable[Channel]) -> List[ChannelRow]:
    """
    Builds the sidebar order for a guild's channels.

    Uncategorised text/voice channels come first in the order given, then every
    category header followed by its children sorted by position. Channels whose
    parent is not a category in ``channels`` are left out.

    Args:
        channels (Iterable[Channel]): Channels of a single guild, already normalized.

    Returns:
        List[ChannelRow]: Rows to render, top to bottom.
    """
    channels = list(channels)
    categories = [channel for channel in channels if channel.kind is ChannelKind.CATEGORY]
    children: Dict[str, List[Channel]] = {category.id: [] for category in categories}

    rows: List[ChannelRow] = []
    for channel in channels:
        if channel.kind not in SELECTABLE_CHANNEL_KINDS:
            continue
        if channel.parent_id is None:
            rows.append(ChannelRow(channel=channel))
        elif channel.parent_id in children:
            children[channel.parent_id].append(channel)

    for category in categories:
        rows.append(ChannelRow(channel=category, is_header=True))
        for child in sorted(children[category.id], key=lambda channel: channel.position):
            rows.append(ChannelRow(channel=child, depth=1))
    return rows
