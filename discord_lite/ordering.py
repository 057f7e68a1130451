# discord_lite/ordering.py
from typing import Dict, List, Optional, Sequence

from .models import Guild, GuildOrderingPreference


def ordered_guild_ids(preference: GuildOrderingPreference) -> List[str]:
    """
    Flattens the folders (folder order, then order inside each folder) into one
    id list. Falls back to the flat legacy positions when no folder lists any id.
    """
    ordered = [guild_id for folder in preference.folders for guild_id in folder.guild_ids]
    if not ordered:
        ordered = list(preference.positions)
    return ordered


def _rank_table(ordered_ids: Sequence[str]) -> Dict[str, int]:
    ranks: Dict[str, int] = {}
    for index, guild_id in enumerate(ordered_ids):
        # First occurrence wins for ids listed more than once.
        ranks.setdefault(guild_id, index)
    return ranks


def reconcile_guilds(
    guilds: Sequence[Guild],
    preference: Optional[GuildOrderingPreference]
) -> List[Guild]:
    """
    Orders guilds by the user's saved preference.

    Guilds missing from the preference keep their relative order and go last.
    Without a preference the guilds are returned in the order given.

    Args:
        guilds (Sequence[Guild]): Guilds as fetched.
        preference (Optional[GuildOrderingPreference]): Saved ordering, or None if it could not be fetched.

    Returns:
        List[Guild]: A permutation of ``guilds``.
    """
    if preference is None:
        return list(guilds)

    ordered_ids = ordered_guild_ids(preference)
    ranks = _rank_table(ordered_ids)
    # Past every real rank, duplicates included.
    unranked = len(ordered_ids)
    return sorted(guilds, key=lambda guild: ranks.get(guild.id, unranked))


def visible_guilds(
    guilds: Sequence[Guild],
    preference: Optional[GuildOrderingPreference]
) -> List[Guild]:
    """
    Reconciled guilds with blank-named ones left out. Blank guilds still take
    part in the ranking so the remaining order matches the sidebar.
    """
    return [guild for guild in reconcile_guilds(guilds, preference) if guild.is_valid]
