# discord_lite/view.py
"""
Rich renderables for a session snapshot. Nothing here changes state.
"""
from typing import List

from rich.console import Group, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.tree import Tree

from .hierarchy import ChannelRow
from .models import Identity, Message
from .state import Overlay, SessionState
from .type_enums import ChannelKind, PresenceState

CHANNEL_ICONS = {
    ChannelKind.TEXT: "#",
    ChannelKind.VOICE: "🔊",
}


def format_message_time(timestamp: str) -> str:
    """
    Returns the clock part of an ISO-8601 timestamp, e.g. ``12:34:56`` for
    ``2023-01-01T12:34:56.000000+00:00``. No timezone conversion happens.
    """
    if "T" not in timestamp:
        return ""
    time_part = timestamp.split("T", 1)[1]
    return time_part.split(".", 1)[0]


def render_login(state: SessionState) -> RenderableType:
    body = [
        Text("Discord Lite", style="bold"),
        Text("Login with your Discord token", style="dim"),
    ]
    if state.error:
        body.append(Text(state.error, style="red"))
    return Panel(Group(*body), title="Login", expand=False)


def render_guilds(state: SessionState) -> RenderableType:
    label = "[blue]Servers[/]"
    if state.identity:
        label = f"[grey70]@{escape(state.identity.username)}[/] · {label}"
    tree = Tree(label)
    for index, guild in enumerate(state.guild_list(), start=1):
        marker = "[bold green]>[/] " if guild.id == state.selected_guild_id else ""
        tree.add(f"{marker}[dim]{index}.[/] [bright_white]{escape(guild.name)}[/]")
    if not tree.children:
        tree.add("[dim]No servers.[/]")
    return tree


def render_channels(state: SessionState) -> RenderableType:
    guild = state.selected_guild()
    if guild is None:
        return Text("Select a server", style="dim")

    tree = Tree(f"[bright_white]{escape(guild.name)}[/]")
    category_node = None
    index = 0
    for row in state.channel_tree():
        channel = row.channel
        name = escape(channel.name or "Unknown")
        if row.is_header:
            category_node = tree.add(f"[yellow]{name.upper()}[/]")
            continue
        index += 1
        marker = "[bold green]>[/] " if channel.id == state.selected_channel_id else ""
        line = f"{marker}[dim]{index}.[/] [cyan]{CHANNEL_ICONS.get(channel.kind, '?')}[/] {name}"
        parent = category_node if row.depth and category_node is not None else tree
        parent.add(line)
    if not tree.children:
        tree.add("[dim]No channels.[/]")
    return tree


def selectable_rows(state: SessionState) -> List[ChannelRow]:
    """Channel rows in the numbering render_channels shows."""
    return [row for row in state.channel_tree() if not row.is_header]


def render_message(message: Message) -> Text:
    line = Text()
    line.append(f"{message.author.username}:", style="bold #66b3ff")
    line.append(f" {format_message_time(message.timestamp)}", style="grey50")
    line.append("\n")
    line.append(message.content)
    return line


def render_messages(state: SessionState) -> RenderableType:
    channel = state.selected_channel()
    if channel is None:
        return Text("Select a channel to view messages", style="grey50")

    title = f"{CHANNEL_ICONS.get(channel.kind, '#')} {escape(channel.name or 'Unknown')}"
    body: List[RenderableType] = [render_message(m) for m in state.messages]
    if not body:
        body.append(Text("No messages.", style="dim"))
    if state.message_input:
        body.append(Text(f"> {state.message_input}", style="italic"))
    return Panel(Group(*body), title=title, title_align="left")


def render_presence(state: SessionState) -> RenderableType:
    current = state.presence
    line = Text("● ", style=current.hex_color)
    line.append(current.label)
    if not state.presence_menu_open:
        return line
    entries = [line]
    for presence in PresenceState:
        entry = Text("  ● ", style=presence.hex_color)
        entry.append(f"{presence.label} ({presence.token})")
        entries.append(entry)
    return Group(*entries)


def render_identity(identity: Identity, title: str) -> RenderableType:
    body = Text()
    body.append(identity.tag, style="bold")
    body.append(f"\nID: {identity.id}", style="dim")
    if identity.avatar:
        body.append(f"\nAvatar: {identity.avatar}", style="dim")
    return Panel(body, title=title, expand=False)


def render_overlay(state: SessionState) -> RenderableType:
    if state.overlay is Overlay.PROFILE_EDITOR and state.identity is not None:
        return Group(render_identity(state.identity, "Your profile"), render_presence(state))
    if state.overlay is Overlay.USER_PROFILE and state.viewed_identity is not None:
        return render_identity(state.viewed_identity, "User profile")
    return Text("")


def render_session(state: SessionState) -> RenderableType:
    """
    Renders the whole client: login screen, overlay, or the three panes.
    """
    if not state.is_authenticated:
        return render_login(state)
    if state.overlay is not Overlay.NONE:
        return render_overlay(state)

    parts: List[RenderableType] = [
        render_presence(state),
        render_guilds(state),
        render_channels(state),
        render_messages(state),
    ]
    if state.error:
        parts.append(Text(state.error, style="red"))
    return Group(*parts)
