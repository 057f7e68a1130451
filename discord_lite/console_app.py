# discord_lite/console_app.py
import logging
from typing import Callable, Optional

from rich.console import Console

from .events import (
    ChangePresence,
    CloseOverlay,
    Login,
    MessageInputChanged,
    OpenProfileEditor,
    SelectChannel,
    SelectGuild,
    SendMessage,
    TogglePresenceMenu,
    TokenInputChanged,
    ViewUserProfile,
)
from .runtime import ClientRuntime
from .type_enums import PresenceState
from .view import render_session, selectable_rows

HELP_TEXT = """\
[bold]Commands[/]
  /guild N        open the Nth server
  /channel N      open the Nth channel
  /refresh        reload the open channel
  /status [NAME]  toggle the status menu, or set online|idle|dnd|invisible
  /profile        show your profile
  /user N         show the author of the Nth message
  /close          close the profile view
  /help           show this help
  /quit           exit
Anything else is sent as a message to the open channel."""


class ConsoleApp:
    def __init__(
        self,
        runtime: ClientRuntime,
        console: Optional[Console] = None,
        input_func: Callable[[str], str] = input,
        wait_timeout: Optional[float] = 30.0
    ):
        """
        Initializes the console front end.

        Args:
            runtime (ClientRuntime): Runtime owning the session.
            console (Optional[Console]): Where to render. Defaults to a new rich Console.
            input_func (Callable[[str], str]): Reads one line of user input.
            wait_timeout (Optional[float]): Seconds to wait for requests after each command before redrawing.
        """
        self.runtime = runtime
        self.console = console or Console()
        self.input_func = input_func
        self.wait_timeout = wait_timeout
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self) -> None:
        self.render()
        while True:
            prompt = "> " if self.runtime.state.is_authenticated else "Token: "
            try:
                line = self.input_func(prompt)
            except (EOFError, KeyboardInterrupt):
                break
            if not self.handle(line):
                break
            if not self.runtime.wait_idle(timeout=self.wait_timeout):
                self.console.print("[dim]Still waiting for Discord...[/]")
            self.render()

    def render(self) -> None:
        self.console.print(render_session(self.runtime.state))

    def handle(self, line: str) -> bool:
        """
        Turns one line of input into events.

        Returns:
            bool: False when the user asked to quit.
        """
        text = line.strip()
        if text == "/quit":
            return False

        state = self.runtime.state
        if not state.is_authenticated:
            if text:
                self.runtime.dispatch(TokenInputChanged(text))
                self.runtime.dispatch(Login())
            return True

        if not text.startswith("/"):
            self.runtime.dispatch(MessageInputChanged(line))
            self.runtime.dispatch(SendMessage())
            return True

        command, _, argument = text[1:].partition(" ")
        argument = argument.strip()
        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            self.console.print(f"[red]Unknown command: /{command}[/] (try /help)")
            return True
        self.logger.debug("Running /%s.", command)
        handler(argument)
        return True

    def _index(self, argument: str, items) -> Optional[int]:
        try:
            index = int(argument) - 1
        except ValueError:
            index = -1
        if not 0 <= index < len(items):
            self.console.print(f"[red]No entry {argument or '?'}.[/]")
            return None
        return index

    def _cmd_guild(self, argument: str) -> None:
        guilds = self.runtime.state.guild_list()
        index = self._index(argument, guilds)
        if index is not None:
            self.runtime.dispatch(SelectGuild(guilds[index].id))

    def _cmd_channel(self, argument: str) -> None:
        rows = selectable_rows(self.runtime.state)
        index = self._index(argument, rows)
        if index is not None:
            self.runtime.dispatch(SelectChannel(rows[index].channel.id))

    def _cmd_refresh(self, argument: str) -> None:
        channel_id = self.runtime.state.selected_channel_id
        if channel_id is None:
            self.console.print("[dim]No channel open.[/]")
            return
        self.runtime.dispatch(SelectChannel(channel_id))

    def _cmd_status(self, argument: str) -> None:
        if not argument:
            self.runtime.dispatch(TogglePresenceMenu())
            return
        try:
            presence = PresenceState.from_token(argument)
        except ValueError as exc:
            self.console.print(f"[red]{exc}[/]")
            return
        self.runtime.dispatch(ChangePresence(presence))

    def _cmd_profile(self, argument: str) -> None:
        self.runtime.dispatch(OpenProfileEditor())

    def _cmd_user(self, argument: str) -> None:
        messages = self.runtime.state.messages
        index = self._index(argument, messages)
        if index is not None:
            self.runtime.dispatch(ViewUserProfile(messages[index].author))

    def _cmd_close(self, argument: str) -> None:
        self.runtime.dispatch(CloseOverlay())

    def _cmd_help(self, argument: str) -> None:
        self.console.print(HELP_TEXT)
