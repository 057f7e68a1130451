# discord_lite/__init__.py

from .api import DiscordAPI
from .console_app import ConsoleApp
from .dispatcher import CommandDispatcher, reduce
from .events import Login, TokenInputChanged
from .gateway import RemoteGateway
from .options import parse_args
from .runtime import ClientRuntime
from .state import SessionState
from .utils import setup_logging, parse_random_range

from dotenv import load_dotenv

import json
import logging
import os
import sys

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _version

    __version__ = _version("discord-lite")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"


def main():
    """
    Entry point: configures logging, builds the client and runs the console front end.
    """
    load_dotenv()
    args = parse_args(__version__)
    json_output = args.json
    setup_logging(log_level=args.log_level, json_output=json_output)

    try:
        _run(args)
    except KeyboardInterrupt:
        logging.info("Interrupted.")
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e), "type": "exception"}, ensure_ascii=True))
        else:
            logging.exception("An unexpected error occurred: %s", e)
        sys.exit(1)


def _run(args) -> None:
    if args.max_retries < 0:
        raise ValueError("--max-retries must be a non-negative integer.")
    if not 1 <= args.message_limit <= 100:
        raise ValueError("--message-limit must be between 1 and 100.")

    gateway = RemoteGateway(
        max_retries=args.max_retries,
        retry_time_buffer=parse_random_range(args.retry_time_buffer, "retry-time-buffer"),
        message_limit=args.message_limit,
    )
    runtime = ClientRuntime(gateway=gateway, max_workers=max(1, args.workers))
    with runtime:
        app = ConsoleApp(runtime)
        token = args.token or os.getenv("DISCORD_TOKEN")
        if token:
            runtime.dispatch(TokenInputChanged(token))
            runtime.dispatch(Login())
            runtime.wait_idle(timeout=app.wait_timeout)
        app.run()


__all__ = [
    "ClientRuntime",
    "CommandDispatcher",
    "ConsoleApp",
    "DiscordAPI",
    "RemoteGateway",
    "SessionState",
    "main",
    "reduce",
]
