# discord_lite/options.py
import argparse
import json
import sys


class JsonArgumentParser(argparse.ArgumentParser):
    def __init__(self, *args, json_output: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        self._json_output = json_output

    def error(self, message):
        if self._json_output:
            payload = {
                "error": message,
                "type": "argument_error",
            }
            print(json.dumps(payload, ensure_ascii=True))
            raise SystemExit(2)
        super().error(message)


def _argv_has_json(argv) -> bool:
    if argv is None:
        argv = sys.argv[1:]
    return "--json" in argv


def build_parser(version: str, json_output: bool = False) -> argparse.ArgumentParser:
    """
    Build the CLI argument parser.
    """
    parser = JsonArgumentParser(
        description="A lightweight Discord client for the terminal.",
        json_output=json_output,
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {version}",
        help="Show the version number and exit."
    )
    parser.add_argument(
        "-t", "--token",
        type=str,
        default=None,
        help="Discord token to log in with. Defaults to the DISCORD_TOKEN environment variable (a .env file is read too)."
    )
    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level. Default is 'INFO'."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit log lines as JSON."
    )
    parser.add_argument(
        "-r", "--max-retries",
        type=int,
        default=5,
        help="Maximum number of retries for API requests in case of rate limiting. Default is 5."
    )
    parser.add_argument(
        "-b", "--retry-time-buffer",
        nargs='+',
        default=[1, 2],
        metavar=('MIN', 'MAX'),
        help="Additional time (in seconds) to wait after rate limit responses. Provide one value or two values for randomness. Default is [1, 2]."
    )
    parser.add_argument(
        "-m", "--message-limit",
        type=int,
        default=50,
        help="Number of recent messages to load per channel (1-100). Default is 50."
    )
    parser.add_argument(
        "-w", "--workers",
        type=int,
        default=4,
        help="Number of requests that may run at the same time. Default is 4."
    )
    return parser


def parse_args(version: str, argv=None):
    """
    Parse CLI arguments using the provided version string.
    """
    json_output = _argv_has_json(argv)
    parser = build_parser(version, json_output=json_output)
    return parser.parse_args(argv)
