# discord_lite/utils.py

import json
import logging
from datetime import datetime, timezone
from typing import Tuple

from rich.logging import RichHandler


class FetchError(Exception):
    """Base class for failures talking to the Discord REST API."""


class AuthenticationError(FetchError):
    pass


class ResourceUnavailable(FetchError):
    pass


class UnexpectedStatus(FetchError):
    pass


class ReachedMaxRetries(FetchError):
    pass


class DecodeError(FetchError):
    """Raised when a response body or resource payload cannot be decoded."""


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


def setup_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """
    Configures the root logger.

    Args:
        log_level (str): Name of the logging level.
        json_output (bool): Emit one JSON object per line instead of rich console output.
    """
    if json_output:
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(JsonLogFormatter())
    else:
        handler = RichHandler(show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    # requests/urllib3 would otherwise log full URLs on DEBUG.
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def parse_random_range(values, name: str) -> Tuple[float, float]:
    """
    Turns one or two CLI values into a (min, max) range.

    Raises:
        ValueError: On malformed or negative values.
    """
    if isinstance(values, (int, float, str)):
        values = [values]
    try:
        numbers = [float(v) for v in values]
    except (TypeError, ValueError):
        raise ValueError(f"--{name} expects numeric values, got {values!r}.")
    if len(numbers) == 1:
        numbers = numbers * 2
    if len(numbers) != 2:
        raise ValueError(f"--{name} expects one or two values.")
    low, high = numbers
    if low < 0 or high < 0:
        raise ValueError(f"--{name} values must be non-negative.")
    if low > high:
        low, high = high, low
    return low, high


def failure_text(exc: Exception) -> str:
    text = str(exc).strip()
    return text or exc.__class__.__name__
