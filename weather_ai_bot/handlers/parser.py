"""
Parsing of weather commands and inline-button payloads.
"""

import re
from typing import NamedTuple, Tuple

# Telegram rejects callback_data longer than this many bytes
CALLBACK_DATA_LIMIT = 64
CALLBACK_SEPARATOR = "_"

_COMMAND_PREFIX = re.compile(
    r"^/(?:weather(?:@\w+)?\s*|w(?:@\w+)?(?:\s+|$))",
    re.IGNORECASE
)
_DELIMITERS = re.compile(r"[,;|]")


class WeatherQuery(NamedTuple):
    """Location and free-form preferences extracted from a message."""
    location: str
    preferences: str


class InvalidCallback(ValueError):
    """Callback payload does not have the <action>_<location> form."""


def is_weather_request(text: str) -> bool:
    """Check whether a chat message should be answered with weather."""
    lowered = (text or "").lower()
    return (
        lowered.startswith("/weather")
        or "weather" in lowered
        or lowered.startswith("/w ")
    )


def parse_weather_command(text: str) -> WeatherQuery:
    """
    Split a weather command into location and preferences.

    Examples:
        "/weather Paris" -> ("Paris", "")
        "/weather Tokyo, outdoor sports" -> ("Tokyo", "outdoor sports")
        "/weather London; running | rain" -> ("London", "running rain")

    An empty location is returned as "" and must be handled by the caller.
    """
    clean_text = _COMMAND_PREFIX.sub("", (text or "").strip(), count=1).strip()
    parts = _DELIMITERS.split(clean_text)

    location = parts[0].strip()
    preferences = " ".join(part.strip() for part in parts[1:] if part.strip())
    return WeatherQuery(location=location, preferences=preferences.strip())


def encode_callback(action: str, location: str) -> str:
    """
    Build the callback payload for an inline button.

    The location is cut on a character boundary when the payload would
    exceed Telegram's callback_data limit.
    """
    prefix = f"{action}{CALLBACK_SEPARATOR}"
    room = CALLBACK_DATA_LIMIT - len(prefix.encode("utf-8"))

    encoded = location.encode("utf-8")
    if len(encoded) > room:
        location = encoded[:room].decode("utf-8", errors="ignore").rstrip()

    return f"{prefix}{location}"


def decode_callback(data: str) -> Tuple[str, str]:
    """
    Split a callback payload on the first separator only.

    Actions never contain the separator, so "today_Rio_Grande" decodes
    to ("today", "Rio_Grande").

    Raises:
        InvalidCallback: if either part is missing
    """
    action, separator, location = (data or "").partition(CALLBACK_SEPARATOR)
    location = location.strip()
    if not separator or not action or not location:
        raise InvalidCallback(f"Malformed callback payload: {data!r}")
    return action, location
