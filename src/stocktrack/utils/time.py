"""Small time helpers used by the CLI and runtime."""

from __future__ import annotations

from datetime import UTC, datetime

from stocktrack.errors import ConfigError


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(tz=UTC)


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    The offset (or a trailing ``Z``) is mandatory so the window start is never
    interpreted in the machine's local zone.
    """
    text = value.strip()
    if not text:
        raise ConfigError("Couldn't parse the 'from' date: empty value")
    if text[-1] in {"z", "Z"}:
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ConfigError(f"Couldn't parse the 'from' date: {value!r}") from exc
    if parsed.tzinfo is None:
        raise ConfigError(f"Couldn't parse the 'from' date: {value!r} has no UTC offset")
    return parsed.astimezone(UTC)


def format_rfc3339(value: datetime) -> str:
    """Render an aware datetime with 0, 3 or 6 fractional digits."""
    if value.microsecond == 0:
        return value.isoformat(timespec="seconds")
    if value.microsecond % 1000 == 0:
        return value.isoformat(timespec="milliseconds")
    return value.isoformat(timespec="microseconds")
