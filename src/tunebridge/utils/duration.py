"""Duration parsing utilities."""

import re

# PnYnMnWnDTnHnMn.nS; calendar components are captured only to reject them
_ISO8601_DURATION = re.compile(
    r"^P(?:(?P<years>\d+)Y)?(?:(?P<months>\d+)M)?(?:(?P<weeks>\d+)W)?"
    r"(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?"
    r"(?:(?P<seconds>\d+)(?:[.,](?P<fraction>\d+))?S)?)?$"
)


def parse_iso8601_duration(value: str) -> int:
    """Convert an ISO 8601 duration to whole seconds.

    Milliseconds above 500 round up to the next second.

    Args:
        value: Duration such as "PT3M25S" or "PT1H2M3.750S".

    Returns:
        Duration in seconds.

    Raises:
        ValueError: If the value isn't an ISO 8601 duration or uses year,
            month or week components, which have no fixed length.
    """
    match = _ISO8601_DURATION.match(value or "")
    if not match or value in ("P", "PT") or value.endswith("T"):
        raise ValueError(f"Invalid ISO 8601 duration: {value!r}")

    parts = match.groupdict()
    for unit in ("years", "months", "weeks"):
        if parts[unit] and int(parts[unit]):
            raise ValueError(f"Durations in {unit} are not supported: {value!r}")

    seconds = int(parts["seconds"] or 0)
    seconds += int(parts["minutes"] or 0) * 60
    seconds += int(parts["hours"] or 0) * 3600
    seconds += int(parts["days"] or 0) * 86400

    if fraction := parts["fraction"]:
        milliseconds = int(fraction[:3].ljust(3, "0"))
        if milliseconds > 500:
            seconds += 1
    return seconds


def milliseconds_to_seconds(milliseconds: int) -> int:
    """Floor a millisecond duration to whole seconds."""
    return milliseconds // 1000
