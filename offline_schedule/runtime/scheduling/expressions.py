"""Conversion of provider schedule expressions to standard cron syntax.

Providers express schedules either as ``rate(<N> <unit>)`` or as
``cron(<fields>)``. Timers are registered with standard 5-field crontab
expressions (minute, hour, day of month, month, day of week), so every
expression is converted before registration. Strings in neither form are
treated as crontab expressions already and returned as-is.
"""

import re

RATE_PATTERN = re.compile(r"^\s*rate\(\s*(\d+)\s+([a-z]+)\s*\)\s*$", re.IGNORECASE)
CRON_PATTERN = re.compile(r"^\s*cron\((.*)\)\s*$", re.IGNORECASE | re.DOTALL)

# Day rates fire at 00:00 in the scheduler's timezone.
DAY_RATE_HOUR = 0

_RATE_UNITS = {
    "minute": "minute",
    "minutes": "minute",
    "hour": "hour",
    "hours": "hour",
    "day": "day",
    "days": "day",
}


def convert_rate_to_cron(value: int, unit: str) -> str:
    """Build the crontab expression firing every ``value`` units.

    Args:
        value: Positive interval length.
        unit: One of minute(s), hour(s), day(s), any case.

    Returns:
        Standard 5-field crontab expression.

    Raises:
        ValueError: If the unit is not supported.
    """
    normalized = _RATE_UNITS.get(unit.lower())
    if normalized == "minute":
        return f"*/{value} * * * *"
    if normalized == "hour":
        return f"0 */{value} * * *"
    if normalized == "day":
        return f"0 {DAY_RATE_HOUR} */{value} * *"
    raise ValueError(f"Unsupported rate unit: {unit}")


_PROVIDER_DOW_TERM = re.compile(r"(\d+)(?:-(\d+))?(/\d+)?")


def _shift_provider_day_of_week(field: str) -> str:
    """Renumber provider day-of-week values (SUN=1..SAT=7) to crontab (SUN=0..SAT=6)."""
    terms = []
    for term in field.split(","):
        match = _PROVIDER_DOW_TERM.fullmatch(term)
        if not match:
            terms.append(term)
            continue
        start, end, step = match.groups()
        shifted = str(int(start) - 1)
        if end is not None:
            shifted += f"-{int(end) - 1}"
        terms.append(shifted + (step or ""))
    return ",".join(terms)


def _convert_provider_cron(body: str) -> str:
    """Reduce a 6-field provider cron body (with year) to 5 crontab fields."""
    fields = body.split()
    if len(fields) != 6:
        return body.strip()
    # Provider syntax uses '?' for "no specific value" in day-of-month/day-of-week.
    minute, hour, day, month, day_of_week = ("*" if f == "?" else f for f in fields[:5])
    return " ".join([minute, hour, day, month, _shift_provider_day_of_week(day_of_week)])


def convert_expression_to_cron(expression: str) -> str:
    """Convert a rate or cron schedule expression to a crontab expression.

    Never raises: unrecognized input is returned unchanged so raw crontab
    strings can be used directly.

    Examples:
        >>> convert_expression_to_cron("rate(5 minutes)")
        '*/5 * * * *'
        >>> convert_expression_to_cron("cron(0 10 * * ? *)")
        '0 10 * * *'
        >>> convert_expression_to_cron("15 * * * *")
        '15 * * * *'
    """
    match = RATE_PATTERN.match(expression)
    if match:
        value = int(match.group(1))
        unit = match.group(2).lower()
        if value > 0 and unit in _RATE_UNITS:
            return convert_rate_to_cron(value, unit)
        return expression

    match = CRON_PATTERN.match(expression)
    if match:
        return _convert_provider_cron(match.group(1))

    return expression
