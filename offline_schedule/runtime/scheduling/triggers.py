"""Construction of APScheduler triggers from cron expressions.

APScheduler's cron fields differ from crontab in two ways that matter here:
day-of-week numbers start at Monday (crontab: 0 and 7 are Sunday), and a
step larger than a field's range is rejected. Numeric day-of-week terms are
therefore rewritten to weekday names, and the step-only expressions produced
for long rates (``*/90 * * * *``) become interval triggers.
"""

import re
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.triggers.base import BaseTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger

# Crontab numbering: 0 and 7 are both Sunday.
WEEKDAY_NAMES = ("sun", "mon", "tue", "wed", "thu", "fri", "sat")

_DOW_TERM = re.compile(r"(\*|\d+)(?:-(\d+))?(?:/(\d+))?")

# Step-only expressions and the largest step APScheduler accepts for each.
_STEP_ONLY_PATTERNS = (
    (re.compile(r"\*/(\d+) \* \* \* \*"), "minutes", 59),
    (re.compile(r"0 \*/(\d+) \* \* \*"), "hours", 23),
    (re.compile(r"0 0 \*/(\d+) \* \*"), "days", 30),
)


def translate_day_of_week(field: str) -> str:
    """Rewrite numeric crontab day-of-week terms as weekday names.

    Names and APScheduler-specific terms are kept as they are.

    Examples:
        >>> translate_day_of_week("1-5")
        'mon,tue,wed,thu,fri'
        >>> translate_day_of_week("0,7")
        'sun'

    Raises:
        ValueError: If a numeric term is outside 0-7 or its range is reversed.
    """
    if field in ("*", "?"):
        return "*"

    terms: list[str] = []
    for term in field.split(","):
        match = _DOW_TERM.fullmatch(term)
        if not match:
            terms.append(term)
            continue

        start, end, step = match.groups()
        if start == "*":
            first, last = 0, 6
        else:
            first = int(start)
            last = int(end) if end is not None else (6 if step else first)
        if first > 7 or last > 7 or first > last:
            raise ValueError(f"Invalid day-of-week term '{term}' (use 0-7, where 0 and 7 are Sunday)")

        for day in range(first, last + 1, int(step) if step else 1):
            name = WEEKDAY_NAMES[day % 7]
            if name not in terms:
                terms.append(name)

    return ",".join(terms)


def _interval_trigger(expression: str, tz: ZoneInfo) -> IntervalTrigger | None:
    """Interval trigger for a step-only expression whose step exceeds the field range."""
    for pattern, unit, max_step in _STEP_ONLY_PATTERNS:
        match = pattern.fullmatch(expression)
        if match and int(match.group(1)) > max_step:
            # Anchored at midnight so firings line up with the cron form of smaller rates.
            midnight = datetime.now(tz).replace(hour=0, minute=0, second=0, microsecond=0)
            return IntervalTrigger(timezone=tz, start_date=midnight, **{unit: int(match.group(1))})
    return None


def build_trigger(expression: str, tz: ZoneInfo) -> BaseTrigger:
    """Build the trigger for a 5-field crontab or 6-field (seconds first) cron expression.

    Raises:
        ValueError: If the expression has another field count or an invalid field.
    """
    normalized = " ".join(expression.split())
    interval = _interval_trigger(normalized, tz)
    if interval is not None:
        return interval

    fields = normalized.split()
    if len(fields) == 5:
        second = "0"
        minute, hour, day, month, day_of_week = fields
    elif len(fields) == 6:
        second, minute, hour, day, month, day_of_week = fields
    else:
        raise ValueError(f"Wrong number of fields; got {len(fields)}, expected 5 or 6")

    return CronTrigger(
        second=second,
        minute=minute,
        hour=hour,
        day=day,
        month=month,
        day_of_week=translate_day_of_week(day_of_week),
        timezone=tz,
    )
