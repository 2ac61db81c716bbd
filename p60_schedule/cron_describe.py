"""Cron expression describer.

Turns the scraping schedule into a sentence for the admin pages.

Supported shapes:
- "M H * * *"   -> "every day at H:MM"
- "M H * * DOW" -> "every Monday at H:MM"
  - M, H, DOW: "*", "*/N", or a list of values and ranges ("1,3-5,9")
Anything else is shown as the raw expression.
"""

import logging

from p60_schedule.config import ScheduleConfig

logger = logging.getLogger(__name__)

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

DISABLED_TEXT = "Scheduling disabled"
STARTUP_SUFFIX = ", run on startup if missed"


class CronParseError(Exception):
    pass


def _parse_int(text: str, field: str) -> int:
    if not (text.isascii() and text.isdecimal()):
        raise CronParseError(f"Not a number: {field}")
    return int(text)


def parse_field(field: str, min_val: int, max_val: int) -> list[int]:
    """Expand one cron field into the sorted values it matches."""
    if field == "*":
        return list(range(min_val, max_val + 1))

    if field.startswith("*/"):
        step = _parse_int(field[2:], field)
        if step <= 0:
            raise CronParseError(f"Step must be positive: {field}")
        return list(range(min_val, max_val + 1, step))

    values: set[int] = set()
    for part in field.split(","):
        if "-" in part:
            start_str, end_str = part.split("-", 1)
            start = _parse_int(start_str, field)
            end = _parse_int(end_str, field)
            if start < min_val or end > max_val or start > end:
                raise CronParseError(f"Range out of bounds: {part}")
            values.update(range(start, end + 1))
        else:
            val = _parse_int(part, field)
            if val < min_val or val > max_val:
                raise CronParseError(f"Value out of bounds: {val}")
            values.add(val)
    return sorted(values)


def join_with_and(items: list[str]) -> str:
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + " and " + items[-1]


def format_time(hour: int, minute: int) -> str:
    return f"{hour}:{minute:02d}"


def _describe_fields(cron: str) -> str:
    parts = cron.split()
    if len(parts) != 5:
        logger.debug("Expected 5 fields, got %d: %r", len(parts), cron)
        return cron

    minute_f, hour_f, dom_f, mon_f, dow_f = parts

    try:
        minutes = parse_field(minute_f, 0, 59)
        hours = parse_field(hour_f, 0, 23)
    except CronParseError as e:
        logger.debug("Cannot describe %r: %s", cron, e)
        return cron

    times = join_with_and([format_time(h, m) for h, m in sorted({(h, m) for h in hours for m in minutes})])

    if dom_f != "*" or mon_f != "*":
        logger.debug("Day of month and month must be '*': %r", cron)
        return cron

    if dow_f == "*":
        return f"every day at {times}"

    try:
        weekdays = parse_field(dow_f, 0, 6)
    except CronParseError as e:
        logger.debug("Cannot describe %r: %s", cron, e)
        return cron

    days = join_with_and([WEEKDAYS[d] for d in weekdays])
    return f"every {days} at {times}"


def describe(cron: str, run_on_startup_if_missed: bool = False) -> str:
    """Describe a cron expression, falling back to the expression itself."""
    text = _describe_fields(cron)
    if run_on_startup_if_missed:
        text += STARTUP_SUFFIX
    return text


def describe_schedule(config: ScheduleConfig) -> str:
    if not config.enabled:
        return DISABLED_TEXT
    return describe(config.cron, config.run_on_startup_if_missed)
