"""Scheduler status for the admin pages."""

import logging
from datetime import datetime
from typing import Any

from apscheduler.triggers.cron import CronTrigger
from apscheduler.util import localize

from p60_schedule.config import ScheduleConfig
from p60_schedule.cron_describe import CronParseError, describe_schedule, parse_field

logger = logging.getLogger(__name__)

# APScheduler counts weekdays from Monday, cron from Sunday
_TRIGGER_DAYS = ["sun", "mon", "tue", "wed", "thu", "fri", "sat"]


def build_trigger(cron: str, tz=None) -> CronTrigger:
    """Build a trigger for `cron`; without `tz` it follows the local zone."""
    parts = cron.split()
    if len(parts) != 5:
        raise CronParseError(f"Expected 5 fields, got {len(parts)}")

    minute_f, hour_f, dom_f, mon_f, dow_f = parts
    if dow_f != "*":
        dow_f = ",".join(_TRIGGER_DAYS[d] for d in parse_field(dow_f, 0, 6))

    return CronTrigger(minute=minute_f, hour=hour_f, day=dom_f, month=mon_f, day_of_week=dow_f, timezone=tz)


def next_run(cron: str, now: datetime | None = None) -> datetime | None:
    """Return the first fire time after `now`, or None if the cron is rejected."""
    now = now or datetime.now()
    try:
        trigger = build_trigger(cron, now.tzinfo)
    except (CronParseError, ValueError) as e:
        logger.warning("Cannot compute next run for %r: %s", cron, e)
        return None
    if now.tzinfo is None:
        now = localize(now, trigger.timezone)
    return trigger.get_next_fire_time(None, now)


def get_scheduler_status(config: ScheduleConfig, now: datetime | None = None) -> dict[str, Any]:
    nxt = next_run(config.cron, now) if config.enabled else None
    return {
        "enabled": config.enabled,
        "cronExpression": config.cron,
        "description": describe_schedule(config),
        "runOnStartupIfMissed": config.run_on_startup_if_missed,
        "startupDelayMinutes": config.startup_delay_minutes,
        "nextRun": nxt.isoformat() if nxt else None,
    }
