"""Timezone utilities for the companies' local (West African) time."""

from datetime import date, datetime

import pytz

from comptapro.config.settings import get_settings


def local_tz() -> pytz.BaseTzInfo:
    """Return the configured local timezone (GMT, Africa/Abidjan by default)."""
    return pytz.timezone(get_settings().timezone)


def now_local() -> datetime:
    """Return current time in the local timezone."""
    return datetime.now(local_tz())


def today_local() -> date:
    """Return today's date in the local timezone."""
    return now_local().date()
