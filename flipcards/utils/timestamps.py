import time
from datetime import date, datetime, time as dt_time, timezone
from typing import Tuple

SECONDS_PER_DAY = 86400


def now_ts() -> int:
    return int(time.time())


def day_bounds(day: date) -> Tuple[int, int]:
    """
    Janela inclusiva [00:00:00, 23:59:59] do dia em UTC, em segundos desde a epoch.
    """
    start = int(datetime.combine(day, dt_time.min, tzinfo=timezone.utc).timestamp())
    return start, start + SECONDS_PER_DAY - 1


def ts_to_date(ts: int) -> date:
    return datetime.fromtimestamp(ts, tz=timezone.utc).date()
