import datetime
import logging
import time
from typing import NamedTuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

UTC_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOCAL_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S %Z"


class FormattedTime(NamedTuple):
    datetime: str  # <time datetime="...">
    formatted: str  # for display


def resolve_timezone(name: str | None) -> datetime.tzinfo:
    """
    Look up an IANA timezone name, falling back to UTC.
    A bad name in the site config must never break page rendering.
    """
    if not name:
        return datetime.timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown timezone {name!r}, using UTC: {e}")
        return datetime.timezone.utc


class UnixTime:
    """Elapsed non-leap seconds since the UNIX epoch."""

    __slots__ = ("secs",)

    def __init__(self, secs: int):
        if secs < 0:
            raise ValueError(f"UnixTime must not be negative: {secs}")
        self.secs = int(secs)

    @classmethod
    def now(cls) -> "UnixTime":
        return cls(int(time.time()))

    def __int__(self) -> int:
        return self.secs

    def __str__(self) -> str:
        return str(self.secs)

    def __repr__(self) -> str:
        return f"UnixTime({self.secs})"

    def __eq__(self, other) -> bool:
        if isinstance(other, UnixTime):
            return self.secs == other.secs
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.secs)

    def to_utc_datetime(self) -> datetime.datetime:
        return datetime.datetime.fromtimestamp(self.secs, tz=datetime.timezone.utc)

    def to_utc_datetime_string(self) -> str:
        return self.to_utc_datetime().strftime(UTC_DATETIME_FORMAT)

    def to_datetime(self, tz: datetime.tzinfo) -> datetime.datetime:
        return self.to_utc_datetime().astimezone(tz)

    def format(self, timezone_name: str | None) -> FormattedTime:
        local = self.to_datetime(resolve_timezone(timezone_name))
        return FormattedTime(
            datetime=self.to_utc_datetime_string(),
            formatted=local.strftime(LOCAL_DATETIME_FORMAT),
        )
