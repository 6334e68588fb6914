from datetime import date, datetime
from zoneinfo import ZoneInfo

from cardledger.core.config import settings


def ledger_tz() -> ZoneInfo:
    return ZoneInfo(settings.timezone)


def now() -> datetime:
    return datetime.now(tz=ledger_tz())


def today() -> date:
    return now().date()
