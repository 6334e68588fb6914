from datetime import date

from cardledger.db.session import SessionLocal
from cardledger.utils.clock import today as clock_today

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def today() -> date:
    return clock_today()
