from fastapi import APIRouter, Depends, Query, HTTPException
from fastapi.responses import StreamingResponse
from io import BytesIO
from sqlalchemy.orm import Session
from datetime import date
import re

from cardledger.api.deps import db
from cardledger.core.errors import CardNotFound
from cardledger.services.reports import build_balance_report

router = APIRouter(prefix="/credit-cards/{card_number}/report", tags=["reports"])


def _safe_part(v: str) -> str:
    s = (v or "").strip()
    s = re.sub(r"\s+", "_", s)
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return (s[:40] or "unknown")

@router.get("")
def report(
    card_number: str,
    start: date | None = Query(None),
    end: date | None = Query(None),
    s: Session = Depends(db),
):
    buf = BytesIO()
    try:
        build_balance_report(s, card_number, buf, start, end)
    except CardNotFound as e:
        raise HTTPException(status_code=404, detail=e.code)
    buf.seek(0)

    filename = f"{_safe_part(card_number)}_balance_history.xlsx"
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
