from __future__ import annotations

from datetime import date
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from cardledger.api.deps import db, today
from cardledger.core.errors import CardNotFound, InvalidDate
from cardledger.schemas.balance import (
    BalanceIn,
    BalanceOut,
    BalanceRow,
    BalanceUpdateIn,
    BatchResultOut,
    CorrectionOut,
    UpdateOutcomeOut,
)
from cardledger.services.balance_update import (
    BalanceUpdate,
    UpdateOutcome,
    apply_batch,
    apply_update,
    balance_on,
    current_balance,
    history,
    render_summary,
)

router = APIRouter(prefix="/credit-cards", tags=["balances"])


def _outcome_out(o: UpdateOutcome) -> UpdateOutcomeOut:
    corr = None
    if o.correction is not None:
        c = o.correction
        corr = CorrectionOut(
            date=c.date,
            previous_balance=float(c.previous),
            balance=float(c.balance),
            delta=float(c.delta),
        )
    return UpdateOutcomeOut(credit_card_number=o.card_number, status=o.status, detail=o.detail, correction=corr)


@router.post("/update-balance", response_model=BatchResultOut)
def update_balances(
    payload: list[BalanceUpdateIn],
    s: Session = Depends(db),
    day: date = Depends(today),
):
    items = [
        BalanceUpdate(p.credit_card_number, p.balance_date, Decimal(str(p.balance_amount)))
        for p in payload
    ]
    outcomes = apply_batch(s, items, day)
    ok = sum(1 for o in outcomes if o.ok)
    return BatchResultOut(
        message=render_summary(outcomes),
        succeeded=ok,
        failed=len(outcomes) - ok,
        results=[_outcome_out(o) for o in outcomes],
    )


@router.post("/{card_number}/balance", response_model=UpdateOutcomeOut)
def update_balance(
    card_number: str,
    body: BalanceIn,
    s: Session = Depends(db),
    day: date = Depends(today),
):
    try:
        o = apply_update(s, card_number, body.balance_date, Decimal(str(body.balance_amount)), day)
    except InvalidDate as e:
        raise HTTPException(status_code=422, detail=e.code)
    if not o.ok:
        raise HTTPException(status_code=404, detail=o.detail)
    return _outcome_out(o)


@router.get("/{card_number}/balance", response_model=BalanceOut)
def get_balance(
    card_number: str,
    on: date | None = Query(None),
    s: Session = Depends(db),
    day: date = Depends(today),
):
    try:
        if on is None:
            return BalanceOut(credit_card_number=card_number, date=day, balance=float(current_balance(s, card_number, day)))
        return BalanceOut(credit_card_number=card_number, date=on, balance=float(balance_on(s, card_number, on)))
    except CardNotFound as e:
        raise HTTPException(status_code=404, detail=e.code)


@router.get("/{card_number}/balance-history", response_model=list[BalanceRow])
def balance_history(
    card_number: str,
    start: date | None = Query(None),
    end: date | None = Query(None),
    s: Session = Depends(db),
):
    try:
        rows = history(s, card_number, start, end)
    except CardNotFound as e:
        raise HTTPException(status_code=404, detail=e.code)
    return [BalanceRow(date=r.date, balance=float(r.amount)) for r in rows]
