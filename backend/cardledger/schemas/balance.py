from pydantic import BaseModel, field_validator
from datetime import date
from typing import Literal

# Numeric(14, 2) column bound
MAX_BALANCE = 999_999_999_999.99

class BalanceIn(BaseModel):
    # left optional so a missing date reaches the ledger and is reported as invalid_date
    balance_date: date | None = None
    balance_amount: float

    @field_validator("balance_amount")
    @classmethod
    def amount_must_be_finite(cls, v: float):
        if v != v:
            raise ValueError("balance_amount must be a number")
        if v == float("inf") or v == float("-inf"):
            raise ValueError("balance_amount must be finite")
        if abs(v) > MAX_BALANCE:
            raise ValueError("balance_amount out of range")
        return v

class BalanceUpdateIn(BalanceIn):
    credit_card_number: str

class BalanceRow(BaseModel):
    date: date
    balance: float

class BalanceOut(BaseModel):
    credit_card_number: str
    date: date
    balance: float

class CorrectionOut(BaseModel):
    date: date
    previous_balance: float
    balance: float
    delta: float

class UpdateOutcomeOut(BaseModel):
    credit_card_number: str
    status: Literal["success", "failure"]
    detail: str
    correction: CorrectionOut | None = None

class BatchResultOut(BaseModel):
    message: str
    succeeded: int
    failed: int
    results: list[UpdateOutcomeOut]
