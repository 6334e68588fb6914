from datetime import datetime
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from cardledger.core.config import Settings
from cardledger.schemas.balance import BalanceIn, MAX_BALANCE
from cardledger.schemas.card import CardOut
from cardledger.schemas.user import UserOut


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("TIMEZONE", "Asia/Karachi")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    st = Settings()

    assert st.timezone == "Asia/Karachi"
    assert st.log_level == "debug"
    assert Settings.model_config["env_file"] == ".env"


def test_out_models_load_from_attributes():
    card = CardOut.model_validate(SimpleNamespace(id=3, issuance_bank=None, number="4111"))
    user = UserOut.model_validate(
        SimpleNamespace(id=1, name="Ada", email="ada@example.com", created_at=datetime(2023, 4, 16))
    )

    assert card.number == "4111"
    assert user.email == "ada@example.com"


def test_balance_amount_bounded_by_column_precision():
    assert BalanceIn(balance_date=None, balance_amount=MAX_BALANCE).balance_amount == MAX_BALANCE
    assert BalanceIn(balance_amount=-MAX_BALANCE).balance_amount == -MAX_BALANCE

    with pytest.raises(ValidationError):
        BalanceIn(balance_amount=1e300)
    with pytest.raises(ValidationError):
        BalanceIn(balance_amount=-1e13)
