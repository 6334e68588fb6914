from datetime import date, timedelta
from decimal import Decimal

import pytest

from cardledger.core.errors import InvalidDate
from cardledger.services.balance_ledger import Ledger
from cardledger.services.balance_update import apply_correction


def _ledger(*pairs):
    return Ledger.from_records((d, Decimal(str(a))) for d, a in pairs)


def _as_pairs(records):
    return [(r.date.isoformat(), r.amount) for r in records]


def test_correction_between_days_propagates_difference():
    ledger = _ledger((date(2023, 4, 12), 110), (date(2023, 4, 10), 100))

    corr = apply_correction(ledger, date(2023, 4, 11), Decimal("110"), today=date(2023, 4, 12))

    assert corr.previous == Decimal("100")
    assert corr.delta == Decimal("10")
    assert corr.propagated == 1
    assert _as_pairs(ledger.history()) == [
        ("2023-04-12", Decimal("120")),
        ("2023-04-11", Decimal("110")),
        ("2023-04-10", Decimal("100")),
    ]


def test_first_insertion_fills_up_to_today():
    ledger = Ledger()

    corr = apply_correction(ledger, date(2023, 4, 13), Decimal("800"), today=date(2023, 4, 16))

    assert corr.previous == Decimal("0")
    assert _as_pairs(ledger.records()) == [
        ("2023-04-13", Decimal("800")),
        ("2023-04-14", Decimal("800")),
        ("2023-04-15", Decimal("800")),
        ("2023-04-16", Decimal("800")),
    ]


def test_existing_date_uses_stored_value_as_previous():
    ledger = _ledger(*[(date(2023, 4, d), 100) for d in range(10, 14)])

    corr = apply_correction(ledger, date(2023, 4, 11), Decimal("75"), today=date(2023, 4, 13))

    assert corr.delta == Decimal("-25")
    assert ledger.get(date(2023, 4, 10)) == Decimal("100")
    assert ledger.get(date(2023, 4, 11)) == Decimal("75")
    assert ledger.get(date(2023, 4, 12)) == Decimal("75")
    assert ledger.get(date(2023, 4, 13)) == Decimal("75")


def test_correcting_today_has_nothing_to_propagate():
    ledger = _ledger((date(2023, 4, 15), 10), (date(2023, 4, 16), 20))

    corr = apply_correction(ledger, date(2023, 4, 16), Decimal("35"), today=date(2023, 4, 16))

    assert corr.propagated == 0
    assert _as_pairs(ledger.records()) == [("2023-04-15", Decimal("10")), ("2023-04-16", Decimal("35"))]


def test_stale_ledger_is_brought_current():
    ledger = _ledger((date(2023, 4, 10), 100))

    apply_correction(ledger, date(2023, 4, 12), Decimal("130"), today=date(2023, 4, 14))

    assert _as_pairs(ledger.records()) == [
        ("2023-04-10", Decimal("100")),
        ("2023-04-11", Decimal("100")),
        ("2023-04-12", Decimal("130")),
        ("2023-04-13", Decimal("130")),
        ("2023-04-14", Decimal("130")),
    ]


def test_correction_inside_stored_gap_materializes_carried_days():
    ledger = _ledger((date(2023, 4, 10), 100), (date(2023, 4, 13), 200))

    corr = apply_correction(ledger, date(2023, 4, 12), Decimal("150"), today=date(2023, 4, 13))

    assert corr.previous == Decimal("100")
    assert _as_pairs(ledger.records()) == [
        ("2023-04-10", Decimal("100")),
        ("2023-04-11", Decimal("100")),
        ("2023-04-12", Decimal("150")),
        ("2023-04-13", Decimal("250")),
    ]


def test_correction_before_history_uses_zero_anchor():
    ledger = _ledger(*[(date(2023, 4, d), 100) for d in range(10, 13)])

    corr = apply_correction(ledger, date(2023, 4, 7), Decimal("50"), today=date(2023, 4, 12))

    assert corr.previous == Decimal("0")
    assert corr.delta == Decimal("50")
    assert _as_pairs(ledger.records()) == [
        ("2023-04-07", Decimal("50")),
        ("2023-04-08", Decimal("50")),
        ("2023-04-09", Decimal("50")),
        ("2023-04-10", Decimal("150")),
        ("2023-04-11", Decimal("150")),
        ("2023-04-12", Decimal("150")),
    ]
    assert ledger.is_contiguous()


def test_zero_delta_correction_is_idempotent():
    ledger = _ledger((date(2023, 4, 10), 100))
    today = date(2023, 4, 12)

    apply_correction(ledger, date(2023, 4, 11), Decimal("140"), today=today)
    once = ledger.records()
    corr = apply_correction(ledger, date(2023, 4, 11), Decimal("140"), today=today)

    assert corr.delta == Decimal("0")
    assert corr.propagated == 0
    assert ledger.records() == once


def test_correction_never_touches_earlier_days():
    ledger = _ledger(*[(date(2023, 4, 1) + timedelta(days=i), 10 * i) for i in range(10)])
    before = {r.date: r.amount for r in ledger.records()}

    apply_correction(ledger, date(2023, 4, 6), Decimal("-999.99"), today=date(2023, 4, 10))

    for d, amount in before.items():
        if d < date(2023, 4, 6):
            assert ledger.get(d) == amount


def test_missing_date_is_rejected_without_mutation():
    ledger = _ledger((date(2023, 4, 10), 100))

    with pytest.raises(InvalidDate):
        apply_correction(ledger, None, Decimal("1"), today=date(2023, 4, 12))

    assert _as_pairs(ledger.records()) == [("2023-04-10", Decimal("100"))]


def test_future_date_is_rejected():
    ledger = Ledger()

    with pytest.raises(InvalidDate) as exc:
        apply_correction(ledger, date(2023, 4, 20), Decimal("1"), today=date(2023, 4, 12))

    assert exc.value.day == date(2023, 4, 20)
    assert len(ledger) == 0
