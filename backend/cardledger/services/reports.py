from __future__ import annotations

from datetime import date, datetime, time

import xlsxwriter
from sqlalchemy.orm import Session

from cardledger.services.balance_update import history
from cardledger.services.cards import require_card


def build_balance_report(s: Session, card_number: str, out_file, start: date | None = None, end: date | None = None):
    card = require_card(s, card_number)
    rows = history(s, card_number, start, end)

    wb = xlsxwriter.Workbook(out_file, {"in_memory": True})
    base_font = "Calibri"

    meta_label = wb.add_format({"bold": True, "font_name": base_font, "font_size": 11, "font_color": "#334155"})
    meta_value = wb.add_format({"font_name": base_font, "font_size": 11, "font_color": "#0f172a"})
    subtle = wb.add_format({"font_name": base_font, "font_size": 10, "font_color": "#64748b"})
    header = wb.add_format(
        {
            "bold": True,
            "font_name": base_font,
            "font_size": 11,
            "bg_color": "#F1F5F9",
            "border": 1,
            "align": "center",
            "valign": "vcenter",
        }
    )
    date_fmt = wb.add_format({"font_name": base_font, "font_size": 11, "num_format": "yyyy-mm-dd", "border": 1})
    money2 = wb.add_format(
        {"font_name": base_font, "font_size": 11, "num_format": "#,##0.00", "border": 1, "align": "right"}
    )
    stripe_date = wb.add_format({"bg_color": "#FBFDFF", "num_format": "yyyy-mm-dd"})
    stripe_money2 = wb.add_format({"bg_color": "#FBFDFF", "num_format": "#,##0.00", "align": "right"})
    for f in (stripe_date, stripe_money2):
        f.set_border(1)
        f.set_font_name(base_font)
        f.set_font_size(11)

    ws = wb.add_worksheet("Balance History")
    ws.set_column(0, 0, 12)  # Date
    ws.set_column(1, 1, 18)  # Balance

    ws.write(0, 0, "Card", meta_label)
    ws.write(0, 1, card.number, meta_value)

    ws.write(1, 0, "Bank", meta_label)
    ws.write(1, 1, card.issuance_bank or "", meta_value)

    if rows:
        ws.write(2, 0, "Range", meta_label)
        ws.write(2, 1, f"{rows[-1].date} to {rows[0].date}", subtle)
    ws.write(2, 2, "Generated", meta_label)
    ws.write(2, 3, datetime.now().strftime("%Y-%m-%d %H:%M"), subtle)

    for c, h in enumerate(["Date", "Balance"]):
        ws.write(3, c, h, header)
    ws.freeze_panes(4, 1)

    r = 4
    for rec in rows:
        ws.write_datetime(r, 0, datetime.combine(rec.date, time.min), date_fmt)
        ws.write_number(r, 1, float(rec.amount), money2)
        r += 1

    last_data_row = r - 1
    if last_data_row >= 4:
        ws.autofilter(3, 0, last_data_row, 1)
        ws.conditional_format(
            4, 0, last_data_row, 0, {"type": "formula", "criteria": "=MOD(ROW(),2)=0", "format": stripe_date}
        )
        ws.conditional_format(
            4, 1, last_data_row, 1, {"type": "formula", "criteria": "=MOD(ROW(),2)=0", "format": stripe_money2}
        )

    wb.close()
    return len(rows)
