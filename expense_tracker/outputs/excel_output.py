# expense_tracker/outputs/excel_output.py

"""Excel output module backed by XlsxWriter.

The workbook has an ``Expenses`` worksheet listing every record as an Excel
table, and a ``Summary`` worksheet aggregating spending by category for each
month, with month totals and a grand total.
"""

from __future__ import annotations

import os
from decimal import Decimal

import xlsxwriter

from expense_tracker.outputs.base import BaseOutput
from expense_tracker.summary import totals_by_category


class ExcelOutput(BaseOutput):
    """Generate a local Excel workbook of the ledger."""

    MONTH_FMT = "%B %Y"
    EXPENSES = "Expenses"
    SUMMARY = "Summary"
    HEADERS = ["id", "date", "description", "category", "amount"]

    def __init__(self, config: dict):
        self.config = config
        self.output_dir = config.get("output_dir", "data")
        symbol = config.get("currency_symbol", "$")
        self.num_format = f"{symbol}#,##0.00"

    def append(self, expenses, out_path=None):
        out_path = out_path or os.path.join(self.output_dir, "expenses.xlsx")
        parent = os.path.dirname(out_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        rows = sorted(expenses, key=lambda e: e.date)
        workbook = xlsxwriter.Workbook(out_path)
        amount_fmt = workbook.add_format({"num_format": self.num_format})

        ws = workbook.add_worksheet(self.EXPENSES)
        ws.freeze_panes(1, 0)
        ws.write_row(0, 0, self.HEADERS)
        for idx, e in enumerate(rows, start=1):
            ws.write_row(idx, 0, [
                e.id,
                e.date.strftime("%Y-%m-%d %H:%M"),
                e.description,
                e.category,
            ])
            ws.write_number(idx, 4, float(e.amount), amount_fmt)
        ws.set_column(4, 4, None, amount_fmt)
        ws.add_table(0, 0, max(len(rows), 1), 4, {
            "columns": [{"header": h} for h in self.HEADERS]
        })

        summary_ws = workbook.add_worksheet(self.SUMMARY)
        summary_ws.freeze_panes(1, 0)
        summary_ws.set_column(2, 2, None, amount_fmt)
        summary_ws.write_row(0, 0, ["month", "category", "total"])
        row_idx = 1
        grand_total = Decimal("0")
        for month_label, month_rows in self._group_by_month(rows):
            cats = totals_by_category(month_rows)
            for i, (cat, amount) in enumerate(cats.items()):
                if i == 0:
                    summary_ws.write(row_idx, 0, month_label)
                summary_ws.write(row_idx, 1, cat)
                summary_ws.write_number(row_idx, 2, float(amount), amount_fmt)
                row_idx += 1
            month_total = sum(cats.values(), Decimal("0"))
            summary_ws.write(row_idx, 0, f"{month_label} Total")
            summary_ws.write_number(row_idx, 2, float(month_total), amount_fmt)
            grand_total += month_total
            row_idx += 1
        summary_ws.write(row_idx, 0, "Grand Total")
        summary_ws.write_number(row_idx, 2, float(grand_total), amount_fmt)

        workbook.close()
        return out_path

    def _group_by_month(self, rows):
        """Yield ``(label, expenses)`` per calendar month, oldest first."""
        groups = {}
        for e in rows:
            key = (e.date.year, e.date.month)
            groups.setdefault(key, []).append(e)
        for key in sorted(groups):
            label = groups[key][0].date.strftime(self.MONTH_FMT)
            yield label, groups[key]
