# expense_tracker/outputs/csv_output.py

import os
import csv
from expense_tracker.core.models import DATE_FORMAT
from expense_tracker.outputs.base import BaseOutput


class CSVOutput(BaseOutput):
    """
    Writes expenses to a single CSV file, sorted by date (oldest to latest).
    Defaults to <output_dir>/expenses.csv when no path is given.
    """
    HEADERS = ['id', 'date', 'description', 'category', 'amount']

    def __init__(self, config):
        self.config     = config
        self.output_dir = config.get('output_dir', 'data')

    def append(self, expenses, out_path=None):
        out_path = out_path or os.path.join(self.output_dir, 'expenses.csv')
        parent = os.path.dirname(out_path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        rows = sorted(expenses, key=lambda e: e.date)
        with open(out_path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for e in rows:
                writer.writerow([
                    e.id,
                    e.date.strftime(DATE_FORMAT),
                    e.description,
                    e.category,
                    str(e.amount),
                ])
        return out_path
