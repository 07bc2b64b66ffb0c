# expense_tracker/manual.py
import yaml


def load_manual_expenses(path):
    """Load expense entries to import from a YAML file.

    Each entry needs a ``description`` and an ``amount``; ``category`` is
    optional. Entries are returned as plain dicts for ``ExpenseStore.add``.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or []

    if not isinstance(data, list):
        raise ValueError(f"Expected a list of expenses in {path}")

    entries = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ValueError(f"Unrecognized manual entry: {entry!r}")
        if not entry.get('description'):
            raise ValueError(f"Missing 'description' in manual entry: {entry}")
        if entry.get('amount') is None:
            raise ValueError(f"Missing 'amount' in manual entry: {entry}")
        entries.append({
            'description': str(entry['description']),
            'amount': str(entry['amount']),
            'category': None if entry.get('category') is None else str(entry['category']),
        })
    return entries
