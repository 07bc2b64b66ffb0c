"""Personal expense ledger backed by a JSON document."""

__version__ = "0.1.0"
