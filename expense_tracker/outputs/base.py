# expense_tracker/outputs/base.py
from abc import ABC, abstractmethod

class BaseOutput(ABC):
    """Export sink for a list of expenses.

    Subclasses take the config mapping in ``__init__`` and use its
    ``output_dir`` when the caller does not name a file.
    """

    @abstractmethod
    def append(self, expenses, out_path=None):
        """Write *expenses* (oldest first) to *out_path* and return the path written."""
        pass
