# expense_tracker/outputs/__init__.py
"""Export sinks for the ledger, selected by name through ``output_modules``."""
from importlib import import_module

def get_output(name, config):
    """Instantiate the sink registered as *name* (``csv`` or ``excel``)."""
    try:
        path = config['output_modules'][name]
    except KeyError:
        raise ValueError(f"No export format named {name!r}") from None
    module_name, cls_name = path.rsplit('.', 1)
    mod = import_module(module_name)
    return getattr(mod, cls_name)(config)
