# src/mockkit/core/logging/
# ├─ __init__.py            # public API: setup_logging, set_test_id, ...
# ├─ builder.py             # make_dict_config(settings) + setup_logging(settings)
# ├─ formatters.py          # JsonFormatter, ColorFormatter
# ├─ filters.py             # TestIdFilter (+ contextvar helpers)
# └─ handlers.py            # handler config factories (console/file)


from .builder import setup_logging, make_dict_config
from .filters import set_test_id, reset_test_id, get_test_id, TestIdFilter

__all__ = [
    "setup_logging",
    "make_dict_config",
    "set_test_id",
    "reset_test_id",
    "get_test_id",
    "TestIdFilter",
]
