import logging

import pytest


@pytest.fixture(autouse=True)
def _detach_cli_log_handler():
    """Drop the handler the CLI installs so it never outlives its stream."""
    yield
    root = logging.getLogger("stockroom")
    for handler in list(root.handlers):
        if handler.get_name() == "stockroom":
            root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True
