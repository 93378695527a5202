import logging
import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def restore_library_logger():
    logger = logging.getLogger("schema_cleaner")
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    for handler in logger.handlers:
        if handler not in handlers and isinstance(handler, logging.FileHandler):
            handler.close()
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def lib_caplog(caplog: pytest.LogCaptureFixture, restore_library_logger: logging.Logger):
    """caplog wired to the library logger, which does not propagate."""
    restore_library_logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="schema_cleaner")
    return caplog
