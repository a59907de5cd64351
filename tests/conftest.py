import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
if SRC.exists():
    sys.path.insert(0, str(SRC))

# Register shared Hypothesis profiles for deterministic CI runs and fast local loops.
from tests.util import hypothesis_profiles  # noqa: E402,F401  pylint: disable=unused-import

# The four phonebook entries used across the probe-count scenarios.
PHONEBOOK_ENTRIES = (
    ("Arnold", "894-59-0011"),
    ("Tiffany", "894-59-0011"),
    ("Jessie", "705-12-7500"),
    ("Mary", "888-1212-3340"),
)


@pytest.fixture(name="phonebook_entries")
def _phonebook_entries_fixture() -> tuple[tuple[str, str], ...]:
    return PHONEBOOK_ENTRIES


@pytest.fixture(name="phonebook_logger")
def _phonebook_logger_fixture() -> Iterator[logging.Logger]:
    """Restore the shared logger after tests that reconfigure it."""

    logger = logging.getLogger("phonebook")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            handler.close()
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate
