import logging

import pytest
import structlog

from passwordreset.logging import configure_library_defaults
from passwordreset.logging import core as log_core
from passwordreset.logging.interceptors import RedirectStdLibHandler

from .fakes import TEST_LOGIN, TEST_PASSWORD_VALUE, RecordingLookup


@pytest.fixture
def lookup() -> RecordingLookup:
    return RecordingLookup({TEST_LOGIN: TEST_PASSWORD_VALUE})


@pytest.fixture
def isolated_logging():
    """Restore structlog and the root logger after a test configures logging."""
    root = logging.getLogger()
    level = root.level
    yield
    for sink in log_core._sinks:
        sink.close()
    log_core._sinks.clear()
    root.handlers = [h for h in root.handlers if not isinstance(h, RedirectStdLibHandler)]
    root.setLevel(level)
    structlog.reset_defaults()
    configure_library_defaults()
