"""
Codeloom Backend - Logging Setup Tests
=======================================

What we test:
    ✅ setup_logging installs the PHI filter on every root handler
    ✅ Records emitted afterwards reach the handler already scrubbed
"""

import logging

import pytest

from codeloom.main import setup_logging
from codeloom.utils.phi import PHIScrubbingFilter


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.messages = []

    def emit(self, record):
        self.messages.append(record.getMessage())


def test_phi_filter_on_root_handlers(restore_root_logger):
    setup_logging()

    handlers = restore_root_logger.handlers
    assert handlers
    for handler in handlers:
        assert any(isinstance(f, PHIScrubbingFilter) for f in handler.filters)


def test_root_handler_output_is_scrubbed(restore_root_logger):
    setup_logging()
    collector = _Collector()
    # Same filter setup_logging gives the stdout handler
    collector.filters = list(restore_root_logger.handlers[0].filters)
    restore_root_logger.addHandler(collector)

    logging.getLogger("codeloom.test").warning(
        "saved %s", {"practice_id": "p-1", "patientName": "Jane Roe"}
    )

    assert collector.messages == ["saved {'practice_id': 'p-1'}"]
