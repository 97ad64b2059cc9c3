import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The command line reconfigures the package logger; undo it between tests."""
    logger = logging.getLogger("stay_within")
    handlers, level, propagate = logger.handlers[:], logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
