import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo CLI logging setup so caplog sees package records."""
    yield
    logger = logging.getLogger("templ_components")
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
