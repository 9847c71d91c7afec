"""Root conftest: configure structlog for tests and isolate log context between tests."""

import pytest
import structlog

from shared.logging import structlog_processors

# Route structlog through stdlib logging so caplog sees engine events.
structlog.configure(
    processors=structlog_processors(),
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=False,
)


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Prevent context leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
