"""Bootstrap — composition-root helper: logging setup plus an empty Registry.

Invariants:
    - Called once at startup, before any descriptor is registered
    - The returned Registry is the only registration target; nothing global
"""

import logging

from apibind.config import Settings, get_settings
from apibind.infrastructure.observability import setup_logging
from apibind.services.registry import Registry

logger = logging.getLogger(__name__)


def bootstrap(settings: Settings | None = None) -> Registry:
    """Configure logging from settings and return a fresh Registry."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    registry = Registry.from_settings(settings)
    logger.info(
        f"apibind registry created at '{registry.path}'",
        extra={"path": registry.path},
    )
    return registry
