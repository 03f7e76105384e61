"""
Logging and Logfire setup for Darwin engines.
"""

from typing import Optional
import logging

import logfire

from darwin.core.config import LoggingConfig
from darwin.core.settings import ObservabilitySettings, settings as default_settings


def configure_observability(settings: Optional[ObservabilitySettings] = None) -> None:
    """
    Configure logfire and the ``darwin`` logger hierarchy.

    Args:
        settings: Observability settings; the environment-derived defaults are used when omitted
    """
    settings = settings or default_settings
    logfire.configure(**settings.get_logfire_settings())
    logging.getLogger("darwin").setLevel(getattr(logging, settings.log_level))


def get_logger(name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Get a darwin logger, attaching a stream handler when none is configured."""
    config = config or LoggingConfig()
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, config.log_level))

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
