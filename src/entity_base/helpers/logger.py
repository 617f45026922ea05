import logging
from typing import Optional

import structlog

from entity_base.config.manager import get_config_manager
from entity_base.config.schemas import LoggingConfig
from entity_base.config.defaults import LogFormat

# Processors bound to every package logger; global structlog configuration is left to the host
_PROCESSORS = [
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.processors.UnicodeDecoder(),
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]


def setup_logging(config: Optional[LoggingConfig] = None) -> structlog.stdlib.BoundLogger:
    """
    Attach a structlog-rendering handler to the package logger.

    Only the stdlib logger named by ``config.logger_name`` is touched; the
    root logger and structlog's global configuration stay as the host
    application left them. Nothing calls this implicitly.

    Args:
        config: Logging configuration. If None, it is read from the
               ConfigurationManager (environment variables and defaults).
    Returns:
        Logger bound to the package logger name.
    """
    if config is None:
        config = get_config_manager().get_typed(LoggingConfig)

    package_logger = logging.getLogger(config.logger_name)
    package_logger.setLevel(getattr(logging, config.level.value))

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    if config.format == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=[
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
        )
    )
    package_logger.addHandler(console_handler)
    package_logger.propagate = False

    logger = get_logger(config.logger_name)

    # Log configuration info
    logger.debug(
        "Logging configured",
        log_level=config.level.value,
        log_format=config.format.value,
    )

    return logger


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structlog logger bound to a module name.

    The logger wraps the stdlib logger of the same name with the package's
    own processor chain, so it honours stdlib levels and handlers without
    requiring ``structlog.configure``.

    Args:
        name: Logger name, usually __name__

    Returns:
        structlog logger backed by the stdlib logger of the same name
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
