"""
Centralized logging configuration for the recovery service
"""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler


# Log format configuration
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Default log directory
LOG_DIR = Path(__file__).parent.parent.parent / "logs"


def _build_handlers(
    level: int,
    log_file: str | None,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> list[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                LOG_DIR / log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger instance.

    Handlers are attached once to the root logger by configure_app_logging(),
    so module loggers only need a name.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def configure_app_logging(
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_file: str = "recovery.log",
) -> None:
    """
    Configure application-wide logging settings.

    This should be called once at application startup.

    Args:
        level: Root logging level (default: INFO)
        log_to_file: Whether to enable file logging (default: True)
        log_file: Log file name (default: "recovery.log")
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    for handler in _build_handlers(level, log_file if log_to_file else None):
        root_logger.addHandler(handler)
