"""Logging configuration for the application."""
import logging
import sys
from app.config import settings

LOG_LEVEL = logging.DEBUG if settings.is_development else logging.INFO

# Configure root logger
logger = logging.getLogger("app")
logger.setLevel(LOG_LEVEL)

# Create console handler
handler = logging.StreamHandler(sys.stdout)
handler.setLevel(LOG_LEVEL)

# Create formatter
formatter = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
handler.setFormatter(formatter)

# Add handler to logger if not already added
if not logger.handlers:
    logger.addHandler(handler)

# Prevent duplicate logs
logger.propagate = False

__all__ = ["logger"]
