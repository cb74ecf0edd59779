# file: app/logging_utils.py
import logging
from rich.logging import RichHandler

def setup_logging(level=logging.INFO):
    """Configure rich logging"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)]
    )

logger = logging.getLogger("webhook")
