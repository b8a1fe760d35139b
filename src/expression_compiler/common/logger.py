"""Package-wide logger shared by every expression_compiler module."""
import logging

logger: logging.Logger = logging.getLogger("expression_compiler")
# Library code: handlers and levels are left to the embedding application
logger.addHandler(logging.NullHandler())
