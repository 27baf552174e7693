"""
Utility helpers shared across blazesql modules.
"""

from .logging import configure_logging, get_logger, time_call
from .redaction import describe_args, redact_args

__all__ = ["configure_logging", "describe_args", "get_logger", "redact_args", "time_call"]
