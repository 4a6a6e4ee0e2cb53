"""Structured logging module for rawport.

Provides configurable logging with JSON format support and file rotation.
Includes job context support for parallel conversion.
"""

from rawport.logging.config import configure_logging
from rawport.logging.context import (
    JobContextFilter,
    clear_job_context,
    get_job_context,
    job_context,
    set_job_context,
)
from rawport.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "JobContextFilter",
    "clear_job_context",
    "configure_logging",
    "get_job_context",
    "job_context",
    "set_job_context",
]
