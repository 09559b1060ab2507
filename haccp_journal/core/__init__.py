"""
Core utilities and configuration for HACCP Journal.

This package provides core functionality including logging configuration,
database setup, the EIK validator, the synthetic reading generator and other
shared utilities.
"""

from haccp_journal.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
