"""
Utility modules for the loader.
"""

from html5_loader.utils.config import Config
from html5_loader.utils.logging import setup_logging, get_default_log_file, log_exception, PerformanceLogger

__all__ = [
    'Config',
    'setup_logging',
    'get_default_log_file',
    'log_exception',
    'PerformanceLogger',
]
