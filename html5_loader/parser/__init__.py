"""
External HTML5 parsing engine used by the loader.
"""

from .html5_parser import HTML5Parser

__all__ = ['HTML5Parser']
