"""
Abstract interfaces for nixrun services.
"""

from .logger import ILogger
from .presenter import IPresenter
from .process import IProcessRunner

__all__ = [
    "ILogger",
    "IPresenter",
    "IProcessRunner",
]
