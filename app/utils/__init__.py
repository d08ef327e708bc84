"""Utility package initialization."""

from .logging import setup_logger

__all__ = ['setup_logger']
