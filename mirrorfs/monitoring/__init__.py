"""
MirrorFS Monitoring Module

Provides the file access history.
"""

from .history import HistoryLogger

__all__ = [
    'HistoryLogger',
]
