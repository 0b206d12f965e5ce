"""
LogView UI Package
"""

from .app import LogViewApp, run_app

__all__ = [
    'LogViewApp',
    'run_app',
]
