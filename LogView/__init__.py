"""
LogView - filtered, colorized, auto-refreshing log file viewer
"""

__version__ = "1.0.0"
