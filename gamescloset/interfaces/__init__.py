"""
gamescloset.interfaces - User interfaces for the Game Closet engine

This package contains the text command-line front end.
"""

# Don't import anything here to avoid circular imports
__all__ = []
