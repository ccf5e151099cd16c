"""
connectfour.interfaces - User interfaces for Connect Four

This package contains the terminal interface that reads engine snapshots
and forwards player commands to the engine.
"""

# Don't import anything here to avoid circular imports
__all__ = []
