"""
connectn.interfaces - User interfaces for Connect-N

Don't import anything here to avoid circular imports.
"""

__all__ = []
