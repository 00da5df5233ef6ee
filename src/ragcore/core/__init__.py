"""
Core message types.
"""

from ragcore.core.message import Message, Role

__all__ = ["Message", "Role"]
