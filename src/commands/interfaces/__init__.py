"""
Interfaces shared by compiled commands.
"""

from .invocable import Invocable

__all__ = ["Invocable"]
