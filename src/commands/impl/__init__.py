"""
Command implementations compiled from pack definitions.
"""

from .http_command import HttpCommand, compile_command

__all__ = ["HttpCommand", "compile_command"]
