"""
Registry of compiled pack commands.
"""

from .command_registry import CommandDefinition, CommandRegistry, PackDefinition

__all__ = ["CommandDefinition", "CommandRegistry", "PackDefinition"]
