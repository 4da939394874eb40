"""
invokekit introspection utilities - for advanced users building custom tools
"""

from .commands import command, collect_commands, try_collect_commands, function_to_datatype
from .models import discover_types_from_functions, introspect_class


__all__ = [
    # High-level functions
    'command',
    'collect_commands',
    'try_collect_commands',

    # Lower-level functions for extensions
    'function_to_datatype',
    'discover_types_from_functions',
    'introspect_class',
]
