"""
Command Introspection for invokekit

Converts plain Python callables into FunctionDataType descriptors using
runtime introspection of their signatures, type hints and docstrings.
"""

import inspect
import logging
import typing
from typing import Callable, List, Optional, Union

from invokekit.core.errors import CollectionError
from invokekit.core.type_conversion import python_type_to_datatype
from invokekit.core.schema import CommandExport, FunctionDataType, DataType, BaseType
from invokekit.introspection.models import discover_types_from_functions


logger = logging.getLogger(__name__)

COMMAND_NAME_ATTR = "__invokekit_command__"


def command(func: Optional[Callable] = None, *, name: Optional[str] = None):
    """
    Mark a function as a backend command, optionally under a different name.

    Usable bare (``@command``) or with arguments (``@command(name="get_user")``).
    The name is what the backend registered and what generated code sends.
    """
    def decorate(f: Callable) -> Callable:
        setattr(f, COMMAND_NAME_ATTR, name or f.__name__)
        return f

    if func is not None:
        return decorate(func)
    return decorate


def function_to_datatype(func: Callable) -> FunctionDataType:
    """
    Convert a Python callable to a FunctionDataType.

    Args:
        func: Function, bound method or other callable with type annotations

    Returns:
        FunctionDataType describing the command

    Raises:
        CollectionError: If the callable cannot be described
    """
    if not callable(func):
        raise CollectionError(f"{func!r} is not callable")

    name = getattr(func, COMMAND_NAME_ATTR, None) or getattr(func, '__name__', None)
    if not name:
        raise CollectionError(f"Cannot determine a command name for {func!r}")

    try:
        signature = inspect.signature(func)
        type_hints = typing.get_type_hints(func)
    except (NameError, TypeError, ValueError) as e:
        raise CollectionError(f"Failed to introspect command '{name}': {e}") from e

    args = []
    for param in signature.parameters.values():
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            raise CollectionError(
                f"Command '{name}' takes variadic parameter '{param.name}', which cannot be forwarded"
            )
        if param.name not in type_hints:
            raise CollectionError(f"Parameter '{param.name}' of command '{name}' has no type annotation")
        args.append((param.name, python_type_to_datatype(type_hints[param.name])))

    if 'return' in type_hints:
        result = python_type_to_datatype(type_hints['return'])
    else:
        result = DataType(base_type=BaseType.NULL)

    return FunctionDataType(
        name=name,
        args=args,
        result=result,
        docs=_extract_docs(func),
    )


def _extract_docs(func: Callable) -> List[str]:
    docstring = getattr(func, '__doc__', None)
    if not docstring:
        return []
    return inspect.cleandoc(docstring).splitlines()


def collect_commands(*commands: Callable, project_root: Optional[str] = None) -> CommandExport:
    """
    Describe commands and every type they depend on.

    Args:
        *commands: Callables in the order their bindings should be emitted
        project_root: Classes defined outside this directory are registered
            without a declaration (None accepts all classes)

    Returns:
        CommandExport of (functions, type_map)

    Raises:
        CollectionError: On an undescribable callable or a duplicate command name
    """
    functions = []
    seen = set()

    for func in commands:
        function = function_to_datatype(func)
        if function.name in seen:
            raise CollectionError(f"Duplicate command name '{function.name}'")
        seen.add(function.name)
        functions.append(function)

    type_map = discover_types_from_functions(functions, project_root)

    logger.debug(f"Collected {len(functions)} command(s), {len(type_map)} type(s)")
    return CommandExport(functions, type_map)


def try_collect_commands(
    *commands: Callable,
    project_root: Optional[str] = None
) -> Union[CommandExport, CollectionError]:
    """
    Like collect_commands, but return the CollectionError instead of raising it.

    The result can be handed straight to typescript.export / javascript.export,
    which report the failure without touching the output file.
    """
    try:
        return collect_commands(*commands, project_root=project_root)
    except CollectionError as e:
        return e

