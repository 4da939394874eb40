"""
invokekit Type Conversion

Converts Python runtime type objects to invokekit's DataType system.
Handles typing module constructs, primitive types, and custom classes with
full recursive support for complex nested types.
"""

import sys
import enum
import types
import typing
import inspect
import dataclasses
from typing import Any, Union, Optional, get_origin, get_args
from pydantic import BaseModel

from invokekit.core.constants import COMMON_TYPE_MAP
from invokekit.core.schema import DataType, BaseType, ContainerType, BigInt


def python_type_to_datatype(py_type: Any) -> DataType:
    """
    Convert Python runtime type object to DataType.

    Supports complex nested types like Optional[List[Union[User, Product]]].

    Args:
        py_type: Python type object from typing.get_type_hints() or inspect

    Returns:
        DataType representing the type structure
    """
    if py_type is None or py_type is type(None):
        return DataType(base_type=BaseType.NULL)

    if py_type is Any:
        return DataType(base_type=BaseType.ANY)

    if py_type is BigInt:
        return DataType(base_type=BaseType.BIGINT)

    # NewType wrappers render as the type they wrap
    supertype = getattr(py_type, '__supertype__', None)
    if supertype is not None:
        return python_type_to_datatype(supertype)

    origin = get_origin(py_type)
    if origin is not None:
        return _convert_typing_construct(py_type, origin)

    if _is_primitive_type(py_type):
        return _convert_primitive_type(py_type)

    if inspect.isclass(py_type):
        return _convert_custom_type(py_type)

    return DataType(base_type=BaseType.ANY)


def _convert_typing_construct(py_type: Any, origin: Any) -> DataType:
    """Convert typing module constructs (Optional, List, Union, etc.)."""
    args = get_args(py_type)

    if origin is typing.Annotated:
        return python_type_to_datatype(args[0])

    if origin is Union or _is_pep604_union(origin):
        return _convert_union_type(args)

    elif origin in (list, set, frozenset):
        return _convert_list_type(args)

    elif origin is dict:
        return _convert_dict_type(args)

    elif origin is tuple:
        return _convert_tuple_type(args)

    elif origin is typing.Literal:
        return _convert_literal_type(args)

    # Generic types we don't specifically handle
    else:
        return DataType(base_type=BaseType.ANY)


def _is_pep604_union(origin: Any) -> bool:
    union_type = getattr(types, 'UnionType', None)
    return union_type is not None and origin is union_type


def _convert_union_type(args: tuple) -> DataType:
    """
    Convert Union types, including Optional (Union[T, None]).

    Args:
        args: Union type arguments

    Returns:
        DataType with UNION or OPTIONAL container
    """
    non_none = [arg for arg in args if arg is not type(None)]

    if len(non_none) < len(args):
        if len(non_none) == 1:
            inner = python_type_to_datatype(non_none[0])
        else:
            inner = DataType(
                container=ContainerType.UNION,
                args=[python_type_to_datatype(arg) for arg in non_none]
            )
        return DataType(container=ContainerType.OPTIONAL, args=[inner])

    return DataType(
        container=ContainerType.UNION,
        args=[python_type_to_datatype(arg) for arg in args]
    )


def _convert_list_type(args: tuple) -> DataType:
    """Convert List[T] / Set[T] to ARRAY container."""
    if args:
        return DataType(container=ContainerType.ARRAY, args=[python_type_to_datatype(args[0])])
    return DataType(container=ContainerType.ARRAY, args=[DataType(base_type=BaseType.ANY)])


def _convert_dict_type(args: tuple) -> DataType:
    """Convert Dict[K, V] to OBJECT container."""
    if len(args) >= 2:
        return DataType(
            container=ContainerType.OBJECT,
            args=[python_type_to_datatype(args[0]), python_type_to_datatype(args[1])]
        )
    return DataType(
        container=ContainerType.OBJECT,
        args=[DataType(base_type=BaseType.STRING), DataType(base_type=BaseType.ANY)]
    )


def _convert_tuple_type(args: tuple) -> DataType:
    """Convert Tuple[A, B] to TUPLE and Tuple[A, ...] to ARRAY."""
    if len(args) == 2 and args[1] is Ellipsis:
        return DataType(container=ContainerType.ARRAY, args=[python_type_to_datatype(args[0])])

    # Tuple[()] is the empty tuple
    if args == ((),):
        args = ()

    return DataType(
        container=ContainerType.TUPLE,
        args=[python_type_to_datatype(arg) for arg in args]
    )


def _convert_literal_type(args: tuple) -> DataType:
    """Convert Literal["a", 1, True] to LITERAL container, keeping raw values."""
    literal_values = []
    for arg in args:
        if isinstance(arg, enum.Enum):
            arg = arg.value
        literal_values.append(arg)

    return DataType(container=ContainerType.LITERAL, literal_values=literal_values)


def _convert_primitive_type(py_type: type) -> DataType:
    """Convert primitive Python types to BaseType."""
    if py_type is bool:
        return DataType(base_type=BaseType.BOOLEAN)
    elif py_type is int or py_type is float:
        return DataType(base_type=BaseType.NUMBER)
    elif py_type is str or py_type is bytes:
        return DataType(base_type=BaseType.STRING)
    elif py_type is dict:
        return _convert_dict_type(())
    elif py_type in (list, set, frozenset, tuple):
        return _convert_list_type(())
    return DataType(base_type=BaseType.ANY)


def _convert_custom_type(py_type: type) -> DataType:
    """Convert custom classes (User, UserStatus, etc.) to a named reference."""
    common_external = _check_common_external_type(py_type)
    if common_external:
        return common_external

    return DataType(reference=py_type.__name__, class_reference=py_type)


def _is_primitive_type(py_type: Any) -> bool:
    primitive_types = {int, float, str, bytes, bool, dict, list, tuple, set, frozenset}
    return py_type in primitive_types


def _check_common_external_type(py_type: type) -> Optional[DataType]:
    """Map well-known library types to the primitive they serialize as."""
    for cls in py_type.__mro__:
        mapped = COMMON_TYPE_MAP.get(cls.__name__)
        if mapped and _is_known_external_module(cls.__module__):
            return DataType(base_type=BaseType(mapped))
    return None


def _is_known_external_module(module_name: str) -> bool:
    root = module_name.split('.')[0]
    return root in sys.stdlib_module_names or root in {'pydantic', 'pydantic_core', 'pathlib'}


def type_identifier(cls: type) -> str:
    """Stable registry key for a Python class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def is_declarable_class(cls: Any) -> bool:
    """True for classes that become named type declarations."""
    if not inspect.isclass(cls):
        return False
    return (
        issubclass(cls, enum.Enum)
        or dataclasses.is_dataclass(cls)
        or _is_pydantic_model(cls)
        or typing.is_typeddict(cls)
    )


def _is_pydantic_model(cls: type) -> bool:
    try:
        return issubclass(cls, BaseModel)
    except TypeError:
        return False
