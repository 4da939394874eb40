"""
Model Introspection for invokekit

Discovers the pydantic models, dataclasses, TypedDicts and Enums referenced
by commands and builds the TypeDefs registry the TypeScript generator
declares. Traversal is recursive and stays within the project boundary.
"""

import enum
import inspect
import logging
import typing
import dataclasses
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from invokekit.core.errors import CollectionError
from invokekit.core.type_conversion import python_type_to_datatype, type_identifier, is_declarable_class
from invokekit.core.schema import DataType, FieldDef, FunctionDataType, NamedDataType, NamedKind, TypeDefs


logger = logging.getLogger(__name__)

_AUTO_DOCS = ("An enumeration.",)


def discover_types_from_functions(
    functions: Iterable[FunctionDataType],
    project_root: Optional[str] = None
) -> TypeDefs:
    """
    Discover every named type referenced by the given commands.

    Args:
        functions: Commands whose parameters and results are traversed
        project_root: Project root directory for boundary detection (optional)

    Returns:
        TypeDefs mapping stable identifiers to declarations; classes that are
        outside the project or cannot be declared map to None
    """
    discovered: TypeDefs = {}
    exported_names: Dict[str, str] = {}
    project_path = Path(project_root).resolve() if project_root else None

    for function in functions:
        for _, arg_type in function.args:
            _discover_from_datatype(arg_type, discovered, exported_names, project_path)
        _discover_from_datatype(function.result, discovered, exported_names, project_path)

    return discovered


def _discover_from_datatype(
    annotation: DataType,
    discovered: TypeDefs,
    exported_names: Dict[str, str],
    project_path: Optional[Path]
):
    """Recursively discover named types from a DataType tree."""
    cls = annotation.class_reference
    if cls is not None and annotation.reference:
        key = type_identifier(cls)

        if key not in discovered:
            if not is_declarable_class(cls) or not _is_within_project_boundary(cls, project_path):
                logger.debug(f"Not exporting {key}")
                discovered[key] = None
            else:
                owner = exported_names.get(cls.__name__)
                if owner is not None and owner != key:
                    raise CollectionError(
                        f"Type name '{cls.__name__}' is used by both {owner} and {key}"
                    )
                exported_names[cls.__name__] = key

                # Reserve the slot before recursing so self-references terminate
                discovered[key] = None
                named = introspect_class(cls)
                discovered[key] = named
                logger.debug(f"Discovered type {key}")

                for field_item in named.fields:
                    _discover_from_datatype(field_item.annotation, discovered, exported_names, project_path)

    for arg in annotation.args:
        _discover_from_datatype(arg, discovered, exported_names, project_path)


def _is_within_project_boundary(cls: type, project_path: Optional[Path]) -> bool:
    """
    Check if a class is defined within the project boundaries.

    Args:
        cls: Python class object
        project_path: Project root path (None = accept all)
    """
    if project_path is None:
        return True

    try:
        class_file = Path(inspect.getfile(cls)).resolve()
        return class_file.is_relative_to(project_path)
    except (TypeError, OSError):
        return False


def introspect_class(cls: type) -> NamedDataType:
    """
    Convert a declarable Python class to a NamedDataType.

    Raises:
        CollectionError: If the class cannot be introspected
    """
    try:
        if issubclass(cls, enum.Enum):
            return _introspect_enum(cls)
        elif issubclass(cls, BaseModel):
            return _introspect_pydantic_model(cls)
        elif dataclasses.is_dataclass(cls):
            return _introspect_dataclass(cls)
        elif typing.is_typeddict(cls):
            return _introspect_typeddict(cls)
    except (NameError, TypeError) as e:
        raise CollectionError(f"Failed to introspect class {cls.__name__}: {e}") from e

    raise CollectionError(f"Class {cls.__name__} is not a model, dataclass, TypedDict or Enum")


def _introspect_pydantic_model(cls: type) -> NamedDataType:
    """Introspect a pydantic model using its resolved field information."""
    fields = []

    for field_name, field_info in cls.model_fields.items():
        fields.append(FieldDef(
            name=field_info.serialization_alias or field_info.alias or field_name,
            annotation=python_type_to_datatype(field_info.annotation),
            optional=not field_info.is_required(),
            docs=[field_info.description] if field_info.description else [],
        ))

    return NamedDataType(name=cls.__name__, kind=NamedKind.OBJECT, fields=fields, docs=_class_docs(cls))


def _introspect_dataclass(cls: type) -> NamedDataType:
    type_hints = typing.get_type_hints(cls)
    fields = []

    for field_item in dataclasses.fields(cls):
        has_default = (
            field_item.default is not dataclasses.MISSING
            or field_item.default_factory is not dataclasses.MISSING
        )
        fields.append(FieldDef(
            name=field_item.name,
            annotation=python_type_to_datatype(type_hints.get(field_item.name, Any)),
            optional=has_default,
        ))

    return NamedDataType(name=cls.__name__, kind=NamedKind.OBJECT, fields=fields, docs=_class_docs(cls))


def _introspect_typeddict(cls: type) -> NamedDataType:
    type_hints = typing.get_type_hints(cls)
    optional_keys = getattr(cls, '__optional_keys__', frozenset())

    fields = [
        FieldDef(name=key, annotation=python_type_to_datatype(hint), optional=key in optional_keys)
        for key, hint in type_hints.items()
    ]

    return NamedDataType(name=cls.__name__, kind=NamedKind.OBJECT, fields=fields, docs=_class_docs(cls))


def _introspect_enum(cls: type) -> NamedDataType:
    """Introspect Enum members as (member name, value) variants."""
    variants = [(member_name, member.value) for member_name, member in cls.__members__.items()]
    return NamedDataType(name=cls.__name__, kind=NamedKind.ENUM, variants=variants, docs=_class_docs(cls))


def _class_docs(cls: type) -> List[str]:
    """Docstring lines written on the class itself, ignoring generated ones."""
    docstring = cls.__dict__.get('__doc__')
    if not docstring:
        return []

    docstring = inspect.cleandoc(docstring)
    if docstring in _AUTO_DOCS:
        return []

    # dataclasses synthesize "Name(field: type, ...)"
    if dataclasses.is_dataclass(cls) and docstring.startswith(f"{cls.__name__}("):
        return []

    return docstring.splitlines()
