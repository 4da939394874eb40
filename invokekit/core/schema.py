"""
invokekit Data Models

Language-agnostic descriptions of backend commands and the data types they
reference. These are produced by the introspection layer (or by any other
reflection step) and consumed read-only by the generators.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple, NamedTuple, NewType


# === TYPE SYSTEM === #

class BaseType(Enum):
    """Primitive types for code generation."""
    ANY = "any"
    NULL = "null"
    NEVER = "never"
    STRING = "string"
    NUMBER = "number"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    UNKNOWN = "unknown"


class ContainerType(Enum):
    """Container types for complex structures."""
    ARRAY = "array"        # List[T] -> T[]
    UNION = "union"        # Union[A, B] -> A | B
    TUPLE = "tuple"        # Tuple[A, B] -> [A, B]
    OBJECT = "object"      # Dict[str, T] -> Record<string, T>
    LITERAL = "literal"    # Literal["a", "b"] -> "a" | "b"
    OPTIONAL = "optional"  # Optional[T] -> T | null


class NamedKind(Enum):
    """Declaration shapes a named type can take."""
    OBJECT = "object"
    ENUM = "enum"
    ALIAS = "alias"


class LanguageType(Enum):
    """Supported output dialects."""
    TYPESCRIPT = "typescript"
    TS = "ts"  # Alias for TypeScript
    JAVASCRIPT = "javascript"
    JS = "js"  # Alias for JavaScript

    @property
    def is_typed(self) -> bool:
        return self in (LanguageType.TYPESCRIPT, LanguageType.TS)


# Marker for integers that do not fit in a JavaScript number
BigInt = NewType("BigInt", int)


# === ANNOTATIONS === #

@dataclass
class DataType:
    """
    Recursive type representation used for command parameters, results and fields.

    Exactly one of ``base_type``, ``container`` or ``reference`` is set on a
    well-formed descriptor.

    Examples:
        str -> DataType(base_type=BaseType.STRING)
        List[User] -> DataType(container=ContainerType.ARRAY, args=[DataType(reference="User")])
        Optional[int] -> DataType(container=ContainerType.OPTIONAL, args=[DataType(base_type=BaseType.NUMBER)])
    """
    base_type: Optional[BaseType] = None               # Primitive type
    container: Optional[ContainerType] = None          # Container type
    args: List['DataType'] = None                      # Generic type arguments
    literal_values: List[Any] = None                   # Values for Literal types
    reference: Optional[str] = None                    # Name of a named type
    class_reference: Optional[Any] = None              # Python class behind the reference

    def __post_init__(self):
        if self.args is None:
            self.args = []
        if self.literal_values is None:
            self.literal_values = []

    def is_optional(self) -> bool:
        return self.container == ContainerType.OPTIONAL


@dataclass
class FieldDef:
    """Single field of an object declaration."""
    name: str
    annotation: DataType
    optional: bool = False
    docs: List[str] = field(default_factory=list)


@dataclass
class NamedDataType:
    """
    Declaration form of a named type.

    Objects carry ``fields``, enums carry ``variants`` as (member name, value)
    pairs and aliases carry ``alias``.
    """
    name: str
    kind: NamedKind = NamedKind.OBJECT
    fields: List[FieldDef] = field(default_factory=list)
    variants: List[Tuple[str, Any]] = field(default_factory=list)
    alias: Optional[DataType] = None
    docs: List[str] = field(default_factory=list)


# Stable type identifier -> declaration (None means not exported)
TypeDefs = Dict[str, Optional[NamedDataType]]


# === COMMANDS === #

@dataclass(frozen=True)
class FunctionDataType:
    """
    Backend command as seen by the generators.

    ``name`` is the identifier the backend registered and is used verbatim as
    the command string of the bridge call.
    """
    name: str
    args: Tuple[Tuple[str, DataType], ...] = ()
    result: DataType = field(default_factory=lambda: DataType(base_type=BaseType.NULL))
    docs: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept lists from callers but keep the descriptor immutable
        object.__setattr__(self, "args", tuple(tuple(arg) for arg in self.args))
        object.__setattr__(self, "docs", tuple(self.docs))


class CommandExport(NamedTuple):
    """Everything a reflection step hands to the exporters."""
    functions: List[FunctionDataType]
    type_map: TypeDefs
