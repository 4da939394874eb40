"""
TypeScript type formatting

Renders DataType descriptors as inline type references and NamedDataType
descriptors as exported declarations, under an ExportConfiguration.
Both generators go through these two functions and nothing else.
"""

import re
from typing import Any, List

from invokekit.core.utils import CodeBuilder, js_doc, quote, is_valid_identifier
from invokekit.core.errors import TypeFormattingError
from invokekit.core.config import ExportConfiguration, BigIntExportBehavior, OptionalFieldStyle, EnumStyle
from invokekit.core.schema import DataType, NamedDataType, FieldDef, BaseType, ContainerType, NamedKind


_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_BASE_TYPES = {
    BaseType.ANY: "any",
    BaseType.NULL: "null",
    BaseType.NEVER: "never",
    BaseType.STRING: "string",
    BaseType.NUMBER: "number",
    BaseType.BOOLEAN: "boolean",
    BaseType.UNKNOWN: "unknown",
}

_BIGINT_TYPES = {
    BigIntExportBehavior.STRING: "string",
    BigIntExportBehavior.NUMBER: "number",
    BigIntExportBehavior.BIGINT: "bigint",
}


# === INLINE FORM === #

def datatype(cfg: ExportConfiguration, typ: DataType) -> str:
    """
    Render a DataType as an inline TypeScript type reference.

    Raises:
        TypeFormattingError: If the descriptor is malformed or the
            configuration forbids one of its parts.
    """
    if not isinstance(typ, DataType):
        raise TypeFormattingError(f"Expected a DataType, got {type(typ).__name__}", typ)

    if typ.container is not None:
        return _convert_container_type(cfg, typ)
    elif typ.reference:
        return typ.reference
    elif typ.base_type is not None:
        return _convert_base_type(cfg, typ)

    raise TypeFormattingError("Descriptor has no base type, container or reference", typ)


def _convert_base_type(cfg: ExportConfiguration, typ: DataType) -> str:
    if typ.base_type == BaseType.BIGINT:
        if cfg.bigint == BigIntExportBehavior.FAIL:
            raise TypeFormattingError(
                "bigint cannot be exported safely; choose an ExportConfiguration.bigint behavior",
                typ,
            )
        return _BIGINT_TYPES[cfg.bigint]

    if typ.base_type == BaseType.ANY and not cfg.allow_any:
        raise TypeFormattingError("'any' is not allowed by this configuration", typ)

    return _BASE_TYPES[typ.base_type]


def _convert_container_type(cfg: ExportConfiguration, typ: DataType) -> str:
    if typ.container == ContainerType.OPTIONAL:
        return f"{_single_arg(cfg, typ)} | null"
    elif typ.container == ContainerType.ARRAY:
        return _convert_array_type(cfg, typ)
    elif typ.container == ContainerType.OBJECT:
        return _convert_object_type(cfg, typ)
    elif typ.container == ContainerType.TUPLE:
        return f"[{', '.join(datatype(cfg, arg) for arg in typ.args)}]"
    elif typ.container == ContainerType.UNION:
        return _convert_union_type(cfg, typ)
    elif typ.container == ContainerType.LITERAL:
        return _convert_literal_type(typ)

    raise TypeFormattingError(f"Unsupported container {typ.container!r}", typ)


def _single_arg(cfg: ExportConfiguration, typ: DataType) -> str:
    if len(typ.args) != 1:
        raise TypeFormattingError(
            f"{typ.container.value} takes exactly one argument, got {len(typ.args)}", typ
        )
    return datatype(cfg, typ.args[0])


def _convert_array_type(cfg: ExportConfiguration, typ: DataType) -> str:
    """Convert List[T] to T[]."""
    inner = _single_arg(cfg, typ)
    if "|" in inner or "&" in inner:
        return f"({inner})[]"
    return f"{inner}[]"


def _convert_object_type(cfg: ExportConfiguration, typ: DataType) -> str:
    """Convert Dict[K, V] to Record<K, V>."""
    if len(typ.args) != 2:
        raise TypeFormattingError(f"object takes a key and a value type, got {len(typ.args)}", typ)
    key_type = datatype(cfg, typ.args[0])
    value_type = datatype(cfg, typ.args[1])
    return f"Record<{key_type}, {value_type}>"


def _convert_union_type(cfg: ExportConfiguration, typ: DataType) -> str:
    if not typ.args:
        return "never"

    parts = []
    for arg in typ.args:
        rendered = datatype(cfg, arg)
        if rendered not in parts:
            parts.append(rendered)
    return " | ".join(parts)


def _convert_literal_type(typ: DataType) -> str:
    if not typ.literal_values:
        return "never"
    return " | ".join(_literal(value, typ) for value in typ.literal_values)


def _literal(value: Any, typ: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return quote(value)
    if isinstance(value, (int, float)):
        return repr(value)
    raise TypeFormattingError(f"Cannot render literal value {value!r}", typ)


# === DECLARATION FORM === #

def export_datatype(cfg: ExportConfiguration, named: NamedDataType) -> str:
    """
    Render a NamedDataType as an exported TypeScript declaration.

    Raises:
        TypeFormattingError: If any part of the declaration cannot be rendered.
    """
    if not is_valid_identifier(named.name or ""):
        raise TypeFormattingError(f"Invalid type name {named.name!r}", named)

    try:
        if named.kind == NamedKind.OBJECT:
            body = _generate_interface(cfg, named)
        elif named.kind == NamedKind.ENUM:
            body = _generate_enum(cfg, named)
        elif named.kind == NamedKind.ALIAS:
            if named.alias is None:
                raise TypeFormattingError("Alias has no target type", named)
            body = f"export type {named.name} = {datatype(cfg, named.alias)}"
        else:
            raise TypeFormattingError(f"Unsupported declaration kind {named.kind!r}", named)
    except TypeFormattingError as e:
        if e.context:
            raise
        raise e.with_context(f"type {named.name}") from e

    return js_doc(named.docs) + body


def _generate_interface(cfg: ExportConfiguration, named: NamedDataType) -> str:
    if not named.fields:
        return f"export interface {named.name} {{}}"

    builder = CodeBuilder(indent_size=cfg.indent)
    with builder.add_block(f"export interface {named.name} {{"):
        for field in named.fields:
            builder.add_lines(_generate_interface_field(cfg, field))
    return builder.get_code()


def _generate_interface_field(cfg: ExportConfiguration, field: FieldDef) -> List[str]:
    """Generate single interface field with JSDoc."""
    lines = []

    if len(field.docs) == 1:
        lines.append(f"/** {field.docs[0]} */")
    elif field.docs:
        lines.extend(js_doc(field.docs).rstrip("\n").split("\n"))

    key = field.name if _IDENTIFIER.match(field.name) else quote(field.name)
    annotation = field.annotation

    if cfg.optional_fields == OptionalFieldStyle.OPTIONAL and (field.optional or annotation.is_optional()):
        if annotation.is_optional():
            annotation = annotation.args[0] if len(annotation.args) == 1 else annotation
        lines.append(f"{key}?: {datatype(cfg, annotation)};")
    else:
        lines.append(f"{key}: {datatype(cfg, annotation)};")

    return lines


def _generate_enum(cfg: ExportConfiguration, named: NamedDataType) -> str:
    if not named.variants:
        return f"export type {named.name} = never"

    if cfg.enum_style == EnumStyle.UNION:
        values = " | ".join(_literal(value, named) for _, value in named.variants)
        return f"export type {named.name} = {values}"

    builder = CodeBuilder(indent_size=cfg.indent)
    with builder.add_block(f"export enum {named.name} {{"):
        for member, value in named.variants:
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise TypeFormattingError(
                    f"Enum member {member} has value {value!r}; TypeScript enums hold strings or numbers",
                    named,
                )
            builder.add_line(f"{member} = {_literal(value, named)},")
    return builder.get_code()
