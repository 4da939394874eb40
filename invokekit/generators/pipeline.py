"""
invokekit Generation Pipeline

Shared rendering and writing for both output dialects. A Dialect describes
the handful of things that differ between the typed and untyped output;
everything else is one code path so the two stay in sync.
"""

import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Iterable, List, Union

from invokekit.core.constants import DO_NOT_EDIT, BridgeRuntime
from invokekit.core.config import ExportConfiguration
from invokekit.core.utils import CodeBuilder, js_doc, quote, to_lower_camel_case, is_valid_identifier
from invokekit.core.schema import CommandExport, FunctionDataType, TypeDefs, LanguageType
from invokekit.core.errors import TypeFormattingError, UpstreamModelError, StorageError
from invokekit.generators.datatypes import datatype, export_datatype


logger = logging.getLogger(__name__)

BODY_INDENT = 4


@dataclass(frozen=True)
class Dialect:
    """What differs between the typed and the untyped output."""
    language: LanguageType
    typed: bool                    # inline annotations and the type block
    synthesize_jsdoc: bool         # @param / @returns lines from the signature
    arg_separator: str             # joins names in the forwarded argument record
    ambient_declaration: str = ""  # emitted ahead of the invoke binding

    def globals(self) -> str:
        """Bridge declarations and the local invoke binding."""
        binding = BridgeRuntime.binding_statement()
        if self.ambient_declaration:
            return f"{self.ambient_declaration}\n\n{binding}"
        return binding


# === FUNCTIONS === #

def render_function(dialect: Dialect, function: FunctionDataType, cfg: ExportConfiguration) -> str:
    """Render one exported wrapper function for a command."""
    name = function.name
    name_camel = to_lower_camel_case(name)
    arg_names = [to_lower_camel_case(arg_name) for arg_name, _ in function.args]

    try:
        _check_names(function, name_camel, arg_names)

        if dialect.typed:
            arg_defs = ", ".join(
                f"{arg_name}: {datatype(cfg, arg_type)}"
                for arg_name, (_, arg_type) in zip(arg_names, function.args)
            )
        else:
            arg_defs = ", ".join(arg_names)

        ret_type = datatype(cfg, function.result)

        if dialect.synthesize_jsdoc:
            doc_lines = list(function.docs)
            for arg_name, (_, arg_type) in zip(arg_names, function.args):
                doc_lines.append(f"@param {{ {datatype(cfg, arg_type)} }} {arg_name}")
            doc_lines.append(f"@returns {{ Promise<{ret_type}> }}")
        else:
            doc_lines = list(function.docs)
    except TypeFormattingError as e:
        if e.context:
            raise
        raise e.with_context(f"command {name}") from e

    arg_usages = f", {{ {dialect.arg_separator.join(arg_names)} }}" if arg_names else ""
    invoke = BridgeRuntime.INVOKE_BINDING
    if dialect.typed:
        invoke = f"{invoke}<{ret_type}>"

    builder = CodeBuilder(indent_size=BODY_INDENT)
    with builder.add_block(f"export function {name_camel}({arg_defs}) {{"):
        builder.add_line(f"return {invoke}({quote(name)}{arg_usages})")

    return js_doc(doc_lines) + builder.get_code()


def _check_names(function: FunctionDataType, name_camel: str, arg_names: List[str]):
    """Reject names that would not declare cleanly once camel-cased."""
    if not is_valid_identifier(name_camel):
        raise TypeFormattingError(
            f"Command name {function.name!r} becomes {name_camel!r}, which is not a valid identifier", function
        )
    if name_camel == BridgeRuntime.INVOKE_BINDING:
        raise TypeFormattingError(f"Command name {function.name!r} would redeclare the {name_camel} binding", function)

    seen = {}
    for (arg_name, _), camel in zip(function.args, arg_names):
        if not is_valid_identifier(camel):
            raise TypeFormattingError(
                f"Parameter {arg_name!r} becomes {camel!r}, which is not a valid identifier", function
            )
        if camel == BridgeRuntime.INVOKE_BINDING:
            raise TypeFormattingError(f"Parameter {arg_name!r} would shadow the {camel} binding", function)
        if camel in seen:
            raise TypeFormattingError(
                f"Parameters {seen[camel]!r} and {arg_name!r} both become {camel!r}", function
            )
        seen[camel] = arg_name


def render_functions(
    dialect: Dialect,
    functions: Iterable[FunctionDataType],
    cfg: ExportConfiguration
) -> str:
    """
    Render every command in input order, separated by blank lines.

    The first formatting failure aborts the whole batch.
    """
    rendered = []
    exported = {}
    for function in functions:
        rendered.append(render_function(dialect, function, cfg))

        name_camel = to_lower_camel_case(function.name)
        if name_camel in exported:
            raise TypeFormattingError(
                f"Commands {exported[name_camel]!r} and {function.name!r} both export {name_camel!r}",
                function,
                f"command {function.name}",
            )
        exported[name_camel] = function.name

    return "\n\n".join(rendered)


# === TYPES === #

def render_types(type_map: TypeDefs, cfg: ExportConfiguration) -> str:
    """Render a declaration for every exported entry of the registry."""
    declarations = [
        export_datatype(cfg, named)
        for named in type_map.values()
        if named is not None
    ]
    return "\n".join(declarations)


# === DOCUMENT === #

def render(
    dialect: Dialect,
    functions: Iterable[FunctionDataType],
    type_map: TypeDefs,
    cfg: ExportConfiguration
) -> str:
    """Render header, globals, functions and (typed only) dependent types."""
    sections = [DO_NOT_EDIT, dialect.globals(), render_functions(dialect, functions, cfg)]

    if dialect.typed:
        sections.append(render_types(type_map, cfg))

    return "\n\n".join(section for section in sections if section) + "\n"


def write_document(export_path: Union[str, Path], content: str) -> Path:
    """Create parent directories and write content to export_path in one write."""
    export_path = Path(export_path)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        with open(export_path, 'w', encoding='utf-8', newline='') as f:
            f.write(content)
    except OSError as e:
        raise StorageError(f"Failed to write {export_path}: {e}") from e

    return export_path


def unwrap_result(result) -> CommandExport:
    """Turn a reflection result into a CommandExport or raise UpstreamModelError."""
    if isinstance(result, BaseException):
        raise UpstreamModelError(f"Command collection failed: {result}") from result
    functions, type_map = result
    return CommandExport(list(functions), dict(type_map))


def export_document(
    dialect: Dialect,
    result: CommandExport,
    cfg: ExportConfiguration,
    export_path: Union[str, Path],
    header: str
) -> Path:
    """Render everything first, then write header + document to export_path."""
    functions, type_map = unwrap_result(result)

    document = render(dialect, functions, type_map, cfg)
    written = write_document(export_path, f"{header}{document}")

    logger.debug(
        f"Exported {len(functions)} command(s) as {dialect.language.value} to {written}"
    )
    return written

