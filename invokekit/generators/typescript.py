"""
TypeScript bindings for backend commands.

Building blocks (globals, render_functions, render) are available for
advanced use where the output is combined with other generated code; the
export functions render and write a complete bindings file.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from invokekit.core.constants import ESLINT_DISABLE, BridgeRuntime
from invokekit.core.config import ExportConfiguration
from invokekit.core.schema import CommandExport, FunctionDataType, TypeDefs, LanguageType
from invokekit.generators import pipeline
from invokekit.generators.datatypes import datatype, export_datatype


AMBIENT_DECLARATION = f"""declare global {{
    interface Window {{
        {BridgeRuntime.INVOKE_GLOBAL}<T>(cmd: string, args?: Record<string, unknown>): Promise<T>;
    }}
}}"""

DIALECT = pipeline.Dialect(
    language=LanguageType.TYPESCRIPT,
    typed=True,
    synthesize_jsdoc=False,
    arg_separator=", ",
    ambient_declaration=AMBIENT_DECLARATION,
)


def globals() -> str:
    """Type declarations and constants the generated functions rely on."""
    return DIALECT.globals()


def render_functions(functions: Iterable[FunctionDataType], cfg: ExportConfiguration) -> str:
    """Render a collection of commands into TypeScript functions."""
    return pipeline.render_functions(DIALECT, functions, cfg)


def render_types(type_map: TypeDefs, cfg: ExportConfiguration) -> str:
    """Render every exported type the commands depend on."""
    return pipeline.render_types(type_map, cfg)


def render(functions: Iterable[FunctionDataType], type_map: TypeDefs, cfg: ExportConfiguration) -> str:
    """Render globals, functions and all dependent types into a TypeScript string."""
    return pipeline.render(DIALECT, functions, type_map, cfg)


def export(result: Union[CommandExport, BaseException], export_path: Union[str, Path]) -> Path:
    """
    Export the output of render for a reflection result into a TypeScript file.

    Args:
        result: CommandExport from collect_commands, or the exception the
            collection step raised
        export_path: Destination file, parent directories are created

    Raises:
        UpstreamModelError: If result is an exception; nothing is written
        TypeFormattingError: If a type cannot be rendered; nothing is written
        StorageError: If the directory or file cannot be written
    """
    return export_with_cfg_with_header(result, ExportConfiguration(), export_path, ESLINT_DISABLE)


def export_with_cfg(
    result: CommandExport,
    cfg: ExportConfiguration,
    export_path: Union[str, Path]
) -> Path:
    """Export into a TypeScript file using a custom ExportConfiguration."""
    return export_with_cfg_with_header(result, cfg, export_path, ESLINT_DISABLE)


def export_with_cfg_with_header(
    result: CommandExport,
    cfg: ExportConfiguration,
    export_path: Union[str, Path],
    header: Optional[str] = None
) -> Path:
    """Export into a TypeScript file with a custom configuration and banner."""
    if header is None:
        header = ESLINT_DISABLE
    return pipeline.export_document(DIALECT, result, cfg, export_path, header)


__all__ = [
    'globals',
    'render',
    'render_types',
    'render_functions',
    'export',
    'export_with_cfg',
    'export_with_cfg_with_header',
    'datatype',
    'export_datatype',
]
