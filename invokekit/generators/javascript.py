"""
JavaScript bindings for backend commands.

Same surface as the TypeScript generator. Types only appear as JSDoc hints,
so the dependent type registry is accepted but not rendered.
"""

from pathlib import Path
from typing import Iterable, Optional, Union

from invokekit.core.constants import ESLINT_DISABLE
from invokekit.core.config import ExportConfiguration
from invokekit.core.schema import CommandExport, FunctionDataType, LanguageType
from invokekit.generators import pipeline


DIALECT = pipeline.Dialect(
    language=LanguageType.JAVASCRIPT,
    typed=False,
    synthesize_jsdoc=True,
    arg_separator=",",
)


def globals() -> str:
    """Constants that the generated functions rely on."""
    return DIALECT.globals()


def render_functions(functions: Iterable[FunctionDataType], cfg: ExportConfiguration) -> str:
    """Render a collection of commands into JavaScript functions with JSDoc."""
    return pipeline.render_functions(DIALECT, functions, cfg)


def render(functions: Iterable[FunctionDataType], cfg: ExportConfiguration) -> str:
    """Render globals and functions into a JavaScript string."""
    return pipeline.render(DIALECT, functions, {}, cfg)


def export(result: Union[CommandExport, BaseException], export_path: Union[str, Path]) -> Path:
    """Export a reflection result (or the exception it raised) into a JavaScript file."""
    return export_with_cfg_with_header(result, ExportConfiguration(), export_path, ESLINT_DISABLE)


def export_with_cfg(
    result: CommandExport,
    cfg: ExportConfiguration,
    export_path: Union[str, Path]
) -> Path:
    """Export into a JavaScript file using a custom ExportConfiguration."""
    return export_with_cfg_with_header(result, cfg, export_path, ESLINT_DISABLE)


def export_with_cfg_with_header(
    result: CommandExport,
    cfg: ExportConfiguration,
    export_path: Union[str, Path],
    header: Optional[str] = None
) -> Path:
    """Export into a JavaScript file with a custom configuration and banner."""
    if header is None:
        header = ESLINT_DISABLE
    return pipeline.export_document(DIALECT, result, cfg, export_path, header)


__all__ = [
    'globals',
    'render',
    'render_functions',
    'export',
    'export_with_cfg',
    'export_with_cfg_with_header',
]
