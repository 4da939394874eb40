"""
invokekit Integration

One-call API: collect commands, load the project configuration and write the
bindings file for the requested language.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from invokekit.core.schema import CommandExport, LanguageType
from invokekit.core.constants import GenerationPaths, ESLINT_DISABLE
from invokekit.core.config import ExportConfiguration, load_export_config
from invokekit.introspection.commands import collect_commands
from invokekit.generators import get_generator, normalize_language


logger = logging.getLogger(__name__)


def integrate(
    *commands: Callable,
    export_path: Optional[Union[str, Path]] = None,
    lang: Union[str, LanguageType] = LanguageType.TYPESCRIPT,
    project_root: Optional[str] = None,
    config: Optional[ExportConfiguration] = None,
    header: Optional[str] = None,
    verbose: bool = False,
) -> Path:
    """
    Generate bindings for Python commands and write them to disk.

    Args:
        *commands: Command callables, emitted in the given order
        export_path: Destination file (defaults to bindings.ts / bindings.js
            in project_root)
        lang: "typescript" / "ts" or "javascript" / "js"
        project_root: Project root directory (defaults to current directory);
            used for invokekit.config.json and the type export boundary
        config: ExportConfiguration overriding the config file
        header: Banner written ahead of the document (defaults to eslint-disable)
        verbose: Enable detailed logging output

    Returns:
        Path of the written file

    Raises:
        CollectionError: If a command cannot be described
        ConfigError: If the language or config file is invalid
        TypeFormattingError: If a type cannot be rendered
        StorageError: If the file cannot be written
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')

    if project_root is None:
        project_root = str(Path.cwd().resolve())
    else:
        project_root = str(Path(project_root).resolve())

    language = normalize_language(lang)
    if config is None:
        config = load_export_config(project_root)

    if export_path is None:
        file_name = (
            GenerationPaths.TYPESCRIPT_BINDINGS if language.is_typed
            else GenerationPaths.JAVASCRIPT_BINDINGS
        )
        export_path = Path(project_root) / file_name

    logger.info("Starting invokekit export")
    logger.debug(f"Project root: {project_root}")
    logger.debug(f"Language: {language.value}")

    result = collect_commands(*commands, project_root=project_root)
    generator = get_generator(language)

    return generator.export_with_cfg_with_header(
        result,
        config,
        export_path,
        ESLINT_DISABLE if header is None else header,
    )


def generate_only(
    result: CommandExport,
    lang: Union[str, LanguageType] = LanguageType.TYPESCRIPT,
    config: Optional[ExportConfiguration] = None,
) -> str:
    """Render the bindings document for a collected result without writing it."""
    language = normalize_language(lang)
    config = config or ExportConfiguration()
    functions, type_map = result

    if language.is_typed:
        return get_generator(language).render(functions, type_map, config)
    return get_generator(language).render(functions, config)
