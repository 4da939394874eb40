"""
invokekit - Typed client bindings for commands exposed over a webview invoke bridge
"""

def _check_dependencies():
    """Check for required dependencies"""
    try:
        import pydantic
    except ImportError:
        raise ImportError(
            "invokekit requires pydantic to be installed.\n"
            "Install with: pip install pydantic"
        ) from None

# Check dependencies on import
_check_dependencies()

# Import main API only after dependency check
from .core.config import (
    get_version,
    load_export_config,
    ExportConfiguration,
    BigIntExportBehavior,
    OptionalFieldStyle,
    EnumStyle,
)
from .core.errors import (
    ExportError,
    ConfigError,
    StorageError,
    CollectionError,
    UpstreamModelError,
    TypeFormattingError,
)
from .core.schema import BigInt, LanguageType, CommandExport, FunctionDataType
from .core.integrator import integrate, generate_only
from .introspection import command, collect_commands, try_collect_commands
from .generators import typescript, javascript

__version__ = get_version()

__all__ = [
    # Main functions
    'integrate',
    'generate_only',
    'command',
    'collect_commands',
    'try_collect_commands',

    # Generators
    'typescript',
    'javascript',

    # Configuration
    'load_export_config',
    'ExportConfiguration',
    'BigIntExportBehavior',
    'OptionalFieldStyle',
    'EnumStyle',

    # Model
    'BigInt',
    'LanguageType',
    'CommandExport',
    'FunctionDataType',

    # Errors
    'ExportError',
    'ConfigError',
    'StorageError',
    'CollectionError',
    'UpstreamModelError',
    'TypeFormattingError',

    # Version
    '__version__'
]
