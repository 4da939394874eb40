# core/config.py
"""
invokekit Configuration Management

Holds the ExportConfiguration that controls type formatting and handles
loading it from an optional invokekit.config.json in the project root.
"""

import json
import logging
from enum import Enum
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Any, Optional

from invokekit.core.errors import ConfigError
from invokekit.core.constants import GenerationPaths


__version__ = "0.3.0"

logger = logging.getLogger(__name__)


def get_version() -> str:
    return __version__


class BigIntExportBehavior(Enum):
    """How descriptors of type bigint are rendered."""
    STRING = "string"
    NUMBER = "number"
    BIGINT = "bigint"
    FAIL = "fail"


class OptionalFieldStyle(Enum):
    """How optional object fields are rendered."""
    NULLABLE = "nullable"   # field: T | null
    OPTIONAL = "optional"   # field?: T


class EnumStyle(Enum):
    """How enum declarations are rendered."""
    UNION = "union"         # export type E = "a" | "b"
    ENUM = "enum"           # export enum E { A = "a" }


@dataclass(frozen=True)
class ExportConfiguration:
    """Type formatting options shared by every stage of an export."""
    bigint: BigIntExportBehavior = BigIntExportBehavior.FAIL
    optional_fields: OptionalFieldStyle = OptionalFieldStyle.NULLABLE
    enum_style: EnumStyle = EnumStyle.UNION
    allow_any: bool = True
    indent: int = 4

    def __post_init__(self):
        if not isinstance(self.indent, int) or isinstance(self.indent, bool) or self.indent < 0:
            raise ConfigError(f"Invalid indent: {self.indent!r}")


def load_export_config(project_root: Optional[str] = None) -> ExportConfiguration:
    """
    Load export configuration from invokekit.config.json or fall back to defaults.

    Args:
        project_root: Project root directory (defaults to current directory)

    Returns:
        ExportConfiguration loaded from file, or the default configuration
    """
    if project_root is None:
        project_root = str(Path.cwd())

    config_path = Path(project_root) / GenerationPaths.CONFIG_FILE

    if config_path.exists():
        return _load_config_from_file(config_path)

    logger.debug(f"No {GenerationPaths.CONFIG_FILE} in {project_root}, using defaults")
    return ExportConfiguration()


def _load_config_from_file(config_path: Path) -> ExportConfiguration:
    """Load configuration from existing file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {config_path}: {e}") from e

    config = validate_and_convert_config(config_data)
    logger.debug(f"Loaded invokekit config from {config_path}")
    return config


def validate_and_convert_config(config_data: Dict[str, Any]) -> ExportConfiguration:
    """Validate and convert raw config data to an ExportConfiguration."""
    if not isinstance(config_data, dict):
        raise ConfigError(f"Config must be a JSON object, got {type(config_data).__name__}")

    known_keys = {"bigint", "optionalFields", "enumStyle", "allowAny", "indent"}
    unknown = sorted(set(config_data) - known_keys)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    allow_any = config_data.get("allowAny", True)
    if not isinstance(allow_any, bool):
        raise ConfigError(f"Invalid allowAny: {allow_any!r}")

    return ExportConfiguration(
        bigint=_parse_enum(BigIntExportBehavior, config_data.get("bigint", "fail"), "bigint"),
        optional_fields=_parse_enum(
            OptionalFieldStyle, config_data.get("optionalFields", "nullable"), "optionalFields"
        ),
        enum_style=_parse_enum(EnumStyle, config_data.get("enumStyle", "union"), "enumStyle"),
        allow_any=allow_any,
        indent=config_data.get("indent", 4),
    )


def _parse_enum(enum_cls, value: Any, key: str):
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Invalid {key} '{value}' (expected one of: {choices})") from None


def config_to_dict(config: ExportConfiguration) -> Dict[str, Any]:
    """Convert ExportConfiguration to dictionary for JSON serialization."""
    return {
        "bigint": config.bigint.value,
        "optionalFields": config.optional_fields.value,
        "enumStyle": config.enum_style.value,
        "allowAny": config.allow_any,
        "indent": config.indent,
    }


def save_export_config(config: ExportConfiguration, project_root: str) -> Path:
    """Save configuration to invokekit.config.json in project_root."""
    config_path = Path(project_root) / GenerationPaths.CONFIG_FILE
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config_to_dict(config), f, indent=2, ensure_ascii=False)

    return config_path
