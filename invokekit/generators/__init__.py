"""
invokekit code generators - one module per output dialect
"""

from typing import Union

from invokekit.core.errors import ConfigError
from invokekit.core.schema import LanguageType
from invokekit.generators import typescript, javascript


def normalize_language(lang: Union[str, LanguageType]) -> LanguageType:
    """Normalize a language name or alias to its canonical LanguageType."""
    if isinstance(lang, LanguageType):
        lang = lang.value

    lang_lower = str(lang).lower()
    if lang_lower in ("ts", "typescript"):
        return LanguageType.TYPESCRIPT
    if lang_lower in ("js", "javascript"):
        return LanguageType.JAVASCRIPT

    valid_langs = ["ts", "typescript", "js", "javascript"]
    raise ConfigError(f"Unsupported language '{lang}'. Supported: {', '.join(valid_langs)}")


def get_generator(lang: Union[str, LanguageType]):
    """Return the generator module for a language."""
    if normalize_language(lang) == LanguageType.TYPESCRIPT:
        return typescript
    return javascript


__all__ = [
    'typescript',
    'javascript',
    'get_generator',
    'normalize_language',
]
