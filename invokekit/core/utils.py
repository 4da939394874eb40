"""
Shared naming and formatting helpers for code generation.
"""

import re
from typing import Iterable, List


_SEPARATORS = re.compile(r"[\W_]+")

# Not usable as a binding name in an ES module (strict mode)
RESERVED_WORDS = frozenset({
    "await", "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "implements", "import", "in",
    "instanceof", "interface", "let", "new", "null", "package", "private",
    "protected", "public", "return", "static", "super", "switch", "this",
    "throw", "true", "try", "typeof", "var", "void", "while", "with", "yield",
    "arguments", "eval",
})


# === NAMING === #

def split_words(name: str) -> List[str]:
    """
    Split an identifier into words on separators and case boundaries.

    Any Unicode letter is part of a word. Digits never start a word; they
    stay attached to the letters before them.

    Examples:
        "get_user" -> ["get", "user"]
        "HTTPRequest" -> ["HTTP", "Request"]
        "get_2fa_code" -> ["get", "2fa", "code"]
        "userID2" -> ["user", "ID2"]
    """
    words = []
    for chunk in _SEPARATORS.split(name):
        if chunk:
            words.extend(_split_case(chunk))
    return words


def _split_case(chunk: str) -> List[str]:
    words = []
    start = 0
    previous = None  # case of the last cased character

    for i, char in enumerate(chunk):
        if char.isupper():
            following = chunk[i + 1:i + 2]
            # "userId" splits before I, "HTTPRequest" splits before R
            if i > start and (previous == "lower" or (previous == "upper" and following.islower())):
                words.append(chunk[start:i])
                start = i
            previous = "upper"
        elif char.islower():
            previous = "lower"

    words.append(chunk[start:])
    return words


def to_lower_camel_case(name: str) -> str:
    """Convert snake_case, kebab-case or PascalCase to lowerCamelCase."""
    words = split_words(name)
    if not words:
        return ""
    first, rest = words[0], words[1:]
    return first.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)


def is_valid_identifier(name: str) -> bool:
    """True when name can be declared as a function or parameter name."""
    return name.isidentifier() and name not in RESERVED_WORDS


# === ESCAPING === #

def escape_string_literal(value: str) -> str:
    """Escape a value for use inside a double-quoted string literal."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )


def quote(value: str) -> str:
    return f'"{escape_string_literal(value)}"'


def js_doc(lines: Iterable[str]) -> str:
    """
    Render documentation lines as a JSDoc block followed by a newline.

    Returns an empty string when there are no lines so callers can prepend
    the result unconditionally.
    """
    lines = list(lines)
    if not lines:
        return ""

    builder = ["/** "]
    for line in lines:
        line = line.replace("*/", "*\\/")
        builder.append(f"\n * {line}" if line else "\n *")
    builder.append("\n */\n")
    return "".join(builder)


# === CODE BUILDING === #

class CodeBuilder:
    """Helper for building indented code with automatic indent management."""

    def __init__(self, indent_size: int = 4):
        self.lines = []
        self.indent_level = 0
        self.indent_size = indent_size

    def add_line(self, line: str = ""):
        """Add line with current indentation."""
        if line.strip():  # Only indent non-empty lines
            indented = " " * (self.indent_level * self.indent_size) + line
            self.lines.append(indented)
        else:
            self.lines.append("")

    def add_lines(self, lines: Iterable[str]):
        for line in lines:
            self.add_line(line)

    def indent(self):
        self.indent_level += 1

    def dedent(self):
        self.indent_level = max(0, self.indent_level - 1)

    def add_block(self, opening: str, closing: str = "}"):
        """Context manager for blocks like { ... }."""
        return BlockContext(self, opening, closing)

    def get_code(self) -> str:
        return "\n".join(self.lines)


class BlockContext:
    """Context manager for automatic block indentation."""

    def __init__(self, builder: CodeBuilder, opening: str, closing: str):
        self.builder = builder
        self.closing = closing
        self.builder.add_line(opening)
        self.builder.indent()

    def __enter__(self):
        return self.builder

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.builder.dedent()
        self.builder.add_line(self.closing)
        return None
