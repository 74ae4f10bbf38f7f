"""Naming helpers for Go code generation."""
import re


GO_KEYWORDS = {
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type", "var",
}

# Segments that Go style spells in full caps inside identifiers.
INITIALISMS = {"id", "url", "uri", "api", "http", "json", "uuid", "ip", "sql", "html"}


def to_snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return s2.replace("-", "_").lower()


def _segments(name: str) -> list:
    return [s for s in to_snake_case(name).split("_") if s]


def to_go_name(name: str) -> str:
    """Exported Go identifier for a field name: ``user_id`` -> ``UserID``."""
    parts = []
    for segment in _segments(name):
        if segment in INITIALISMS:
            parts.append(segment.upper())
        else:
            parts.append(segment[:1].upper() + segment[1:])
    return "".join(parts) or name


def to_go_var(name: str) -> str:
    """Unexported Go identifier: ``first_name`` -> ``firstName``."""
    segments = _segments(name)
    if not segments:
        return name
    head, rest = segments[0], segments[1:]
    var = head + "".join(
        s.upper() if s in INITIALISMS else s[:1].upper() + s[1:] for s in rest
    )
    if var in GO_KEYWORDS:
        return var + "Value"
    return var


def is_identifier_field(name: str) -> bool:
    return name.lower() == "id"


def to_file_stem(name: str) -> str:
    """Lower-cased file name stem, e.g. ``UserRepository`` -> ``userrepository``."""
    return name.lower()
