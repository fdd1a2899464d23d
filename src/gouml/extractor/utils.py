from __future__ import annotations

import re

# Comment delimiters inside string literals are not special-cased.
COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/|//.*")


def strip_comments(source: str) -> str:
    """Remove block and line comments, keeping every other character."""
    return COMMENT_RE.sub("", source)


def is_exported(name: str) -> bool:
    """Go exports identifiers whose first character is an upper-case letter."""
    return name[:1].isupper()


def strip_pointer(type_name: str) -> str:
    return type_name[1:] if type_name.startswith("*") else type_name
