"""Target-language lexical helpers: literals, property keys and doc blocks."""

import json
import re
from typing import Optional, Union

from typing_extensions import Protocol

_IDENTIFIER = re.compile(r"[A-Za-z][A-Za-z0-9_]*")
_COMMENT_END = "*/"
_ESCAPED_COMMENT_END = "*\\/"


class Documented(Protocol):
    description: Optional[str]
    deprecated: bool


def lit(value: Union[str, int, float, bool]) -> str:
    """Literal in target syntax (JSON spelling, non-ASCII kept as is)."""
    return json.dumps(value, ensure_ascii=False)


def property_key(name: str) -> str:
    """Object key: bare when a plain identifier, quoted otherwise."""
    return name if _IDENTIFIER.fullmatch(name) else lit(name)


def doc(meta: Documented, indent: int = 0) -> str:
    """
    Doc block for a definition or property, or "" when there is nothing to say.

    The description is kept verbatim, one comment line per source line, with
    ``*/`` escaped so it cannot close the comment early. Deprecated entries
    get a trailing ``@deprecated`` tag.
    """
    lines = meta.description.rstrip().split("\n") if meta.description else []
    if meta.deprecated:
        lines.append("@deprecated")
    if not lines:
        return ""

    prefix = "  " * indent
    body = "".join(f"{prefix} * {line.replace(_COMMENT_END, _ESCAPED_COMMENT_END)}\n" for line in lines)
    return f"{prefix}/**\n{body}{prefix} */\n"
