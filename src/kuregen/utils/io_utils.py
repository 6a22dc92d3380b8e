"""
Centralized file I/O utilities.

- Single place for encoding
- Use Path.read_text()/write_text() consistently (no raw open/read)
"""

import json
from pathlib import Path
from typing import Any, Iterator, Union

from .config import DEFAULT_FILE_ENCODING, SCHEMA_FILE_EXTENSION


def read_schema_file(path: Union[Path, str]) -> Any:
    """Read and decode a JSON schema file."""
    p = Path(path) if not isinstance(path, Path) else path
    return json.loads(p.read_text(encoding=DEFAULT_FILE_ENCODING))


def write_module_file(path: Union[Path, str], contents: str) -> None:
    """Write generated text with standard encoding and a trailing newline."""
    p = Path(path) if not isinstance(path, Path) else path
    p.write_text(contents + "\n", encoding=DEFAULT_FILE_ENCODING)


def iter_schema_files(source: Union[Path, str]) -> Iterator[Path]:
    """``source`` itself if it is a file, else every ``*.json`` below it in sorted order."""
    p = Path(source) if not isinstance(source, Path) else source
    if not p.is_dir():
        yield p
        return
    for entry in sorted(p.rglob(f"*{SCHEMA_FILE_EXTENSION}")):
        if entry.is_file():
            yield entry
