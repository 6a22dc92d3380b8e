"""
Error Reporting

Schema errors (bad input, reported to the user) and implementation errors
(broken generator invariants, propagated as bugs).
"""

import os
import sys
from typing import List, Optional

from ..utils.config import COLOR_ENV
from .schema_location import SchemaLocation


# ---------------------------------------------------------------------------
# ANSI color helpers (disabled when NO_COLOR is set)
# ---------------------------------------------------------------------------

def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    explicit = os.environ.get(COLOR_ENV, "").lower()
    if explicit in ("0", "false", "no", "never"):
        return False
    return sys.stderr.isatty()

_BOLD   = "\033[1m"
_RED    = "\033[31m"
_BLUE   = "\033[34m"
_RESET  = "\033[0m"

def _style(text: str, *codes: str, color: bool = True) -> str:
    if not color:
        return text
    prefix = "".join(codes)
    return f"{prefix}{text}{_RESET}" if prefix else text


# ============================================================================
# Exception Classes
# ============================================================================

class KuregenError(Exception):
    """Base exception for all errors caused by schema input"""
    default_code = "E0001"

    def __init__(
        self,
        message: str,
        location: Optional[SchemaLocation] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.location = location
        self.error_code = error_code or self.default_code

    def format(self, color: bool = False) -> str:
        out = [
            _style(f"error[{self.error_code}]", _BOLD, _RED, color=color)
            + _style(f": {self.message}", _BOLD, color=color)
        ]
        if self.location is not None:
            out.append(_style(" --> ", _BOLD, _BLUE, color=color) + str(self.location))
        return "\n".join(out)

    def __str__(self):
        return self.format(color=False)


class SchemaError(KuregenError):
    """
    Schema cannot be generated as given.

    Use this for ANY problem in the schema document itself:
    - resource definitions without a usable metadata property
    - resource types nested inside other types
    - two definitions with the same name
    - malformed schema values handed to the loader
    """


class ResourceMetadataError(SchemaError):
    default_code = "E0101"


class NestedResourceError(SchemaError):
    default_code = "E0102"


class DuplicateDeclarationError(SchemaError):
    default_code = "E0103"


class SchemaFormatError(SchemaError):
    default_code = "E0104"


class KuregenImplementationError(Exception):
    """
    Error in the generator itself (not in the user's schema).

    Use this for internal invariant violations:
    - reading a binding before names are resolved
    - referencing a name that nothing declared
    - driving a module through its phases out of order

    Never use this for errors in the schema - use SchemaError instead.
    """
    default_code = "E9999"

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class UnresolvedNameError(KuregenImplementationError):
    default_code = "E9001"


class UndeclaredNameError(KuregenImplementationError):
    default_code = "E9002"


class ImportInvariantError(KuregenImplementationError):
    default_code = "E9003"


class PhaseError(KuregenImplementationError):
    default_code = "E9004"


# ---------------------------------------------------------------------------
# ErrorReporter
# ---------------------------------------------------------------------------

class ErrorReporter:
    """Collects schema errors over a batch of files and formats them together."""

    def __init__(self):
        self.errors: List[KuregenError] = []

    def report(self, error: KuregenError) -> None:
        self.errors.append(error)

    def format_error(self, error: KuregenError, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        return error.format(color=use_color)

    def format_all_errors(self, color: Optional[bool] = None) -> str:
        use_color = color if color is not None else _use_color()
        parts = [self.format_error(e, color=use_color) for e in self.errors]
        count = len(self.errors)
        summary = f"aborting due to {count} previous error{'s' if count != 1 else ''}"
        parts.append(
            _style("error", _BOLD, _RED, color=use_color)
            + _style(f": {summary}", _BOLD, color=use_color)
        )
        return "\n\n".join(parts)

    def has_errors(self) -> bool:
        return len(self.errors) > 0
