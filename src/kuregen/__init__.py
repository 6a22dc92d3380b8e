"""
kuregen: TypeScript type declarations from kure API schemas.
"""

from .codegen.context import Engine, Packaging
from .compiler.driver import CodegenDriver, emit_version
from .frontend.loader import is_api_group_version, load_schema

__version__ = "0.1.0"

__all__ = [
    "CodegenDriver",
    "Engine",
    "Packaging",
    "emit_version",
    "is_api_group_version",
    "load_schema",
]
