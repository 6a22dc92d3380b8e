"""
Code generation: type compiler, definition generators and the module
assembly engine (identifier table, import table, phases).
"""

from .context import Context, Engine, Packaging
from .names import Binding, Name, Names, NameUsage
from .imports import Import, Imports, ImportSource, SourceKind
from .module import Module, Phase, Generator, Renderer
from .type_compiler import TypeCompiler
from .definitions import DefinitionCompiler, api_version

__all__ = [
    "Context", "Engine", "Packaging",
    "Binding", "Name", "Names", "NameUsage",
    "Import", "Imports", "ImportSource", "SourceKind",
    "Module", "Phase", "Generator", "Renderer",
    "TypeCompiler", "DefinitionCompiler", "api_version",
]
