"""
Render Context

Per-generation parameters handed to every render function: the API version
literal, the dependency versions, and the packaging selector (defaulted
from the engine) that shapes remote import paths.
"""

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from ..shared.schema import APIDependency, APIGroupVersion

if TYPE_CHECKING:
    from .module import Module


class Engine(Enum):
    """Runtime the generated module targets."""
    DENO = "deno"
    NODE = "node"

    @property
    def default_packaging(self) -> "Packaging":
        return Packaging.HOSTED if self is Engine.DENO else Packaging.BARE


class Packaging(Enum):
    """How remote packages are addressed in import statements."""
    HOSTED = "hosted"  # versioned URL
    BARE = "bare"      # scoped package specifier


class Context:
    """
    Immutable render context of one generation.

    Built once from the schema and the module being generated; all fields
    are read-only for the lifetime of the generation.
    """

    __slots__ = ("_api_version", "_dependencies", "_module", "_engine", "_packaging")

    def __init__(
        self,
        schema: APIGroupVersion,
        module: "Module",
        engine: Engine = Engine.DENO,
        packaging: Optional[Packaging] = None,
    ):
        self._api_version = schema.api_version
        self._dependencies: Mapping[str, APIDependency] = MappingProxyType(
            {dep.package: dep for dep in schema.dependencies}
        )
        self._module = module
        self._engine = engine
        self._packaging = packaging if packaging is not None else engine.default_packaging

    @property
    def api_version(self) -> str:
        return self._api_version

    @property
    def dependencies(self) -> Mapping[str, APIDependency]:
        return self._dependencies

    @property
    def module(self) -> "Module":
        return self._module

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def packaging(self) -> Packaging:
        return self._packaging

    def __repr__(self) -> str:
        return (
            f"Context(api_version={self.api_version!r}, module={self._module.path!r}, "
            f"engine={self._engine.value}, packaging={self._packaging.value})"
        )
