"""
Module Assembler

Owns one generated module: its identifier table, its import table and the
ordered members that produce its declarations. ``render`` drives the module
through its phases exactly once:

    CREATED -> APPLYING -> RESOLVING -> RENDERING -> DONE

APPLYING   every member registers the names and imports it needs
           (members in declaration order, the import table last)
RESOLVING  the identifier table fixes every spelling
RENDERING  import block first, then members, blank-line joined

A failure in any phase leaves the module FAILED and no text is returned.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Union

from typing_extensions import Protocol, TypeAlias

from ..shared.errors import PhaseError
from .context import Context
from .imports import Imports, ImportSource
from .names import Binding, Names, NameUsage

logger = logging.getLogger(__name__)


class Phase(Enum):
    CREATED = "created"
    APPLYING = "applying"
    RESOLVING = "resolving"
    RENDERING = "rendering"
    DONE = "done"
    FAILED = "failed"


class Member(Protocol):
    """A part of a module that takes part in both passes."""

    def apply(self, module: "Module") -> None: ...

    def render(self, ctx: Context) -> str: ...


Renderer: TypeAlias = Callable[[Context], str]
Generator: TypeAlias = Callable[["Module"], Renderer]


class GeneratorMember:
    """Adapts a two-stage generator function to the member protocol."""

    def __init__(self, generator: Generator):
        self._generator = generator
        self._renderer: Optional[Renderer] = None

    def apply(self, module: "Module") -> None:
        self._renderer = self._generator(module)

    def render(self, ctx: Context) -> str:
        if self._renderer is None:
            raise PhaseError("apply() was not called")
        return self._renderer(ctx)


class Module:
    """One output module; generates exactly one text and is then discarded."""

    def __init__(self, path: str):
        self.path = path
        self.names = Names()
        self.imports = Imports()
        self._members: List[Member] = []
        self._phase = Phase.CREATED

    @property
    def phase(self) -> Phase:
        return self._phase

    def add(self, member: Union[Member, Generator]) -> None:
        if self._phase is not Phase.CREATED:
            raise PhaseError(f"cannot add members to module {self.path!r} in phase {self._phase.value}")
        if not hasattr(member, "apply"):
            member = GeneratorMember(member)
        self._members.append(member)

    # -- apply-time registration ---------------------------------------------

    def name(self, identifier: str, usage: NameUsage = NameUsage.DECLARATION) -> Binding:
        """Register ``identifier`` and return the binding to its final spelling."""
        self._expect(Phase.APPLYING, f"name {identifier!r}")
        return self.names.add(identifier, usage).binding

    def get(self, identifier: str) -> Binding:
        """Binding to the declaration of ``identifier`` in this module, looked up at render time."""
        return Binding(lambda: self.names.get_declared(identifier).token(), identifier)

    def import_(
        self,
        source: ImportSource,
        member: str,
        alias: Optional[str] = None,
        type_only: bool = False,
    ) -> Binding:
        self._expect(Phase.APPLYING, f"import of {member!r}")
        return self.imports.use(source, member, alias=alias, type_only=type_only).binding

    # -- phases --------------------------------------------------------------

    def render(self, ctx: Context) -> str:
        self._expect(Phase.CREATED, "render")
        try:
            self._phase = Phase.APPLYING
            for member in self._members:
                member.apply(self)
            self.imports.apply(self)

            self._phase = Phase.RESOLVING
            self.names.resolve()
            logger.debug(
                f"Module {self.path}: {len(self._members)} members, "
                f"{len(self.imports)} imports, {len(self.names)} names"
            )

            self._phase = Phase.RENDERING
            source = [self.imports.render(ctx)]
            source.extend(member.render(ctx) for member in self._members)
        except BaseException:
            self._phase = Phase.FAILED
            raise

        self._phase = Phase.DONE
        return "\n\n".join(fragment for fragment in source if fragment)

    def _expect(self, phase: Phase, action: str) -> None:
        if self._phase is not phase:
            raise PhaseError(
                f"{action} in module {self.path!r} requires phase {phase.value}, "
                f"module is {self._phase.value}"
            )
