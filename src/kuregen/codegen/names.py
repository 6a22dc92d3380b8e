"""
Identifier Table

Every identifier a generated module declares or imports is registered here
during the apply pass. Spellings are decided in one go by ``resolve()``,
after all demand is known:

- names are grouped by the identifier they asked for
- declarations sort before imports (stable within a usage)
- the 1st keeps the identifier, the 2nd becomes ``<id>_``, the i-th ``<id>_<i>``

Declarations come from schema definition names, which are unique, so a
declaration is always first in its group and never renamed.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from ..shared.errors import (
    DuplicateDeclarationError,
    PhaseError,
    UndeclaredNameError,
    UnresolvedNameError,
)

logger = logging.getLogger(__name__)


class NameUsage(Enum):
    """How a module uses an identifier. Value is the resolution weight."""
    DECLARATION = 0
    IMPORT = 1


class Name:
    """One registration of an identifier; spelling is fixed by ``resolve``."""

    def __init__(self, declared: str, usage: NameUsage):
        self.declared = declared
        self.usage = usage
        self._resolved: Optional[str] = None

    @property
    def weight(self) -> int:
        return self.usage.value

    def conflicts_with(self, usage: NameUsage) -> bool:
        return self.usage is NameUsage.DECLARATION and usage is NameUsage.DECLARATION

    def resolve(self, spelling: Optional[str]) -> None:
        if self._resolved is not None:
            raise PhaseError(f"name {self.declared!r} already resolved as {self._resolved!r}")
        self._resolved = spelling if spelling is not None else self.declared

    def token(self) -> str:
        if self._resolved is None:
            raise UnresolvedNameError(f"name {self.declared!r} not yet resolved")
        return self._resolved

    @property
    def binding(self) -> "Binding":
        return Binding(self.token, self.declared)

    def __repr__(self) -> str:
        return f"Name({self.declared!r}, {self.usage.name.lower()}, resolved={self._resolved!r})"


class Binding:
    """
    Deferred handle to a final identifier spelling.

    Returned while a module is being applied; calling it yields the resolved
    spelling, or raises ``UnresolvedNameError`` (or ``UndeclaredNameError``
    for a lookup of a name nothing declared) if called before resolution.
    """

    def __init__(self, resolve, describe: str):
        self._resolve = resolve
        self.describe = describe

    def __call__(self) -> str:
        return self._resolve()

    def __repr__(self) -> str:
        return f"Binding({self.describe!r})"


class Names:
    """Identifier table of one module."""

    def __init__(self):
        self._bound: Dict[str, List[Name]] = {}
        self._resolved = False

    def add(self, identifier: str, usage: NameUsage) -> Name:
        if self._resolved:
            raise PhaseError(f"cannot add name {identifier!r} after names were resolved")

        names = self._bound.setdefault(identifier, [])
        if any(name.conflicts_with(usage) for name in names):
            raise DuplicateDeclarationError(f"duplicate declaration of {identifier!r}")

        name = Name(identifier, usage)
        names.append(name)
        return name

    def get_declared(self, identifier: str) -> Name:
        """Declaration of ``identifier`` in this module (imports are not considered)."""
        for name in self._bound.get(identifier, ()):
            if name.usage is NameUsage.DECLARATION:
                return name
        raise UndeclaredNameError(f"name {identifier!r} not declared in module")

    def resolve(self) -> None:
        if self._resolved:
            raise PhaseError("names already resolved")

        for identifier, names in self._bound.items():
            names.sort(key=lambda name: name.weight)
            for i, name in enumerate(names):
                if i == 0:
                    name.resolve(None)
                elif i == 1:
                    name.resolve(f"{identifier}_")
                else:
                    name.resolve(f"{identifier}_{i}")
                if i > 0:
                    logger.debug(f"Renamed {name.usage.name.lower()} {identifier!r} to {name.token()!r}")

        self._resolved = True

    def __len__(self) -> int:
        return sum(len(names) for names in self._bound.values())
