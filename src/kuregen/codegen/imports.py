"""
Import Table

Deduplicates the external symbols a module refers to, keyed by source
identity (module URN) and member name, and renders them as a grouped,
sorted import block.

Paths are computed per render from the context, since the same source maps
to a URL under hosted packaging and to a package specifier under bare
packaging.
"""

import json
import logging
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional

from ..shared.errors import ImportInvariantError, PhaseError, UnresolvedNameError
from ..utils.config import (
    BARE_SCOPE_PREFIX,
    HOSTED_BASE_URL,
    HOSTED_ENTRY_STEM,
    LIB_VERSION,
    LOCAL_SOURCE_ROOT,
    MODULE_FILE_EXTENSION,
    MODULE_URN_PREFIX,
    MODULE_URN_SEPARATOR,
    SENTINEL_API_PACKAGE,
)
from .context import Context, Packaging
from .names import Binding, Name, NameUsage

if TYPE_CHECKING:
    from .module import Module

logger = logging.getLogger(__name__)


class SourceKind(Enum):
    API = "api"      # generated API package, versioned by the schema's dependencies
    LIB = "lib"      # support library, fixed version
    LOCAL = "local"  # another module of the package being generated


@dataclass(frozen=True)
class ImportSource:
    """
    Where imported members come from.

    For remote kinds ``name`` is the package and ``path`` an optional module
    inside it; for local sources ``name`` is the module path relative to the
    package root.
    """
    kind: SourceKind
    name: str
    path: Optional[str] = None

    @classmethod
    def api(cls, package: str, path: Optional[str] = None) -> "ImportSource":
        return cls(SourceKind.API, package, path)

    @classmethod
    def lib(cls, package: str, path: Optional[str] = None) -> "ImportSource":
        return cls(SourceKind.LIB, package, path)

    @classmethod
    def local(cls, path: str) -> "ImportSource":
        return cls(SourceKind.LOCAL, path)

    @property
    def is_local(self) -> bool:
        return self.kind is SourceKind.LOCAL

    @property
    def urn(self) -> str:
        """Identity key: ``kure:<kind>:<package>[:<path>]`` or ``/<path>``."""
        if self.is_local:
            return f"/{self.name}"
        parts = [MODULE_URN_PREFIX, self.kind.value, self.name]
        if self.path:
            parts.append(self.path)
        return MODULE_URN_SEPARATOR.join(parts)


class Import:
    """One imported member of one source."""

    def __init__(self, member: str, alias: Optional[str] = None, type_only: bool = False):
        self.member = member
        self.alias = alias or None
        self.type_only = type_only
        self._name: Optional[Name] = None

    def merge(self, alias: Optional[str] = None, type_only: bool = False) -> None:
        if self.type_only and not type_only:
            self.type_only = False
        if not self.alias and alias:
            self.alias = alias

    def apply(self, module: "Module") -> None:
        self._name = module.names.add(self.alias or self.member, NameUsage.IMPORT)

    def token(self) -> str:
        if self._name is None:
            raise UnresolvedNameError(f"import of {self.member!r} not yet named")
        return self._name.token()

    @property
    def binding(self) -> Binding:
        return Binding(self.token, self.member)

    def render(self, in_type_import: bool = False) -> str:
        if in_type_import and not self.type_only:
            raise ImportInvariantError(f"cannot import value {self.member!r} via `import type`")

        name = self.token()
        clause = f"{self.member} as {name}" if name != self.member else name
        if self.type_only and not in_type_import:
            return f"type {clause}"
        return clause

    def __repr__(self) -> str:
        kind = "type" if self.type_only else "value"
        return f"Import({self.member!r}, alias={self.alias!r}, {kind})"


@dataclass
class ImportedModule:
    source: ImportSource
    members: Dict[str, Import] = field(default_factory=dict)


class Imports:
    """
    Import table of one module.

    Collects demand during the apply pass of the other members, then runs
    its own apply last to register one identifier per imported member.
    """

    def __init__(self):
        self._modules: Dict[str, ImportedModule] = {}
        self._applied = False

    def use(
        self,
        source: ImportSource,
        member: str,
        alias: Optional[str] = None,
        type_only: bool = False,
    ) -> Import:
        if self._applied:
            raise PhaseError(f"cannot import {member!r} from {source.urn} after imports were applied")

        imported = self._modules.get(source.urn)
        if imported is None:
            imported = self._modules[source.urn] = ImportedModule(source)

        existing = imported.members.get(member)
        if existing is None:
            existing = imported.members[member] = Import(member, alias=alias, type_only=type_only)
        else:
            existing.merge(alias=alias, type_only=type_only)
        return existing

    def apply(self, module: "Module") -> None:
        # Sorted so that colliding members get suffixes by source, not by first use.
        for urn in sorted(self._modules):
            members = self._modules[urn].members
            for member in sorted(members):
                members[member].apply(module)
        self._applied = True

    def render(self, ctx: Context) -> str:
        paths: Dict[str, str] = {}
        remote: List[str] = []
        local: List[str] = []

        for urn, imported in self._modules.items():
            paths[urn] = self.path(imported.source, ctx)
            (local if imported.source.is_local else remote).append(urn)

        groups = [sorted(group, key=lambda urn: (paths[urn], urn)) for group in (remote, local) if group]
        return "\n\n".join(
            "\n".join(self._render_statement(urn, paths[urn]) for urn in group)
            for group in groups
        )

    def _render_statement(self, urn: str, path: str) -> str:
        members = self._modules[urn].members
        imports = [members[member] for member in sorted(members)]

        if all(imp.type_only for imp in imports):
            clauses = ", ".join(imp.render(in_type_import=True) for imp in imports)
            statement = f"import type {{ {clauses} }}"
        else:
            clauses = ", ".join(imp.render() for imp in imports)
            statement = f"import {{ {clauses} }}"

        return f"{statement} from {json.dumps(path)};"

    def path(self, source: ImportSource, ctx: Context) -> str:
        """Import path of ``source`` as seen from the module being rendered."""
        if source.is_local:
            return _local_path(source, ctx.module.path)

        package = source.name
        version: Optional[str]
        if source.kind is SourceKind.API:
            dependency = ctx.dependencies.get(package)
            version = dependency.version if dependency is not None else None
            if version is None and package != SENTINEL_API_PACKAGE:
                logger.warning(f"No dependency version for API package {package!r}; importing it unversioned")
        else:
            version = LIB_VERSION

        path = source.path

        if ctx.packaging is Packaging.HOSTED:
            if source.kind is SourceKind.API and package == SENTINEL_API_PACKAGE and version:
                package = ""
            target = f"{package}@{version}" if version else package
            entry = path or f"{HOSTED_ENTRY_STEM}{MODULE_FILE_EXTENSION}"
            return f"{HOSTED_BASE_URL}/{source.kind.value}/{target}/{entry}"

        specifier = f"{BARE_SCOPE_PREFIX}{source.kind.value}/{package.replace('/', '-')}"
        return f"{specifier}/{path}" if path else specifier

    def __len__(self) -> int:
        return sum(len(imported.members) for imported in self._modules.values())


def _local_path(source: ImportSource, importer: str) -> str:
    here = posixpath.join(LOCAL_SOURCE_ROOT, posixpath.dirname(importer))
    dest = posixpath.join(LOCAL_SOURCE_ROOT, source.name)

    directory = posixpath.relpath(posixpath.dirname(dest), here)
    if not directory.startswith("."):
        directory = f"./{directory}"
    return f"{directory}/{posixpath.basename(dest)}"

