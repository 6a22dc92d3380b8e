"""
Schema Model

The immutable input of a generation: an API group version with its
dependencies and ordered definitions, plus the closed type algebra those
definitions are written in.

Every value here is a frozen dataclass, so a loaded schema can be shared by
any number of concurrent generations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from typing_extensions import TypeAlias

from ..utils.config import DEFAULT_RESOURCE_SCOPE, MODULE_FILE_EXTENSION


class TypeKind(Enum):
    """Type tag, as spelled by the "type" field of a schema document."""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ARRAY = "array"
    MAP = "map"
    OBJECT = "object"
    UNION = "union"
    OPTIONAL = "optional"
    REFERENCE = "reference"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


# ---------------------------------------------------------------------------
# API group identity
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class APIGroupIdentifier:
    """Group name (e.g. "apps") and module directory the group is emitted into."""
    name: Optional[str] = None
    module: Optional[str] = None


@dataclass(frozen=True)
class APIDependency:
    package: str
    version: str


@dataclass(frozen=True)
class ReferenceScope:
    """Where a non-local reference points: another group version, maybe in another package."""
    group: APIGroupIdentifier
    version: str
    package: Optional[str] = None


@dataclass(frozen=True)
class ReferenceTarget:
    name: str
    scope: Optional[ReferenceScope] = None  # None: declared in the same module

    @property
    def is_local(self) -> bool:
        return self.scope is None


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StringType:
    kind: ClassVar[TypeKind] = TypeKind.STRING
    enum: Optional[Tuple[str, ...]] = None


@dataclass(frozen=True)
class IntegerType:
    kind: ClassVar[TypeKind] = TypeKind.INTEGER


@dataclass(frozen=True)
class FloatType:
    kind: ClassVar[TypeKind] = TypeKind.FLOAT


@dataclass(frozen=True)
class BooleanType:
    kind: ClassVar[TypeKind] = TypeKind.BOOLEAN


@dataclass(frozen=True)
class UnknownType:
    kind: ClassVar[TypeKind] = TypeKind.UNKNOWN


@dataclass(frozen=True)
class ArrayType:
    values: "Type"
    kind: ClassVar[TypeKind] = TypeKind.ARRAY


@dataclass(frozen=True)
class MapType:
    """String-keyed map of ``values``."""
    values: "Type"
    kind: ClassVar[TypeKind] = TypeKind.MAP


@dataclass(frozen=True)
class UnionType:
    values: Tuple["Type", ...]
    kind: ClassVar[TypeKind] = TypeKind.UNION


@dataclass(frozen=True)
class OptionalType:
    value: "Type"
    kind: ClassVar[TypeKind] = TypeKind.OPTIONAL


@dataclass(frozen=True)
class TypeReference:
    target: ReferenceTarget
    kind: ClassVar[TypeKind] = TypeKind.REFERENCE


@dataclass(frozen=True)
class Property:
    name: str
    value: "Type"
    required: bool = False
    description: Optional[str] = None
    deprecated: bool = False


@dataclass(frozen=True)
class ObjectType:
    properties: Tuple[Property, ...] = ()
    inherit: Tuple[TypeReference, ...] = ()
    kind: ClassVar[TypeKind] = TypeKind.OBJECT


@dataclass(frozen=True)
class ResourceMetadata:
    scope: str = DEFAULT_RESOURCE_SCOPE


@dataclass(frozen=True)
class ResourceType:
    """
    An API object with identity and metadata.

    Only valid as the direct value of a Definition. One of ``properties``
    must be named "metadata" and hold a reference to the metadata type.
    """
    properties: Tuple[Property, ...] = ()
    metadata: ResourceMetadata = ResourceMetadata()
    kind: ClassVar[TypeKind] = TypeKind.RESOURCE


Type: TypeAlias = Union[
    StringType,
    IntegerType,
    FloatType,
    BooleanType,
    ArrayType,
    MapType,
    ObjectType,
    UnionType,
    OptionalType,
    TypeReference,
    ResourceType,
    UnknownType,
]


# ---------------------------------------------------------------------------
# Definitions and schema root
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Definition:
    """A named top-level schema entry."""
    name: str
    value: Type
    description: Optional[str] = None
    deprecated: bool = False


@dataclass(frozen=True)
class APIGroupVersion:
    """
    Schema root: one version of one API group.

    ``dependencies`` names at most one version per package.
    """
    group: APIGroupIdentifier
    version: str
    dependencies: Tuple[APIDependency, ...] = ()
    definitions: Tuple[Definition, ...] = ()

    @property
    def api_version(self) -> str:
        """``group/version``, or the bare version for the unnamed core group."""
        if self.group.name:
            return f"{self.group.name}/{self.version}"
        return self.version


def module_path(group: APIGroupIdentifier, version: str) -> str:
    """Path of the module generated for ``group`` at ``version``, e.g. ``apps/v1.ts``."""
    prefix = f"{group.module}/" if group.module else ""
    return f"{prefix}{version}{MODULE_FILE_EXTENSION}"
