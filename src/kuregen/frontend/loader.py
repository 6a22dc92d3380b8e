"""
Schema Loader

Converts a decoded schema document (plain dicts and lists, as produced by
``json.loads``) into the frozen schema model. Only the shape needed to build
the model is checked; the document is expected to be valid otherwise.
"""

import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..shared.errors import SchemaFormatError
from ..shared.schema import (
    APIDependency,
    APIGroupIdentifier,
    APIGroupVersion,
    ArrayType,
    BooleanType,
    Definition,
    FloatType,
    IntegerType,
    MapType,
    ObjectType,
    OptionalType,
    Property,
    ReferenceScope,
    ReferenceTarget,
    ResourceMetadata,
    ResourceType,
    StringType,
    Type,
    TypeKind,
    TypeReference,
    UnionType,
    UnknownType,
)
from ..shared.schema_location import SchemaLocation
from ..utils.config import DEFAULT_RESOURCE_SCOPE, SCHEMA_API_VERSION, SCHEMA_KIND

logger = logging.getLogger(__name__)


def is_api_group_version(value: Any) -> bool:
    """True if ``value`` is a decoded APIGroupVersion schema document."""
    return (
        isinstance(value, Mapping)
        and value.get("apiVersion") == SCHEMA_API_VERSION
        and value.get("kind") == SCHEMA_KIND
    )


def load_schema(value: Mapping[str, Any]) -> APIGroupVersion:
    location = SchemaLocation()
    group = _require(value, "group", location)
    dependencies = tuple(
        APIDependency(package=_require(dep, "package", location), version=_require(dep, "version", location))
        for dep in value.get("dependencies") or ()
    )

    packages = [dep.package for dep in dependencies]
    duplicates = sorted({package for package in packages if packages.count(package) > 1})
    if duplicates:
        raise SchemaFormatError(f"dependency listed more than once: {', '.join(duplicates)}", location=location)

    definitions = tuple(load_definition(d) for d in value.get("definitions") or ())
    schema = APIGroupVersion(
        group=_load_group(group),
        version=_require(value, "version", location),
        dependencies=dependencies,
        definitions=definitions,
    )
    logger.debug(f"Loaded {schema.api_version}: {len(definitions)} definitions, {len(dependencies)} dependencies")
    return schema


def load_definition(value: Mapping[str, Any]) -> Definition:
    name = _require(value, "name", SchemaLocation())
    location = SchemaLocation(definition=name)
    return Definition(
        name=name,
        value=load_type(_require(value, "value", location), location),
        description=value.get("description"),
        deprecated=bool(value.get("deprecated", False)),
    )


def load_type(value: Mapping[str, Any], location: SchemaLocation) -> Type:
    """
    Build a model type from its document form.

    Resources are loaded wherever they appear; rejecting nested ones is
    left to the code generator.
    """
    tag = _require(value, "type", location)
    try:
        kind = TypeKind(tag)
    except ValueError:
        raise SchemaFormatError(f"unknown type {tag!r}", location=location) from None
    return _TYPE_LOADERS[kind](value, location)


def _load_group(value: Mapping[str, Any]) -> APIGroupIdentifier:
    return APIGroupIdentifier(name=value.get("name") or None, module=value.get("module") or None)


def _load_property(value: Mapping[str, Any], location: SchemaLocation) -> Property:
    name = _require(value, "name", location)
    prop_location = location.with_property(name)
    return Property(
        name=name,
        value=load_type(_require(value, "value", prop_location), prop_location),
        required=bool(value.get("required", False)),
        description=value.get("description"),
        deprecated=bool(value.get("deprecated", False)),
    )


def _load_properties(value: Mapping[str, Any], location: SchemaLocation) -> Tuple[Property, ...]:
    return tuple(_load_property(prop, location) for prop in value.get("properties") or ())


def _load_reference(value: Mapping[str, Any], location: SchemaLocation) -> TypeReference:
    target = _require(value, "target", location)
    name = _require(target, "name", location)
    scope: Optional[ReferenceScope] = None
    if target.get("scope") is not None:
        raw_scope = target["scope"]
        scope = ReferenceScope(
            group=_load_group(_require(raw_scope, "group", location)),
            version=_require(raw_scope, "version", location),
            package=raw_scope.get("package") or None,
        )
    return TypeReference(ReferenceTarget(name=name, scope=scope))


def _load_object(value: Mapping[str, Any], location: SchemaLocation) -> ObjectType:
    return ObjectType(
        properties=_load_properties(value, location),
        inherit=tuple(_load_reference(parent, location) for parent in value.get("inherit") or ()),
    )


def _load_resource(value: Mapping[str, Any], location: SchemaLocation) -> ResourceType:
    metadata = value.get("metadata") or {}
    return ResourceType(
        properties=_load_properties(value, location),
        metadata=ResourceMetadata(scope=metadata.get("scope", DEFAULT_RESOURCE_SCOPE)),
    )


def _load_string(value: Mapping[str, Any], location: SchemaLocation) -> StringType:
    enum = value.get("enum")
    return StringType(enum=tuple(enum) if enum is not None else None)


# Dictionary dispatch on the type tag (one loader per TypeKind)
_TYPE_LOADERS: Dict[TypeKind, Callable[[Mapping[str, Any], SchemaLocation], Type]] = {
    TypeKind.STRING: _load_string,
    TypeKind.INTEGER: lambda value, location: IntegerType(),
    TypeKind.FLOAT: lambda value, location: FloatType(),
    TypeKind.BOOLEAN: lambda value, location: BooleanType(),
    TypeKind.UNKNOWN: lambda value, location: UnknownType(),
    TypeKind.ARRAY: lambda value, location: ArrayType(load_type(_require(value, "values", location), location)),
    TypeKind.MAP: lambda value, location: MapType(load_type(_require(value, "values", location), location)),
    TypeKind.OBJECT: _load_object,
    TypeKind.UNION: lambda value, location: UnionType(
        tuple(load_type(v, location) for v in _require(value, "values", location))
    ),
    TypeKind.OPTIONAL: lambda value, location: OptionalType(load_type(_require(value, "value", location), location)),
    TypeKind.REFERENCE: _load_reference,
    TypeKind.RESOURCE: _load_resource,
}


def _require(value: Any, key: str, location: SchemaLocation) -> Any:
    if not isinstance(value, Mapping):
        raise SchemaFormatError(f"expected an object holding {key!r}, got {type(value).__name__}", location=location)
    if key not in value:
        raise SchemaFormatError(f"missing {key!r}", location=location)
    return value[key]
