"""
Definition Generators

Top-level declarations of a generated module: the API version constant,
the shared resource base type, and one declaration group per schema
definition (type alias, re-export, interface or resource).
"""

from typing import Optional, Sequence, cast

from ..shared.errors import ResourceMetadataError
from ..shared.schema import (
    Definition,
    ObjectType,
    Property,
    ResourceType,
    TypeReference,
)
from ..shared.schema_location import SchemaLocation
from ..utils.config import DEFAULT_RESOURCE_SCOPE, METADATA_PROPERTY, SCHEMA_LIB
from .context import Context
from .imports import ImportSource
from .module import Generator, Module, Renderer
from .syntax import doc, lit
from .type_compiler import TypeCompiler

SCHEMA_SOURCE = ImportSource.lib(SCHEMA_LIB)

API_VERSION_TYPE = "APIVersion"
API_VERSION_VALUE = "apiVersion"
RESOURCE_BASE = "Resource"


def api_version(module: Module) -> Renderer:
    """``APIVersion`` type and ``apiVersion`` constant, bound to the context's API version."""
    type_name = module.name(API_VERSION_TYPE)
    value_name = module.name(API_VERSION_VALUE)

    return lambda ctx: (
        f"export type {type_name()} = {lit(ctx.api_version)};\n"
        f"export const {value_name()}: {type_name()} = {lit(ctx.api_version)};"
    )


def metadata_property(definition: Definition) -> Property:
    """The single ``metadata`` reference property every resource must declare."""
    resource = cast(ResourceType, definition.value)
    location = SchemaLocation(definition=definition.name, property=METADATA_PROPERTY)

    candidates = [prop for prop in resource.properties if prop.name == METADATA_PROPERTY]
    if len(candidates) != 1:
        raise ResourceMetadataError(
            f"{definition.name}: expected exactly one {METADATA_PROPERTY!r} property, found {len(candidates)}",
            location=location,
        )
    if not isinstance(candidates[0].value, TypeReference):
        raise ResourceMetadataError(
            f"{definition.name}: expected {METADATA_PROPERTY!r} to be a reference, "
            f"found {candidates[0].value.kind.value}",
            location=location,
        )
    return candidates[0]


class DefinitionCompiler:
    """Builds the generators of a module's top-level declarations."""

    def __init__(self, types: Optional[TypeCompiler] = None):
        self.types = types if types is not None else TypeCompiler()

    def resource_base(self, definitions: Sequence[Definition]) -> Optional[Generator]:
        """
        Generic ``Resource<K, S>`` alias shared by every resource of the module.

        The metadata type comes from the first resource definition; later
        resources are not cross-checked against it. Returns None when the
        module declares no resources.
        """
        first = next((d for d in definitions if isinstance(d.value, ResourceType)), None)
        if first is None:
            return None

        metadata = metadata_property(first)
        metadata_type = self.types.reference(metadata.value)

        def generator(module: Module) -> Renderer:
            version_type = module.get(API_VERSION_TYPE)
            resource = module.name(RESOURCE_BASE)
            base = module.import_(SCHEMA_SOURCE, "Resource", type_only=True)
            scope = module.import_(SCHEMA_SOURCE, "NameScope", type_only=True)
            meta = metadata_type(module)

            def render(ctx: Context) -> str:
                api = f"`{ctx.api_version}`"
                return (
                    f"/** A {{@link {base()} resource}} in the {api} API. */\n"
                    f"export type {resource()}<K extends string, S extends {scope()} = {lit(DEFAULT_RESOURCE_SCOPE)}>"
                    f" = {base()}<{version_type()}, K, S, {meta(ctx)}>;"
                )

            return render

        return generator

    def definition(self, definition: Definition) -> Generator:
        value = definition.value
        if isinstance(value, ResourceType):
            return self.resource(definition)
        elif isinstance(value, ObjectType):
            return self.interface(definition)
        elif isinstance(value, TypeReference):
            return self.reexport(definition)
        return self.alias(definition)

    def alias(self, definition: Definition) -> Generator:
        value_type = self.types.compile(definition.value)

        def generator(module: Module) -> Renderer:
            name = module.name(definition.name)
            value = value_type(module)
            return lambda ctx: f"{doc(definition)}export type {name()} = {value(ctx)};"

        return generator

    def reexport(self, definition: Definition) -> Generator:
        """
        Re-export of a referenced type under the definition's name.

        The name is declared like any other definition, so an import of the
        same member is renamed behind it and the statement aliases it back.
        """
        ref_type = self.types.reference(cast(TypeReference, definition.value))

        def generator(module: Module) -> Renderer:
            name = module.name(definition.name)
            ref = ref_type(module)

            def render(ctx: Context) -> str:
                target = ref(ctx)
                alias = f" as {name()}" if target != name() else ""
                return f"{doc(definition)}export type {{ {target}{alias} }};"

            return render

        return generator

    def interface(self, definition: Definition) -> Generator:
        value = cast(ObjectType, definition.value)
        object_type = self.types.compile(value, declaration=True)
        parent_types = [self.types.reference(parent) for parent in value.inherit]

        def generator(module: Module) -> Renderer:
            name = module.name(definition.name)
            body = object_type(module)
            parents = [parent_type(module) for parent_type in parent_types]

            def render(ctx: Context) -> str:
                extends = f" extends {', '.join(parent(ctx) for parent in parents)}" if parents else ""
                return f"{doc(definition)}export interface {name()}{extends} {body(ctx)}"

            return render

        return generator

    def resource(self, definition: Definition) -> Generator:
        """
        Resource declaration group:

        - an interface extending the module's ``Resource<"Name"[, "scope"]>``
        - a factory constant bound to (apiVersion, name, scope)
        - a ``NameList`` alias of ``ResourceList<Name>``
        """
        resource = cast(ResourceType, definition.value)
        metadata = metadata_property(definition)
        scope = resource.metadata.scope

        object_type = self.types.object(
            ObjectType(properties=tuple(prop for prop in resource.properties if prop is not metadata))
        )

        def generator(module: Module) -> Renderer:
            factory_base = module.import_(SCHEMA_SOURCE, "factory")
            list_base = module.import_(SCHEMA_SOURCE, "ResourceList", type_only=True)

            version_value = module.get(API_VERSION_VALUE)
            resource_base = module.get(RESOURCE_BASE)

            name = module.name(definition.name)
            list_name = module.name(f"{definition.name}List")
            body = object_type(module)

            def render(ctx: Context) -> str:
                type_params = [lit(name())]
                if scope != DEFAULT_RESOURCE_SCOPE:
                    type_params.append(lit(scope))
                kind = (
                    f"{doc(definition)}export interface {name()} extends "
                    f"{resource_base()}<{', '.join(type_params)}> {body(ctx)}"
                )

                args = ", ".join([version_value(), lit(name()), lit(scope)])
                factory = f"export const {name()} = {factory_base()}<{name()}>({args});"

                listing = f"export type {list_name()} = {list_base()}<{name()}>;"
                return "\n\n".join([kind, factory, listing])

            return render

        return generator
