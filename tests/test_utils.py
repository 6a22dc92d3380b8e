"""
Test utilities for the kuregen test suite.

Builders for schema model values, so tests can state a schema in a few
lines, plus helpers that run a module through all of its phases.
"""

import sys
from pathlib import Path
from typing import Iterable, Optional

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from kuregen.codegen.context import Context, Engine, Packaging
from kuregen.codegen.module import Generator, Module
from kuregen.shared.schema import (
    APIDependency,
    APIGroupIdentifier,
    APIGroupVersion,
    Definition,
    Property,
    ReferenceScope,
    ReferenceTarget,
    ResourceMetadata,
    ResourceType,
    Type,
    TypeReference,
)


def local_ref(name: str) -> TypeReference:
    return TypeReference(ReferenceTarget(name))


def remote_ref(
    name: str,
    package: Optional[str] = None,
    module: Optional[str] = None,
    version: str = "v1",
    group: Optional[str] = None,
) -> TypeReference:
    scope = ReferenceScope(group=APIGroupIdentifier(name=group, module=module), version=version, package=package)
    return TypeReference(ReferenceTarget(name, scope=scope))


def object_meta() -> TypeReference:
    return remote_ref("ObjectMeta", package="kubernetes", module="meta")


def prop(name: str, value: Type, required: bool = False, **meta) -> Property:
    return Property(name=name, value=value, required=required, **meta)


def resource(name: str, *properties: Property, scope: str = "namespace", **meta) -> Definition:
    props = (prop("metadata", object_meta()),) + properties
    return Definition(name, ResourceType(properties=props, metadata=ResourceMetadata(scope=scope)), **meta)


def make_schema(
    *definitions: Definition,
    group: Optional[str] = "apps",
    module: Optional[str] = "apps",
    version: str = "v1",
    dependencies: Iterable[APIDependency] = (APIDependency("kubernetes", "1.29"),),
) -> APIGroupVersion:
    return APIGroupVersion(
        group=APIGroupIdentifier(name=group, module=module),
        version=version,
        dependencies=tuple(dependencies),
        definitions=tuple(definitions),
    )


def render_generators(
    *generators: Generator,
    schema: Optional[APIGroupVersion] = None,
    engine: Engine = Engine.DENO,
    packaging: Optional[Packaging] = None,
    path: Optional[str] = None,
) -> str:
    """Render a module holding just ``generators`` (no API version header)."""
    schema = schema if schema is not None else make_schema()
    module = Module(path if path is not None else "apps/v1.ts")
    for generator in generators:
        module.add(generator)
    return module.render(Context(schema, module, engine, packaging))


def declare(*names: str) -> Generator:
    """Generator that only declares ``names`` and renders nothing."""
    def generator(module: Module):
        for name in names:
            module.name(name)
        return lambda ctx: ""

    return generator
