"""
Type Compiler

Recursive-descent translation of schema types into two-stage generators:

    generator(module) -> renderer(ctx) -> text

The first stage runs during the module's apply pass and registers whatever
names and imports the type needs; the second runs after resolution and can
therefore read every binding.
"""

from typing import List

from typing_extensions import assert_never

from ..shared.errors import NestedResourceError
from ..shared.schema import (
    ArrayType,
    BooleanType,
    FloatType,
    IntegerType,
    MapType,
    ObjectType,
    OptionalType,
    Property,
    ResourceType,
    StringType,
    Type,
    TypeReference,
    UnionType,
    UnknownType,
    module_path,
)
from .context import Context
from .imports import ImportSource
from .module import Generator, Module, Renderer
from .syntax import doc, lit, property_key


def constant(text: str) -> Generator:
    """Generator of fixed text that needs no names."""
    return lambda module: lambda ctx: text


class TypeCompiler:
    """
    Compiles schema types. Holds no state, so one instance can serve any
    number of modules.
    """

    def compile(self, type_: Type, declaration: bool = False) -> Generator:
        """
        Generator for ``type_``.

        ``declaration`` is set when the type is the body of an interface
        declaration: inheritance is then rendered by the caller as an
        extends clause instead of an intersection.
        """
        if isinstance(type_, StringType):
            return self.string(type_)
        elif isinstance(type_, (IntegerType, FloatType)):
            return constant("number")
        elif isinstance(type_, BooleanType):
            return constant("boolean")
        elif isinstance(type_, UnknownType):
            return constant("unknown")
        elif isinstance(type_, ArrayType):
            return self.array(type_)
        elif isinstance(type_, MapType):
            return self.map(type_)
        elif isinstance(type_, ObjectType):
            return self.object(type_, declaration)
        elif isinstance(type_, UnionType):
            return self.union(type_)
        elif isinstance(type_, OptionalType):
            return self.optional(type_)
        elif isinstance(type_, TypeReference):
            return self.reference(type_)
        elif isinstance(type_, ResourceType):
            raise NestedResourceError('"resource" type is only allowed as the value of a definition')
        else:
            assert_never(type_)

    def string(self, type_: StringType) -> Generator:
        if type_.enum:
            return constant(" | ".join(lit(value) for value in type_.enum))
        return constant("string")

    def array(self, type_: ArrayType) -> Generator:
        value_type = self.compile(type_.values)

        def generator(module: Module) -> Renderer:
            value = value_type(module)
            return lambda ctx: f"Array<{value(ctx)}>"

        return generator

    def map(self, type_: MapType) -> Generator:
        value_type = self.compile(type_.values)

        def generator(module: Module) -> Renderer:
            value = value_type(module)
            return lambda ctx: f"Record<string, {value(ctx)}>"

        return generator

    def union(self, type_: UnionType) -> Generator:
        # Declared order is kept; variants are never sorted or deduplicated.
        value_types = [self.compile(value) for value in type_.values]

        def generator(module: Module) -> Renderer:
            values = [value_type(module) for value_type in value_types]
            return lambda ctx: " | ".join(value(ctx) for value in values)

        return generator

    def optional(self, type_: OptionalType) -> Generator:
        value_type = self.compile(type_.value)

        def generator(module: Module) -> Renderer:
            value = value_type(module)
            return lambda ctx: f"{value(ctx)} | null"

        return generator

    def object(self, type_: ObjectType, declaration: bool = False) -> Generator:
        parent_types = [] if declaration else [self.reference(parent) for parent in type_.inherit]
        property_types = [self.property(prop) for prop in type_.properties]

        def generator(module: Module) -> Renderer:
            parents = [parent_type(module) for parent_type in parent_types]
            properties = [property_type(module) for property_type in property_types]

            def render(ctx: Context) -> str:
                parts: List[str] = [parent(ctx) for parent in parents]
                if properties:
                    parts.append("{\n" + "\n".join(prop(ctx) for prop in properties) + "\n}")
                else:
                    parts.append("{}")
                return " & ".join(parts)

            return render

        return generator

    def property(self, prop: Property) -> Generator:
        key = property_key(prop.name)
        value = prop.value
        if not prop.required and not isinstance(value, OptionalType):
            value = OptionalType(value)
        marker = "" if prop.required else "?"
        value_type = self.compile(value)

        def generator(module: Module) -> Renderer:
            value_render = value_type(module)
            return lambda ctx: f"{doc(prop, 1)}  {key}{marker}: {value_render(ctx)};"

        return generator

    def reference(self, ref: TypeReference) -> Generator:
        target = ref.target
        scope = target.scope

        if target.is_local:
            def local(module: Module) -> Renderer:
                binding = module.get(target.name)
                return lambda ctx: binding()

            return local

        path = module_path(scope.group, scope.version)
        source = ImportSource.api(scope.package, path) if scope.package else ImportSource.local(path)

        def imported(module: Module) -> Renderer:
            binding = module.import_(source, target.name, type_only=True)
            return lambda ctx: binding()

        return imported
