"""
Schema Serialization to S-Expressions
=====================================

Converts a loaded schema to a canonical S-expression form for debugging
and test snapshots. Keywords and tags are ``sexpdata.Symbol`` (unquoted);
names and other schema strings stay quoted.

    (api-group-version :api-version "apps/v1" :module "apps/v1.ts"
      (dependencies (dependency "kubernetes" "1.29"))
      (definitions
        (definition "Color" (string :enum "red" "green"))))
"""

import json
from typing import Any, List

import sexpdata

from .schema import APIGroupVersion, Definition, Property, TypeReference, module_path


def _pretty_dumps(sexpr: Any, indent: int = 0, width: int = 100) -> str:
    """
    Render ``sexpr`` with one form per line once a form exceeds ``width``.

    A broken form keeps its head on the opening line and puts each argument
    on its own line, one indent deeper; the closing paren gets its own line.
    """
    if isinstance(sexpr, sexpdata.Symbol):
        return sexpr.value()
    if isinstance(sexpr, str):
        return json.dumps(sexpr, ensure_ascii=False)
    if not isinstance(sexpr, list):
        return str(sexpr)
    if not sexpr:
        return "()"

    head, *args = [_pretty_dumps(element, indent + 1, width) for element in sexpr]
    flat = "(" + " ".join([head, *args]) + ")"
    if len(flat) <= width and "\n" not in flat:
        return flat

    pad = "  " * (indent + 1)
    lines = [f"({head}"] + [pad + arg for arg in args]
    return "\n".join(lines) + "\n" + "  " * indent + ")"


def serialize_schema(schema: APIGroupVersion, pretty: bool = True) -> str:
    """
    Serialize a schema to S-expression string.

    Args:
        schema: Loaded schema
        pretty: Use pretty-printed format (default True). Set False for compact single-line.
    """
    sexpr = SchemaSerializer().serialize_to_sexpr(schema)
    if pretty:
        return _pretty_dumps(sexpr)
    return sexpdata.dumps(sexpr)


class SchemaSerializer:
    """Schema model to structured S-expression serializer."""

    def _sym(self, s: str) -> Any:
        """Convert string to symbol (no quotes in output)."""
        return sexpdata.Symbol(s)

    def serialize_to_sexpr(self, node: Any) -> Any:
        """Serialize any schema node to structured sexpr (list/Symbol/str)."""
        if node is None:
            return [self._sym("nil")]

        method = getattr(self, f"_serialize_{type(node).__name__}", None)
        if method is None:
            return [self._sym(type(node).__name__), self._sym("...")]
        return method(node)

    def _serialize_APIGroupVersion(self, node: APIGroupVersion) -> list:
        return [
            self._sym("api-group-version"),
            self._sym(":api-version"), node.api_version,
            self._sym(":module"), module_path(node.group, node.version),
            [self._sym("dependencies")]
            + [[self._sym("dependency"), dep.package, dep.version] for dep in node.dependencies],
            [self._sym("definitions")] + [self.serialize_to_sexpr(d) for d in node.definitions],
        ]

    def _serialize_Definition(self, node: Definition) -> list:
        out = [self._sym("definition"), node.name]
        out.extend(self._meta(node))
        out.append(self.serialize_to_sexpr(node.value))
        return out

    def _serialize_Property(self, node: Property) -> list:
        out = [self._sym("property"), node.name]
        if node.required:
            out.append(self._sym(":required"))
        out.extend(self._meta(node))
        out.append(self.serialize_to_sexpr(node.value))
        return out

    def _meta(self, node: Any) -> List[Any]:
        out: List[Any] = []
        if node.deprecated:
            out.append(self._sym(":deprecated"))
        if node.description:
            out.extend([self._sym(":doc"), node.description])
        return out

    def _serialize_StringType(self, node) -> list:
        if node.enum:
            return [self._sym("string"), self._sym(":enum"), *node.enum]
        return [self._sym("string")]

    def _serialize_IntegerType(self, node) -> list:
        return [self._sym("integer")]

    def _serialize_FloatType(self, node) -> list:
        return [self._sym("float")]

    def _serialize_BooleanType(self, node) -> list:
        return [self._sym("boolean")]

    def _serialize_UnknownType(self, node) -> list:
        return [self._sym("unknown")]

    def _serialize_ArrayType(self, node) -> list:
        return [self._sym("array"), self.serialize_to_sexpr(node.values)]

    def _serialize_MapType(self, node) -> list:
        return [self._sym("map"), self.serialize_to_sexpr(node.values)]

    def _serialize_UnionType(self, node) -> list:
        return [self._sym("union")] + [self.serialize_to_sexpr(v) for v in node.values]

    def _serialize_OptionalType(self, node) -> list:
        return [self._sym("optional"), self.serialize_to_sexpr(node.value)]

    def _serialize_ObjectType(self, node) -> list:
        out = [self._sym("object")]
        if node.inherit:
            out.append([self._sym("inherit")] + [self.serialize_to_sexpr(p) for p in node.inherit])
        out.extend(self.serialize_to_sexpr(p) for p in node.properties)
        return out

    def _serialize_ResourceType(self, node) -> list:
        out = [self._sym("resource"), self._sym(":scope"), node.metadata.scope]
        out.extend(self.serialize_to_sexpr(p) for p in node.properties)
        return out

    def _serialize_TypeReference(self, node: TypeReference) -> list:
        target = node.target
        out = [self._sym("reference"), target.name]
        if target.scope is not None:
            out.extend([self._sym(":module"), module_path(target.scope.group, target.scope.version)])
            if target.scope.package:
                out.extend([self._sym(":package"), target.scope.package])
        return out
