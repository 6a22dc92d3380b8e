"""
Shared components: schema model, locations and errors.
"""

from .schema_location import SchemaLocation
from .errors import (
    KuregenError, SchemaError, ResourceMetadataError, NestedResourceError,
    DuplicateDeclarationError, SchemaFormatError,
    KuregenImplementationError, UnresolvedNameError, UndeclaredNameError,
    ImportInvariantError, PhaseError, ErrorReporter,
)
from .schema import (
    TypeKind, Type, StringType, IntegerType, FloatType, BooleanType, UnknownType,
    ArrayType, MapType, ObjectType, UnionType, OptionalType, TypeReference,
    ResourceType, ResourceMetadata, Property, Definition,
    APIGroupIdentifier, APIDependency, APIGroupVersion,
    ReferenceScope, ReferenceTarget, module_path,
)
