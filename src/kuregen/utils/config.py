"""
Configuration constants to replace magic strings throughout kuregen
"""

# Schema document markers (top-level "apiVersion" / "kind" of a schema file)
SCHEMA_API_VERSION = "spec.kure.sh/v1alpha1"
SCHEMA_KIND = "APIGroupVersion"

# Resource scopes
DEFAULT_RESOURCE_SCOPE = "namespace"  # Omitted from generated type parameters
METADATA_PROPERTY = "metadata"

# Import sources
LIB_VERSION = "0.1"  # Fixed version of every "lib" package
SCHEMA_LIB = "schema"  # lib package providing Resource, NameScope, factory, ResourceList
SENTINEL_API_PACKAGE = "kubernetes"  # Core API, hosted without a package segment
MODULE_URN_PREFIX = "kure"
MODULE_URN_SEPARATOR = ":"

# Packaging
HOSTED_BASE_URL = "https://kure.sh"
BARE_SCOPE_PREFIX = "@kure-"
LOCAL_SOURCE_ROOT = "/src"

# File extensions
SCHEMA_FILE_EXTENSION = ".json"
MODULE_FILE_EXTENSION = ".ts"
HOSTED_ENTRY_STEM = "mod"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Environment variables
DUMP_SCHEMA_ENV = "KUREGEN_DUMP_SCHEMA"
COLOR_ENV = "KUREGEN_COLOR"
SCHEMA_DUMP_DIR = "schema_dump"
