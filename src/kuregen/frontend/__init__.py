"""Schema loading: decoded JSON documents to the schema model."""

from .loader import is_api_group_version, load_definition, load_schema, load_type

__all__ = ["is_api_group_version", "load_definition", "load_schema", "load_type"]
