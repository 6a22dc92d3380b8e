"""
Generation Driver

Builds the module for one API group version and renders it. Every call
works on a fresh Module and Context, so generations never share mutable
state and can run side by side on the same schema.
"""

import json
import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from ..codegen.context import Context, Engine, Packaging
from ..codegen.definitions import DefinitionCompiler, api_version
from ..codegen.module import Module
from ..frontend.loader import is_api_group_version, load_schema
from ..shared.errors import KuregenError, SchemaFormatError
from ..shared.schema import APIGroupVersion, module_path
from ..shared.schema_location import SchemaLocation
from ..shared.serialization import serialize_schema
from ..utils.config import DUMP_SCHEMA_ENV, MODULE_FILE_EXTENSION, SCHEMA_DUMP_DIR
from ..utils.io_utils import read_schema_file, write_module_file

logger = logging.getLogger(__name__)


def emit_version(
    schema: APIGroupVersion,
    engine: Engine = Engine.DENO,
    packaging: Optional[Packaging] = None,
) -> str:
    """
    Generate the module source for ``schema``.

    Phases:
    1. Build generators (schema errors such as a resource without metadata
       are raised here, before anything renders)
    2. Apply / resolve / render on a fresh Module

    Returns the complete module text; on error nothing is returned.
    """
    compiler = DefinitionCompiler()
    module = Module(module_path(schema.group, schema.version))

    module.add(api_version)

    resource_base = compiler.resource_base(schema.definitions)
    if resource_base is not None:
        module.add(resource_base)

    for definition in schema.definitions:
        module.add(compiler.definition(definition))

    logger.debug(f"Rendering {module.path} for {schema.api_version} ({len(schema.definitions)} definitions)")
    return module.render(Context(schema, module, engine, packaging))


class CodegenDriver:
    """
    Generates modules for schema files.

    Schema errors are raised as ``KuregenError`` carrying the file in their
    location; files that are not schema documents are skipped.
    """

    def __init__(self, engine: Engine = Engine.DENO, packaging: Optional[Packaging] = None):
        self.engine = engine
        self.packaging = packaging

    def emit_file(self, source: Union[Path, str], write: bool = False) -> Optional[str]:
        """
        Generate the module for one schema file.

        Returns the generated text, or None when the file is not a schema
        document. With ``write`` the text is also saved next to the schema
        with a ``.ts`` suffix.
        """
        path = Path(source)
        try:
            contents = read_schema_file(path)
        except json.JSONDecodeError as e:
            raise SchemaFormatError(f"invalid JSON: {e}", location=SchemaLocation(file=str(path))) from e
        if not is_api_group_version(contents):
            logger.debug(f"Skipping {path}: not an API group version")
            return None

        try:
            schema = load_schema(contents)
            if os.environ.get(DUMP_SCHEMA_ENV):
                self._dump_schema(schema)
            generated = emit_version(schema, self.engine, self.packaging)
        except KuregenError as e:
            location = e.location or SchemaLocation()
            e.location = replace(location, file=str(path))
            raise

        if write:
            target = path.with_suffix(MODULE_FILE_EXTENSION)
            write_module_file(target, generated)
            logger.info(f"Wrote {target}")
        return generated

    def _dump_schema(self, schema: APIGroupVersion) -> None:
        dump_dir = Path(SCHEMA_DUMP_DIR)
        dump_dir.mkdir(parents=True, exist_ok=True)
        name = module_path(schema.group, schema.version).replace("/", "_")
        target = dump_dir / f"{name}.sexpr"
        write_module_file(target, serialize_schema(schema))
        logger.debug(f"Dumped schema to {target}")
