"""
kuregen utilities package
"""

from .io_utils import iter_schema_files, read_schema_file, write_module_file

__all__ = ["iter_schema_files", "read_schema_file", "write_module_file"]
