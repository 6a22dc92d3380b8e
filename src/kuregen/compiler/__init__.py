from .driver import CodegenDriver, emit_version

__all__ = ["CodegenDriver", "emit_version"]
