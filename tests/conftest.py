"""
Pytest configuration and shared fixtures for all kuregen tests.

Compilers hold no state, so one instance is shared per session; modules
and contexts are always created fresh per test.
"""

import sys
import pytest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
from kuregen.codegen.context import Context, Engine
from kuregen.codegen.definitions import DefinitionCompiler
from kuregen.codegen.module import Module
from kuregen.codegen.type_compiler import TypeCompiler
from tests.test_utils import make_schema


# =============================================================================
# Session-scoped fixtures (shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def type_compiler():
    """Stateless type compiler shared across all tests."""
    return TypeCompiler()


@pytest.fixture(scope="session")
def definitions(type_compiler):
    """Stateless definition compiler shared across all tests."""
    return DefinitionCompiler(type_compiler)


# =============================================================================
# Function-scoped fixtures (default - one per test)
# =============================================================================

@pytest.fixture
def module():
    """Fresh module at apps/v1.ts."""
    return Module("apps/v1.ts")


@pytest.fixture
def ctx(module):
    """Hosted/deno context for the fresh module and the default test schema."""
    return Context(make_schema(), module, Engine.DENO)


@pytest.fixture
def render_type(type_compiler):
    """
    Factory fixture: render one type inside a fresh module and return just
    the type's text (the import block is discarded).
    """
    def _render_type(type_, declarations=(), declaration=False):
        module = Module("apps/v1.ts")
        generator = type_compiler.compile(type_, declaration=declaration)
        rendered = {}

        def capture(mod):
            for name in declarations:
                mod.name(name)
            renderer = generator(mod)

            def render(ctx):
                rendered["text"] = renderer(ctx)
                return ""

            return render

        module.add(capture)
        module.render(Context(make_schema(), module, Engine.DENO))
        return rendered["text"]

    return _render_type
