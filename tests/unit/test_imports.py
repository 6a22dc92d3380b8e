#!/usr/bin/env python3
"""
Tests for the import table: deduplication, path computation per engine and
packaging, and rendering of the import block.
"""

import logging

import pytest

from kuregen.codegen.context import Context, Engine, Packaging
from kuregen.codegen.imports import Import, Imports, ImportSource
from kuregen.codegen.module import Module
from kuregen.shared.errors import ImportInvariantError, PhaseError
from kuregen.shared.schema import APIDependency
from tests.test_utils import make_schema, render_generators, declare


def _ctx(path="apps/v1.ts", engine=Engine.DENO, packaging=None, dependencies=None):
    deps = dependencies if dependencies is not None else (APIDependency("kubernetes", "1.29"),)
    return Context(make_schema(dependencies=deps), Module(path), engine, packaging)


def _use(*uses):
    """Generator that imports each ``(source, member, kwargs)`` and renders nothing."""
    def generator(module):
        for source, member, kwargs in uses:
            module.import_(source, member, **kwargs)
        return lambda ctx: ""

    return generator


class TestImportSource:
    def test_remote_urn(self):
        assert ImportSource.lib("schema").urn == "kure:lib:schema"
        assert ImportSource.api("kubernetes", "meta/v1.ts").urn == "kure:api:kubernetes:meta/v1.ts"

    def test_local_urn(self):
        assert ImportSource.local("core/v1.ts").urn == "/core/v1.ts"

    def test_sources_with_same_urn_are_equal(self):
        assert ImportSource.lib("schema") == ImportSource.lib("schema")


class TestImportPaths:
    """Import paths as seen from the module being rendered."""

    def test_hosted_lib(self):
        assert Imports().path(ImportSource.lib("schema"), _ctx()) == "https://kure.sh/lib/schema@0.1/mod.ts"

    def test_hosted_lib_with_path(self):
        path = Imports().path(ImportSource.lib("schema", "util.ts"), _ctx())
        assert path == "https://kure.sh/lib/schema@0.1/util.ts"

    def test_hosted_sentinel_package_drops_name(self):
        path = Imports().path(ImportSource.api("kubernetes", "meta/v1.ts"), _ctx())
        assert path == "https://kure.sh/api/@1.29/meta/v1.ts"

    def test_hosted_api_package_with_version(self):
        ctx = _ctx(dependencies=(APIDependency("cert-manager", "1.14"),))
        path = Imports().path(ImportSource.api("cert-manager", "acme/v1.ts"), ctx)
        assert path == "https://kure.sh/api/cert-manager@1.14/acme/v1.ts"

    def test_hosted_api_package_without_dependency_warns(self, caplog):
        ctx = _ctx(dependencies=())
        with caplog.at_level(logging.WARNING, logger="kuregen.codegen.imports"):
            path = Imports().path(ImportSource.api("istio", "networking/v1.ts"), ctx)
        assert path == "https://kure.sh/api/istio/networking/v1.ts"
        assert "istio" in caplog.text

    def test_hosted_sentinel_without_dependency_is_silent(self, caplog):
        ctx = _ctx(dependencies=())
        with caplog.at_level(logging.WARNING, logger="kuregen.codegen.imports"):
            path = Imports().path(ImportSource.api("kubernetes", "meta/v1.ts"), ctx)
        assert path == "https://kure.sh/api/kubernetes/meta/v1.ts"
        assert caplog.text == ""

    def test_node_engine_keeps_sub_paths(self):
        ctx = _ctx(engine=Engine.NODE, packaging=Packaging.HOSTED)
        assert Imports().path(ImportSource.lib("schema"), ctx) == "https://kure.sh/lib/schema@0.1/mod.ts"
        path = Imports().path(ImportSource.api("kubernetes", "meta/v1.ts"), ctx)
        assert path == "https://kure.sh/api/@1.29/meta/v1.ts"

    def test_bare_lib(self):
        ctx = _ctx(packaging=Packaging.BARE)
        assert Imports().path(ImportSource.lib("schema"), ctx) == "@kure-lib/schema"

    def test_bare_api_flattens_package_slashes(self):
        ctx = _ctx(engine=Engine.NODE, dependencies=(APIDependency("acme/widgets", "2.0"),))
        path = Imports().path(ImportSource.api("acme/widgets", "shop/v1.ts"), ctx)
        assert path == "@kure-api/acme-widgets/shop/v1.ts"

    def test_bare_sentinel_keeps_package(self):
        ctx = _ctx(engine=Engine.NODE)
        path = Imports().path(ImportSource.api("kubernetes", "meta/v1.ts"), ctx)
        assert path == "@kure-api/kubernetes/meta/v1.ts"

    @pytest.mark.parametrize("importer,target,expected", [
        ("apps/v1.ts", "apps/v1beta1.ts", "./v1beta1.ts"),
        ("apps/v1.ts", "core/v1.ts", "../core/v1.ts"),
        ("v1.ts", "core/v1.ts", "./core/v1.ts"),
        ("apps/v1.ts", "v1.ts", "../v1.ts"),
        ("a/b/v1.ts", "c/v1.ts", "../../c/v1.ts"),
    ])
    def test_local_paths_are_relative(self, importer, target, expected):
        assert Imports().path(ImportSource.local(target), _ctx(path=importer)) == expected

    def test_local_path_ignores_engine(self):
        ctx = _ctx(engine=Engine.NODE)
        assert Imports().path(ImportSource.local("core/v1.ts"), ctx) == "../core/v1.ts"


class TestImportMerging:
    """Repeated use of the same member."""

    def test_same_member_is_deduplicated(self):
        imports = Imports()
        first = imports.use(ImportSource.lib("schema"), "factory")
        second = imports.use(ImportSource.lib("schema"), "factory")
        assert first is second
        assert len(imports) == 1

    def test_value_use_clears_type_only(self):
        imports = Imports()
        imp = imports.use(ImportSource.lib("schema"), "Resource", type_only=True)
        imports.use(ImportSource.lib("schema"), "Resource")
        assert imp.type_only is False

    def test_type_use_never_sets_type_only_again(self):
        imports = Imports()
        imp = imports.use(ImportSource.lib("schema"), "Resource")
        imports.use(ImportSource.lib("schema"), "Resource", type_only=True)
        assert imp.type_only is False

    def test_first_alias_sticks(self):
        imports = Imports()
        imp = imports.use(ImportSource.lib("schema"), "Resource")
        imports.use(ImportSource.lib("schema"), "Resource", alias="Base")
        imports.use(ImportSource.lib("schema"), "Resource", alias="Other")
        assert imp.alias == "Base"

    def test_use_after_apply(self):
        module = Module("apps/v1.ts")
        imports = Imports()
        imports.apply(module)
        with pytest.raises(PhaseError):
            imports.use(ImportSource.lib("schema"), "factory")

    def test_value_import_in_type_statement(self):
        imp = Import("factory")
        with pytest.raises(ImportInvariantError):
            imp.render(in_type_import=True)


class TestImportBlock:
    """Rendered import statements."""

    def test_empty_block(self):
        assert render_generators(declare("A")) == ""

    def test_all_type_members_use_import_type(self):
        out = render_generators(_use(
            (ImportSource.lib("schema"), "ResourceList", {"type_only": True}),
            (ImportSource.lib("schema"), "NameScope", {"type_only": True}),
        ))
        assert out == 'import type { NameScope, ResourceList } from "https://kure.sh/lib/schema@0.1/mod.ts";'

    def test_mixed_members_mark_types_inline(self):
        out = render_generators(_use(
            (ImportSource.lib("schema"), "factory", {}),
            (ImportSource.lib("schema"), "ResourceList", {"type_only": True}),
        ))
        assert out == 'import { type ResourceList, factory } from "https://kure.sh/lib/schema@0.1/mod.ts";'

    def test_alias_is_rendered(self):
        out = render_generators(_use((ImportSource.lib("schema"), "Resource", {"alias": "Base"})))
        assert out == 'import { Resource as Base } from "https://kure.sh/lib/schema@0.1/mod.ts";'

    def test_collision_with_declaration_renames_import(self):
        out = render_generators(
            declare("Resource"),
            _use((ImportSource.lib("schema"), "Resource", {"type_only": True})),
        )
        assert out == 'import type { Resource as Resource_ } from "https://kure.sh/lib/schema@0.1/mod.ts";'

    def test_remote_before_local_with_blank_line(self):
        out = render_generators(_use(
            (ImportSource.local("core/v1.ts"), "Pod", {"type_only": True}),
            (ImportSource.lib("schema"), "factory", {}),
            (ImportSource.api("kubernetes", "meta/v1.ts"), "ObjectMeta", {"type_only": True}),
        ))
        assert out == (
            'import type { ObjectMeta } from "https://kure.sh/api/@1.29/meta/v1.ts";\n'
            'import { factory } from "https://kure.sh/lib/schema@0.1/mod.ts";\n'
            "\n"
            'import type { Pod } from "../core/v1.ts";'
        )

    def test_local_statements_sorted_by_path(self):
        out = render_generators(_use(
            (ImportSource.local("core/v1.ts"), "Pod", {"type_only": True}),
            (ImportSource.local("apps/v1beta1.ts"), "Deployment", {"type_only": True}),
        ))
        assert out.splitlines() == [
            'import type { Pod } from "../core/v1.ts";',
            'import type { Deployment } from "./v1beta1.ts";',
        ]

    def test_same_member_from_two_sources_suffixed_by_source_order(self):
        forward = render_generators(_use(
            (ImportSource.local("core/v1.ts"), "Status", {"type_only": True}),
            (ImportSource.api("kubernetes", "meta/v1.ts"), "Status", {"type_only": True}),
        ))
        backward = render_generators(_use(
            (ImportSource.api("kubernetes", "meta/v1.ts"), "Status", {"type_only": True}),
            (ImportSource.local("core/v1.ts"), "Status", {"type_only": True}),
        ))
        assert forward == backward
        # "/core/v1.ts" sorts before "kure:api:kubernetes:meta/v1.ts"
        assert 'import type { Status as Status_ } from "https://kure.sh/api/@1.29/meta/v1.ts";' in forward
        assert 'import type { Status } from "../core/v1.ts";' in forward

    def test_members_sorted_by_code_point(self):
        out = render_generators(_use(
            (ImportSource.lib("schema"), "b", {}),
            (ImportSource.lib("schema"), "B", {}),
            (ImportSource.lib("schema"), "a", {}),
        ))
        assert out == 'import { B, a, b } from "https://kure.sh/lib/schema@0.1/mod.ts";'

    def test_sources_with_same_path_ordered_by_urn(self):
        deps = (APIDependency("acme/widgets", "2.0"), APIDependency("acme-widgets", "2.0"))
        slashed = (ImportSource.api("acme/widgets", "shop/v1.ts"), "A", {"type_only": True})
        dashed = (ImportSource.api("acme-widgets", "shop/v1.ts"), "B", {"type_only": True})
        schema = make_schema(dependencies=deps)
        forward = render_generators(_use(slashed, dashed), schema=schema, engine=Engine.NODE)
        backward = render_generators(_use(dashed, slashed), schema=schema, engine=Engine.NODE)
        assert forward == backward
        # "kure:api:acme-widgets:..." sorts before "kure:api:acme/widgets:..."
        assert forward.splitlines() == [
            'import type { B } from "@kure-api/acme-widgets/shop/v1.ts";',
            'import type { A } from "@kure-api/acme-widgets/shop/v1.ts";',
        ]
