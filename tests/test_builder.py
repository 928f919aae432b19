"""
Graph builder tests.

Most cases use a fake resolver so the builder is exercised without any
filesystem; the end-to-end cases go through TypeScriptProject.
"""

import os

import pytest

from depgraph.builder import build_graph
from depgraph.errors import ConfigError
from depgraph.loaders import TypeScriptProject
from depgraph.models import Edge, ImportDeclaration, SourceFile

BASE = os.path.abspath(os.sep + "work")


def path(rel):
    return os.path.join(BASE, *rel.split("/"))


class FakeResolver:
    """Maps (file, specifier) to a target path; anything else is unresolved."""

    def __init__(self, imports, targets):
        self.imports = imports
        self.targets = targets

    def get_imports(self, source_file):
        return tuple(
            ImportDeclaration(spec, source_file, line)
            for line, spec in enumerate(self.imports.get(source_file.path, []), start=1)
        )

    def resolve_import_target(self, declaration):
        target = self.targets.get((declaration.source.path, declaration.specifier))
        return SourceFile(target) if target else None


def rel_edge(from_rel, to_rel):
    return Edge(os.path.join(*from_rel.split("/")), os.path.join(*to_rel.split("/")))


def test_edges_follow_file_then_declaration_order():
    a, b, c = path("src/a.ts"), path("src/b.ts"), path("src/c.ts")
    resolver = FakeResolver(
        {a: ["./c", "./b"], b: ["./c"]},
        {(a, "./c"): c, (a, "./b"): b, (b, "./c"): c},
    )
    graph = build_graph([SourceFile(a), SourceFile(b), SourceFile(c)], resolver, BASE)
    assert graph.edges == [
        rel_edge("src/a.ts", "src/c.ts"),
        rel_edge("src/a.ts", "src/b.ts"),
        rel_edge("src/b.ts", "src/c.ts"),
    ]


def test_repeated_imports_keep_multiplicity():
    a, b = path("src/a.ts"), path("src/b.ts")
    resolver = FakeResolver(
        {a: ["./b", "./b.js"]},
        {(a, "./b"): b, (a, "./b.js"): b},
    )
    graph = build_graph([SourceFile(a)], resolver, BASE)
    assert graph.edges == [rel_edge("src/a.ts", "src/b.ts")] * 2


def test_dedupe_keeps_first_occurrence():
    a, b, c = path("src/a.ts"), path("src/b.ts"), path("src/c.ts")
    resolver = FakeResolver(
        {a: ["./b", "./c", "./b"]},
        {(a, "./b"): b, (a, "./c"): c},
    )
    graph = build_graph([SourceFile(a)], resolver, BASE, dedupe=True)
    assert graph.edges == [rel_edge("src/a.ts", "src/b.ts"), rel_edge("src/a.ts", "src/c.ts")]


def test_unresolved_imports_produce_no_edges():
    a = path("src/a.ts")
    resolver = FakeResolver({a: ["react", "./missing"]}, {})
    assert build_graph([SourceFile(a)], resolver, BASE).edges == []


def test_empty_file_set():
    graph = build_graph([], FakeResolver({}, {}), BASE)
    assert graph.to_dict() == {"edges": []}


def test_paths_relative_to_base_dir():
    a, b = path("pkg/src/a.ts"), path("pkg/src/b.ts")
    resolver = FakeResolver({a: ["./b"]}, {(a, "./b"): b})
    graph = build_graph([SourceFile(a)], resolver, os.path.join(BASE, "pkg"))
    assert graph.edges == [rel_edge("src/a.ts", "src/b.ts")]


# ==============================================================================
# Through the TypeScript loader
# ==============================================================================


def test_end_to_end_scenario(ts_project):
    project = TypeScriptProject.load(str(ts_project / "tsconfig.json"))
    graph = build_graph(project.select_files("src/**/*.ts"), project, str(ts_project))
    assert graph.to_dict() == {
        "edges": [{"from": os.path.join("src", "a.ts"), "to": os.path.join("src", "b.ts")}]
    }


def test_no_external_edges(make_project):
    root = make_project({
        "tsconfig.json": {"compilerOptions": {"baseUrl": "."}},
        "node_modules/lodash/index.d.ts": "",
        "src/a.ts": """
            import _ from "lodash";
            import { readFile } from "fs";
            import { b } from "./b";
            import { gone } from "./gone";
        """,
        "src/b.ts": "",
    })
    project = TypeScriptProject.load(str(root / "tsconfig.json"))
    graph = build_graph(project.select_files("src/**/*.ts"), project, str(root))
    assert [edge.to_path for edge in graph.edges] == [os.path.join("src", "b.ts")]
    for edge in graph.edges:
        assert edge.from_path.startswith("src" + os.sep)
        assert edge.to_path.startswith("src" + os.sep)


def test_deterministic_output(ts_project):
    def run():
        project = TypeScriptProject.load(str(ts_project / "tsconfig.json"))
        return build_graph(project.select_files("src/**/*.ts"), project, str(ts_project)).to_dict()

    assert run() == run()


def test_loader_failure_propagates(tmp_path):
    with pytest.raises(ConfigError):
        project = TypeScriptProject.load(str(tmp_path / "tsconfig.json"))
        build_graph(project.select_files("src/**/*.ts"), project, str(tmp_path))
