"""
Graph writer tests.
"""

import json

from depgraph.models import Edge, Graph
from depgraph.writer import write_graph


def test_creates_missing_directories(tmp_path):
    output = tmp_path / "docs" / "architecture" / "_generated" / "dependency-graph.json"
    written = write_graph(Graph([Edge("src/a.ts", "src/b.ts")]), str(output))

    assert written == output
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "edges": [{"from": "src/a.ts", "to": "src/b.ts"}]
    }


def test_existing_directory_is_fine(tmp_path):
    write_graph(Graph(), str(tmp_path / "graph.json"))
    assert json.loads((tmp_path / "graph.json").read_text(encoding="utf-8")) == {"edges": []}


def test_overwrites_previous_output(tmp_path):
    output = tmp_path / "graph.json"
    output.write_text("stale content that is longer than the new document", encoding="utf-8")
    write_graph(Graph(), str(output))
    assert output.read_text(encoding="utf-8") == '{\n  "edges": []\n}\n'


def test_indented_output(tmp_path):
    output = tmp_path / "graph.json"
    write_graph(Graph([Edge("a.ts", "b.ts"), Edge("a.ts", "b.ts")]), str(output))
    assert output.read_text(encoding="utf-8") == (
        '{\n'
        '  "edges": [\n'
        '    {\n'
        '      "from": "a.ts",\n'
        '      "to": "b.ts"\n'
        '    },\n'
        '    {\n'
        '      "from": "a.ts",\n'
        '      "to": "b.ts"\n'
        '    }\n'
        '  ]\n'
        '}\n'
    )


def test_non_ascii_paths_written_as_utf8(tmp_path):
    output = tmp_path / "graph.json"
    write_graph(Graph([Edge("src/café.ts", "src/b.ts")]), str(output))
    assert "café" in output.read_text(encoding="utf-8")
