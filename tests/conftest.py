import json
import textwrap

import pytest


@pytest.fixture
def make_project(tmp_path):
    """Writes a {relative path: content} mapping under tmp_path and returns the root."""
    def _make(files):
        for rel_path, content in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, (dict, list)):
                content = json.dumps(content)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return tmp_path
    return _make


@pytest.fixture
def ts_project(make_project):
    """A small TypeScript project with a plain tsconfig."""
    return make_project({
        "tsconfig.json": {"compilerOptions": {"strict": True}},
        "src/a.ts": 'import { b } from "./b";\n',
        "src/b.ts": "export const b = 1;\n",
    })
