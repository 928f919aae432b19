"""
Static import extraction for TypeScript and JavaScript sources.

Files are parsed with tree-sitter and only the statements directly under
the program node are read, so ``import ... from "x"`` declarations (and
optionally ``export ... from "x"`` re-exports) count, while ``import()``
calls, ``require()``, ``import x = require()`` and imports nested in
``declare module`` blocks do not.
"""

import os
import logging
from typing import Dict, List, NamedTuple, Optional

from tree_sitter import Node, Parser
from tree_sitter_language_pack import get_language

logger = logging.getLogger(__name__)

# File extension -> tree-sitter grammar
GRAMMARS = {
    '.ts': 'typescript',
    '.mts': 'typescript',
    '.cts': 'typescript',
    '.tsx': 'tsx',
    '.js': 'javascript',
    '.jsx': 'javascript',
    '.mjs': 'javascript',
    '.cjs': 'javascript',
}

_parsers: Dict[str, Parser] = {}


class ScannedImport(NamedTuple):
    specifier: str
    line: int
    is_type_only: bool
    is_reexport: bool


def grammar_for(path: str) -> str:
    return GRAMMARS.get(os.path.splitext(path)[1].lower(), 'typescript')


def get_parser(grammar: str) -> Parser:
    if grammar not in _parsers:
        _parsers[grammar] = Parser(get_language(grammar))
        logger.debug(f"Loaded {grammar} parser")
    return _parsers[grammar]


def _string_value(node: Node) -> str:
    # String nodes keep their quotes
    return node.text.decode('utf-8', errors='replace')[1:-1]


def _has_type_keyword(node: Node) -> bool:
    """True for ``import type ...`` / ``export type ...``, not per-name modifiers."""
    return any(child.type == 'type' for child in node.children)


def _source_of(node: Node) -> Optional[Node]:
    source = node.child_by_field_name('source')
    if source is None or source.type != 'string':
        return None
    return source


def scan_imports(text: str, include_reexports: bool = False,
                 grammar: str = 'typescript') -> List[ScannedImport]:
    """Returns the top-level static import declarations of a module, in order."""
    tree = get_parser(grammar).parse(text.encode('utf-8'))

    found: List[ScannedImport] = []
    for node in tree.root_node.children:
        if node.type == 'import_statement':
            is_reexport = False
        elif node.type == 'export_statement' and include_reexports:
            is_reexport = True
        else:
            continue

        source = _source_of(node)
        if source is None:
            continue
        found.append(ScannedImport(
            _string_value(source),
            node.start_point[0] + 1,
            _has_type_keyword(node),
            is_reexport,
        ))
    return found
