import os
import logging
from typing import Iterable, Set, Tuple

from .loaders.base import ProjectLoader
from .models import Edge, Graph, SourceFile

logger = logging.getLogger(__name__)


def build_graph(files: Iterable[SourceFile], resolver: ProjectLoader,
                base_dir: str, dedupe: bool = False) -> Graph:
    """
    Builds the import graph of the given files.

    One edge per import declaration that resolves to a project file, in
    file order then declaration order, both endpoints relative to base_dir.
    Repeated imports of the same file produce repeated edges unless dedupe
    is set. Unresolved imports are skipped.
    """
    graph = Graph()
    seen: Set[Tuple[str, str]] = set()
    skipped = 0

    for source_file in files:
        from_path = os.path.relpath(source_file.path, base_dir)
        for declaration in resolver.get_imports(source_file):
            target = resolver.resolve_import_target(declaration)
            if target is None:
                skipped += 1
                logger.debug(f"{from_path}:{declaration.line} unresolved import {declaration.specifier!r}")
                continue

            to_path = os.path.relpath(target.path, base_dir)
            if dedupe:
                if (from_path, to_path) in seen:
                    continue
                seen.add((from_path, to_path))
            graph.edges.append(Edge(from_path, to_path))

    logger.info(f"Built graph with {len(graph)} edges ({skipped} imports unresolved or external)")
    return graph
