import os
import json
import logging
from pathlib import Path

from .models import Graph

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = os.path.join("docs", "architecture", "_generated", "dependency-graph.json")


def write_graph(graph: Graph, output_path: str = DEFAULT_OUTPUT) -> Path:
    """
    Writes {"edges": [...]} as indented UTF-8 JSON, creating missing parent
    directories and replacing any previous file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(graph.to_dict(), f, indent=2, ensure_ascii=False)
        f.write('\n')

    logger.info(f"Wrote {len(graph)} edges to {path}")
    return path
