"""
Static import graph extraction for architecture visualization.
"""

from .builder import build_graph
from .errors import ConfigError, DepGraphError
from .models import Edge, Graph, ImportDeclaration, SourceFile
from .writer import write_graph

__version__ = "0.1.0"

__all__ = [
    "build_graph",
    "write_graph",
    "ConfigError",
    "DepGraphError",
    "Edge",
    "Graph",
    "ImportDeclaration",
    "SourceFile",
]
