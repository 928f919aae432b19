from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class SourceFile:
    path: str


@dataclass(frozen=True)
class ImportDeclaration:
    """A static import statement as written in a source file."""

    specifier: str
    source: SourceFile
    line: int = 0
    is_type_only: bool = False


@dataclass(frozen=True)
class Edge:
    from_path: str
    to_path: str

    def to_dict(self) -> Dict[str, str]:
        return {"from": self.from_path, "to": self.to_path}


@dataclass
class Graph:
    edges: List[Edge] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[Dict[str, str]]]:
        return {"edges": [edge.to_dict() for edge in self.edges]}

    def __len__(self) -> int:
        return len(self.edges)
