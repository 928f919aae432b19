import os
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..models import ImportDeclaration, SourceFile

logger = logging.getLogger(__name__)

# Directories that are never analyzed, nor accepted as import targets
IGNORED_DIRS = ('node_modules', '.git', 'venv', '.venv', '__pycache__')


class ProjectLoader(ABC):
    """
    Enumerates a project's source files and resolves their imports.

    Subclasses implement the language specific parts: reading a file's
    import declarations and mapping a declaration to a file on disk.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)
        self._imports: Dict[str, Tuple[ImportDeclaration, ...]] = {}

    def select_files(self, pattern: str) -> List[SourceFile]:
        """
        Returns the files under the project root matching a glob pattern,
        sorted by their project-relative path.
        """
        root_path = Path(self.root)
        matches = []
        for candidate in root_path.glob(pattern):
            if not candidate.is_file():
                continue
            rel_parts = candidate.relative_to(root_path).parts
            if any(part in IGNORED_DIRS for part in rel_parts[:-1]):
                continue
            matches.append(candidate)

        matches.sort(key=lambda p: p.relative_to(root_path).as_posix())
        logger.info(f"Selected {len(matches)} files matching {pattern!r} under {self.root}")
        return [SourceFile(os.path.normpath(str(p))) for p in matches]

    def get_imports(self, source_file: SourceFile) -> Tuple[ImportDeclaration, ...]:
        if source_file.path not in self._imports:
            self._imports[source_file.path] = tuple(self._read_imports(source_file))
        return self._imports[source_file.path]

    def contains(self, path: str) -> bool:
        """True if path lies under the project root and outside ignored directories."""
        try:
            rel = os.path.relpath(path, self.root)
        except ValueError:
            # Different drive on Windows
            return False
        parts = Path(rel).parts
        if not parts or parts[0] == os.pardir:
            return False
        return not any(part in IGNORED_DIRS for part in parts)

    @abstractmethod
    def _read_imports(self, source_file: SourceFile) -> List[ImportDeclaration]:
        ...

    @abstractmethod
    def resolve_import_target(self, declaration: ImportDeclaration) -> Optional[SourceFile]:
        ...
