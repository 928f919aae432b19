import ast
import os
import logging
from typing import List, Optional

from ..errors import ConfigError
from ..models import ImportDeclaration, SourceFile
from .base import ProjectLoader

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "pyproject.toml"
DEFAULT_PATTERN = "src/**/*.py"


def _split_specifier(specifier: str):
    """'..pkg.mod' -> (2, ['pkg', 'mod'])"""
    level = len(specifier) - len(specifier.lstrip('.'))
    rest = specifier[level:]
    return level, [part for part in rest.split('.') if part]


class PythonProject(ProjectLoader):
    """
    Resolves Python imports against the project's module roots: the project
    root itself and ``src/`` when it exists. Only imports in the module body
    are considered.
    """

    def __init__(self, root: str):
        super().__init__(root)
        self.module_roots = [self.root]
        src_dir = os.path.join(self.root, 'src')
        if os.path.isdir(src_dir):
            self.module_roots.append(src_dir)

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG) -> "PythonProject":
        path = os.path.abspath(config_path)
        if os.path.isdir(path):
            return cls(path)
        if not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {config_path}")
        return cls(os.path.dirname(path))

    def _read_imports(self, source_file: SourceFile) -> List[ImportDeclaration]:
        try:
            with open(source_file.path, 'r', encoding='utf-8') as f:
                tree = ast.parse(f.read(), filename=source_file.path)
        except (SyntaxError, ValueError) as e:
            logger.warning(f"Skipping unparseable file {source_file.path}: {e}")
            return []

        imports = []
        for node in tree.body:
            if isinstance(node, ast.Import):
                for alias in node.names:
                    imports.append(ImportDeclaration(alias.name, source_file, node.lineno))
            elif isinstance(node, ast.ImportFrom):
                prefix = '.' * node.level + (node.module or '')
                grouped = False
                for alias in node.names:
                    submodule = f"{prefix}.{alias.name}" if node.module else prefix + alias.name
                    if alias.name != '*' and self._module_path(submodule, source_file.path):
                        imports.append(ImportDeclaration(submodule, source_file, node.lineno))
                    elif not grouped:
                        imports.append(ImportDeclaration(prefix, source_file, node.lineno))
                        grouped = True
        return imports

    def resolve_import_target(self, declaration: ImportDeclaration) -> Optional[SourceFile]:
        resolved = self._module_path(declaration.specifier, declaration.source.path)
        if resolved is None or not self.contains(resolved):
            return None
        return SourceFile(resolved)

    def _module_path(self, specifier: str, importer: str) -> Optional[str]:
        level, parts = _split_specifier(specifier)
        if level:
            base = os.path.dirname(importer)
            for _ in range(level - 1):
                base = os.path.dirname(base)
            bases = [base]
        else:
            if not parts:
                return None
            bases = self.module_roots

        for base in bases:
            target = os.path.join(base, *parts)
            candidates = [os.path.join(target, '__init__.py')]
            if parts:
                candidates.insert(0, target + '.py')
            for candidate in candidates:
                if os.path.isfile(candidate):
                    return os.path.normpath(candidate)
        return None
