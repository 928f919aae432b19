import os
import json
import logging
from typing import List, Optional, Tuple

from ..models import ImportDeclaration, SourceFile
from .base import ProjectLoader
from .tsconfig import DEFAULT_TSCONFIG, CompilerOptions, load_tsconfig
from .ts_scanner import grammar_for, scan_imports

logger = logging.getLogger(__name__)

DEFAULT_PATTERN = "src/**/*.ts"

TS_EXTENSIONS = ('.ts', '.tsx', '.d.ts')
JS_EXTENSIONS = ('.js', '.jsx')

# Specifier extension -> TypeScript sources it can stand for
JS_TO_TS = {
    '.js': ('.ts', '.tsx', '.d.ts'),
    '.jsx': ('.tsx', '.d.ts'),
    '.mjs': ('.mts', '.d.mts'),
    '.cjs': ('.cts', '.d.cts'),
}

SOURCE_SUFFIXES = ('.ts', '.tsx', '.mts', '.cts')
JS_SUFFIXES = ('.js', '.jsx', '.mjs', '.cjs')


def _is_relative(specifier: str) -> bool:
    return (
        specifier in ('.', '..')
        or specifier.startswith(('./', '../', '/'))
    )


class TypeScriptProject(ProjectLoader):
    """
    Resolves imports the way the TypeScript compiler does for a tsconfig:
    relative specifiers, ``paths`` aliases and ``baseUrl``, with extension
    and index file inference. Bare package names are external.
    """

    def __init__(self, options: CompilerOptions, include_type_only: bool = True,
                 include_reexports: bool = False):
        super().__init__(options.root)
        self.options = options
        self.include_type_only = include_type_only
        self.include_reexports = include_reexports
        self._path_patterns = self._sort_path_patterns()

    @classmethod
    def load(cls, config_path: str = DEFAULT_TSCONFIG, **kwargs) -> "TypeScriptProject":
        return cls(load_tsconfig(config_path), **kwargs)

    def _sort_path_patterns(self) -> List[Tuple[str, List[str]]]:
        exact = [(p, t) for p, t in self.options.paths.items() if '*' not in p]
        wildcard = [(p, t) for p, t in self.options.paths.items() if '*' in p]
        # Longest prefix before the wildcard wins
        wildcard.sort(key=lambda item: len(item[0].split('*', 1)[0]), reverse=True)
        return exact + wildcard

    def _read_imports(self, source_file: SourceFile) -> List[ImportDeclaration]:
        with open(source_file.path, 'r', encoding='utf-8', errors='replace') as f:
            text = f.read()

        declarations = []
        for found in scan_imports(text, include_reexports=self.include_reexports,
                                  grammar=grammar_for(source_file.path)):
            declarations.append(ImportDeclaration(
                specifier=found.specifier,
                source=source_file,
                line=found.line,
                is_type_only=found.is_type_only,
            ))
        return declarations

    def resolve_import_target(self, declaration: ImportDeclaration) -> Optional[SourceFile]:
        if declaration.is_type_only and not self.include_type_only:
            return None

        resolved = self._resolve_specifier(declaration.specifier, declaration.source.path)
        if resolved is None:
            return None
        if not self.contains(resolved):
            logger.debug(f"{declaration.specifier} resolves outside the project: {resolved}")
            return None
        return SourceFile(resolved)

    def _resolve_specifier(self, specifier: str, importer: str) -> Optional[str]:
        if _is_relative(specifier):
            base = os.path.join(os.path.dirname(importer), specifier)
            return self._resolve_path(os.path.normpath(base))

        for candidate in self._apply_path_patterns(specifier):
            hit = self._resolve_path(candidate)
            if hit:
                return hit

        if self.options.base_url:
            hit = self._resolve_path(os.path.normpath(os.path.join(self.options.base_url, specifier)))
            if hit:
                return hit

        return None

    def _apply_path_patterns(self, specifier: str) -> List[str]:
        base = self.options.paths_base or self.root
        for pattern, targets in self._path_patterns:
            if '*' in pattern:
                prefix, suffix = pattern.split('*', 1)
                if not (specifier.startswith(prefix) and specifier.endswith(suffix)
                        and len(specifier) >= len(prefix) + len(suffix)):
                    continue
                middle = specifier[len(prefix):len(specifier) - len(suffix)]
                substituted = [t.replace('*', middle, 1) for t in targets]
            elif specifier == pattern:
                substituted = list(targets)
            else:
                continue
            # Only the first matching pattern is used
            return [os.path.normpath(os.path.join(base, t)) for t in substituted]
        return []

    def _resolve_path(self, path: str) -> Optional[str]:
        return self._resolve_file(path) or self._resolve_directory(path)

    def _resolve_file(self, path: str) -> Optional[str]:
        stem, ext = os.path.splitext(path)
        for replacement in JS_TO_TS.get(ext, ()):
            candidate = stem + replacement
            if os.path.isfile(candidate):
                return candidate

        allowed = SOURCE_SUFFIXES + (JS_SUFFIXES if self.options.allow_js else ())
        if path.endswith(allowed) and os.path.isfile(path):
            return path

        extensions = TS_EXTENSIONS + (JS_EXTENSIONS if self.options.allow_js else ())
        for ext in extensions:
            candidate = path + ext
            if os.path.isfile(candidate):
                return candidate
        return None

    def _resolve_directory(self, path: str) -> Optional[str]:
        if not os.path.isdir(path):
            return None

        package_json = os.path.join(path, 'package.json')
        if os.path.isfile(package_json):
            try:
                with open(package_json, 'r', encoding='utf-8') as f:
                    manifest = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable {package_json}: {e}")
                manifest = {}
            for key in ('types', 'typings', 'main'):
                entry = manifest.get(key) if isinstance(manifest, dict) else None
                if isinstance(entry, str):
                    target = os.path.normpath(os.path.join(path, entry))
                    hit = self._resolve_file(target)
                    if hit is None and os.path.isdir(target):
                        hit = self._resolve_index(target)
                    if hit:
                        return hit

        return self._resolve_index(path)

    def _resolve_index(self, path: str) -> Optional[str]:
        return self._resolve_file(os.path.join(path, 'index'))
