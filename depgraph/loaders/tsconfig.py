"""
tsconfig.json loading.

tsconfig files are JSON with comments and trailing commas, and may inherit
from other configs through ``extends``. Only the compiler options that
affect module resolution are kept.
"""

import os
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TSCONFIG = "tsconfig.json"


@dataclass
class CompilerOptions:
    config_path: str
    base_url: Optional[str] = None
    paths: Dict[str, List[str]] = field(default_factory=dict)
    # Directory that ``paths`` substitutions are relative to
    paths_base: Optional[str] = None
    # None until some config in the chain sets allowJs
    allow_js: Optional[bool] = None

    @property
    def root(self) -> str:
        return os.path.dirname(self.config_path)


def strip_jsonc(text: str) -> str:
    """Removes comments and trailing commas, leaving string contents untouched."""
    out = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '"':
            j = i + 1
            while j < n and text[j] != '"':
                j += 2 if text[j] == '\\' else 1
            out.append(text[i:j + 1])
            i = j + 1
        elif text.startswith('//', i):
            while i < n and text[i] != '\n':
                i += 1
        elif text.startswith('/*', i):
            end = text.find('*/', i + 2)
            i = n if end == -1 else end + 2
        else:
            out.append(ch)
            i += 1

    stripped = ''.join(out)
    result = []
    i = 0
    n = len(stripped)
    while i < n:
        ch = stripped[i]
        if ch == '"':
            j = i + 1
            while j < n and stripped[j] != '"':
                j += 2 if stripped[j] == '\\' else 1
            result.append(stripped[i:j + 1])
            i = j + 1
            continue
        if ch == ',':
            j = i + 1
            while j < n and stripped[j].isspace():
                j += 1
            if j < n and stripped[j] in '}]':
                i += 1
                continue
        result.append(ch)
        i += 1
    return ''.join(result)


def _read_config_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            raw = f.read()
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config file {path}: {e}")

    try:
        data = json.loads(strip_jsonc(raw))
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    return data


def _locate_extends(reference: str, config_dir: str) -> str:
    if reference.startswith(('./', '../', '/')) or os.path.isabs(reference):
        candidate = os.path.normpath(os.path.join(config_dir, reference))
        candidates = [candidate]
        if not candidate.endswith('.json'):
            candidates.append(candidate + '.json')
        for path in candidates:
            if os.path.isfile(path):
                return path
        raise ConfigError(f"Extended config not found: {reference} (from {config_dir})")

    # Package reference, looked up in node_modules like the compiler does
    directory = config_dir
    while True:
        base = os.path.join(directory, 'node_modules', reference)
        for path in (base, base + '.json', os.path.join(base, 'tsconfig.json')):
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(directory)
        if parent == directory:
            break
        directory = parent
    raise ConfigError(f"Extended config package not found: {reference}")


def _collect_options(path: str, seen: List[str]) -> CompilerOptions:
    if path in seen:
        chain = " -> ".join(seen + [path])
        raise ConfigError(f"Circular extends in tsconfig: {chain}")
    seen = seen + [path]

    data = _read_config_file(path)
    config_dir = os.path.dirname(path)

    options = CompilerOptions(config_path=path)

    extends = data.get('extends')
    if isinstance(extends, str):
        extends = [extends]
    if extends is not None and not isinstance(extends, list):
        raise ConfigError(f"'extends' in {path} must be a string or a list")

    for reference in extends or []:
        if not isinstance(reference, str):
            raise ConfigError(f"'extends' entries in {path} must be strings")
        base_path = _locate_extends(reference, config_dir)
        logger.debug(f"{path} extends {base_path}")
        inherited = _collect_options(base_path, seen)
        if inherited.base_url is not None:
            options.base_url = inherited.base_url
        if inherited.paths:
            options.paths = inherited.paths
            options.paths_base = inherited.paths_base
        if inherited.allow_js is not None:
            options.allow_js = inherited.allow_js

    compiler_options = data.get('compilerOptions') or {}
    if not isinstance(compiler_options, dict):
        raise ConfigError(f"'compilerOptions' in {path} must be an object")

    if 'baseUrl' in compiler_options:
        if not isinstance(compiler_options['baseUrl'], str):
            raise ConfigError(f"'compilerOptions.baseUrl' in {path} must be a string")
        options.base_url = os.path.normpath(os.path.join(config_dir, compiler_options['baseUrl']))

    if 'paths' in compiler_options:
        raw_paths = compiler_options['paths'] or {}
        if not isinstance(raw_paths, dict):
            raise ConfigError(f"'compilerOptions.paths' in {path} must be an object")
        paths = {}
        for pattern, targets in raw_paths.items():
            if isinstance(targets, str):
                targets = [targets]
            if not isinstance(targets, list):
                raise ConfigError(
                    f"'compilerOptions.paths[{pattern!r}]' in {path} must be a string or a list"
                )
            paths[pattern] = [t for t in targets if isinstance(t, str)]
        options.paths = paths
        options.paths_base = config_dir

    if 'allowJs' in compiler_options:
        options.allow_js = bool(compiler_options['allowJs'])

    return options


def load_tsconfig(config_path: str = DEFAULT_TSCONFIG) -> CompilerOptions:
    """
    Reads a tsconfig file and the chain of configs it extends.
    Raises ConfigError when any file in the chain is missing or malformed.
    """
    path = os.path.abspath(config_path)
    options = _collect_options(path, [])
    # The extending file defines the project, whatever it inherits
    options.config_path = path
    options.allow_js = bool(options.allow_js)
    if options.base_url is not None:
        # paths are relative to baseUrl whenever one is set
        options.paths_base = options.base_url
    logger.info(
        f"Loaded {path}: baseUrl={options.base_url}, "
        f"{len(options.paths)} path patterns, allowJs={options.allow_js}"
    )
    return options
