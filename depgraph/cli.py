import os
import sys
import logging
import argparse
from typing import List, Optional

from .builder import build_graph
from .errors import DepGraphError
from .loaders import PythonProject, TypeScriptProject
from .loaders import python as python_loader
from .loaders import typescript as typescript_loader
from .loaders.tsconfig import DEFAULT_TSCONFIG
from .utils.io_helper import emit_success, emit_error
from .writer import DEFAULT_OUTPUT, write_graph


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

# Environment Variables
LOG_LEVEL = os.getenv("DEPGRAPH_LOG_LEVEL", "WARNING")

LANGUAGE_DEFAULTS = {
    "typescript": (DEFAULT_TSCONFIG, typescript_loader.DEFAULT_PATTERN),
    "python": (python_loader.DEFAULT_CONFIG, python_loader.DEFAULT_PATTERN),
}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Write the project's file-level import graph as JSON",
    )
    parser.add_argument("--language", choices=sorted(LANGUAGE_DEFAULTS), default="typescript",
                        help="Source language of the project (default: typescript)")
    parser.add_argument("--config", help="Project resolution config "
                        "(default: tsconfig.json, or pyproject.toml for python)")
    parser.add_argument("--pattern", help="Glob selecting the files to analyze "
                        "(default: src/**/*.ts, or src/**/*.py for python)")
    parser.add_argument("--output", default=DEFAULT_OUTPUT,
                        help=f"Output JSON file (default: {DEFAULT_OUTPUT})")
    parser.add_argument("--dedupe", action="store_true",
                        help="Keep one edge per (from, to) pair")
    parser.add_argument("--include-reexports", action="store_true",
                        help="Also count 'export ... from' declarations (typescript)")
    parser.add_argument("--no-type-only", action="store_true",
                        help="Ignore 'import type' declarations (typescript)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def generate(language: str, config_path: str, pattern: str, output_path: str,
             base_dir: str, dedupe: bool = False, include_reexports: bool = False,
             include_type_only: bool = True) -> str:
    """Runs load, build and write; returns the output path."""
    if language == "python":
        project = PythonProject.load(config_path)
    else:
        project = TypeScriptProject.load(
            config_path,
            include_type_only=include_type_only,
            include_reexports=include_reexports,
        )

    files = project.select_files(pattern)
    graph = build_graph(files, project, base_dir, dedupe=dedupe)
    write_graph(graph, output_path)
    return output_path


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    default_config, default_pattern = LANGUAGE_DEFAULTS[args.language]
    config_path = args.config or default_config
    pattern = args.pattern or default_pattern

    try:
        output_path = generate(
            args.language,
            config_path,
            pattern,
            args.output,
            base_dir=os.getcwd(),
            dedupe=args.dedupe,
            include_reexports=args.include_reexports,
            include_type_only=not args.no_type_only,
        )
    except DepGraphError as e:
        emit_error(f"Configuration error: {e}")
    except OSError as e:
        emit_error(f"Filesystem error: {e}")
    else:
        emit_success(f"Dependency graph written to {output_path}")


if __name__ == "__main__":
    main()
