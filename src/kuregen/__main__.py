"""CLI entry point: run `kuregen schema.json` or `python -m kuregen specs/`."""

import logging
import sys
from pathlib import Path
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    from .codegen.context import Engine, Packaging
    from .compiler.driver import CodegenDriver
    from .shared.errors import ErrorReporter, KuregenError
    from .utils.io_utils import iter_schema_files

    parser = argparse.ArgumentParser(
        prog="kuregen", description="Generate TypeScript modules from kure API schema files."
    )
    parser.add_argument("sources", nargs="+", type=Path, help="Schema files or directories to search for *.json")
    parser.add_argument("--write", action="store_true", help="Write a .ts file next to each schema instead of printing")
    parser.add_argument(
        "--engine", choices=[e.value for e in Engine], default=Engine.DENO.value,
        help="Runtime the generated modules target (default: deno)",
    )
    parser.add_argument(
        "--packaging", choices=[p.value for p in Packaging], default=None,
        help="Remote import style (default: hosted for deno, bare for node)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log generation details")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    packaging = Packaging(args.packaging) if args.packaging else None
    driver = CodegenDriver(engine=Engine(args.engine), packaging=packaging)
    reporter = ErrorReporter()

    for source in args.sources:
        if not source.exists():
            sys.stderr.write(f"kuregen: error: file not found: {source}\n")
            return 1

        for path in iter_schema_files(source):
            try:
                generated = driver.emit_file(path, write=args.write)
            except KuregenError as e:
                reporter.report(e)
                continue
            except OSError as e:
                sys.stderr.write(f"kuregen: error: could not read {path}: {e}\n")
                return 1

            if generated is not None and not args.write:
                sys.stdout.write(generated + "\n")

    if reporter.has_errors():
        sys.stderr.write(reporter.format_all_errors() + "\n")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
