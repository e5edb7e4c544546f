from __future__ import annotations

import argparse
import importlib.metadata
import logging
from dataclasses import replace
from pathlib import Path

logger = logging.getLogger("turbojni")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="turbojni")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="Print turbojni version.")

    p_gen = sub.add_parser(
        "gen",
        help="Generate the JNI C++ bridge for the native modules in a schema.",
    )
    p_gen.add_argument("--schema", required=True, help="Schema file (.json, or .msgpack/.mpk).")
    p_gen.add_argument("--library-name", required=True, help="Library name used for the module provider.")
    p_gen.add_argument(
        "--module-spec-name",
        required=True,
        help="Spec name; determines the include and the output file name.",
    )
    p_gen.add_argument(
        "--out",
        default=None,
        help="Output directory (default: TURBOJNI_OUT_DIR or the current directory).",
    )
    p_gen.add_argument(
        "--strict-modules",
        action="store_true",
        help="Fail when two schema files declare the same native module name.",
    )
    p_gen.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    args = parser.parse_args(argv)
    if args.cmd == "version":
        try:
            print(importlib.metadata.version("turbojni"))
        except importlib.metadata.PackageNotFoundError:
            print("0.0.0")
        return

    if args.cmd == "gen":
        from .codegen import generate, write_files
        from .config import GeneratorOptions, default_output_dir
        from .errors import TurboJniError
        from .schema import load_schema

        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

        try:
            opts = GeneratorOptions.from_env()
        except ValueError as e:
            raise SystemExit(f"invalid configuration: {e}") from None
        if args.strict_modules:
            opts = replace(opts, on_duplicate="error")

        out_dir = Path(args.out) if args.out else default_output_dir()
        try:
            schema = load_schema(args.schema)
            files = generate(args.library_name, schema, args.module_spec_name, opts)
        except TurboJniError as e:
            raise SystemExit(f"turbojni: {e}") from None

        for path in write_files(files, out_dir):
            logger.info("wrote %s", path)
            print(str(path))
        return
