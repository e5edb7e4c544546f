from __future__ import annotations

import logging
from pathlib import Path

from ..config import DUPLICATE_POLICIES, GeneratorOptions
from ..errors import DuplicateModuleError
from ..schema import NativeModule, Schema
from .document import CppDocument
from .methods import class_name, emit_method

logger = logging.getLogger(__name__)


def flatten_modules(schema: Schema, on_duplicate: str = "overwrite") -> dict[str, NativeModule]:
    """Collect native modules from every schema file into one namespace.

    Names keep the position they were first seen at. With `on_duplicate="overwrite"`
    a later module with the same name replaces the earlier one.
    """
    if on_duplicate not in DUPLICATE_POLICIES:
        raise ValueError(
            f"on_duplicate must be one of {', '.join(DUPLICATE_POLICIES)}; got {on_duplicate!r}"
        )
    out: dict[str, NativeModule] = {}
    for file_name, schema_file in schema.modules.items():
        if schema_file.native_modules is None:
            continue
        for name, module in schema_file.native_modules.items():
            if name in out:
                if on_duplicate == "error":
                    raise DuplicateModuleError(name)
                logger.warning("native module %s redeclared in %s; keeping the later one", name, file_name)
            out[name] = module
    return out


def _module_blocks(module: NativeModule) -> list[list[str]]:
    blocks: list[list[str]] = []
    registrations: list[str] = []
    for method in module.methods:
        emitted = emit_method(module.name, method, module.aliases)
        if emitted is None:
            continue
        blocks.append(emitted.thunk)
        registrations.append(emitted.registration)

    cls = class_name(module.name)
    blocks.append(
        [
            f"{cls}::{cls}(const JavaTurboModule::InitParams &params)",
            "  : JavaTurboModule(params) {",
            *registrations,
            "}",
        ]
    )
    return blocks


def _provider_block(library_name: str, modules: dict[str, NativeModule]) -> list[str]:
    lines = [
        f"std::shared_ptr<TurboModule> {library_name}_ModuleProvider(const std::string moduleName, const JavaTurboModule::InitParams &params) {{",
    ]
    for name in modules:
        lines.append(f'  if (moduleName == "{name}") {{')
        lines.append(f"    return std::make_shared<{class_name(name)}>(params);")
        lines.append("  }")
    lines.append("  return nullptr;")
    lines.append("}")
    return lines


def assemble(
    library_name: str,
    module_spec_name: str,
    modules: dict[str, NativeModule],
    options: GeneratorOptions | None = None,
) -> CppDocument:
    opts = options or GeneratorOptions()
    doc = CppDocument(include=f"{module_spec_name}.{opts.header_ext}")
    for module in modules.values():
        for block in _module_blocks(module):
            doc.add_block(block)
    doc.add_block(_provider_block(library_name, modules))
    return doc


def generate(
    library_name: str,
    schema: Schema,
    module_spec_name: str,
    options: GeneratorOptions | None = None,
) -> dict[str, str]:
    """Generate the JNI C++ bridge for every native module in `schema`.

    Returns a single `{file name: contents}` entry. Translation errors propagate;
    no partial output is produced.
    """
    opts = options or GeneratorOptions()
    modules = flatten_modules(schema, on_duplicate=opts.on_duplicate)
    logger.debug(
        "generating %s bridge for %d module(s), %d method(s)",
        library_name,
        len(modules),
        sum(len(m.methods) for m in modules.values()),
    )
    doc = assemble(library_name, module_spec_name, modules, opts)
    file_name = f"{module_spec_name}-generated.{opts.source_ext}"
    return {file_name: doc.render()}


def write_files(files: dict[str, str], out_dir: Path) -> list[Path]:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, text in files.items():
        path = out_dir / name
        path.write_text(text, encoding="utf-8")
        written.append(path)
    return written
