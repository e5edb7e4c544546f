from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

import pytest

from turbojni.codegen import flatten_modules, generate, write_files
from turbojni.config import GeneratorOptions
from turbojni.errors import DuplicateModuleError, UnsupportedAnnotationError
from turbojni.schema import (
    Method,
    NativeModule,
    NumberType,
    ObjectType,
    Param,
    Schema,
    SchemaFile,
    StringType,
    TypeAnnotation,
    VoidType,
)


@dataclass(frozen=True)
class Int64Type(TypeAnnotation):
    TAG: ClassVar[str] = "Int64TypeAnnotation"
    nullable: bool = False


def _module(name, *method_names, aliases=None):
    methods = tuple(
        Method(name=m, params=(Param(name="s", annotation=StringType()),), return_type=VoidType())
        for m in method_names
    )
    return NativeModule(name=name, methods=methods, aliases=aliases or {})


def _schema(*files):
    return Schema(
        modules={
            f"File{i}": SchemaFile(native_modules=mods if mods is None else {m.name: m for m in mods})
            for i, mods in enumerate(files)
        }
    )


def test_generate_calc_golden(calc_schema_dict):
    files = generate("CalcLib", Schema.from_dict(calc_schema_dict), "CalcSpec")
    assert list(files) == ["CalcSpec-generated.cpp"]
    expected = "\n".join(
        [
            "/**",
            " * Copyright (c) Facebook, Inc. and its affiliates.",
            " *",
            " * This source code is licensed under the MIT license found in the",
            " * LICENSE file in the root directory of this source tree.",
            " *",
            " * @generated by turbojni",
            " */",
            "",
            '#include "CalcSpec.h"',
            "",
            "namespace facebook {",
            "namespace react {",
            "",
            "static facebook::jsi::Value __hostFunction_NativeCalcSpecJSI_add(facebook::jsi::Runtime& rt, TurboModule &turboModule, const facebook::jsi::Value* args, size_t count) {",
            '  return static_cast<JavaTurboModule &>(turboModule).invokeJavaMethod(rt, NumberKind, "add", "(DD)D", args, count);',
            "}",
            "",
            "NativeCalcSpecJSI::NativeCalcSpecJSI(const JavaTurboModule::InitParams &params)",
            "  : JavaTurboModule(params) {",
            '  methodMap_["add"] = MethodMetadata {2, __hostFunction_NativeCalcSpecJSI_add};',
            "}",
            "",
            "std::shared_ptr<TurboModule> CalcLib_ModuleProvider(const std::string moduleName, const JavaTurboModule::InitParams &params) {",
            '  if (moduleName == "Calc") {',
            "    return std::make_shared<NativeCalcSpecJSI>(params);",
            "  }",
            "  return nullptr;",
            "}",
            "",
            "} // namespace react",
            "} // namespace facebook",
            "",
        ]
    )
    assert files["CalcSpec-generated.cpp"] == expected


def test_registration_and_thunk_order_follow_declaration():
    schema = _schema([_module("Log", "warn", "info", "error")])
    text = next(iter(generate("L", schema, "LogSpec").values()))

    regs = [line for line in text.splitlines() if "methodMap_" in line]
    assert [r.split('"')[1] for r in regs] == ["warn", "info", "error"]
    thunks = [line for line in text.splitlines() if line.startswith("static facebook::jsi::Value")]
    assert [t.split("_NativeLogSpecJSI_")[1].split("(")[0] for t in thunks] == ["warn", "info", "error"]


def test_module_order_is_first_seen_across_files():
    schema = _schema([_module("B", "x"), _module("A", "y")], None, [_module("C", "z")])
    assert list(flatten_modules(schema)) == ["B", "A", "C"]

    text = next(iter(generate("Lib", schema, "Spec").values()))
    lookups = [line.strip() for line in text.splitlines() if "moduleName ==" in line]
    assert lookups == [
        'if (moduleName == "B") {',
        'if (moduleName == "A") {',
        'if (moduleName == "C") {',
    ]
    assert text.index("NativeBSpecJSI::NativeBSpecJSI") < text.index("NativeASpecJSI::NativeASpecJSI")
    assert text.index("NativeASpecJSI::NativeASpecJSI") < text.index("NativeCSpecJSI::NativeCSpecJSI")


def test_duplicate_module_overwrites_in_place_by_default(caplog):
    first = _module("Dup", "old")
    second = _module("Dup", "new")
    schema = _schema([first, _module("Other", "o")], [second])

    with caplog.at_level(logging.WARNING, logger="turbojni"):
        flat = flatten_modules(schema)
    assert list(flat) == ["Dup", "Other"]
    assert flat["Dup"] is second
    assert "Dup" in caplog.text

    text = next(iter(generate("Lib", schema, "Spec").values()))
    assert '"new"' in text
    assert '"old"' not in text
    assert text.count('if (moduleName == "Dup")') == 1


def test_duplicate_module_can_be_an_error():
    schema = _schema([_module("Dup", "a")], [_module("Dup", "b")])
    with pytest.raises(DuplicateModuleError) as ei:
        generate("Lib", schema, "Spec", GeneratorOptions(on_duplicate="error"))
    assert ei.value.module == "Dup"


def test_empty_constants_accessor_has_no_registration():
    empty = Method(
        name="getConstants",
        params=(),
        return_type=ObjectType(properties=()),
        is_constants_accessor=True,
    )
    ping = Method(name="ping", params=(), return_type=VoidType())
    schema = _schema([NativeModule(name="M", methods=(empty, ping), aliases={})])

    text = next(iter(generate("Lib", schema, "Spec").values()))
    assert "getConstants" not in text
    assert '  methodMap_["ping"] = MethodMetadata {0, __hostFunction_NativeMSpecJSI_ping};' in text


def test_unknown_annotation_aborts_generation():
    bad = Method(name="big", params=(Param(name="n", annotation=Int64Type()),), return_type=NumberType())
    schema = _schema([NativeModule(name="M", methods=(bad,), aliases={})])

    with pytest.raises(UnsupportedAnnotationError, match="Int64TypeAnnotation"):
        generate("Lib", schema, "Spec")


def test_options_control_extensions():
    schema = _schema([_module("M", "a")])
    files = generate("Lib", schema, "Spec", GeneratorOptions(source_ext="cc", header_ext="hpp"))
    assert list(files) == ["Spec-generated.cc"]
    assert '#include "Spec.hpp"' in files["Spec-generated.cc"]


def test_schema_without_native_modules_still_has_provider():
    text = next(iter(generate("Lib", _schema(None), "Spec").values()))
    assert "Lib_ModuleProvider" in text
    assert "  return nullptr;" in text
    assert "JavaTurboModule(params)" not in text


def test_write_files(tmp_path: Path):
    out = tmp_path / "gen" / "jni"
    written = write_files({"Spec-generated.cpp": "// x\n"}, out)
    assert written == [out / "Spec-generated.cpp"]
    assert written[0].read_text(encoding="utf-8") == "// x\n"


def test_array_of_unknown_element_type_is_a_readable_array():
    schema = Schema.from_dict(
        {
            "modules": {
                "NativeStore": {
                    "nativeModules": {
                        "Store": {
                            "aliases": {},
                            "properties": [
                                {
                                    "name": "put",
                                    "typeAnnotation": {
                                        "type": "FunctionTypeAnnotation",
                                        "params": [
                                            {
                                                "name": "items",
                                                "typeAnnotation": {
                                                    "type": "ArrayTypeAnnotation",
                                                    "elementType": {"type": "AnyTypeAnnotation"},
                                                },
                                            }
                                        ],
                                        "returnTypeAnnotation": {"type": "VoidTypeAnnotation"},
                                    },
                                }
                            ],
                        }
                    }
                }
            }
        }
    )
    text = next(iter(generate("Lib", schema, "Spec").values()))
    assert '"put", "(Lcom/facebook/react/bridge/ReadableArray;)V"' in text


def test_flatten_modules_rejects_unknown_policy():
    with pytest.raises(ValueError, match="on_duplicate"):
        flatten_modules(_schema([_module("M", "a")]), on_duplicate="ignore")
