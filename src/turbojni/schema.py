"""Typed native-module schema and its loader."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar, Union

import msgpack

from .errors import SchemaLoadError, UnsupportedAnnotationError

CONSTANTS_ACCESSOR_NAME = "getConstants"
ROOT_TAG = "RootTag"

_MSGPACK_SUFFIXES = {".msgpack", ".mpk"}


class TypeAnnotation:
    """Base of the closed set of annotation variants.

    `TAG` mirrors the `type` string used by react-native codegen schemas.
    """

    TAG: ClassVar[str] = ""

    @property
    def tag(self) -> str:
        return type(self).TAG


@dataclass(frozen=True)
class VoidType(TypeAnnotation):
    TAG: ClassVar[str] = "VoidTypeAnnotation"
    nullable: bool = False


@dataclass(frozen=True)
class StringType(TypeAnnotation):
    TAG: ClassVar[str] = "StringTypeAnnotation"
    nullable: bool = False


@dataclass(frozen=True)
class BooleanType(TypeAnnotation):
    TAG: ClassVar[str] = "BooleanTypeAnnotation"
    nullable: bool = False


class NumberKind(str, enum.Enum):
    NUMBER = "NumberTypeAnnotation"
    DOUBLE = "DoubleTypeAnnotation"
    FLOAT = "FloatTypeAnnotation"
    INT32 = "Int32TypeAnnotation"


@dataclass(frozen=True)
class NumberType(TypeAnnotation):
    # All numeric sub-variants collapse to one native kind; `kind` keeps the tag.
    kind: NumberKind = NumberKind.NUMBER
    nullable: bool = False

    @property
    def tag(self) -> str:
        return self.kind.value


@dataclass(frozen=True)
class ReservedType(TypeAnnotation):
    TAG: ClassVar[str] = "ReservedFunctionValueTypeAnnotation"
    name: str = ROOT_TAG
    nullable: bool = False


@dataclass(frozen=True)
class OpaqueType(TypeAnnotation):
    """A nested annotation nothing translates (e.g. an array's `AnyTypeAnnotation` element).

    Translators reject it like any other unsupported tag.
    """

    type_name: str = ""
    nullable: bool = False

    @property
    def tag(self) -> str:
        return self.type_name


@dataclass(frozen=True)
class ObjectProperty:
    name: str
    annotation: "Annotation | OpaqueType"
    optional: bool = False


@dataclass(frozen=True)
class ObjectType(TypeAnnotation):
    # `properties` is None for generic objects and for objects declared without a shape.
    properties: tuple[ObjectProperty, ...] | None = None
    generic: bool = False
    nullable: bool = False

    @property
    def tag(self) -> str:
        return "GenericObjectTypeAnnotation" if self.generic else "ObjectTypeAnnotation"


@dataclass(frozen=True)
class ArrayType(TypeAnnotation):
    TAG: ClassVar[str] = "ArrayTypeAnnotation"
    element: "Annotation | OpaqueType | None" = None
    nullable: bool = False


@dataclass(frozen=True)
class FunctionType(TypeAnnotation):
    TAG: ClassVar[str] = "FunctionTypeAnnotation"
    params: tuple["Param", ...] = ()
    return_type: "Annotation | OpaqueType | None" = None
    nullable: bool = False


@dataclass(frozen=True)
class PromiseType(TypeAnnotation):
    TAG: ClassVar[str] = "GenericPromiseTypeAnnotation"
    nullable: bool = False


@dataclass(frozen=True)
class AliasRef(TypeAnnotation):
    TAG: ClassVar[str] = "TypeAliasTypeAnnotation"
    name: str = ""
    nullable: bool = False


Annotation = Union[
    VoidType,
    StringType,
    BooleanType,
    NumberType,
    ReservedType,
    ObjectType,
    ArrayType,
    FunctionType,
    PromiseType,
    AliasRef,
]


@dataclass(frozen=True)
class Param:
    name: str
    # Only callback parameters can hold an OpaqueType; method parameters are parsed strictly.
    annotation: "Annotation | OpaqueType"
    nullable: bool = False


@dataclass(frozen=True)
class Method:
    name: str
    params: tuple[Param, ...]
    return_type: Annotation
    is_constants_accessor: bool = False


@dataclass(frozen=True)
class NativeModule:
    name: str
    methods: tuple[Method, ...]
    # alias name -> concrete (non-alias) annotation
    aliases: dict[str, Annotation]


@dataclass(frozen=True)
class SchemaFile:
    # None when the file declares no native modules (e.g. components only).
    native_modules: dict[str, NativeModule] | None


@dataclass(frozen=True)
class Schema:
    # schema file name -> file, in document order
    modules: dict[str, SchemaFile]

    @classmethod
    def from_dict(cls, obj: Any) -> "Schema":
        """Build a schema from the react-native codegen JSON shape."""
        if not isinstance(obj, dict) or not isinstance(obj.get("modules"), dict):
            raise SchemaLoadError("schema: expected an object with a 'modules' mapping")

        files: dict[str, SchemaFile] = {}
        for file_name, raw_file in obj["modules"].items():
            if not isinstance(raw_file, dict):
                raise SchemaLoadError(f"schema: module file {file_name!r} is not an object")
            raw_modules = raw_file.get("nativeModules")
            if raw_modules is None:
                files[file_name] = SchemaFile(native_modules=None)
                continue
            if not isinstance(raw_modules, dict):
                raise SchemaLoadError(f"schema: {file_name}.nativeModules is not an object")
            files[file_name] = SchemaFile(
                native_modules={
                    name: _parse_module(name, raw) for name, raw in raw_modules.items()
                }
            )
        return cls(modules=files)


def load_schema(path: str | Path) -> Schema:
    """Read a schema file (JSON, or MessagePack for `.msgpack`/`.mpk`)."""
    path = Path(path)
    if not path.exists():
        raise SchemaLoadError(f"schema file not found: {path}")

    data = path.read_bytes()
    try:
        if path.suffix.lower() in _MSGPACK_SUFFIXES:
            obj = msgpack.unpackb(data, raw=False)
        else:
            obj = json.loads(data.decode("utf-8"))
    except Exception as e:  # noqa: BLE001 - boundary parse
        raise SchemaLoadError(f"failed to parse schema {path}: {e}") from e
    return Schema.from_dict(obj)


def _parse_module(name: str, raw: Any) -> NativeModule:
    if not isinstance(raw, dict):
        raise SchemaLoadError(f"schema: native module {name!r} is not an object")

    aliases: dict[str, Annotation] = {}
    raw_aliases = raw.get("aliases") or {}
    if not isinstance(raw_aliases, dict):
        raise SchemaLoadError(f"schema: {name}.aliases is not an object")
    for alias_name, raw_alias in raw_aliases.items():
        ann = parse_annotation(raw_alias)
        if isinstance(ann, AliasRef):
            # Resolution is single-level.
            raise SchemaLoadError(f"schema: alias {alias_name!r} refers to another alias")
        aliases[alias_name] = ann

    raw_props = raw.get("properties")
    if not isinstance(raw_props, list):
        raise SchemaLoadError(f"schema: {name}.properties is not a list")
    methods = tuple(_parse_method(name, p) for p in raw_props)
    return NativeModule(name=name, methods=methods, aliases=aliases)


def _parse_method(module_name: str, raw: Any) -> Method:
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise SchemaLoadError(f"schema: {module_name} has a method without a name")
    name = raw["name"]
    fn = raw.get("typeAnnotation")
    if not isinstance(fn, dict) or fn.get("type") != FunctionType.TAG:
        raise SchemaLoadError(f"schema: {module_name}.{name} is not a function")
    params = fn.get("params") or []
    if not isinstance(params, list):
        raise SchemaLoadError(f"schema: {module_name}.{name} params is not a list")
    ret = fn.get("returnTypeAnnotation")
    if ret is None:
        raise SchemaLoadError(f"schema: {module_name}.{name} has no return type")
    return Method(
        name=name,
        params=tuple(_parse_param(p, strict=True) for p in params),
        return_type=parse_annotation(ret),
        is_constants_accessor=(name == CONSTANTS_ACCESSOR_NAME),
    )


def _parse_param(raw: Any, *, strict: bool) -> Param:
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise SchemaLoadError("schema: function parameter without a name")
    return Param(
        name=raw["name"],
        annotation=parse_annotation(raw.get("typeAnnotation"), strict=strict),
        nullable=bool(raw.get("nullable", False)),
    )


def _parse_property(raw: Any) -> ObjectProperty:
    if not isinstance(raw, dict) or not isinstance(raw.get("name"), str):
        raise SchemaLoadError("schema: object property without a name")
    return ObjectProperty(
        name=raw["name"],
        annotation=parse_annotation(raw.get("typeAnnotation"), strict=False),
        optional=bool(raw.get("optional", False)),
    )


def parse_annotation(raw: Any, *, strict: bool = True) -> Annotation | OpaqueType:
    """Convert one `typeAnnotation` object into its variant.

    With `strict=False` an unknown tag becomes an `OpaqueType` instead of an
    error. Types nested in arrays, objects and callbacks are parsed that way;
    they never reach a translator.
    """
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        raise SchemaLoadError("schema: type annotation without a 'type'")
    t = raw["type"]
    nullable = bool(raw.get("nullable", False))

    if t == VoidType.TAG:
        return VoidType(nullable=nullable)
    if t == StringType.TAG:
        return StringType(nullable=nullable)
    if t == BooleanType.TAG:
        return BooleanType(nullable=nullable)
    if t in {k.value for k in NumberKind}:
        return NumberType(kind=NumberKind(t), nullable=nullable)
    if t == ReservedType.TAG:
        return ReservedType(name=str(raw.get("name", "")), nullable=nullable)
    if t in {"ObjectTypeAnnotation", "GenericObjectTypeAnnotation"}:
        props = raw.get("properties")
        parsed: tuple[ObjectProperty, ...] | None = None
        if props is not None:
            if not isinstance(props, list):
                raise SchemaLoadError("schema: object properties is not a list")
            parsed = tuple(_parse_property(p) for p in props)
        return ObjectType(
            properties=parsed,
            generic=(t == "GenericObjectTypeAnnotation"),
            nullable=nullable,
        )
    if t == ArrayType.TAG:
        elem = raw.get("elementType")
        return ArrayType(
            element=parse_annotation(elem, strict=False) if elem is not None else None,
            nullable=nullable,
        )
    if t == FunctionType.TAG:
        params = raw.get("params") or []
        if not isinstance(params, list):
            raise SchemaLoadError("schema: function params is not a list")
        ret = raw.get("returnTypeAnnotation")
        return FunctionType(
            params=tuple(_parse_param(p, strict=False) for p in params),
            return_type=parse_annotation(ret, strict=False) if ret is not None else None,
            nullable=nullable,
        )
    if t == PromiseType.TAG:
        return PromiseType(nullable=nullable)
    if t == AliasRef.TAG:
        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise SchemaLoadError("schema: type alias reference without a name")
        return AliasRef(name=name, nullable=nullable)

    if not strict:
        return OpaqueType(type_name=t, nullable=nullable)
    raise UnsupportedAnnotationError(t, "schema")
