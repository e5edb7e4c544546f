"""Type translators: dispatch kinds and JNI descriptor tokens."""

from __future__ import annotations

import enum
from typing import Mapping

from .errors import UnresolvableAliasError, UnsupportedAnnotationError
from .schema import (
    ROOT_TAG,
    AliasRef,
    Annotation,
    ArrayType,
    BooleanType,
    FunctionType,
    NumberType,
    ObjectType,
    PromiseType,
    ReservedType,
    StringType,
    TypeAnnotation,
    VoidType,
)


class DispatchKind(str, enum.Enum):
    """How a returned value is unmarshalled back into a jsi::Value."""

    VOID = "VoidKind"
    BOOLEAN = "BooleanKind"
    NUMBER = "NumberKind"
    STRING = "StringKind"
    OBJECT = "ObjectKind"
    ARRAY = "ArrayKind"
    PROMISE = "PromiseKind"


class Position(enum.Enum):
    PARAM = "param"
    RETURN = "return"


DOUBLE_TOKEN = "D"
VOID_TOKEN = "V"
BOOLEAN_TOKEN = "Z"
STRING_TOKEN = "Ljava/lang/String;"
BOXED_BOOLEAN_TOKEN = "Ljava/lang/Boolean;"
BOXED_DOUBLE_TOKEN = "Ljava/lang/Double;"
PROMISE_TOKEN = "Lcom/facebook/react/bridge/Promise;"
READABLE_MAP_TOKEN = "Lcom/facebook/react/bridge/ReadableMap;"
WRITABLE_MAP_TOKEN = "Lcom/facebook/react/bridge/WritableMap;"
READABLE_ARRAY_TOKEN = "Lcom/facebook/react/bridge/ReadableArray;"
WRITABLE_ARRAY_TOKEN = "Lcom/facebook/react/bridge/WritableArray;"
CALLBACK_TOKEN = "Lcom/facebook/react/bridge/Callback;"
MAP_TOKEN = "Ljava/util/Map;"

ABI_TOKENS = frozenset(
    {
        DOUBLE_TOKEN,
        VOID_TOKEN,
        BOOLEAN_TOKEN,
        STRING_TOKEN,
        BOXED_BOOLEAN_TOKEN,
        BOXED_DOUBLE_TOKEN,
        PROMISE_TOKEN,
        READABLE_MAP_TOKEN,
        WRITABLE_MAP_TOKEN,
        READABLE_ARRAY_TOKEN,
        WRITABLE_ARRAY_TOKEN,
        CALLBACK_TOKEN,
        MAP_TOKEN,
    }
)


def _tag_of(annotation: object) -> str:
    if isinstance(annotation, TypeAnnotation):
        return annotation.tag
    return type(annotation).__name__


def _check_reserved(annotation: ReservedType) -> None:
    if annotation.name != ROOT_TAG:
        raise UnsupportedAnnotationError(
            f"{annotation.tag}:{annotation.name}", "reserved value type name"
        )


def resolve_alias(annotation: Annotation, aliases: Mapping[str, Annotation]) -> Annotation:
    """Replace an alias reference with its concrete annotation (single level)."""
    if not isinstance(annotation, AliasRef):
        return annotation
    try:
        resolved = aliases[annotation.name]
    except KeyError:
        raise UnresolvableAliasError(annotation.name) from None
    if isinstance(resolved, AliasRef):
        raise UnsupportedAnnotationError(resolved.tag, f"alias {annotation.name} refers to an alias")
    return resolved


def kind_of(annotation: Annotation) -> DispatchKind:
    """Map a return annotation to its dispatch kind."""
    if isinstance(annotation, ReservedType):
        _check_reserved(annotation)
        return DispatchKind.NUMBER
    if isinstance(annotation, VoidType):
        return DispatchKind.VOID
    if isinstance(annotation, StringType):
        return DispatchKind.STRING
    if isinstance(annotation, BooleanType):
        return DispatchKind.BOOLEAN
    if isinstance(annotation, NumberType):
        return DispatchKind.NUMBER
    if isinstance(annotation, PromiseType):
        return DispatchKind.PROMISE
    if isinstance(annotation, ObjectType):
        return DispatchKind.OBJECT
    if isinstance(annotation, ArrayType):
        return DispatchKind.ARRAY
    raise UnsupportedAnnotationError(_tag_of(annotation), "return value kind")


def abi_token_of(
    annotation: Annotation,
    nullable: bool,
    aliases: Mapping[str, Annotation],
    position: Position,
) -> str:
    """Map a parameter or return annotation to a JNI type descriptor token.

    Object and array tokens differ by position: parameters arrive as readable
    containers, results are built as writable ones.
    """
    ann = resolve_alias(annotation, aliases)
    nullable = nullable or bool(getattr(ann, "nullable", False))
    where = "method arg" if position is Position.PARAM else "method return type"

    if isinstance(ann, ReservedType):
        _check_reserved(ann)
        return DOUBLE_TOKEN
    if isinstance(ann, VoidType):
        return VOID_TOKEN
    if isinstance(ann, StringType):
        return STRING_TOKEN
    if isinstance(ann, BooleanType):
        return BOXED_BOOLEAN_TOKEN if nullable else BOOLEAN_TOKEN
    if isinstance(ann, NumberType):
        return BOXED_DOUBLE_TOKEN if nullable else DOUBLE_TOKEN
    if isinstance(ann, PromiseType):
        return PROMISE_TOKEN

    if isinstance(ann, (ObjectType, ArrayType, FunctionType)) and nullable:
        raise UnsupportedAnnotationError(f"nullable {ann.tag}", where)
    if isinstance(ann, ObjectType):
        return READABLE_MAP_TOKEN if position is Position.PARAM else WRITABLE_MAP_TOKEN
    if isinstance(ann, ArrayType):
        return READABLE_ARRAY_TOKEN if position is Position.PARAM else WRITABLE_ARRAY_TOKEN
    if isinstance(ann, FunctionType) and position is Position.PARAM:
        return CALLBACK_TOKEN
    raise UnsupportedAnnotationError(_tag_of(ann), where)
