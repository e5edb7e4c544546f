from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

from ..schema import Annotation, Method, ObjectType
from ..signature import argument_names, build_signature
from ..translate import DispatchKind, kind_of, resolve_alias

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmittedMethod:
    name: str
    kind: DispatchKind
    signature: str
    # Declared parameters only; a promise argument shows up in `signature`.
    arity: int
    argument_names: list[str]
    thunk: list[str]
    registration: str


def class_name(module_name: str) -> str:
    return f"Native{module_name}SpecJSI"


def host_function_name(module_name: str, method_name: str) -> str:
    return f"__hostFunction_{class_name(module_name)}_{method_name}"


def is_empty_constants_accessor(method: Method, aliases: Mapping[str, Annotation]) -> bool:
    if not method.is_constants_accessor:
        return False
    ret = resolve_alias(method.return_type, aliases)
    return (
        isinstance(ret, ObjectType)
        and not ret.generic
        and ret.properties is not None
        and len(ret.properties) == 0
    )


def emit_method(
    module_name: str, method: Method, aliases: Mapping[str, Annotation]
) -> EmittedMethod | None:
    """Emit the invocation thunk and registration line for one method.

    Returns None for a constants accessor with no constants; it has nothing to
    bridge.
    """
    if is_empty_constants_accessor(method, aliases):
        logger.debug("skipping empty %s on module %s", method.name, module_name)
        return None

    kind = kind_of(resolve_alias(method.return_type, aliases))
    signature = build_signature(method, aliases)
    fn_name = host_function_name(module_name, method.name)
    arity = len(method.params)

    thunk = [
        f"static facebook::jsi::Value {fn_name}(facebook::jsi::Runtime& rt, TurboModule &turboModule, const facebook::jsi::Value* args, size_t count) {{",
        f'  return static_cast<JavaTurboModule &>(turboModule).invokeJavaMethod(rt, {kind.value}, "{method.name}", "{signature}", args, count);',
        "}",
    ]
    registration = f'  methodMap_["{method.name}"] = MethodMetadata {{{arity}, {fn_name}}};'
    return EmittedMethod(
        name=method.name,
        kind=kind,
        signature=signature,
        arity=arity,
        argument_names=argument_names(method),
        thunk=thunk,
        registration=registration,
    )
