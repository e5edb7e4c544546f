from __future__ import annotations

from typing import Mapping

from .schema import Annotation, Method, PromiseType, VoidType
from .translate import MAP_TOKEN, Position, abi_token_of

PROMISE_ARG_NAME = "promise"


def is_promise_return(method: Method) -> bool:
    return isinstance(method.return_type, PromiseType)


def build_signature(method: Method, aliases: Mapping[str, Annotation]) -> str:
    """Build the JNI method descriptor, e.g. `(DD)D`.

    Promise-returning methods are void on the Java side and receive the promise
    as an extra trailing argument.
    """
    ret: Annotation = method.return_type
    parts = [
        abi_token_of(p.annotation, p.nullable, aliases, Position.PARAM) for p in method.params
    ]
    if is_promise_return(method):
        ret = VoidType(nullable=False)
        parts.append(abi_token_of(method.return_type, False, aliases, Position.PARAM))

    if method.is_constants_accessor:
        ret_token = MAP_TOKEN
    else:
        ret_token = abi_token_of(ret, False, aliases, Position.RETURN)
    return f"({''.join(parts)}){ret_token}"


def argument_names(method: Method) -> list[str]:
    names = [p.name for p in method.params]
    if is_promise_return(method):
        names.append(PROMISE_ARG_NAME)
    return names
