"""Descriptors — Definition/Descriptor route tree and its verb-less RPC siblings.

Invariants:
    - All records are frozen; every sequence is stored as a tuple
    - A Descriptor owns its child Descriptors (tree, no sharing required)
    - simple_descriptor()/simple_rpc_descriptor() yield exactly one
      Definition/RPCAction consuming and producing (MIME.ALL,)
    - Path joining and consumes/produces inheritance live in core.resolve,
      not here: these records only describe

Design Decisions:
    - Definition and RPCAction kept as separate types (no optional method)
      so RPC trees cannot carry verbs by accident
"""

from dataclasses import dataclass
from typing import Any, Callable

from apibind.core.bindings import Parameter, Result
from apibind.core.domain_types import MIME, Method

_TUPLE_FIELDS = (
    "parameters", "results", "consumes", "produces", "error_produces",
    "tags", "examples", "definitions", "actions", "children",
)


class _Frozen:
    """Converts list-valued fields of a frozen dataclass to tuples.

    A lone string (e.g. consumes=MIME.JSON) becomes a one-element tuple.
    """

    def __post_init__(self):
        for name in _TUPLE_FIELDS:
            if hasattr(self, name):
                value = getattr(self, name)
                if isinstance(value, str):
                    value = (value,)
                object.__setattr__(self, name, tuple(value))


@dataclass(frozen=True)
class Example:
    """A sample handler output for documentation."""
    description: str
    instance: Any = None


@dataclass(frozen=True)
class Definition(_Frozen):
    """One verb bound to one handler."""
    method: Method
    function: Callable | None = None
    parameters: tuple[Parameter, ...] = ()
    results: tuple[Result, ...] = ()
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    summary: str = ""
    description: str = ""
    error_produces: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()
    examples: tuple[Example, ...] = ()


@dataclass(frozen=True)
class Descriptor(_Frozen):
    """Route tree node: definitions and child descriptors under one path."""
    path: str = ""
    description: str = ""
    consumes: tuple[str, ...] = ()  # defaults for descendants
    produces: tuple[str, ...] = ()
    definitions: tuple[Definition, ...] = ()
    children: tuple["Descriptor", ...] = ()
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class RPCAction(_Frozen):
    """One handler for point-to-point invocation."""
    function: Callable | None = None
    parameters: tuple[Parameter, ...] = ()
    results: tuple[Result, ...] = ()
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class RPCDescriptor(_Frozen):
    """RPC tree node: actions and child descriptors under one path."""
    path: str = ""
    description: str = ""
    consumes: tuple[str, ...] = ()
    produces: tuple[str, ...] = ()
    actions: tuple[RPCAction, ...] = ()
    children: tuple["RPCDescriptor", ...] = ()


# ─── Builders ────────────────────────────────────────────────────

def simple_descriptor(method: Method, path: str, function: Callable) -> Descriptor:
    """Single-verb descriptor that consumes and produces any content type."""
    return Descriptor(
        path=path,
        definitions=(
            Definition(
                method=method,
                function=function,
                consumes=(MIME.ALL,),
                produces=(MIME.ALL,),
            ),
        ),
    )


def simple_rpc_descriptor(path: str, function: Callable) -> RPCDescriptor:
    """Single-action RPC descriptor that consumes and produces any content type."""
    return RPCDescriptor(
        path=path,
        actions=(
            RPCAction(
                function=function,
                consumes=(MIME.ALL,),
                produces=(MIME.ALL,),
            ),
        ),
    )
