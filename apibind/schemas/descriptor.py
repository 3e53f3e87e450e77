"""Descriptor Schemas — Pydantic documentation models for descriptor trees.

Invariants:
    - Every *Doc model is frozen and JSON-serializable (model_dump_json)
      provided Example instances and Parameter defaults are JSON-compatible
    - Types are rendered as readable names, never as Python objects
    - Handlers are rendered as "module.qualname"

Design Decisions:
    - from_* classmethods keep core/ free of pydantic documentation concerns
"""

from enum import Enum
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from apibind.core.bindings import Parameter, Result
from apibind.core.descriptors import (
    Definition,
    Descriptor,
    Example,
    RPCAction,
    RPCDescriptor,
)
from apibind.core.domain_types import Destination, Method, Source
from apibind.core.operator import Operator, type_name


def _strings(values) -> list[str]:
    """Plain strings for MIME members or raw content-type strings."""
    return [v.value if isinstance(v, Enum) else v for v in values]


def handler_name(fn: Callable | None) -> str | None:
    if fn is None:
        return None
    qualname = getattr(fn, "__qualname__", None) or repr(fn)
    module = getattr(fn, "__module__", None)
    return f"{module}.{qualname}" if module else qualname


class _Doc(BaseModel):
    model_config = ConfigDict(frozen=True)


class OperatorDoc(_Doc):
    kind: str
    in_type: str
    out_type: str

    @classmethod
    def from_operator(cls, op: Operator) -> "OperatorDoc":
        return cls(
            kind=op.kind,
            in_type=type_name(op.in_type),
            out_type=type_name(op.out_type),
        )


class ParameterDoc(_Doc):
    source: Source
    name: str = ""
    description: str = ""
    optional: bool = False
    default: Any = None
    operators: list[OperatorDoc] = Field(default_factory=list)

    @classmethod
    def from_parameter(cls, p: Parameter) -> "ParameterDoc":
        return cls(
            source=p.source,
            name=p.name,
            description=p.description,
            optional=p.optional,
            default=p.default,
            operators=[OperatorDoc.from_operator(op) for op in p.operators],
        )


class ResultDoc(_Doc):
    destination: Destination
    description: str = ""
    operators: list[OperatorDoc] = Field(default_factory=list)

    @classmethod
    def from_result(cls, r: Result) -> "ResultDoc":
        return cls(
            destination=r.destination,
            description=r.description,
            operators=[OperatorDoc.from_operator(op) for op in r.operators],
        )


class ExampleDoc(_Doc):
    description: str
    instance: Any = None

    @classmethod
    def from_example(cls, e: Example) -> "ExampleDoc":
        return cls(description=e.description, instance=e.instance)


class DefinitionDoc(_Doc):
    method: Method
    http_method: str
    handler: str | None = None
    summary: str = ""
    description: str = ""
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    error_produces: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    parameters: list[ParameterDoc] = Field(default_factory=list)
    results: list[ResultDoc] = Field(default_factory=list)
    examples: list[ExampleDoc] = Field(default_factory=list)

    @classmethod
    def from_definition(cls, d: Definition) -> "DefinitionDoc":
        return cls(
            method=d.method,
            http_method=d.method.http_method,
            handler=handler_name(d.function),
            summary=d.summary,
            description=d.description,
            consumes=_strings(d.consumes),
            produces=_strings(d.produces),
            error_produces=_strings(d.error_produces),
            tags=list(d.tags),
            parameters=[ParameterDoc.from_parameter(p) for p in d.parameters],
            results=[ResultDoc.from_result(r) for r in d.results],
            examples=[ExampleDoc.from_example(e) for e in d.examples],
        )


class DescriptorDoc(_Doc):
    path: str
    description: str = ""
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    definitions: list[DefinitionDoc] = Field(default_factory=list)
    children: list["DescriptorDoc"] = Field(default_factory=list)

    @classmethod
    def from_descriptor(cls, d: Descriptor) -> "DescriptorDoc":
        return cls(
            path=d.path,
            description=d.description,
            consumes=_strings(d.consumes),
            produces=_strings(d.produces),
            tags=list(d.tags),
            definitions=[DefinitionDoc.from_definition(x) for x in d.definitions],
            children=[cls.from_descriptor(c) for c in d.children],
        )


class RPCActionDoc(_Doc):
    handler: str | None = None
    description: str = ""
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    parameters: list[ParameterDoc] = Field(default_factory=list)
    results: list[ResultDoc] = Field(default_factory=list)

    @classmethod
    def from_action(cls, a: RPCAction) -> "RPCActionDoc":
        return cls(
            handler=handler_name(a.function),
            description=a.description,
            consumes=_strings(a.consumes),
            produces=_strings(a.produces),
            parameters=[ParameterDoc.from_parameter(p) for p in a.parameters],
            results=[ResultDoc.from_result(r) for r in a.results],
        )


class RPCDescriptorDoc(_Doc):
    path: str
    description: str = ""
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    actions: list[RPCActionDoc] = Field(default_factory=list)
    children: list["RPCDescriptorDoc"] = Field(default_factory=list)

    @classmethod
    def from_rpc_descriptor(cls, d: RPCDescriptor) -> "RPCDescriptorDoc":
        return cls(
            path=d.path,
            description=d.description,
            consumes=_strings(d.consumes),
            produces=_strings(d.produces),
            actions=[RPCActionDoc.from_action(a) for a in d.actions],
            children=[cls.from_rpc_descriptor(c) for c in d.children],
        )
