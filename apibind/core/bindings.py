"""Bindings — Parameter and Result records describing one handler input/output.

Invariants:
    - Parameter/Result are frozen; operator sequences stored as tuples
    - Operators run in declared order; an empty sequence means pass-through
    - Body and Auto parameters carry no name: any supplied name is dropped
    - An empty name on other sources is legal here; the serving layer decides
    - data_error_results() always yields [Data(description), Error("")]

Design Decisions:
    - Plain frozen dataclasses: these are read-only metadata, no validation
    - Builders take operators as varargs, matching how handlers are declared
"""

from dataclasses import dataclass
from typing import Any

from apibind.core.domain_types import Destination, Source
from apibind.core.operator import Operator


@dataclass(frozen=True)
class Parameter:
    """One handler input: wire origin plus transform chain."""
    source: Source
    name: str = ""
    description: str = ""
    operators: tuple[Operator, ...] = ()
    default: Any = None
    optional: bool = False

    def __post_init__(self):
        if not self.source.is_named and self.name:
            object.__setattr__(self, "name", "")
        object.__setattr__(self, "operators", tuple(self.operators))


@dataclass(frozen=True)
class Result:
    """One handler output: wire destination plus transform chain."""
    destination: Destination
    description: str = ""
    operators: tuple[Operator, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "operators", tuple(self.operators))


# ─── Parameter Builders ──────────────────────────────────────────

def parameter_for(
    source: Source, name: str, description: str, *operators: Operator,
) -> Parameter:
    return Parameter(
        source=source, name=name, description=description, operators=operators,
    )


def path_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.PATH, name, description, *operators)


def query_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.QUERY, name, description, *operators)


def header_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.HEADER, name, description, *operators)


def form_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.FORM, name, description, *operators)


def file_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.FILE, name, description, *operators)


def body_parameter_for(description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.BODY, "", description, *operators)


def prefab_parameter_for(name: str, description: str, *operators: Operator) -> Parameter:
    """Value comes from a shared provider registered under name, not the request."""
    return parameter_for(Source.PREFAB, name, description, *operators)


def auto_parameter_for(description: str, *operators: Operator) -> Parameter:
    return parameter_for(Source.AUTO, "", description, *operators)


# ─── Result Builders ─────────────────────────────────────────────

def result_for(
    destination: Destination, description: str, *operators: Operator,
) -> Result:
    return Result(
        destination=destination, description=description, operators=operators,
    )


def meta_result_for(description: str, *operators: Operator) -> Result:
    return result_for(Destination.META, description, *operators)


def data_result_for(description: str, *operators: Operator) -> Result:
    return result_for(Destination.DATA, description, *operators)


def error_result() -> Result:
    return result_for(Destination.ERROR, "")


def data_error_results(description: str) -> list[Result]:
    """The common (data, error) pair for handlers returning a value or an error."""
    return [data_result_for(description), error_result()]
