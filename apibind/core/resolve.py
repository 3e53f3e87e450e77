"""Route Resolution — flattens Descriptor trees into routes with effective settings.

Invariants:
    - Paths: a child's path is always relative to its parent's, even when it
      starts with '/'. Segments are joined with a single '/', empty segments
      dropped, no trailing slash; the root resolves to '/'
    - Consumes/produces: the nearest non-empty list wins and replaces (never
      merges) what ancestors declared. Order of precedence: Definition /
      RPCAction, innermost Descriptor, ..., outermost Descriptor, defaults
    - error_produces falls back to the effective produces list
    - Tags accumulate root-first, without duplicates
    - Output order is depth-first: a node's own definitions before its children

Design Decisions:
    - Pure functions over the frozen tree: the route compiler calls these
      and owns everything after
"""

from dataclasses import dataclass
from typing import Iterator, Sequence

from apibind.core.descriptors import (
    Definition,
    Descriptor,
    RPCAction,
    RPCDescriptor,
)
from apibind.core.domain_types import MIME, Method

DEFAULT_MIME: tuple[str, ...] = (MIME.ALL,)


@dataclass(frozen=True)
class ResolvedRoute:
    path: str
    method: Method
    definition: Definition
    consumes: tuple[str, ...]
    produces: tuple[str, ...]
    error_produces: tuple[str, ...]
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedAction:
    path: str
    action: RPCAction
    consumes: tuple[str, ...]
    produces: tuple[str, ...]


def join_paths(*paths: str) -> str:
    """join_paths('/api/v1/', '/users', 'x') -> '/api/v1/users/x'."""
    segments = [seg for p in paths for seg in p.split("/") if seg]
    return "/" + "/".join(segments)


def inherit(own: Sequence[str], inherited: Sequence[str]) -> tuple[str, ...]:
    """Nearest non-empty list wins."""
    return tuple(own) if own else tuple(inherited)


def resolve_routes(
    descriptor: Descriptor,
    base_path: str = "",
    consumes: Sequence[str] = DEFAULT_MIME,
    produces: Sequence[str] = DEFAULT_MIME,
) -> list[ResolvedRoute]:
    return list(_walk(descriptor, base_path, tuple(consumes), tuple(produces), ()))


def _walk(
    node: Descriptor, base: str,
    consumes: tuple[str, ...], produces: tuple[str, ...], tags: tuple[str, ...],
) -> Iterator[ResolvedRoute]:
    path = join_paths(base, node.path)
    consumes = inherit(node.consumes, consumes)
    produces = inherit(node.produces, produces)
    tags = _merge_tags(tags, node.tags)
    for d in node.definitions:
        own_produces = inherit(d.produces, produces)
        yield ResolvedRoute(
            path=path,
            method=d.method,
            definition=d,
            consumes=inherit(d.consumes, consumes),
            produces=own_produces,
            error_produces=inherit(d.error_produces, own_produces),
            tags=_merge_tags(tags, d.tags),
        )
    for child in node.children:
        yield from _walk(child, path, consumes, produces, tags)


def resolve_actions(
    descriptor: RPCDescriptor,
    base_path: str = "",
    consumes: Sequence[str] = DEFAULT_MIME,
    produces: Sequence[str] = DEFAULT_MIME,
) -> list[ResolvedAction]:
    return list(_walk_rpc(descriptor, base_path, tuple(consumes), tuple(produces)))


def _walk_rpc(
    node: RPCDescriptor, base: str,
    consumes: tuple[str, ...], produces: tuple[str, ...],
) -> Iterator[ResolvedAction]:
    path = join_paths(base, node.path)
    consumes = inherit(node.consumes, consumes)
    produces = inherit(node.produces, produces)
    for a in node.actions:
        yield ResolvedAction(
            path=path,
            action=a,
            consumes=inherit(a.consumes, consumes),
            produces=inherit(a.produces, produces),
        )
    for child in node.children:
        yield from _walk_rpc(child, path, consumes, produces)


def _merge_tags(base: tuple[str, ...], extra: Sequence[str]) -> tuple[str, ...]:
    return base + tuple(t for t in dict.fromkeys(extra) if t not in base)
