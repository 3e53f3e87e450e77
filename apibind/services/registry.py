"""Registry — explicit collection of descriptors for one API root.

Invariants:
    - No module-level registry: a Registry is a value created by the
      composition root and passed to whatever builds the route table
    - register()/register_rpc() only append; descriptors are never modified
    - routes() raises DuplicateRouteError when two definitions share a path
      and HTTP method; actions() when two actions share a path
    - descriptor()/rpc_descriptor() return fresh immutable trees

Design Decisions:
    - Explicit registration calls, no auto-discovery of handler modules
    - Registration happens before traffic; a Registry is not shared across
      threads while still being filled
"""

import logging

from apibind.config import Settings, get_settings
from apibind.core.descriptors import Descriptor, RPCDescriptor
from apibind.core.domain_types import MIME
from apibind.core.errors import DuplicateRouteError
from apibind.core.resolve import (
    ResolvedAction,
    ResolvedRoute,
    resolve_actions,
    resolve_routes,
)
from apibind.schemas.descriptor import DescriptorDoc, RPCDescriptorDoc

logger = logging.getLogger(__name__)


class Registry:
    """Descriptors grouped under one root path with root negotiation defaults."""

    def __init__(
        self,
        path: str = "/",
        description: str = "",
        consumes: tuple[str, ...] = (MIME.ALL,),
        produces: tuple[str, ...] = (MIME.ALL,),
    ):
        self.path = path
        self.description = description
        self.consumes = tuple(consumes)
        self.produces = tuple(produces)
        self._descriptors: list[Descriptor] = []
        self._rpc_descriptors: list[RPCDescriptor] = []

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Registry":
        settings = settings or get_settings()
        return cls(
            path=settings.root_path,
            description=settings.root_description,
            consumes=tuple(settings.default_consumes),
            produces=tuple(settings.default_produces),
        )

    def register(self, *descriptors: Descriptor) -> "Registry":
        for d in descriptors:
            self._descriptors.append(d)
            logger.info(
                f"Registered descriptor '{d.path}' "
                f"({len(d.definitions)} definitions, {len(d.children)} children)",
                extra={"path": d.path},
            )
        return self

    def register_rpc(self, *descriptors: RPCDescriptor) -> "Registry":
        for d in descriptors:
            self._rpc_descriptors.append(d)
            logger.info(
                f"Registered RPC descriptor '{d.path}' ({len(d.actions)} actions)",
                extra={"path": d.path},
            )
        return self

    def descriptor(self) -> Descriptor:
        """Root descriptor with every registered descriptor as a child."""
        return Descriptor(
            path=self.path,
            description=self.description,
            consumes=self.consumes,
            produces=self.produces,
            children=tuple(self._descriptors),
        )

    def rpc_descriptor(self) -> RPCDescriptor:
        return RPCDescriptor(
            path=self.path,
            description=self.description,
            consumes=self.consumes,
            produces=self.produces,
            children=tuple(self._rpc_descriptors),
        )

    def routes(self) -> list[ResolvedRoute]:
        """Flatten the tree. Raises DuplicateRouteError on a path/verb clash."""
        routes = resolve_routes(self.descriptor())
        seen: set[tuple[str, str]] = set()
        for r in routes:
            key = (r.path, r.method.http_method)
            if key in seen:
                logger.error(
                    f"Duplicate route {key[1]} {key[0]}",
                    extra={"path": r.path, "method": key[1],
                           "error_code": "DUPLICATE_ROUTE"},
                )
                raise DuplicateRouteError(r.path, key[1])
            seen.add(key)
        return routes

    def actions(self) -> list[ResolvedAction]:
        actions = resolve_actions(self.rpc_descriptor())
        seen: set[str] = set()
        for a in actions:
            if a.path in seen:
                logger.error(
                    f"Duplicate RPC action {a.path}",
                    extra={"path": a.path, "error_code": "DUPLICATE_ROUTE"},
                )
                raise DuplicateRouteError(a.path)
            seen.add(a.path)
        return actions

    def document(self) -> DescriptorDoc:
        return DescriptorDoc.from_descriptor(self.descriptor())

    def document_rpc(self) -> RPCDescriptorDoc:
        return RPCDescriptorDoc.from_rpc_descriptor(self.rpc_descriptor())
