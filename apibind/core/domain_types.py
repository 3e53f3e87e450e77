"""Domain Types — closed enumerations for wire locations, verbs and MIME types.

Invariants:
    - Source, Destination, Method and MIME are closed sets
    - All enums are str Enums: members compare equal to their wire strings
    - MIME.ALL is valid in accept/produces positions only, never as a
      request's actual Content-Type

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Method carries its HTTP verb and default status code as properties
"""

from enum import Enum


# ─── Wire Locations ──────────────────────────────────────────────

class Source(str, Enum):
    """Where a handler input comes from."""
    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    FORM = "form"
    FILE = "file"
    BODY = "body"
    PREFAB = "prefab"  # shared provider, not request data
    AUTO = "auto"      # derived from framework/environment context

    @property
    def is_named(self) -> bool:
        """Body and Auto have a singular/implicit location and carry no name."""
        return self not in (Source.BODY, Source.AUTO)


class Destination(str, Enum):
    """Where a handler output goes."""
    META = "meta"    # out-of-band: headers, status
    DATA = "data"    # primary payload
    ERROR = "error"  # error channel


# ─── Verbs ───────────────────────────────────────────────────────

class Method(str, Enum):
    """Handler verbs. Mapped onto HTTP by the route-compiling collaborator."""
    HEAD = "head"
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    PATCH = "patch"
    DELETE = "delete"
    ASYNC_CREATE = "async_create"
    ASYNC_UPDATE = "async_update"
    ASYNC_PATCH = "async_patch"
    ASYNC_DELETE = "async_delete"

    @property
    def http_method(self) -> str:
        return _HTTP_METHODS[self]

    @property
    def default_status(self) -> int:
        return _DEFAULT_STATUS[self]


_HTTP_METHODS = {
    Method.HEAD: "HEAD",
    Method.LIST: "GET",
    Method.GET: "GET",
    Method.CREATE: "POST",
    Method.UPDATE: "PUT",
    Method.PATCH: "PATCH",
    Method.DELETE: "DELETE",
    Method.ASYNC_CREATE: "POST",
    Method.ASYNC_UPDATE: "PUT",
    Method.ASYNC_PATCH: "PATCH",
    Method.ASYNC_DELETE: "DELETE",
}

_DEFAULT_STATUS = {
    Method.HEAD: 200,
    Method.LIST: 200,
    Method.GET: 200,
    Method.CREATE: 201,
    Method.UPDATE: 200,
    Method.PATCH: 200,
    Method.DELETE: 204,
    Method.ASYNC_CREATE: 202,
    Method.ASYNC_UPDATE: 202,
    Method.ASYNC_PATCH: 202,
    Method.ASYNC_DELETE: 202,
}


# ─── Content Types ───────────────────────────────────────────────

class MIME(str, Enum):
    """The closed content-type vocabulary used in consumes/produces lists."""
    ALL = "*/*"  # accept position only
    NONE = ""
    TEXT = "text/plain"
    HTML = "text/html"
    JSON = "application/json"
    XML = "application/xml"
    OCTET_STREAM = "application/octet-stream"
    URL_ENCODED = "application/x-www-form-urlencoded"
    FORM_DATA = "multipart/form-data"
