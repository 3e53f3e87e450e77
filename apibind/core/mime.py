"""MIME Matching — content-type checks within the closed vocabulary.

Invariants:
    - Only values of the MIME enum are recognized; anything else is unknown
    - MIME.ALL matches any concrete type in an accept/produces position
    - MIME.ALL and MIME.NONE are never valid as a request's Content-Type
    - Parameters after ';' (charset, boundary) are ignored when matching

Design Decisions:
    - No q-value weighting: accept lists are taken in client order
"""

from typing import Iterable

from apibind.core.domain_types import MIME
from apibind.core.errors import InvalidContentTypeError

_KNOWN = frozenset(m.value for m in MIME)


def base_type(content_type: str) -> str:
    """Strip parameters: 'text/plain; charset=utf-8' -> 'text/plain'."""
    return content_type.split(";", 1)[0].strip().lower()


def is_concrete(content_type: str) -> bool:
    """True if content_type names one vocabulary type (not the wildcard or empty)."""
    base = base_type(content_type)
    return base in _KNOWN and base not in (MIME.ALL.value, MIME.NONE.value)


def check_content_type(content_type: str) -> str:
    """Return the base type of a request Content-Type, or raise."""
    if not is_concrete(content_type):
        raise InvalidContentTypeError(content_type)
    return base_type(content_type)


def accepts(consumes: Iterable[str], content_type: str) -> bool:
    """Whether a definition consuming `consumes` accepts a request body of content_type."""
    ct = check_content_type(content_type)
    for c in consumes:
        if c == MIME.ALL or base_type(c) == ct:
            return True
    return False


def select_produce(produces: Iterable[str], accept: Iterable[str]) -> str | None:
    """Pick the response content type for an Accept list.

    Returns the first concrete type both sides agree on, or None. A wildcard
    on one side defers to the other side's first concrete entry; wildcard on
    both sides falls back to MIME.JSON.
    """
    produces = [base_type(p) for p in produces]
    accept = [base_type(a) for a in accept] or [MIME.ALL.value]
    for a in accept:
        for p in produces:
            if a == p and is_concrete(p):
                return p
            if a == MIME.ALL and is_concrete(p):
                return p
            if p == MIME.ALL and is_concrete(a):
                return a
            if a == MIME.ALL and p == MIME.ALL:
                return MIME.JSON.value
    return None
