"""MIME Matching — tests for content-type checks and produce selection.

Tests cover:
    - Wildcard and empty types are not concrete
    - check_content_type rejects the wildcard as a request type
    - accepts() honours the wildcard in consumes lists
    - select_produce picks the first agreed concrete type
"""

import pytest

from apibind.core.domain_types import MIME
from apibind.core.errors import InvalidContentTypeError
from apibind.core.mime import (
    accepts,
    base_type,
    check_content_type,
    is_concrete,
    select_produce,
)


def test_base_type_strips_parameters():
    assert base_type("text/plain; charset=utf-8") == "text/plain"
    assert base_type(" Application/JSON ") == "application/json"


@pytest.mark.parametrize("ct", [
    MIME.TEXT, MIME.HTML, MIME.JSON, MIME.XML,
    MIME.OCTET_STREAM, MIME.URL_ENCODED, MIME.FORM_DATA,
])
def test_vocabulary_types_are_concrete(ct):
    assert is_concrete(ct)


@pytest.mark.parametrize("ct", ["*/*", "", "image/png"])
def test_wildcard_empty_and_unknown_are_not_concrete(ct):
    assert not is_concrete(ct)


def test_check_content_type_rejects_wildcard():
    with pytest.raises(InvalidContentTypeError) as exc_info:
        check_content_type("*/*")
    assert exc_info.value.code == "INVALID_CONTENT_TYPE"


def test_check_content_type_returns_base_type():
    assert check_content_type("multipart/form-data; boundary=x") == MIME.FORM_DATA


def test_accepts_exact_and_wildcard():
    assert accepts([MIME.JSON], "application/json")
    assert not accepts([MIME.JSON], "text/plain")
    assert accepts([MIME.ALL], "text/plain")


def test_accepts_rejects_wildcard_request():
    with pytest.raises(InvalidContentTypeError):
        accepts([MIME.ALL], "*/*")


def test_select_produce_first_agreement():
    assert select_produce([MIME.XML, MIME.JSON], [MIME.JSON, MIME.XML]) == "application/json"


def test_select_produce_accept_wildcard_takes_first_produce():
    assert select_produce([MIME.XML, MIME.JSON], [MIME.ALL]) == "application/xml"


def test_select_produce_produce_wildcard_takes_first_accept():
    assert select_produce([MIME.ALL], [MIME.HTML]) == "text/html"


def test_select_produce_both_wildcards_default_to_json():
    assert select_produce([MIME.ALL], []) == "application/json"


def test_select_produce_no_agreement():
    assert select_produce([MIME.JSON], [MIME.XML]) is None
