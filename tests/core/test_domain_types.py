"""Domain Types — verifies the closed enumerations and their wire values.

Tests:
    - Source has 8 members; only Body/Auto are unnamed
    - Destination has 3 members
    - Method maps onto HTTP verbs and default status codes
    - MIME vocabulary values
"""

from apibind.core.domain_types import MIME, Destination, Method, Source


def test_source_has_eight_members():
    assert len(Source) == 8


def test_only_body_and_auto_are_unnamed():
    unnamed = {s for s in Source if not s.is_named}
    assert unnamed == {Source.BODY, Source.AUTO}


def test_destination_has_three_members():
    assert set(Destination) == {Destination.META, Destination.DATA, Destination.ERROR}


def test_method_http_mapping():
    assert Method.LIST.http_method == "GET"
    assert Method.GET.http_method == "GET"
    assert Method.CREATE.http_method == "POST"
    assert Method.UPDATE.http_method == "PUT"
    assert Method.ASYNC_DELETE.http_method == "DELETE"


def test_method_default_status():
    assert Method.CREATE.default_status == 201
    assert Method.DELETE.default_status == 204
    assert Method.ASYNC_CREATE.default_status == 202
    assert Method.GET.default_status == 200


def test_every_method_is_mapped():
    for m in Method:
        assert m.http_method
        assert m.default_status


def test_mime_vocabulary():
    assert MIME.ALL.value == "*/*"
    assert MIME.NONE.value == ""
    assert MIME.JSON == "application/json"
    assert MIME.URL_ENCODED.value == "application/x-www-form-urlencoded"
    assert MIME.FORM_DATA.value == "multipart/form-data"
    assert len(MIME) == 9
