import pytest
from pydantic import TypeAdapter, ValidationError

from apiservice.core.errors import APIError, APIErrorKind
from apiservice.engines.body_engine import create_multipart_body, encode_body, make_boundary
from apiservice.pydantic_models.request.api_task_model import JSONTask, MultipartTask
from apiservice.pydantic_models.request.multipart_data_model import MultipartData
from tests.fakes import User

TITLE = MultipartData(name="title", data=b"hello", mime_type="text/plain")
UPLOAD = MultipartData(name="file", file_name="a.bin", data=b"\x00\x01", mime_type="application/octet-stream")


def test_multipart_body_wire_format():
    body = create_multipart_body([TITLE, UPLOAD], "Boundary-TEST")

    assert body == (
        b"--Boundary-TEST\r\n"
        b'Content-Disposition: form-data; name="title"\r\n'
        b"Content-Type: text/plain\r\n\r\n"
        b"hello\r\n"
        b"--Boundary-TEST\r\n"
        b'Content-Disposition: form-data; name="file"; filename="a.bin"\r\n'
        b"Content-Type: application/octet-stream\r\n\r\n"
        b"\x00\x01\r\n"
        b"--Boundary-TEST--"
    )


def test_multipart_body_is_deterministic_and_order_sensitive():
    first = create_multipart_body([TITLE, UPLOAD], "Boundary-X")
    second = create_multipart_body([TITLE, UPLOAD], "Boundary-X")
    swapped = create_multipart_body([UPLOAD, TITLE], "Boundary-X")

    assert first == second
    assert first != swapped


def test_multipart_with_no_parts_is_only_closing_delimiter():
    assert create_multipart_body([], "B") == b"--B--"


def test_encode_body_multipart_sets_boundary_header():
    encoded = encode_body(MultipartTask(parts=[TITLE]), boundary="Boundary-42")

    assert encoded.headers == {"Content-Type": "multipart/form-data; boundary=Boundary-42"}
    assert encoded.content.startswith(b"--Boundary-42\r\n")
    assert encoded.content.endswith(b"--Boundary-42--")


def test_encode_body_multipart_generates_fresh_boundary_per_call():
    first = encode_body(MultipartTask(parts=[TITLE]))
    second = encode_body(MultipartTask(parts=[TITLE]))

    assert first.headers["Content-Type"] != second.headers["Content-Type"]


def test_make_boundary_uses_prefix():
    boundary = make_boundary("Boundary-")

    assert boundary.startswith("Boundary-")
    assert len(boundary) == len("Boundary-") + 36
    suffix = boundary[len("Boundary-"):]
    assert suffix == suffix.upper()


def test_encode_body_json_round_trips_through_schema():
    user = User(id=7, name="Ada")

    encoded = encode_body(JSONTask(value=user))

    assert encoded.headers == {"Content-Type": "application/json"}
    assert TypeAdapter(User).validate_json(encoded.content) == user


def test_encode_body_json_plain_values():
    encoded = encode_body(JSONTask(value={"tags": ["a", "b"], "count": 2}))

    assert encoded.content == b'{"tags":["a","b"],"count":2}'


def test_encode_body_json_failure_raises_conversion_error():
    with pytest.raises(APIError) as exc_info:
        encode_body(JSONTask(value={"handle": object()}))

    assert exc_info.value.kind is APIErrorKind.JSON_CONVERSION_FAILURE
    assert exc_info.value.original_error is not None


def test_encode_body_without_task_is_empty():
    encoded = encode_body(None)

    assert encoded.headers == {}
    assert encoded.content is None


def test_multipart_part_requires_name():
    with pytest.raises(ValidationError):
        MultipartData(name="", data=b"x", mime_type="text/plain")


@pytest.mark.parametrize("name", ['a"b', "a\rb", "a\nb"])
def test_multipart_part_name_rejects_header_breaking_chars(name):
    with pytest.raises(ValidationError):
        MultipartData(name=name, data=b"x", mime_type="text/plain")


def test_multipart_part_file_name_rejects_injected_header():
    with pytest.raises(ValidationError):
        MultipartData(name="file", file_name="x\r\nInjected: 1", data=b"x", mime_type="text/plain")
