import pytest

from pushframe.apns.error_response import ErrorResponse, decode_error_response


def test_decode_invalid_token():
    resp = decode_error_response(b"\x08\x08\x00\x00\x00\x07")
    assert resp == ErrorResponse(command=8, status_code=8, identifier=7)
    assert resp.status == "Invalid token"


def test_decode_shutdown_and_unknown_codes():
    assert decode_error_response(b"\x08\x0a\x00\x00\x00\x01").status == "Shutdown"
    assert decode_error_response(b"\x08\xff\x00\x00\x00\x01").status == "None (unknown)"
    assert decode_error_response(b"\x08\x09\x00\x00\x00\x01").status == "Unknown error"


def test_identifier_is_big_endian():
    assert decode_error_response(b"\x08\x01\xde\xad\xbe\xef").identifier == 0xDEADBEEF


@pytest.mark.parametrize("data", [b"", b"\x08\x08\x00\x00\x00", b"\x08\x08\x00\x00\x00\x07\x00"])
def test_wrong_length(data):
    with pytest.raises(ValueError):
        decode_error_response(data)


def test_wrong_command():
    with pytest.raises(ValueError):
        decode_error_response(b"\x01\x08\x00\x00\x00\x07")
