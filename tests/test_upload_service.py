import pytest

from api.upload.dto.upload import IncomingFile, UploadForm
from api.upload.services.upload_service import validate_file_sizes, validate_form, validate_upload
from errors import ValidationError
from formatting import format_bytes

LIMIT = 10 * 1024 * 1024


def _form(**overrides):
    fields = {
        "password": "s3cret",
        "sender_email": "alice@example.com",
        "receiver_email": "bob@example.com",
        "transfer_name": "reports",
    }
    fields.update(overrides)
    return UploadForm(**fields)


def _file(name="a.txt", size=10):
    return IncomingFile(filename=name, content_type="text/plain", data=b"x" * size)


def test_valid_upload_passes():
    validate_upload(_form(), [_file()], LIMIT)


@pytest.mark.parametrize(
    "overrides, files, error",
    [
        ({"password": ""}, [], "Missing required fields"),
        ({"receiver_email": "Alice@EXAMPLE.com"}, [], "Invalid email addresses"),
        ({"sender_email": "alice@example"}, [_file()], "Invalid sender email"),
        ({"receiver_email": "bob example.com"}, [_file()], "Invalid receiver email"),
        ({}, [], "No files uploaded"),
    ],
)
def test_validation_order(overrides, files, error):
    with pytest.raises(ValidationError) as exc_info:
        validate_upload(_form(**overrides), files, LIMIT)

    assert exc_info.value.error == error


def test_size_limit_is_inclusive():
    validate_upload(_form(), [_file(size=LIMIT)], LIMIT)

    with pytest.raises(ValidationError) as exc_info:
        validate_upload(_form(), [_file("big.iso", size=LIMIT + 1)], LIMIT)

    assert exc_info.value.details == "The following files exceed 10MB: big.iso"


@pytest.mark.parametrize(
    "size, expected",
    [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1536, "1.5 KB"),
        (4 * 1024 * 1024, "4 MB"),
        (1234567, "1.18 MB"),
        (3 * 1024**3, "3 GB"),
    ],
)
def test_format_bytes(size, expected):
    assert format_bytes(size) == expected


def test_form_checks_need_no_files():
    validate_form(_form())

    with pytest.raises(ValidationError) as exc_info:
        validate_form(_form(sender_email="bob@example.com"))

    assert exc_info.value.error == "Invalid email addresses"


def test_declared_sizes_are_checked_before_reading():
    validate_file_sizes([("a.txt", 10), ("stream.bin", None)], LIMIT)

    with pytest.raises(ValidationError) as exc_info:
        validate_file_sizes([("a.txt", 10), ("big.iso", LIMIT + 1)], LIMIT)

    assert exc_info.value.details == "The following files exceed 10MB: big.iso"
