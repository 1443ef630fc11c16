import re

from app.errors import (
    ContactError,
    ErrorKind,
    describe_field_error,
    field_errors,
    tracking_code,
)


def test_tracking_code_format():
    code = tracking_code()
    assert re.fullmatch(r"[0-9A-F]{6}", code)


def test_error_kinds_table():
    assert (ErrorKind.VALIDATION_FAILED.status_code, ErrorKind.VALIDATION_FAILED.prefix) == (400, "VAL-")
    assert (ErrorKind.NOT_FOUND.status_code, ErrorKind.NOT_FOUND.prefix) == (404, "NF-")
    assert (ErrorKind.DUPLICATE_EMAIL.status_code, ErrorKind.DUPLICATE_EMAIL.prefix) == (
        409,
        "BUSINESS_RULE_VIOLATION-",
    )
    assert (ErrorKind.INTERNAL.status_code, ErrorKind.INTERNAL.prefix) == (500, "INT-")


def test_describe_uses_field_messages():
    error = {"loc": ("body", "telefone"), "type": "string_too_long", "msg": "too long"}
    assert describe_field_error(error) == "[telefone: phone must be at most 15 characters]"


def test_describe_falls_back_to_pydantic_message():
    error = {"loc": ("path", "contact_id"), "type": "int_parsing", "msg": "not an int"}
    assert describe_field_error(error) == "[contact_id: not an int]"


def test_describe_whole_body_error():
    error = {"loc": ("body", 3), "type": "json_invalid", "msg": "JSON decode error"}
    assert describe_field_error(error) == "[body: JSON decode error]"


def test_field_errors_keep_first_error_per_field():
    errors = [
        {"loc": ("nome",), "type": "missing", "msg": "Field required"},
        {"loc": ("nome",), "type": "string_too_short", "msg": "short"},
        {"loc": ("email",), "type": "value_error", "msg": "bad"},
    ]
    assert field_errors(errors) == [
        "[nome: name is required]",
        "[email: email must be a valid address]",
    ]


def test_validation_failed_message_joins_details():
    error = ContactError.validation_failed(
        [
            {"loc": ("nome",), "type": "missing", "msg": "Field required"},
            {"loc": ("telefone",), "type": "blank", "msg": "must not be blank"},
        ]
    )
    assert error.kind is ErrorKind.VALIDATION_FAILED
    assert error.message == "[nome: name is required] [telefone: phone is required]"
    assert error.details == ["[nome: name is required]", "[telefone: phone is required]"]


def test_not_found_message_mentions_id():
    error = ContactError.not_found(7)
    assert error.kind is ErrorKind.NOT_FOUND
    assert "7" in error.message
