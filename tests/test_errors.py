from http import HTTPStatus

import pytest

from walletsys.usecase.errors import RecordNotFound, UsecaseError


def test_usecase_error_keeps_code_and_message():
    err = UsecaseError(HTTPStatus.CONFLICT, "username already exists")
    assert err.code == HTTPStatus.CONFLICT
    assert err.message == "username already exists"
    assert str(err) == "username already exists"


def test_usecase_error_code_is_plain_int():
    err = UsecaseError(HTTPStatus.BAD_REQUEST, "insufficient balance")
    assert type(err.code) is int
    assert err.code == int(HTTPStatus.BAD_REQUEST)


def test_usecase_error_can_be_raised_and_caught():
    with pytest.raises(UsecaseError) as info:
        raise UsecaseError(HTTPStatus.NOT_FOUND, "missing")
    assert info.value.code == HTTPStatus.NOT_FOUND


def test_record_not_found_is_a_lookup_error():
    err = RecordNotFound("no rows")
    assert isinstance(err, LookupError)
    assert err.args == ("no rows",)
    assert str(err) == "no rows"


def test_usecase_error_repr_mentions_code_and_message():
    err = UsecaseError(HTTPStatus.BAD_GATEWAY, "foo")
    text = repr(err)
    assert str(int(HTTPStatus.BAD_GATEWAY)) in text
    assert "'foo'" in text