import pytest

from shopkeep.core.exceptions import EntityError, ErrorKind


@pytest.mark.parametrize("factory, kind, suffix", [
    (EntityError.already_exists, ErrorKind.ALREADY_EXISTS, "AlreadyExists"),
    (EntityError.not_authorized, ErrorKind.NOT_AUTHORIZED, "NotAuthorized"),
    (EntityError.invalid_argument, ErrorKind.INVALID_ARGUMENT, "InvalidArgument"),
    (EntityError.not_found, ErrorKind.NOT_FOUND, "NotFound"),
])
@pytest.mark.parametrize("prefix, message", [
    ("User", "User with username 'bob' already exists"),
    ("location", "something went wrong"),
    ("", ""),
])
def test_code_is_prefix_plus_kind_suffix(factory, kind, suffix, prefix, message):
    error = factory(prefix, message)

    assert error.kind is kind
    assert error.code == prefix + suffix
    assert error.message == message
    assert str(error) == message


def test_entity_error_is_raisable_and_catchable_by_kind():
    with pytest.raises(EntityError) as exc_info:
        raise EntityError.invalid_argument("Stock", "Cannot remove 10 units, only 4 in stock")

    assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENT
    assert exc_info.value.code.endswith("InvalidArgument")


def test_to_dict_exposes_code_and_message_only():
    error = EntityError.not_authorized("Sale", "Only administrators or the seller can cancel a sale")

    assert error.to_dict() == {
        "code": "SaleNotAuthorized",
        "message": "Only administrators or the seller can cancel a sale",
    }
