import pytest

from zitikit.key_alg import KeyAlg


@pytest.mark.parametrize("given,expected", [("ec", "EC"), ("Rsa", "RSA"), ("EC", "EC")])
def test_set_uppercases(given, expected):
    alg = KeyAlg()
    alg.set(given)
    assert str(alg) == expected
    assert alg.value == expected


def test_ec_flags():
    alg = KeyAlg()
    alg.set("ec")
    assert alg.is_ec() is True
    assert alg.is_rsa() is False


def test_rsa_flags():
    alg = KeyAlg("RSA")
    assert alg.is_rsa() is True
    assert alg.is_ec() is False


def test_invalid_value_rejected_and_unchanged():
    alg = KeyAlg("RSA")
    with pytest.raises(ValueError, match="must specify either 'EC' or 'RSA'"):
        alg.set("dsa")
    assert alg.value == "RSA"


def test_type_hint():
    assert KeyAlg().type_hint() == "RSA|EC"


def test_empty_is_neither():
    alg = KeyAlg()
    assert not alg.is_ec() and not alg.is_rsa()