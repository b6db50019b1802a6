from src.app.services.password_hasher import PasswordHasher
from src.domain.entities import UNSET_PASSWORD_HASH


def test_hash_and_verify():
    hasher = PasswordHasher(rounds=4)

    password_hash = hasher.hash("longenough1")

    assert password_hash.startswith("$2")
    assert hasher.verify("longenough1", password_hash)
    assert not hasher.verify("longenough2", password_hash)


def test_unset_password_sentinel_never_verifies():
    hasher = PasswordHasher(rounds=4)

    assert not hasher.verify("", UNSET_PASSWORD_HASH)
    assert not hasher.verify(UNSET_PASSWORD_HASH, UNSET_PASSWORD_HASH)


def test_malformed_hash_does_not_raise():
    hasher = PasswordHasher(rounds=4)

    assert not hasher.verify("secret", "$2b$not-a-real-hash")
