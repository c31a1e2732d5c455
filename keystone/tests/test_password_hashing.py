from __future__ import annotations

import pytest

from keystone.application.services import password_hashing
from keystone.application.services.password_hashing import WerkzeugPasswordHasher
from keystone.shared.config.settings import AuthConfig


def test_hash_is_salted_and_verifies(hasher: WerkzeugPasswordHasher) -> None:
    first = hasher.hash("S3cret!")
    second = hasher.hash("S3cret!")

    assert first != second
    assert first.startswith("pbkdf2:sha256:1000$")
    assert hasher.verify("S3cret!", first)
    assert hasher.verify("S3cret!", second)
    assert not hasher.verify("s3cret!", first)


def test_verify_with_empty_hash_is_false(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.verify("S3cret!", "") is False


def test_verify_dummy_always_fails(hasher: WerkzeugPasswordHasher) -> None:
    assert hasher.verify_dummy("S3cret!") is False
    assert hasher.verify_dummy("") is False


def test_verify_dummy_never_hashes_after_construction(monkeypatch: pytest.MonkeyPatch) -> None:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")
    hashed: list[str] = []

    def _counting_hash(password: str, **kwargs: object) -> str:
        hashed.append(password)
        return "pbkdf2:sha256:1000$salt$0"

    monkeypatch.setattr(password_hashing, "generate_password_hash", _counting_hash)

    assert hasher.verify_dummy("S3cret!") is False
    assert hasher.verify_dummy("other") is False
    assert hashed == []


def test_hashes_from_a_lower_work_factor_still_verify() -> None:
    old = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000").hash("S3cret!")

    assert WerkzeugPasswordHasher(method="pbkdf2:sha256:2000").verify("S3cret!", old)


@pytest.mark.parametrize(
    ("scheme", "work_factor", "method"),
    [
        ("scrypt", 15, "scrypt:32768:8:1"),
        ("scrypt", 10, "scrypt:1024:8:1"),
        ("pbkdf2", 600000, "pbkdf2:sha256:600000"),
    ],
)
def test_auth_config_builds_hash_method(scheme: str, work_factor: int, method: str) -> None:
    config = AuthConfig(PASSWORD_HASH_SCHEME=scheme, PASSWORD_WORK_FACTOR=work_factor)

    assert config.hash_method() == method


@pytest.mark.parametrize(("scheme", "work_factor"), [("scrypt", 30), ("pbkdf2", 10)])
def test_auth_config_rejects_out_of_range_work_factor(scheme: str, work_factor: int) -> None:
    with pytest.raises(ValueError):
        AuthConfig(PASSWORD_HASH_SCHEME=scheme, PASSWORD_WORK_FACTOR=work_factor)


def test_scrypt_hash_round_trip() -> None:
    hasher = WerkzeugPasswordHasher(method="scrypt:1024:8:1")
    hashed = hasher.hash("S3cret!")

    assert hashed.startswith("scrypt:1024:8:1$")
    assert hasher.verify("S3cret!", hashed)
