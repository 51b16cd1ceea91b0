"""
Test suite for password hashing and access tokens.

System role: Verification of credential helpers
"""

import uuid

import jwt
import pytest

from docmanager.core.exceptions import UnauthorizedError
from docmanager.core.security import TokenIssuer, hash_password, verify_password


class TestPasswordHashing:
    def test_hash_verifies_with_same_password(self) -> None:
        encoded = hash_password("s3cret!", rounds=4)

        assert encoded.startswith("$2b$04$")
        assert verify_password("s3cret!", encoded)

    def test_wrong_password_is_rejected(self) -> None:
        encoded = hash_password("s3cret!", rounds=4)

        assert not verify_password("other", encoded)

    def test_hashes_are_salted(self) -> None:
        assert hash_password("same", rounds=4) != hash_password("same", rounds=4)

    def test_long_password_is_accepted(self) -> None:
        password = "x" * 100
        encoded = hash_password(password, rounds=4)

        assert verify_password(password, encoded)

    @pytest.mark.parametrize(
        "encoded", ["", "plaintext", "md5$1$aa$bb", "pbkdf2_sha256$1000$zz$yy", "$2b$04$short"]
    )
    def test_malformed_hash_is_rejected(self, encoded: str) -> None:
        assert not verify_password("anything", encoded)


class TestTokenIssuer:
    def test_round_trip_claims(self) -> None:
        # Arrange
        issuer = TokenIssuer(secret="test-secret")
        user_id = uuid.uuid4()

        # Act
        claims = issuer.verify(issuer.issue(user_id, "a@example.com", "editor"))

        # Assert
        assert claims.user_id == user_id
        assert claims.email == "a@example.com"
        assert claims.role == "editor"

    def test_expired_token_is_rejected(self) -> None:
        issuer = TokenIssuer(secret="test-secret", expire_minutes=-1)
        token = issuer.issue(uuid.uuid4(), "a@example.com", "viewer")

        with pytest.raises(UnauthorizedError, match="expired"):
            issuer.verify(token)

    def test_foreign_signature_is_rejected(self) -> None:
        token = TokenIssuer(secret="other-secret").issue(uuid.uuid4(), "a@example.com", "viewer")

        with pytest.raises(UnauthorizedError, match="Invalid token"):
            TokenIssuer(secret="test-secret").verify(token)

    def test_token_without_subject_is_rejected(self) -> None:
        token = jwt.encode({"email": "a@example.com"}, "test-secret", algorithm="HS256")

        with pytest.raises(UnauthorizedError):
            TokenIssuer(secret="test-secret").verify(token)
