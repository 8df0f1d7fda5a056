"""Unit tests for the credential store."""

import hashlib

import pytest

from corbado_webhook.core.credentials import Credentials
from corbado_webhook.core.errors import ConfigurationError


@pytest.fixture
def credentials() -> Credentials:
    """Credentials for the webhookUsername/webhookPassword pair."""
    return Credentials.from_plaintext("webhookUsername", "webhookPassword")


class TestCredentialsConstruction:
    """Tests for building credentials from plaintext."""

    def test_stores_sha256_digests(self, credentials):
        """Should keep only the SHA-256 digests of username and password."""
        assert credentials.username_digest == hashlib.sha256(b"webhookUsername").digest()
        assert credentials.password_digest == hashlib.sha256(b"webhookPassword").digest()
        assert len(credentials.username_digest) == 32

    def test_plaintext_not_in_repr(self, credentials):
        """Should not leak digests or plaintext through repr."""
        assert "webhookPassword" not in repr(credentials)
        assert "webhookUsername" not in repr(credentials)

    def test_is_immutable(self, credentials):
        """Should reject attribute assignment after construction."""
        with pytest.raises(AttributeError):
            credentials.username_digest = b"\x00" * 32  # type: ignore[misc]

    @pytest.mark.parametrize(
        "username,password,missing",
        [
            ("", "secret", ("username",)),
            ("user", "", ("password",)),
            ("", "", ("username", "password")),
        ],
    )
    def test_empty_plaintext_raises(self, username, password, missing):
        """Should name every empty parameter in one ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            Credentials.from_plaintext(username, password)

        assert exc_info.value.missing == missing

    def test_wrong_digest_size_raises(self):
        """Should reject digests that are not 32 bytes long."""
        with pytest.raises(ValueError):
            Credentials(username_digest=b"short", password_digest=b"\x00" * 32)


class TestCredentialsMatching:
    """Tests for candidate comparison."""

    def test_matching_pair(self, credentials):
        """Should accept the configured pair."""
        assert credentials.matches("webhookUsername", "webhookPassword") is True

    @pytest.mark.parametrize(
        "username,password",
        [
            ("invalidUsername", "webhookPassword"),
            ("webhookUsername", "invalidPassword"),
            ("invalidUsername", "invalidPassword"),
            ("", ""),
            ("webhookusername", "webhookPassword"),
        ],
    )
    def test_any_mismatch_fails(self, credentials, username, password):
        """Should reject a mismatch in username, password or both."""
        assert credentials.matches(username, password) is False

    def test_non_ascii_credentials(self):
        """Should hash UTF-8 encoded credentials consistently."""
        credentials = Credentials.from_plaintext("corbado", "#73KojdPn,f4XksW_]^Nä")

        assert credentials.matches("corbado", "#73KojdPn,f4XksW_]^Nä") is True
        assert credentials.matches("corbado", "#73KojdPn,f4XksW_]^Na") is False
