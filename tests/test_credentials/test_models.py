"""Tests for credential value types."""

import dataclasses

import pytest

from index_keyring.credentials import Credentials


class TestCredentials:
    """Test Credentials value semantics."""

    def test_equality(self):
        """Test credentials compare by value."""
        assert Credentials("user", "password") == Credentials(username="user", password="password")
        assert Credentials("user", "password") != Credentials("user", "other")

    def test_immutable(self):
        """Test credentials cannot be modified."""
        credentials = Credentials("user", "password")

        with pytest.raises(dataclasses.FrozenInstanceError):
            credentials.password = "other"

    def test_repr_masks_password(self):
        """Test repr never shows the password."""
        credentials = Credentials("user", "s3cret")

        assert "s3cret" not in repr(credentials)
        assert repr(credentials) == "Credentials(username='user', password='****')"

    def test_repr_without_password(self):
        """Test repr of credentials without a password."""
        assert repr(Credentials("user")) == "Credentials(username='user', password=None)"

    def test_is_empty(self):
        """Test emptiness check."""
        assert Credentials().is_empty()
        assert not Credentials(username="user").is_empty()
        assert not Credentials(password="password").is_empty()

    def test_to_header_value(self):
        """Test Basic authorization header rendering."""
        assert Credentials("user", "password").to_header_value() == "Basic dXNlcjpwYXNzd29yZA=="

    def test_to_header_value_missing_password(self):
        """Test a missing password is encoded as empty."""
        assert Credentials("user").to_header_value() == "Basic dXNlcjo="
