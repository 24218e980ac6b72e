"""Tests for email normalisation and password hashing helpers."""

import pytest
from identity.shared.email import is_valid_email, normalize_email
from identity.shared.password import hash_password, verify_password


class TestEmail:
    def test_normalize_lowercases_and_strips(self):
        assert normalize_email("  Foo@Bar.COM ") == "foo@bar.com"

    def test_normalize_none(self):
        assert normalize_email(None) == ""

    @pytest.mark.parametrize(
        "email",
        ["user@example.com", "first.last@sub.example.org", "user+tag@example.co"],
    )
    def test_valid(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "no-at-sign",
            "two@@example.com",
            "@example.com",
            "user@",
            "user@localhost",
            ".user@example.com",
            "user.@example.com",
            "user@.example.com",
            "user@example..com",
            "us..er@example.com",
            "user@-example.com",
            "us er@example.com",
            "user;x@example.com",
        ],
    )
    def test_invalid(self, email):
        assert is_valid_email(email) is False

    def test_too_long(self):
        assert is_valid_email("a" * 250 + "@example.com") is False


class TestPassword:
    def test_hash_verifies(self):
        hashed = hash_password("correct horse")
        assert verify_password("correct horse", hashed) is True

    def test_wrong_password(self):
        hashed = hash_password("correct horse")
        assert verify_password("battery staple", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_malformed_hash_does_not_verify(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_rounds_below_minimum_are_raised(self):
        hashed = hash_password("pw", rounds=4)
        assert hashed.split("$")[2] == "10"
