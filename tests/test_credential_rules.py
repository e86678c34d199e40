from __future__ import annotations

import pytest

from taskboard.core import rules


def _email(value):
    return rules.validate(rules.CREDENTIALS_SCHEMA, "email", value)


def _password(value):
    return rules.validate(rules.CREDENTIALS_SCHEMA, "password", value)


def test_email_examples():
    assert _email("a@b.com") is None
    assert _email("a@b") == "Invalid email format"
    assert _email("") == "Email is required"


def test_email_is_trimmed_before_checks():
    assert _email("   ") == "Email is required"
    assert _email("  user@site.com  ") is None


@pytest.mark.parametrize("value", ["plainaddress", "@site.com", "user@", "user@@site.com", "us er@site.com"])
def test_email_malformed(value):
    assert _email(value) == "Invalid email format"


def test_email_domain_needs_a_dot():
    assert _email("user@localhost") == "Invalid email format"
    assert _email("user@mail.localhost") is None


@pytest.mark.parametrize(
    "value, message",
    [
        (None, "Password is required"),
        ("", "Password is required"),
        ("Ab1!", "Password must be at least 8 characters"),
        ("Abcdefgh1!Abcdefgh1!x", "Password cannot be longer than 20 characters"),
        ("        ", "Password cannot be empty or whitespace only"),
        ("ABCDEF1!", "Password must include at least one lowercase letter"),
        ("abcdef1!", "Password must include at least one uppercase letter"),
        ("Abcdefg!", "Password must include at least one number"),
        ("Abcdefg1", "Password must include at least one special character"),
    ],
)
def test_password_reports_first_failing_rule(value, message):
    assert _password(value) == message


def test_password_order_length_before_character_classes():
    # Short and missing everything: length wins.
    assert _password("abc") == "Password must be at least 8 characters"
    # Long whitespace-only: max length wins over whitespace.
    assert _password(" " * 21) == "Password cannot be longer than 20 characters"


@pytest.mark.parametrize("value", ["Abcdef1!", "Abcdefgh1!Abcdefgh1!", "aB3\\xxxx", "Zz9-zzzz", " Abcde1! "])
def test_password_valid(value):
    assert _password(value) is None


@pytest.mark.parametrize("symbol", list("!@#$%^&*()_-+={}[]:;\"'|,.<>/?\\"))
def test_password_accepts_each_symbol(symbol):
    assert _password("Abcdef1" + symbol) is None


def test_password_rejects_symbol_outside_set():
    assert _password("Abcdef1~") == "Password must include at least one special character"


def test_validate_values_one_message_per_field():
    r = rules.validate_values(rules.CREDENTIALS_SCHEMA, {"email": "a@b", "password": "short"})
    assert r.ok is False
    assert r.field_errors == {
        "email": "Invalid email format",
        "password": "Password must be at least 8 characters",
    }
    assert rules.validate_values(rules.CREDENTIALS_SCHEMA, {"email": "user@site.com", "password": "Abcdef1!"}).ok
