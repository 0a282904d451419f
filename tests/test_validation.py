"""
Tests for invite input validation.
"""
import pytest

from whitespace_crm.utils.validation import normalize_email, validate_email_format


@pytest.mark.parametrize("email", [
    "bob@x.com",
    "first.last@example.co.uk",
    "name+tag@sub.domain.io",
    "UPPER@EXAMPLE.ORG",
])
def test_valid_emails(email):
    assert validate_email_format(email)


@pytest.mark.parametrize("email", [
    "",
    "plainaddress",
    "@x.com",
    "bob@",
    "bob@x",
    "bob@x.c",
    "bob..smith@x.com",
    ".bob@x.com",
    "bob@x.com.",
    "bob smith@x.com",
    "bob@x .com",
    "bob@@x.com",
    "bob@x@y.com",
])
def test_invalid_emails(email):
    assert not validate_email_format(email)


def test_normalize_email():
    assert normalize_email("  Bob@X.COM ") == "bob@x.com"
