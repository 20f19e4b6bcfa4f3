"""Unit tests for the email allow-list."""

import pytest

from domain.email_policy import is_allowed_email, normalize_email

DOMAIN = "@yotes.collegeofidaho.edu"


class TestNormalizeEmail:
    def test_trims_and_lowercases(self):
        assert normalize_email("  Alex@Yotes.CollegeOfIdaho.edu ") == "alex@yotes.collegeofidaho.edu"

    def test_empty_string_stays_empty(self):
        assert normalize_email("   ") == ""


class TestIsAllowedEmail:
    @pytest.mark.parametrize(
        "email",
        [
            "a@yotes.collegeofidaho.edu",
            "A@YOTES.COLLEGEOFIDAHO.EDU",
            "  spaced@yotes.collegeofidaho.edu  ",
            "@yotes.collegeofidaho.edu",
        ],
    )
    def test_accepts_institutional_addresses(self, email: str):
        assert is_allowed_email(email, DOMAIN) is True

    @pytest.mark.parametrize(
        "email",
        [
            "a@gmail.com",
            "a@collegeofidaho.edu",
            "a@yotes.collegeofidaho.edu.evil.com",
            "",
        ],
    )
    def test_rejects_other_addresses(self, email: str):
        assert is_allowed_email(email, DOMAIN) is False

    def test_defaults_to_configured_domain(self):
        assert is_allowed_email("b@yotes.collegeofidaho.edu") is True
        assert is_allowed_email("b@example.com") is False

    def test_domain_argument_is_normalized(self):
        assert is_allowed_email("x@test.edu", " @TEST.edu ") is True

    @pytest.mark.parametrize(
        "email",
        [
            "a@yotes.collegeofidaho.edu",
            "A@YOTES.COLLEGEOFIDAHO.EDU",
            "  spaced@yotes.collegeofidaho.edu  ",
            "@yotes.collegeofidaho.edu",
            "a@gmail.com",
            "a@collegeofidaho.edu",
            "a@yotes.collegeofidaho.edu.evil.com",
            "",
            "\tTab@Yotes.CollegeOfIdaho.EDU\n",
        ],
    )
    def test_decision_is_unchanged_by_normalizing_first(self, email: str):
        assert is_allowed_email(email, DOMAIN) == is_allowed_email(normalize_email(email), DOMAIN)
