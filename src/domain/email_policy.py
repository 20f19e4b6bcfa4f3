"""Email allow-list policy.

The sole admission rule for accounts and sessions: a normalized address must
end with the configured institutional domain suffix. This is a suffix match,
not an address validator; ``"x@yotes.collegeofidaho.edu"`` and
``"@yotes.collegeofidaho.edu"`` both pass.
"""

from core.config import settings


def normalize_email(email: str) -> str:
    """Trim surrounding whitespace and lower-case."""
    return email.strip().lower()


def is_allowed_email(email: str, domain: str | None = None) -> bool:
    """Return True if ``email`` belongs to the allowed domain."""
    suffix = normalize_email(domain if domain is not None else settings.allowed_email_domain)
    return normalize_email(email).endswith(suffix)
