"""
Login email checks — format, disposable providers, placeholder domains.
"""

import re

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DISPOSABLE_DOMAINS = {
    "tempmail.com", "guerrillamail.com", "mailinator.com",
    "10minutemail.com", "throwaway.com", "fakeinbox.com",
    "yopmail.com", "trashmail.com", "disposable.com",
    "temp-mail.org", "getairmail.com", "sharklasers.com",
    "maildrop.cc", "tempail.com", "fake-mail.com",
    "throwawaymail.com", "tempmail.net", "trashmail.net",
    "dispostable.com", "mailmetrash.com",
}

# Matched as substrings of the domain
PLACEHOLDER_DOMAINS = ("example.com", "test.com", "localhost", "test")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_email(email: str) -> str:
    """Return the normalized email, or raise ValidationError with the reason."""
    email = normalize_email(email)
    if not email:
        raise ValidationError("Email is required to continue.")

    if not EMAIL_PATTERN.match(email):
        raise ValidationError(
            "Invalid email format. Please enter a valid email address (e.g., yourname@example.com)."
        )

    domain = email.split("@", 1)[1]
    if domain in DISPOSABLE_DOMAINS:
        raise ValidationError(
            "Temporary or disposable email addresses are not allowed. "
            "Please use a permanent email address."
        )

    if any(placeholder in domain for placeholder in PLACEHOLDER_DOMAINS):
        raise ValidationError("Please use a real email domain (Gmail, Outlook, Yahoo, etc.)")

    return email
