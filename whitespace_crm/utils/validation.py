import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email_format(email: str) -> bool:
    """Validate email format with strict pattern."""
    if not email or not EMAIL_PATTERN.match(email):
        return False

    if ".." in email or email.startswith(".") or email.endswith("."):
        return False
    if " " in email:
        return False

    parts = email.split("@")
    if len(parts) != 2:
        return False

    tld = parts[1].split(".")[-1]
    return len(tld) >= 2 and len(email) <= 254


def normalize_email(email: str) -> str:
    return email.strip().lower()
