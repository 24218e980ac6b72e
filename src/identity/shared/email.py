"""Email address normalisation and structural validation."""

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(email: str) -> str:
    """Emails are compared case-insensitively, so they are stored lower-cased."""
    return (email or "").strip().lower()


def is_valid_email(email: str) -> bool:
    """Check that ``email`` follows a basic valid structure.

    Exactly one @, non-empty local and domain parts that neither start nor
    end with a dot, a dot in the domain, no consecutive dots, no whitespace
    and none of the characters that need quoting.
    """
    if not email or len(email) > 254:
        return False

    if any(ch.isspace() for ch in email):
        return False

    if email.count("@") != 1:
        return False

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        return False

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        return False

    if "." not in domain_part:
        return False

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            return False

    if ".." in local_part or ".." in domain_part:
        return False

    return not any(forbidden in email for forbidden in _FORBIDDEN_CHARACTERS)
