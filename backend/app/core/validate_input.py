"""Input Validators — pure shape/length/format checks for user-supplied fields.

Invariants:
    - Violations accumulate into [{"message": ...}] before raising (never fail-fast)
    - Raise InputValidationError (422) only when at least one violation exists
    - No IO: email syntax checked without DNS/deliverability lookups
    - MAX_* limits are the column widths in models/; a value that passes here
      always fits its column
"""

from email_validator import EmailNotValidError, validate_email

from app.core.errors import InputValidationError

MIN_PASSWORD_LENGTH = 5
MAX_PASSWORD_BYTES = 72  # bcrypt input limit
MIN_TITLE_LENGTH = 5
MIN_CONTENT_LENGTH = 5
MIN_STATUS_LENGTH = 5

MAX_EMAIL_LENGTH = 320
MAX_NAME_LENGTH = 200
MAX_TITLE_LENGTH = 300
MAX_STATUS_LENGTH = 500
MAX_IMAGE_PATH_LENGTH = 1000


def validate_user_input(email: str, name: str, password: str) -> None:
    """Signup fields: valid email, password >= 5 chars, non-empty name."""
    errors = []
    if not _is_email(email):
        errors.append({"message": "Email is invalid."})
    if _is_blank(password) or len(password) < MIN_PASSWORD_LENGTH:
        errors.append({"message": "Password is too short."})
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append({"message": "Password is too long."})
    if _is_blank(name):
        errors.append({"message": "Name is invalid."})
    elif len(name) > MAX_NAME_LENGTH:
        errors.append({"message": "Name is too long."})
    if errors:
        raise InputValidationError("Invalid user input.", data=errors)


def validate_post_input(
    title: str, content: str, image_url: str | None = None,
) -> None:
    """Post fields: title and content non-empty and >= 5 chars each."""
    errors = []
    if _is_blank(title) or len(title) < MIN_TITLE_LENGTH:
        errors.append({"message": "Title is invalid."})
    elif len(title) > MAX_TITLE_LENGTH:
        errors.append({"message": "Title is too long."})
    if _is_blank(content) or len(content) < MIN_CONTENT_LENGTH:
        errors.append({"message": "Content is invalid."})
    if image_url is not None and len(image_url) > MAX_IMAGE_PATH_LENGTH:
        errors.append({"message": "Image path is too long."})
    if errors:
        raise InputValidationError("Invalid post input.", data=errors)


def validate_status(status: str) -> None:
    if _is_blank(status) or len(status) < MIN_STATUS_LENGTH:
        raise InputValidationError("Invalid status.")
    if len(status) > MAX_STATUS_LENGTH:
        raise InputValidationError(
            "Invalid status.", data=[{"message": "Status is too long."}],
        )


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_email(value: str | None) -> bool:
    if _is_blank(value) or len(value) > MAX_EMAIL_LENGTH:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
