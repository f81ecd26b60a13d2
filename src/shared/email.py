"""Email address validation."""

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from shared.exceptions import EmailNotValid

_email_adapter = TypeAdapter(EmailStr)


def validate_email(email: str) -> str:
    """Return ``email`` unchanged if it is well formed, else raise EmailNotValid."""
    try:
        _email_adapter.validate_python(email)
    except PydanticValidationError as exc:
        reason = exc.errors()[0].get("msg", "malformed address")
        raise EmailNotValid(f"Invalid email: {reason}") from exc
    return email
