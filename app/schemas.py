from datetime import datetime
from typing import Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


#: Human readable reasons per transfer field, keyed by constraint group.
FIELD_MESSAGES = {
    "nome": {
        "required": "name is required",
        "size": "name must be between 2 and 100 characters",
    },
    "telefone": {
        "required": "phone is required",
        "size": "phone must be at most 15 characters",
    },
    "email": {
        "required": "email is required",
        "size": "email must be at most 255 characters",
        "format": "email must be a valid address",
    },
}


class ContactDTO(BaseModel):
    """Transfer shape of a contact, used for both requests and responses.

    ``id`` is assigned by the database and ignored on input.
    """

    id: Optional[int] = None
    nome: str = Field(min_length=2, max_length=100)
    telefone: str = Field(max_length=15)
    email: str = Field(max_length=255, json_schema_extra={"format": "email"})

    @field_validator("nome", "telefone", "email", mode="before")
    @classmethod
    def not_blank(cls, value):
        """Reject ``None`` and whitespace-only values before length checks."""
        if value is None or (isinstance(value, str) and not value.strip()):
            raise PydanticCustomError("blank", "must not be blank")
        return value

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        """Check the address syntax, keeping the text exactly as sent."""
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as exc:
            raise PydanticCustomError(
                "value_error",
                "value is not a valid email address: {reason}",
                {"reason": str(exc)},
            ) from exc
        return value


class ErrorResponse(BaseModel):
    """Uniform body returned with every non-2xx response."""

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    errorCode: str


class Message(BaseModel):
    """Generic informational response."""

    msg: str
