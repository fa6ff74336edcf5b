"""
API request and response models.

Pydantic models for endpoint validation and OpenAPI schema generation.
Request fields accept both the English names and the Spanish names
used by the site's HTML forms.
"""

from typing import Annotated

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field, StringConstraints

# Required text: surrounding whitespace stripped, must not end up empty
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# Passwords are taken verbatim
Secret = Annotated[str, StringConstraints(min_length=1)]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True)]


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("blank")
    return value


# Free text kept exactly as typed, so length limits see every character
MessageText = Annotated[str, AfterValidator(_not_blank)]


class FormModel(BaseModel):
    """Base for request bodies; JSON numbers are accepted as text."""

    model_config = ConfigDict(coerce_numbers_to_str=True)


class RegisterRequest(FormModel):
    """Request model for user registration."""

    name: Text = Field(validation_alias=AliasChoices("name", "nombre"))
    surname: Text = Field(validation_alias=AliasChoices("surname", "apellido"))
    email: Text = Field(validation_alias=AliasChoices("email", "correo"))
    password: Secret = Field(validation_alias=AliasChoices("password", "contrasena"))
    address: Text = Field(validation_alias=AliasChoices("address", "direccion"))
    city: Text = Field(validation_alias=AliasChoices("city", "ciudad"))
    postal_code: Text = Field(validation_alias=AliasChoices("postal_code", "cp"))
    country: Text = Field(validation_alias=AliasChoices("country", "pais"))


class LoginRequest(FormModel):
    """Request model for login."""

    email: Text = Field(validation_alias=AliasChoices("email", "correo"))
    password: Secret = Field(validation_alias=AliasChoices("password", "contrasena"))


class ReceiptForm(FormModel):
    """Text fields of a payment receipt submission."""

    name: Text = Field(validation_alias=AliasChoices("name", "nombre"))
    email: Text = Field(validation_alias=AliasChoices("email", "correo"))
    concept: Text = Field(validation_alias=AliasChoices("concept", "concepto"))


class FreeInquiryForm(FormModel):
    """Free inquiry form."""

    name: Text = Field(validation_alias=AliasChoices("name", "nombre"))
    email: Text = Field(validation_alias=AliasChoices("email", "correo"))
    topic: OptionalText = Field(default="", validation_alias=AliasChoices("topic", "asunto"))
    message: MessageText = Field(validation_alias=AliasChoices("message", "mensaje"))


class QuoteInquiryForm(FormModel):
    """Text fields of a paid (quote) inquiry."""

    name: Text = Field(validation_alias=AliasChoices("name", "nombre"))
    email: Text = Field(validation_alias=AliasChoices("email", "correo"))
    topic: OptionalText = Field(default="", validation_alias=AliasChoices("topic", "asunto"))
    description: Text = Field(validation_alias=AliasChoices("description", "descripcion"))


class MessageResponse(BaseModel):
    """Response model for a successful registration."""

    message: str


class LoginResponse(BaseModel):
    """Response model for successful login. Never includes the password hash."""

    message: str
    name: str
    surname: str
    email: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str
