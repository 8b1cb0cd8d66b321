from pydantic import BaseModel, EmailStr, Field, ValidationError


# Messages shown to the user for the first failing field.
FIELD_MESSAGES = {
    "email": "Invalid email address",
    "password": "Password must be at least 6 characters",
    "name": "Name is required",
}


def first_error_message(exc: ValidationError) -> str:
    err = exc.errors()[0]
    field = err["loc"][0] if err.get("loc") else None
    return FIELD_MESSAGES.get(field, err.get("msg", "Invalid data"))


class SignupIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    name: str = Field(min_length=1, max_length=255)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class UserOut(BaseModel):
    id: int
    email: EmailStr
    name: str | None = None


class Principal(BaseModel):
    """The authenticated caller, resolved once per request from the session cookie."""

    id: int
