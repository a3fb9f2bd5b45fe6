from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator


class Role(str, Enum):
    STAFF = "staff"
    ADMIN = "admin"
    SUPER_ADMIN = "superAdmin"


class Identity(BaseModel):
    """Verified claims about the caller, valid for a single request."""

    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    name: str
    email: str
    # Kept as a plain string: a token may carry a role outside Role.
    role: str


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

    @field_validator("email", "password", mode="before")
    @classmethod
    def _non_string_is_missing(cls, value):
        # Non-string credentials get the same 400 as missing ones.
        return value if isinstance(value, str) else None


class LoginData(BaseModel):
    user: Identity
    token: str


class LoginResponse(BaseModel):
    status: str = "success"
    message: str
    data: LoginData
