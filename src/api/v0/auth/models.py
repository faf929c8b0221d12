import re
from pydantic import BaseModel, Field, field_validator


# Username validation pattern: alphanumeric, underscores, hyphens only
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


class RecoveryLoginRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=64)
    key: str = Field(..., min_length=1, max_length=64)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not USERNAME_PATTERN.match(v):
            raise ValueError(
                "Username can only contain letters, numbers, underscores, and hyphens"
            )
        return v


class RecoveryLoginResponse(BaseModel):
    username: str
    sk: str


class RecoveryStatusResponse(BaseModel):
    enabled: bool
    active: bool


class VerifyLoginRequest(BaseModel):
    sk: str = Field(..., min_length=16, max_length=256)


class VerifyLoginResponse(BaseModel):
    username: str
    valid: bool = True
