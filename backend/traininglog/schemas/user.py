from typing import Annotated
from pydantic import EmailStr, Field, StringConstraints, ValidationInfo, field_validator
from traininglog.schemas.common import CamelModel

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
PasswordStr = Annotated[str, Field(min_length=8)]
RequiredStr = Annotated[str, Field(min_length=1)]

class NewPassword(CamelModel):
    password: PasswordStr
    confirm_password: str

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, v: str, info: ValidationInfo) -> str:
        # password already failed on its own if it is missing from info.data
        if "password" in info.data and v != info.data["password"]:
            raise ValueError("Passwords don't match")
        return v

class UserSignup(NewPassword):
    name: NameStr
    email: EmailStr

class UserLogin(CamelModel):
    email: EmailStr
    password: RequiredStr

class ForgotPassword(CamelModel):
    email: EmailStr

class ResetPassword(NewPassword):
    token: RequiredStr

class ChangePassword(NewPassword):
    current_password: RequiredStr

class UserRead(CamelModel):
    id: int
    email: str
    name: str

class LoginResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead

class AuthSession(CamelModel):
    user: UserRead | None = None
