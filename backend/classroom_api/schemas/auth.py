"""
Schémas Pydantic pour l'authentification (inscription, OTP, connexion, tokens).
"""

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator


def _phone_not_empty(v: str) -> str:
    if not v.strip():
        raise ValueError("Le numéro de téléphone ne peut pas être vide.")
    return v.strip()


class SendOtpRequest(BaseModel):
    email: EmailStr


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class RegisterRequest(BaseModel):
    email: EmailStr
    full_name: str = Field(min_length=1, max_length=200)
    phone_number: str = Field(max_length=20)
    otp_code: str = Field(min_length=6, max_length=6)
    password: str = Field(min_length=6, max_length=100)
    confirm_password: str = Field(min_length=6, max_length=100)

    @field_validator("full_name")
    @classmethod
    def full_name_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Le nom complet ne peut pas être vide.")
        return v.strip()

    @field_validator("phone_number")
    @classmethod
    def phone_not_empty(cls, v: str) -> str:
        return _phone_not_empty(v)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError("La confirmation du mot de passe ne correspond pas.")
        return self


class ResetPasswordRequest(BaseModel):
    email: EmailStr
    otp_code: str = Field(min_length=6, max_length=6)
    new_password: str = Field(min_length=6, max_length=100)
    confirm_new_password: str = Field(min_length=6, max_length=100)

    @model_validator(mode="after")
    def passwords_match(self):
        if self.new_password != self.confirm_new_password:
            raise ValueError("La confirmation du mot de passe ne correspond pas.")
        return self


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=100)


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class LogoutRequest(RefreshTokenRequest):
    pass
