"""
Router d'authentification (routes publiques) : OTP, inscription, connexion, tokens.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    LogoutRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SendOtpRequest,
    TokenPairResponse,
)
from classroom_api.schemas.common import MessageResponse
from classroom_api.schemas.user import UserResponse
from classroom_api.services import auth_service

router = APIRouter(prefix="/api/v1/auth", tags=["Authentification"])


@router.post("/send-otp", response_model=MessageResponse, summary="Envoyer un code OTP d'inscription")
def send_otp(data: SendOtpRequest, db: Session = Depends(get_db)):
    return auth_service.send_otp_register(db, data)


@router.post("/register", response_model=UserResponse, status_code=201, summary="Inscription")
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    """Crée un compte élève après vérification du code OTP reçu par email."""
    return auth_service.register(db, data)


@router.post("/forgot-password", response_model=MessageResponse, summary="Mot de passe oublié")
def forgot_password(data: ForgotPasswordRequest, db: Session = Depends(get_db)):
    return auth_service.forgot_password(db, data)


@router.put("/reset-password", response_model=MessageResponse, summary="Réinitialiser le mot de passe")
def reset_password(data: ResetPasswordRequest, db: Session = Depends(get_db)):
    return auth_service.reset_password(db, data)


@router.post("/login", response_model=TokenPairResponse, summary="Connexion")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    return auth_service.login(db, data)


@router.post("/refresh-token", response_model=TokenPairResponse, summary="Renouveler les tokens")
def refresh_token(data: RefreshTokenRequest, db: Session = Depends(get_db)):
    return auth_service.refresh_token(db, data)


@router.delete("/logout", response_model=MessageResponse, summary="Déconnexion")
def logout(data: LogoutRequest, db: Session = Depends(get_db)):
    return auth_service.logout(db, data)
