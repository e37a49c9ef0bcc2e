"""
Service métier d'authentification.

Flux d'inscription :
  1. POST /auth/send-otp   → code à 6 chiffres persisté (expiration 5 min) puis envoyé par email
  2. POST /auth/register   → vérification email/téléphone libres, code OTP valide,
                             suppression des codes de l'email, création de l'utilisateur
Connexion : access token (courte durée) + refresh token persisté, rotation à chaque refresh.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from classroom_api.config import settings
from classroom_api.exceptions import AppError, InternalServerError, UnprocessableEntityError
from classroom_api.models.user import User
from classroom_api.repositories import auth_repo, user_repo
from classroom_api.schemas.auth import (
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SendOtpRequest,
    TokenPairResponse,
)
from classroom_api.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)
from classroom_api.services import email_service

logger = logging.getLogger(__name__)

INVALID_OTP = "Code OTP invalide ou expiré."
UNKNOWN_USER = "Utilisateur introuvable."
INVALID_REFRESH_TOKEN = "Refresh token invalide."


def generate_otp_code() -> str:
    """Code numérique à 6 chiffres (100000–999999)."""
    return str(100000 + secrets.randbelow(900000))


def send_otp(db: Session, email: str, code_type: str) -> None:
    """
    Persiste un nouveau code OTP puis l'envoie par email.
    Si l'envoi échoue, le code reste en base : l'utilisateur doit en redemander un.
    """
    code = generate_otp_code()
    auth_repo.create_otp_code(
        db,
        email=email,
        code=code,
        code_type=code_type,
        expires_at=datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
    )
    email_service.send_email(
        email=email,
        subject="Code de vérification",
        content=f"Votre code OTP est : {code}. Il expire dans {settings.OTP_EXPIRE_MINUTES} minutes.",
    )


def send_otp_register(db: Session, data: SendOtpRequest) -> dict:
    try:
        send_otp(db, data.email, "email_verification")
    except AppError:
        raise
    except Exception as exc:
        logger.error("Échec de l'envoi du code OTP à %s : %s", data.email, exc)
        raise InternalServerError("Une erreur est survenue lors de l'envoi du code OTP.")
    return {"message": "Le code OTP a été envoyé à votre adresse email."}


def register(db: Session, data: RegisterRequest) -> User:
    """
    Crée un compte élève après vérification du code OTP.
    L'unicité de l'email et du téléphone est vérifiée avant toute autre opération :
    aucun hachage ni accès à la table OTP sur ces chemins d'échec.
    """
    if user_repo.find_by_email(db, data.email):
        raise UnprocessableEntityError("Cet email est déjà utilisé.")
    if user_repo.find_by_phone_number(db, data.phone_number):
        raise UnprocessableEntityError("Ce numéro de téléphone est déjà utilisé.")

    otp = auth_repo.find_valid_otp_code(db, data.email, data.otp_code, "email_verification")
    if otp is None:
        raise UnprocessableEntityError(INVALID_OTP)
    auth_repo.delete_otp_codes(db, data.email)

    user = user_repo.create(
        db,
        email=data.email,
        password_hash=hash_password(data.password),
        full_name=data.full_name,
        phone_number=data.phone_number,
        role="student",
    )
    logger.info("Utilisateur inscrit : %s (%s)", user.email, user.id)
    return user


def forgot_password(db: Session, data: ForgotPasswordRequest) -> dict:
    if user_repo.find_by_email(db, data.email) is None:
        raise UnprocessableEntityError(UNKNOWN_USER)
    try:
        send_otp(db, data.email, "password_reset")
    except AppError:
        raise
    except Exception as exc:
        logger.error("Échec de l'envoi du code de réinitialisation à %s : %s", data.email, exc)
        raise InternalServerError("Une erreur est survenue lors de l'envoi du code OTP. Réessayez plus tard.")
    return {"message": "Le code de réinitialisation a été envoyé."}


def reset_password(db: Session, data: ResetPasswordRequest) -> dict:
    otp = auth_repo.find_valid_otp_code(db, data.email, data.otp_code, "password_reset")
    if otp is None:
        raise UnprocessableEntityError(INVALID_OTP)
    auth_repo.delete_otp_codes(db, data.email)

    user = user_repo.find_by_email(db, data.email)
    if user is None:
        raise UnprocessableEntityError(UNKNOWN_USER)

    user_repo.update(db, user, password_hash=hash_password(data.new_password))
    # Toutes les sessions ouvertes sont invalidées
    auth_repo.delete_refresh_tokens_of_user(db, user.id)
    logger.info("Mot de passe réinitialisé pour l'utilisateur %s", user.id)
    return {"message": "Mot de passe réinitialisé avec succès."}


def login(db: Session, data: LoginRequest) -> TokenPairResponse:
    user = user_repo.find_by_email(db, data.email)
    if user is None or not verify_password(data.password, user.password_hash):
        raise UnprocessableEntityError("Email ou mot de passe incorrect.")
    if not user.is_active:
        raise UnprocessableEntityError("Ce compte a été désactivé.")
    return generate_tokens(db, user)


def generate_tokens(db: Session, user: User) -> TokenPairResponse:
    """Émet une paire access/refresh et persiste le refresh token avec son expiration."""
    access_token = create_access_token(user.id, user.role)
    refresh_token = create_refresh_token(user.id)
    payload = decode_refresh_token(refresh_token)
    auth_repo.create_refresh_token(
        db,
        token=refresh_token,
        user_id=user.id,
        expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
    return TokenPairResponse(access_token=access_token, refresh_token=refresh_token)


def refresh_token(db: Session, data: RefreshTokenRequest) -> TokenPairResponse:
    """Rotation : l'ancien refresh token est supprimé, une nouvelle paire est émise."""
    stored = auth_repo.find_refresh_token(db, data.refresh_token)
    if stored is None:
        raise UnprocessableEntityError(INVALID_REFRESH_TOKEN)

    payload = decode_refresh_token(data.refresh_token)
    if payload is None:
        raise UnprocessableEntityError(INVALID_REFRESH_TOKEN)

    user = user_repo.find_by_id(db, int(payload["sub"]))
    if user is None:
        raise UnprocessableEntityError(UNKNOWN_USER)

    auth_repo.delete_refresh_token(db, data.refresh_token)
    return generate_tokens(db, user)


def logout(db: Session, data: RefreshTokenRequest) -> dict:
    deleted = auth_repo.delete_refresh_token(db, data.refresh_token)
    if not deleted:
        raise UnprocessableEntityError(INVALID_REFRESH_TOKEN)
    return {"message": "Déconnexion réussie."}
