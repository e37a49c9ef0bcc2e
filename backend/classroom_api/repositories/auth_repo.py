"""
Accès BDD pour les codes OTP et les refresh tokens.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from classroom_api.models.auth import OtpCode, RefreshToken


def create_otp_code(db: Session, email: str, code: str, code_type: str, expires_at: datetime) -> OtpCode:
    otp = OtpCode(email=email, code=code, code_type=code_type, expires_at=expires_at)
    db.add(otp)
    db.commit()
    db.refresh(otp)
    return otp


def find_valid_otp_code(db: Session, email: str, code: str, code_type: str) -> Optional[OtpCode]:
    """Retourne le code OTP correspondant s'il n'a pas expiré, sinon None."""
    return db.execute(
        select(OtpCode)
        .where(
            OtpCode.email == email,
            OtpCode.code == code,
            OtpCode.code_type == code_type,
            OtpCode.expires_at > datetime.now(timezone.utc),
        )
        .limit(1)
    ).scalar()


def delete_otp_codes(db: Session, email: str) -> int:
    """Supprime tous les codes OTP d'un email. Retourne le nombre de lignes supprimées."""
    result = db.execute(delete(OtpCode).where(OtpCode.email == email))
    db.commit()
    return result.rowcount


def create_refresh_token(db: Session, token: str, user_id: int, expires_at: datetime) -> RefreshToken:
    refresh_token = RefreshToken(token=token, user_id=user_id, expires_at=expires_at)
    db.add(refresh_token)
    db.commit()
    return refresh_token


def find_refresh_token(db: Session, token: str) -> Optional[RefreshToken]:
    return db.get(RefreshToken, token)


def delete_refresh_token(db: Session, token: str) -> int:
    result = db.execute(delete(RefreshToken).where(RefreshToken.token == token))
    db.commit()
    return result.rowcount


def delete_refresh_tokens_of_user(db: Session, user_id: int) -> int:
    result = db.execute(delete(RefreshToken).where(RefreshToken.user_id == user_id))
    db.commit()
    return result.rowcount
