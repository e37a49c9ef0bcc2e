"""
Modèles SQLAlchemy pour l'authentification : codes OTP et refresh tokens.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from classroom_api.database import Base


class OtpCode(Base):
    """Code à 6 chiffres envoyé par email, valable jusqu'à expires_at."""
    __tablename__ = "otp_codes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, index=True)
    code = Column(String(6), nullable=False)
    code_type = Column(String(30), nullable=False)  # email_verification, password_reset
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class RefreshToken(Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(1000), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
