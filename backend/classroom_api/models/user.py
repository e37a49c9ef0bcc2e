"""
Modèle SQLAlchemy pour les utilisateurs (administrateurs et élèves).
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, func

from classroom_api.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(200), nullable=False)
    phone_number = Column(String(20), unique=True, nullable=False)
    role = Column(String(20), nullable=False, default="student")  # admin, student
    # use_alter : cycle users ↔ media (media.uploaded_by → users.id)
    avatar_media_id = Column(
        Integer,
        ForeignKey("media.id", ondelete="SET NULL", use_alter=True, name="fk_users_avatar_media"),
        nullable=True,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
