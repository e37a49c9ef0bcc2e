"""
Modèle SQLAlchemy pour les fichiers stockés dans le stockage objet.
"""

from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from classroom_api.database import Base


class Media(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, autoincrement=True)
    disk = Column(String(20), nullable=False, default="minio")
    bucket = Column(String(100), nullable=True)
    object_key = Column(String(500), nullable=False)
    mime_type = Column(String(150), nullable=True)
    size_bytes = Column(BigInteger, nullable=True)
    visibility = Column(String(10), nullable=False, default="private")  # public, private
    uploaded_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    uploader = relationship("User", foreign_keys=[uploaded_by], lazy="joined")
