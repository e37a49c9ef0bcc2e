"""
Modèles SQLAlchemy pour les classes et leurs élèves.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from classroom_api.database import Base


class Classroom(Base):
    __tablename__ = "classrooms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    is_archived = Column(Boolean, nullable=False, default=False)
    cover_media_id = Column(Integer, ForeignKey("media.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # NULL = classe active

    classroom_students = relationship("ClassroomStudent", back_populates="classroom", lazy="selectin")
    join_requests = relationship("JoinRequest", back_populates="classroom", lazy="selectin")


class ClassroomStudent(Base):
    """
    Appartenance élève ↔ classe.
    Indépendante du statut de la demande d'adhésion : suppression logique (deleted_at)
    et blocage (is_active) propres.
    """
    __tablename__ = "classroom_students"

    classroom_id = Column(Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), primary_key=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    is_active = Column(Boolean, nullable=False, default=True)
    joined_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    classroom = relationship("Classroom", back_populates="classroom_students")
    student = relationship("User", lazy="joined")
