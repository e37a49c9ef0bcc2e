"""
Modèle SQLAlchemy pour les demandes d'adhésion d'un élève à une classe.

Au plus une ligne par couple (student_id, classroom_id) : garanti par le service
(recherche puis mise à jour ou création), pas par une contrainte en base.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship

from classroom_api.database import Base


class JoinRequest(Base):
    __tablename__ = "join_requests"

    id = Column(Integer, primary_key=True, autoincrement=True)
    student_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    classroom_id = Column(Integer, ForeignKey("classrooms.id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False, default="pending")  # pending, approved, rejected
    requested_at = Column(DateTime(timezone=True), server_default=func.now())
    handled_at = Column(DateTime(timezone=True), nullable=True)

    classroom = relationship("Classroom", back_populates="join_requests")
    student = relationship("User", lazy="joined")
