"""
Service métier du profil de l'utilisateur connecté.
"""

import logging

from sqlalchemy.orm import Session

from classroom_api.exceptions import ForbiddenError, UnprocessableEntityError
from classroom_api.models.user import User
from classroom_api.repositories import media_repo, user_repo
from classroom_api.schemas.profile import ChangePasswordRequest, ProfileUpdate
from classroom_api.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def update_profile(db: Session, user: User, data: ProfileUpdate) -> User:
    update_data = data.model_dump(exclude_unset=True)

    phone_number = update_data.get("phone_number")
    if phone_number and phone_number != user.phone_number:
        existing = user_repo.find_by_phone_number(db, phone_number)
        if existing is not None and existing.id != user.id:
            raise UnprocessableEntityError("Ce numéro de téléphone est déjà utilisé.")

    avatar_media_id = update_data.get("avatar_media_id")
    if avatar_media_id is not None:
        media = media_repo.find_by_id(db, avatar_media_id)
        if media is None or media.deleted_at is not None:
            raise UnprocessableEntityError("Fichier introuvable.")
        if media.uploaded_by != user.id:
            raise ForbiddenError("Vous ne pouvez utiliser que vos propres fichiers comme avatar.")

    if not update_data:
        return user
    return user_repo.update(db, user, **update_data)


def change_password(db: Session, user: User, data: ChangePasswordRequest) -> dict:
    if not verify_password(data.current_password, user.password_hash):
        raise UnprocessableEntityError("Le mot de passe actuel est incorrect.")
    user_repo.update(db, user, password_hash=hash_password(data.new_password))
    logger.info("Mot de passe modifié pour l'utilisateur %s", user.id)
    return {"message": "Mot de passe modifié avec succès."}
