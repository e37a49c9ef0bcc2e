"""
Service métier pour l'administration des utilisateurs.
"""

import logging

from sqlalchemy.orm import Session

from classroom_api.config import settings
from classroom_api.exceptions import UnprocessableEntityError
from classroom_api.models.user import User
from classroom_api.repositories import auth_repo, user_repo
from classroom_api.schemas.user import UserListQuery
from classroom_api.security import hash_password
from classroom_api.services.query_utils import (
    build_list_response,
    build_order_by,
    build_search_filter,
    calculate_pagination,
)

logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("full_name", "email", "phone_number")


def get_all_users(db: Session, query: UserListQuery) -> dict:
    conditions = []
    search_filter = build_search_filter(User, query.search, SEARCH_FIELDS)
    if search_filter is not None:
        conditions.append(search_filter)
    if query.is_active is not None:
        conditions.append(User.is_active.is_(query.is_active))

    skip, take = calculate_pagination(query.page, query.limit)
    total = user_repo.count(db, conditions)
    users = user_repo.find_many(
        db, conditions, build_order_by(User, query.sort_by, query.order), skip, take
    )
    return build_list_response(query.page, query.limit, total, users)


def get_user(db: Session, user_id: int) -> User:
    user = user_repo.find_by_id(db, user_id)
    if user is None:
        raise UnprocessableEntityError("Utilisateur introuvable.")
    return user


def deactivate_user(db: Session, user_id: int) -> User:
    """Désactive le compte et ferme toutes ses sessions."""
    user = get_user(db, user_id)
    user = user_repo.update(db, user, is_active=False)
    auth_repo.delete_refresh_tokens_of_user(db, user.id)
    logger.info("Utilisateur %s désactivé", user.id)
    return user


def activate_user(db: Session, user_id: int) -> User:
    user = get_user(db, user_id)
    user = user_repo.update(db, user, is_active=True)
    logger.info("Utilisateur %s réactivé", user.id)
    return user


def seed_admin(db: Session) -> None:
    """Crée le compte administrateur configuré s'il n'existe pas encore."""
    if not settings.ADMIN_EMAIL:
        return
    if user_repo.find_by_email(db, settings.ADMIN_EMAIL):
        return
    user_repo.create(
        db,
        email=settings.ADMIN_EMAIL,
        password_hash=hash_password(settings.ADMIN_PASSWORD),
        full_name=settings.ADMIN_FULL_NAME,
        phone_number=settings.ADMIN_PHONE_NUMBER,
        role="admin",
    )
    logger.info("Compte administrateur %s créé", settings.ADMIN_EMAIL)
