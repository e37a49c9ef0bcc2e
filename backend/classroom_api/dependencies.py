"""
Dépendances FastAPI d'authentification et d'autorisation.

get_current_user : Bearer access token → utilisateur actif (401 sinon).
require_roles    : garde de rôle à placer sur les routes privilégiées (403 sinon).
"""

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from classroom_api.database import get_db
from classroom_api.models.user import User
from classroom_api.repositories import user_repo
from classroom_api.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentification requise.")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=401, detail="Token invalide ou expiré.")

    user = user_repo.find_by_id(db, int(payload["sub"]))
    if user is None or not user.is_active:
        raise HTTPException(status_code=401, detail="Utilisateur introuvable ou désactivé.")
    return user


def require_roles(*roles: str):
    """Retourne une dépendance qui vérifie le rôle de l'utilisateur connecté."""

    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=403, detail="Accès refusé.")
        return current_user

    return checker
