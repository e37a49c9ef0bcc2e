"""
Utilitaires de pagination, tri et recherche partagés par les listes paginées.
Réponse commune : {page, limit, total, data}.
"""

from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import or_


def calculate_pagination(page: int, limit: int) -> Tuple[int, int]:
    """Convertit (page, limit) en (skip, take). Les pages commencent à 1."""
    page = max(page, 1)
    return (page - 1) * limit, limit


def build_order_by(model, sort_by: str, order: str = "desc"):
    """Clause ORDER BY sur la colonne sort_by du modèle."""
    column = getattr(model, sort_by)
    return column.asc() if order == "asc" else column.desc()


def build_search_filter(model, search: Optional[str], fields: Iterable[str]):
    """
    Filtre ILIKE insensible à la casse, combiné en OR sur les champs donnés.
    Retourne None si la recherche est vide.
    """
    if search is None or not search.strip():
        return None
    pattern = f"%{search.strip()}%"
    return or_(*[getattr(model, field).ilike(pattern) for field in fields])


def build_list_response(page: int, limit: int, total: int, data: List[Any]) -> dict:
    return {"page": page, "limit": limit, "total": total, "data": data}
