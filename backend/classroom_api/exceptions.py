"""
Exceptions métier de l'application.

Les services lèvent directement ces exceptions ; les routers ne les interceptent pas.
Le handler enregistré dans main.py les convertit en réponse JSON {"detail": ...}
avec le code HTTP porté par la classe.
"""


class AppError(Exception):
    """Exception de base, porte le code HTTP et le message destiné au client."""

    status_code = 500

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class UnprocessableEntityError(AppError):
    """Règle métier violée : doublon, OTP invalide, mot de passe incorrect..."""

    status_code = 422


class NotFoundError(AppError):
    """Ressource introuvable par son identifiant."""

    status_code = 404


class ForbiddenError(AppError):
    """L'appelant n'est ni propriétaire ni administrateur."""

    status_code = 403


class BadRequestError(AppError):
    """Opération bloquée par une dépendance (ex. média encore utilisé)."""

    status_code = 400


class InternalServerError(AppError):
    """Échec inattendu d'une couche inférieure (ex. envoi d'email)."""

    status_code = 500
