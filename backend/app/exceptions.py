"""
Exceptions métier de l'API.

Chaque exception porte le code HTTP auquel elle correspond. La conversion en réponse
`{"error": <message>}` est faite uniquement par les handlers enregistrés dans app.main.
Les erreurs SQLAlchemy ne sont pas encapsulées : elles remontent telles quelles
et sont traitées comme des erreurs 500.
"""


class AppError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputValidationError(AppError):
    """Entrée mal formée ou manquante, corrigeable par l'appelant."""
    status_code = 400


class ConflictError(InputValidationError):
    """Doublon sur un champ unique ou violation d'intégrité référentielle."""


class NotFoundError(AppError):
    """Aucune ligne pour l'identifiant demandé."""
    status_code = 404


class ReferencedEntityNotFoundError(AppError):
    """Une référence donnée par nom (groupe, faculté) ne correspond à aucune ligne."""
    status_code = 400


class AuthError(AppError):
    """Identifiants invalides, compte inactif ou jeton rejeté."""
    status_code = 401
