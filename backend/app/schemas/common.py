"""
Briques communes aux schémas Pydantic.
"""

from typing import Optional

from pydantic import BaseModel, model_validator


def strip_not_empty(v: Optional[str], message: str = "Le champ ne peut pas être vide.") -> Optional[str]:
    """Nettoie une chaîne et refuse une valeur vide (None est laissé tel quel)."""
    if v is None:
        return v
    if not v.strip():
        raise ValueError(message)
    return v.strip()


class PatchModel(BaseModel):
    """
    Base des schémas de mise à jour partielle (PATCH).

    Un champ est soit absent (non modifié), soit présent avec une valeur.
    Un `null` explicite est refusé : il ne permet pas de vider un champ.
    """

    @model_validator(mode="after")
    def no_explicit_null(self):
        for name in sorted(self.model_fields_set):
            if getattr(self, name) is None:
                raise ValueError(f"Le champ '{name}' ne peut pas être null.")
        return self
