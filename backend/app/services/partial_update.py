"""
Mises à jour partielles (PATCH) construites champ par champ.

Principe :
- les champs d'une entité sont parcourus dans un ordre déclaré et fixe ;
- chaque champ présent dans la requête ajoute une paire (colonne, valeur) ;
- la colonne et sa valeur sont toujours ajoutées ensemble, jamais réordonnées ;
- l'ensemble est exécuté en une seule instruction UPDATE ... RETURNING.

Aucune chaîne SQL n'est assemblée à la main : les valeurs sont liées par SQLAlchemy.
"""

import logging
from typing import Any, Iterable, Sequence

from pydantic import BaseModel
from sqlalchemy import Table, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql.dml import Update

from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


class PartialUpdate:
    """Liste ordonnée d'affectations pour une ligne d'une table."""

    def __init__(self, table: Table, key_column: str = "id"):
        self.table = table
        self.key_column = key_column
        self._assignments: list[tuple[Any, Any]] = []

    def set(self, column_name: str, value: Any) -> "PartialUpdate":
        """Ajoute une affectation. Une colonne inconnue lève KeyError."""
        column = self.table.c[column_name]
        if any(existing is column for existing, _ in self._assignments):
            raise ValueError(f"La colonne '{column_name}' est déjà affectée.")
        self._assignments.append((column, value))
        return self

    def set_fields(self, data: BaseModel, fields: Iterable[str]) -> "PartialUpdate":
        """
        Ajoute, dans l'ordre de `fields`, les champs explicitement fournis dans `data`.
        Les champs absents de la requête ne produisent aucune affectation.
        """
        present = data.model_fields_set
        for name in fields:
            if name in present:
                self.set(name, getattr(data, name))
        return self

    @property
    def is_empty(self) -> bool:
        return not self._assignments

    @property
    def assignments(self) -> list[tuple[str, Any]]:
        """Paires (nom de colonne, valeur) dans l'ordre d'ajout."""
        return [(column.name, value) for column, value in self._assignments]

    def statement(self, key: int, returning: Sequence[Any]) -> Update:
        """Construit l'UPDATE ... WHERE <clé> = :key RETURNING <returning>."""
        if self.is_empty:
            raise ValueError("Aucun champ à mettre à jour.")
        return (
            update(self.table)
            .ordered_values(*self._assignments)
            .where(self.table.c[self.key_column] == key)
            .returning(*returning)
        )

    def execute(self, db: Session, key: int, returning: Sequence[Any], not_found: str) -> Row:
        """
        Exécute la mise à jour et retourne la ligne relue par RETURNING.

        Lève NotFoundError si aucune ligne ne correspond à la clé,
        ConflictError si la base rejette une contrainte (unicité, clé étrangère).
        Les autres erreurs SQLAlchemy remontent telles quelles.
        """
        stmt = self.statement(key, returning)
        try:
            row = db.execute(stmt).first()
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("Mise à jour refusée par la base : %s id=%s", self.table.name, key, exc_info=True)
            raise ConflictError("La modification viole une contrainte d'intégrité (doublon ou référence inexistante).")

        if row is None:
            raise NotFoundError(not_found)

        logger.info(
            "Mise à jour %s id=%s : %s",
            self.table.name, key, ", ".join(name for name, _ in self.assignments),
        )
        return row
