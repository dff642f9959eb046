"""
Configuration de la connexion à la base de données PostgreSQL.
Utilise SQLAlchemy avec un moteur synchrone et un pool de connexions.
"""

import logging

from sqlalchemy import create_engine, select
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)

engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

DEFAULT_ROLES = ("student", "staff", "admin")


def get_db():
    """Dépendance FastAPI : fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None) -> None:
    """
    Crée les tables manquantes et insère les rôles par défaut.
    Appelé au démarrage uniquement si INIT_DB est activé.
    """
    import app.models  # noqa: F401 : enregistre les tables dans Base.metadata
    from app.models.user import Role

    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    session = sessionmaker(bind=bind)()
    try:
        existing = set(session.execute(select(Role.name)).scalars().all())
        missing = [name for name in DEFAULT_ROLES if name not in existing]
        if missing:
            session.add_all([Role(name=name) for name in missing])
            session.commit()
            logger.info("Rôles créés : %s", ", ".join(missing))
        else:
            logger.info("Base de données déjà initialisée")
    finally:
        session.close()
