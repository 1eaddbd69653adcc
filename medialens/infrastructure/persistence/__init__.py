"""
Module de persistance SQLite pour medialens.

Ce module fournit l'infrastructure de stockage utilisant SQLModel (SQLAlchemy).
Il contient :

- database.py : Configuration de l'engine SQLite, session factory, initialisation
- models.py : Modeles SQLModel representant les tables de la base de donnees
- hash_service.py : Identifiants stables derives des chemins de fichiers
- repositories/ : Implementations des ports de persistance

Les modeles ici sont des adapters de persistance, distincts des entites de domaine
(dataclass dans core/entities/). La conversion entre les deux se fait dans les
repositories.

Usage:
    from medialens.infrastructure.persistence import init_db, get_session

    init_db()  # Cree les tables si necessaire
    session = next(get_session())
"""

from medialens.infrastructure.persistence.database import (
    get_engine,
    get_session,
    init_db,
)
from medialens.infrastructure.persistence.models import (
    MediaItemModel,
    MediaItemVersionModel,
    QualityScoreModel,
    SettingModel,
)

__all__ = [
    "get_engine",
    "get_session",
    "init_db",
    "MediaItemModel",
    "MediaItemVersionModel",
    "QualityScoreModel",
    "SettingModel",
]
