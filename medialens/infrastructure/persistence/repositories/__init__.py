"""
Implementations SQLModel des repositories.

Ce module contient les implementations concretes des interfaces repository
definies dans medialens/core/ports/repositories.py, utilisant SQLModel pour
la persistance SQLite.

Chaque repository :
- Herite de l'interface ABC correspondante du domaine
- Recoit une session SQLModel via injection de dependances
- Convertit entre entites de domaine (dataclass) et modeles DB (SQLModel)
"""

from medialens.infrastructure.persistence.repositories.media_item_repository import (
    SQLModelMediaItemRepository,
)
from medialens.infrastructure.persistence.repositories.settings_repository import (
    SQLModelSettingsRepository,
)

__all__ = [
    "SQLModelMediaItemRepository",
    "SQLModelSettingsRepository",
]
