"""
Interfaces ports pour les repositories.

Interfaces abstraites (ports) définissant les contrats pour la persistance des données.
Les implémentations (adaptateurs) fourniront les mécanismes de stockage concrets
(SQLite via SQLModel, en mémoire pour les tests, etc.).
"""

from abc import ABC, abstractmethod
from typing import Optional

from medialens.core.entities import MediaItem, MediaItemVersion
from medialens.core.value_objects import MediaType, QualityScore


class IMediaItemRepository(ABC):
    """
    Interface de stockage des médias, de leurs versions et de leurs scores.

    Les écritures sont des upserts : un média est identifié par
    (source_id, provider_item_id), une version par version_source et un
    score par media_item_id. Réenregistrer un groupe inchangé ne modifie
    pas les données.
    """

    @abstractmethod
    def save_group(
        self,
        item: MediaItem,
        versions: list[MediaItemVersion],
        item_score: QualityScore,
    ) -> MediaItem:
        """
        Enregistre un groupe complet (média, versions, scores) en une transaction.

        Une seule version du groupe est marquée is_best après l'écriture.

        Retourne :
            Le média avec son ID renseigné
        """
        ...

    @abstractmethod
    def get_media_items(
        self,
        source_id: Optional[str] = None,
        library_id: Optional[str] = None,
        media_type: Optional[MediaType] = None,
    ) -> list[MediaItem]:
        """Liste les médias, filtrés par source, bibliothèque et type."""
        ...

    @abstractmethod
    def get_versions(self, media_item_id: int) -> list[MediaItemVersion]:
        """Liste les versions d'un média."""
        ...

    @abstractmethod
    def get_quality_score(self, media_item_id: int) -> Optional[QualityScore]:
        """Récupère le score qualité d'un média."""
        ...

    @abstractmethod
    def get_quality_scores(self) -> list[QualityScore]:
        """Liste tous les scores qualité enregistrés."""
        ...

    @abstractmethod
    def delete_media_item(self, media_item_id: int) -> bool:
        """Supprime un média avec ses versions et son score. Retourne True si supprimé."""
        ...


class ISettingsRepository(ABC):
    """
    Interface de stockage des paramètres clé/valeur.

    Les seuils de qualité et les correspondances de montage NFS y sont stockés.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Récupère la valeur d'un paramètre."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Enregistre la valeur d'un paramètre."""
        ...

    @abstractmethod
    def get_by_prefix(self, prefix: str) -> dict[str, str]:
        """Récupère tous les paramètres dont la clé commence par prefix."""
        ...
