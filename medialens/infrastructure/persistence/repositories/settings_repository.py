"""
Implementation SQLModel du repository des parametres.

Stocke les parametres cle/valeur (seuils qualite, montages NFS) dans la
table settings.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Session, select

from medialens.core.ports.repositories import ISettingsRepository
from medialens.infrastructure.persistence.models import SettingModel


class SQLModelSettingsRepository(ISettingsRepository):
    """Repository SQLModel pour les parametres cle/valeur."""

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def get(self, key: str) -> Optional[str]:
        """Recupere la valeur d'un parametre, None s'il n'existe pas."""
        model = self._session.get(SettingModel, key)
        if model:
            return model.value
        return None

    def set(self, key: str, value: str) -> None:
        """Enregistre un parametre (insertion ou mise a jour)."""
        existing = self._session.get(SettingModel, key)
        if existing:
            existing.value = value
            existing.updated_at = datetime.utcnow()
            self._session.add(existing)
        else:
            self._session.add(SettingModel(key=key, value=value))
        self._session.commit()

    def get_by_prefix(self, prefix: str) -> dict[str, str]:
        """Recupere les parametres dont la cle commence par prefix."""
        statement = select(SettingModel).where(SettingModel.key.startswith(prefix, autoescape=True))
        models = self._session.exec(statement).all()
        return {model.key: model.value for model in models}
