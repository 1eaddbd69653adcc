"""
Implementation SQLModel du repository MediaItem.

Implemente l'interface IMediaItemRepository pour la persistance des medias,
de leurs versions et de leurs scores qualite dans la base SQLite.
"""

import json
from dataclasses import asdict
from datetime import datetime
from typing import Optional

from loguru import logger
from sqlmodel import Session, select

from medialens.core.entities import MediaItem, MediaItemVersion
from medialens.core.ports.repositories import IMediaItemRepository
from medialens.core.value_objects import (
    AudioTrack,
    MediaType,
    QualityScore,
    QualityTier,
    TierQuality,
)
from medialens.infrastructure.persistence.models import (
    MediaItemModel,
    MediaItemVersionModel,
    QualityScoreModel,
)

# Colonnes techniques copiees telles quelles entre entites et modeles
TECHNICAL_COLUMNS = (
    "resolution", "width", "height", "video_codec", "video_bitrate",
    "video_frame_rate", "video_bit_depth", "video_profile", "hdr_format",
    "color_space", "audio_codec", "audio_codec_full", "audio_channels",
    "audio_bitrate", "audio_sample_rate", "audio_title", "has_object_audio",
    "container", "duration_seconds",
)

ITEM_COLUMNS = (
    "source_id", "library_id", "provider_item_id", "title", "year", "tmdb_id",
    "series_title", "season_number", "episode_number", "file_path", "file_size",
    "file_mtime", "version_count",
)

VERSION_COLUMNS = (
    "version_source", "file_path", "file_size", "edition", "source_type",
    "label", "is_best", "quality_score",
)


def _dump_tracks(tracks: tuple[AudioTrack, ...]) -> Optional[str]:
    if not tracks:
        return None
    return json.dumps([asdict(track) for track in tracks])


def _load_tracks(tracks_json: Optional[str]) -> tuple[AudioTrack, ...]:
    if not tracks_json:
        return ()
    return tuple(AudioTrack(**track) for track in json.loads(tracks_json))


class SQLModelMediaItemRepository(IMediaItemRepository):
    """
    Repository SQLModel pour les medias, versions et scores.

    Implemente IMediaItemRepository avec conversion bidirectionnelle
    entre les entites du domaine et les modeles de persistance.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    # ====================
    # Conversions
    # ====================

    def _copy_technical(self, source: object, target: object) -> None:
        for name in TECHNICAL_COLUMNS:
            setattr(target, name, getattr(source, name))

    def _to_entity(self, model: MediaItemModel) -> MediaItem:
        """
        Convertit un modele DB en entite domaine.

        Args :
            model : Le modele MediaItemModel depuis la DB

        Retourne :
            L'entite MediaItem correspondante
        """
        item = MediaItem(
            id=model.id,
            media_type=MediaType(model.media_type),
            audio_tracks=_load_tracks(model.audio_tracks_json),
        )
        for name in ITEM_COLUMNS:
            setattr(item, name, getattr(model, name))
        self._copy_technical(model, item)
        return item

    def _to_model(self, entity: MediaItem, model: Optional[MediaItemModel] = None) -> MediaItemModel:
        """
        Convertit une entite domaine en modele DB.

        Si un modele existant est fourni, il est mis a jour en place.
        """
        if model is None:
            model = MediaItemModel(source_id=entity.source_id, provider_item_id=entity.provider_item_id, title=entity.title)
        for name in ITEM_COLUMNS:
            setattr(model, name, getattr(entity, name))
        self._copy_technical(entity, model)
        model.media_type = entity.media_type.value
        model.audio_tracks_json = _dump_tracks(entity.audio_tracks)
        model.updated_at = datetime.utcnow()
        return model

    def _version_to_entity(self, model: MediaItemVersionModel) -> MediaItemVersion:
        version = MediaItemVersion(
            id=model.id,
            media_item_id=model.media_item_id,
            audio_tracks=_load_tracks(model.audio_tracks_json),
        )
        for name in VERSION_COLUMNS:
            setattr(version, name, getattr(model, name))
        self._copy_technical(model, version)
        if model.quality_tier:
            version.quality_tier = QualityTier(model.quality_tier)
        if model.tier_quality:
            version.tier_quality = TierQuality(model.tier_quality)
        return version

    def _version_to_model(
        self,
        entity: MediaItemVersion,
        media_item_id: int,
        model: Optional[MediaItemVersionModel] = None,
    ) -> MediaItemVersionModel:
        if model is None:
            model = MediaItemVersionModel(media_item_id=media_item_id, version_source=entity.version_source)
        for name in VERSION_COLUMNS:
            setattr(model, name, getattr(entity, name))
        self._copy_technical(entity, model)
        model.media_item_id = media_item_id
        model.quality_tier = entity.quality_tier.value if entity.quality_tier else None
        model.tier_quality = entity.tier_quality.value if entity.tier_quality else None
        model.audio_tracks_json = _dump_tracks(entity.audio_tracks)
        model.updated_at = datetime.utcnow()
        return model

    def _score_to_entity(self, model: QualityScoreModel) -> QualityScore:
        return QualityScore(
            quality_tier=QualityTier(model.quality_tier),
            tier_quality=TierQuality(model.tier_quality),
            video_quality=TierQuality(model.video_quality),
            audio_quality=TierQuality(model.audio_quality),
            tier_score=model.tier_score,
            bitrate_tier_score=model.bitrate_tier_score,
            audio_tier_score=model.audio_tier_score,
            overall_score=model.overall_score,
            needs_upgrade=model.needs_upgrade,
            issues=tuple(model.issues),
            premium_indicators=tuple(
                json.loads(model.premium_indicators_json) if model.premium_indicators_json else []
            ),
            media_item_id=model.media_item_id,
        )

    def _score_to_model(
        self,
        score: QualityScore,
        media_item_id: int,
        model: Optional[QualityScoreModel] = None,
    ) -> QualityScoreModel:
        if model is None:
            model = QualityScoreModel(
                media_item_id=media_item_id,
                quality_tier=score.quality_tier.value,
                tier_quality=score.tier_quality.value,
                video_quality=score.video_quality.value,
                audio_quality=score.audio_quality.value,
            )
        model.quality_tier = score.quality_tier.value
        model.tier_quality = score.tier_quality.value
        model.video_quality = score.video_quality.value
        model.audio_quality = score.audio_quality.value
        model.tier_score = score.tier_score
        model.bitrate_tier_score = score.bitrate_tier_score
        model.audio_tier_score = score.audio_tier_score
        model.overall_score = score.overall_score
        model.needs_upgrade = score.needs_upgrade
        model.issues_json = json.dumps(list(score.issues)) if score.issues else None
        model.premium_indicators_json = (
            json.dumps(list(score.premium_indicators)) if score.premium_indicators else None
        )
        model.updated_at = datetime.utcnow()
        return model

    # ====================
    # Ecriture
    # ====================

    def _find_item(self, source_id: str, provider_item_id: str) -> Optional[MediaItemModel]:
        statement = (
            select(MediaItemModel)
            .where(MediaItemModel.source_id == source_id)
            .where(MediaItemModel.provider_item_id == provider_item_id)
        )
        return self._session.exec(statement).first()

    def _ensure_single_best(self, versions: list[MediaItemVersion]) -> None:
        """Garde exactement une version is_best (la premiere marquee, sinon la premiere)."""
        best_index = next((i for i, v in enumerate(versions) if v.is_best), 0)
        for index, version in enumerate(versions):
            version.is_best = index == best_index

    def save_group(
        self,
        item: MediaItem,
        versions: list[MediaItemVersion],
        item_score: QualityScore,
    ) -> MediaItem:
        """
        Enregistre un media, ses versions et son score en une transaction.

        Les versions du media absentes du groupe sont supprimees. En cas
        d'erreur, la transaction est annulee et l'exception propagee.
        """
        if versions:
            self._ensure_single_best(versions)

        try:
            existing = None
            if item.id:
                existing = self._session.get(MediaItemModel, item.id)
            if existing is None:
                existing = self._find_item(item.source_id, item.provider_item_id)

            item_model = self._to_model(item, existing)
            self._session.add(item_model)
            self._session.flush()
            media_item_id = item_model.id

            kept_sources = set()
            for version in versions:
                statement = select(MediaItemVersionModel).where(
                    MediaItemVersionModel.version_source == version.version_source
                )
                version_model = self._version_to_model(
                    version, media_item_id, self._session.exec(statement).first()
                )
                self._session.add(version_model)
                kept_sources.add(version.version_source)

            stale = self._session.exec(
                select(MediaItemVersionModel).where(
                    MediaItemVersionModel.media_item_id == media_item_id
                )
            ).all()
            for version_model in stale:
                if version_model.version_source not in kept_sources:
                    self._session.delete(version_model)

            score_statement = select(QualityScoreModel).where(
                QualityScoreModel.media_item_id == media_item_id
            )
            score_model = self._score_to_model(
                item_score, media_item_id, self._session.exec(score_statement).first()
            )
            self._session.add(score_model)

            self._session.commit()
        except Exception:
            self._session.rollback()
            logger.exception(f"Echec de l'enregistrement du groupe {item.title}")
            raise

        self._session.refresh(item_model)
        item.id = item_model.id
        for version in versions:
            version.media_item_id = item.id
        return item

    def delete_media_item(self, media_item_id: int) -> bool:
        """Supprime un media avec ses versions et son score."""
        model = self._session.get(MediaItemModel, media_item_id)
        if model is None:
            return False

        for version in self._session.exec(
            select(MediaItemVersionModel).where(MediaItemVersionModel.media_item_id == media_item_id)
        ).all():
            self._session.delete(version)
        for score in self._session.exec(
            select(QualityScoreModel).where(QualityScoreModel.media_item_id == media_item_id)
        ).all():
            self._session.delete(score)
        self._session.delete(model)
        self._session.commit()
        return True

    # ====================
    # Lecture
    # ====================

    def get_by_id(self, media_item_id: int) -> Optional[MediaItem]:
        """Recupere un media par son ID interne."""
        model = self._session.get(MediaItemModel, media_item_id)
        if model:
            return self._to_entity(model)
        return None

    def get_media_items(
        self,
        source_id: Optional[str] = None,
        library_id: Optional[str] = None,
        media_type: Optional[MediaType] = None,
    ) -> list[MediaItem]:
        """Liste les medias, filtres par source, bibliotheque et type."""
        statement = select(MediaItemModel)
        if source_id is not None:
            statement = statement.where(MediaItemModel.source_id == source_id)
        if library_id is not None:
            statement = statement.where(MediaItemModel.library_id == library_id)
        if media_type is not None:
            statement = statement.where(MediaItemModel.media_type == media_type.value)
        statement = statement.order_by(MediaItemModel.title)
        models = self._session.exec(statement).all()
        return [self._to_entity(model) for model in models]

    def get_versions(self, media_item_id: int) -> list[MediaItemVersion]:
        """Liste les versions d'un media, la meilleure en premier."""
        statement = (
            select(MediaItemVersionModel)
            .where(MediaItemVersionModel.media_item_id == media_item_id)
            .order_by(MediaItemVersionModel.is_best.desc(), MediaItemVersionModel.id)
        )
        models = self._session.exec(statement).all()
        return [self._version_to_entity(model) for model in models]

    def get_quality_score(self, media_item_id: int) -> Optional[QualityScore]:
        """Recupere le score qualite d'un media."""
        statement = select(QualityScoreModel).where(
            QualityScoreModel.media_item_id == media_item_id
        )
        model = self._session.exec(statement).first()
        if model:
            return self._score_to_entity(model)
        return None

    def get_quality_scores(self) -> list[QualityScore]:
        """Liste tous les scores qualite."""
        models = self._session.exec(select(QualityScoreModel)).all()
        return [self._score_to_entity(model) for model in models]
