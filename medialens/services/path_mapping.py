"""
Conversion des chemins réseau en chemins locaux.

Les fournisseurs de médias (Kodi notamment) stockent des URL réseau :
- smb://serveur/partage/film.mkv -> \\\\serveur\\partage\\film.mkv (UNC)
- nfs://serveur/export/film.mkv -> selon les correspondances configurées
  dans le paramètre "nfs_mount_mappings" (JSON {"serveur/export": "Z:"})
- file:///chemin -> /chemin

Les autres chemins sont retournés tels quels.
"""

import json
from typing import Callable, Optional

from loguru import logger

from medialens.core.ports.repositories import ISettingsRepository

NFS_MAPPINGS_SETTING = "nfs_mount_mappings"

SMB_SCHEME = "smb://"
NFS_SCHEME = "nfs://"
FILE_SCHEME = "file://"


def parse_mappings(raw: Optional[str]) -> dict[str, str]:
    """
    Décode le JSON des correspondances NFS.

    Un JSON invalide ou qui n'est pas un objet donne un dictionnaire vide.
    """
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Correspondances NFS illisibles : {e}")
        return {}
    if not isinstance(data, dict):
        logger.warning("Correspondances NFS ignorées : objet JSON attendu")
        return {}
    return {str(key): str(value) for key, value in data.items()}


class NfsMountMappingCache:
    """
    Cache des correspondances NFS.

    Le chargeur n'est appelé qu'au premier get() suivant la création ou
    un invalidate().
    """

    def __init__(self, loader: Callable[[], dict[str, str]]) -> None:
        self._loader = loader
        self._mappings: Optional[dict[str, str]] = None

    @classmethod
    def from_settings(cls, settings_repository: ISettingsRepository) -> "NfsMountMappingCache":
        """Cache alimenté par le paramètre nfs_mount_mappings."""
        return cls(lambda: parse_mappings(settings_repository.get(NFS_MAPPINGS_SETTING)))

    def get(self) -> dict[str, str]:
        """Retourne les correspondances, chargées au besoin."""
        if self._mappings is None:
            self._mappings = self._loader()
        return self._mappings

    def invalidate(self) -> None:
        """Force un rechargement au prochain get()."""
        self._mappings = None


def convert_nfs_path_to_local(nfs_url: str, mappings: dict[str, str]) -> str:
    """
    Convertit une URL nfs:// avec le plus long préfixe correspondant.

    Le chemin relatif est ajouté au point de montage local avec des
    séparateurs Windows. Sans correspondance, l'URL est retournée telle quelle.

    Example:
        >>> convert_nfs_path_to_local("nfs://nas/media/Films/a.mkv", {"nas/media": "Z:"})
        'Z:\\\\Films\\\\a.mkv'
    """
    nfs_path = nfs_url[len(NFS_SCHEME):] if nfs_url.startswith(NFS_SCHEME) else nfs_url

    best_prefix = ""
    best_local = ""
    for prefix, local_mount in mappings.items():
        normalized = prefix[len(NFS_SCHEME):] if prefix.startswith(NFS_SCHEME) else prefix
        if nfs_path.startswith(normalized) and len(normalized) > len(best_prefix):
            best_prefix, best_local = normalized, local_mount

    if not best_prefix:
        return nfs_url

    relative = nfs_path[len(best_prefix):].lstrip("/")
    if not best_local.endswith(("\\", "/")):
        best_local += "\\"
    return best_local + relative.replace("/", "\\")


class PathMapper:
    """Convertit les chemins des fournisseurs en chemins accessibles localement."""

    def __init__(self, nfs_cache: NfsMountMappingCache) -> None:
        self._nfs_cache = nfs_cache

    def to_local(self, path: str) -> str:
        """
        Retourne le chemin local correspondant à un chemin fournisseur.

        Args:
            path: Chemin ou URL (smb://, nfs://, file://)

        Returns:
            Chemin local, ou le chemin d'origine si aucune conversion ne s'applique.
        """
        if not path:
            return path

        if path.startswith(SMB_SCHEME):
            return "\\\\" + path[len(SMB_SCHEME):].replace("/", "\\")

        if path.startswith(NFS_SCHEME):
            local = convert_nfs_path_to_local(path, self._nfs_cache.get())
            if local == path:
                logger.warning(f"Aucune correspondance NFS configurée pour {path}")
            return local

        if path.startswith(FILE_SCHEME):
            return path[len(FILE_SCHEME):]

        if "://" in path:
            logger.warning(f"Schéma d'URL inconnu : {path.split('://')[0]}")
        return path
