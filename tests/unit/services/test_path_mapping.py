"""
Tests unitaires pour la conversion des chemins reseau.
"""

from unittest.mock import MagicMock

import pytest

from medialens.core.ports.repositories import ISettingsRepository
from medialens.services.path_mapping import (
    NFS_MAPPINGS_SETTING,
    NfsMountMappingCache,
    PathMapper,
    convert_nfs_path_to_local,
    parse_mappings,
)


@pytest.fixture
def mapper() -> PathMapper:
    """PathMapper avec deux montages NFS imbriques."""
    cache = NfsMountMappingCache(lambda: {"nas": "Y:", "nas/media": "Z:\\"})
    return PathMapper(cache)


class TestParseMappings:
    """Tests pour parse_mappings."""

    def test_valid_json(self) -> None:
        """Objet JSON -> dictionnaire de chaines."""
        assert parse_mappings('{"nas/media": "Z:"}') == {"nas/media": "Z:"}

    @pytest.mark.parametrize("raw", [None, "", "not json", '["a", "b"]'])
    def test_invalid_gives_empty(self, raw) -> None:
        """Absent, illisible ou pas un objet -> {}."""
        assert parse_mappings(raw) == {}


class TestConvertNfsPath:
    """Tests pour convert_nfs_path_to_local."""

    def test_simple_mapping(self) -> None:
        """Le chemin relatif est ajoute au montage avec des separateurs Windows."""
        result = convert_nfs_path_to_local("nfs://nas/media/Films/a.mkv", {"nas/media": "Z:"})

        assert result == "Z:\\Films\\a.mkv"

    def test_longest_prefix_wins(self) -> None:
        """Le plus long prefixe correspondant est retenu."""
        mappings = {"nas": "Y:", "nas/media": "Z:"}

        assert convert_nfs_path_to_local("nfs://nas/media/a.mkv", mappings) == "Z:\\a.mkv"
        assert convert_nfs_path_to_local("nfs://nas/other/a.mkv", mappings) == "Y:\\other\\a.mkv"

    def test_prefix_with_scheme(self) -> None:
        """Un prefixe saisi avec nfs:// est accepte."""
        assert convert_nfs_path_to_local("nfs://nas/a.mkv", {"nfs://nas": "Z:"}) == "Z:\\a.mkv"

    def test_no_mapping(self) -> None:
        """Sans correspondance, l'URL est inchangee."""
        assert convert_nfs_path_to_local("nfs://other/a.mkv", {"nas": "Z:"}) == "nfs://other/a.mkv"


class TestPathMapper:
    """Tests pour PathMapper.to_local."""

    def test_smb_to_unc(self, mapper: PathMapper) -> None:
        """smb:// -> chemin UNC."""
        assert mapper.to_local("smb://server/share/Films/a.mkv") == "\\\\server\\share\\Films\\a.mkv"

    def test_nfs(self, mapper: PathMapper) -> None:
        """nfs:// -> montage local, sans doubler le separateur final."""
        assert mapper.to_local("nfs://nas/media/Films/a.mkv") == "Z:\\Films\\a.mkv"

    def test_file_url(self, mapper: PathMapper) -> None:
        """file:// -> chemin local."""
        assert mapper.to_local("file:///home/user/a.mkv") == "/home/user/a.mkv"

    @pytest.mark.parametrize("path", ["/home/user/a.mkv", "ftp://host/a.mkv", ""])
    def test_other_paths_unchanged(self, mapper: PathMapper, path: str) -> None:
        """Chemins locaux et schemas inconnus sont retournes tels quels."""
        assert mapper.to_local(path) == path


class TestNfsMountMappingCache:
    """Tests pour NfsMountMappingCache."""

    def test_loaded_once(self) -> None:
        """Le chargeur n'est appele qu'une fois."""
        loader = MagicMock(return_value={"nas": "Z:"})
        cache = NfsMountMappingCache(loader)

        cache.get()
        cache.get()

        loader.assert_called_once()

    def test_invalidate(self) -> None:
        """invalidate() force un rechargement."""
        loader = MagicMock(return_value={})
        cache = NfsMountMappingCache(loader)
        cache.get()

        cache.invalidate()
        cache.get()

        assert loader.call_count == 2

    def test_from_settings(self) -> None:
        """Le cache lit le parametre nfs_mount_mappings."""
        repository = MagicMock(spec=ISettingsRepository)
        repository.get.return_value = '{"nas": "Z:"}'

        cache = NfsMountMappingCache.from_settings(repository)

        assert cache.get() == {"nas": "Z:"}
        repository.get.assert_called_once_with(NFS_MAPPINGS_SETTING)
