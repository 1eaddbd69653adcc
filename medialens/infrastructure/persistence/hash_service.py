"""
Identifiants stables derives des chemins de fichiers (XXHash).

Un fichier scanne localement n'a pas d'identifiant fournisseur : on
derive un hash XXH3-64 de son chemin. Le meme chemin donne toujours le
meme identifiant, ce qui permet l'upsert d'un scan a l'autre :
- version_source : "local_file_<hash>" (une version = un fichier)
- provider_item_id : "local_<hash>" (un media = son premier fichier)
"""

import xxhash

VERSION_SOURCE_PREFIX = "local_file_"
PROVIDER_ITEM_PREFIX = "local_"


def compute_path_hash(file_path: str) -> str:
    """
    Calcule le hash XXH3-64 d'un chemin.

    Retourne :
        Hash hexadecimal de 16 caracteres
    """
    hasher = xxhash.xxh3_64()
    hasher.update(file_path.encode("utf-8"))
    return hasher.hexdigest()


def version_source_for(file_path: str) -> str:
    """Identifiant stable d'une version : "local_file_<hash du chemin>"."""
    return f"{VERSION_SOURCE_PREFIX}{compute_path_hash(file_path)}"


def provider_item_id_for(file_path: str) -> str:
    """Identifiant stable d'un media local : "local_<hash du premier fichier>"."""
    return f"{PROVIDER_ITEM_PREFIX}{compute_path_hash(file_path)}"
