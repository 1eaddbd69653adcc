"""
Extraction des noms d'édition par comparaison des noms de fichiers.

Quand plusieurs fichiers représentent le même film, on compare leurs
noms : le préfixe commun (titre + année) est retiré, ainsi que les
jetons techniques (résolution, source, codecs, HDR...). Le texte
restant devient le nom d'édition ("Extended", "Final Cut"...).

Exemple :
    Blade.Runner.1982.Final.Cut.1080p.BluRay.x264.mkv   -> "Final Cut"
    Blade.Runner.1982.Theatrical.1080p.BluRay.x264.mkv  -> "Theatrical"
"""

import re
from pathlib import PureWindowsPath
from typing import Optional

from medialens.core.entities import MediaItemVersion

# Balise d'édition au format Plex : "Film (2010) {edition-Director's Cut}.mkv"
EDITION_TAG_PATTERN = re.compile(r"\{edition-([^}]+)\}", re.IGNORECASE)

MEDIA_EXTENSIONS = frozenset(
    {"mkv", "mp4", "avi", "mov", "wmv", "flv", "webm", "m4v", "ts", "mpg", "mpeg"}
)

TECHNICAL_TOKENS = frozenset({
    # Résolutions
    "480p", "576p", "720p", "1080p", "1080i", "2160p", "4k", "uhd", "sd",
    # Sources
    "bluray", "blu-ray", "bdrip", "brrip", "remux", "web-dl", "webdl",
    "webrip", "web", "hdtv", "pdtv", "dvdrip", "dvd", "dvd-r",
    # Codecs vidéo
    "x264", "x265", "h264", "h265", "h.264", "h.265", "hevc", "avc",
    "av1", "vp9", "xvid", "divx", "mpeg-2", "mpeg2", "vc-1", "vc1",
    # Codecs audio
    "dts", "dts-hd", "dts-hdma", "dtsx", "dts-x", "dts:x",
    "truehd", "atmos", "dd+", "ddp", "dd", "eac3", "e-ac-3", "ac3", "ac-3",
    "aac", "flac", "lpcm", "mp3", "pcm", "opus",
    # HDR
    "hdr", "hdr10", "hdr10+", "hdr10plus", "dv", "hlg", "sdr",
    # Divers
    "proper", "repack", "internal", "10bit", "10-bit", "8bit", "8-bit",
    "hybrid", "5.1", "7.1", "2.0",
})

# Expressions de plusieurs mots retirées avant le filtrage mot à mot
TECHNICAL_PHRASES = (
    "dolby vision", "dolby atmos", "dts-hd ma", "dts hd ma", "dts-hd",
    "blu-ray", "web-dl",
)

_TOKEN_PUNCTUATION = re.compile(r"[\[\](){},-]")
_RESOLUTION_TOKEN = re.compile(r"^\d+p$", re.IGNORECASE)
_BIT_DEPTH_TOKEN = re.compile(r"^\d+bit$", re.IGNORECASE)
_EDGE_PUNCTUATION = "–— -_."


def basename(file_path: str) -> str:
    """Nom de fichier, pour des chemins POSIX comme Windows."""
    return PureWindowsPath(file_path).name


def strip_media_extension(filename: str) -> str:
    """Retire l'extension si elle est connue ("Vol.1" reste intact)."""
    stem, dot, extension = filename.rpartition(".")
    if dot and stem and extension.lower() in MEDIA_EXTENSIONS:
        return stem
    return filename


def normalize_filename(name: str) -> str:
    """Points et soulignés deviennent des espaces, espaces fusionnés."""
    return " ".join(name.replace(".", " ").replace("_", " ").split())


def common_word_prefix(names: list[str]) -> str:
    """Plus long préfixe commun, mot à mot et sans tenir compte de la casse."""
    if not names:
        return ""
    word_lists = [name.split() for name in names]
    common = 0
    for words in zip(*word_lists):
        if len({word.lower() for word in words}) != 1:
            break
        common += 1
    return " ".join(word_lists[0][:common])


def strip_brackets(text: str) -> str:
    """Retire les sections [...] et {...}, garde le contenu des parenthèses."""
    text = re.sub(r"\[[^\]]*\]", "", text)
    text = re.sub(r"\{[^}]*\}", "", text)
    text = re.sub(r"[()]", " ", text)
    return " ".join(text.split())


def _is_technical(word: str) -> bool:
    token = _TOKEN_PUNCTUATION.sub("", word.lower())
    if not token:
        return True
    return (
        token in TECHNICAL_TOKENS
        or bool(_RESOLUTION_TOKEN.match(token))
        or bool(_BIT_DEPTH_TOKEN.match(token))
        or token.isdigit()
    )


def strip_technical_tokens(text: str) -> str:
    """Retire expressions et jetons techniques, ne laisse que les mots d'édition."""
    cleaned = text
    for phrase in TECHNICAL_PHRASES:
        cleaned = re.sub(re.escape(phrase), " ", cleaned, flags=re.IGNORECASE)
    return " ".join(word for word in cleaned.split() if not _is_technical(word))


def clean_edges(text: str) -> str:
    """Retire tirets, points et soulignés en début et fin."""
    return text.strip(_EDGE_PUNCTUATION).strip()


def title_case(text: str) -> str:
    """Met une majuscule au début de chaque mot ("director's cut" -> "Director's Cut")."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def extract_edition_tag(file_path: str) -> Optional[str]:
    """Lit une balise {edition-X} dans le nom du fichier."""
    match = EDITION_TAG_PATTERN.search(basename(file_path))
    if match:
        return match.group(1).strip()
    return None


def extract_version_names(versions: list[MediaItemVersion]) -> list[MediaItemVersion]:
    """
    Renseigne l'édition des versions d'un même groupe.

    1. Balises {edition-X} pour les versions sans édition.
    2. Comparaison des noms de fichiers pour celles qui restent (au moins deux).

    Une édition déjà connue (nom de fichier analysé, provider) est conservée.
    Les versions sont modifiées en place et retournées.
    """
    if len(versions) <= 1:
        return versions

    for version in versions:
        if not version.edition:
            version.edition = extract_edition_tag(version.file_path)

    needs_diff = [version for version in versions if not version.edition]
    if len(needs_diff) < 2:
        return versions

    names = [
        normalize_filename(strip_media_extension(basename(version.file_path)))
        for version in needs_diff
    ]
    prefix = common_word_prefix(names)

    for version, name in zip(needs_diff, names):
        remainder = name
        if prefix and remainder.lower().startswith(prefix.lower()):
            remainder = remainder[len(prefix):]
        edition = clean_edges(strip_technical_tokens(strip_brackets(remainder.strip())))
        if edition:
            version.edition = title_case(edition)

    return versions
