"""
Détection de l'audio objet (Dolby Atmos, DTS:X).

Atmos est reconnu dans le profil, le titre ou la disposition des canaux,
mais uniquement sur un codec de base TrueHD ou E-AC-3. DTS:X est reconnu
dans le profil ou le titre (pas la disposition), sur un codec DTS.
"""

ATMOS_MARKERS = ("atmos",)
DTS_X_MARKERS = ("dts:x", "dtsx", "dts-x")

ATMOS_BASE_CODECS = ("truehd", "eac3", "ec3", "e-ac-3", "ec-3")
DTS_X_BASE_CODECS = ("dts",)


def _lower(value: object) -> str:
    return value.lower() if isinstance(value, str) else ""


def _contains_any(values: tuple[str, ...], markers: tuple[str, ...]) -> bool:
    return any(marker in value for value in values for marker in markers)


def has_atmos_marker(profile: object, title: object, channel_layout: object) -> bool:
    """Vrai si "atmos" apparaît dans le profil, le titre ou la disposition."""
    return _contains_any(
        (_lower(profile), _lower(title), _lower(channel_layout)), ATMOS_MARKERS
    )


def has_dts_x_marker(profile: object, title: object) -> bool:
    """Vrai si un marqueur DTS:X apparaît dans le profil ou le titre."""
    return _contains_any((_lower(profile), _lower(title)), DTS_X_MARKERS)


def has_object_audio(
    codec: object,
    profile: object = None,
    title: object = None,
    channel_layout: object = None,
) -> bool:
    """
    Indique si une piste audio porte de l'audio objet.

    Exemples :
        has_object_audio("truehd", "Atmos", None, None) -> True
        has_object_audio("aac", "Atmos", None, None) -> False
    """
    codec_value = _lower(codec)

    if has_atmos_marker(profile, title, channel_layout) and any(
        base in codec_value for base in ATMOS_BASE_CODECS
    ):
        return True

    if has_dts_x_marker(profile, title) and any(
        base in codec_value for base in DTS_X_BASE_CODECS
    ):
        return True

    return False
