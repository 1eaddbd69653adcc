"""
medialens - Qualité technique d'une vidéothèque personnelle.

Ce package normalise les métadonnées techniques des fichiers vidéo,
calcule un score qualité par palier de résolution et regroupe les
versions d'un même film pour en retenir la meilleure.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (normalisation, scoring, regroupement, scan)
- adapters/ : Couche infrastructure (CLI, système de fichiers, guessit, mediainfo)
- infrastructure/ : Persistance SQLModel
"""

__version__ = "0.1.0"
