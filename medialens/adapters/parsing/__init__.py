"""
Adaptateurs de parsing pour medialens.

Ce package contient les implementations concretes des interfaces de parsing:
- GuessitFilenameParser: Parse les noms de fichiers avec guessit
- MediaInfoExtractor: Extrait les metadonnees techniques brutes avec pymediainfo
"""
