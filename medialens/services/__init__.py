"""
Couche services (cas d'utilisation).

- normalization/ : Vocabulaire canonique des codecs, unites et formats HDR
- audio_ranker : Choix de la piste audio principale
- quality_scorer : Score qualite par palier de resolution
- thresholds : Seuils qualite lus depuis les parametres
- version_naming / version_grouping : Regroupement des versions et meilleure version
- path_mapping : Conversion des chemins reseau (smb, nfs) en chemins locaux
- local_scanner : Scan complet d'un dossier local

Les services dependent des ports de core/, jamais des adaptateurs concrets.
"""
