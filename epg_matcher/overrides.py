"""
Curated display name -> EPG id table for major French channels.

Both the plain name and common "HD"/spelling variants are listed so that
lookups stay exact.
"""

DEFAULT_OVERRIDES: dict[str, str] = {
    "TF1": "TF1.fr",
    "TF1 HD": "TF1.fr",
    "France 2": "France2.fr",
    "France 2 HD": "France2.fr",
    "France 3": "France3.fr",
    "France 3 HD": "France3.fr",
    "France 4": "France4.fr",
    "France 4 HD": "France4.fr",
    "France 5": "France5.fr",
    "France 5 HD": "France5.fr",
    "M6": "M6.fr",
    "Arte": "Arte.fr",
    "BFM TV": "BFMTV.fr",
    "BFMTV": "BFMTV.fr",
    "CNews": "CNews.fr",
    "CNEWS": "CNews.fr",
    "LCI": "LCI.fr",
    "RMC Story": "RMCStory.fr",
    "RMC Découverte": "RMCDecouverte.fr",
    "W9": "W9.fr",
    "TMC": "TMC.fr",
    "NT1": "NT1.fr",
    "NRJ 12": "NRJ12.fr",
    "Canal+": "CanalPlus.fr",
    "Canal+ France": "CanalPlus.fr",
    "Euronews": "EuronewsFrench.fr",
    "France 24": "France24.fr",
    "France 24 French": "France24.fr",
    "TV5Monde": "TV5MondeFranceBelgiqueSuisseMonaco.fr",
    "Gulli": "Gulli.fr",
    "L'Equipe": "LEquipe.fr",
    "Cherie 25": "Cherie25.fr",
    "Chérie 25": "Cherie25.fr",
    "6ter": "6ter.fr",
}
