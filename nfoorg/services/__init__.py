"""
Couche services (cas d'utilisation).

- locale_classifier : categorie de destination d'un titre
- placement : deplacement / fusion des repertoires media
- completeness : saisons manquantes et drapeau de completude
- genre_normalizer / actor_checker : preparation des NFO
- discovery : recherche des NFO a traiter
- workflow : orchestration titre par titre

Les services dependent des ports (interfaces) de core/, les adaptateurs
concrets sont fournis par le container.
"""
