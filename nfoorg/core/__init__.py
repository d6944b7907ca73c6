"""
Couche domaine de NfoOrg.

Contient les entites du catalogue, les objets valeur (NFO, categories),
les ports (interfaces abstraites) et la hierarchie d'exceptions.
Aucune dependance vers l'infrastructure.
"""
