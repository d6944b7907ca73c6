"""Permet l'execution via `python -m nfoorg`."""

from nfoorg.main import main

main()
