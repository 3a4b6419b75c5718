"""Orbit: tâches, humeur/énergie et assistant IA contextuel."""

__version__ = "0.4.0"
