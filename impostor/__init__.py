"""Lobby coordination for the impostor word game."""

__version__ = "0.1.0"
