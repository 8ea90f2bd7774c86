"""Core types, shrinking, symmetry detection and timing helpers for federated Byzantine agreement systems."""

__version__ = "0.7.4"