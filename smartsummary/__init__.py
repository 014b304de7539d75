"""Wikidata + Wikipedia smart summary pipeline."""

__version__ = "1.0.0"
