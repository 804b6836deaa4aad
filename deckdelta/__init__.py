"""Deck list parsing and diffing."""
