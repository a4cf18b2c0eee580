"""Expose dashboard card render functions."""

from .card_map import card_map
from .card_weather import card_weather

__all__ = [
    "card_map",
    "card_weather",
]
