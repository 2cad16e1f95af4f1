"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos.
- Permite invertir dependencias: el orquestador depende de abstracciones y
  los tests sustituyen el LLM o Foursquare sin tocar red.
"""

from core.interfaces.places import PlacesSearcher
from core.interfaces.translator import CommandTranslator

__all__ = ["CommandTranslator", "PlacesSearcher"]
