"""Turn the hanzi in Anki flashcards into tone-coloured Pleco links."""

from .apkg import DeckSpec, convert_deck
from .dictionary import Dictionary, PronunciationEntry, PypinyinDictionary, load_dictionary
from .errors import DeckError
from .transform import plecoise, plecoise_fields

__all__ = [
    "DeckError",
    "DeckSpec",
    "Dictionary",
    "PronunciationEntry",
    "PypinyinDictionary",
    "convert_deck",
    "load_dictionary",
    "plecoise",
    "plecoise_fields",
]
