"""Word validation used during session setup."""

from .validator import (
    DEFAULT_DICTIONARY_URL,
    DictionaryValidator,
    StaticValidator,
    Verdict,
    WordValidator,
    create_validator,
)

__all__ = [
    "DEFAULT_DICTIONARY_URL",
    "DictionaryValidator",
    "StaticValidator",
    "Verdict",
    "WordValidator",
    "create_validator",
]
