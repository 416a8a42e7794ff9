from .profiles import (
    JAVASCRIPT_PROFILE,
    PROFILES,
    PYTHON_PROFILE,
    LanguageProfile,
    get_profile,
    supported_languages,
)
from .symbols import extract_symbols
from .context import classify
from .assembler import MAX_SUGGESTIONS, SuggestionAssembler, assemble, suggest, suggestion_assembler

__all__ = [
    "LanguageProfile",
    "PYTHON_PROFILE",
    "JAVASCRIPT_PROFILE",
    "PROFILES",
    "get_profile",
    "supported_languages",
    "extract_symbols",
    "classify",
    "MAX_SUGGESTIONS",
    "SuggestionAssembler",
    "suggestion_assembler",
    "assemble",
    "suggest",
]
