import logging
from typing import Dict, List, Optional

from .profiles import LanguageProfile, PYTHON_PROFILE

logger = logging.getLogger(__name__)


def is_admissible(name: str, profile: LanguageProfile) -> bool:
    """
    Decide whether a captured name counts as a declared symbol

    Names must look like identifiers of the language, be long enough,
    not be reserved words and not be underscore-private.
    """
    if len(name) < max(profile.min_symbol_length, 1):
        return False
    if name in profile.keywords:
        return False
    if name.startswith("_") or name[0].isdigit():
        return False
    return profile.identifier_pattern.fullmatch(name) is not None


def _parameter_names(parameter_text: str) -> List[str]:
    """Split `a, b=2, c: int` into bare parameter names"""
    names = []
    for chunk in parameter_text.split(","):
        # Drop defaults and annotations
        name = chunk.split("=", 1)[0].split(":", 1)[0].strip()
        if name:
            names.append(name)
    return names


def extract_symbols(
    source_text: str,
    profile: Optional[LanguageProfile] = None
) -> List[str]:
    """
    Extract declared identifier names from source text

    The declaration alternation scans the source once; for each match the
    non-empty capture group is the candidate. Function signatures get a
    second pass that pulls out parameter names. Incomplete code simply
    produces fewer symbols.

    Args:
        source_text: Full document text
        profile: Language profile (Python when omitted)

    Returns:
        Symbol names in order of first appearance, without duplicates
    """
    profile = profile or PYTHON_PROFILE
    symbols: Dict[str, None] = {}

    if not source_text:
        return []

    for match in profile.declaration_pattern.finditer(source_text):
        name = next((group for group in match.groups() if group), None)
        if name and is_admissible(name, profile):
            symbols.setdefault(name, None)

    if profile.parameter_pattern is not None:
        for match in profile.parameter_pattern.finditer(source_text):
            for name in _parameter_names(match.group(1)):
                if is_admissible(name, profile):
                    symbols.setdefault(name, None)

    logger.debug(f"Extracted {len(symbols)} symbols ({profile.language.value})")
    return list(symbols)
