import logging
from typing import List, Optional

from ..models.schemas import ContextCategory
from .profiles import LanguageProfile, PYTHON_PROFILE

logger = logging.getLogger(__name__)


def split_lines(source_text: str) -> List[str]:
    """Split on newlines the way the editor counts lines"""
    return source_text.split("\n")


def line_at(lines: List[str], index: int) -> str:
    """Trimmed text of a line, empty when the index is out of range"""
    if 0 <= index < len(lines):
        return lines[index].strip()
    return ""


def _match_header(line: str, profile: LanguageProfile) -> Optional[ContextCategory]:
    for category, pattern in profile.context_patterns:
        if pattern.match(line):
            return category
    return None


def classify(
    source_text: str,
    cursor_line: int,
    profile: Optional[LanguageProfile] = None
) -> ContextCategory:
    """
    Classify the syntactic situation at the cursor

    Header shapes (block, loop, conditional) are looked for on the cursor
    line, then on the line just above it, since the cursor normally sits
    on the fresh line created after a header. A blank cursor line with
    only blank lines above it is the start of a program.

    Args:
        source_text: Full document text
        cursor_line: Zero-based cursor line
        profile: Language profile (Python when omitted)

    Returns:
        Exactly one ContextCategory
    """
    profile = profile or PYTHON_PROFILE
    lines = split_lines(source_text)
    current = line_at(lines, cursor_line)

    for header in (current, line_at(lines, cursor_line - 1)):
        if not header:
            continue
        category = _match_header(header, profile)
        if category is not None:
            return category

    if not current and all(not line.strip() for line in lines[:max(cursor_line + 1, 0)]):
        return ContextCategory.BLANK_PROGRAM_START

    return ContextCategory.NONE
