from typing import Iterable, List, Set, Tuple
import logging

from ..models.schemas import ContextCategory, Suggestion, SuggestionKind, SuggestionRequest
from .context import classify
from .profiles import get_profile
from .symbols import extract_symbols

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 8


class SuggestionAssembler:
    """
    Merges context, keyword and symbol suggestions into one ranked list

    Tiers are appended in priority order and a block already present is
    never added again, so the order of the tiers is the ranking. The list
    is cut to `limit` entries at the end.
    """

    def __init__(self, limit: int = MAX_SUGGESTIONS):
        self.limit = min(limit, MAX_SUGGESTIONS)

    def assemble(self, request: SuggestionRequest) -> List[Suggestion]:
        """
        Build the suggestion list for one request

        Args:
            request: Typed prefix, language, document and cursor line

        Returns:
            At most `limit` suggestions with distinct blocks; empty for
            unknown languages or an empty document
        """
        suggestions, _ = self.assemble_with_context(request)
        return suggestions

    def assemble_with_context(
        self,
        request: SuggestionRequest
    ) -> Tuple[List[Suggestion], ContextCategory]:
        """Suggestion list plus the context category it was ranked under"""
        profile = get_profile(request.language)
        if profile is None:
            logger.debug(f"No suggestions for language={request.language!r}")
            return [], ContextCategory.NONE

        context = classify(request.source_text, request.cursor_line, profile)
        if not request.source_text:
            return [], context

        prefix = request.input_prefix
        needle = prefix.lower()
        suggestions: List[Suggestion] = []
        seen: Set[str] = set()

        def extend(candidates: Iterable[Suggestion]) -> None:
            for candidate in candidates:
                if candidate.block not in seen:
                    seen.add(candidate.block)
                    suggestions.append(candidate)

        if context is not ContextCategory.NONE:
            extend(profile.context_table.get(context, ()))

        if not prefix:
            extend(profile.default_suggestions)
        else:
            extend(profile.trigger_table.get(needle[0], ()))

        extend(
            Suggestion(block=symbol, completion="", kind=SuggestionKind.VARIABLE,
                       description="declared variable")
            for symbol in extract_symbols(request.source_text, profile)
            if not needle or needle in symbol.lower()
        )

        logger.debug(
            f"Assembled {len(suggestions)} candidates: context={context.value}, "
            f"prefix={prefix!r}"
        )
        return suggestions[:self.limit], context


# Global assembler instance
suggestion_assembler = SuggestionAssembler()


def assemble(request: SuggestionRequest) -> List[Suggestion]:
    return suggestion_assembler.assemble(request)


def suggest(
    input_prefix: str,
    language: str,
    source_text: str,
    cursor_line: int
) -> List[Suggestion]:
    """Convenience wrapper taking the request fields directly"""
    return assemble(SuggestionRequest(
        input_prefix=input_prefix,
        language=language,
        source_text=source_text,
        cursor_line=cursor_line
    ))
