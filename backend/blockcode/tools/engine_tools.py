from langchain_core.tools import tool
from typing import List

from ..engine.assembler import suggest
from ..engine.context import classify
from ..engine.profiles import get_profile
from ..engine.symbols import extract_symbols
from ..models.schemas import ContextCategory


class EngineTools:
    """
    Exposes the suggestion engine to LangChain agents
    All tools are pure and never raise for unknown languages
    """

    @staticmethod
    @tool
    def extract_declared_symbols(source_text: str, language: str = "python") -> List[str]:
        """
        List identifiers declared in a source document

        Args:
            source_text: Full file content
            language: python or javascript

        Returns:
            Declared names in order of first appearance
        """
        profile = get_profile(language)
        if profile is None:
            return []
        return extract_symbols(source_text, profile)

    @staticmethod
    @tool
    def classify_cursor_context(
        source_text: str,
        cursor_line: int,
        language: str = "python"
    ) -> str:
        """
        Describe the syntactic situation at the cursor line

        Args:
            source_text: Full file content
            cursor_line: Current cursor line (0-indexed)
            language: python or javascript

        Returns:
            One of block_entry, loop_entry, conditional_entry,
            blank_program_start or none
        """
        profile = get_profile(language)
        if profile is None:
            return ContextCategory.NONE.value
        return classify(source_text, cursor_line, profile).value

    @staticmethod
    @tool
    def suggest_blocks(
        input_prefix: str,
        source_text: str,
        cursor_line: int,
        language: str = "python"
    ) -> List[dict]:
        """
        Rank completion blocks for the token being typed

        Args:
            input_prefix: Partially typed token (may be empty)
            source_text: Full file content
            cursor_line: Current cursor line (0-indexed)
            language: python or javascript

        Returns:
            Up to 8 dicts with block, completion, kind and description
        """
        return [
            s.model_dump(mode="json")
            for s in suggest(input_prefix, language, source_text, cursor_line)
        ]


# Global instance
engine_tools = EngineTools()
