import pytest
from blockcode.engine.assembler import MAX_SUGGESTIONS, SuggestionAssembler, suggest
from blockcode.models.schemas import ContextCategory, SuggestionKind, SuggestionRequest

SYMBOLS_SOURCE = "alpha = 1\nbeta = 2\ngamma = 3"


def blocks(suggestions):
    return [s.block for s in suggestions]


@pytest.mark.parametrize("prefix", ["", "p", "zz", "ret"])
def test_context_entries_lead_regardless_of_prefix(prefix):
    """Block entry suggestions come first after a def header"""
    result = suggest(prefix, "python", "def f():\n", 1)

    assert blocks(result)[:4] == ["return", "pass", "for", "if"]


def test_empty_prefix_lists_defaults_before_symbols():
    result = suggest("", "python", SYMBOLS_SOURCE, 2)

    assert blocks(result) == ["for", "if", "def", "print", "alpha", "beta", "gamma"]
    assert all(s.kind == SuggestionKind.VARIABLE for s in result[4:])
    assert all(s.completion == "" for s in result[4:])


def test_symbols_are_filtered_by_substring():
    result = blocks(suggest("al", "python", SYMBOLS_SOURCE, 2))

    assert "alpha" in result
    assert "beta" not in result
    assert "gamma" not in result


def test_symbol_filter_ignores_case():
    assert "alpha" in blocks(suggest("AL", "python", SYMBOLS_SOURCE, 2))


def test_trigger_table_matches_first_character_only():
    """`fx` still offers the `f` keywords"""
    result = blocks(suggest("fx", "python", "x = 1", 0))

    assert result == ["for", "from", "False"]


def test_blank_program_start():
    result = blocks(suggest("", "python", "\n\n", 1))

    assert result == ["import", "from", "def", "class", "for", "if", "print"]


def test_response_is_capped():
    source = "\n".join(f"name{i} = {i}" for i in range(20))

    result = suggest("", "python", source, 5)

    assert len(result) == MAX_SUGGESTIONS
    assert blocks(result)[4:] == ["name0", "name1", "name2", "name3"]


def test_blocks_are_unique():
    """A variable named like a builtin is not listed twice"""
    source = "print = 1\npass_count = 2\n"

    result = blocks(suggest("p", "python", source, 2))

    assert len(result) == len(set(result))
    assert result.count("print") == 1
    assert result == ["print", "pass", "pass_count"]


def test_unknown_language_gives_nothing():
    assert suggest("f", "cobol", "MOVE A TO B", 0) == []


def test_empty_document_gives_nothing():
    assert suggest("", "python", "", 0) == []


def test_out_of_range_cursor_line():
    assert blocks(suggest("", "python", "x = 1", 50)) == ["for", "if", "def", "print", "x"]


def test_same_request_same_answer():
    request = SuggestionRequest(
        input_prefix="r",
        language="python",
        source_text="def area(radius):\n    ra",
        cursor_line=1
    )
    assembler = SuggestionAssembler()

    assert assembler.assemble(request) == assembler.assemble(request)


def test_custom_limit_is_bounded():
    request = SuggestionRequest(input_prefix="", language="python", source_text="\n", cursor_line=0)

    assert len(SuggestionAssembler(limit=3).assemble(request)) == 3
    assert SuggestionAssembler(limit=20).limit == MAX_SUGGESTIONS


def test_language_aliases():
    assert blocks(suggest("w", "py", "x = 1", 0)) == ["while", "with"]


def test_javascript_uses_the_same_pipeline():
    result = suggest("", "javascript", "function add(a, b) {\n", 1)
    names = blocks(result)

    assert names[:4] == ["return", "const", "if", "for"]
    assert len(names) == len(set(names))
    assert len(names) <= MAX_SUGGESTIONS
    assert "function" in names
    assert "add" in names


def test_javascript_trigger_table():
    result = blocks(suggest("c", "javascript", "const total = 1\n", 1))

    assert result == ["console.log", "const", "class", "continue"]


def test_javascript_call_does_not_leak_symbols():
    assert suggest("al", "javascript", "const x = functionality(data)\n", 1) == []


def test_assemble_with_context_reports_category():
    request = SuggestionRequest(input_prefix="", language="python", source_text="for i in x:\n", cursor_line=1)

    suggestions, context = SuggestionAssembler().assemble_with_context(request)

    assert context is ContextCategory.LOOP_ENTRY
    assert blocks(suggestions)[:4] == ["if", "print", "break", "continue"]


def test_assemble_with_context_for_unknown_language():
    request = SuggestionRequest(input_prefix="", language="cobol", source_text="def f():\n", cursor_line=1)

    assert SuggestionAssembler().assemble_with_context(request) == ([], ContextCategory.NONE)


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
