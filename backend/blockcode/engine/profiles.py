"""
Per-language suggestion data

A profile bundles everything language specific: the reserved words kept
out of symbol extraction, the declaration patterns, the trigger and
context tables and the header patterns used by the context classifier.
Adding a language means adding a profile here and registering it in
PROFILES.
"""
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Pattern, Tuple, Union

from ..models.schemas import ContextCategory, LanguageId, Suggestion, SuggestionKind

KEYWORD = SuggestionKind.KEYWORD
FUNCTION = SuggestionKind.FUNCTION


@dataclass(frozen=True)
class LanguageProfile:
    language: LanguageId
    keywords: FrozenSet[str]
    # One alternation, one capture group per declaration form
    declaration_pattern: Pattern[str]
    identifier_pattern: Pattern[str]
    trigger_table: Mapping[str, Tuple[Suggestion, ...]]
    context_table: Mapping[ContextCategory, Tuple[Suggestion, ...]]
    # Header shapes checked in ContextCategory priority order
    context_patterns: Tuple[Tuple[ContextCategory, Pattern[str]], ...]
    default_suggestions: Tuple[Suggestion, ...]
    # Captures the raw parameter text of a function signature
    parameter_pattern: Optional[Pattern[str]] = None
    min_symbol_length: int = 1
    aliases: Tuple[str, ...] = ()

    @property
    def default_keywords(self) -> Tuple[str, ...]:
        return tuple(s.block for s in self.default_suggestions)


def _catalog(*entries: Tuple[str, str, SuggestionKind, str]) -> Dict[str, Suggestion]:
    return {
        block: Suggestion(block=block, completion=completion, kind=kind, description=description)
        for block, completion, kind, description in entries
    }


def _pick(catalog: Dict[str, Suggestion], blocks: Iterable[str]) -> Tuple[Suggestion, ...]:
    return tuple(catalog[block] for block in blocks)


# Python

PYTHON_KEYWORDS = frozenset({
    "if", "else", "elif", "for", "while", "def", "class", "import", "from",
    "return", "try", "except", "finally", "with", "as", "pass", "break",
    "continue", "and", "or", "not", "in", "is", "True", "False", "None",
    "lambda", "yield", "global", "nonlocal", "del", "assert", "raise",
    "async", "await",
})

PY_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

PYTHON_DECLARATIONS = re.compile(
    rf"^[ \t]*({PY_IDENT})[ \t]*(?://|[-+*/%])?=(?!=)"  # x = 1, x += 1
    rf"|\bfor[ \t]+({PY_IDENT})[ \t]+in\b"
    rf"|\bdef[ \t]+({PY_IDENT})[ \t]*\("
    rf"|\bclass[ \t]+({PY_IDENT})",
    re.MULTILINE,
)

PYTHON_PARAMETERS = re.compile(rf"\bdef[ \t]+{PY_IDENT}[ \t]*\(([^()]*)\)")

_PY = _catalog(
    ("and", " ", KEYWORD, "logical and"),
    ("as", " name", KEYWORD, "alias"),
    ("break", "", KEYWORD, "leave loop"),
    ("class", " Name:\n    ", KEYWORD, "class definition"),
    ("continue", "", KEYWORD, "next iteration"),
    ("def", " name():\n    return ", KEYWORD, "function definition"),
    ("del", " name", KEYWORD, "delete name"),
    ("elif", " condition:\n    ", KEYWORD, "else-if branch"),
    ("else", ":\n    ", KEYWORD, "else branch"),
    ("except", " Exception:\n    ", KEYWORD, "handle exception"),
    ("False", "", KEYWORD, "false value"),
    ("for", " i in range():\n    ", KEYWORD, "loop"),
    ("from", " module import ", KEYWORD, "import from module"),
    ("if", " condition:\n    ", KEYWORD, "conditional"),
    ("import", " module", KEYWORD, "import module"),
    ("in", " range():", KEYWORD, "membership / range"),
    ("len", "()", FUNCTION, "length"),
    ("list", "()", FUNCTION, "new list"),
    ("None", "", KEYWORD, "no value"),
    ("not", " ", KEYWORD, "logical not"),
    ("pass", "", KEYWORD, "empty statement"),
    ("print", '("")', FUNCTION, "print output"),
    ("range", "(10)", FUNCTION, "number range"),
    ("return", " value", KEYWORD, "return value"),
    ("True", "", KEYWORD, "true value"),
    ("try", ":\n    \nexcept Exception:\n    ", KEYWORD, "handle exceptions"),
    ("while", " condition:\n    ", KEYWORD, "conditional loop"),
    ("with", " open() as file:\n    ", KEYWORD, "context manager"),
)

PYTHON_PROFILE = LanguageProfile(
    language=LanguageId.PYTHON,
    keywords=PYTHON_KEYWORDS,
    declaration_pattern=PYTHON_DECLARATIONS,
    parameter_pattern=PYTHON_PARAMETERS,
    identifier_pattern=re.compile(PY_IDENT),
    trigger_table={
        "a": _pick(_PY, ["and", "as"]),
        "b": _pick(_PY, ["break"]),
        "c": _pick(_PY, ["class", "continue"]),
        "d": _pick(_PY, ["def", "del"]),
        "e": _pick(_PY, ["else", "elif", "except"]),
        "f": _pick(_PY, ["for", "from", "False"]),
        "i": _pick(_PY, ["if", "import", "in"]),
        "l": _pick(_PY, ["len", "list"]),
        "n": _pick(_PY, ["None", "not"]),
        "p": _pick(_PY, ["print", "pass"]),
        "r": _pick(_PY, ["return", "range"]),
        "t": _pick(_PY, ["try", "True"]),
        "w": _pick(_PY, ["while", "with"]),
    },
    context_table={
        ContextCategory.BLOCK_ENTRY: _pick(_PY, ["return", "pass", "for", "if"]),
        ContextCategory.LOOP_ENTRY: _pick(_PY, ["if", "print", "break", "continue"]),
        ContextCategory.CONDITIONAL_ENTRY: _pick(_PY, ["return", "print", "pass"]),
        ContextCategory.BLANK_PROGRAM_START: _pick(_PY, ["import", "from", "def", "class"]),
    },
    context_patterns=(
        (ContextCategory.BLOCK_ENTRY, re.compile(r"^(?:async )?def .+:$|^class .+:$")),
        (ContextCategory.LOOP_ENTRY, re.compile(r"^(?:for|while) .+:$")),
        (ContextCategory.CONDITIONAL_ENTRY, re.compile(r"^(?:if|elif) .+:$")),
    ),
    default_suggestions=_pick(_PY, ["for", "if", "def", "print"]),
    aliases=("py", "python3"),
)


# JavaScript

JAVASCRIPT_KEYWORDS = frozenset({
    "var", "let", "const", "function", "class", "if", "else", "for", "while",
    "do", "return", "new", "this", "typeof", "instanceof", "true", "false",
    "null", "undefined", "break", "continue", "switch", "case", "default",
    "try", "catch", "finally", "throw", "import", "export", "from", "async",
    "await", "of", "in",
})

JS_IDENT = r"[A-Za-z_$][A-Za-z0-9_$]*"

JAVASCRIPT_DECLARATIONS = re.compile(
    rf"\b(?:var|let|const)[ \t]+({JS_IDENT})"
    rf"|^[ \t]*({JS_IDENT})[ \t]*[-+*/%]?=(?![=>])"
    rf"|\bfunction[ \t]+({JS_IDENT})[ \t]*\("
    rf"|\bclass[ \t]+({JS_IDENT})",
    re.MULTILINE,
)

JAVASCRIPT_PARAMETERS = re.compile(rf"\bfunction[ \t]+{JS_IDENT}[ \t]*\(([^()]*)\)")

_JS = _catalog(
    ("break", ";", KEYWORD, "leave loop"),
    ("class", " Name {\n    \n}", KEYWORD, "class declaration"),
    ("console.log", '("")', FUNCTION, "console output"),
    ("const", " variable = ", KEYWORD, "constant"),
    ("continue", ";", KEYWORD, "next iteration"),
    ("else", " {\n    \n}", KEYWORD, "else branch"),
    ("false", "", KEYWORD, "false value"),
    ("for", " (let i = 0; i < length; i++) {\n    \n}", KEYWORD, "loop"),
    ("function", " name() {\n    \n}", KEYWORD, "function declaration"),
    ("if", " (condition) {\n    \n}", KEYWORD, "conditional"),
    ("import", " module from ''", KEYWORD, "import module"),
    ("let", " variable = ", KEYWORD, "variable"),
    ("null", "", KEYWORD, "no value"),
    ("return", " value;", KEYWORD, "return value"),
    ("true", "", KEYWORD, "true value"),
    ("while", " (condition) {\n    \n}", KEYWORD, "conditional loop"),
)

JAVASCRIPT_PROFILE = LanguageProfile(
    language=LanguageId.JAVASCRIPT,
    keywords=JAVASCRIPT_KEYWORDS,
    declaration_pattern=JAVASCRIPT_DECLARATIONS,
    parameter_pattern=JAVASCRIPT_PARAMETERS,
    identifier_pattern=re.compile(JS_IDENT),
    trigger_table={
        "b": _pick(_JS, ["break"]),
        "c": _pick(_JS, ["console.log", "const", "class", "continue"]),
        "e": _pick(_JS, ["else"]),
        "f": _pick(_JS, ["function", "for", "false"]),
        "i": _pick(_JS, ["if", "import"]),
        "l": _pick(_JS, ["let"]),
        "n": _pick(_JS, ["null"]),
        "r": _pick(_JS, ["return"]),
        "t": _pick(_JS, ["true"]),
        "w": _pick(_JS, ["while"]),
    },
    context_table={
        ContextCategory.BLOCK_ENTRY: _pick(_JS, ["return", "const", "if", "for"]),
        ContextCategory.LOOP_ENTRY: _pick(_JS, ["if", "console.log", "break", "continue"]),
        ContextCategory.CONDITIONAL_ENTRY: _pick(_JS, ["return", "console.log"]),
        ContextCategory.BLANK_PROGRAM_START: _pick(_JS, ["import", "const", "function", "class"]),
    },
    context_patterns=(
        (ContextCategory.BLOCK_ENTRY, re.compile(r"^(?:async\s+)?function\b.*\{$|^class\s.+\{$")),
        (ContextCategory.LOOP_ENTRY, re.compile(r"^(?:for|while)\s*\(.+\)\s*\{$")),
        (ContextCategory.CONDITIONAL_ENTRY, re.compile(r"^(?:\}\s*)?(?:else\s+)?if\s*\(.+\)\s*\{$")),
    ),
    default_suggestions=_pick(_JS, ["const", "function", "if", "for"]),
    aliases=("js", "jsx"),
)


PROFILES: Dict[LanguageId, LanguageProfile] = {
    LanguageId.PYTHON: PYTHON_PROFILE,
    LanguageId.JAVASCRIPT: JAVASCRIPT_PROFILE,
}

_LOOKUP: Dict[str, LanguageProfile] = {}
for _profile in PROFILES.values():
    _LOOKUP[_profile.language.value] = _profile
    for _alias in _profile.aliases:
        _LOOKUP[_alias] = _profile


def get_profile(language: Union[str, LanguageId, None]) -> Optional[LanguageProfile]:
    """
    Resolve a language identifier to its profile

    Args:
        language: Language id or alias, case-insensitive

    Returns:
        The profile, or None when the language has no profile
    """
    if isinstance(language, LanguageId):
        return PROFILES[language]
    if not language:
        return None
    return _LOOKUP.get(language.strip().lower())


def supported_languages() -> list[str]:
    return [language.value for language in PROFILES]
