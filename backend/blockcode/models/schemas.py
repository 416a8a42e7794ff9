from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class LanguageId(str, Enum):
    """Languages that ship a suggestion profile"""
    PYTHON = "python"
    JAVASCRIPT = "javascript"


class SuggestionKind(str, Enum):
    KEYWORD = "keyword"
    FUNCTION = "function"
    VARIABLE = "variable"
    METHOD = "method"


class ContextCategory(str, Enum):
    """Syntactic situation at the cursor, in priority order"""
    BLOCK_ENTRY = "block_entry"
    LOOP_ENTRY = "loop_entry"
    CONDITIONAL_ENTRY = "conditional_entry"
    BLANK_PROGRAM_START = "blank_program_start"
    NONE = "none"


class Suggestion(BaseModel):
    """A completion candidate: `block` is shown and matched, `completion` follows it on insert"""
    model_config = ConfigDict(frozen=True)

    block: str
    completion: str = ""
    kind: SuggestionKind
    description: str = ""


class SuggestionRequest(BaseModel):
    """Request model for block suggestions"""
    input_prefix: str = ""  # Token being typed
    language: str  # python, javascript, ...
    source_text: str  # Full document
    cursor_line: int = 0  # Zero-based line index


class SuggestionResponse(BaseModel):
    """Response model for block suggestions"""
    suggestions: List[Suggestion]
    context: ContextCategory
    input_prefix: str
    latency_ms: int


class SymbolsRequest(BaseModel):
    source_text: str
    language: str


class SymbolsResponse(BaseModel):
    language: str
    symbols: List[str]


class ContextRequest(BaseModel):
    source_text: str
    cursor_line: int = 0
    language: str = LanguageId.PYTHON.value


class ContextResponse(BaseModel):
    context: ContextCategory
    cursor_line: int


class LanguageInfo(BaseModel):
    id: str
    display_name: str
    default_keywords: List[str]


class SessionCreateRequest(BaseModel):
    """Open a document in the editor"""
    file_name: Optional[str] = None
    language: Optional[str] = None  # Inferred from the file extension when omitted
    mode: str = "new"  # "new" starts blank, "edit" loads the stored document


class SessionView(BaseModel):
    """Editor session as seen by the UI"""
    session_id: str
    file_name: str
    language: str
    display_name: str
    code: str
    history_index: int
    history_size: int
    can_undo: bool
    can_redo: bool
    saved_at: Optional[float] = None
    cursor_offset: Optional[int] = None


class CodeUpdateRequest(BaseModel):
    code: str


class SessionSuggestRequest(BaseModel):
    cursor_offset: int = Field(ge=0)


class ApplySuggestionRequest(BaseModel):
    cursor_offset: int = Field(ge=0)
    block: str
    completion: str = ""


class NewlineRequest(BaseModel):
    cursor_offset: int = Field(ge=0)


class IndentRequest(BaseModel):
    selection_start: int = Field(ge=0)
    selection_end: int = Field(ge=0)
    increase: bool = True


class HistoryResponse(BaseModel):
    session: SessionView
    moved: bool


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    languages: List[str]
    active_sessions: int
