from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import time
from .config import settings, display_name
from .models.schemas import (
    ApplySuggestionRequest,
    ContextCategory,
    CodeUpdateRequest,
    ContextRequest,
    ContextResponse,
    HealthResponse,
    HistoryResponse,
    IndentRequest,
    LanguageInfo,
    NewlineRequest,
    SessionCreateRequest,
    SessionSuggestRequest,
    SessionView,
    SuggestionRequest,
    SuggestionResponse,
    SymbolsRequest,
    SymbolsResponse,
)
from .engine import PROFILES, get_profile, supported_languages, extract_symbols, classify
from .engine.assembler import suggestion_assembler
from .editor.session import EditorSession, session_store
from .utils.error_handler import BlockcodeException, global_exception_handler
from .utils.text import (
    apply_block,
    clamp_cursor_line,
    current_token,
    cursor_line_from_offset,
    newline_with_indent,
    shift_lines,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.DEBUG else logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize FastAPI
app = FastAPI(
    title="Blockcode - Block Suggestion Backend",
    description="Context-aware keyword and symbol suggestions for a block-mode code editor",
    version="0.1.0",
    debug=settings.DEBUG
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Error handlers
app.add_exception_handler(BlockcodeException, global_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)


def _session_view(session: EditorSession, cursor_offset: Optional[int] = None) -> SessionView:
    return SessionView(
        session_id=session.session_id,
        file_name=session.file_name,
        language=session.language,
        display_name=display_name(session.language),
        code=session.code,
        history_index=session.history_index,
        history_size=len(session.history),
        can_undo=session.can_undo,
        can_redo=session.can_redo,
        saved_at=session.saved_at,
        cursor_offset=cursor_offset
    )


def _suggest(request: SuggestionRequest) -> SuggestionResponse:
    start_time = time.time()
    request = request.model_copy(update={
        "cursor_line": clamp_cursor_line(request.source_text, request.cursor_line)
    })

    suggestions, context = suggestion_assembler.assemble_with_context(request)
    latency_ms = int((time.time() - start_time) * 1000)

    return SuggestionResponse(
        suggestions=suggestions,
        context=context,
        input_prefix=request.input_prefix,
        latency_ms=latency_ms
    )


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Blockcode Backend API",
        "version": "0.1.0",
        "docs": "/docs",
        "languages": supported_languages()
    }

@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    return HealthResponse(
        status="ok",
        languages=supported_languages(),
        active_sessions=len(session_store)
    )

@app.get("/api/v1/languages", response_model=list[LanguageInfo])
async def list_languages():
    """Languages with a suggestion profile"""
    return [
        LanguageInfo(
            id=language.value,
            display_name=display_name(language.value),
            default_keywords=list(profile.default_keywords)
        )
        for language, profile in PROFILES.items()
    ]

@app.post("/api/v1/suggest", response_model=SuggestionResponse)
async def suggest_blocks(request: SuggestionRequest):
    """
    Main suggestion endpoint
    Returns at most 8 ranked, deduplicated blocks
    """
    logger.info(
        f"Suggest request: {request.language} at line {request.cursor_line}, "
        f"prefix={request.input_prefix!r}"
    )
    return _suggest(request)

@app.post("/api/v1/symbols", response_model=SymbolsResponse)
async def declared_symbols(request: SymbolsRequest):
    """Identifiers declared in the document"""
    profile = get_profile(request.language)
    symbols = extract_symbols(request.source_text, profile) if profile else []
    return SymbolsResponse(language=request.language, symbols=symbols)

@app.post("/api/v1/context", response_model=ContextResponse)
async def cursor_context(request: ContextRequest):
    """Context category at the cursor line"""
    cursor_line = clamp_cursor_line(request.source_text, request.cursor_line)
    profile = get_profile(request.language)
    if profile is None:
        return ContextResponse(context=ContextCategory.NONE, cursor_line=cursor_line)
    return ContextResponse(
        context=classify(request.source_text, cursor_line, profile),
        cursor_line=cursor_line
    )

@app.post("/api/v1/sessions", response_model=SessionView, status_code=201)
async def create_session(request: SessionCreateRequest):
    """Open a new editor session"""
    session = session_store.create(
        file_name=request.file_name,
        language=request.language,
        mode=request.mode
    )
    return _session_view(session)

@app.get("/api/v1/sessions/{session_id}", response_model=SessionView)
async def get_session(session_id: str):
    return _session_view(session_store.get(session_id))

@app.delete("/api/v1/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    session_store.delete(session_id)

@app.put("/api/v1/sessions/{session_id}/code", response_model=SessionView)
async def update_code(session_id: str, request: CodeUpdateRequest):
    """Record the document as typed by the user"""
    session = session_store.get(session_id)
    session.commit(request.code)
    return _session_view(session)

@app.post("/api/v1/sessions/{session_id}/undo", response_model=HistoryResponse)
async def undo(session_id: str):
    session = session_store.get(session_id)
    moved = session.undo()
    return HistoryResponse(session=_session_view(session), moved=moved)

@app.post("/api/v1/sessions/{session_id}/redo", response_model=HistoryResponse)
async def redo(session_id: str):
    session = session_store.get(session_id)
    moved = session.redo()
    return HistoryResponse(session=_session_view(session), moved=moved)

@app.post("/api/v1/sessions/{session_id}/save", response_model=SessionView)
async def save_session(session_id: str):
    """Mock save"""
    return _session_view(session_store.save(session_id))

@app.post("/api/v1/sessions/{session_id}/suggest", response_model=SuggestionResponse)
async def suggest_for_session(session_id: str, request: SessionSuggestRequest):
    """
    Suggestions at a cursor offset in the session document

    The cursor line and the typed token are derived server side.
    """
    session = session_store.get(session_id)
    code = session.code
    offset = min(request.cursor_offset, len(code))
    cursor_line = cursor_line_from_offset(code, offset)
    line_before_cursor = code[:offset].split('\n')[-1]

    return _suggest(SuggestionRequest(
        input_prefix=current_token(line_before_cursor),
        language=session.language,
        source_text=code,
        cursor_line=cursor_line
    ))

@app.post("/api/v1/sessions/{session_id}/apply", response_model=SessionView)
async def apply_suggestion(session_id: str, request: ApplySuggestionRequest):
    """Insert a chosen block in place of the token at the cursor"""
    session = session_store.get(session_id)
    line_index = cursor_line_from_offset(session.code, request.cursor_offset)
    code, cursor_offset = apply_block(
        session.code,
        request.cursor_offset,
        request.block,
        request.completion,
        settings.INDENT_UNIT
    )
    session.commit(code)
    logger.info(f"Applied block {request.block!r} at line {line_index}")
    return _session_view(session, cursor_offset)

@app.post("/api/v1/sessions/{session_id}/newline", response_model=SessionView)
async def insert_newline(session_id: str, request: NewlineRequest):
    """Enter key with auto-indent"""
    session = session_store.get(session_id)
    code, cursor_offset = newline_with_indent(
        session.code, request.cursor_offset, settings.INDENT_UNIT
    )
    session.commit(code)
    return _session_view(session, cursor_offset)

@app.post("/api/v1/sessions/{session_id}/indent", response_model=SessionView)
async def indent_lines(session_id: str, request: IndentRequest):
    """Indent or dedent the selected lines"""
    session = session_store.get(session_id)
    code = shift_lines(
        session.code,
        request.selection_start,
        request.selection_end,
        request.increase,
        settings.INDENT_UNIT
    )
    session.commit(code)
    return _session_view(session)

@app.on_event("startup")
async def startup_event():
    """Run on startup"""
    logger.info("Blockcode backend starting...")
    logger.info(f"Languages with profiles: {supported_languages()}")

@app.on_event("shutdown")
async def shutdown_event():
    """Run on shutdown"""
    logger.info("Blockcode backend shutting down...")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "blockcode.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
