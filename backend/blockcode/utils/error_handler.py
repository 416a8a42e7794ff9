from fastapi import Request
from fastapi.responses import JSONResponse
import logging

logger = logging.getLogger(__name__)

class BlockcodeException(Exception):
    """Base exception for Blockcode errors"""
    pass

class SessionNotFoundError(BlockcodeException):
    """No editor session with the requested id"""

    def __init__(self, session_id: str):
        super().__init__(f"Session not found: {session_id}")
        self.session_id = session_id

class InvalidSessionModeError(BlockcodeException):
    """Session mode is neither new nor edit"""

    def __init__(self, mode: str):
        super().__init__(f"Unknown session mode: {mode!r}")
        self.mode = mode

async def global_exception_handler(request: Request, exc: Exception):
    """Global error handler for all exceptions"""

    if isinstance(exc, SessionNotFoundError):
        logger.warning(f"Unknown session: {exc.session_id}")
        return JSONResponse(
            status_code=404,
            content={
                "error": "Session not found",
                "message": str(exc),
            }
        )

    if isinstance(exc, BlockcodeException):
        logger.error(f"Blockcode error: {exc}")
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad request",
                "message": str(exc),
            }
        )

    # Generic error
    logger.exception("Unexpected error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )
