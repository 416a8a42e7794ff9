from collections import OrderedDict
from typing import List, Optional
import logging
import time
import uuid

from ..config import settings, language_for_file
from ..utils.error_handler import InvalidSessionModeError, SessionNotFoundError

logger = logging.getLogger(__name__)

SESSION_MODES = ("new", "edit")

SAMPLE_DOCUMENT = """# {file_name}
def fibonacci(n):
    if n <= 1:
        return n
    return fibonacci(n-1) + fibonacci(n-2)

# test
for i in range(10):
    print(f"F({{i}}) = {{fibonacci(i)}}")"""


class EditorSession:
    """
    One open document with its edit history

    History is a list of document snapshots plus the index of the current
    one. Committing after an undo drops the snapshots ahead of the index.
    """

    def __init__(
        self,
        file_name: str,
        language: str,
        code: str = "",
        history_limit: int = 200
    ):
        self.session_id = uuid.uuid4().hex
        self.file_name = file_name
        self.language = language
        self.history_limit = max(history_limit, 1)
        self.history: List[str] = [code]
        self.history_index = 0
        self.saved_at: Optional[float] = None

    @property
    def code(self) -> str:
        return self.history[self.history_index]

    @property
    def can_undo(self) -> bool:
        return self.history_index > 0

    @property
    def can_redo(self) -> bool:
        return self.history_index < len(self.history) - 1

    def commit(self, code: str) -> bool:
        """
        Record a new snapshot

        Returns:
            False when the code equals the current snapshot
        """
        if code == self.code:
            return False

        self.history = self.history[:self.history_index + 1]
        self.history.append(code)

        # Trim oldest snapshots
        if len(self.history) > self.history_limit:
            self.history = self.history[-self.history_limit:]

        self.history_index = len(self.history) - 1
        return True

    def undo(self) -> bool:
        if not self.can_undo:
            return False
        self.history_index -= 1
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.history_index += 1
        return True


class SessionStore:
    """In-memory registry of editor sessions, oldest evicted first"""

    def __init__(self, max_sessions: int = 100, history_limit: int = 200):
        self.max_sessions = max_sessions
        self.history_limit = history_limit
        self.sessions: "OrderedDict[str, EditorSession]" = OrderedDict()

    def create(
        self,
        file_name: Optional[str] = None,
        language: Optional[str] = None,
        mode: str = "new"
    ) -> EditorSession:
        """
        Open a document

        Args:
            file_name: Document name (settings default when omitted)
            language: Language id; inferred from the extension when omitted
            mode: "new" starts blank, "edit" loads the stored document

        Returns:
            The new session
        """
        if mode not in SESSION_MODES:
            raise InvalidSessionModeError(mode)

        file_name = file_name or settings.DEFAULT_FILE_NAME
        language = (language or language_for_file(file_name, settings.DEFAULT_LANGUAGE)).lower()
        code = SAMPLE_DOCUMENT.format(file_name=file_name) if mode == "edit" else ""

        session = EditorSession(file_name, language, code, self.history_limit)
        self.sessions[session.session_id] = session

        while len(self.sessions) > self.max_sessions:
            evicted, _ = self.sessions.popitem(last=False)
            logger.info(f"Evicted session {evicted}")

        logger.info(f"Opened session {session.session_id}: {file_name} ({language}, {mode})")
        return session

    def get(self, session_id: str) -> EditorSession:
        session = self.sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str):
        if self.sessions.pop(session_id, None) is None:
            raise SessionNotFoundError(session_id)
        logger.info(f"Closed session {session_id}")

    def save(self, session_id: str) -> EditorSession:
        """Mock save: nothing is written, the session is only stamped"""
        session = self.get(session_id)
        session.saved_at = time.time()
        logger.info(f"Saved {session.file_name} ({len(session.code)} chars)")
        return session

    def __len__(self) -> int:
        return len(self.sessions)


# Global instance
session_store = SessionStore(
    max_sessions=settings.MAX_SESSIONS,
    history_limit=settings.HISTORY_LIMIT
)
