from typing import Dict, List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Blockcode Backend Configuration"""

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True
    CORS_ORIGINS: List[str] = ["*"]

    # Editor defaults
    DEFAULT_LANGUAGE: str = "python"
    DEFAULT_FILE_NAME: str = "untitled.py"
    INDENT_UNIT: str = "    "

    # Sessions (in memory)
    MAX_SESSIONS: int = 100
    HISTORY_LIMIT: int = 200

    class Config:
        env_file = ".env"

# Shown next to the file name; languages without a full profile are marked preview
LANGUAGE_DISPLAY_NAMES: Dict[str, str] = {
    "python": "Python",
    "javascript": "JavaScript",
}

EXTENSION_LANGUAGES: Dict[str, str] = {
    ".py": "python",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".go": "go",
    ".rs": "rust",
    ".rb": "ruby",
    ".php": "php",
}


def display_name(language: str) -> str:
    """Human readable language name, e.g. 'Python' or 'Ruby (preview)'"""
    if language in LANGUAGE_DISPLAY_NAMES:
        return LANGUAGE_DISPLAY_NAMES[language]
    return f"{language[:1].upper() + language[1:]} (preview)"


def language_for_file(file_name: str, default: str = "") -> str:
    """Infer the language from a file extension"""
    ext = '.' + file_name.rsplit('.', 1)[-1].lower() if '.' in file_name else ''
    return EXTENSION_LANGUAGES.get(ext, default)


settings = Settings()
