"""
Application-wide configuration management.

This module loads configuration from environment variables and provides
a singleton Config object that can be accessed throughout the application.
Uses Singleton pattern to ensure consistent configuration access.

The offline flag (OFFLINE_MODE / MOCK_MODE) is only read here and at
composition time (see course_assistant.agents.context); components never
branch on it per call.
"""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

from course_assistant.config.constants import DEFAULT_COURSE_ID

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """
    Singleton configuration class for application settings.

    This class follows the Singleton pattern to ensure only one instance
    of configuration exists throughout the application lifecycle.
    """

    _instance: Optional['Config'] = None
    _initialized: bool = False

    def __new__(cls):
        """Singleton pattern: return the same instance if already created."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize configuration (only once due to Singleton pattern)."""
        if self._initialized:
            return

        # ====================================================================
        # API KEYS
        # ====================================================================
        self.OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")

        # ====================================================================
        # PATHS
        # ====================================================================
        # Project root is the parent of the course_assistant/ package
        project_root = Path(__file__).parent.parent.parent

        self.PROJECT_ROOT = project_root
        self.DATA_DIR = project_root / "data"
        self.INDICES_DIR = self.DATA_DIR / "indices"
        self.RESULTS_DIR = project_root / "results"
        self.LOGS_DIR = self.RESULTS_DIR / "logs"

        # Ensure directories exist
        self._ensure_directories()

        # ====================================================================
        # MODE
        # ====================================================================
        # Offline mode swaps every provider for its deterministic strategy.
        # MOCK_MODE is accepted as an alias.
        self.OFFLINE_MODE = _env_flag("OFFLINE_MODE") or _env_flag("MOCK_MODE")

        # ====================================================================
        # EMBEDDING & LLM SETTINGS
        # ====================================================================
        self.EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
        self.EMBEDDING_DIMENSIONS = int(os.getenv("EMBEDDING_DIMENSIONS", "256"))  # deterministic vectors only
        self.LLM_MODEL = os.getenv("LLM_MODEL", "gpt-4o-mini")
        self.LLM_TEMPERATURE = float(os.getenv("LLM_TEMPERATURE", "0.2"))
        self.LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "1024"))
        self.LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "30"))

        # ====================================================================
        # RETRIEVAL SETTINGS
        # ====================================================================
        self.TOP_K_RESULTS = int(os.getenv("TOP_K_RESULTS", "5"))  # Number of passages per agent call
        self.SCORE_THRESHOLD = float(os.getenv("SCORE_THRESHOLD", "0.7"))
        self.OFFLINE_SCORE_THRESHOLD = float(os.getenv("OFFLINE_SCORE_THRESHOLD", "0.5"))

        # ====================================================================
        # INGESTION SETTINGS
        # ====================================================================
        self.CHUNK_SIZE_TOKENS = int(os.getenv("CHUNK_SIZE_TOKENS", "250"))
        self.CHUNK_OVERLAP_TOKENS = int(os.getenv("CHUNK_OVERLAP_TOKENS", "50"))
        # Ingested at startup when set (and the course has no content yet)
        self.COURSE_PDF_PATH = os.getenv("COURSE_PDF_PATH", "")
        self.COURSE_ID = os.getenv("COURSE_ID", DEFAULT_COURSE_ID)

        # ====================================================================
        # STORAGE SETTINGS
        # ====================================================================
        self.CONTENT_STORE_BACKEND = os.getenv("CONTENT_STORE_BACKEND", "chroma").lower()
        self.ESCALATION_STORE_BACKEND = os.getenv("ESCALATION_STORE_BACKEND", "memory").lower()
        self.SUPABASE_URL = os.getenv("SUPABASE_URL", "")
        self.SUPABASE_KEY = os.getenv("SUPABASE_KEY", "")  # service-role key, escalations bypass RLS
        self.CHROMA_PERSIST_DIR = os.getenv("CHROMA_PERSIST_DIR", str(self.INDICES_DIR))
        self.CHROMA_COLLECTION_NAME = os.getenv("CHROMA_COLLECTION_NAME", "course_content")

        # ====================================================================
        # LOGGING SETTINGS
        # ====================================================================
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
        self.LOG_FILE = self.LOGS_DIR / "app.log"

        # Mark as initialized
        self._initialized = True

    def _ensure_directories(self):
        """Create necessary directories if they don't exist."""
        directories = [
            self.DATA_DIR,
            self.INDICES_DIR,
            self.RESULTS_DIR,
            self.LOGS_DIR,
        ]

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    @property
    def use_live_providers(self) -> bool:
        """True when the OpenAI-backed providers should be constructed."""
        return not self.OFFLINE_MODE and bool(self.OPENAI_API_KEY)

    def validate(self) -> bool:
        """
        Validate that credentials for the live providers are present.

        A False result is not fatal: the composition root falls back to the
        deterministic providers and keyword classification.

        Returns:
            bool: True if the live configuration is usable, False otherwise
        """
        if not self.OPENAI_API_KEY:
            return False
        return True


# Global singleton instance
config = Config()
