"""Application settings with environment-driven configuration."""

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class AppSettings:
    """Application settings loaded from environment variables.

    This is the ONLY place where environment variables are read.
    All other layers receive settings via dependency injection.
    """

    # ===== Credentials =====
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    # Empty key: the chat model cannot be reached and semantic ranking degrades to lexical

    # ===== LLM Configuration =====
    llm_base_url: str = field(default_factory=lambda: os.getenv("LLM_BASE_URL", ""))
    # Empty = api.openai.com; set for OpenAI-compatible servers (vLLM, LM Studio)
    llm_api_key: str = field(default_factory=lambda: os.getenv("LLM_API_KEY", ""))
    # Falls back to OPENAI_API_KEY when empty
    llm_model: str = field(default_factory=lambda: os.getenv("LLM_MODEL", "gpt-4o-mini"))
    llm_max_tokens: int = field(default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "1024")))

    # ===== Embedding Configuration =====
    embedding_backend: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_BACKEND", "openai").lower()
    )
    # Supported: "openai" | "hf" | "none"
    embedding_model: str = field(
        default_factory=lambda: os.getenv("EMBEDDING_MODEL", "text-embedding-3-small")
    )
    hf_embedding_model: str = field(
        default_factory=lambda: os.getenv(
            "HF_EMBEDDING_MODEL", "sentence-transformers/all-MiniLM-L6-v2"
        )
    )
    embedding_device: str = field(default_factory=lambda: os.getenv("EMBEDDING_DEVICE", "cpu"))
    # Supported: "cpu" | "cuda" | "mps"

    # ===== Retrieval Configuration =====
    search_top_k: int = field(default_factory=lambda: int(os.getenv("SEARCH_TOP_K", "3")))
    snippet_max_chars: int = field(
        default_factory=lambda: int(os.getenv("SNIPPET_MAX_CHARS", "1200"))
    )
    segment_window: int = field(default_factory=lambda: int(os.getenv("SEGMENT_WINDOW", "200")))
    # Characters searched on either side of an estimated page boundary

    # ===== Orchestration =====
    tool_workers: int = field(default_factory=lambda: int(os.getenv("TOOL_WORKERS", "8")))

    # ===== Logging =====
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    log_format: str = field(default_factory=lambda: os.getenv("LOG_FORMAT", "json").lower())
    # Supported: "json" | "plain"

    @property
    def effective_llm_api_key(self) -> str:
        return self.llm_api_key or self.openai_api_key
