"""AppSettings reads the environment once, at construction."""

from pagecite.config.settings import AppSettings


def test_defaults(monkeypatch):
    for var in ("LLM_MODEL", "EMBEDDING_BACKEND", "SEARCH_TOP_K", "TOOL_WORKERS", "LOG_FORMAT"):
        monkeypatch.delenv(var, raising=False)
    settings = AppSettings()

    assert settings.llm_model == "gpt-4o-mini"
    assert settings.embedding_backend == "openai"
    assert settings.embedding_model == "text-embedding-3-small"
    assert settings.search_top_k == 3
    assert settings.snippet_max_chars == 1200
    assert settings.segment_window == 200
    assert settings.tool_workers == 8
    assert settings.log_format == "json"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("EMBEDDING_BACKEND", "HF")
    monkeypatch.setenv("SEGMENT_WINDOW", "50")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = AppSettings()

    assert settings.embedding_backend == "hf"
    assert settings.segment_window == 50
    assert settings.log_level == "DEBUG"


def test_llm_key_falls_back_to_openai_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-openai")
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    assert AppSettings().effective_llm_api_key == "sk-openai"

    monkeypatch.setenv("LLM_API_KEY", "sk-local")
    assert AppSettings().effective_llm_api_key == "sk-local"


def test_explicit_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("EMBEDDING_BACKEND", "openai")
    assert AppSettings(embedding_backend="none").embedding_backend == "none"
