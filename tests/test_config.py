"""Tests for festival.config environment loading."""

from festival.config import DEFAULT_BASE_URL, DEFAULT_MODEL, load_settings

ENV = ["OPENAI_API_KEY", "OPENAI_BASE_URL", "AI_MODEL", "PORT", "NODE_ENV", "FESTIVAL_API_URL"]


class TestLoadSettings:
    def test_defaults(self, monkeypatch):
        for name in ENV:
            monkeypatch.delenv(name, raising=False)
        s = load_settings()
        assert s.openai_api_key is None
        assert s.openai_base_url == DEFAULT_BASE_URL == "https://api.deepseek.com"
        assert s.ai_model == DEFAULT_MODEL == "deepseek-chat"
        assert s.port == 3000
        assert s.api_url == "http://localhost:3000"
        assert not s.serve_static

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-live")
        monkeypatch.setenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
        monkeypatch.setenv("AI_MODEL", "gpt-4o-mini")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("NODE_ENV", "production")
        monkeypatch.delenv("FESTIVAL_API_URL", raising=False)
        s = load_settings()
        assert s.openai_api_key == "sk-live"
        assert s.ai_model == "gpt-4o-mini"
        assert s.port == 8080
        assert s.api_url == "http://localhost:8080"
        assert s.serve_static

    def test_empty_key_counts_as_missing(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "")
        assert load_settings().openai_api_key is None
