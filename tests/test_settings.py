from pathlib import Path

from alarkhabil_frontend.settings import Settings, choose_env_file


def test_defaults():
    s = Settings()
    assert s.LISTEN_PORT == 7780
    assert s.CONFIG_FILE == "config.json"
    assert s.BACKEND_TIMEOUT_SECONDS > 0


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONFIG_FILE", "/etc/site.json")
    monkeypatch.setenv("BACKEND_TIMEOUT_SECONDS", "2.5")
    s = Settings()
    assert s.CONFIG_FILE == "/etc/site.json"
    assert s.BACKEND_TIMEOUT_SECONDS == 2.5


def test_branding_dir_prefers_custom(tmp_path):
    custom = tmp_path / "branding"
    custom.mkdir()
    s = Settings(BRANDING_DIR=str(custom), BRANDING_DEFAULT_DIR="fallback")
    assert s.branding_dir == str(custom)


def test_branding_dir_falls_back(tmp_path):
    s = Settings(
        BRANDING_DIR=str(tmp_path / "missing"), BRANDING_DEFAULT_DIR="fallback"
    )
    assert s.branding_dir == "fallback"


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
