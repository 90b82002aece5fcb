# flake8: noqa
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))  # noqa: E402

from pantry_chef.db import DEFAULT_DATABASE_URL, get_database_url

ENV_VAR = "PANTRY_CHEF_DATABASE_URL"


def clear_env(monkeypatch):
    # setenv first so monkeypatch restores the variable's absence afterwards
    monkeypatch.setenv(ENV_VAR, "unused")
    monkeypatch.delenv(ENV_VAR)


def test_database_url_read_from_dotenv_file(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    (tmp_path / ".env").write_text(f"{ENV_VAR}=sqlite:///./from_env_file.db\n")
    monkeypatch.chdir(tmp_path)
    assert get_database_url() == "sqlite:///./from_env_file.db"


def test_environment_overrides_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / ".env").write_text(f"{ENV_VAR}=sqlite:///./from_env_file.db\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(ENV_VAR, "sqlite:///./from_environment.db")
    assert get_database_url() == "sqlite:///./from_environment.db"


def test_default_database_url(tmp_path, monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.chdir(tmp_path)
    assert get_database_url() == DEFAULT_DATABASE_URL
