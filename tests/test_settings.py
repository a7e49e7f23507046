from pathlib import Path

import pytest

from sms_expense_parser.core import settings


def test_get_env_int(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("IMPORT_LIMIT", "25")
    assert settings.get_env_int("IMPORT_LIMIT", 50) == 25

    monkeypatch.setenv("IMPORT_LIMIT", "lots")
    assert settings.get_env_int("IMPORT_LIMIT", 50) == 50

    monkeypatch.setenv("IMPORT_LIMIT", "0")
    assert settings.get_env_int("IMPORT_LIMIT", 50, min_value=1) == 50

    monkeypatch.delenv("IMPORT_LIMIT")
    assert settings.get_env_int("IMPORT_LIMIT", 50) == 50


def test_get_env_float(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATEGORY_MATCH_THRESHOLD", "85.5")
    assert settings.get_env_float("CATEGORY_MATCH_THRESHOLD", 90.0) == 85.5

    monkeypatch.setenv("CATEGORY_MATCH_THRESHOLD", "-1")
    assert settings.get_env_float("CATEGORY_MATCH_THRESHOLD", 90.0, min_value=0.0) == 90.0


def test_get_env_choice(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SMS_CLASSIFICATION_POLICY", " ALL ")
    assert settings.get_env_choice("SMS_CLASSIFICATION_POLICY", "any", ("any", "all")) == "all"

    monkeypatch.setenv("SMS_CLASSIFICATION_POLICY", "some")
    assert settings.get_env_choice("SMS_CLASSIFICATION_POLICY", "any", ("any", "all")) == "any"


def test_get_env_list(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example,,https://a.example")
    assert settings.get_env_list("CORS_ALLOW_ORIGINS", ["*"]) == ["https://a.example", "https://b.example"]

    monkeypatch.delenv("CORS_ALLOW_ORIGINS")
    assert settings.get_env_list("CORS_ALLOW_ORIGINS", ["*"]) == ["*"]


def test_read_config_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "\n".join(
            [
                "# SMS import",
                "MESSAGE_SOURCE: file",
                "MESSAGE_SOURCE_PATH: \"/data/sms export.json\"  # quoted",
                "SUPABASE_URL: 'https://x.supabase.co'",
                "DEFAULT_CATEGORY_NAME:",
                "not a setting",
            ]
        ),
        encoding="utf-8",
    )

    assert settings.read_config_file(str(path)) == {
        "MESSAGE_SOURCE": "file",
        "MESSAGE_SOURCE_PATH": "/data/sms export.json",
        "SUPABASE_URL": "https://x.supabase.co",
    }
    assert settings.read_config_file(str(tmp_path / "missing.yaml")) == {}


def test_mask_env_value() -> None:
    assert settings.mask_env_value("SUPABASE_ANON_KEY", "eyJhbGciOi.payload.sig") == "ey...ig"
    assert settings.mask_env_value("SUPABASE_ANON_KEY", "abc") == "****"
    assert settings.mask_env_value("MESSAGE_SOURCE", "demo") == "demo"
    assert settings.mask_env_value("LOG_DIR", "line\nbreak") == "line\\nbreak"
