import json
import logging

import pytest
from pydantic import ValidationError

from file_agent.config.settings import Settings, load_settings
from file_agent.infrastructure.logging.logger import configure_logging, logger


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for key in ("OPENAI_API_KEY", "MAX_STEPS", "TEMPERATURE", "AGENT_MODEL", "FILE_AGENT_CONFIG", "LOG_DIR"):
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def test_defaults(clean_env):
    s = Settings()
    assert s.openai_api_key is None
    assert s.agent_model == "file-agent"
    assert s.max_steps == 50
    assert s.confine_to_root is True
    assert s.recursive_delete is True
    assert s.report_tool_errors is False


def test_yaml_file_then_env_precedence(clean_env, monkeypatch):
    cfg = clean_env / "agent.yaml"
    cfg.write_text("max_steps: 7\nagent_model: gpt-4.1\n", encoding="utf-8")
    monkeypatch.setenv("FILE_AGENT_CONFIG", str(cfg))
    s = Settings()
    assert s.max_steps == 7
    assert s.agent_model == "gpt-4.1"

    monkeypatch.setenv("MAX_STEPS", "9")
    assert Settings().max_steps == 9
    assert load_settings(max_steps=3).max_steps == 3


def test_load_settings_ignores_none_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("MAX_STEPS", "12")
    assert load_settings(max_steps=None).max_steps == 12


def test_dotenv_supplies_api_key(clean_env):
    (clean_env / ".env").write_text("OPENAI_API_KEY=sk-from-dotenv-123\n", encoding="utf-8")
    assert Settings().openai_api_key == "sk-from-dotenv-123"


def test_short_api_key_rejected(clean_env, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "short")
    with pytest.raises(ValidationError):
        Settings()


def test_configure_logging_writes_json_once(clean_env):
    settings = Settings(log_dir=str(clean_env / "logs"))
    configure_logging(settings)
    configure_logging(settings)
    handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)
                and h.baseFilename == str((clean_env / "logs" / "agent.log").resolve())]
    assert len(handlers) == 1
    try:
        logger.info("hello", extra={"extra": {"run_id": "r1"}})
        handlers[0].flush()
        line = (clean_env / "logs" / "agent.log").read_text(encoding="utf-8").splitlines()[-1]
        record = json.loads(line)
        assert record["msg"] == "hello"
        assert record["run_id"] == "r1"
        assert record["level"] == "INFO"
    finally:
        logger.removeHandler(handlers[0])
        handlers[0].close()


@pytest.mark.parametrize("raw, expected", [("1000", 500), ("0", 1), ("-3", 1), ("40", 40)])
def test_max_steps_clamped_not_rejected(clean_env, monkeypatch, raw, expected):
    monkeypatch.setenv("MAX_STEPS", raw)
    assert Settings().max_steps == expected


def test_temperature_setting(clean_env, monkeypatch):
    assert Settings().temperature is None
    monkeypatch.setenv("TEMPERATURE", "0.7")
    assert Settings().temperature == 0.7
    monkeypatch.setenv("TEMPERATURE", "3")
    with pytest.raises(ValidationError):
        Settings()
