import pytest

from file_agent.config.settings import Settings
from file_agent.providers import create_provider
from file_agent.providers.openai_client import OpenAIClient
from file_agent.providers.registry import OPENAI_CONFIG, get_provider_config


def test_create_provider_default():
    provider = create_provider(Settings(openai_api_key="sk-test-0123456789"))
    assert isinstance(provider, OpenAIClient)
    assert provider.name == "openai"


def test_create_provider_unknown_name():
    with pytest.raises(KeyError):
        create_provider(Settings(), "kimi")


def test_registry_resolves_logical_and_raw_names():
    assert get_provider_config("OpenAI") is OPENAI_CONFIG
    assert OPENAI_CONFIG.resolve("file-agent").provider_model == "gpt-4o"
    assert OPENAI_CONFIG.resolve("chat").provider_model == "gpt-5"
    assert OPENAI_CONFIG.resolve("gpt-4.1-mini").provider_model == "gpt-4.1-mini"
