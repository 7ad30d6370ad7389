"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (openai_client)。
"""

from typing import Optional

from file_agent.config.settings import Settings
from file_agent.providers.base import ProviderClient
from file_agent.providers.openai_client import OpenAIClient
from file_agent.providers.registry import get_provider_config


def create_provider(settings: Settings, name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，目前只有 openai。"""

    cfg = get_provider_config(name or "openai")
    if cfg.name == "openai":
        return OpenAIClient(settings)
    raise KeyError(f"Provider {cfg.name!r} has no client")
