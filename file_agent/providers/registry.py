"""Provider 与模型配置。

本模块将“逻辑模型名”与“具体厂商模型名”解耦：

- 逻辑名（logical_name）：在代码里使用的统一名称，例如 "file-agent"。
- provider_model：厂商实际提供的模型 ID，例如 "gpt-4o"。

未登记的名称按原样作为厂商模型 ID 使用，便于直接指定新模型。"""

from dataclasses import dataclass
from typing import Dict, Mapping, Optional


@dataclass
class ModelConfig:
    """单个逻辑模型的配置。"""

    logical_name: str
    provider_model: str
    max_tokens: Optional[int] = None
    # gpt-5 系列只接受默认温度，此时不发送 temperature
    default_temperature: Optional[float] = None


@dataclass
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    models: Dict[str, ModelConfig]

    def resolve(self, logical_name: str) -> ModelConfig:
        cfg = self.models.get(logical_name)
        if cfg is None:
            return ModelConfig(logical_name=logical_name, provider_model=logical_name)
        return cfg


OPENAI_CONFIG = ProviderConfig(
    name="openai",
    base_url="https://api.openai.com/v1",
    models={
        "file-agent": ModelConfig(
            logical_name="file-agent",
            provider_model="gpt-4o",
        ),
        "chat": ModelConfig(
            logical_name="chat",
            provider_model="gpt-5",
        ),
    },
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "openai": OPENAI_CONFIG,
}


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写。"""

    key = name.lower()
    for k, cfg in PROVIDER_REGISTRY.items():
        if k.lower() == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")
