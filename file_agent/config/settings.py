"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。
进程启动时调用一次 load_settings()，得到的实例显式传给各组件。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


MAX_JOB_STEPS = 500


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("FILE_AGENT_CONFIG")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.cwd() / "config.yaml")

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- Provider 相关配置 ----
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API 密钥")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="chat completions API 基础URL",
    )
    agent_model: str = Field(
        default="file-agent",
        description="工具循环使用的逻辑模型名，由 registry 映射为具体模型",
    )
    chat_model: str = Field(
        default="chat",
        description="单轮问答（不带工具）使用的逻辑模型名",
    )
    http_timeout: float = Field(default=120.0, ge=1.0, description="HTTP 超时时间（秒）")
    temperature: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="采样温度，为空时不发送，使用模型默认值",
    )

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否截断日志内容")

    # ---- 对话循环与工具 ----
    max_steps: int = Field(
        default=50,
        description=f"单次运行内补全请求的最大次数，超出 [1, {MAX_JOB_STEPS}] 时截断",
    )
    system_prompt_file: Optional[str] = Field(
        default=None,
        description="自定义系统提示词文件，为空时使用内置提示词",
    )
    recursive_delete: bool = Field(default=True, description="delete_file 是否递归删除目录")
    confine_to_root: bool = Field(
        default=True,
        description="是否禁止工具访问项目根目录之外的路径",
    )
    report_tool_errors: bool = Field(
        default=False,
        description="工具失败时把错误回传给模型，而不是终止运行",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("max_steps")
    @classmethod
    def clamp_max_steps(cls, v: int) -> int:
        return max(1, min(v, MAX_JOB_STEPS))

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


def load_settings(**overrides: Any) -> Settings:
    """构造配置实例；overrides 中值为 None 的键会被忽略。"""

    return Settings(**{k: v for k, v in overrides.items() if v is not None})
