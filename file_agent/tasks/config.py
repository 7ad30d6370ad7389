"""Job-scoped configuration models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from uuid import uuid4

from file_agent.config.settings import MAX_JOB_STEPS


@dataclass
class JobConfig:
    """Settings for a single agent run, built once and shared by driver and tools.

    Attributes:
        system_prompt: 第一条 system 消息。
        user_prompt: 第一条 user 消息（提示词文件内容）。
        project_root: 工具操作的根目录，所有路径参数都拼接在这里。
        model: 逻辑模型名。
        max_steps: 补全请求的最大次数（<= MAX_JOB_STEPS）。
        temperature: 为空时使用模型默认值。
        run_id: 可选外部标识；为空时会自动生成，用于日志关联。
    """

    system_prompt: str
    user_prompt: str
    project_root: str
    model: str
    max_steps: int = 50
    temperature: Optional[float] = None
    run_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.max_steps < 1:
            self.max_steps = 1
        self.project_root = str(Path(self.project_root).expanduser().resolve())

    @property
    def max_steps_clamped(self) -> int:
        """Clamp步骤数量，防止超过硬上限。"""

        return min(self.max_steps, MAX_JOB_STEPS)

    def ensure_run_id(self) -> str:
        if not self.run_id:
            self.run_id = f"run-{uuid4().hex}"
        return self.run_id

    @property
    def root_path(self) -> Path:
        return Path(self.project_root)
