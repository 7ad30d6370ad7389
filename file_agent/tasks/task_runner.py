"""Job entry points: the tool-calling agent and the single-shot chat."""

from __future__ import annotations

from typing import Optional

from file_agent.config.settings import Settings
from file_agent.domain.exceptions import ApiError
from file_agent.domain.models import ChatMessage, ChatRequest
from file_agent.flows.graph import Echo
from file_agent.flows.runner import ConversationDriver, RunOutcome
from file_agent.prompts import load_system_prompt
from file_agent.providers import create_provider
from file_agent.providers.base import ProviderClient
from file_agent.tools.executor import ToolExecutor, default_tool_defs, default_tools
from file_agent.tools.file_tools import ProjectFiles

from .config import JobConfig


def build_job(
    user_prompt: str,
    project_root: str,
    settings: Settings,
    *,
    model_name: Optional[str] = None,
    max_steps: Optional[int] = None,
) -> JobConfig:
    """Assemble the explicit per-run configuration from settings and CLI overrides."""

    return JobConfig(
        system_prompt=load_system_prompt(override=settings.system_prompt_file),
        user_prompt=user_prompt,
        project_root=project_root,
        model=model_name or settings.agent_model,
        max_steps=max_steps if max_steps is not None else settings.max_steps,
        temperature=settings.temperature,
    )


def run_job(
    job: JobConfig,
    settings: Settings,
    *,
    provider: Optional[ProviderClient] = None,
    echo: Echo = print,
) -> RunOutcome:
    """执行一个带有工具闭环的任务，直到模型调用 job_complete。"""

    files = ProjectFiles(
        job.root_path,
        confine=settings.confine_to_root,
        recursive_delete=settings.recursive_delete,
    )
    executor = ToolExecutor(default_tools(files), report_errors=settings.report_tool_errors)
    driver = ConversationDriver(
        provider or create_provider(settings),
        executor,
        default_tool_defs(),
        job,
        echo=echo,
    )
    return driver.run()


def run_chat(
    user_prompt: str,
    settings: Settings,
    *,
    provider: Optional[ProviderClient] = None,
    model_name: Optional[str] = None,
) -> Optional[str]:
    """发送一条 user 消息（不带工具），返回第一个候选的文本。"""

    client = provider or create_provider(settings)
    req = ChatRequest(
        model=model_name or settings.chat_model,
        messages=[ChatMessage(role="user", content=user_prompt)],
        temperature=settings.temperature,
    )
    result = client.chat(req)
    if not result.choices:
        raise ApiError(code="EMPTY_CHOICES", message="completion returned no choices", http_status=502)
    return result.choices[0].message.content
