"""High-level driver around the tool-calling graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List

from file_agent.domain.conversation import Transcript
from file_agent.flows.graph import Echo, build_graph
from file_agent.flows.state import JobState
from file_agent.infrastructure.logging.logger import logger
from file_agent.providers.base import ProviderClient
from file_agent.tasks.config import JobConfig
from file_agent.tools.definitions import ToolDef
from file_agent.tools.executor import ToolExecutor


@dataclass
class RunOutcome:
    transcript: Transcript
    steps: int


class ConversationDriver:
    """Run one job: completion → tools/nudge → completion … until job_complete.

    Provider, executor and tool list are fixed for the lifetime of the driver;
    each run() starts a fresh transcript.
    """

    def __init__(
        self,
        provider: ProviderClient,
        executor: ToolExecutor,
        tool_defs: List[ToolDef],
        job: JobConfig,
        *,
        echo: Echo = print,
    ) -> None:
        self._job = job
        self._graph = build_graph(provider, executor, tool_defs, job, echo)

    def run(self) -> RunOutcome:
        job = self._job
        run_id = job.ensure_run_id()
        logger.info(
            "Job started",
            extra={"extra": {"run_id": run_id, "model": job.model, "project_root": job.project_root}},
        )
        state: JobState = {
            "transcript": Transcript(job.system_prompt, job.user_prompt),
            "latest": None,
            "steps": 0,
            "done": False,
        }
        # 每个补全轮次最多经过两个节点，留出余量让预算检查先于递归上限触发
        limit = 2 * job.max_steps_clamped + 5
        try:
            result = self._graph.invoke(state, config={"recursion_limit": limit})
        except Exception:
            logger.log(logging.ERROR, "Job aborted", extra={"extra": {"run_id": run_id}}, exc_info=True)
            raise
        logger.info("Job complete", extra={"extra": {"run_id": run_id, "steps": result["steps"]}})
        return RunOutcome(transcript=result["transcript"], steps=result["steps"])
