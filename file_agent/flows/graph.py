"""LangGraph construction and node implementations."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from langgraph.graph import END, StateGraph
from langgraph.graph.state import CompiledStateGraph

from file_agent.domain.exceptions import ApiError, StepBudgetExceededError
from file_agent.domain.models import ChatMessage, ChatRequest
from file_agent.flows.state import JobState
from file_agent.infrastructure.logging.logger import logger
from file_agent.providers.base import ProviderClient
from file_agent.tasks.config import JobConfig
from file_agent.tools.definitions import ToolDef
from file_agent.tools.executor import COMPLETION_TOOL, ToolExecutor

NUDGE_PROMPT = "Invoke the necessary tool for your next step."
NO_RESPONSE = "Error: No response from OpenAI"

Echo = Callable[[str], None]


def completion_node(
    state: JobState,
    provider: ProviderClient,
    tool_defs: List[ToolDef],
    job: JobConfig,
    echo: Echo,
) -> Dict[str, Any]:
    steps = state.get("steps", 0)
    budget = job.max_steps_clamped
    if steps >= budget:
        _log(logging.WARNING, "Step budget exhausted", job, steps=steps)
        raise StepBudgetExceededError(
            code="STEP_BUDGET_EXCEEDED",
            message=f"model did not call {COMPLETION_TOOL} within {budget} completion requests",
            run_id=job.run_id,
        )
    req = ChatRequest(
        model=job.model,
        messages=state["transcript"].messages,
        temperature=job.temperature,
        tools=tool_defs,
        tool_choice="auto",
    )
    started = time.perf_counter()
    result = provider.chat(req)
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    echo(f"Completion took {elapsed_ms}ms")
    if not result.choices:
        raise ApiError(code="EMPTY_CHOICES", message="completion returned no choices", http_status=502)
    message = result.choices[0].message
    _log(
        logging.INFO,
        "Completion round",
        job,
        step=steps + 1,
        elapsed_ms=elapsed_ms,
        tool_calls=len(message.tool_calls or []),
    )
    return {"latest": message, "steps": steps + 1}


def tools_node(state: JobState, executor: ToolExecutor, job: JobConfig, echo: Echo) -> Dict[str, Any]:
    calls = list(state["latest"].tool_calls or [])
    transcript = state["transcript"]
    echo(f"AI wants to call tools: {', '.join(call.name for call in calls)}")
    transcript.append(ChatMessage(role="assistant", tool_calls=calls))

    # 整批执行完再结束，保证每个调用都有对应的结果
    done = False
    for call in calls:
        _log(
            logging.INFO,
            "Tool call received",
            job,
            tool_name=call.name,
            tool_call_id=call.id,
            tool_args=_summary(call.arguments),
        )
        result = executor.execute(call)
        _log(
            logging.INFO,
            "Tool execution finished",
            job,
            tool_call_id=call.id,
            result_preview=_summary(result.content),
        )
        transcript.append_tool_result(call.id, result.content)
        if call.name == COMPLETION_TOOL:
            done = True
    return {"latest": None, "done": done}


def nudge_node(state: JobState, job: JobConfig, echo: Echo) -> Dict[str, Any]:
    message = state["latest"]
    transcript = state["transcript"]
    echo(NO_RESPONSE if message.content is None else message.content)
    _log(logging.INFO, "Model answered without tool call, nudging", job, preview=_summary(message.content))
    transcript.append(ChatMessage(role="assistant", content=message.content or ""))
    transcript.append(ChatMessage(role="system", content=NUDGE_PROMPT))
    return {"latest": None}


def completion_router(state: JobState) -> str:
    latest = state.get("latest")
    if latest is not None and latest.tool_calls:
        return "tools"
    return "nudge"


def tools_router(state: JobState) -> str:
    if state.get("done"):
        return "end"
    return "completion"


def build_graph(
    provider: ProviderClient,
    executor: ToolExecutor,
    tool_defs: List[ToolDef],
    job: JobConfig,
    echo: Echo = print,
) -> CompiledStateGraph:
    graph = StateGraph(JobState)
    graph.add_node("completion", lambda s: completion_node(s, provider, tool_defs, job, echo))
    graph.add_node("tools", lambda s: tools_node(s, executor, job, echo))
    graph.add_node("nudge", lambda s: nudge_node(s, job, echo))
    graph.set_entry_point("completion")
    graph.add_conditional_edges("completion", completion_router, {"tools": "tools", "nudge": "nudge"})
    graph.add_conditional_edges("tools", tools_router, {"end": END, "completion": "completion"})
    graph.add_edge("nudge", "completion")
    return graph.compile()


def _summary(text: Optional[str], limit: int = 160) -> str:
    if not text:
        return ""
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def _log(level: int, message: str, job: JobConfig, **fields: Any) -> None:
    payload: Dict[str, Any] = {"run_id": job.run_id, "model": job.model}
    payload.update(fields)
    logger.log(level, message, extra={"extra": payload})
