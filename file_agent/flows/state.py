"""State definition for the tool-calling graph."""

from __future__ import annotations

from typing import Optional, TypedDict

from file_agent.domain.conversation import Transcript
from file_agent.domain.models import ChatMessage


class JobState(TypedDict, total=False):
    """State shared across LangGraph nodes.

    latest 是最近一次补全返回的 assistant 消息，处理完后清空；
    steps 统计已发出的补全请求数。
    """

    transcript: Transcript
    latest: Optional[ChatMessage]
    steps: int
    done: bool
