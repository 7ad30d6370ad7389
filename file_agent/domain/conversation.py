"""单次运行内的对话记录（Transcript）。

Transcript 只追加、不持久化，由对话驱动器独占。
追加 tool 消息时会校验它对应最近一条带 tool_calls 的 assistant 消息，
且每个调用最多只有一条结果。
"""

from typing import Iterator, List, Optional

from .exceptions import TranscriptError
from .models import ChatMessage


class Transcript:
    def __init__(self, system_prompt: str, user_prompt: str):
        self._messages: List[ChatMessage] = [
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ]
        self._open_calls: List[str] = []
        self._answered: set = set()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self._messages)

    @property
    def messages(self) -> List[ChatMessage]:
        """返回消息列表的拷贝，避免调用方绕过校验直接修改。"""

        return list(self._messages)

    @property
    def last(self) -> ChatMessage:
        return self._messages[-1]

    def append(self, message: ChatMessage) -> None:
        if message.role == "tool":
            self._check_tool_result(message)
        elif message.role == "assistant" and message.tool_calls:
            # 新一批工具调用开始，之前的调用不再接受结果
            self._open_calls = [call.id for call in message.tool_calls]
            self._answered = set()
        self._messages.append(message)

    def append_tool_result(self, tool_call_id: str, content: str) -> ChatMessage:
        message = ChatMessage(role="tool", content=content, tool_call_id=tool_call_id)
        self.append(message)
        return message

    def pending_call_ids(self) -> List[str]:
        """最近一批工具调用中还没有结果的 id（按模型给出的顺序）。"""

        return [cid for cid in self._open_calls if cid not in self._answered]

    def _check_tool_result(self, message: ChatMessage) -> None:
        call_id: Optional[str] = message.tool_call_id
        if not call_id or call_id not in self._open_calls:
            raise TranscriptError(
                code="UNMATCHED_TOOL_RESULT",
                message=f"tool result {call_id!r} does not match any pending tool call",
            )
        if call_id in self._answered:
            raise TranscriptError(
                code="DUPLICATE_TOOL_RESULT",
                message=f"tool call {call_id!r} already has a result",
            )
        self._answered.add(call_id)
