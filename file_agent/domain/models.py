"""统一的对话与结果数据模型。

本模块定义了对话循环与 Provider 之间共享的标准数据结构：

- ChatMessage: 一条对话消息（system/user/assistant/tool）。
- ChatRequest: 发给底层 LLM Provider 的完整请求。
- ChatResult: 从 Provider 解析后的统一响应结果。

Provider 适配器（如 OpenAIClient）只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Literal, Optional, List, TYPE_CHECKING

if TYPE_CHECKING:
    # 仅在类型检查时导入，避免运行时循环依赖
    from file_agent.tools.definitions import ToolCall, ToolDef


# LLM 消息角色类型（与 OpenAI chat completions 的 role 字段对应）
Role = Literal["system", "user", "assistant", "tool"]


@dataclass
class ChatMessage:
    """一条对话消息，既可用于请求，也可用于响应。

    - role: 消息角色，如 system/user/assistant/tool。
    - content: 纯文本内容；模型只发起工具调用时可以为 None。
    - tool_calls: 当 role 为 "assistant" 且模型触发工具调用时，
      这里保存模型发起的工具调用列表。
    - tool_call_id: 当 role 为 "tool" 时，用于关联某一次工具调用。
    """

    role: Role
    content: Optional[str] = None
    tool_calls: Optional[List["ToolCall"]] = None
    tool_call_id: Optional[str] = None


@dataclass
class ChatRequest:
    """一次完整的聊天请求。

    Provider 适配层负责把本结构转换成 API 的 JSON 请求体。
    """

    model: str  # 逻辑模型名，如 "file-agent"（再由 registry 映射为真实模型名）
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    # 工具定义列表：为空时不发送 tools / tool_choice 字段
    tools: Optional[List["ToolDef"]] = None
    tool_choice: Literal["auto", "none", "required"] = "auto"


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class ChatChoice:
    """单个候选回答（对话循环只使用 index=0 的一条）。"""

    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class ChatResult:
    """一次对话调用的最终结果。

    - provider: Provider 名（如 "openai"）。
    - model: 逻辑模型名。
    - choices: 一个或多个候选回答。
    - usage: 可选的 token 使用统计。
    - raw: 原始响应 JSON，用于调试。
    """

    provider: str
    model: str
    choices: List[ChatChoice]
    usage: Optional[ChatUsage] = None
    raw: Optional[dict] = None
