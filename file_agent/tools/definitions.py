"""工具数据结构定义。

这些 dataclass 描述了“工具调用”的 schema，既用于：
- 将可用工具列表暴露给 LLM（ToolDef / ToolParam）。
- 在对话循环中保存和执行模型触发的工具调用（ToolCall / ToolResult）。
"""

from dataclasses import dataclass
from typing import Dict, Any


@dataclass(frozen=True)
class ToolParam:
    """单个工具参数的定义。"""

    name: str
    description: str
    required: bool
    schema: Dict[str, Any]


@dataclass(frozen=True)
class ToolDef:
    """一个可供 LLM 调用的工具定义，构造一次后随每次请求原样发送。"""

    name: str
    description: str
    params: Dict[str, ToolParam]


@dataclass(frozen=True)
class ToolCall:
    """模型发起的一次工具调用请求。

    arguments 保留模型返回的原始 JSON 文本，回传给 API 时不做改写。
    """

    id: str
    name: str
    arguments: str


@dataclass(frozen=True)
class ToolResult:
    """工具执行结果的封装（JSON 文本形式）。"""

    call_id: str
    name: str
    content: str
