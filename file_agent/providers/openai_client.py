"""OpenAI chat completions Provider 适配器。

本模块负责：

1. 接收统一的 ChatRequest。
2. 将其转换为 chat completions 的 HTTP API 请求格式。
3. 调用 HTTP 接口并处理网络/API 异常。
4. 将响应 JSON 解析为统一的 ChatResult / ChatMessage 结构（含工具调用）。

任何兼容 chat completions 协议的服务都可以通过 openai_base_url 接入。
"""

import httpx
import json
from typing import Any, Dict, List

from file_agent.domain.models import (
    ChatRequest,
    ChatResult,
    ChatMessage,
    ChatChoice,
    ChatUsage,
)
from file_agent.domain.exceptions import NetworkError, ApiError, RateLimitError, ValidationError
from file_agent.providers.registry import OPENAI_CONFIG, ModelConfig
from file_agent.tools.definitions import ToolDef, ToolCall


class OpenAIClient:
    """OpenAI 提供方客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - chat: 对外统一调用入口，返回 ChatResult。
    """

    name = "openai"

    def __init__(self, settings):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings

    def chat(self, req: ChatRequest) -> ChatResult:
        """执行一次非流式对话调用。

        步骤：
        1. 读取模型配置（logical model -> provider model）。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并捕获网络错误/限流/服务端错误。
        4. 使用统一的解析函数构造 ChatResult。
        """

        if not getattr(self._settings, "openai_api_key", None):
            # 配置缺失走 ValidationError，方便上层统一处理
            raise ValidationError(code="MISSING_API_KEY", message="OPENAI_API_KEY not set")
        model_cfg = OPENAI_CONFIG.resolve(req.model)
        payload = self._build_payload(req, model_cfg)
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                base = getattr(self._settings, "openai_base_url", None) or OPENAI_CONFIG.base_url
                resp = client.post(
                    f"{base.rstrip('/')}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._settings.openai_api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e))
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="OpenAI rate limit", http_status=429)
        if resp.status_code >= 400:
            # 其他 HTTP 错误统一包装为 ApiError
            raise ApiError(
                code="API_ERROR",
                message=f"OpenAI API call failed with code {resp.status_code}: {resp.text}",
                http_status=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise ApiError(code="INVALID_RESPONSE", message=f"response is not JSON: {e}", http_status=502)
        return self._parse_response(data, req)

    def _build_payload(self, req: ChatRequest, model_cfg: ModelConfig) -> dict:
        """将 ChatRequest 转成 chat completions 所需的请求 JSON。"""

        payload: Dict[str, Any] = {
            "model": model_cfg.provider_model,
            "messages": [self._message_to_payload(m) for m in req.messages],
        }
        temperature = req.temperature if req.temperature is not None else model_cfg.default_temperature
        if temperature is not None:
            payload["temperature"] = temperature
        max_tokens = req.max_tokens or model_cfg.max_tokens
        if max_tokens:
            payload["max_tokens"] = max_tokens
        if req.tools:
            payload["tools"] = [self._serialize_tool(tool) for tool in req.tools]
            payload["tool_choice"] = req.tool_choice
        return payload

    def _parse_response(self, data: dict, req: ChatRequest) -> ChatResult:
        """将原始响应 JSON 解析为统一的 ChatResult。"""

        choices: list[ChatChoice] = []
        for i, ch in enumerate(data.get("choices") or []):
            msg = ch.get("message") or {}
            cm = self._build_chat_message(msg)
            choices.append(ChatChoice(index=ch.get("index", i), message=cm, finish_reason=ch.get("finish_reason")))
        usage_raw = data.get("usage") or {}
        usage = None
        if usage_raw:
            usage = ChatUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return ChatResult(provider=self.name, model=req.model, choices=choices, usage=usage, raw=data)

    def _serialize_tool(self, tool: ToolDef) -> Dict[str, Any]:
        """把内部的 ToolDef 转成 function tool 描述。"""

        properties: Dict[str, Any] = {}
        required: List[str] = []
        for name, param in tool.params.items():
            properties[name] = param.schema or {"type": "string"}
            if param.description:
                properties[name] = {
                    **properties[name],
                    "description": param.description,
                }
            if param.required:
                required.append(name)
        return {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": required,
                },
            },
        }

    def _build_chat_message(self, payload: Dict[str, Any]) -> ChatMessage:
        """将单条响应 message 转换为 ChatMessage。

        同时负责把 tool_calls 字段解析为统一的 ToolCall 列表，
        arguments 保持为原始 JSON 文本。
        """

        tool_calls_raw = payload.get("tool_calls") or []
        tool_calls: List[ToolCall] = []
        for idx, call in enumerate(tool_calls_raw):
            func = call.get("function") or {}
            tool_calls.append(
                ToolCall(
                    id=call.get("id") or f"tool_call_{idx}",
                    name=func.get("name") or call.get("name") or "",
                    arguments=self._raw_arguments(func.get("arguments")),
                )
            )

        # 部分兼容服务仍会返回旧版 function_call 字段
        function_call = payload.get("function_call")
        if function_call:
            tool_calls.append(
                ToolCall(
                    id=function_call.get("id") or "function_call",
                    name=function_call.get("name") or "",
                    arguments=self._raw_arguments(function_call.get("arguments")),
                )
            )
        return ChatMessage(
            role=payload.get("role") or "assistant",
            content=payload.get("content"),
            tool_calls=tool_calls or None,
            tool_call_id=payload.get("tool_call_id"),
        )

    @staticmethod
    def _raw_arguments(raw: Any) -> str:
        """arguments 通常是 JSON 字符串；个别服务直接返回对象，这里统一成文本。"""

        if isinstance(raw, str):
            return raw
        if raw is None:
            return "{}"
        return json.dumps(raw, ensure_ascii=False)

    def _message_to_payload(self, message: ChatMessage) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"role": message.role}
        # 带 tool_calls 的 assistant 消息可以省略 content，其余消息必须携带
        if message.content is not None or not message.tool_calls:
            payload["content"] = message.content or ""
        if message.tool_calls:
            payload["tool_calls"] = [
                {
                    "id": call.id,
                    "type": "function",
                    "function": {
                        "name": call.name,
                        "arguments": call.arguments,
                    },
                }
                for call in message.tool_calls
            ]
        if message.tool_call_id:
            payload["tool_call_id"] = message.tool_call_id
        return payload
