import httpx
import pytest

from file_agent.providers.openai_client import OpenAIClient
from file_agent.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from file_agent.domain.models import ChatRequest, ChatMessage
from file_agent.tools.definitions import ToolCall, ToolDef, ToolParam
from file_agent.tools.executor import default_tool_defs


class SettingsStub:
    openai_api_key = "sk-test-0123456789"
    http_timeout = 1.0
    openai_base_url = "https://api.openai.com/v1"


def _install_client(monkeypatch, status_code=200, body=None, captured=None, text=""):
    class Resp:
        def __init__(self):
            self.status_code = status_code
            self.text = text

        def json(self):
            return body if body is not None else {"choices": [], "usage": {}}

    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, json=None, headers=None, **_):
            if captured is not None:
                captured["url"] = url
                captured["payload"] = json
                captured["headers"] = headers
            return Resp()

    monkeypatch.setattr("httpx.Client", Client)


def test_openai_client_parse_basic(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    req = ChatRequest(model="chat", messages=[ChatMessage(role="user", content="hi")])
    captured = {}
    _install_client(
        monkeypatch,
        body={
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "ok"}, "finish_reason": "stop"}],
            "usage": {"prompt_tokens": 1, "completion_tokens": 1, "total_tokens": 2},
        },
        captured=captured,
    )
    res = oc.chat(req)
    assert res.choices[0].message.content == "ok"
    assert res.usage.total_tokens == 2
    assert captured["url"] == "https://api.openai.com/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer sk-test-0123456789"
    # 逻辑名 chat 映射到 gpt-5，且不发送 tools / temperature
    assert captured["payload"] == {"model": "gpt-5", "messages": [{"role": "user", "content": "hi"}]}


def test_openai_client_tools_payload(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    tool = ToolDef(
        name="read_file",
        description="read file",
        params={
            "path": ToolParam(
                name="path",
                description="Path",
                required=True,
                schema={"type": "string"},
            )
        },
    )
    req = ChatRequest(
        model="file-agent",
        messages=[ChatMessage(role="user", content="hi")],
        tools=[tool],
    )
    captured = {}
    _install_client(monkeypatch, captured=captured)
    oc.chat(req)
    payload = captured["payload"]
    assert payload["model"] == "gpt-4o"
    assert payload["tool_choice"] == "auto"
    assert payload["tools"] == [
        {
            "type": "function",
            "function": {
                "name": "read_file",
                "description": "read file",
                "parameters": {
                    "type": "object",
                    "properties": {"path": {"type": "string", "description": "Path"}},
                    "required": ["path"],
                },
            },
        }
    ]


def test_job_complete_definition_has_empty_object_schema(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    captured = {}
    _install_client(monkeypatch, captured=captured)
    oc.chat(ChatRequest(model="file-agent", messages=[ChatMessage(role="user", content="x")], tools=default_tool_defs()))
    tools = {t["function"]["name"]: t["function"] for t in captured["payload"]["tools"]}
    assert list(tools) == ["list_files", "read_file", "write_file", "delete_file", "job_complete"]
    assert tools["job_complete"]["parameters"] == {"type": "object", "properties": {}, "required": []}
    assert tools["write_file"]["parameters"]["required"] == ["path", "contents"]


def test_tool_messages_serialised_for_api(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    call = ToolCall(id="call_1", name="read_file", arguments='{"path": "a.txt"}')
    req = ChatRequest(
        model="file-agent",
        messages=[
            ChatMessage(role="system", content="sys"),
            ChatMessage(role="user", content="go"),
            ChatMessage(role="assistant", tool_calls=[call]),
            ChatMessage(role="tool", content='{"contents":"hello"}', tool_call_id="call_1"),
            ChatMessage(role="assistant", content=""),
        ],
    )
    captured = {}
    _install_client(monkeypatch, captured=captured)
    oc.chat(req)
    msgs = captured["payload"]["messages"]
    assert msgs[2] == {
        "role": "assistant",
        "tool_calls": [
            {"id": "call_1", "type": "function", "function": {"name": "read_file", "arguments": '{"path": "a.txt"}'}}
        ],
    }
    assert msgs[3] == {"role": "tool", "content": '{"contents":"hello"}', "tool_call_id": "call_1"}
    assert msgs[4] == {"role": "assistant", "content": ""}


def test_openai_client_parse_tool_calls(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    req = ChatRequest(model="file-agent", messages=[ChatMessage(role="user", content="hi")])
    _install_client(
        monkeypatch,
        body={
            "choices": [
                {
                    "message": {
                        "role": "assistant",
                        "content": None,
                        "tool_calls": [
                            {
                                "id": "call_a",
                                "type": "function",
                                "function": {"name": "read_file", "arguments": '{"path":"a.txt"}'},
                            },
                            {
                                "id": "call_b",
                                "type": "function",
                                "function": {"name": "job_complete", "arguments": {}},
                            },
                        ],
                    },
                }
            ],
        },
    )
    res = oc.chat(req)
    msg = res.choices[0].message
    assert msg.content is None
    assert [tc.id for tc in msg.tool_calls] == ["call_a", "call_b"]
    assert msg.tool_calls[0].arguments == '{"path":"a.txt"}'
    assert msg.tool_calls[1].arguments == "{}"
    assert res.usage is None


def test_missing_api_key():
    class NoKey(SettingsStub):
        openai_api_key = None

    with pytest.raises(ValidationError) as info:
        OpenAIClient(NoKey()).chat(ChatRequest(model="chat", messages=[]))
    assert info.value.code == "MISSING_API_KEY"


def test_rate_limit_and_api_errors(monkeypatch):
    oc = OpenAIClient(SettingsStub())
    req = ChatRequest(model="chat", messages=[ChatMessage(role="user", content="hi")])

    _install_client(monkeypatch, status_code=429)
    with pytest.raises(RateLimitError):
        oc.chat(req)

    _install_client(monkeypatch, status_code=401, text='{"error": "bad key"}')
    with pytest.raises(ApiError) as info:
        oc.chat(req)
    assert info.value.http_status == 401
    assert "bad key" in info.value.message


def test_network_error(monkeypatch):
    class Client:
        def __init__(self, *a, **kw):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *a):
            return False

        def post(self, url, **kw):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("httpx.Client", Client)
    with pytest.raises(NetworkError):
        OpenAIClient(SettingsStub()).chat(ChatRequest(model="chat", messages=[]))
