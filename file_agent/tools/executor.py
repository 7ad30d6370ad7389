from typing import Callable, Dict, List
import logging

from pydantic import BaseModel
from pydantic import ValidationError as ArgumentsInvalid

from file_agent.domain.exceptions import BusinessError, ToolExecutionError
from file_agent.infrastructure.logging.logger import logger
from .definitions import ToolCall, ToolResult, ToolDef, ToolParam
from .file_tools import ProjectFiles
from .schemas import SUCCESS, PathArgument, ToolError, WriteFileArguments


ToolFunc = Callable[[str], BaseModel]
COMPLETION_TOOL = "job_complete"


class ToolExecutor:
    """按名称分发工具调用，并把结果模型序列化为 JSON 文本。

    report_errors=False 时，处理函数失败会包装成 ToolExecutionError 向上抛出，
    整个运行随之终止；为 True 时错误作为工具结果回传给模型。
    未注册的工具名总是返回 UNKNOWN_TOOL 错误结果。
    """

    def __init__(self, tools: Dict[str, ToolFunc], *, report_errors: bool = False):
        self._tools = tools
        self._report_errors = report_errors

    @property
    def names(self) -> List[str]:
        return list(self._tools)

    def execute(self, call: ToolCall) -> ToolResult:
        func = self._tools.get(call.name)
        if func is None:
            logger.warning("Unknown tool requested", extra={"extra": {"tool_name": call.name, "tool_call_id": call.id}})
            result: BaseModel = ToolError(error="UNKNOWN_TOOL", message=f"Tool '{call.name}' not registered")
        else:
            try:
                result = func(call.arguments)
            except ArgumentsInvalid as exc:
                result = self._fail(call, "INVALID_TOOL_ARGUMENTS", exc)
            except (OSError, UnicodeDecodeError, BusinessError) as exc:
                result = self._fail(call, "TOOL_EXECUTION_ERROR", exc)
        return ToolResult(call_id=call.id, name=call.name, content=result.model_dump_json(by_alias=True))

    def _fail(self, call: ToolCall, code: str, exc: Exception) -> ToolError:
        message = exc.message if isinstance(exc, BusinessError) else str(exc)
        logger.log(
            logging.WARNING if self._report_errors else logging.ERROR,
            "Tool execution failed",
            extra={"extra": {"tool_name": call.name, "tool_call_id": call.id, "error": message}},
        )
        if not self._report_errors:
            raise ToolExecutionError(
                code=code,
                message=f"{call.name} failed: {message}",
                tool_name=call.name,
                tool_call_id=call.id,
            ) from exc
        return ToolError(error=code, message=message)


def _make_list_files_tool(files: ProjectFiles) -> ToolFunc:
    def _run(arguments: str) -> BaseModel:
        return files.list_files(PathArgument.model_validate_json(arguments).path)

    return _run


def _make_read_file_tool(files: ProjectFiles) -> ToolFunc:
    def _run(arguments: str) -> BaseModel:
        return files.read_file(PathArgument.model_validate_json(arguments).path)

    return _run


def _make_write_file_tool(files: ProjectFiles) -> ToolFunc:
    def _run(arguments: str) -> BaseModel:
        args = WriteFileArguments.model_validate_json(arguments)
        files.write_file(args.path, args.contents)
        return SUCCESS

    return _run


def _make_delete_file_tool(files: ProjectFiles) -> ToolFunc:
    def _run(arguments: str) -> BaseModel:
        files.delete_file(PathArgument.model_validate_json(arguments).path)
        return SUCCESS

    return _run


def _job_complete(arguments: str) -> BaseModel:
    return SUCCESS


def default_tools(files: ProjectFiles) -> Dict[str, ToolFunc]:
    return {
        "list_files": _make_list_files_tool(files),
        "read_file": _make_read_file_tool(files),
        "write_file": _make_write_file_tool(files),
        "delete_file": _make_delete_file_tool(files),
        COMPLETION_TOOL: _job_complete,
    }


def default_tool_defs() -> List[ToolDef]:
    return [
        ToolDef(
            name="list_files",
            description="Get the list of files in the directory passed as argument",
            params={
                "path": ToolParam(
                    name="path",
                    description="Relative path to the directory we are listing",
                    required=True,
                    schema={"type": "string"},
                )
            },
        ),
        ToolDef(
            name="read_file",
            description="Get the contents of a file with the path passed as argument",
            params={
                "path": ToolParam(
                    name="path",
                    description="Relative path to the file we are reading",
                    required=True,
                    schema={"type": "string"},
                )
            },
        ),
        ToolDef(
            name="write_file",
            description=(
                "Write contents into a file with the contents and path passed as arguments, "
                "creates the file if it doesn't exist and any needed parent directories."
            ),
            params={
                "path": ToolParam(
                    name="path",
                    description="Relative path to the file we are writing",
                    required=True,
                    schema={"type": "string"},
                ),
                "contents": ToolParam(
                    name="contents",
                    description="Contents to write into the file",
                    required=True,
                    schema={"type": "string"},
                ),
            },
        ),
        ToolDef(
            name="delete_file",
            description="Delete a file or directory",
            params={
                "path": ToolParam(
                    name="path",
                    description="Relative path to the directory or file to delete",
                    required=True,
                    schema={"type": "string"},
                )
            },
        ),
        ToolDef(
            name=COMPLETION_TOOL,
            description="Invoke this once you are done with your job",
            params={},
        ),
    ]
