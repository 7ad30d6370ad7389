"""工具参数与结果的 JSON 模型。

参数直接从模型给出的 arguments 文本解析；结果按别名序列化为紧凑 JSON，
例如 {"items":[{"name":"a.txt","isDirectory":false}]}。
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class PathArgument(_Frozen):
    path: str


class WriteFileArguments(_Frozen):
    path: str
    contents: str


class FileContents(_Frozen):
    contents: str


class DirectoryItem(_Frozen):
    name: str
    is_directory: bool = Field(alias="isDirectory")


class DirectoryListing(_Frozen):
    items: List[DirectoryItem] = Field(default_factory=list)


class ToolStatus(_Frozen):
    result: str = "success"


class ToolError(_Frozen):
    error: str
    message: str


SUCCESS = ToolStatus()
