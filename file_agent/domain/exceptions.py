"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 CLI 最外层做统一捕获与用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 run_id、tool_name 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """第三方 API 返回非 2xx/429 错误，或响应结构不可用时抛出。"""


class RateLimitError(BusinessError):
    """Provider 限流错误，本项目不做重试，直接终止运行。"""


class ValidationError(BusinessError):
    """参数或配置校验失败。"""


class ToolExecutionError(BusinessError):
    """工具处理函数失败（文件不存在、参数 JSON 非法等）。"""


class PathOutsideRootError(BusinessError):
    """工具参数中的路径解析后落在项目根目录之外。"""


class TranscriptError(BusinessError):
    """对话记录违反 tool_call_id 对应关系。"""


class StepBudgetExceededError(BusinessError):
    """达到最大补全请求次数后模型仍未调用 job_complete。"""
