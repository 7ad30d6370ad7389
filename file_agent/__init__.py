"""file-agent 顶层包。

该包实现一个通过 chat completions API 驱动的文件操作 Agent：
把提示词发给模型，执行模型选择的文件工具（列目录、读写、删除），
并把结果回传给模型，直到模型调用 job_complete。
"""

from file_agent.tasks import JobConfig, build_job, run_chat, run_job

__all__ = ["JobConfig", "build_job", "run_chat", "run_job"]
