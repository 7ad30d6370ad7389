"""系统提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取内置的 system prompt 文本，
也可以通过 override 指定任意文件。
"""

from pathlib import Path
from typing import Optional


PROMPTS_DIR = Path(__file__).resolve().parent


def load_system_prompt(agent_type: str = "file-agent", locale: str = "en", override: Optional[str] = None) -> str:
    """根据 Agent 类型和语言加载系统提示词文本。

    目前 agent_type 仅支持 "file-agent"；override 非空时直接读取该文件。
    """

    if override:
        return Path(override).expanduser().read_text(encoding="utf-8").strip()
    fname = PROMPTS_DIR / locale / f"{agent_type.replace('-', '_')}_system.md"
    return fname.read_text(encoding="utf-8").strip()
