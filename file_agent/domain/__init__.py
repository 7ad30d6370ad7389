"""领域层模型与协议。

包含：
- models: 统一的 ChatMessage / ChatRequest / ChatResult 模型。
- conversation: 单次运行内只追加的 Transcript。
- exceptions: 业务异常类型定义。
"""
