"""Tool 调用异常体系

TransportError: 请求发不出去，或远端返回非 2xx。
ProtocolError: 响应体无法解析为预期结构。
InvalidArgumentError: 本地参数校验失败（在任何远程调用之前抛出）。
"""


class ToolClientError(Exception):
    """Tool 客户端基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 调用方重试后是否可能成功
        """
        super().__init__(message)
        self.recoverable = recoverable


class TransportError(ToolClientError):
    """传输层失败（连接失败、超时、非 2xx 状态码）

    不做重试，直接抛给调用方。
    """

    def __init__(
        self,
        url: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """
        Args:
            url: 请求地址
            status_code: HTTP 状态码，连接类失败时为 None
            original_error: 原始异常
        """
        if status_code is not None:
            message = f"Tool server returned HTTP {status_code}: {url}"
        else:
            message = f"Tool server unreachable: {url} -- {original_error}"
        super().__init__(message, recoverable=True)
        self.url = url
        self.status_code = status_code
        self.original_error = original_error


class ProtocolError(ToolClientError):
    """响应体格式错误（非 JSON、缺少字段、结构不符）"""

    def __init__(self, message: str, payload: object = None) -> None:
        super().__init__(message, recoverable=False)
        self.payload = payload


class InvalidArgumentError(ToolClientError, ValueError):
    """能力方法的必填参数为空或非法"""

    def __init__(self, argument: str, message: str = "") -> None:
        super().__init__(message or f"Argument '{argument}' must not be empty", recoverable=False)
        self.argument = argument
