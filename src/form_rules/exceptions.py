"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: exceptions.py
@DateTime: 2026-03-02
@Docs: Form rules error hierarchy.
表单规则异常体系。
"""

from typing import Any


class FormRulesError(Exception):
    """
    Form Rules Errors.
    表单规则异常。

    Base class of every error raised by the package.
    本包抛出的所有异常的基类。

    Attributes:
        message: Error message.
        message: 错误消息。
        status_code: HTTP status code hint for web layers.
        status_code: 供 Web 层使用的 HTTP 状态码提示。
        details: Error details.
        details: 错误详情。
        error_code: Stable error code.
        error_code: 稳定错误码。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "form_rules_error",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details
        self.error_code = error_code


class ConfigurationError(FormRulesError):
    """
    Configuration error.
    配置错误。

    Raised immediately at the offending call: unknown rule, non-callable
    predicate, bad rule parameters, missing locale resource.
    在出错调用处立即抛出：未知规则、不可调用的谓词、规则参数错误、缺失语言资源。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 500,
        details: Any | None = None,
        error_code: str = "configuration_error",
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details, error_code=error_code)


class ValidationError(FormRulesError):
    """
    Validation error.
    校验错误。

    Only raised by ``Validator.validate_or_raise``; ``details`` holds the error map.
    仅由 ``Validator.validate_or_raise`` 抛出；``details`` 为错误映射。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 422,
        details: Any | None = None,
        error_code: str = "validation_failed",
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details, error_code=error_code)


class ExportError(FormRulesError):
    """
    Export error.
    导出错误。
    """

    def __init__(
        self,
        *,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
        error_code: str = "unsupported_export",
    ) -> None:
        super().__init__(message=message, status_code=status_code, details=details, error_code=error_code)
