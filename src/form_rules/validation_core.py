"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation_core.py
@DateTime: 2026-03-02
@Docs: Core validation result primitives.
校验结果核心原语。

It only provides:
仅提供如下内容：
- ValidationFailure: one failed field/rule pair of a validation run.
    ValidationFailure：一次校验运行中失败的字段/规则对。
- ErrorCollector: append standardized row-level error items.
    ErrorCollector：添加标准化的行级错误项。
"""

from dataclasses import dataclass
from typing import Any

from form_rules.params import RuleParams


@dataclass(frozen=True, slots=True)
class ValidationFailure:
    """A failed field/rule pair.
    失败的字段/规则对。

    Failures are recorded, never raised.
    失败只会被记录，不会被抛出。

    Attributes:
        field: Field path.
            字段路径。
        rule: Rule name.
            规则名。
        message: Rendered message.
            渲染后的消息。
        params: Rule parameters.
            规则参数。
    """

    field: str
    rule: str
    message: str
    params: RuleParams = RuleParams()


@dataclass(slots=True)
class ErrorCollector:
    """Collect row-level error items.
    收集行级错误项。
    """

    errors: list[dict[str, Any]]

    def add(
        self,
        *,
        row_number: int,
        field: str | None,
        message: str,
        value: Any | None = None,
        type: str | None = None,
        details: Any | None = None,
    ) -> None:
        """Add an error item.
        添加一个错误项。

        Args:
            row_number: Row number.
                行号。
            field: Field name (optional).
                字段名（可选，默认值为 None）。
            message: Error message.
                错误消息。
            value: Related value (optional).
                相关值（可选，默认值为 None）。
            type: Error type, usually the rule name (optional).
                错误类型，通常为规则名（可选，默认值为 None）。
            details: Extra details (optional).
                详细信息（可选，默认值为 None）。
        """
        item: dict[str, Any] = {"row_number": int(row_number), "field": field, "message": message}
        if value is not None:
            item["value"] = value
        if type is not None:
            item["type"] = type
        if details is not None:
            item["details"] = details
        self.errors.append(item)

    def add_failure(self, *, row_number: int, failure: ValidationFailure) -> None:
        """Add an error item from a validation failure.
        根据校验失败记录添加错误项。
        """
        self.add(row_number=row_number, field=failure.field, message=failure.message, type=failure.rule)
