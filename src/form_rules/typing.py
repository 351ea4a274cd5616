"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: typing.py
@DateTime: 2026-03-02
@Docs: Shared protocols and types for form rules.
表单规则共享协议与类型。
"""

from typing import Any, Protocol

from form_rules.params import RuleParams

type Record = dict[str, Any]
type ErrorMap = dict[str, list[str]]


class RulePredicate(Protocol):
    """
    Rule predicate protocol.
    规则谓词协议。

    Args:
        field: Field path being validated.
        field: 正在校验的字段路径。
        value: One resolved value of the field.
        value: 字段解析出的单个值。
        params: Rule parameters.
        params: 规则参数。

    Returns:
        bool: True when the value passes.
        bool: 值通过校验时返回 True。
    """

    def __call__(self, field: str, value: Any, params: RuleParams) -> bool: ...
