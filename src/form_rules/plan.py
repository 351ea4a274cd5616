"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: plan.py
@DateTime: 2026-03-02
@Docs: Validation plan: ordered rule bindings and the builder handle.
校验计划：有序的规则绑定与构建句柄。
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from form_rules.exceptions import ConfigurationError
from form_rules.params import RuleParams
from form_rules.rules import canonical_rule_name

if TYPE_CHECKING:
    from form_rules.validator import Validator


@dataclass(slots=True)
class RuleBinding:
    """One rule applied to one or more fields.
    一条规则应用到一个或多个字段。

    Attributes:
        rule: Rule name.
            规则名。
        fields: Field paths, order preserved.
            字段路径（保持顺序）。
        params: Rule parameters.
            规则参数。
        message: Message template.
            消息模板。
    """

    rule: str
    fields: tuple[str, ...]
    params: RuleParams = field(default_factory=RuleParams)
    message: str = "{field} Invalid"


class ValidationPlan:
    """Ordered, append-only list of rule bindings.
    有序且只追加的规则绑定列表。
    """

    def __init__(self, bindings: list[RuleBinding] | None = None) -> None:
        self._bindings: list[RuleBinding] = list(bindings or [])

    @property
    def bindings(self) -> tuple[RuleBinding, ...]:
        return tuple(self._bindings)

    def add(self, binding: RuleBinding) -> RuleBinding:
        self._bindings.append(binding)
        return binding

    def last(self) -> RuleBinding:
        """Return the most recently added binding.
        返回最近添加的绑定。

        Raises:
            ConfigurationError: When the plan is empty.
                计划为空时抛出。
        """
        if not self._bindings:
            raise ConfigurationError(
                message="No rule has been added yet. / 尚未添加任何规则。",
                error_code="empty_plan",
            )
        return self._bindings[-1]

    def has_rule(self, name: str, field: str) -> bool:
        """Return True if rule ``name`` is bound to exactly ``field``.
        规则 ``name`` 绑定到字段 ``field`` 时返回 True。

        Names are compared in canonical form, so ``length_min`` matches ``lengthMin``.
        名称按规范形式比较，因此 ``length_min`` 与 ``lengthMin`` 相同。
        """
        target = canonical_rule_name(name)
        return any(canonical_rule_name(b.rule) == target and field in b.fields for b in self._bindings)

    def fields(self) -> list[str]:
        """Every bound field, in first-seen order.
        所有已绑定字段（按首次出现顺序）。
        """
        seen: dict[str, None] = {}
        for b in self._bindings:
            for f in b.fields:
                seen.setdefault(f, None)
        return list(seen)

    def copy(self) -> "ValidationPlan":
        return ValidationPlan(
            [RuleBinding(b.rule, b.fields, b.params, b.message) for b in self._bindings]
        )

    def clear(self) -> None:
        self._bindings.clear()

    def __iter__(self) -> Iterator[RuleBinding]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)


class RuleHandle:
    """Builder handle targeting one binding.
    指向单个绑定的构建句柄。

    Returned by ``Validator.rule`` so message and label overrides name their
    target explicitly instead of relying on "the last rule added".
    由 ``Validator.rule`` 返回，使消息与标签的覆盖显式指向目标绑定，而非依赖“最后添加的规则”。

    Examples:
        >>> v.rule("required", "dob").with_label("Date of Birth").with_message("{field} please")
    """

    def __init__(self, binding: RuleBinding, validator: "Validator") -> None:
        self.binding = binding
        self._validator = validator

    def with_message(self, message: str) -> "RuleHandle":
        """Override the message template of this binding.
        覆盖该绑定的消息模板。
        """
        self.binding.message = message
        return self

    def with_label(self, label: str) -> "RuleHandle":
        """Label the first field of this binding.
        为该绑定的第一个字段设置标签。
        """
        self._validator.labels({self.binding.fields[0]: label})
        return self

    message = with_message
    label = with_label

    def rule(self, name: str, fields: str | list[str] | tuple[str, ...], *params: Any) -> "RuleHandle":
        """Add another rule to the same validator.
        向同一校验器继续添加规则。
        """
        return self._validator.rule(name, fields, *params)

    def __repr__(self) -> str:
        return f"RuleHandle(rule={self.binding.rule!r}, fields={self.binding.fields!r})"
