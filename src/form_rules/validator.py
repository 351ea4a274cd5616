"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validator.py
@DateTime: 2026-03-02
@Docs: Validator: plan building, rule execution and error collection.
校验器：构建计划、执行规则并收集错误。

Typical use / 典型用法:

        >>> v = Validator({"name": "", "items": [{"qty": 1}, {"qty": 0}]})
        >>> _ = v.rule("required", "name").with_label("Full name")
        >>> _ = v.rule("min", "items.*.qty", 1)
        >>> v.validate()
        False
        >>> v.errors()
        {'name': ['Full name is required'], 'items.*.qty': ['Items.*.qty must be greater than 1']}

Execution rules / 执行规则:
    - Bindings run in plan order; fields inside a binding keep their order.
      绑定按计划顺序执行；同一绑定内的字段保持顺序。
    - A field without content is skipped unless the rule is ``required`` or the
      field also carries a ``required`` rule.
      字段无内容时跳过，除非当前规则为 ``required`` 或该字段另有 ``required`` 规则。
    - A wildcard path passes only when every resolved value passes; one message
      is recorded per failing field/rule pair.
      通配路径只有在所有解析值都通过时才通过；每个失败的字段/规则对只记录一条消息。
"""

import copy
import functools
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import structlog

from form_rules.config import ValidatorConfig, resolve_config
from form_rules.exceptions import ConfigurationError, ValidationError
from form_rules.helpers.rows import as_record
from form_rules.locale import load_messages
from form_rules.messages import LabelRegistry, MessageRenderer
from form_rules.params import RuleParams
from form_rules.paths import is_absent, resolve_field
from form_rules.plan import RuleBinding, RuleHandle, ValidationPlan
from form_rules.registry import ERROR_DEFAULT, ResolvedRule, RuleRegistry, default_registry
from form_rules.rules import canonical_rule_name
from form_rules.typing import ErrorMap, Record
from form_rules.validation_core import ValidationFailure

logger = structlog.get_logger(__name__)

REQUIRED_RULE = "required"


class Validator:
    """Validate one record against a plan of field rules.
    按字段规则计划校验单条记录。

    Args:
        data: Record to validate (mapping or pydantic model); deep-copied.
            待校验记录（映射或 pydantic 模型），会被深拷贝。
        fields: Optional allow-list of top-level keys to keep.
            可选的顶层键白名单。
        lang: Message locale (overrides config).
            消息语言（覆盖配置）。
        lang_dir: Locale directory (overrides config).
            语言目录（覆盖配置）。
        registry: Rule registry (``default_registry`` when None).
            规则注册表（None 时使用 ``default_registry``）。
        config: Validator configuration (``resolve_config()`` when None).
            校验器配置（None 时使用 ``resolve_config()``）。
        plan: Existing plan to start from (copied).
            作为起点的已有计划（会被复制）。
        labels: Initial field labels.
            初始字段标签。
        messages: Preloaded message catalog (skips locale loading).
            预加载的消息目录（跳过语言文件加载）。

    Raises:
        ConfigurationError: When the locale catalog cannot be loaded.
            无法加载语言目录时抛出。
    """

    def __init__(
        self,
        data: Mapping[str, Any] | Any = None,
        fields: Iterable[str] | None = None,
        *,
        lang: str | None = None,
        lang_dir: str | Path | None = None,
        registry: RuleRegistry | None = None,
        config: ValidatorConfig | None = None,
        plan: ValidationPlan | None = None,
        labels: Mapping[str, str] | None = None,
        messages: Mapping[str, str] | None = None,
    ) -> None:
        cfg = config if config is not None else resolve_config()
        if lang is not None:
            cfg = replace(cfg, lang=lang)
        if lang_dir is not None:
            cfg = replace(cfg, lang_dir=Path(lang_dir))
        self._config = cfg
        self._registry = registry if registry is not None else default_registry
        self._messages = dict(messages) if messages is not None else load_messages(cfg.lang, cfg.lang_dir)

        record = as_record(data)
        if fields:
            allowed = {str(f) for f in fields}
            record = {k: v for k, v in record.items() if k in allowed}
        self._fields: Record = record

        self._plan = plan.copy() if plan is not None else ValidationPlan()
        self._labels = LabelRegistry(labels)
        self._renderer = MessageRenderer(self._labels)
        self._errors: ErrorMap = {}
        self._failures: list[ValidationFailure] = []

    # ------------------------------------------------------------------
    # Properties / 属性
    # ------------------------------------------------------------------

    @property
    def config(self) -> ValidatorConfig:
        return self._config

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    @property
    def plan(self) -> ValidationPlan:
        return self._plan

    @property
    def renderer(self) -> MessageRenderer:
        return self._renderer

    # ------------------------------------------------------------------
    # Rule registration / 规则注册
    # ------------------------------------------------------------------

    @classmethod
    def add_rule(cls, name: str, predicate: Callable[..., bool], message: str = ERROR_DEFAULT) -> None:
        """Register a rule in the process-wide default registry.
        在进程级默认注册表中注册规则。
        """
        default_registry.add_rule(name, predicate, message)

    def add_instance_rule(self, name: str, predicate: Callable[..., bool], message: str = ERROR_DEFAULT) -> "Validator":
        """Register a rule in this validator's registry.
        在当前校验器使用的注册表中注册规则。
        """
        self._registry.add_rule(name, predicate, message)
        return self

    # ------------------------------------------------------------------
    # Plan building / 构建计划
    # ------------------------------------------------------------------

    def message_template(self, name: str) -> str:
        """Return the default message of a rule (without ``{field}``).
        返回规则的默认消息（不含 ``{field}``）。

        Custom registry message first, then the locale catalog, then ``"Invalid"``.
        优先使用自定义注册消息，其次语言目录，最后为 ``"Invalid"``。
        """
        registered = self._registry.message_for(name)
        if registered is not None:
            return registered
        return self._messages.get(name) or self._messages.get(canonical_rule_name(name)) or ERROR_DEFAULT

    def rule(self, name: str, fields: str | Iterable[str], *params: Any) -> RuleHandle:
        """Add a rule binding to the plan.
        向计划添加一条规则绑定。

        Args:
            name: Rule name (custom or built-in).
                规则名（自定义或内置）。
            fields: One field path or several.
                单个或多个字段路径。
            *params: Rule parameters.
                规则参数。

        Returns:
            RuleHandle: Handle for ``with_message`` / ``with_label``.
                用于 ``with_message`` / ``with_label`` 的句柄。

        Raises:
            ConfigurationError: Unknown rule or bad parameters.
                规则未知或参数错误时抛出。
        """
        resolved = self._registry.resolve(name)
        rule_params = RuleParams.of(*params)
        if resolved.builtin is not None:
            resolved.builtin.validate_params(rule_params)

        field_list = (fields,) if isinstance(fields, str) else tuple(str(f) for f in fields)
        if not field_list:
            raise ConfigurationError(
                message=f"Rule '{name}' needs at least one field / 规则 '{name}' 至少需要一个字段",
                details={"rule": name},
            )
        binding = RuleBinding(
            rule=name,
            fields=field_list,
            params=rule_params,
            message="{field} " + self.message_template(name),
        )
        self._plan.add(binding)
        return RuleHandle(binding, self)

    def rules(self, bulk: Mapping[str, Any]) -> "Validator":
        """Add many rules from a mapping.
        从映射批量添加规则。

        Forms / 形式:
            ``{"required": "name"}``: one field.
            ``{"required": ["name", "email"]}``: one binding over both fields.
            ``{"lengthMax": ["name", 3]}``: leading strings are fields, the rest are params.
            ``{"length": [["name", 5], ["code", 2, 4]]}``: one binding per item, ``[fields, *params]``.

        Args:
            bulk: Mapping rule name -> applications.
                规则名到应用方式的映射。
        """
        for name, value in bulk.items():
            if isinstance(value, str):
                self.rule(name, value)
                continue
            items = list(value)
            if items and all(isinstance(i, (list, tuple)) for i in items):
                for application in items:
                    fields, *params = application
                    self.rule(name, fields, *params)
            elif items and isinstance(items[0], (list, tuple)):
                self.rule(name, items[0], *items[1:])
            else:
                split = next((i for i, item in enumerate(items) if not isinstance(item, str)), len(items))
                self.rule(name, items[:split], *items[split:])
        return self

    def message(self, message: str) -> "Validator":
        """Override the message of the most recently added rule.
        覆盖最近添加规则的消息。
        """
        self._plan.last().message = message
        return self

    def label(self, label: str) -> "Validator":
        """Label the first field of the most recently added rule.
        为最近添加规则的第一个字段设置标签。
        """
        self._labels.set(self._plan.last().fields[0], label)
        return self

    def labels(self, labels: Mapping[str, str]) -> "Validator":
        """Merge field labels.
        合并字段标签。
        """
        self._labels.merge(labels)
        return self

    def has_rule(self, name: str, field: str) -> bool:
        """Return True if rule ``name`` is bound to ``field``.
        规则 ``name`` 绑定到 ``field`` 时返回 True。
        """
        return self._plan.has_rule(name, field)

    # ------------------------------------------------------------------
    # Execution / 执行
    # ------------------------------------------------------------------

    def _bind(self, resolved: ResolvedRule) -> Callable[..., bool]:
        context = resolved.context
        if not context:
            return resolved.predicate
        available = {"data": self._fields, "prefixes": self._config.url_prefixes}
        return functools.partial(resolved.predicate, **{k: available[k] for k in context})

    def validate(self) -> bool:
        """Run the plan and collect errors.
        执行计划并收集错误。

        Errors from a previous run are cleared first unless
        ``config.accumulate_errors`` is set.
        除非设置了 ``config.accumulate_errors``，否则先清除上一次运行的错误。

        Returns:
            bool: True when no errors were recorded.
                未记录任何错误时返回 True。
        """
        if not self._config.accumulate_errors:
            self._errors = {}
            self._failures = []

        for binding in self._plan:
            predicate = self._bind(self._registry.resolve(binding.rule))
            is_required = canonical_rule_name(binding.rule) == REQUIRED_RULE
            for field in binding.fields:
                values, multiple = resolve_field(self._fields, field)
                absent = is_absent(values, multiple)
                if absent and not is_required and not self.has_rule(REQUIRED_RULE, field):
                    continue

                if not multiple:
                    values = [values]
                elif not values:
                    values = [None]

                if not all(predicate(field, value, binding.params) for value in values):
                    self._record_failure(field, binding)

        logger.debug(
            "validation_finished",
            rules=len(self._plan),
            failures=len(self._failures),
            fields=len(self._errors),
        )
        return len(self._errors) == 0

    def validate_or_raise(self) -> Record:
        """Validate and raise on failure.
        校验，失败时抛出异常。

        Returns:
            Record: The filtered record when valid.
                校验通过时返回过滤后的记录。

        Raises:
            ValidationError: With the error map in ``details``.
                ``details`` 中携带错误映射。
        """
        if not self.validate():
            raise ValidationError(message="Validation failed / 校验失败", details=self.errors())
        return self.data()

    def _record_failure(self, field: str, binding: RuleBinding) -> None:
        message = self.error(field, binding.message, binding.params)
        self._failures.append(ValidationFailure(field=field, rule=binding.rule, message=message, params=binding.params))

    def render_message(self, field: str, template: str, params: Iterable[Any] = ()) -> str:
        return self._renderer.render(field, template, params)

    def error(self, field: str, message: str, params: Iterable[Any] = ()) -> str:
        """Render and append an error message for a field.
        为字段渲染并追加一条错误消息。

        Returns:
            str: The rendered message.
                渲染后的消息。
        """
        rendered = self._renderer.render(field, message, params)
        self._errors.setdefault(field, []).append(rendered)
        return rendered

    # ------------------------------------------------------------------
    # Results / 结果
    # ------------------------------------------------------------------

    def errors(self, field: str | None = None) -> Any:
        """Return all errors, or the errors of one field.
        返回全部错误，或单个字段的错误。

        Returns:
            ErrorMap | list[str]: Copy of the error map, or the field's messages
            (empty list when the field has none).
                错误映射的副本，或字段的消息列表（无错误时为空列表）。
        """
        if field is not None:
            return list(self._errors.get(field, []))
        return {k: list(v) for k, v in self._errors.items()}

    def failures(self) -> list[ValidationFailure]:
        return list(self._failures)

    def data(self) -> Record:
        """Return a copy of the (filtered) record.
        返回（过滤后）记录的副本。
        """
        return copy.deepcopy(self._fields)

    def reset(self) -> None:
        """Clear fields, errors, plan and labels.
        清空字段、错误、计划与标签。
        """
        self._fields = {}
        self._errors = {}
        self._failures = []
        self._plan.clear()
        self._labels.clear()

    def export_rules(self, client_validator: str = "bootstrapvalidator", **options: Any) -> Any:
        """Export the plan for a client-side validator.
        为前端校验器导出计划。

        See ``form_rules.export.export_rules``.
        参见 ``form_rules.export.export_rules``。
        """
        from form_rules.export import export_rules

        return export_rules(self, client_validator, **options)
