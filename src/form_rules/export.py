"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: export.py
@DateTime: 2026-03-02
@Docs: Export a validation plan for client-side validators.
将校验计划导出给前端校验器。

Only BootstrapValidator is supported. Rules without a client counterpart
(``dateFormat``, ``dateBefore``, ``dateAfter``, ``instanceOf``, ``array``,
``boolean`` and custom rules) are omitted.
仅支持 BootstrapValidator。没有前端对应项的规则会被忽略。
"""

import json
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import structlog

from form_rules.exceptions import ExportError
from form_rules.params import RuleParams
from form_rules.rules import canonical_rule_name, int_bound

if TYPE_CHECKING:
    from form_rules.validator import Validator

logger = structlog.get_logger(__name__)

EXPORT_TYPES = ("json", "data")

_LENGTH_TEMPLATES = ("length", "lengthBetween", "lengthMin", "lengthMax")


def _pattern_text(value: Any) -> str:
    if isinstance(value, re.Pattern):
        return value.pattern
    return str(value)


def _alternatives(raw: Any) -> str:
    items = list(raw.keys()) if isinstance(raw, Mapping) else list(raw)
    return "|".join(re.escape(str(item)) for item in items)


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value).lower()


class BootstrapValidatorExporter:
    """Build BootstrapValidator options from a validator's plan.
    根据校验器的计划构建 BootstrapValidator 配置。

    Args:
        validator: Source validator.
            源校验器。
    """

    name = "bootstrapvalidator"

    def __init__(self, validator: "Validator") -> None:
        self.validator = validator

    def map_rule(self, rule: str, params: RuleParams) -> tuple[str, dict[str, Any]] | None:
        """Map one rule to ``(client_rule, options)``; None when unsupported.
        将单条规则映射为 ``(前端规则, 选项)``；不支持时返回 None。
        """
        first = params.get(0)
        match canonical_rule_name(rule):
            case "required":
                return "notEmpty", {}
            case "different":
                return "different", {"field": first}
            case "equals":
                return "identical", {"field": first}
            case "accepted":
                return "choice", {"min": 1}
            case "numeric":
                return "numeric", {}
            case "integer":
                return "integer", {}
            case "length":
                if len(params) > 1:
                    return "stringLength", {"min": int_bound(first), "max": int_bound(params[1])}
                return "stringLength", {"min": int_bound(first), "max": int_bound(first)}
            case "lengthBetween":
                return "stringLength", {"min": int_bound(first), "max": int_bound(params[1])}
            case "lengthMin":
                return "stringLength", {"min": int_bound(first)}
            case "lengthMax":
                return "stringLength", {"max": int_bound(first)}
            case "min":
                return "greaterThan", {"value": first, "inclusive": "true"}
            case "max":
                return "lessThan", {"value": first, "inclusive": "true"}
            case "in":
                return "regexp", {"regexp": f"^({_alternatives(first)})$"}
            case "notIn":
                return "regexp", {"regexp": f"^(?!({_alternatives(first)})$)"}
            case "ip":
                return "ip", {"ipv6": False}
            case "email":
                return "emailAddress", {}
            case "url" | "urlActive":
                return "uri", {}
            case "alpha":
                return "regexp", {"regexp": "^[a-zA-Z]*$"}
            case "alphaNum":
                return "regexp", {"regexp": "^[a-zA-Z0-9]*$"}
            case "slug":
                return "regexp", {"regexp": "^[a-zA-Z0-9\\-_]*$"}
            case "regex":
                return "regexp", {"regexp": _pattern_text(first)}
            case "contains":
                return "regexp", {"regexp": re.escape(str(first))}
            case "date":
                return "date", {}
            case "creditCard":
                return "creditCard", {}
        logger.debug("export_rule_skipped", rule=rule, client=self.name)
        return None

    def _length_message(self, field: str, low: Any, high: Any) -> str | None:
        length, between, at_least, at_most = _LENGTH_TEMPLATES
        if low is not None and high is not None:
            name, params = (length, (low,)) if low == high else (between, (low, high))
        elif low is not None:
            name, params = at_least, (low,)
        elif high is not None:
            name, params = at_most, (high,)
        else:
            return None
        template = "{field} " + self.validator.message_template(name)
        return self.validator.render_message(field, template, params)

    def _merge(self, field: str, client_rule: str, existing: dict[str, Any], options: dict[str, Any]) -> None:
        if "min" in options:
            existing["min"] = max(options["min"], existing["min"]) if "min" in existing else options["min"]
        if "max" in options:
            existing["max"] = min(options["max"], existing["max"]) if "max" in existing else options["max"]
        if client_rule != "stringLength":
            return
        message = self._length_message(field, existing.get("min"), existing.get("max"))
        if message is not None:
            existing["message"] = message

    def build(self) -> dict[str, dict[str, Any]]:
        """Return the options mapping ``{field: {"validators": {...}}}``.
        返回配置映射 ``{字段: {"validators": {...}}}``。

        A repeated client rule on one field is merged (largest ``min``,
        smallest ``max``). For ``stringLength`` the message is rebuilt from the
        length templates, so a custom message on the merged rule is not kept.
        同一字段重复的前端规则会被合并（取最大 ``min``、最小 ``max``）。
        ``stringLength`` 的消息由长度模板重新生成，因此合并规则的自定义消息不会保留。
        """
        validator = self.validator
        result: dict[str, dict[str, Any]] = {name: {"validators": {}} for name in validator.data()}

        for binding in validator.plan:
            for field in binding.fields:
                mapped = self.map_rule(binding.rule, binding.params)
                if mapped is None:
                    continue
                client_rule, options = mapped
                validators = result.setdefault(field, {"validators": {}})["validators"]
                if client_rule in validators:
                    self._merge(field, client_rule, validators[client_rule], options)
                else:
                    options["message"] = validator.render_message(field, binding.message, binding.params)
                    validators[client_rule] = options

                if client_rule in ("identical", "different"):
                    other = str(binding.params[0])
                    mirror_options = {
                        "field": field,
                        "message": validator.render_message(other, binding.message, (field,)),
                    }
                    result.setdefault(other, {"validators": {}})["validators"][client_rule] = mirror_options
        return result

    def to_data_attributes(self) -> dict[str, str]:
        """Return per-field ``data-bv-*`` attribute strings.
        返回每个字段的 ``data-bv-*`` 属性字符串。
        """
        attributes: dict[str, str] = {}
        for field, entry in self.build().items():
            parts: list[str] = []
            for client_rule, options in entry.get("validators", {}).items():
                rule_key = client_rule.lower()
                parts.append(f"data-bv-{rule_key}=true ")
                for key, value in options.items():
                    parts.append(f'data-bv-{rule_key}-{key.lower()}="{_attr_value(value)}" ')
            attributes[field] = "".join(parts)
        return attributes

    def export(self, export_type: str = "json", pretty_print: bool = False) -> str | dict[str, str]:
        """Export as a JSON string or as data attributes.
        导出为 JSON 字符串或 data 属性。

        Raises:
            ExportError: When ``export_type`` is not ``json`` or ``data``.
                ``export_type`` 不是 ``json`` 或 ``data`` 时抛出。
        """
        if export_type == "json":
            return json.dumps(self.build(), indent=4 if pretty_print else None, ensure_ascii=False, default=str)
        if export_type == "data":
            return self.to_data_attributes()
        logger.warning("export_type_unsupported", export_type=export_type)
        raise ExportError(
            message=f"Unsupported export type: {export_type} / 不支持的导出类型：{export_type}",
            details={"export_type": export_type, "supported": list(EXPORT_TYPES)},
        )


EXPORTERS: dict[str, type[BootstrapValidatorExporter]] = {
    BootstrapValidatorExporter.name: BootstrapValidatorExporter,
}


def export_rules(
    validator: "Validator",
    client_validator: str = "bootstrapvalidator",
    *,
    export_type: str = "json",
    pretty_print: bool = False,
) -> str | dict[str, str]:
    """Export a validator's plan for a client-side validator.
    为前端校验器导出校验器的计划。

    Args:
        validator: Source validator.
            源校验器。
        client_validator: Target name (only ``bootstrapvalidator``).
            目标名称（仅支持 ``bootstrapvalidator``）。
        export_type: ``json`` (string) or ``data`` (attribute strings per field).
            ``json``（字符串）或 ``data``（每个字段的属性字符串）。
        pretty_print: Indent the JSON output.
            缩进 JSON 输出。

    Raises:
        ExportError: Unsupported client validator or export type.
            前端校验器或导出类型不受支持时抛出。
    """
    exporter_cls = EXPORTERS.get(client_validator.lower())
    if exporter_cls is None:
        logger.warning("export_client_unsupported", client_validator=client_validator)
        raise ExportError(
            message=f"Unsupported client validator: {client_validator} / 不支持的前端校验器：{client_validator}",
            details={"client_validator": client_validator, "supported": sorted(EXPORTERS)},
        )
    return exporter_cls(validator).export(export_type, pretty_print)
