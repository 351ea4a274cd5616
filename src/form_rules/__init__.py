"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: __init__.py
@DateTime: 2026-03-02
@Docs: Package exports for form_rules.
form_rules 包导出定义。
"""

from form_rules.batch import validate_rows
from form_rules.config import ValidatorConfig, resolve_config
from form_rules.exceptions import ConfigurationError, ExportError, FormRulesError, ValidationError
from form_rules.export import BootstrapValidatorExporter, export_rules
from form_rules.locale import available_locales, load_messages
from form_rules.messages import LabelRegistry, MessageRenderer, humanize_field
from form_rules.params import Param, ParamKind, RuleParams
from form_rules.paths import is_absent, resolve_field, resolve_path, split_path
from form_rules.plan import RuleBinding, RuleHandle, ValidationPlan
from form_rules.registry import RuleEntry, RuleRegistry, default_registry
from form_rules.rules import BUILTIN_RULES, BuiltinRule, canonical_rule_name
from form_rules.typing import ErrorMap, Record, RulePredicate
from form_rules.validation_core import ErrorCollector, ValidationFailure
from form_rules.validator import Validator

__all__ = [
    "Validator",
    "ValidationPlan",
    "RuleBinding",
    "RuleHandle",
    "RuleRegistry",
    "RuleEntry",
    "default_registry",
    "BuiltinRule",
    "BUILTIN_RULES",
    "canonical_rule_name",
    "Param",
    "ParamKind",
    "RuleParams",
    "LabelRegistry",
    "MessageRenderer",
    "humanize_field",
    "split_path",
    "resolve_path",
    "resolve_field",
    "is_absent",
    "load_messages",
    "available_locales",
    "ValidationFailure",
    "ErrorCollector",
    "validate_rows",
    "BootstrapValidatorExporter",
    "export_rules",
    "ValidatorConfig",
    "resolve_config",
    "FormRulesError",
    "ConfigurationError",
    "ValidationError",
    "ExportError",
    "ErrorMap",
    "Record",
    "RulePredicate",
]
