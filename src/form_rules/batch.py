"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: batch.py
@DateTime: 2026-03-02
@Docs: Validate many records against one plan.
使用同一计划校验多条记录。
"""

from collections.abc import Mapping
from typing import Any

import structlog

from form_rules.config import ValidatorConfig, resolve_config
from form_rules.helpers.rows import iter_rows
from form_rules.locale import load_messages
from form_rules.plan import ValidationPlan
from form_rules.registry import RuleRegistry
from form_rules.validation_core import ErrorCollector
from form_rules.validator import Validator

logger = structlog.get_logger(__name__)


def validate_rows(
    rows: Any,
    plan: ValidationPlan,
    *,
    labels: Mapping[str, str] | None = None,
    registry: RuleRegistry | None = None,
    config: ValidatorConfig | None = None,
) -> list[dict[str, Any]]:
    """Validate rows and return row-level error items.
    校验多行数据并返回行级错误项。

    Args:
        rows: Polars DataFrame, iterable of mappings/pydantic models, or one mapping.
            Polars DataFrame、映射/pydantic 模型的可迭代对象或单个映射。
        plan: Plan applied to every row.
            应用到每一行的计划。
        labels: Field labels.
            字段标签。
        registry: Rule registry.
            规则注册表。
        config: Validator configuration.
            校验器配置。

    Returns:
        list[dict[str, Any]]: Items ``{"row_number", "field", "message", "type"}``.
            错误项 ``{"row_number", "field", "message", "type"}``。
        ``row_number`` comes from a ``row_number`` column when present, else
        the 1-based position.
            存在 ``row_number`` 列时取该列，否则为从 1 开始的位置。
    """
    cfg = config if config is not None else resolve_config()
    messages = load_messages(cfg.lang, cfg.lang_dir)
    errors: list[dict[str, Any]] = []
    collector = ErrorCollector(errors)
    count = 0
    for position, row in enumerate(iter_rows(rows), start=1):
        count += 1
        raw_number = row.get("row_number")
        row_number = int(raw_number) if raw_number is not None else position
        validator = Validator(row, registry=registry, config=cfg, plan=plan, labels=labels, messages=messages)
        validator.validate()
        for failure in validator.failures():
            collector.add_failure(row_number=row_number, failure=failure)
    logger.debug("batch_validation_finished", rows=count, errors=len(errors))
    return errors
