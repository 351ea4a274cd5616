"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation.py
@DateTime: 2026-03-02
@Docs: DataFrame validation facade with optional backend.
DataFrame 校验门面（可选后端）。
"""

from collections.abc import Mapping
from typing import Any

from form_rules.config import ValidatorConfig
from form_rules.exceptions import FormRulesError
from form_rules.plan import ValidationPlan
from form_rules.registry import RuleRegistry


def _load_backend() -> Any:
    try:
        from form_rules import validation_polars

        return validation_polars
    except Exception as exc:  # pragma: no cover / 覆盖忽略
        raise FormRulesError(
            message="Missing optional dependencies for validation. Install extras: polars / 缺少校验可选依赖，请安装: polars",
            details={"error": str(exc)},
            error_code="missing_dependency",
        ) from exc


def validate_frame(
    df: Any,
    plan: ValidationPlan,
    *,
    labels: Mapping[str, str] | None = None,
    registry: RuleRegistry | None = None,
    config: ValidatorConfig | None = None,
) -> tuple[Any, list[dict[str, Any]]]:
    """
    Validate every row of a DataFrame.
    校验数据框的每一行。

    Args:
        df: Input Polars DataFrame.
        df: 输入数据框。
        plan: Plan applied to every row.
        plan: 应用到每一行的计划。

    Returns:
        tuple[Any, list[dict[str, Any]]]: (valid rows, error list).
        tuple[Any, list[dict[str, Any]]]: （有效行，错误列表）。
    """
    backend = _load_backend()
    return backend.validate_frame(df, plan, labels=labels, registry=registry, config=config)
