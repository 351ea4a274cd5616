"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: validation_polars.py
@DateTime: 2026-03-02
@Docs: Polars-backed DataFrame validation.
基于 Polars 的数据框校验。
"""

from collections.abc import Mapping
from typing import Any

import polars as pl

from form_rules.batch import validate_rows
from form_rules.config import ValidatorConfig
from form_rules.plan import ValidationPlan
from form_rules.registry import RuleRegistry

ROW_NUMBER = "row_number"


def validate_frame(
    df: pl.DataFrame,
    plan: ValidationPlan,
    *,
    labels: Mapping[str, str] | None = None,
    registry: RuleRegistry | None = None,
    config: ValidatorConfig | None = None,
) -> tuple[pl.DataFrame, list[dict[str, Any]]]:
    """
    Validate every row and drop the rows that failed.
    校验每一行并剔除失败的行。

    Args:
        df: Input DataFrame; a ``row_number`` column is added (1-based) when missing.
        df: 输入数据框；缺少 ``row_number`` 列时会自动添加（从 1 开始）。
        plan: Plan applied to every row.
        plan: 应用到每一行的计划。

    Returns:
        tuple[pl.DataFrame, list[dict[str, Any]]]: (valid rows, error list).
        tuple[pl.DataFrame, list[dict[str, Any]]]: （有效行，错误列表）。
    """
    if df.is_empty():
        return df, []
    if ROW_NUMBER not in df.columns:
        df = df.with_row_index(ROW_NUMBER, offset=1).with_columns(pl.col(ROW_NUMBER).cast(pl.Int64))
    errors = validate_rows(df, plan, labels=labels, registry=registry, config=config)
    failed = {int(e["row_number"]) for e in errors}
    if not failed:
        return df, errors
    valid = df.filter(~pl.col(ROW_NUMBER).is_in(list(failed)))
    return valid, errors
