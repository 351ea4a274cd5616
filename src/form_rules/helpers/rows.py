"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: rows.py
@DateTime: 2026-03-02
@Docs: Helpers to turn input data into plain record dictionaries.
将输入数据转换为普通记录字典的辅助函数。
"""

import copy
from collections.abc import Iterable, Iterator, Mapping
from typing import Any

from pydantic import BaseModel


def as_record(data: Any) -> dict[str, Any]:
    """Convert one input record into an owned dictionary.
    将单条输入记录转换为独立持有的字典。

    Args:
        data: Mapping, pydantic model, or None.
            映射、pydantic 模型或 None。

    Returns:
        dict[str, Any]: Deep copy of the record.
            记录的深拷贝。

    Raises:
        TypeError: When data is not a mapping-like record.
            数据不是映射类记录时抛出。
    """
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, Mapping):
        return copy.deepcopy(dict(data))
    raise TypeError("record must be a mapping or pydantic model / 记录必须是映射或 pydantic 模型")


def iter_rows(data: Any) -> Iterator[dict[str, Any]]:
    """Iterate rows as dictionaries.
    以字典形式迭代行。

    Args:
        data: Polars DataFrame, iterable of mappings/pydantic models, or one mapping.
            Polars DataFrame、映射/pydantic 模型的可迭代对象或单个映射。
    """
    if _is_polars_df(data):
        yield from data.to_dicts()
        return
    if isinstance(data, (Mapping, BaseModel)):
        yield as_record(data)
        return
    if isinstance(data, (str, bytes)):
        raise TypeError("rows must be iterable mappings / 行数据必须是可迭代的映射")
    if isinstance(data, Iterable):
        for row in data:
            yield as_record(row)
        return
    raise TypeError("rows must be iterable mappings / 行数据必须是可迭代的映射")


def rows_to_dicts(data: Any) -> list[dict[str, Any]]:
    """Convert row data into a list of dictionaries.
    将行数据转换为字典列表。
    """
    return list(iter_rows(data))


def _is_polars_df(value: Any) -> bool:
    """Return True if the value is a Polars DataFrame.
    如果值是 Polars DataFrame 则返回 True。

    This helper avoids importing polars at module import time by importing
    lazily on demand.
    该助手通过按需延迟导入 polars 来避免在模块导入时立即导入该库。
    """
    try:
        import polars as pl  # type: ignore
    except Exception:
        return False
    return isinstance(value, pl.DataFrame)
