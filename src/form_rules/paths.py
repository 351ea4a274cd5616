"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: paths.py
@DateTime: 2026-03-02
@Docs: Dotted field path resolution with wildcard segments.
带通配段的点分字段路径解析。

A field path such as ``items.*.qty`` is split on ``.``; a ``*`` segment means
"every element at this position". Resolution is purely structural: a missing
key resolves to ``(None, False)`` and is never an error.
``items.*.qty`` 这样的字段路径按 ``.`` 拆分；``*`` 段表示“该位置的每个元素”。
解析只看结构：缺失的键解析为 ``(None, False)``，从不视为错误。

Examples:
        >>> resolve_path({"items": [{"qty": 1}, {"qty": 0}]}, split_path("items.*.qty"))
        ([1, 0], True)
        >>> resolve_path({"a": {"b": 2}}, ["a", "b"])
        (2, False)
        >>> resolve_path({"a": 1}, ["missing"])
        (None, False)
"""

from collections.abc import Mapping, Sequence
from typing import Any

WILDCARD = "*"


def split_path(field: str) -> list[str]:
    """Split a dotted field path into segments.
    将点分字段路径拆分为路径段。

    Args:
        field: Dotted field path.
            点分字段路径。

    Returns:
        list[str]: Path segments.
            路径段列表。
    """
    return str(field).split(".")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _lookup(data: Any, key: str) -> tuple[Any, bool]:
    """Look up one concrete key.
    查找单个具体键。

    Returns:
        tuple[Any, bool]: ``(value, found)``; a key holding None counts as not found.
            ``(值, 是否找到)``；值为 None 的键视为未找到。
    """
    if isinstance(data, Mapping):
        if key in data:
            value = data[key]
        elif key.lstrip("-").isdigit() and int(key) in data:
            value = data[int(key)]
        else:
            return None, False
        return value, value is not None
    if _is_sequence(data) and key.isdigit():
        index = int(key)
        if index < len(data):
            value = data[index]
            return value, value is not None
    return None, False


def _iter_elements(data: Any) -> list[Any]:
    if isinstance(data, Mapping):
        return list(data.values())
    if _is_sequence(data):
        return list(data)
    return []


def resolve_path(data: Any, segments: Sequence[str]) -> tuple[Any, bool]:
    """Resolve path segments against a nested record.
    在嵌套记录上解析路径段。

    Args:
        data: Record (or sub-record) to read from.
            要读取的记录（或子记录）。
        segments: Remaining path segments.
            剩余路径段。

    Returns:
        tuple[Any, bool]: ``(value, multiple)``. When any traversed segment is a
        wildcard, value is a flat list of every matched value and multiple is True.
            ``(值, 是否多值)``。经过通配段时，值为所有匹配值的扁平列表，且多值标记为 True。
    """
    if not segments:
        return data, False

    head, rest = segments[0], segments[1:]

    if head == WILDCARD:
        values: list[Any] = []
        for element in _iter_elements(data):
            value, multiple = resolve_path(element, rest)
            if multiple:
                values.extend(value)
            else:
                values.append(value)
        return values, True

    value, found = _lookup(data, head)
    if not found:
        return None, False
    if not rest:
        return value, False
    return resolve_path(value, rest)


def resolve_field(data: Any, field: str) -> tuple[Any, bool]:
    """Resolve a dotted field path.
    解析点分字段路径。
    """
    return resolve_path(data, split_path(field))


def is_absent(value: Any, multiple: bool) -> bool:
    """Return True when a resolved value counts as "no content".
    解析值被视为“无内容”时返回 True。

    Absent means None, a string that is empty after trimming, or an empty
    multi-value collection.
    无内容指 None、去除空白后为空的字符串，或空的多值集合。
    """
    if value is None:
        return True
    if isinstance(value, str) and value.strip() == "":
        return True
    if multiple and len(value) == 0:
        return True
    return False
