"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: params.py
@DateTime: 2026-03-02
@Docs: Tagged rule parameter list.
带类型标记的规则参数列表。

Rule parameters are stored as an ordered tuple of ``Param`` items, each tagged
with a ``ParamKind`` so built-in rules can check their arity and parameter
types when the plan is built.
规则参数以 ``Param`` 元组的形式按顺序保存，每一项带有 ``ParamKind`` 标记，
以便内置规则在构建计划时检查参数个数与类型。
"""

import re
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class ParamKind(Enum):
    """Kind of a rule parameter.
    规则参数类型。
    """

    SCALAR = "scalar"
    LIST = "list"
    MAPPING = "mapping"
    DATE = "date"
    TYPE = "type"
    OBJECT = "object"


_SCALAR_TYPES = (str, int, float, Decimal, bool, re.Pattern)


@dataclass(frozen=True, slots=True)
class Param:
    """A single tagged rule parameter.
    单个带类型标记的规则参数。

    Attributes:
        kind: Parameter kind.
            参数类型。
        value: Raw parameter value.
            原始参数值。
    """

    kind: ParamKind
    value: Any

    @classmethod
    def of(cls, value: Any) -> "Param":
        """Tag a raw value.
        为原始值打上类型标记。

        Args:
            value: Raw parameter value.
                原始参数值。

        Returns:
            Param: Tagged parameter.
                带标记的参数。
        """
        if isinstance(value, Param):
            return value
        if value is None or isinstance(value, _SCALAR_TYPES):
            return cls(ParamKind.SCALAR, value)
        if isinstance(value, date):
            return cls(ParamKind.DATE, value)
        if isinstance(value, type):
            return cls(ParamKind.TYPE, value)
        if isinstance(value, Mapping):
            return cls(ParamKind.MAPPING, value)
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls(ParamKind.LIST, value)
        return cls(ParamKind.OBJECT, value)


@dataclass(frozen=True, slots=True)
class RuleParams:
    """Ordered, immutable rule parameter list.
    有序且不可变的规则参数列表。

    Iteration and indexing yield raw values so predicates can read
    ``params[0]`` directly; ``param(i)`` yields the tagged item.
    迭代与下标访问返回原始值，谓词可直接读取 ``params[0]``；``param(i)`` 返回带标记的项。
    """

    items: tuple[Param, ...] = ()

    @classmethod
    def of(cls, *values: Any) -> "RuleParams":
        """Build a parameter list from raw values.
        从原始值构建参数列表。
        """
        return cls(tuple(Param.of(v) for v in values))

    @property
    def kinds(self) -> tuple[ParamKind, ...]:
        return tuple(p.kind for p in self.items)

    @property
    def values(self) -> tuple[Any, ...]:
        return tuple(p.value for p in self.items)

    def param(self, index: int) -> Param:
        return self.items[index]

    def get(self, index: int, default: Any = None) -> Any:
        """Return the raw value at index, or default when out of range.
        返回指定位置的原始值；越界时返回默认值。
        """
        if -len(self.items) <= index < len(self.items):
            return self.items[index].value
        return default

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Any]:
        return (p.value for p in self.items)

    def __getitem__(self, index: int) -> Any:
        return self.items[index].value

    def __bool__(self) -> bool:
        return bool(self.items)
