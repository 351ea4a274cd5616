"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: messages.py
@DateTime: 2026-03-02
@Docs: Field labels and error message rendering.
字段标签与错误消息渲染。

A message template such as ``"{field} must be the same as '%s'"`` is rendered in
three passes:
消息模板（如 ``"{field} must be the same as '%s'"``）分三步渲染：

1. ``{field}`` becomes the field label, or the humanized field name.
   ``{field}`` 替换为字段标签，或人性化后的字段名。
2. ``{field1}``, ``{field2}``... become the label of the matching parameter when
   that parameter names a labelled field, else the parameter text.
   ``{field1}``、``{field2}``…… 在参数为已设置标签的字段名时替换为标签，否则替换为参数文本。
3. printf-style ``%s`` / ``%d`` / ``%1$s`` placeholders take the parameters in order.
   printf 风格的 ``%s`` / ``%d`` / ``%1$s`` 占位符按顺序填入参数。
"""

import re
from collections.abc import Iterable, Iterator, Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any

_FIELD_TAG_RE = re.compile(r"\{field(\d+)\}")
_PRINTF_RE = re.compile(r"%(?:(\d+)\$)?([sdf])|%%")
_PRIMITIVES = (str, int, float, Decimal, bool)


def humanize_field(field: str) -> str:
    """Turn a field identifier into a display name.
    将字段标识转换为显示名称。

    Examples:
        >>> humanize_field("first_name")
        'First Name'
        >>> humanize_field("dob")
        'Dob'
    """
    words = str(field).replace("_", " ").split(" ")
    return " ".join(w[:1].upper() + w[1:] for w in words)


class LabelRegistry:
    """Field identifier -> display label mapping.
    字段标识到显示标签的映射。
    """

    def __init__(self, labels: Mapping[str, str] | None = None) -> None:
        self._labels: dict[str, str] = dict(labels or {})

    def merge(self, labels: Mapping[str, str]) -> None:
        self._labels.update({str(k): str(v) for k, v in labels.items()})

    def set(self, field: str, label: str) -> None:
        self._labels[str(field)] = str(label)

    def get(self, field: Any) -> str | None:
        if not isinstance(field, (str, int)) or isinstance(field, bool):
            return None
        return self._labels.get(str(field))

    def as_dict(self) -> dict[str, str]:
        return dict(self._labels)

    def clear(self) -> None:
        self._labels.clear()

    def __contains__(self, field: object) -> bool:
        return self.get(field) is not None

    def __iter__(self) -> Iterator[str]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)


def _quote_list(items: Iterable[Any]) -> str:
    return "['" + "', '".join(str(i) for i in items) + "']"


class MessageRenderer:
    """Render message templates with labels and parameters.
    使用标签与参数渲染消息模板。

    Rendering is pure: it never changes labels or errors.
    渲染是纯函数：不会修改标签或错误。
    """

    def __init__(self, labels: LabelRegistry | None = None) -> None:
        self.labels = labels if labels is not None else LabelRegistry()

    def field_label(self, field: str) -> str:
        """Return the label of a field or its humanized name.
        返回字段标签或人性化后的字段名。
        """
        label = self.labels.get(field)
        return label if label is not None else humanize_field(field)

    def stringify(self, param: Any) -> str:
        """Turn one parameter into display text.
        将单个参数转换为显示文本。

        Args:
            param: Raw parameter value.
                原始参数值。

        Returns:
            str: Display text.
                显示文本。
        """
        label = self.labels.get(param)
        if label is not None:
            return label
        if param is None:
            return ""
        if isinstance(param, Mapping):
            return _quote_list(param.keys())
        if isinstance(param, (list, tuple, set, frozenset)):
            return _quote_list(param)
        if isinstance(param, date):
            return param.strftime("%Y-%m-%d")
        if isinstance(param, re.Pattern):
            return param.pattern
        if isinstance(param, type):
            return param.__name__
        if isinstance(param, _PRIMITIVES):
            return str(param)
        return type(param).__name__

    def render(self, field: str, template: str, params: Iterable[Any] = ()) -> str:
        """Render a message template.
        渲染消息模板。

        Args:
            field: Field identifier the message is about.
                消息对应的字段标识。
            template: Template with ``{field}``, ``{fieldN}`` and printf placeholders.
                含 ``{field}``、``{fieldN}`` 与 printf 占位符的模板。
            params: Rule parameters.
                规则参数。

        Returns:
            str: Rendered message.
                渲染后的消息。
        """
        raw = list(params)
        texts = [self.stringify(p) for p in raw]

        def _escape(text: str) -> str:
            return text.replace("%", "%%")

        def _field_tag(match: re.Match[str]) -> str:
            index = int(match.group(1)) - 1
            if 0 <= index < len(texts):
                return _escape(texts[index])
            return match.group(0)

        msg = template.replace("{field}", _escape(self.field_label(field)))
        msg = _FIELD_TAG_RE.sub(_field_tag, msg)

        position = 0

        def _printf(match: re.Match[str]) -> str:
            nonlocal position
            if match.group(0) == "%%":
                return "%"
            explicit, conversion = match.group(1), match.group(2)
            if explicit is not None:
                index = int(explicit) - 1
            else:
                index = position
                position += 1
            if not 0 <= index < len(raw):
                return ""
            return self._convert(raw[index], texts[index], conversion)

        return _PRINTF_RE.sub(_printf, msg)

    def _convert(self, value: Any, text: str, conversion: str) -> str:
        if conversion == "s" or self.labels.get(value) is not None:
            return text
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
            return text
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return text
        if not number.is_finite():
            return text
        if conversion == "d":
            return str(int(number))
        return f"{float(number):f}"
