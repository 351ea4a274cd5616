"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: rules.py
@DateTime: 2026-03-02
@Docs: Built-in rule predicates.
内置规则谓词。

Every predicate has the signature ``(field, value, params) -> bool`` and is
registered by name in ``BUILTIN_RULES``. Predicates only look at one value;
absent-value skipping and multi-value aggregation belong to the validator.
每个谓词签名为 ``(field, value, params) -> bool``，并以名称登记在 ``BUILTIN_RULES`` 中。
谓词只检查单个值；空值跳过与多值聚合由校验器负责。
"""

import ipaddress
import re
import socket
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from urllib.parse import urlsplit

from dateutil import parser as date_parser
from email_validator import EmailNotValidError, validate_email

from form_rules.config import DEFAULT_URL_PREFIXES
from form_rules.exceptions import ConfigurationError
from form_rules.params import ParamKind, RuleParams
from form_rules.paths import resolve_field

_NUMERIC_RE = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*$")
_INTEGER_RE = re.compile(r"^[+-]?(0|[1-9]\d*)$")
_ALPHA_RE = re.compile(r"^[a-z]+$", re.IGNORECASE)
_ALPHA_NUM_RE = re.compile(r"^[a-z0-9]+$", re.IGNORECASE)
_SLUG_RE = re.compile(r"^[-a-z0-9_]+$", re.IGNORECASE)
_HOST_RE = re.compile(r"^[a-z0-9]([a-z0-9-]*[a-z0-9])?(\.[a-z0-9]([a-z0-9-]*[a-z0-9])?)*$", re.IGNORECASE)

CARD_PATTERNS: dict[str, re.Pattern[str]] = {
    "visa": re.compile(r"^4[0-9]{12}(?:[0-9]{3})?$"),
    "mastercard": re.compile(r"^5[1-5][0-9]{14}$"),
    "amex": re.compile(r"^3[47][0-9]{13}$"),
    "dinersclub": re.compile(r"^3(?:0[0-5]|[68][0-9])[0-9]{11}$"),
    "discover": re.compile(r"^6(?:011|5[0-9]{2})[0-9]{12}$"),
}

ACCEPTED_STRINGS = frozenset({"yes", "on"})


# ---------------------------------------------------------------------------
# Value helpers / 值辅助函数
# ---------------------------------------------------------------------------


def _to_decimal(value: Any) -> Decimal | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = Decimal(str(value))
    elif isinstance(value, str) and _NUMERIC_RE.match(value):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            return None
    else:
        return None
    return None if number.is_nan() or number.is_infinite() else number


def loose_equals(left: Any, right: Any) -> bool:
    """Compare two values loosely.
    宽松比较两个值。

    Numbers and numeric strings compare by numeric value; everything else uses ``==``.
    数字与数字字符串按数值比较；其余情况使用 ``==``。
    """
    if left == right:
        return True
    a, b = _to_decimal(left), _to_decimal(right)
    if a is not None and b is not None:
        return a == b
    return False


def _string_length(value: Any) -> int | None:
    if isinstance(value, str):
        return len(value)
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return len(str(value))
    return None


def int_bound(value: Any) -> int:
    number = _to_decimal(value)
    return int(number) if number is not None else int(value)


def _to_datetime(value: Any) -> datetime | None:
    """Convert a date-like value to a naive datetime.
    将日期类值转换为不带时区的 datetime。
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None) if value.tzinfo else value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            parsed = date_parser.parse(value)
        except (ValueError, OverflowError):
            return None
        return parsed.replace(tzinfo=None) if parsed.tzinfo else parsed
    return None


def _matches(pattern: re.Pattern[str], value: Any) -> bool:
    if not isinstance(value, (str, int)) or isinstance(value, bool):
        return False
    return pattern.match(str(value)) is not None


def _url_host(value: Any, prefixes: tuple[str, ...]) -> str | None:
    if not isinstance(value, str):
        return None
    if not any(prefix in value for prefix in prefixes):
        return None
    parts = urlsplit(value.strip())
    if not parts.scheme or not parts.hostname:
        return None
    return parts.hostname


# ---------------------------------------------------------------------------
# Predicates / 谓词
# ---------------------------------------------------------------------------


def required(field: str, value: Any, params: RuleParams) -> bool:
    """Field must be present and not blank.
    字段必须存在且非空。
    """
    if value is None:
        return False
    if isinstance(value, str) and value.strip() == "":
        return False
    return True


def equals(field: str, value: Any, params: RuleParams, *, data: Any = None) -> bool:
    """Field must loosely equal another field of the record.
    字段必须与记录中另一字段宽松相等。
    """
    other, _ = resolve_field(data, str(params[0]))
    return other is not None and loose_equals(value, other)


def different(field: str, value: Any, params: RuleParams, *, data: Any = None) -> bool:
    """Field must differ from another field of the record.
    字段必须与记录中另一字段不同。
    """
    other, _ = resolve_field(data, str(params[0]))
    return other is not None and not loose_equals(value, other)


def accepted(field: str, value: Any, params: RuleParams) -> bool:
    """Field must be one of ``"yes"``, ``"on"``, ``1`` or ``True``.
    字段必须为 ``"yes"``、``"on"``、``1`` 或 ``True`` 之一。
    """
    if not required(field, value, params):
        return False
    if value is True:
        return True
    if type(value) is int and value == 1:
        return True
    return isinstance(value, str) and value in ACCEPTED_STRINGS


def array(field: str, value: Any, params: RuleParams) -> bool:
    return isinstance(value, (list, tuple, Mapping))


def numeric(field: str, value: Any, params: RuleParams) -> bool:
    return _to_decimal(value) is not None


def integer(field: str, value: Any, params: RuleParams) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, float):
        return value.is_integer()
    if isinstance(value, str):
        return _INTEGER_RE.match(value.strip()) is not None
    return False


def length(field: str, value: Any, params: RuleParams) -> bool:
    """Exact length, or inclusive range when two params are given.
    精确长度；给出两个参数时为闭区间范围。
    """
    if len(params) > 1:
        return length_between(field, value, params)
    size = _string_length(value)
    return size is not None and size == int_bound(params[0])


def length_between(field: str, value: Any, params: RuleParams) -> bool:
    size = _string_length(value)
    return size is not None and int_bound(params[0]) <= size <= int_bound(params[1])


def length_min(field: str, value: Any, params: RuleParams) -> bool:
    size = _string_length(value)
    return size is not None and size >= int_bound(params[0])


def length_max(field: str, value: Any, params: RuleParams) -> bool:
    size = _string_length(value)
    return size is not None and size <= int_bound(params[0])


def _compare(value: Any, bound: Any) -> int | None:
    """Compare value with bound: -1, 0, 1, or None when incomparable.
    比较值与边界：-1、0、1；无法比较时返回 None。
    """
    a, b = _to_decimal(value), _to_decimal(bound)
    if a is not None and b is not None:
        return (a > b) - (a < b)
    try:
        return (value > bound) - (value < bound)
    except TypeError:
        return None


def min_(field: str, value: Any, params: RuleParams) -> bool:
    result = _compare(value, params[0])
    return result is not None and result >= 0


def max_(field: str, value: Any, params: RuleParams) -> bool:
    result = _compare(value, params[0])
    return result is not None and result <= 0


def _choices(raw: Any) -> list[Any]:
    if isinstance(raw, Mapping):
        return list(raw.keys())
    return list(raw)


def in_(field: str, value: Any, params: RuleParams) -> bool:
    """Value must be one of the given choices (mapping params use keys).
    值必须为给定选项之一（映射参数取其键）。
    """
    return any(loose_equals(value, choice) for choice in _choices(params[0]))


def not_in(field: str, value: Any, params: RuleParams) -> bool:
    return not in_(field, value, params)


def contains(field: str, value: Any, params: RuleParams) -> bool:
    needle = params.get(0)
    if not isinstance(needle, str) or not isinstance(value, str):
        return False
    return needle in value


def ip(field: str, value: Any, params: RuleParams) -> bool:
    if not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def email(field: str, value: Any, params: RuleParams) -> bool:
    if not isinstance(value, str):
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def url(field: str, value: Any, params: RuleParams, *, prefixes: tuple[str, ...] = DEFAULT_URL_PREFIXES) -> bool:
    host = _url_host(value, prefixes)
    return host is not None and _HOST_RE.match(host) is not None


def url_active(field: str, value: Any, params: RuleParams, *, prefixes: tuple[str, ...] = DEFAULT_URL_PREFIXES) -> bool:
    """URL host must resolve in DNS (blocking lookup).
    URL 主机必须能通过 DNS 解析（阻塞查询）。
    """
    host = _url_host(value, prefixes)
    if host is None:
        return False
    try:
        socket.getaddrinfo(host, None)
    except (OSError, UnicodeError):
        return False
    return True


def alpha(field: str, value: Any, params: RuleParams) -> bool:
    return _matches(_ALPHA_RE, value)


def alpha_num(field: str, value: Any, params: RuleParams) -> bool:
    return _matches(_ALPHA_NUM_RE, value)


def slug(field: str, value: Any, params: RuleParams) -> bool:
    return _matches(_SLUG_RE, value)


def regex(field: str, value: Any, params: RuleParams) -> bool:
    if not isinstance(value, (str, int, float)) or isinstance(value, bool):
        return False
    pattern = params[0]
    if not isinstance(pattern, re.Pattern):
        pattern = re.compile(pattern)
    return pattern.search(str(value)) is not None


def date_(field: str, value: Any, params: RuleParams) -> bool:
    return _to_datetime(value) is not None


def date_format(field: str, value: Any, params: RuleParams) -> bool:
    """Value must parse with the given ``strptime`` format.
    值必须能按给定的 ``strptime`` 格式解析。
    """
    if not isinstance(value, str):
        return False
    try:
        datetime.strptime(value, str(params[0]))
    except ValueError:
        return False
    return True


def date_before(field: str, value: Any, params: RuleParams) -> bool:
    vtime, ptime = _to_datetime(value), _to_datetime(params[0])
    return vtime is not None and ptime is not None and vtime < ptime


def date_after(field: str, value: Any, params: RuleParams) -> bool:
    vtime, ptime = _to_datetime(value), _to_datetime(params[0])
    return vtime is not None and ptime is not None and vtime > ptime


def boolean(field: str, value: Any, params: RuleParams) -> bool:
    return isinstance(value, bool)


def luhn_valid(number: str) -> bool:
    """Check a card number with the Luhn checksum (at least 13 digits).
    使用 Luhn 校验和检查卡号（至少 13 位）。
    """
    digits = re.sub(r"[^0-9]+", "", number)
    if len(digits) < 13:
        return False
    total = 0
    for i, ch in enumerate(reversed(digits)):
        digit = int(ch)
        if i % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total > 0 and total % 10 == 0


def credit_card(field: str, value: Any, params: RuleParams) -> bool:
    """Luhn-valid card number, optionally restricted to card brands.
    Luhn 校验通过的卡号，可选限定卡品牌。

    Params forms / 参数形式:
        ``()``, ``([brands],)``, ``("brand",)``, ``("brand", [brands])``
    """
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        return False
    number = str(value)
    brands: list[str] | None = None
    first = params.get(0)
    if isinstance(first, (list, tuple, set, frozenset)):
        brands = [str(b) for b in first]
    elif isinstance(first, str):
        allowed = params.get(1)
        if isinstance(allowed, (list, tuple, set, frozenset)) and first not in allowed:
            return False
        brands = [first]

    if not luhn_valid(number):
        return False
    if brands is None:
        return True
    digits = re.sub(r"[^0-9]+", "", number)
    return any(brand in CARD_PATTERNS and CARD_PATTERNS[brand].match(digits) for brand in brands)


def instance_of(field: str, value: Any, params: RuleParams) -> bool:
    """Value must be an instance of the class named or given by the param.
    值必须是参数给出或命名的类的实例。
    """
    target = params[0]
    if isinstance(target, type):
        return isinstance(value, target)
    if isinstance(target, str):
        cls = type(value)
        return target in (cls.__name__, cls.__qualname__, f"{cls.__module__}.{cls.__qualname__}")
    return isinstance(value, type(target))


# ---------------------------------------------------------------------------
# Built-in table / 内置规则表
# ---------------------------------------------------------------------------


def _check_list_param(rule: str, params: RuleParams) -> None:
    if params.param(0).kind not in (ParamKind.LIST, ParamKind.MAPPING):
        raise ConfigurationError(
            message=f"Rule '{rule}' expects a list of choices / 规则 '{rule}' 需要选项列表",
            details={"rule": rule, "kinds": [k.value for k in params.kinds]},
        )


def _check_field_param(rule: str, params: RuleParams) -> None:
    if not isinstance(params[0], str):
        raise ConfigurationError(
            message=f"Rule '{rule}' expects another field name / 规则 '{rule}' 需要另一个字段名",
            details={"rule": rule},
        )


def _check_int_params(rule: str, params: RuleParams) -> None:
    for v in params:
        if isinstance(v, bool) or _to_decimal(v) is None:
            raise ConfigurationError(
                message=f"Rule '{rule}' expects numeric bounds / 规则 '{rule}' 需要数值边界",
                details={"rule": rule, "params": list(params)},
            )


def _check_regex_param(rule: str, params: RuleParams) -> None:
    pattern = params[0]
    if isinstance(pattern, re.Pattern):
        return
    try:
        re.compile(str(pattern))
    except re.error as exc:
        raise ConfigurationError(
            message=f"Invalid regex for rule '{rule}': {exc} / 规则 '{rule}' 的正则无效：{exc}",
            details={"rule": rule, "pattern": str(pattern)},
        ) from exc


def _check_date_param(rule: str, params: RuleParams) -> None:
    if _to_datetime(params[0]) is None:
        raise ConfigurationError(
            message=f"Rule '{rule}' expects a date / 规则 '{rule}' 需要日期参数",
            details={"rule": rule},
        )


@dataclass(frozen=True, slots=True)
class BuiltinRule:
    """A built-in rule table entry.
    内置规则表项。

    Attributes:
        name: Canonical rule name.
            规范规则名。
        predicate: Predicate callable.
            谓词函数。
        min_params: Minimum parameter count.
            最少参数个数。
        max_params: Maximum parameter count (None for unbounded).
            最多参数个数（None 表示不限）。
        context: Keyword arguments the validator binds (``data``: the record, ``prefixes``: URL prefixes).
            由校验器绑定的关键字参数（``data``：记录，``prefixes``：URL 前缀）。
        check: Optional parameter checker raising ConfigurationError.
            可选参数检查器，出错时抛出 ConfigurationError。
    """

    name: str
    predicate: Callable[..., bool]
    min_params: int = 0
    max_params: int | None = 0
    context: tuple[str, ...] = ()
    check: Callable[[str, RuleParams], None] | None = None

    def validate_params(self, params: RuleParams) -> None:
        """Check parameter arity and kinds.
        检查参数个数与类型。

        Raises:
            ConfigurationError: When the parameters do not fit the rule.
                参数不符合规则要求时抛出。
        """
        count = len(params)
        if count < self.min_params or (self.max_params is not None and count > self.max_params):
            expected = str(self.min_params) if self.min_params == self.max_params else f"{self.min_params}..{self.max_params}"
            raise ConfigurationError(
                message=(
                    f"Rule '{self.name}' expects {expected} params, got {count}"
                    f" / 规则 '{self.name}' 需要 {expected} 个参数，实际 {count} 个"
                ),
                details={"rule": self.name, "count": count},
            )
        if self.check is not None and count:
            self.check(self.name, params)


BUILTIN_RULES: dict[str, BuiltinRule] = {
    r.name: r
    for r in (
        BuiltinRule("required", required),
        BuiltinRule("equals", equals, 1, 1, context=("data",), check=_check_field_param),
        BuiltinRule("different", different, 1, 1, context=("data",), check=_check_field_param),
        BuiltinRule("accepted", accepted),
        BuiltinRule("array", array),
        BuiltinRule("numeric", numeric),
        BuiltinRule("integer", integer),
        BuiltinRule("length", length, 1, 2, check=_check_int_params),
        BuiltinRule("lengthBetween", length_between, 2, 2, check=_check_int_params),
        BuiltinRule("lengthMin", length_min, 1, 1, check=_check_int_params),
        BuiltinRule("lengthMax", length_max, 1, 1, check=_check_int_params),
        BuiltinRule("min", min_, 1, 1),
        BuiltinRule("max", max_, 1, 1),
        BuiltinRule("in", in_, 1, 1, check=_check_list_param),
        BuiltinRule("notIn", not_in, 1, 1, check=_check_list_param),
        BuiltinRule("contains", contains, 1, 1),
        BuiltinRule("ip", ip),
        BuiltinRule("email", email),
        BuiltinRule("url", url, context=("prefixes",)),
        BuiltinRule("urlActive", url_active, context=("prefixes",)),
        BuiltinRule("alpha", alpha),
        BuiltinRule("alphaNum", alpha_num),
        BuiltinRule("slug", slug),
        BuiltinRule("regex", regex, 1, 1, check=_check_regex_param),
        BuiltinRule("date", date_),
        BuiltinRule("dateFormat", date_format, 1, 1),
        BuiltinRule("dateBefore", date_before, 1, 1, check=_check_date_param),
        BuiltinRule("dateAfter", date_after, 1, 1, check=_check_date_param),
        BuiltinRule("boolean", boolean),
        BuiltinRule("creditCard", credit_card, 0, 2),
        BuiltinRule("instanceOf", instance_of, 1, 1),
    )
}

_BUILTIN_BY_LOWER = {name.lower(): name for name in BUILTIN_RULES}


def canonical_rule_name(name: str) -> str:
    """Map a rule name (camelCase or snake_case) to its built-in spelling.
    将规则名（驼峰或下划线风格）映射为内置拼写。

    Unknown names are returned unchanged.
    未知名称原样返回。

    Examples:
        >>> canonical_rule_name("length_between")
        'lengthBetween'
        >>> canonical_rule_name("LengthMin")
        'lengthMin'
    """
    if name in BUILTIN_RULES:
        return name
    return _BUILTIN_BY_LOWER.get(name.replace("_", "").lower(), name)
