"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_rules.py
@DateTime: 2026-03-02
@Docs: Tests for rules.py module (built-in predicates).
rules.py 模块测试（内置谓词）。
"""

import re
from datetime import date, datetime
from unittest.mock import patch

import pytest

from form_rules import rules
from form_rules.exceptions import ConfigurationError
from form_rules.params import RuleParams
from form_rules.rules import BUILTIN_RULES, canonical_rule_name, loose_equals, luhn_valid

NO_PARAMS = RuleParams()


def p(*values: object) -> RuleParams:
    return RuleParams.of(*values)


class TestRequired:
    """Tests for required.
    required 测试。
    """

    def test_blank_values_fail(self) -> None:
        assert rules.required("f", None, NO_PARAMS) is False
        assert rules.required("f", "", NO_PARAMS) is False
        assert rules.required("f", "  ", NO_PARAMS) is False

    def test_present_values_pass(self) -> None:
        assert rules.required("f", "x", NO_PARAMS) is True
        assert rules.required("f", 0, NO_PARAMS) is True
        assert rules.required("f", False, NO_PARAMS) is True


class TestEquality:
    """Tests for equals / different.
    equals / different 测试。
    """

    def test_equals(self) -> None:
        data = {"password": "s3cret", "confirm": "s3cret", "other": "nope"}
        assert rules.equals("password", "s3cret", p("confirm"), data=data) is True
        assert rules.equals("password", "s3cret", p("other"), data=data) is False

    def test_equals_missing_other_fails(self) -> None:
        assert rules.equals("password", "x", p("confirm"), data={"password": "x"}) is False

    def test_equals_nested_path(self) -> None:
        data = {"a": {"b": 5}}
        assert rules.equals("c", "5", p("a.b"), data=data) is True

    def test_different(self) -> None:
        data = {"old": "a", "new": "b"}
        assert rules.different("new", "b", p("old"), data=data) is True
        assert rules.different("new", "a", p("old"), data=data) is False
        assert rules.different("new", "a", p("missing"), data=data) is False

    def test_loose_equals(self) -> None:
        """Numeric strings compare by value / 数字字符串按数值比较。"""
        assert loose_equals("5", 5) is True
        assert loose_equals("5.0", 5) is True
        assert loose_equals("a", "b") is False


class TestTypeRules:
    """Tests for accepted, array, numeric, integer and boolean.
    accepted、array、numeric、integer 与 boolean 测试。
    """

    @pytest.mark.parametrize("value", ["yes", "on", 1, True])
    def test_accepted(self, value: object) -> None:
        assert rules.accepted("f", value, NO_PARAMS) is True

    @pytest.mark.parametrize("value", ["no", 0, False, "", None])
    def test_not_accepted(self, value: object) -> None:
        assert rules.accepted("f", value, NO_PARAMS) is False

    def test_array(self) -> None:
        assert rules.array("f", [1], NO_PARAMS) is True
        assert rules.array("f", {"a": 1}, NO_PARAMS) is True
        assert rules.array("f", "abc", NO_PARAMS) is False

    def test_numeric(self) -> None:
        assert rules.numeric("f", "12.5", NO_PARAMS) is True
        assert rules.numeric("f", 3, NO_PARAMS) is True
        assert rules.numeric("f", "1e3", NO_PARAMS) is True
        assert rules.numeric("f", "abc", NO_PARAMS) is False
        assert rules.numeric("f", True, NO_PARAMS) is False
        assert rules.numeric("f", float("nan"), NO_PARAMS) is False

    def test_integer(self) -> None:
        assert rules.integer("f", "42", NO_PARAMS) is True
        assert rules.integer("f", -7, NO_PARAMS) is True
        assert rules.integer("f", 4.0, NO_PARAMS) is True
        assert rules.integer("f", "4.2", NO_PARAMS) is False
        assert rules.integer("f", True, NO_PARAMS) is False

    def test_boolean(self) -> None:
        assert rules.boolean("f", True, NO_PARAMS) is True
        assert rules.boolean("f", "true", NO_PARAMS) is False


class TestLength:
    """Tests for length rules.
    长度规则测试。
    """

    def test_length_exact(self) -> None:
        assert rules.length("f", "abcd", p(4)) is True
        assert rules.length("f", "abc", p(4)) is False

    def test_length_two_params_is_range(self) -> None:
        assert rules.length("f", "abc", p(2, 4)) is True

    def test_length_between_inclusive(self) -> None:
        """Both ends are inclusive / 两端闭区间。"""
        assert rules.length_between("f", "abc", p(3, 5)) is True
        assert rules.length_between("f", "abcde", p(3, 5)) is True
        assert rules.length_between("f", "ab", p(3, 5)) is False
        assert rules.length_between("f", "abcdef", p(3, 5)) is False

    def test_length_min_max(self) -> None:
        assert rules.length_min("f", "abc", p(3)) is True
        assert rules.length_min("f", "ab", p(3)) is False
        assert rules.length_max("f", "abc", p(3)) is True
        assert rules.length_max("f", "abcd", p(3)) is False

    def test_numbers_use_their_text(self) -> None:
        assert rules.length("f", 12345, p(5)) is True

    def test_non_string_fails(self) -> None:
        assert rules.length_min("f", ["a", "b"], p(1)) is False


class TestMinMax:
    """Tests for min / max.
    min / max 测试。
    """

    def test_min_inclusive(self) -> None:
        assert rules.min_("f", 5, p(5)) is True
        assert rules.min_("f", "5", p(5)) is True
        assert rules.min_("f", 4.9, p(5)) is False

    def test_max_inclusive(self) -> None:
        assert rules.max_("f", 10, p(10)) is True
        assert rules.max_("f", 11, p(10)) is False

    def test_incomparable_fails(self) -> None:
        assert rules.min_("f", "abc", p(5)) is False


class TestChoices:
    """Tests for in, notIn and contains.
    in、notIn 与 contains 测试。
    """

    def test_in(self) -> None:
        assert rules.in_("f", "b", p(["a", "b"])) is True
        assert rules.in_("f", "c", p(["a", "b"])) is False

    def test_in_loose(self) -> None:
        assert rules.in_("f", "1", p([1, 2])) is True

    def test_in_mapping_uses_keys(self) -> None:
        assert rules.in_("f", "x", p({"x": "Ex", "y": "Why"})) is True
        assert rules.in_("f", "Ex", p({"x": "Ex"})) is False

    def test_not_in(self) -> None:
        assert rules.not_in("f", "c", p(["a", "b"])) is True
        assert rules.not_in("f", "a", p(["a", "b"])) is False

    def test_contains(self) -> None:
        assert rules.contains("f", "hello world", p("world")) is True
        assert rules.contains("f", "hello", p("world")) is False
        assert rules.contains("f", 123, p("2")) is False


class TestFormats:
    """Tests for ip, email, url, alpha, slug and regex.
    ip、email、url、alpha、slug 与 regex 测试。
    """

    def test_ip(self) -> None:
        assert rules.ip("f", "127.0.0.1", NO_PARAMS) is True
        assert rules.ip("f", "::1", NO_PARAMS) is True
        assert rules.ip("f", "999.1.1.1", NO_PARAMS) is False

    def test_email(self) -> None:
        assert rules.email("f", "alice@gmail.com", NO_PARAMS) is True
        assert rules.email("f", "not-an-email", NO_PARAMS) is False
        assert rules.email("f", 42, NO_PARAMS) is False

    def test_url(self) -> None:
        assert rules.url("f", "https://example.com/path?q=1", NO_PARAMS) is True
        assert rules.url("f", "ftp://files.example.org", NO_PARAMS) is True
        assert rules.url("f", "example.com", NO_PARAMS) is False

    def test_url_custom_prefixes(self) -> None:
        assert rules.url("f", "http://example.com", NO_PARAMS, prefixes=("https://",)) is False

    def test_url_active(self) -> None:
        """Host lookup decides the result / 主机解析结果决定校验结果。"""
        with patch("form_rules.rules.socket.getaddrinfo", return_value=[("info",)]) as lookup:
            assert rules.url_active("f", "https://example.com", NO_PARAMS) is True
            lookup.assert_called_once_with("example.com", None)
        with patch("form_rules.rules.socket.getaddrinfo", side_effect=OSError("no such host")):
            assert rules.url_active("f", "https://nope.invalid", NO_PARAMS) is False

    def test_url_active_rejects_non_url(self) -> None:
        with patch("form_rules.rules.socket.getaddrinfo") as lookup:
            assert rules.url_active("f", "not a url", NO_PARAMS) is False
            lookup.assert_not_called()

    def test_alpha_family(self) -> None:
        assert rules.alpha("f", "abcXYZ", NO_PARAMS) is True
        assert rules.alpha("f", "ab1", NO_PARAMS) is False
        assert rules.alpha_num("f", "ab12", NO_PARAMS) is True
        assert rules.alpha_num("f", "ab-12", NO_PARAMS) is False
        assert rules.slug("f", "my-slug_1", NO_PARAMS) is True
        assert rules.slug("f", "my slug", NO_PARAMS) is False

    def test_regex(self) -> None:
        assert rules.regex("f", "12345", p(r"^[0-9]+$")) is True
        assert rules.regex("f", "12a45", p(r"^[0-9]+$")) is False
        assert rules.regex("f", "ABC", p(re.compile("abc", re.IGNORECASE))) is True


class TestDates:
    """Tests for date rules.
    日期规则测试。
    """

    def test_date(self) -> None:
        assert rules.date_("f", "2024-01-31", NO_PARAMS) is True
        assert rules.date_("f", date(2024, 1, 31), NO_PARAMS) is True
        assert rules.date_("f", "not a date", NO_PARAMS) is False
        assert rules.date_("f", 12, NO_PARAMS) is False

    def test_date_format(self) -> None:
        assert rules.date_format("f", "2024-01-31", p("%Y-%m-%d")) is True
        assert rules.date_format("f", "31/01/2024", p("%Y-%m-%d")) is False

    def test_date_before_after(self) -> None:
        assert rules.date_before("f", "2024-01-01", p("2024-06-01")) is True
        assert rules.date_before("f", "2024-07-01", p(date(2024, 6, 1))) is False
        assert rules.date_after("f", datetime(2024, 7, 1, 12), p("2024-06-01")) is True
        assert rules.date_after("f", "garbage", p("2024-06-01")) is False


class TestCreditCard:
    """Tests for Luhn and creditCard.
    Luhn 与 creditCard 测试。
    """

    def test_luhn(self) -> None:
        assert luhn_valid("4111111111111111") is True
        assert luhn_valid("4111111111111112") is False
        assert luhn_valid("4111 1111 1111 1111") is True
        assert luhn_valid("0") is False

    def test_no_brand(self) -> None:
        assert rules.credit_card("f", "4111111111111111", NO_PARAMS) is True
        assert rules.credit_card("f", "4111111111111112", NO_PARAMS) is False
        assert rules.credit_card("f", 4111111111111111, NO_PARAMS) is True

    def test_brand_list(self) -> None:
        assert rules.credit_card("f", "4111111111111111", p(["visa", "amex"])) is True
        assert rules.credit_card("f", "4111111111111111", p(["mastercard"])) is False
        assert rules.credit_card("f", "378282246310005", p(["amex"])) is True

    def test_single_brand(self) -> None:
        assert rules.credit_card("f", "4111111111111111", p("visa")) is True
        assert rules.credit_card("f", "4111111111111111", p("amex")) is False

    def test_brand_with_allowed_list(self) -> None:
        """Chosen brand must be allowed / 选择的品牌必须在允许列表中。"""
        assert rules.credit_card("f", "4111111111111111", p("visa", ["visa", "amex"])) is True
        assert rules.credit_card("f", "4111111111111111", p("visa", ["amex"])) is False


class TestInstanceOf:
    """Tests for instanceOf.
    instanceOf 测试。
    """

    def test_by_type(self) -> None:
        assert rules.instance_of("f", datetime(2024, 1, 1), p(datetime)) is True
        assert rules.instance_of("f", "x", p(datetime)) is False

    def test_by_name(self) -> None:
        assert rules.instance_of("f", datetime(2024, 1, 1), p("datetime")) is True
        assert rules.instance_of("f", 5, p("str")) is False

    def test_by_example_object(self) -> None:
        assert rules.instance_of("f", date(2024, 1, 1), p(date(2000, 1, 1))) is True


class TestBuiltinTable:
    """Tests for BUILTIN_RULES parameter checks and names.
    BUILTIN_RULES 参数检查与名称测试。
    """

    def test_canonical_names(self) -> None:
        assert canonical_rule_name("length_between") == "lengthBetween"
        assert canonical_rule_name("LENGTHMIN") == "lengthMin"
        assert canonical_rule_name("required") == "required"
        assert canonical_rule_name("custom_thing") == "custom_thing"

    def test_arity_checked(self) -> None:
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["lengthBetween"].validate_params(p(1))
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["required"].validate_params(p(1))

    def test_kinds_checked(self) -> None:
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["in"].validate_params(p("a"))
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["lengthMin"].validate_params(p("many"))
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["regex"].validate_params(p("("))
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["dateBefore"].validate_params(p("garbage"))
        with pytest.raises(ConfigurationError):
            BUILTIN_RULES["equals"].validate_params(p(3))

    def test_valid_params_accepted(self) -> None:
        BUILTIN_RULES["in"].validate_params(p(["a"]))
        BUILTIN_RULES["length"].validate_params(p(1, 3))
        BUILTIN_RULES["creditCard"].validate_params(p("visa", ["visa"]))
        BUILTIN_RULES["dateAfter"].validate_params(p(date(2024, 1, 1)))
