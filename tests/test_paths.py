"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_paths.py
@DateTime: 2026-03-02
@Docs: Tests for paths.py module.
paths.py 模块测试。
"""

from form_rules.paths import is_absent, resolve_field, resolve_path, split_path


class TestSplitPath:
    """Tests for split_path.
    split_path 测试。
    """

    def test_dotted(self) -> None:
        assert split_path("a.b.c") == ["a", "b", "c"]

    def test_single(self) -> None:
        assert split_path("name") == ["name"]


class TestResolveField:
    """Tests for resolve_field / resolve_path.
    resolve_field / resolve_path 测试。
    """

    def test_top_level(self) -> None:
        assert resolve_field({"name": "alice"}, "name") == ("alice", False)

    def test_nested(self) -> None:
        assert resolve_field({"a": {"b": 1}}, "a.b") == (1, False)

    def test_missing(self) -> None:
        """Missing key resolves to (None, False) / 缺失键解析为 (None, False)。"""
        assert resolve_field({"a": 1}, "missing") == (None, False)
        assert resolve_field({"a": 1}, "a.b") == (None, False)

    def test_none_value_counts_as_missing(self) -> None:
        assert resolve_field({"a": None}, "a") == (None, False)

    def test_list_index(self) -> None:
        """Digit segment indexes a list / 数字段可索引列表。"""
        data = {"items": [{"qty": 1}, {"qty": 0}]}
        assert resolve_field(data, "items.1.qty") == (0, False)
        assert resolve_field(data, "items.5.qty") == (None, False)

    def test_int_mapping_key(self) -> None:
        assert resolve_field({"a": {1: "x"}}, "a.1") == ("x", False)

    def test_wildcard(self) -> None:
        """Wildcard collects every element / 通配符收集所有元素。"""
        data = {"items": [{"qty": 1}, {"qty": 0}]}
        assert resolve_field(data, "items.*.qty") == ([1, 0], True)

    def test_wildcard_keeps_missing_as_none(self) -> None:
        data = {"items": [{"qty": 1}, {}]}
        assert resolve_field(data, "items.*.qty") == ([1, None], True)

    def test_wildcard_over_mapping_values(self) -> None:
        data = {"prices": {"a": {"v": 1}, "b": {"v": 2}}}
        assert resolve_field(data, "prices.*.v") == ([1, 2], True)

    def test_nested_wildcards_are_flattened(self) -> None:
        """Nested wildcards give one flat list / 嵌套通配符得到一个扁平列表。"""
        data = {"a": [{"b": [{"c": 1}, {"c": 2}]}, {"b": [{"c": 3}]}]}
        assert resolve_field(data, "a.*.b.*.c") == ([1, 2, 3], True)

    def test_wildcard_on_scalar(self) -> None:
        assert resolve_field({"a": 5}, "a.*") == ([], True)

    def test_empty_segments_return_data(self) -> None:
        assert resolve_path({"a": 1}, []) == ({"a": 1}, False)


class TestIsAbsent:
    """Tests for is_absent.
    is_absent 测试。
    """

    def test_none(self) -> None:
        assert is_absent(None, False) is True

    def test_blank_string(self) -> None:
        assert is_absent("   ", False) is True
        assert is_absent("", False) is True

    def test_empty_multi_value(self) -> None:
        assert is_absent([], True) is True

    def test_present_values(self) -> None:
        """Zero, False and empty single lists count as content / 0、False 与单值空列表视为有内容。"""
        assert is_absent(0, False) is False
        assert is_absent(False, False) is False
        assert is_absent([], False) is False
        assert is_absent(["x"], True) is False
