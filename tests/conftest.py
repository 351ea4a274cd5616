"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: conftest.py
@DateTime: 2026-03-02
@Docs: Shared test fixtures for the form-rules test suite.
测试套件的公共 fixtures。
"""

from collections.abc import Iterator
from pathlib import Path

import pytest

from form_rules.registry import RuleRegistry, default_registry

ENV_KEYS = ("FORM_RULES_LANG", "FORM_RULES_LANG_DIR", "FORM_RULES_ACCUMULATE_ERRORS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove form-rules environment variables.
    移除 form-rules 相关环境变量。
    """
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def clean_default_registry() -> Iterator[None]:
    """Drop custom rules registered on the default registry.
    清除默认注册表上注册的自定义规则。
    """
    yield
    default_registry.clear()


@pytest.fixture
def registry() -> RuleRegistry:
    """Return a fresh, isolated rule registry.
    返回全新的隔离规则注册表。
    """
    return RuleRegistry()


@pytest.fixture
def lang_dir(tmp_path: Path) -> Path:
    """Directory holding a small custom locale ``xx``.
    包含自定义语言 ``xx`` 的目录。
    """
    (tmp_path / "xx.json").write_text('{"required": "needs a value"}', encoding="utf-8")
    return tmp_path
