"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: test_config.py
@DateTime: 2026-03-02
@Docs: Tests for config.py module.
config.py 模块测试。
"""

import os
from pathlib import Path
from unittest.mock import patch

from form_rules.config import DEFAULT_URL_PREFIXES, ValidatorConfig, _env_get, _parse_bool, resolve_config


class TestEnvGet:
    """Tests for _env_get helper.
    _env_get 辅助函数测试。
    """

    def test_returns_first_nonempty(self) -> None:
        """Return first non-empty env var / 返回第一个非空环境变量。"""
        with patch.dict(os.environ, {"A": "", "B": "hello"}):
            assert _env_get("A", "B") == "hello"

    def test_returns_none_when_all_empty(self) -> None:
        """Return None when all candidates are empty / 所有候选为空时返回 None。"""
        with patch.dict(os.environ, {}, clear=True):
            assert _env_get("NONEXISTENT_1", "NONEXISTENT_2") is None

    def test_strips_whitespace(self) -> None:
        """Strip surrounding whitespace / 去除前后空格。"""
        with patch.dict(os.environ, {"X": "  val  "}):
            assert _env_get("X") == "val"


class TestParseBool:
    """Tests for _parse_bool helper.
    _parse_bool 辅助函数测试。
    """

    def test_true_values(self) -> None:
        for raw in ("1", "true", "YES", " on "):
            assert _parse_bool(raw) is True

    def test_false_values(self) -> None:
        for raw in ("0", "false", "no", "anything"):
            assert _parse_bool(raw) is False

    def test_none(self) -> None:
        assert _parse_bool(None) is None


class TestResolveConfig:
    """Tests for resolve_config.
    resolve_config 测试。
    """

    def test_defaults(self) -> None:
        cfg = resolve_config()
        assert cfg == ValidatorConfig()
        assert cfg.lang == "en"
        assert cfg.lang_dir is None
        assert cfg.accumulate_errors is False
        assert cfg.url_prefixes == DEFAULT_URL_PREFIXES

    def test_env(self) -> None:
        """Environment variables are read / 读取环境变量。"""
        env = {
            "FORM_RULES_LANG": "zh-cn",
            "FORM_RULES_LANG_DIR": "/tmp/locales",
            "FORM_RULES_ACCUMULATE_ERRORS": "true",
        }
        with patch.dict(os.environ, env):
            cfg = resolve_config()
        assert cfg.lang == "zh-cn"
        assert cfg.lang_dir == Path("/tmp/locales")
        assert cfg.accumulate_errors is True

    def test_params_override_env(self) -> None:
        """Parameters win over environment / 参数优先于环境变量。"""
        env = {"FORM_RULES_LANG": "zh-cn", "FORM_RULES_ACCUMULATE_ERRORS": "1"}
        with patch.dict(os.environ, env):
            cfg = resolve_config(lang="en", lang_dir="/srv/lang", accumulate_errors=False)
        assert cfg.lang == "en"
        assert cfg.lang_dir == Path("/srv/lang")
        assert cfg.accumulate_errors is False

    def test_custom_prefix(self) -> None:
        with patch.dict(os.environ, {"MYAPP_LANG": "xx"}):
            assert resolve_config(env_prefix="MYAPP").lang == "xx"
