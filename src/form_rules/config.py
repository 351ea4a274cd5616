"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: config.py
@DateTime: 2026-03-02
@Docs: Validator configuration helpers.
校验器配置助手。

Configuration helpers for validators.
校验器配置助手。

This module defines the knobs shared by every ``Validator`` instance:
message locale, locale directory and error accumulation policy.
本模块定义所有 ``Validator`` 实例共享的配置项：消息语言、语言目录与错误累积策略。

Environment variables / 环境变量:
        - FORM_RULES_LANG:
            Message locale (default: en).
            消息语言（默认 en）。
        - FORM_RULES_LANG_DIR:
            Directory holding ``<lang>.json`` message catalogs.
            存放 ``<lang>.json`` 消息目录的目录。
        - FORM_RULES_ACCUMULATE_ERRORS:
            Keep errors across repeated ``validate()`` calls (1/true/yes/on).
            多次调用 ``validate()`` 时是否累积错误（1/true/yes/on）。

Examples:
        Use defaults / 使用默认值:

        >>> from form_rules.config import resolve_config
        >>> cfg = resolve_config()
        >>> cfg.lang
        'en'

        Override locale / 覆盖语言:

        >>> cfg = resolve_config(lang="zh-cn")
        >>> cfg.lang
        'zh-cn'
"""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_LANG = "en"
DEFAULT_URL_PREFIXES = ("http://", "https://", "ftp://")
_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True, slots=True)
class ValidatorConfig:
    """Validator configuration.

    校验器配置。

    Attributes:
        lang: Message locale name.
            消息语言名称。
        lang_dir: Directory with locale catalogs (None means bundled locales).
            语言目录（None 表示使用内置语言包）。
        accumulate_errors: Whether ``validate()`` keeps previous errors.
            ``validate()`` 是否保留之前的错误。
        url_prefixes: Accepted URL scheme prefixes for url rules.
            url 规则接受的协议前缀。
    """

    lang: str = DEFAULT_LANG
    lang_dir: Path | None = None
    accumulate_errors: bool = False
    url_prefixes: tuple[str, ...] = DEFAULT_URL_PREFIXES


def _env_get(*names: str) -> str | None:
    """Get the first non-empty environment variable value.

    获取第一个非空环境变量值。

    Args:
        *names: Candidate environment variable names in priority order.
            候选环境变量名（按优先级顺序）。

    Returns:
        The first non-empty value, or None.
            返回第一个非空值；若都为空则返回 None。
    """
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip():
            return v.strip()
    return None


def _parse_bool(value: str | None) -> bool | None:
    """
    Parse a boolean flag from text.
    从文本解析布尔开关。

    Args:
        value: Raw text.
            原始文本。

    Returns:
        bool | None: Parsed flag, None when value is None.
        bool | None: 解析结果；value 为 None 时返回 None。
    """
    if value is None:
        return None
    return value.strip().lower() in _TRUE_VALUES


def resolve_config(
    *,
    lang: str | None = None,
    lang_dir: str | os.PathLike[str] | None = None,
    accumulate_errors: bool | None = None,
    env_prefix: str = "FORM_RULES",
) -> ValidatorConfig:
    """Resolve configuration from parameters and environment variables.

    从参数和环境变量解析配置。

     Resolution order / 解析优先级:
        1) function parameters / 函数参数
        2) env: `{env_prefix}_LANG`, `{env_prefix}_LANG_DIR`, `{env_prefix}_ACCUMULATE_ERRORS`
           环境变量
        3) defaults / 默认值

    Args:
        lang: Message locale.
            消息语言。
        lang_dir: Locale directory.
            语言目录。
        accumulate_errors: Error accumulation flag.
            错误累积开关。
        env_prefix: Prefix for environment variables.
            环境变量前缀（默认 FORM_RULES）。

    Returns:
        A ValidatorConfig instance.
            返回 ValidatorConfig 配置实例。

    Examples:
        >>> cfg = resolve_config(accumulate_errors=True)
        >>> cfg.accumulate_errors
        True
    """
    env_lang = _env_get(f"{env_prefix}_LANG")
    env_lang_dir = _env_get(f"{env_prefix}_LANG_DIR")
    env_accumulate = _parse_bool(_env_get(f"{env_prefix}_ACCUMULATE_ERRORS"))

    resolved_dir = Path(lang_dir) if lang_dir is not None else (Path(env_lang_dir) if env_lang_dir else None)
    if accumulate_errors is not None:
        resolved_accumulate = accumulate_errors
    elif env_accumulate is not None:
        resolved_accumulate = env_accumulate
    else:
        resolved_accumulate = False

    return ValidatorConfig(
        lang=lang or env_lang or DEFAULT_LANG,
        lang_dir=resolved_dir,
        accumulate_errors=resolved_accumulate,
    )
