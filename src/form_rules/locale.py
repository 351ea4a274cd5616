"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: locale.py
@DateTime: 2026-03-02
@Docs: Locale message catalogs.
语言消息目录。
"""

import json
from pathlib import Path

import structlog

from form_rules.exceptions import ConfigurationError

logger = structlog.get_logger(__name__)

BUNDLED_LOCALES_DIR = Path(__file__).parent / "locales"


def available_locales(lang_dir: Path | None = None) -> list[str]:
    """List locale names found in a directory.
    列出目录中可用的语言名称。

    Args:
        lang_dir: Locale directory (bundled locales when None).
            语言目录（None 表示内置语言包）。

    Returns:
        list[str]: Sorted locale names.
            排序后的语言名称。
    """
    base = Path(lang_dir) if lang_dir is not None else BUNDLED_LOCALES_DIR
    if not base.is_dir():
        return []
    return sorted(p.stem for p in base.glob("*.json"))


def load_messages(lang: str = "en", lang_dir: Path | str | None = None) -> dict[str, str]:
    """Load the rule message catalog for a locale.
    加载指定语言的规则消息目录。

    Args:
        lang: Locale name, file ``<lang>.json``.
            语言名称，对应文件 ``<lang>.json``。
        lang_dir: Directory holding catalogs (bundled locales when None).
            目录路径（None 表示内置语言包）。

    Returns:
        dict[str, str]: Mapping rule name -> message template.
            规则名到消息模板的映射。

    Raises:
        ConfigurationError: When the catalog is missing or malformed.
            目录文件缺失或格式错误时抛出。
    """
    base = Path(lang_dir) if lang_dir is not None else BUNDLED_LOCALES_DIR
    path = base / f"{lang}.json"
    if not path.is_file():
        raise ConfigurationError(
            message=f"Fail to load language file '{path}' / 无法加载语言文件 '{path}'",
            details={"lang": lang, "path": str(path)},
            error_code="missing_locale",
        )
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(
            message=f"Invalid language file '{path}' / 语言文件无效 '{path}'",
            details={"lang": lang, "path": str(path), "error": str(exc)},
            error_code="invalid_locale",
        ) from exc
    if not isinstance(data, dict):
        raise ConfigurationError(
            message=f"Language file must hold an object '{path}' / 语言文件必须为对象 '{path}'",
            details={"lang": lang, "path": str(path)},
            error_code="invalid_locale",
        )
    logger.debug("locale_loaded", lang=lang, path=str(path), messages=len(data))
    return {str(k): str(v) for k, v in data.items()}
