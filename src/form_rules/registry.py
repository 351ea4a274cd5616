"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: registry.py
@DateTime: 2026-03-02
@Docs: Rule catalog: custom predicates layered over the built-in table.
规则目录：在内置规则表之上叠加自定义谓词。

Registrations are additive and last-write-wins, so a custom rule registered
under a built-in name (for example ``email``) shadows the built-in.
Every ``Validator`` uses ``default_registry`` unless another registry is
injected, which keeps tests isolated.
注册是追加式的，后注册者生效；以内置名称（如 ``email``）注册的自定义规则会覆盖内置规则。
除非注入其他注册表，``Validator`` 默认使用 ``default_registry``，便于测试隔离。
"""

import inspect
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import structlog

from form_rules.exceptions import ConfigurationError
from form_rules.rules import BUILTIN_RULES, BuiltinRule, canonical_rule_name

logger = structlog.get_logger(__name__)

ERROR_DEFAULT = "Invalid"


@dataclass(frozen=True, slots=True)
class RuleEntry:
    """Custom rule catalog entry.
    自定义规则目录项。

    Attributes:
        name: Rule name.
            规则名。
        predicate: Callable invoked as ``(field, value, params)``.
            以 ``(field, value, params)`` 调用的谓词。
        message: Default message template.
            默认消息模板。
    """

    name: str
    predicate: Callable[..., bool]
    message: str = ERROR_DEFAULT


@dataclass(frozen=True, slots=True)
class ResolvedRule:
    """Predicate chosen for a rule name.
    为规则名选定的谓词。

    Attributes:
        name: Rule name as looked up.
            查找时使用的规则名。
        predicate: Predicate callable.
            谓词函数。
        builtin: Built-in table entry, None for custom rules.
            内置规则表项；自定义规则为 None。
    """

    name: str
    predicate: Callable[..., bool]
    builtin: BuiltinRule | None = None

    @property
    def context(self) -> tuple[str, ...]:
        return self.builtin.context if self.builtin is not None else ()


def _accepts_rule_arguments(predicate: Callable[..., Any]) -> bool:
    """Return True if predicate can be called with ``(field, value, params)``.
    判断谓词能否以 ``(field, value, params)`` 调用。
    """
    if not callable(predicate):
        return False
    try:
        signature = inspect.signature(predicate)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are trusted.
        return True
    try:
        signature.bind("field", None, ())
    except TypeError:
        return False
    return True


class RuleRegistry:
    """Thread-safe rule catalog.
    线程安全的规则目录。
    """

    def __init__(self) -> None:
        self._entries: dict[str, RuleEntry] = {}
        self._lock = threading.RLock()

    def add_rule(self, name: str, predicate: Callable[..., bool], message: str = ERROR_DEFAULT) -> RuleEntry:
        """Register a custom rule.
        注册自定义规则。

        Args:
            name: Rule name.
                规则名。
            predicate: Callable invoked as ``(field, value, params) -> bool``.
                以 ``(field, value, params) -> bool`` 调用的谓词。
            message: Default message template (``%s`` placeholders take params).
                默认消息模板（``%s`` 占位符按顺序填入参数）。

        Returns:
            RuleEntry: The stored entry.
                保存的目录项。

        Raises:
            ConfigurationError: When predicate is not callable with three arguments.
                谓词无法以三个参数调用时抛出。
        """
        if not _accepts_rule_arguments(predicate):
            raise ConfigurationError(
                message=(
                    "Rule predicate must be callable as (field, value, params)."
                    " / 规则谓词必须可以 (field, value, params) 方式调用。"
                ),
                details={"rule": name},
            )
        entry = RuleEntry(name=name, predicate=predicate, message=message)
        with self._lock:
            replaced = name in self._entries
            self._entries[name] = entry
        logger.info("rule_registered", rule=name, replaced=replaced, shadows_builtin=name in BUILTIN_RULES)
        return entry

    def get(self, name: str) -> RuleEntry | None:
        with self._lock:
            return self._entries.get(name)

    def has(self, name: str) -> bool:
        """Return True when name is registered or built in.
        规则名已注册或为内置规则时返回 True。
        """
        with self._lock:
            if name in self._entries:
                return True
        return canonical_rule_name(name) in BUILTIN_RULES

    def names(self) -> list[str]:
        with self._lock:
            custom = list(self._entries)
        return sorted(set(custom) | set(BUILTIN_RULES))

    def resolve(self, name: str) -> ResolvedRule:
        """Pick the predicate for a rule name.
        为规则名选定谓词。

        Explicit registrations win over built-ins.
        显式注册优先于内置规则。

        Raises:
            ConfigurationError: When the name is neither registered nor built in.
                规则名既未注册也非内置时抛出。
        """
        entry = self.get(name)
        if entry is not None:
            return ResolvedRule(name=name, predicate=entry.predicate)
        builtin = BUILTIN_RULES.get(canonical_rule_name(name))
        if builtin is None:
            raise ConfigurationError(
                message=f"Rule '{name}' has not been registered with add_rule(). / 规则 '{name}' 未通过 add_rule() 注册。",
                details={"rule": name},
                error_code="unknown_rule",
            )
        return ResolvedRule(name=name, predicate=builtin.predicate, builtin=builtin)

    def message_for(self, name: str) -> str | None:
        """Return the message registered with a custom rule, if any.
        返回自定义规则注册时的消息（如有）。
        """
        entry = self.get(name)
        return entry.message if entry is not None else None

    def clear(self) -> None:
        """Drop every custom registration (built-ins stay).
        清除所有自定义注册（内置规则保留）。
        """
        with self._lock:
            self._entries.clear()


default_registry = RuleRegistry()
