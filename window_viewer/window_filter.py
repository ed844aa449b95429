from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .config import DEFAULT_IME_CLASS_PREFIXES, DEFAULT_TOOLKIT_CLASS_PREFIXES, FilterRules


@dataclass(frozen=True)
class NoiseRule:
    name: str
    rejects: Callable[[str, str], bool]


def is_blank_class(class_name: str, _window_text: str = "") -> bool:
    return class_name == ""


def is_blank_title(_class_name: str, window_text: str = "") -> bool:
    return window_text == ""


def _starts_with_any(class_name: str, prefixes: Sequence[str]) -> bool:
    return any(class_name.startswith(prefix) for prefix in prefixes if prefix)


def is_ime_helper(
    class_name: str, _window_text: str = "", prefixes: Sequence[str] = DEFAULT_IME_CLASS_PREFIXES
) -> bool:
    return _starts_with_any(class_name, prefixes)


def is_toolkit_helper(
    class_name: str, _window_text: str = "", prefixes: Sequence[str] = DEFAULT_TOOLKIT_CLASS_PREFIXES
) -> bool:
    return _starts_with_any(class_name, prefixes)


def make_ime_helper_rule(prefixes: Sequence[str]) -> NoiseRule:
    frozen = tuple(prefixes)
    return NoiseRule(is_ime_helper.__name__, lambda class_name, text: is_ime_helper(class_name, text, frozen))


def make_toolkit_helper_rule(prefixes: Sequence[str]) -> NoiseRule:
    frozen = tuple(prefixes)
    return NoiseRule(is_toolkit_helper.__name__, lambda class_name, text: is_toolkit_helper(class_name, text, frozen))


class NoiseFilter:
    """Drops top-level windows that are not worth listing.

    Rules are evaluated in order; a window survives only if no rule rejects it.
    """

    def __init__(self, rules: Optional[FilterRules] = None) -> None:
        rules = rules or FilterRules()
        self.rules: Tuple[NoiseRule, ...] = (
            NoiseRule(is_blank_class.__name__, is_blank_class),
            make_ime_helper_rule(rules.ime_class_prefixes),
            make_toolkit_helper_rule(rules.toolkit_class_prefixes),
            NoiseRule(is_blank_title.__name__, is_blank_title),
        )

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def rejection_reason(self, class_name: str, window_text: str) -> Optional[str]:
        for rule in self.rules:
            if rule.rejects(class_name or "", window_text or ""):
                return rule.name
        return None

    def accepts(self, class_name: str, window_text: str) -> bool:
        return self.rejection_reason(class_name, window_text) is None


__all__ = [
    "NoiseRule",
    "NoiseFilter",
    "is_blank_class",
    "is_blank_title",
    "is_ime_helper",
    "is_toolkit_helper",
    "make_ime_helper_rule",
    "make_toolkit_helper_rule",
]
