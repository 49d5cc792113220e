"""Locate arginfo declaration blocks and swap in regenerated ones."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Mapping, Sequence

# The generator doubles the backslash of namespaced names. A plain "\U" or "\x"
# would be read as an escape once the macro argument is stringified, so the
# backslash is spelled as the hex escape "\x5c".
_OVER_ESCAPED = re.compile(r"\\\\([uUxX])")


class BlockLocator(ABC):
    """Find the text span declaring one arginfo identifier."""

    @abstractmethod
    def pattern(self, name: str) -> re.Pattern[str]:
        """Return the compiled pattern matching the block of ``name``."""

    def find(self, name: str, text: str) -> str | None:
        match = self.pattern(name).search(text)
        return match.group(0) if match else None


class BracketedBlockLocator(BlockLocator):
    """``ZEND_BEGIN_ARG...(name, ...)`` through the closing ``ZEND_END_ARG...()``."""

    def pattern(self, name: str) -> re.Pattern[str]:
        return re.compile(
            rf"ZEND_BEGIN_ARG[^(]+\({re.escape(name)},[\s\S]+?ZEND_END_ARG[^)]+\)"
        )


class DefineBlockLocator(BlockLocator):
    """Single line ``#define name other_arginfo`` aliases."""

    def pattern(self, name: str) -> re.Pattern[str]:
        return re.compile(rf"#define {re.escape(name)} [^\n]+")


DEFAULT_LOCATORS: tuple[BlockLocator, ...] = (BracketedBlockLocator(), DefineBlockLocator())


def locate_block(
    name: str, text: str, locators: Sequence[BlockLocator] = DEFAULT_LOCATORS
) -> str | None:
    """Return the first block declaring ``name``, trying locators in order."""
    for locator in locators:
        block = locator.find(name, text)
        if block is not None:
            return block
    return None


def normalize_escapes(block: str) -> str:
    r"""Rewrite ``\\u``, ``\\U``, ``\\x`` and ``\\X`` as ``\x5c`` plus the letter."""
    return _OVER_ESCAPED.sub(r"\\x5c\1", block)


@dataclass
class ReplaceResult:
    """Result of splicing regenerated blocks into a source buffer."""

    text: str
    replaced: int = 0
    missing_in_source: list[str] = field(default_factory=list)
    missing_in_generated: list[str] = field(default_factory=list)

    @property
    def skipped(self) -> list[str]:
        return self.missing_in_source + self.missing_in_generated


def replace_blocks(
    source: str,
    generated: str,
    names: Sequence[str],
    *,
    non_standard: Mapping[str, bool] | None = None,
    warn: Callable[[str], None] | None = None,
) -> ReplaceResult:
    """Replace each named block of ``source`` with its ``generated`` version.

    Args:
        source: Native source text to update.
        generated: Freshly generated arginfo header text.
        names: Canonical arginfo identifiers to update.
        non_standard: Canonical names whose declaration in the method table
            uses another identifier. They are expected to be missing from
            ``source`` and are skipped without a warning.
        warn: Receives a message for every name that cannot be updated.

    Returns:
        A :class:`ReplaceResult` holding the new text and counters.
    """

    non_standard = non_standard or {}
    result = ReplaceResult(text=source)
    for name in names:
        old_block = locate_block(name, result.text)
        if old_block is None:
            if not non_standard.get(name):
                result.missing_in_source.append(name)
                if warn is not None:
                    warn(f"Unable to find target function/method of '{name}'")
            continue
        new_block = locate_block(name, generated)
        if new_block is None:
            result.missing_in_generated.append(name)
            if warn is not None:
                warn(f"Unable to find '{name}' in new arginfo source")
            continue
        new_block = normalize_escapes(new_block)
        if new_block == old_block:
            continue
        if old_block in result.text:
            result.text = result.text.replace(old_block, new_block, 1)
            result.replaced += 1
    return result


__all__ = [
    "BlockLocator",
    "BracketedBlockLocator",
    "DEFAULT_LOCATORS",
    "DefineBlockLocator",
    "ReplaceResult",
    "locate_block",
    "normalize_escapes",
    "replace_blocks",
]
