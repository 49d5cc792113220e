"""Collect function and method declarations from native extension sources.

The scan is purely textual: ``PHP_FUNCTION(name)`` style markers give the
function names, ``PHP_ME(Class, method, arginfo_..., flags)`` entries give
the class and method names together with the arginfo identifier written in
the method table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable

_FUNCTION_PATTERN = re.compile(r"(?:ZEND|PHP)_FUNCTION\(([^)]+)\)")
_METHOD_PATTERN = re.compile(r"(?:ZEND|PHP)_ME\(([^,]+,[ ]*[^,]+),[ ]*(arginfo_[^,]+)")


def function_arginfo_name(function_name: str) -> str:
    return f"arginfo_{function_name}"


def method_arginfo_name(method_name: str) -> str:
    """Return the canonical arginfo identifier for ``Class_method``."""
    return f"arginfo_class_{method_name}"


@dataclass
class SourceDeclarations:
    """Declarations found in one native source file.

    Attributes:
        function_names: Names captured from function markers, in source order.
        method_names: ``Class_method`` names, in source order.
        class_names: Unique class names, in order of first appearance.
        declared_arginfo_names: Arginfo identifiers as written in the method
            table, aligned with ``method_names``.
        non_standard: Canonical arginfo names whose declared identifier
            differs from the canonical form.
    """

    function_names: list[str] = field(default_factory=list)
    method_names: list[str] = field(default_factory=list)
    class_names: list[str] = field(default_factory=list)
    declared_arginfo_names: list[str] = field(default_factory=list)
    non_standard: dict[str, bool] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return not self.function_names and not self.method_names

    def arginfo_names(self) -> list[str]:
        """Canonical arginfo identifiers, functions first then methods."""
        return [function_arginfo_name(name) for name in self.function_names] + [
            method_arginfo_name(name) for name in self.method_names
        ]


def _split_method_pair(pair: str) -> list[str]:
    return [part.strip() for part in pair.split(",")]


def extract_declarations(
    source: str, *, on_non_standard: Callable[[str, str], None] | None = None
) -> SourceDeclarations:
    """Scan ``source`` for function and method declaration markers.

    Args:
        source: Full text of a native source file.
        on_non_standard: Called with ``(declared, canonical)`` for every
            method arginfo identifier that does not follow the
            ``arginfo_class_<Class>_<method>`` convention.

    Returns:
        The collected :class:`SourceDeclarations`.
    """

    result = SourceDeclarations()
    result.function_names = [match.group(1) for match in _FUNCTION_PATTERN.finditer(source)]

    for match in _METHOD_PATTERN.finditer(source):
        parts = _split_method_pair(match.group(1))
        class_name = parts[0]
        method_name = "_".join(parts)
        declared = match.group(2)
        if class_name not in result.class_names:
            result.class_names.append(class_name)
        result.method_names.append(method_name)
        result.declared_arginfo_names.append(declared)

        canonical = method_arginfo_name(method_name)
        # Function identifiers are always derived from the marker, so only
        # method tables can carry a diverging name.
        if declared != canonical:
            result.non_standard[canonical] = True
            if on_non_standard is not None:
                on_non_standard(declared, canonical)
    return result


__all__ = [
    "SourceDeclarations",
    "extract_declarations",
    "function_arginfo_name",
    "method_arginfo_name",
]
