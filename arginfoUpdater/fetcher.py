"""Fetch and patch php-src's ``gen_stub.php`` reference generator.

The upstream script is unversioned, so it is downloaded once per build
directory and then reused as is. A patched copy is produced by applying
:data:`GEN_STUB_PATCHES` in order; once ``gen_stub_x.php`` exists it is
never refreshed, even if upstream changed. Delete it to pick up a new
upstream version.
"""

from __future__ import annotations

import re
import urllib.error
from dataclasses import dataclass
from pathlib import Path
from urllib.request import urlopen

from .config import GEN_STUB_NAME, GEN_STUB_PATCHED_NAME, GEN_STUB_URL
from .errors import GeneratorFetchError
from .Log import Log

logger = Log().logger


@dataclass(frozen=True)
class PatchRule:
    """A regular expression substitution applied to the fetched script."""

    pattern: str
    replacement: str
    reason: str

    def apply(self, text: str) -> str:
        return re.sub(self.pattern, self.replacement, text)


GEN_STUB_PATCHES: tuple[PatchRule, ...] = (
    PatchRule(
        pattern=r'throw new Exception\("Not implemented \{\$classStmt->getType\(\)\}"\);',
        replacement=r"if (!($classStmt instanceof Stmt\\ClassConst)) { \g<0> }",
        reason="extension stubs declare class constants the generator rejects",
    ),
    PatchRule(
        pattern=r"error_reporting\(E_ALL\);",
        replacement="error_reporting(E_ALL ^ E_DEPRECATED);",
        reason="php-parser emits deprecations on newer interpreters",
    ),
    PatchRule(
        pattern=r'"\|ZEND_ACC_',
        replacement='" | ZEND_ACC_',
        reason='"|ZEND_ACC_ is mis-tokenised by the stub parser',
    ),
)


def patch_gen_stub(source: str, rules: tuple[PatchRule, ...] = GEN_STUB_PATCHES) -> str:
    """Apply ``rules`` to the ``gen_stub.php`` source in order."""
    for rule in rules:
        source = rule.apply(source)
    return source


def download(url: str, target: Path, *, timeout: float = 60.0) -> Path:
    """Download ``url`` into ``target``.

    Raises:
        GeneratorFetchError: On any network or write failure.
    """

    logger.info(f"Downloading {url}")
    try:
        with urlopen(url, timeout=timeout) as response:
            payload = response.read()
    except (urllib.error.URLError, OSError) as exc:
        raise GeneratorFetchError(f"Download {url} failed: {exc}") from exc
    try:
        target.write_bytes(payload)
    except OSError as exc:
        raise GeneratorFetchError(f"Unable to write {target}: {exc}") from exc
    return target


class ReferenceGenerator:
    """Patched copy of ``gen_stub.php`` living in a build directory."""

    def __init__(self, build_dir: str | Path, *, url: str = GEN_STUB_URL):
        self.build_dir = Path(build_dir)
        self.url = url

    @property
    def original_path(self) -> Path:
        return self.build_dir / GEN_STUB_NAME

    @property
    def patched_path(self) -> Path:
        return self.build_dir / GEN_STUB_PATCHED_NAME

    def ensure(self) -> Path:
        """Return the patched script, fetching and patching it when missing.

        Raises:
            GeneratorFetchError: When the build directory cannot be created
                or the download fails.
        """

        if self.patched_path.exists():
            return self.patched_path
        if not self.original_path.exists():
            try:
                self.build_dir.mkdir(mode=0o755, parents=True, exist_ok=True)
            except OSError as exc:
                raise GeneratorFetchError(
                    f"Failed to create dir for build scripts ({exc.strerror})"
                ) from exc
            download(self.url, self.original_path)
        source = self.original_path.read_text(encoding="utf-8")
        self.patched_path.write_text(patch_gen_stub(source), encoding="utf-8")
        logger.debug(f"Patched generator written to {self.patched_path}")
        return self.patched_path


__all__ = [
    "GEN_STUB_PATCHES",
    "PatchRule",
    "ReferenceGenerator",
    "download",
    "patch_gen_stub",
]
