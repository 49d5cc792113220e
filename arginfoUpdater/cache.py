"""On-disk cache of generated stub files and arginfo headers."""

from __future__ import annotations

from pathlib import Path

from .errors import CacheDirectoryError


class StubCache:
    """Stub and arginfo files of one extension, keyed by module name.

    A module is the basename of a native source file without its extension.
    Entries live in ``<cache_root>/stub/<extension>`` as
    ``<module>.stub.php`` and ``<module>_arginfo.h``. They are never
    invalidated automatically: either run with ``enabled=False`` or delete
    the directory. Concurrent runs against the same directory are not
    coordinated; the last writer wins.
    """

    def __init__(self, cache_root: str | Path, extension_name: str, *, enabled: bool = True):
        self.directory = Path(cache_root) / "stub" / extension_name
        self.enabled = enabled

    def prepare(self) -> Path:
        """Create the cache directory and resolve it to its real path."""
        try:
            self.directory.mkdir(mode=0o755, parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheDirectoryError(self.directory, exc.strerror) from exc
        if not self.directory.is_dir():
            raise CacheDirectoryError(self.directory)
        self.directory = self.directory.resolve()
        return self.directory

    def stub_path(self, module: str) -> Path:
        return self.directory / f"{module}.stub.php"

    def arginfo_path(self, module: str) -> Path:
        # gen_stub.php writes the header next to the stub it was given.
        return self.directory / f"{module}_arginfo.h"

    def is_fresh(self, module: str) -> bool:
        """Whether a cached stub may be reused for ``module``."""
        return self.enabled and self.stub_path(module).exists()

    def store_stub(self, module: str, text: str) -> Path:
        path = self.stub_path(module)
        path.write_text(text, encoding="utf-8")
        return path

    def read_arginfo(self, module: str) -> str:
        """Read the generated header with tabs expanded to four spaces."""
        text = self.arginfo_path(module).read_text(encoding="utf-8")
        return text.replace("\t", "    ")


__all__ = ["StubCache"]
