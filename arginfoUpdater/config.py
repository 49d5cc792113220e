"""Configuration for a single arginfo update run."""

from __future__ import annotations

import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path

SOURCE_SUFFIXES: tuple[str, ...] = (".c", ".cc", ".cpp")

GEN_STUB_URL = "https://raw.githubusercontent.com/php/php-src/master/build/gen_stub.php"
GEN_STUB_NAME = "gen_stub.php"
GEN_STUB_PATCHED_NAME = "gen_stub_x.php"


def resolve_php_binary(override: str | None = None) -> str:
    """Resolve the PHP interpreter, honouring ``PHP_BINARY`` when set."""

    if override:
        return override
    env_override = os.environ.get("PHP_BINARY")
    if env_override:
        return env_override
    return shutil.which("php") or "php"


def resolve_stub_generator(override: str | os.PathLike[str] | None = None) -> Path:
    """Locate the extension introspection script that emits stub sources."""

    if override:
        return Path(override).expanduser().resolve()
    env_override = os.environ.get("ARGINFO_STUB_GENERATOR")
    if env_override:
        return Path(env_override).expanduser().resolve()
    return (Path("bin") / "gen-stub.php").resolve()


@dataclass(slots=True)
class UpdaterOptions:
    """Inputs of an arginfo update run.

    Attributes:
        extension_name (str): Name of the PHP extension. It is loaded with
            ``-d extension=<name>`` for introspection and names the cache
            sub-directory.
        source_dir (Path): Root of the native sources to patch.
        build_dir (Path): Directory holding ``gen_stub.php`` and its patched
            copy ``gen_stub_x.php``.
        clear_cache (bool): Regenerate every stub even when a cached one
            exists.
        cache_root (Path): Root of the stub cache. ``stub/<extension>`` is
            appended to it.
        stub_file (Path | None): Stub template forwarded to the stub
            generator as ``--stub-file``.
        php_binary (str): Interpreter used for both generator runs.
        stub_generator (Path): Introspection script producing the stub text.
        strict (bool): Report skipped files and names through the exit status.
    """

    extension_name: str
    source_dir: Path
    build_dir: Path
    clear_cache: bool = False
    cache_root: Path = Path(tempfile.gettempdir())
    stub_file: Path | None = None
    php_binary: str = "php"
    stub_generator: Path = Path("bin") / "gen-stub.php"
    strict: bool = False


__all__ = [
    "GEN_STUB_NAME",
    "GEN_STUB_PATCHED_NAME",
    "GEN_STUB_URL",
    "SOURCE_SUFFIXES",
    "UpdaterOptions",
    "resolve_php_binary",
    "resolve_stub_generator",
]
