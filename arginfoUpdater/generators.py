"""Blocking wrappers around the two PHP generator processes."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .errors import InterpreterError


def _run(cmd: list[str], env: dict[str, str] | None, **kwargs) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(cmd, text=True, env=_merged_env(env), **kwargs)
    except OSError as exc:
        raise InterpreterError(cmd[0], exc.strerror or str(exc)) from exc


def _merged_env(override: dict[str, str] | None) -> dict[str, str] | None:
    if not override:
        return None
    merged = os.environ.copy()
    merged.update(override)
    return merged


class StubGenerator:
    """Run the extension introspection script to produce stub source text."""

    def __init__(
        self,
        extension_name: str,
        script: str | Path,
        *,
        php_binary: str = "php",
        stub_file: str | Path | None = None,
        env: dict[str, str] | None = None,
    ):
        self.extension_name = extension_name
        self.script = Path(script)
        self.php_binary = php_binary
        self.stub_file = Path(stub_file) if stub_file is not None else None
        self.env = dict(env) if env else None

    def build_command(
        self, function_names: Sequence[str], class_names: Sequence[str]
    ) -> list[str]:
        cmd = [
            self.php_binary,
            "-d",
            f"extension={self.extension_name}",
            str(self.script),
            "--gen-arginfo-mode",
            "--function-filter=" + "|".join(function_names),
            "--class-filter=" + "|".join(class_names),
        ]
        if self.stub_file is not None:
            cmd.append(f"--stub-file={self.stub_file}")
        cmd.append(self.extension_name)
        return cmd

    def generate(
        self, function_names: Sequence[str], class_names: Sequence[str]
    ) -> str | None:
        """Return the stub text on stdout, or ``None`` when nothing was printed."""
        proc = _run(
            self.build_command(function_names, class_names),
            self.env,
            stdout=subprocess.PIPE,
        )
        return proc.stdout or None


@dataclass
class ArginfoRun:
    """Outcome of one ``gen_stub_x.php`` invocation."""

    exit_code: int
    output: str
    header_path: Path
    metadata: dict[str, object] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and self.header_path.exists()

    @property
    def flat_output(self) -> str:
        return self.output.replace("\n", " ")


class ArginfoGenerator:
    """Run the patched reference generator against a stub file."""

    def __init__(
        self,
        script: str | Path,
        *,
        php_binary: str = "php",
        env: dict[str, str] | None = None,
    ):
        self.script = Path(script)
        self.php_binary = php_binary
        self.env = dict(env) if env else None

    def generate(self, stub_path: Path, header_path: Path) -> ArginfoRun:
        # A header left by an earlier run must not pass for fresh output.
        header_path.unlink(missing_ok=True)
        cmd = [self.php_binary, str(self.script), str(stub_path)]
        proc = _run(cmd, self.env, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        return ArginfoRun(
            exit_code=proc.returncode,
            output=proc.stdout or "",
            header_path=header_path,
            metadata={"cmd": cmd},
        )


__all__ = ["ArginfoGenerator", "ArginfoRun", "StubGenerator"]
