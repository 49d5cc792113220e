"""Regenerate arginfo tables and splice them back into native sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .cache import StubCache
from .config import UpdaterOptions
from .extractor import SourceDeclarations, extract_declarations
from .fetcher import ReferenceGenerator
from .generators import ArginfoGenerator, StubGenerator
from .Log import NOTICE, Log
from .replacer import replace_blocks
from .scanner import scan_sources


@dataclass
class FileReport:
    """Per-file outcome of an update run."""

    path: Path
    functions: int = 0
    methods: int = 0
    replaced: int = 0
    written: bool = False
    skipped_reason: str | None = None
    skipped_names: list[str] = field(default_factory=list)


@dataclass
class UpdateSummary:
    """Totals reported at the end of a run."""

    files: list[FileReport] = field(default_factory=list)

    @property
    def functions(self) -> int:
        return sum(report.functions for report in self.files)

    @property
    def methods(self) -> int:
        return sum(report.methods for report in self.files)

    @property
    def replaced(self) -> int:
        return sum(report.replaced for report in self.files)

    @property
    def files_updated(self) -> int:
        return sum(1 for report in self.files if report.written)

    @property
    def skipped(self) -> list[str]:
        """Human readable list of files and names that could not be updated."""
        items: list[str] = []
        for report in self.files:
            if report.skipped_reason:
                items.append(f"{report.path}: {report.skipped_reason}")
            items.extend(f"{report.path}: {name}" for name in report.skipped_names)
        return items

    def describe(self) -> str:
        return (
            f"Done with {self.functions} functions and {self.methods} methods, "
            f"{self.replaced} replaced"
        )


class ArginfoUpdater:
    """Drive one update run over every native source of an extension."""

    def __init__(
        self,
        options: UpdaterOptions,
        *,
        stub_generator: StubGenerator | None = None,
        reference: ReferenceGenerator | None = None,
    ) -> None:
        self.options = options
        self._logger = Log().logger
        self.cache = StubCache(
            options.cache_root, options.extension_name, enabled=not options.clear_cache
        )
        self.stub_generator = stub_generator or StubGenerator(
            options.extension_name,
            options.stub_generator,
            php_binary=options.php_binary,
            stub_file=options.stub_file,
        )
        self.reference = reference or ReferenceGenerator(options.build_dir)
        self._arginfo_generator: ArginfoGenerator | None = None

    # ------------------------------------------------------------------
    def run(self) -> UpdateSummary:
        """Process every source file and return the run totals.

        Raises:
            ArginfoUpdaterError: On fatal conditions (cache directory,
                source directory or generator download).
        """

        if self.options.clear_cache:
            self._logger.info("Run without cache")
        cache_dir = self.cache.prepare()
        self._logger.info(f"Stub cache path is {cache_dir}")

        summary = UpdateSummary()
        for source_path in scan_sources(self.options.source_dir):
            summary.files.append(self.process_file(source_path))
        self._logger.success(summary.describe())
        return summary

    # ------------------------------------------------------------------
    def process_file(self, source_path: Path) -> FileReport:
        """Update the arginfo tables declared in a single source file."""

        report = FileReport(path=source_path)
        try:
            source = source_path.read_bytes().decode("utf-8", errors="surrogateescape")
        except OSError as exc:
            self._logger.warning(f"Unable to read {source_path}: {exc}")
            report.skipped_reason = "unreadable"
            return report

        declarations = extract_declarations(source, on_non_standard=self._warn_non_standard)
        report.functions = len(declarations.function_names)
        report.methods = len(declarations.method_names)
        if declarations.empty:
            self._logger.info(f"There is no arginfo in {source_path}")
            return report
        self._logger.info(f"Start updating arginfo for {source_path}")

        module = source_path.stem
        if not self._ensure_stub(module, declarations, source_path):
            report.skipped_reason = "no stub generated"
            return report

        generated = self._generate_arginfo(module)
        if generated is None:
            report.skipped_reason = "arginfo generation failed"
            return report

        result = replace_blocks(
            source,
            generated,
            declarations.arginfo_names(),
            non_standard=declarations.non_standard,
            warn=self._logger.warning,
        )
        report.replaced = result.replaced
        report.skipped_names = result.skipped
        if result.replaced == 0:
            self._logger.info(f"Arginfo is up to date for {source_path}")
            return report

        try:
            source_path.write_bytes(result.text.encode("utf-8", errors="surrogateescape"))
        except OSError as exc:
            self._logger.warning(f"Unable to update source file for {source_path}: {exc}")
            report.skipped_reason = "write failed"
            return report
        report.written = True
        self._logger.success(
            f"Arginfo updated with {result.replaced} changes for {source_path}"
        )
        return report

    # ---- internal helpers -------------------------------------------------
    def _warn_non_standard(self, declared: str, canonical: str) -> None:
        self._logger.warning(
            f"Arginfo '{declared}' is not standard, it should be '{canonical}'"
        )

    def _ensure_stub(
        self, module: str, declarations: SourceDeclarations, source_path: Path
    ) -> bool:
        if self.cache.is_fresh(module):
            self._logger.debug(f"Reuse cached stub {self.cache.stub_path(module)}")
            return True
        stub_source = self.stub_generator.generate(
            declarations.function_names, declarations.class_names
        )
        if not stub_source:
            self._logger.log(NOTICE, f"No stub info generated by {source_path}")
            return False
        stub_path = self.cache.store_stub(module, stub_source)
        self._logger.info(f"Put stub file to {stub_path}")
        return True

    def _generate_arginfo(self, module: str) -> str | None:
        if self._arginfo_generator is None:
            self._arginfo_generator = ArginfoGenerator(
                self.reference.ensure(), php_binary=self.options.php_binary
            )
        run = self._arginfo_generator.generate(
            self.cache.stub_path(module), self.cache.arginfo_path(module)
        )
        self._logger.debug("Ran " + " ".join(run.metadata["cmd"]))
        if not run.ok:
            self._logger.warning(
                f"Generate arginfo header file for {module} failed with exit code "
                f"{run.exit_code} and output: {run.flat_output}"
            )
            return None
        return self.cache.read_arginfo(module)


__all__ = ["ArginfoUpdater", "FileReport", "UpdateSummary"]
