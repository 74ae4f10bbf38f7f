"""Build verifier: writes generated files and runs the Go toolchain over them.

Only the write step is fatal. gofmt, the syntax check, ``go mod tidy`` and
``go build`` are advisory: a missing binary, a non-zero exit or a timeout is
recorded as a warning on the BuildReport.
"""
import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from gofactory.core.config import Settings
from gofactory.core.workflow import PipelineStage
from gofactory.generators.go_gen.types import (
    BuildReport,
    CodeAccumulator,
    GeneratedFile,
    ValidationIssue,
    ValidationResult,
)
from gofactory.generators.go_gen.writer import write_files

log = logging.getLogger(__name__)

GO_VERSION = "1.21"

# gofmt -e reports "<file>:<line>:<col>: <message>"
ISSUE_LINE = re.compile(r"^(?P<file>[^:]+):(?P<line>\d+):(?P<column>\d+): (?P<message>.+)$")


@dataclass
class CommandResult:
    ok: bool
    stdout: str = ""
    stderr: str = ""
    error: str = ""  # set when the command could not run to completion

    @property
    def output(self) -> str:
        return (self.stdout + self.stderr).strip()


class BuildVerifier:
    def __init__(self, settings: Settings):
        self.settings = settings

    def _run(self, command: List[str], cwd: Optional[Path] = None, stdin: Optional[str] = None) -> CommandResult:
        try:
            result = subprocess.run(
                command,
                cwd=cwd,
                input=stdin,
                capture_output=True,
                text=True,
                timeout=self.settings.toolchain_timeout,
            )
        except FileNotFoundError:
            return CommandResult(ok=False, error=f"{command[0]} not found")
        except subprocess.TimeoutExpired:
            return CommandResult(ok=False, error=f"{command[0]} timed out after {self.settings.toolchain_timeout}s")
        return CommandResult(ok=result.returncode == 0, stdout=result.stdout, stderr=result.stderr)

    def write_files(self, files: List[GeneratedFile], output_root: Path) -> List[str]:
        return write_files(files, Path(output_root))

    def format_code(self, content: str) -> str:
        """Return gofmt's canonical form of ``content``.

        Raises:
            RuntimeError: if gofmt is unavailable or rejects the input
        """
        result = self._run([self.settings.gofmt_binary], stdin=content)
        if not result.ok:
            raise RuntimeError(result.error or f"gofmt failed: {result.output}")
        return result.stdout

    def check_syntax(self, path: Path) -> List[ValidationIssue]:
        result = self._run([self.settings.gofmt_binary, "-e", "-l", str(path)])
        if result.error:
            raise RuntimeError(result.error)
        if result.ok:
            return []
        return parse_issues(result.stderr, default_file=str(path))

    def validate_code(self, files: Iterable[Path]) -> ValidationResult:
        """Syntax-check each Go file; problems become ``rule="syntax"`` issues."""
        validation = ValidationResult()
        for path in files:
            validation.files.append(str(path))
            validation.issues.extend(self.check_syntax(Path(path)))
        validation.valid = not any(i.type == "error" for i in validation.issues)
        return validation

    def tidy_dependencies(self, project_root: Path) -> CommandResult:
        """Resolve the module's requirements from the imports with ``go mod tidy``."""
        return self._run([self.settings.go_binary, "mod", "tidy"], cwd=Path(project_root))

    def compile_project(self, project_root: Path) -> CommandResult:
        return self._run([self.settings.go_binary, "build", "./..."], cwd=Path(project_root))

    def materialize(
        self,
        accumulator: CodeAccumulator,
        output_root: str,
        module_path: Optional[str] = None,
        request_id: str = "-",
    ) -> BuildReport:
        """
        Write the accumulator's files, then format, validate and compile them.

        Compilation is preceded by ``go mod tidy`` so that imports such as
        github.com/google/uuid are required in go.mod and go.sum.

        Raises:
            WriteError: if the files cannot be written
        """
        root = Path(output_root)
        report = BuildReport(output_root=str(root))

        files = list(accumulator.files)
        if module_path and not (root / "go.mod").exists():
            go_mod = f"module {module_path}\n\ngo {GO_VERSION}\n"
            files.append(GeneratedFile(path="go.mod", content=go_mod, size=len(go_mod.encode("utf-8"))))

        _log(request_id, PipelineStage.WRITE, "Writing %d files to %s", len(files), root)
        report.files_written = self.write_files(files, root)
        report.success = True

        go_files = [root / p for p in report.files_written if p.endswith(".go")]

        if self.settings.format_code:
            report.formatted = self._format_files(go_files, report, request_id)

        if self.settings.validate_code:
            _log(request_id, PipelineStage.VALIDATE, "Validating %d Go files", len(go_files))
            try:
                validation = self.validate_code(go_files)
            except RuntimeError as e:
                report.warnings.append(f"validation skipped: {e}")
            else:
                report.valid = validation.valid
                report.issues.extend(validation.issues)
                if not validation.valid:
                    report.warnings.append(f"validation found {len(validation.issues)} issue(s)")

        if self.settings.compile_code:
            _log(request_id, PipelineStage.COMPILE, "Compiling %s", root)
            if self.settings.tidy_modules:
                tidy = self.tidy_dependencies(root)
                if tidy.error:
                    report.warnings.append(f"dependency resolution skipped: {tidy.error}")
                elif not tidy.ok:
                    report.warnings.append(f"dependency resolution failed: {tidy.output}")
            result = self.compile_project(root)
            report.compile_output = result.output
            report.compiled = result.ok
            if result.error:
                report.warnings.append(f"compile skipped: {result.error}")
            elif not result.ok:
                report.warnings.append(f"compilation failed: {result.output}")

        return report

    def _format_files(self, paths: List[Path], report: BuildReport, request_id: str) -> bool:
        _log(request_id, PipelineStage.FORMAT, "Formatting %d Go files", len(paths))
        formatted = True
        for path in paths:
            try:
                path.write_text(self.format_code(path.read_text(encoding="utf-8")), encoding="utf-8")
            except RuntimeError as e:
                report.warnings.append(f"format failed for {path.relative_to(report.output_root)}: {e}")
                formatted = False
        return formatted


def parse_issues(output: str, default_file: str = "") -> List[ValidationIssue]:
    issues = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        match = ISSUE_LINE.match(line)
        if match:
            issues.append(ValidationIssue(
                file=match.group("file"),
                line=int(match.group("line")),
                column=int(match.group("column")),
                message=match.group("message"),
                rule="syntax",
            ))
        else:
            issues.append(ValidationIssue(file=default_file, message=line, rule="syntax"))
    return issues


def _log(request_id: str, stage: PipelineStage, msg: str, *args) -> None:
    log.info(msg, *args, extra={"request_id": request_id, "stage": stage.value})
