from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, TextIO

from ..errors import CommandError

logger = logging.getLogger(__name__)

BANNER = "=" * 53


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True)
class LogEntry:
    argv: list[str]
    cwd: Optional[str]
    returncode: Optional[int]
    stdout: str
    stderr: str


@dataclass
class ExecutionLog:
    """Everything the external commands of one build printed, in order."""

    entries: List[LogEntry] = field(default_factory=list)

    def record(self, entry: LogEntry) -> None:
        self.entries.append(entry)

    def __len__(self) -> int:
        return len(self.entries)

    def commands(self) -> list[list[str]]:
        return [e.argv for e in self.entries]

    def render(self) -> str:
        chunks: list[str] = []
        for e in self.entries:
            status = "not started" if e.returncode is None else f"exit {e.returncode}"
            header = f"=== {_fmt_argv(e.argv)} ({status})"
            if e.cwd:
                header += f" [cwd={e.cwd}]"
            chunks.append(header + "\n")
            if e.stdout:
                chunks.append(e.stdout if e.stdout.endswith("\n") else e.stdout + "\n")
            if e.stderr:
                chunks.append(e.stderr if e.stderr.endswith("\n") else e.stderr + "\n")
        return "".join(chunks)

    def dump(self, stream: TextIO) -> None:
        if not self.entries:
            return
        stream.write(f"\n{BANNER}\n================== command log ======================\n{BANNER}\n")
        stream.write(self.render())
        stream.flush()


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    log: ExecutionLog,
    cwd: str | None = None,
    input_text: str | None = None,
    check: bool = True,
    record_stdout: bool = True,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - Records stdout/stderr into the build's ExecutionLog.
    - Launch failures and (with check) non-zero exits raise CommandError.
    """

    argv_list = [str(a) for a in argv]
    logger.info("CMD %s", _fmt_argv(argv_list))

    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
        )
    except OSError as e:
        log.record(LogEntry(argv=argv_list, cwd=cwd, returncode=None, stdout="", stderr=str(e)))
        raise CommandError(argv_list, returncode=None, stderr=str(e)) from e

    stdout = p.stdout or ""
    stderr = p.stderr or ""

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    log.record(
        LogEntry(
            argv=argv_list,
            cwd=cwd,
            returncode=p.returncode,
            stdout=stdout if record_stdout else "",
            stderr=stderr,
        )
    )

    if check and p.returncode != 0:
        raise CommandError(argv_list, returncode=p.returncode, stderr=stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
