from __future__ import annotations

from typing import Optional, Sequence


class ImageBuildError(RuntimeError):
    pass


class PreflightError(ImageBuildError):
    """Raised before any host mutation; nothing needs tearing down."""


class StageError(ImageBuildError):
    def __init__(self, message: str, *, step_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.step_id = step_id


class CommandError(StageError):
    def __init__(
        self,
        argv: Sequence[str],
        *,
        returncode: Optional[int],
        stderr: str = "",
    ) -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"Command could not be started: {' '.join(self.argv)}"
        else:
            msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr.strip():
            msg = f"{msg}\n{stderr.strip()}"
        super().__init__(msg)


class MalformedInputError(StageError):
    pass


class TeardownError(ImageBuildError):
    def __init__(self, description: str, cause: BaseException) -> None:
        super().__init__(f"Teardown '{description}' failed: {cause}")
        self.description = description
        self.cause = cause
