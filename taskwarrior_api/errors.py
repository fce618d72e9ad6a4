"""Errors raised while talking to Taskwarrior."""


class TaskwarriorError(Exception):
    """Base class for Taskwarrior adapter errors."""

    code = "TASKWARRIOR_ERROR"


class CommandError(TaskwarriorError):
    """The task program could not be run or exited with a non-zero status."""

    code = "COMMAND_FAILED"

    def __init__(self, args: list[str], returncode: int | None, stderr: str = ""):
        self.args_list = list(args)
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(f"task exited with status {returncode}: {detail}")


class CommandTimeoutError(CommandError):
    """The task program did not finish before the timeout and was killed."""

    code = "COMMAND_TIMEOUT"

    def __init__(self, args: list[str], timeout: float, stderr: str = ""):
        self.timeout = timeout
        super().__init__(args, None, stderr or f"Command timed out after {timeout}s")


class ParseError(TaskwarriorError):
    """Output from the task program did not have the expected shape."""

    code = "PARSE_FAILED"

    def __init__(self, message: str, output: str):
        self.output = output
        super().__init__(message)


class TaskNotFoundError(TaskwarriorError):
    """No task matched the requested UUID."""

    code = "TASK_NOT_FOUND"

    def __init__(self, uuid: str):
        self.uuid = uuid
        super().__init__(f"Task not found: {uuid}")


class UUIDRecoveryError(TaskwarriorError):
    """A task was created but its UUID could not be determined."""

    code = "TASK_UUID_UNKNOWN"

    def __init__(self, message: str, output: str):
        self.output = output
        super().__init__(message)
