"""Turn an execution result into a pass/fail probe result."""

from sshprobe.errors import ContentMismatchError
from sshprobe.models import (
    UNKNOWN_EXIT_CODE,
    ExecutionResult,
    ProbeResult,
)
from sshprobe.utils.output import check_output

SUCCESS_MESSAGE = "SSH Command has been Run Successfully!"


def classify(
    result: ExecutionResult,
    contain: str = "",
    not_contain: str = "",
) -> ProbeResult:
    """Classify one execution.

    The exit code is derived from this execution only: the reported status
    when there is one (0 included), otherwise UNKNOWN_EXIT_CODE.

    Args:
        result: Execution result
        contain: Substring stdout must contain
        not_contain: Substring stdout must not contain

    Returns:
        ProbeResult with status, message, exit code and output length
    """
    exit_code = result.exit_code
    if exit_code is None:
        exit_code = UNKNOWN_EXIT_CODE

    error = result.error
    if error is not None:
        stderr = result.stderr.decode("utf-8", errors="replace")
        message = f"{error} - {stderr}" if stderr else str(error)
        return ProbeResult(
            success=False,
            message=message,
            exit_code=exit_code,
            output_len=len(result.stderr),
        )

    stdout = result.stdout.decode("utf-8", errors="replace")
    try:
        check_output(contain, not_contain, stdout)
    except ContentMismatchError as e:
        return ProbeResult(
            success=False,
            message=f"Error: {e}",
            exit_code=exit_code,
            output_len=len(result.stdout),
        )

    return ProbeResult(
        success=True,
        message=SUCCESS_MESSAGE,
        exit_code=exit_code,
        output_len=len(result.stdout),
    )
