"""Command output checks."""

from sshprobe.errors import ContentMismatchError


def check_output(contain: str, not_contain: str, output: str) -> None:
    """Check output against the required and forbidden substrings.

    Args:
        contain: Substring that must appear (ignored if empty)
        not_contain: Substring that must not appear (ignored if empty)
        output: Command output

    Raises:
        ContentMismatchError: Describing which rule failed
    """
    if contain and contain not in output:
        raise ContentMismatchError(f"the output does not contain [{contain}]")
    if not_contain and not_contain in output:
        raise ContentMismatchError(f"the output contains [{not_contain}]")


def check_empty(output: str) -> str:
    """Return output for logging, or ``empty`` if it is blank."""
    if not output.strip():
        return "empty"
    return output
