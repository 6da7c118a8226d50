"""Shell command line helpers."""


def command_line(command: str, args: list[str] | None = None) -> str:
    """Join a command and its arguments into one shell line.

    Args:
        command: Command to run
        args: Extra arguments, appended as written

    Returns:
        Command line string
    """
    parts = [command.strip(), *(a for a in (args or []) if a)]
    return " ".join(p for p in parts if p)


def env_exports(env: list[str] | None) -> str:
    """Render ``NAME=VALUE`` assignments as shell export statements.

    Assignments are exported textually rather than sent as SSH env requests,
    since most servers only accept a small AcceptEnv whitelist.

    Args:
        env: Assignments like ``["PATH=/opt/bin:$PATH", "LANG=C"]``

    Returns:
        ``export PATH=/opt/bin:$PATH;export LANG=C;`` (empty if no env)
    """
    return "".join(f"export {e};" for e in (env or []) if e)
