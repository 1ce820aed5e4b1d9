"""Subprocess execution with rich error context for gh CLI calls."""

import subprocess
from collections.abc import Sequence
from typing import Any


def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    check: bool = True,
    **kwargs: Any,
) -> subprocess.CompletedProcess[bytes]:
    """Execute subprocess with enriched error reporting for the integration layer.

    Output is captured as raw bytes. Decoding is left to the caller so that gh
    output is always read as UTF-8 regardless of the current locale.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
        check: Whether to raise on non-zero exit (default: True)
        **kwargs: Additional arguments passed to subprocess.run()

    Returns:
        CompletedProcess instance from subprocess.run()

    Raises:
        RuntimeError: If command fails or the binary is missing, with enriched context
    """
    try:
        return subprocess.run(
            cmd,
            capture_output=True,
            check=check,
            **kwargs,
        )

    except subprocess.CalledProcessError as e:
        cmd_str = " ".join(str(arg) for arg in cmd)
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {e.returncode}"

        if e.stdout:
            stdout_stripped = e.stdout.decode("utf-8", errors="replace").strip()
            if stdout_stripped:
                error_msg += f"\nstdout: {stdout_stripped}"

        if e.stderr:
            stderr_stripped = e.stderr.decode("utf-8", errors="replace").strip()
            if stderr_stripped:
                error_msg += f"\nstderr: {stderr_stripped}"

        raise RuntimeError(error_msg) from e

    except FileNotFoundError as e:
        cmd_str = " ".join(str(arg) for arg in cmd)
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise RuntimeError(error_msg) from e
