"""Async command execution utilities."""

import asyncio
import logging
import shlex

DEFAULT_TIMEOUT = 30

_logging = logging.getLogger(__name__)


async def run_command_async(
    command: str, timeout: int = DEFAULT_TIMEOUT
) -> tuple[str, int]:
    """Run a shell command and return its stdout and return code.

    Failures to start and timeouts are reported as a message with return
    code 1 rather than raised.
    """
    process = None
    try:
        _logging.debug(f"Running command: {command}")
        process = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            _ = await process.wait()
            _logging.error(f"Command timed out after {timeout} seconds: {command}")
            return f"Command timed out after {timeout} seconds", 1

        if stderr:
            _logging.debug(f"stderr: {stderr.decode(errors='replace').strip()}")
        returncode = process.returncode if process.returncode is not None else 1
        return stdout.decode(errors="replace").strip(), returncode
    except OSError as e:
        _logging.error(f"Command execution failed: {e} | Command: {command}")
        return f"Error: {e}", 1
    finally:
        if process:
            transport = getattr(process, "_transport", None)
            if transport:
                transport.close()


async def fetch_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str | None, str]:
    """Fetch a URL with curl.

    Returns:
        Tuple of (body or None, status message)
    """
    command = f"curl -s -f -L --max-time {timeout} {shlex.quote(url)}"
    output, returncode = await run_command_async(command, timeout=timeout + 5)
    if returncode != 0:
        return None, f"Failed to fetch {url}: {output or f'curl exited {returncode}'}"
    return output, "success"
