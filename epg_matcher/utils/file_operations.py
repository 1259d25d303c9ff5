"""
File operation utilities

This module handles the one-shot playlist download, input file reads and
atomic output writes. Nothing here retries: a failed read aborts the run.
"""
import logging
import os
import stat
import tempfile
from pathlib import Path

import aiofiles
import httpx

from epg_matcher.exceptions import RetrievalError


logger = logging.getLogger(__name__)


async def fetch_text(
    url: str,
    timeout: float | None = 30.0,
    client: httpx.AsyncClient | None = None
) -> str:
    """
    Download a text resource with a single GET request

    Args:
        url: URL to download from
        timeout: HTTP timeout in seconds (None/0 disables timeout)
        client: Optional client to reuse (its own timeout applies)

    Returns:
        Response body decoded as text

    Raises:
        RetrievalError: On transport errors, timeouts or non-2xx responses
    """
    logger.info(f"Downloading {url}...")

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout or None, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()

    except httpx.HTTPStatusError as e:
        logger.error(f"HTTP {e.response.status_code} while downloading {url}")
        raise RetrievalError(url, f"HTTP {e.response.status_code}") from e

    except httpx.HTTPError as e:
        logger.error(f"Download failed ({type(e).__name__}): {e}")
        raise RetrievalError(url, f"{type(e).__name__}: {e}") from e

    logger.info(f"Downloaded {len(response.content) / 1024:.1f} KB from {url}")

    return response.text


async def read_file_bytes(file_path: Path | str) -> bytes:
    """
    Read a whole file into memory

    Raises:
        RetrievalError: If the file is missing or unreadable
    """
    file_path = Path(file_path)
    try:
        async with aiofiles.open(file_path, 'rb') as f:
            content = await f.read()
    except OSError as e:
        logger.error(f"Cannot read {file_path}: {e}")
        raise RetrievalError(str(file_path), str(e)) from e

    logger.debug(f"Read {len(content)} bytes from {file_path}")
    return content


async def read_text_file(file_path: Path | str) -> str:
    """
    Read a UTF-8 text file

    Raises:
        RetrievalError: If the file is missing, unreadable or not UTF-8
    """
    content = await read_file_bytes(file_path)
    try:
        return content.decode('utf-8')
    except UnicodeDecodeError as e:
        raise RetrievalError(str(file_path), f"not valid UTF-8: {e}") from e


async def write_text_atomic(file_path: Path | str, content: str) -> Path:
    """
    Write text so the destination is either untouched or complete

    Content goes to a temporary file in the destination directory which is
    then renamed over the target. The result keeps the mode of the file it
    replaces, or gets the usual 0666 minus umask for a new file.

    Args:
        file_path: Destination path
        content: Text to write (UTF-8)

    Returns:
        Destination path
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(
        prefix=f".{file_path.name}.",
        suffix=".tmp",
        dir=file_path.parent
    )
    os.close(fd)
    temp_file = Path(temp_name)

    try:
        async with aiofiles.open(temp_file, 'w', encoding='utf-8', newline='\n') as f:
            await f.write(content)
        os.chmod(temp_file, _output_mode(file_path))
        os.replace(temp_file, file_path)
    except BaseException:
        cleanup_temp_file(temp_file)
        raise

    logger.info(f"Wrote {len(content.encode('utf-8')) / 1024:.1f} KB to {file_path}")

    return file_path


def _output_mode(file_path: Path) -> int:
    """Permission bits for a written output file"""
    try:
        return stat.S_IMODE(file_path.stat().st_mode)
    except FileNotFoundError:
        pass

    # Reading the umask requires setting it
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def cleanup_temp_file(file_path: Path) -> bool:
    """
    Safely delete a temporary file

    Args:
        file_path: Path to file to delete

    Returns:
        True if deleted successfully, False otherwise
    """
    if not file_path or not file_path.exists():
        return False

    try:
        file_path.unlink()
        logger.debug(f"Cleaned up temporary file: {file_path}")
        return True
    except (OSError, PermissionError) as e:
        logger.warning(f"Failed to delete temporary file {file_path}: {e}")
        return False
