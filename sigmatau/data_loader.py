"""
Data loading utilities for phase and frequency sample files.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import httpx
import numpy as np
import pandas as pd

from .exceptions import DataSourceUnavailable, FetchTimeout, InvalidResponse

logger = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0


class SampleDataLoader:
    """
    Loads sample sequences stored as text, one numeric value per line.

    Blank lines are ignored. Lines that do not parse as a number (headers,
    comments, garbage) are skipped and counted.
    """

    @staticmethod
    def parse_text(text: str, source: Optional[str] = None) -> Tuple[np.ndarray, int]:
        """
        Parse a multi-line text into an array of samples.

        Parameters:
        -----------
        text : str
            Text with one value per line
        source : str, optional
            File path or URL, used only for log records

        Returns:
        --------
        samples : np.ndarray
            Parsed values in file order
        n_skipped : int
            Number of non-blank lines that could not be parsed
        """
        lines = pd.Series(text.splitlines(), dtype=object).str.strip()
        lines = lines[lines != ""]
        values = pd.to_numeric(lines, errors="coerce")
        parsed = values.dropna()
        n_skipped = int(len(values) - len(parsed))

        if n_skipped and logger.isEnabledFor(logging.WARNING):
            logger.warning(
                "lines_skipped",
                extra={
                    "event": "lines_skipped",
                    "source": source,
                    "n_skipped": n_skipped,
                    "n_samples": len(parsed),
                },
            )

        return parsed.to_numpy(dtype=float), n_skipped

    @staticmethod
    def load_file(filepath: str) -> Tuple[np.ndarray, int]:
        """
        Load samples from a text file.

        Parameters:
        -----------
        filepath : str
            Path to the data file

        Returns:
        --------
        samples : np.ndarray
            Parsed values
        n_skipped : int
            Number of unparsable lines
        """
        path = Path(filepath)

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "file_load_start",
                extra={
                    "event": "file_load_start",
                    "filepath": str(filepath),
                },
            )

        try:
            text = path.read_text()
        except OSError as e:
            logger.error(
                "file_load_failed",
                extra={
                    "event": "file_load_failed",
                    "filepath": str(filepath),
                    "error_type": type(e).__name__,
                    "error_msg": str(e),
                },
            )
            raise

        samples, n_skipped = SampleDataLoader.parse_text(text, source=str(filepath))

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "file_load_complete",
                extra={
                    "event": "file_load_complete",
                    "filepath": str(filepath),
                    "n_samples": len(samples),
                    "n_skipped": n_skipped,
                },
            )

        return samples, n_skipped

    @staticmethod
    async def fetch_text(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> str:
        """
        Download a text resource.

        Raises:
        -------
        InvalidResponse
            The server answered with an error status
        FetchTimeout
            The request did not complete within ``timeout`` seconds
        DataSourceUnavailable
            The server could not be reached
        """
        try:
            async with httpx.AsyncClient(timeout=timeout) as client:
                resp = await client.get(url)
                resp.raise_for_status()
                return resp.text
        except httpx.HTTPStatusError as e:
            logger.error(
                "fetch_failed",
                extra={
                    "event": "fetch_failed",
                    "url": url,
                    "status_code": e.response.status_code,
                },
            )
            raise InvalidResponse(f"Request to {url} failed [{e.response.status_code}]") from e
        except httpx.TimeoutException as e:
            logger.error("fetch_timeout", extra={"event": "fetch_timeout", "url": url})
            raise FetchTimeout(f"Request to {url} timed out after {timeout} s") from e
        except httpx.RequestError as e:
            logger.error(
                "fetch_unavailable",
                extra={
                    "event": "fetch_unavailable",
                    "url": url,
                    "error_type": type(e).__name__,
                },
            )
            raise DataSourceUnavailable(f"Cannot reach {url}") from e

    @staticmethod
    async def fetch_url(url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> Tuple[np.ndarray, int]:
        """
        Download and parse samples from a URL.

        Returns:
        --------
        samples : np.ndarray
            Parsed values
        n_skipped : int
            Number of unparsable lines
        """
        text = await SampleDataLoader.fetch_text(url, timeout=timeout)
        samples, n_skipped = SampleDataLoader.parse_text(text, source=url)

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "url_load_complete",
                extra={
                    "event": "url_load_complete",
                    "url": url,
                    "n_samples": len(samples),
                    "n_skipped": n_skipped,
                },
            )

        return samples, n_skipped
