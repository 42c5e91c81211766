"""Fetch problems from and submit solutions to the challenge platform."""

from pathlib import Path
from typing import Any

from hackattic.exceptions import (
    DownloadError,
    FetchError,
    HTTPError,
    SubmitError,
    TransportError,
)
from hackattic.logging_config import get_logger
from hackattic.services.http_client import HTTPClient, RequestOptions

logger = get_logger(__name__)


class ProblemClient:
    def __init__(self, http_client: HTTPClient) -> None:
        self._http = http_client

    def fetch_problem(self, name: str, access_token: str) -> bytes:
        """GET the raw problem payload for a challenge."""
        try:
            response = self._http.get(
                f"/challenges/{name}/problem",
                options=RequestOptions(params={"access_token": access_token}),
            )
        except (TransportError, HTTPError) as e:
            logger.error("problem_fetch_failed", challenge=name, error=str(e))
            raise FetchError(f"Failed to fetch problem {name!r}: {e}") from e

        logger.info("problem_fetched", challenge=name, size=len(response.body))
        return response.body

    def submit_solution(self, name: str, access_token: str, solution: Any) -> bytes:
        """
        POST a solution as JSON.

        Returns the raw acknowledgement body; the platform answers with JSON
        or plain text depending on the challenge.
        """
        try:
            response = self._http.post(
                f"/challenges/{name}/solve",
                body=solution,
                options=RequestOptions(
                    headers={"Content-Type": "application/json"},
                    params={"access_token": access_token},
                ),
            )
        except (TransportError, HTTPError) as e:
            logger.error("solution_submit_failed", challenge=name, error=str(e))
            raise SubmitError(f"Failed to submit solution for {name!r}: {e}") from e

        logger.info(
            "solution_submitted",
            challenge=name,
            status_code=response.status_code,
            response=response.text,
        )
        return response.body

    def download_file(self, destination: str | Path, url: str) -> None:
        """
        Stream ``url`` into ``destination``, creating or truncating it.

        URLs under the configured base URL are requested relative to it.
        The caller owns the file and is responsible for removing it.
        """
        destination = Path(destination)
        endpoint = url
        remainder = url[len(self._http.base_url) :]
        if url.startswith(self._http.base_url) and remainder[:1] in ("", "/"):
            endpoint = remainder or "/"

        opened = False
        try:
            with self._http.stream("GET", endpoint) as chunks:
                with destination.open("wb") as out:
                    opened = True
                    for chunk in chunks:
                        out.write(chunk)
        except (TransportError, HTTPError, OSError) as e:
            # Only a file this call started writing is ours to remove
            if opened:
                _remove_partial_file(destination)
            logger.error("file_download_failed", path=str(destination), error=str(e))
            raise DownloadError(f"Failed to download {endpoint!r}: {e}") from e

        logger.info("file_downloaded", path=str(destination), size=destination.stat().st_size)


def _remove_partial_file(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("partial_file_cleanup_failed", path=str(path), error=str(e))
