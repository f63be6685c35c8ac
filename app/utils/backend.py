"""HTTP client for the school REST backend.

The backend owns persistence of students and courses; this application only
reads option lists from it and posts create requests to it.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from app.config import get_settings
from app.exceptions import BackendError

logger = logging.getLogger(__name__)


class BackendClient:
    """Client for the school REST backend JSON API.

    Every call opens its own ``httpx.AsyncClient``; there is no retry and,
    unless configured, no timeout.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        """Initialize BackendClient.

        Args:
            base_url: Base URL of the backend, e.g. ``http://localhost:3000``.
            timeout: Request timeout in seconds, None to wait indefinitely.
            headers: Extra headers sent with every request.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = dict(headers or {})
        logger.info("BackendClient initialized", extra={"base_url": self.base_url})

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    async def get_json(self, path: str) -> Any:
        """Fetch a JSON document from the backend.

        Args:
            path: Backend path, e.g. ``/api/student``.

        Returns:
            Decoded JSON body.

        Raises:
            BackendError: If the request fails or the body is not JSON.
        """
        logger.debug("Fetching from backend", extra={"path": path})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self._url(path), headers=self._headers)
                response.raise_for_status()
                return response.json()

        except httpx.HTTPStatusError as e:
            logger.error(
                "Backend GET failed - HTTP error",
                extra={
                    "path": path,
                    "status_code": e.response.status_code,
                    "error": str(e),
                },
            )
            raise BackendError(
                f"GET {path} failed: {e}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Backend GET failed - network error",
                extra={"path": path, "error": str(e)},
            )
            raise BackendError(str(e), retryable=True) from e
        except ValueError as e:
            logger.error(
                "Backend GET failed - invalid JSON",
                extra={"path": path, "error": str(e)},
            )
            raise BackendError(f"GET {path} returned invalid JSON: {e}") from e

    async def post_json(self, path: str, payload: Dict[str, Any]) -> Any:
        """Post a JSON body to the backend and return the decoded response.

        Args:
            path: Backend path, e.g. ``/api/course``.
            payload: JSON-serializable request body.

        Returns:
            Decoded JSON body of the response.

        Raises:
            BackendError: If the request fails or the body is not JSON.
        """
        logger.info("Posting to backend", extra={"path": path})

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self._url(path),
                    json=payload,
                    headers={
                        **self._headers,
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                data = response.json()

                logger.info(
                    "Backend POST succeeded",
                    extra={"path": path, "status_code": response.status_code},
                )
                return data

        except httpx.HTTPStatusError as e:
            logger.error(
                "Backend POST failed - HTTP error",
                extra={
                    "path": path,
                    "status_code": e.response.status_code,
                    "error": str(e),
                },
            )
            raise BackendError(
                f"POST {path} failed: {e}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Backend POST failed - network error",
                extra={"path": path, "error": str(e)},
            )
            raise BackendError(str(e), retryable=True) from e
        except ValueError as e:
            logger.error(
                "Backend POST failed - invalid JSON",
                extra={"path": path, "error": str(e)},
            )
            raise BackendError(f"POST {path} returned invalid JSON: {e}") from e


class BackendManager:
    """Manager for the process-wide BackendClient instance."""

    def __init__(self) -> None:
        self.client: Optional[BackendClient] = None

    def init_client(self) -> BackendClient:
        """Create the BackendClient from settings, once.

        Returns:
            Initialized BackendClient instance.
        """
        if self.client is not None:
            return self.client

        settings = get_settings()
        self.client = BackendClient(
            base_url=settings.backend_base_url,
            timeout=settings.backend_timeout,
        )
        return self.client


# Global backend manager instance
backend_manager = BackendManager()


def init_backend() -> BackendClient:
    """Initialize the backend client."""
    logger.info("Initializing backend client...")
    return backend_manager.init_client()


def get_backend_client() -> BackendClient:
    """Get the backend client, initializing it on first use."""
    return backend_manager.init_client()


def close_backend() -> None:
    """Drop the backend client."""
    logger.info("Closing backend client...")
    backend_manager.client = None
