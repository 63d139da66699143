import asyncio
import shutil
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, Mapping, Optional, Type, TypeVar, Union

import httpx
from pydantic import TypeAdapter, ValidationError

from apiservice.core.errors import APIError
from apiservice.core.http.base import HTTPTransport
from apiservice.core.http.client import HTTPClient
from apiservice.core.http.exceptions import HTTPClientError
from apiservice.core.logging import get_logger
from apiservice.core.result import Result
from apiservice.engines.body_engine import encode_body
from apiservice.engines.url_engine import build_url
from apiservice.pydantic_models.request.http_enums import HTTPMethod

logger = get_logger(__name__)

R = TypeVar("R")


def _method_name(method: Union[HTTPMethod, str]) -> str:
    if isinstance(method, HTTPMethod):
        return method.value
    return str(method).upper()


def _merge_headers(request_headers: Optional[Mapping[str, str]], body_headers: Mapping[str, str]) -> Dict[str, str]:
    """Request headers first; body headers replace any case-insensitive duplicate."""
    merged = dict(request_headers or {})
    for name, value in body_headers.items():
        for existing in [key for key in merged if key.lower() == name.lower()]:
            del merged[existing]
        merged[name] = value
    return merged


def _is_success_status(status_code: int) -> bool:
    return 200 <= status_code <= 299


def _relocate(temp_path: Path, destination: Path) -> None:
    """Replace ``destination`` with ``temp_path``: remove first, then move."""
    if destination.exists():
        destination.unlink()
    shutil.move(str(temp_path), str(destination))


class APIService:
    """
    Executes request descriptors and classifies their outcome.

    Every call finishes with exactly one ``Result``: the decoded value (or
    destination path for downloads) or one ``APIError``. Nothing is retried.

    Args:
        transport: HTTP stack to issue requests with. Defaults to an httpx-backed HTTPClient.

    Example:
        ```python
        service = APIService()
        result = await service.perform(UsersEndpoint.list(), list[User])
        if result.is_success:
            print(result.value)
        ```
    """

    def __init__(self, transport: Optional[HTTPTransport] = None):
        self.transport = transport or HTTPClient()

    def build_url(self, request) -> str:
        """Resolve the full URL of ``request``."""
        return build_url(request)

    async def perform(self, request, response_type: Type[R]) -> Result[R]:
        """
        Perform a request and decode its JSON body into ``response_type``.

        Args:
            request: Any APIRequest
            response_type: Type to decode into (pydantic model, list[Model], dict, ...)

        Returns:
            Result holding the decoded value or the classified APIError
        """
        try:
            url = build_url(request)
            method = _method_name(request.method)
        except Exception as e:
            return self._invalid_request(request, e)

        try:
            body = encode_body(request.task)
            headers = _merge_headers(request.headers, body.headers)
        except APIError as e:
            e.url = url
            return self._fail(method, url, e)
        except Exception as e:
            return self._fail(method, url, APIError.other(str(e), url=url, original_error=e))

        logger.debug(f"Sending {method} {url}")
        try:
            response = await self.transport.send(method, url, headers, body.content)
        except HTTPClientError as e:
            return self._fail(method, url, APIError.other(e.message, url=url, original_error=e))
        except Exception as e:
            return self._fail(method, url, APIError.other(str(e), url=url, original_error=e))

        if response is None:
            return self._fail(method, url, APIError.invalid_data(url=url))

        if not isinstance(response, httpx.Response):
            return self._fail(method, url, APIError.response_unsuccessful(url=url))

        if not _is_success_status(response.status_code):
            return self._fail(method, url, APIError.request_failed(url=url, status_code=response.status_code))

        try:
            value = TypeAdapter(response_type).validate_json(response.content)
        except ValidationError as e:
            return self._fail(method, url, APIError.json_parsing_failure(url=url, original_error=e))
        except Exception as e:
            return self._fail(method, url, APIError.other(str(e), url=url, original_error=e))

        logger.info(f"{method} {url} -> {response.status_code}")
        return Result.success(value)

    async def download_file(self, request, destination: Union[str, Path]) -> Result[Path]:
        """
        Download the response body of ``request`` to ``destination``.

        The body is streamed to a temporary file first, then moved into place.
        An existing file at ``destination`` is removed before the move; the
        two steps are not atomic. Body tasks on ``request`` are ignored.

        Args:
            request: Any APIRequest
            destination: Where the downloaded file should end up

        Returns:
            Result holding the destination path or the classified APIError
        """
        try:
            url = build_url(request)
            method = _method_name(request.method)
            destination = Path(destination)
            headers = dict(request.headers or {})
        except Exception as e:
            return self._invalid_request(request, e)

        logger.debug(f"Downloading {method} {url} to {destination}")
        try:
            downloaded = await self.transport.download(method, url, headers)
        except HTTPClientError as e:
            return self._fail(method, url, APIError.other(e.message, url=url, original_error=e))
        except Exception as e:
            return self._fail(method, url, APIError.other(str(e), url=url, original_error=e))

        response = downloaded.response if downloaded is not None else None
        temp_path = Path(downloaded.temp_path) if downloaded is not None and downloaded.temp_path else None

        try:
            if not isinstance(response, httpx.Response):
                return self._fail(method, url, APIError.response_unsuccessful(url=url))

            if not _is_success_status(response.status_code):
                return self._fail(method, url, APIError.request_failed(url=url, status_code=response.status_code))

            if temp_path is None or not temp_path.exists():
                return self._fail(method, url, APIError.invalid_data(url=url))

            try:
                await asyncio.to_thread(_relocate, temp_path, destination)
            except OSError as e:
                return self._fail(method, url, APIError.other(str(e), url=url, original_error=e))
        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink(missing_ok=True)

        logger.info(f"{method} {url} -> {response.status_code}, saved to {destination}")
        return Result.success(destination)

    def perform_with_callback(
        self,
        request,
        response_type: Type[R],
        completion: Callable[[Result[R]], Any]
    ) -> "asyncio.Task[Result[R]]":
        """
        Schedule ``perform`` on the running loop and call ``completion`` once with its result.

        Returns:
            The scheduled asyncio.Task
        """
        return self._schedule(self.perform(request, response_type), completion)

    def download_file_with_callback(
        self,
        request,
        destination: Union[str, Path],
        completion: Callable[[Result[Path]], Any]
    ) -> "asyncio.Task[Result[Path]]":
        """Schedule ``download_file`` and call ``completion`` once with its result."""
        return self._schedule(self.download_file(request, destination), completion)

    async def perform_stream(self, request, response_type: Type[R]) -> AsyncIterator[R]:
        """
        Lazy single-value stream over ``perform``.

        Nothing is sent until iteration starts. Yields the decoded value once,
        or raises the APIError.
        """
        result = await self.perform(request, response_type)
        yield result.unwrap()

    async def download_file_stream(self, request, destination: Union[str, Path]) -> AsyncIterator[Path]:
        """Lazy single-value stream over ``download_file``."""
        result = await self.download_file(request, destination)
        yield result.unwrap()

    def _schedule(self, coroutine, completion: Callable[[Result], Any]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coroutine)

        def _deliver(finished: asyncio.Task) -> None:
            if finished.cancelled():
                return
            error = finished.exception()
            if error is not None:
                logger.warning(f"Scheduled call raised {type(error).__name__}: {error}")
                completion(Result.failure(APIError.other(str(error), original_error=error)))
                return
            completion(finished.result())

        task.add_done_callback(_deliver)
        return task

    def _invalid_request(self, request, error: Exception) -> Result:
        logger.warning(f"Could not build a request from {type(request).__name__}: {error}")
        return Result.failure(APIError.other(str(error), original_error=error))

    def _fail(self, method: str, url: str, error: APIError) -> Result:
        logger.warning(f"{method} {url} failed: {error.kind.name} ({error.description})")
        return Result.failure(error)
