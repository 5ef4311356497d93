from __future__ import annotations

import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import requests

from kfold_cv.config.platform_config import PlatformConfig
from kfold_cv.config.secret_config import SecretConfig
from kfold_cv.core.types import Resource, ResourceRef
from kfold_cv.utils.errors import PlatformRequestError, ResourceFailed, WaitTimeout
from kfold_cv.utils.retry import Retry
from kfold_cv import logs


class ResourceAdapter:
    """
    Adapter layer: the only code that talks to the platform.

    - create()   POST {base_url}/{kind}            returns a pending handle
    - fetch()    GET  {base_url}/{kind}/{key}      retried on transport errors
    - wait_all() polls until every id is terminal  raises on the first failure
    - delete()   DELETE {base_url}/{kind}/{key}

    Creation is never retried: a POST that may have reached the platform
    must not be replayed.
    """

    def __init__(
            self,
            platform: PlatformConfig,
            secret: SecretConfig,
            *,
            session: Optional[requests.Session] = None,
            retry_delay: float = 1.0,
            sleep: Callable[[float], None] = time.sleep,
            clock: Callable[[], float] = time.monotonic,
    ):
        self.platform = platform
        self._secret = secret
        self.session = session or requests.Session()
        self.retry_delay = retry_delay
        self._sleep = sleep
        self._clock = clock

    # --------------------------------------------------
    # helpers
    # --------------------------------------------------
    def _url(self, kind: str, key: str | None = None) -> str:
        base = self.platform.base_url.rstrip("/")
        return f"{base}/{kind}/{key}" if key else f"{base}/{kind}"

    def _auth(self) -> Dict[str, str]:
        return {"username": self._secret.username, "api_key": self._secret.api_key}

    @staticmethod
    def _check(response: requests.Response, action: str) -> None:
        if not response.ok:
            raise PlatformRequestError(
                f"{action} → HTTP {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
            )

    @staticmethod
    def _parse(payload: Any, action: str, status_code: int | None = None) -> Resource:
        """JSON body → Resource; anything unparseable is a request error."""
        try:
            return Resource.from_json(payload)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PlatformRequestError(
                f"{action} → malformed response: {e!r}",
                status_code=status_code,
            ) from e

    @staticmethod
    def _json(response: requests.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise PlatformRequestError(
                f"{action} → malformed response (not JSON): {response.text[:200]}",
                status_code=response.status_code,
            ) from e

    # --------------------------------------------------
    # create
    # --------------------------------------------------
    def create(self, kind: str, args: Mapping[str, Any]) -> Resource:
        url = self._url(kind)
        try:
            response = self.session.post(
                url,
                params=self._auth(),
                json=dict(args),
                timeout=self.platform.request_timeout,
            )
        except requests.RequestException as e:
            raise PlatformRequestError(f"POST {url} failed: {e}") from e

        action = f"POST {url}"
        self._check(response, action)
        resource = self._parse(self._json(response, action), action, response.status_code)
        logs.debug(f"[ResourceAdapter] created {resource.id}")
        return resource

    def create_and_wait(
            self,
            kind: str,
            args: Mapping[str, Any],
            timeout: float | None = None,
    ) -> Resource:
        resource = self.create(kind, args)
        return self.wait(resource.id, timeout=timeout)

    # --------------------------------------------------
    # fetch / wait
    # --------------------------------------------------
    def _get_json(self, resource_id: str) -> Dict[str, Any]:
        ref = ResourceRef.parse(resource_id)
        url = self._url(ref.kind, ref.key)
        response = self.session.get(
            url,
            params=self._auth(),
            timeout=self.platform.request_timeout,
        )
        action = f"GET {url}"
        self._check(response, action)
        return self._json(response, action)

    def fetch(self, resource_id: str) -> Resource:
        try:
            payload = Retry.run(
                self._get_json,
                resource_id,
                exceptions=(requests.ConnectionError, requests.Timeout),
                max_attempts=self.platform.max_fetch_attempts,
                delay=self.retry_delay,
            )
        except requests.RequestException as e:
            raise PlatformRequestError(f"GET {resource_id} failed: {e}") from e
        return self._parse(payload, f"GET {resource_id}")

    def wait(self, resource_id: str, timeout: float | None = None) -> Resource:
        return self.wait_all([resource_id], timeout=timeout)[0]

    def wait_all(
            self,
            resource_ids: Sequence[str],
            timeout: float | None = None,
    ) -> List[Resource]:
        """
        Block until every id is terminal. Results keep the input order,
        whatever order the platform finishes them in.

        timeout=None falls back to platform.wait_timeout (None = unbounded).
        """
        if timeout is None:
            timeout = self.platform.wait_timeout

        pending: Dict[int, str] = dict(enumerate(resource_ids))
        results: List[Optional[Resource]] = [None] * len(pending)
        deadline = None if timeout is None else self._clock() + timeout

        while pending:
            for index, resource_id in list(pending.items()):
                resource = self.fetch(resource_id)

                if resource.status.is_failed:
                    cause = resource.status_message or resource.status.name
                    logs.error(f"[ResourceAdapter] {resource_id} failed: {cause}")
                    raise ResourceFailed(resource_id, cause)

                if resource.status.is_terminal:
                    results[index] = resource
                    del pending[index]

            if not pending:
                break

            if deadline is not None and self._clock() >= deadline:
                first = next(iter(pending.values()))
                raise WaitTimeout(
                    first,
                    f"{len(pending)} resource(s) not terminal after {timeout}s",
                )

            self._sleep(self.platform.poll_interval)

        return results  # type: ignore[return-value]

    # --------------------------------------------------
    # delete
    # --------------------------------------------------
    def delete(self, resource_id: str) -> None:
        ref = ResourceRef.parse(resource_id)
        url = self._url(ref.kind, ref.key)
        try:
            response = self.session.delete(
                url,
                params=self._auth(),
                timeout=self.platform.request_timeout,
            )
        except requests.RequestException as e:
            raise PlatformRequestError(f"DELETE {url} failed: {e}") from e

        self._check(response, f"DELETE {url}")
        logs.debug(f"[ResourceAdapter] deleted {resource_id}")

    def delete_all(self, resource_ids: Sequence[str]) -> List[str]:
        """
        Best-effort: returns the ids that could not be deleted.
        """
        failed = []
        for resource_id in resource_ids:
            try:
                self.delete(resource_id)
            except PlatformRequestError as e:
                logs.warning(f"[ResourceAdapter] could not delete {resource_id}: {e}")
                failed.append(resource_id)
        return failed
