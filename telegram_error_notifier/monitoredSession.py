from __future__ import annotations

import typing as t

import requests
from loguru import logger

# hook(exc, *, url, method, headers, params, data)
FailureHook = t.Callable[..., None]


class MonitoredSession(requests.Session):
    """
    requests.Session that treats any non-2xx response as a failure and runs
    failure hooks before letting the original exception propagate.

    Hooks see every requests.RequestException raised by request() (HTTP
    errors as well as connection errors and timeouts with no response).
    The caller always gets the original exception back.
    """

    def __init__(self) -> None:
        super().__init__()
        self._failure_hooks: list[FailureHook] = []

    def add_failure_hook(self, hook: FailureHook) -> None:
        self._failure_hooks.append(hook)

    def remove_failure_hook(self, hook: FailureHook) -> None:
        if hook in self._failure_hooks:
            self._failure_hooks.remove(hook)

    def request(  # type: ignore[override]
        self,
        method: str,
        url: str,
        params: t.Any = None,
        data: t.Any = None,
        headers: t.Mapping[str, str] | None = None,
        **kwargs: t.Any,
    ) -> requests.Response:
        try:
            resp = super().request(method, url, params=params, data=data, headers=headers, **kwargs)
            resp.raise_for_status()
            # raise_for_status lets 3xx through (304, unfollowed redirects)
            if not 200 <= resp.status_code < 300:
                raise requests.HTTPError(
                    f"{resp.status_code} {resp.reason} for url: {resp.url}", response=resp
                )
            return resp
        except requests.RequestException as exc:
            self._run_failure_hooks(
                exc,
                url=url,
                method=method,
                headers=headers,
                params=params,
                data=data if data is not None else kwargs.get("json"),
            )
            raise

    def _run_failure_hooks(self, exc: requests.RequestException, **context: t.Any) -> None:
        for hook in list(self._failure_hooks):
            try:
                hook(exc, **context)
            except Exception:
                # never let a hook replace the caller's exception
                logger.exception(f"Failure hook {hook!r} raised")
