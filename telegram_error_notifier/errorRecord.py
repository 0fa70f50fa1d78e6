"""
Snapshot of one failed request/response pair.

Headers, params, data and the response body are kept as opaque JSON-like
values: their shape is whatever the caller sent and the server answered.
"""

from __future__ import annotations

import typing as t
from dataclasses import dataclass, field

import requests

NO_RESPONSE = "No response"


@dataclass(frozen=True)
class ErrorRecord:
    url: str
    method: str
    headers: t.Any = field(default_factory=dict)
    params: t.Any = field(default_factory=dict)
    data: t.Any = field(default_factory=dict)
    status: int | str = NO_RESPONSE
    status_text: str = NO_RESPONSE
    response_data: t.Any = NO_RESPONSE

    @classmethod
    def from_exception(
        cls,
        exc: requests.RequestException,
        *,
        url: str | None = None,
        method: str | None = None,
        headers: t.Mapping[str, str] | None = None,
        params: t.Any = None,
        data: t.Any = None,
    ) -> "ErrorRecord":
        """
        Build a record from a failed request.

        The prepared request (when requests got that far) supplies the merged
        headers and the fallback url/method; anything still missing becomes
        an empty mapping. Without a response, status, status text and body
        are all NO_RESPONSE.
        """
        prepared = getattr(exc, "request", None)
        if prepared is not None:
            url = url or prepared.url
            method = method or prepared.method
            if prepared.headers:
                headers = prepared.headers

        response = getattr(exc, "response", None)
        if response is not None:
            status: int | str = response.status_code
            status_text = response.reason or ""
            response_data = _response_body(response)
        else:
            status = status_text = response_data = NO_RESPONSE

        return cls(
            url=url or "",
            method=method or "",
            headers=dict(headers) if headers else {},
            params=params or {},
            data=data or {},
            status=status,
            status_text=status_text,
            response_data=response_data,
        )

    def request_summary(self) -> dict[str, t.Any]:
        return {"headers": self.headers, "params": self.params, "data": self.data}

    def as_document(self) -> dict[str, t.Any]:
        return {
            "request": {
                "url": self.url,
                "method": self.method,
                "headers": self.headers,
                "params": self.params,
                "data": self.data,
            },
            "response": self.response_data,
        }


def _response_body(response: requests.Response) -> t.Any:
    try:
        return response.json()
    except ValueError:
        return response.text
