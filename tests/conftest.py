from __future__ import annotations

from collections import defaultdict, deque
from typing import Any, Deque, Dict, List, Optional

import pytest

from mc_auth.base.auth.exceptions import RequestFailure
from mc_auth.base.models.proxy_models import RequestConfig


class FakeHTTPManager:
    """
    Stands in for HTTPManager.request().

    Results are queued per URL: a dict is decoded through response_type,
    None is returned as an empty body, an exception instance is raised.
    Decode errors become RequestFailure, as in HTTPManager.
    """

    def __init__(self) -> None:
        self.config = RequestConfig(provider="fake")
        self.calls: List[Dict[str, Any]] = []
        self._results: Dict[str, Deque[Any]] = defaultdict(deque)

    def add(self, url: str, result: Any) -> "FakeHTTPManager":
        self._results[url].append(result)
        return self

    def update_proxy(self, proxy_config) -> None:
        self.config.proxy_config = proxy_config

    def request(self, url: str, payload: Any = None, response_type: Any = None,
                headers: Optional[Dict[str, str]] = None, form: bool = False,
                operation: str = "auth", decode: bool = True) -> Any:
        body = payload.to_dict() if hasattr(payload, "to_dict") else payload
        self.calls.append({
            "url": url,
            "payload": body,
            "response_type": response_type,
            "headers": headers,
            "form": form,
            "operation": operation,
            "decode": decode,
        })

        queue = self._results.get(url)
        assert queue, f"unexpected request to {url}"
        result = queue.popleft()

        if isinstance(result, Exception):
            raise result
        if not decode:
            return None
        if result is None or response_type is None:
            return result
        try:
            return response_type.from_dict(result)
        except (KeyError, TypeError, ValueError) as e:
            raise RequestFailure(f"Malformed {response_type.__name__} from {url}: {e}", url=url) from e

    def urls(self) -> List[str]:
        return [call["url"] for call in self.calls]


@pytest.fixture
def http() -> FakeHTTPManager:
    return FakeHTTPManager()
