# mc_auth/base/network/http_manager.py
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..auth.exceptions import RequestFailure
from ..models.proxy_models import ProxyConfig, RequestConfig
from ..utils.environment import get_environment_manager
from ..utils.logger import logger


class HTTPManager:
    """
    HTTP request manager with proxy support

    Performs one request/response cycle per call for the authenticators:
    - Proxy configuration per operation type
    - Form or JSON encoded payloads
    - Typed response decoding
    - Uniform RequestFailure for transport and non-2xx errors
    """

    def __init__(self, config: Optional[RequestConfig] = None):
        """
        Initialize HTTP manager

        Args:
            config: Request configuration including proxy settings
        """
        self.config = config or RequestConfig()
        self._session = None
        self._setup_session()

    def _setup_session(self) -> None:
        """Setup requests session with retry strategy"""
        self._session = requests.Session()

        # raise_on_status=False hands the final response back so the
        # error body can still be decoded
        retry_strategy = Retry(
            total=self.config.max_retries,
            backoff_factor=self.config.retry_delay,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "POST"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

    def update_config(self, config: RequestConfig) -> None:
        """
        Update request configuration

        Args:
            config: New request configuration
        """
        self.close()
        self.config = config
        self._setup_session()

    def update_proxy(self, proxy_config: Optional[ProxyConfig]) -> None:
        """
        Update just the proxy configuration

        Args:
            proxy_config: New proxy configuration (None to disable proxy)
        """
        self.config.proxy_config = proxy_config

    def get(self, url: str, operation: str = "auth", **kwargs) -> requests.Response:
        """
        Perform GET request with proxy support

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        return self._make_request("GET", url, operation, **kwargs)

    def post(
        self,
        url: str,
        operation: str = "auth",
        data: Any = None,
        json_data: Any = None,
        **kwargs,
    ) -> requests.Response:
        """
        Perform POST request with proxy support

        Args:
            url: Request URL
            operation: Operation type for proxy scoping
            data: Form data
            json_data: JSON data to send
            **kwargs: Additional arguments for requests
        """
        if json_data is not None:
            kwargs["json"] = json_data
        elif data is not None:
            kwargs["data"] = data

        return self._make_request("POST", url, operation, **kwargs)

    def request(
        self,
        url: str,
        payload: Any = None,
        response_type: Any = None,
        headers: Optional[Dict[str, str]] = None,
        form: bool = False,
        operation: str = "auth",
        decode: bool = True,
    ) -> Any:
        """
        Perform one exchange and decode the response

        Args:
            url: Endpoint URL
            payload: None for a GET, otherwise a mapping or an object with to_dict()
            response_type: Class with a from_dict() classmethod, or None for the raw dict
            headers: Extra request headers
            form: Send the payload form-encoded instead of as JSON
            operation: Operation type for proxy scoping
            decode: False to ignore the response body and only check the status

        Returns:
            Decoded response, or None when the server sent an empty body or decode is False

        Raises:
            RequestFailure: On transport failure, non-2xx status or undecodable body
        """
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            if payload is None:
                response = self.get(url, operation=operation, headers=request_headers)
            else:
                body = payload.to_dict() if hasattr(payload, "to_dict") else payload
                if form:
                    response = self.post(url, operation=operation, data=body, headers=request_headers)
                else:
                    response = self.post(url, operation=operation, json_data=body, headers=request_headers)

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise RequestFailure.from_error_payload(
                f"HTTP {status} from {url}",
                self._error_payload(e.response),
                status_code=status,
                url=url,
            ) from e

        except requests.exceptions.RequestException as e:
            raise RequestFailure(f"Request to {url} failed: {e}", url=url) from e

        if not decode:
            return None

        return self._decode_response(response, response_type, url)

    @staticmethod
    def _error_payload(response: Optional[requests.Response]) -> Optional[Dict[str, Any]]:
        """Decode an error body if it is JSON"""
        if response is None or not response.content:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    @staticmethod
    def _decode_response(response: requests.Response, response_type: Any, url: str) -> Any:
        if not response.content or not response.content.strip():
            return None

        try:
            data = response.json()
        except ValueError as e:
            raise RequestFailure(
                f"Response from {url} is not valid JSON", status_code=response.status_code, url=url
            ) from e

        if response_type is None:
            return data

        if not isinstance(data, dict):
            raise RequestFailure(
                f"Unexpected response shape from {url}", status_code=response.status_code, url=url
            )

        try:
            return response_type.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise RequestFailure(
                f"Malformed {response_type.__name__} from {url}: {e}",
                status_code=response.status_code,
                url=url,
            ) from e

    def _make_request(self, method: str, url: str, operation: str, **kwargs) -> requests.Response:
        """
        Make HTTP request with full configuration support
        """
        request_kwargs = self.config.get_request_kwargs(operation)

        # Headers are merged, everything else overrides
        extra_headers = kwargs.pop("headers", None)
        request_kwargs.update(kwargs)
        if extra_headers:
            request_kwargs["headers"].update(extra_headers)

        self._log_request(method, url, operation, request_kwargs)

        try:
            response = self._session.request(method, url, **request_kwargs)

            self._log_response(response)

            # Raises for 4xx/5xx
            response.raise_for_status()

            return response

        except requests.exceptions.ProxyError as e:
            logger.error(
                f"{self.config.provider}: Proxy error for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.Timeout as e:
            logger.error(
                f"{self.config.provider}: Timeout ({request_kwargs.get('timeout', 'unknown')}s) "
                f"for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.ConnectionError as e:
            logger.error(
                f"{self.config.provider}: Connection error for {operation} request to {url}: {e}"
            )
            raise

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            logger.error(
                f"{self.config.provider}: HTTP {status} error for {operation} request to {url}"
            )
            raise

        except requests.exceptions.RequestException as e:
            logger.error(
                f"{self.config.provider}: Request error for {operation} request to {url}: {e}"
            )
            raise

    def _log_request(self, method: str, url: str, operation: str, kwargs: Dict[str, Any]) -> None:
        """Log request details, never the payload"""
        if self.config.proxy_config:
            if self.config.proxy_config.scope.should_use_proxy_for(operation):
                proxy_host = f"{self.config.proxy_config.host}:{self.config.proxy_config.port}"
                proxy_type = self.config.proxy_config.proxy_type.value
                proxy_info = f" [proxy: {proxy_type}://{proxy_host}]"
            else:
                proxy_info = f" [proxy: disabled for operation '{operation}']"
        else:
            proxy_info = " [proxy: none]"

        timeout = kwargs.get("timeout", self.config.timeout)

        logger.debug(
            f"{self.config.provider}: {method} {operation} -> {url}"
            f"{proxy_info} [timeout: {timeout}s]"
        )

    def _log_response(self, response: requests.Response) -> None:
        """Log response details with timing information"""
        elapsed = ""
        if getattr(response, "elapsed", None) is not None:
            elapsed_ms = int(response.elapsed.total_seconds() * 1000)
            elapsed = f" [{elapsed_ms}ms]"

        content_type = response.headers.get("Content-Type", "unknown")
        size = len(response.content or b"")

        logger.debug(
            f"{self.config.provider}: Response {response.status_code} "
            f"({size} bytes, {content_type}){elapsed}"
        )

    def close(self) -> None:
        """Close the session"""
        if self._session:
            self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class HTTPManagerFactory:
    """
    Factory for creating HTTP managers with provider-specific configurations
    """

    PROVIDER_DEFAULTS = {
        "mojang": {
            "user_agent": "mc-auth/1.0 (yggdrasil)",
        },
        "msa": {
            "user_agent": "mc-auth/1.0 (msa)",
        },
    }

    @staticmethod
    def create_for_provider(
        provider_name: str, proxy_config: Optional[ProxyConfig] = None, **config_kwargs
    ) -> HTTPManager:
        """
        Create HTTP manager configured for specific provider

        Args:
            provider_name: Name of the provider
            proxy_config: Proxy configuration, falls back to the configured proxy URL
            **config_kwargs: Additional RequestConfig parameters

        Returns:
            Configured HTTPManager instance
        """
        env = get_environment_manager()

        defaults = {
            "timeout": env.get_config("timeout", 30),
            "max_retries": env.get_config("max_retries", 0),
        }
        defaults.update(HTTPManagerFactory.PROVIDER_DEFAULTS.get(provider_name, {}))
        defaults.update(config_kwargs)
        defaults["provider"] = provider_name

        if proxy_config is None:
            proxy_url = env.get_config("proxy_url")
            if proxy_url:
                proxy_config = ProxyConfig.from_url(proxy_url)
                logger.debug(f"{provider_name}: Using configured proxy {proxy_config!r}")

        config = RequestConfig(proxy_config=proxy_config, **defaults)

        return HTTPManager(config)

    @staticmethod
    def create_with_proxy_url(provider_name: str, proxy_url: str, **kwargs) -> HTTPManager:
        """
        Create HTTP manager with proxy from URL string

        Args:
            provider_name: Name of the provider
            proxy_url: Proxy URL (e.g., "http://proxy.example.com:8080")
            **kwargs: Additional configuration

        Returns:
            Configured HTTPManager instance
        """
        proxy_config = ProxyConfig.from_url(proxy_url)
        return HTTPManagerFactory.create_for_provider(provider_name, proxy_config, **kwargs)
