import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

import httpx

from booklist.config import settings

logger = logging.getLogger(__name__)

ResponseCallback = Callable[[str], Union[Any, Awaitable[Any]]]


class RequestOutcome(str, Enum):
    SUCCESS = "success"
    CONNECTION_ERROR = "connection_error"
    PROTOCOL_ERROR = "protocol_error"


@dataclass
class RequestResult:
    """Bir isteğin sonucu; hata durumunda geri çağırma çalıştırılmaz."""
    method: str
    url: str
    outcome: RequestOutcome
    status_code: Optional[int] = None
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is RequestOutcome.SUCCESS


class HTTPClient:
    """Books arka ucu için bağlantı havuzlu asenkron HTTP istemcisi"""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")

        # Yerel arka uç için bağlantı limitleri
        limits = httpx.Limits(
            max_keepalive_connections=settings.max_connections,
            max_connections=settings.max_connections,
            keepalive_expiry=30.0
        )

        # Zaman aşımı yapılandırması
        timeout_value = timeout if timeout is not None else settings.http_timeout
        timeout_config = httpx.Timeout(
            timeout=timeout_value,
            connect=min(settings.connect_timeout, timeout_value),
        )

        client_kwargs: dict = {
            "base_url": self.base_url,
            "limits": limits,
            "timeout": timeout_config,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)

    def build_request(self, method: str, path: str, *, json: Any = None, data: Any = None) -> httpx.Request:
        """İstek nesnesini oluştur; json ve data birlikte verilemez"""
        if json is not None and data is not None:
            raise ValueError("Pass either a JSON body or form data, not both.")
        return self._client.build_request(method, path, json=json, data=data)

    async def send_request(self, request: httpx.Request, callback: Optional[ResponseCallback] = None) -> RequestResult:
        """İsteği gönder, hataları günlüğe yaz, başarıda ham gövde ile geri çağırmayı çalıştır"""
        method = request.method
        url = str(request.url)
        logger.debug("%s %s", method, url)

        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            error = str(e) or e.__class__.__name__
            logger.error("%s %s failed: %s", method, url, error)
            return RequestResult(method, url, RequestOutcome.CONNECTION_ERROR, error=error)

        if not response.is_success:
            error = f"{response.http_version} {response.status_code} {response.reason_phrase}".strip()
            logger.error("%s %s failed: %s", method, url, error)
            return RequestResult(
                method, url, RequestOutcome.PROTOCOL_ERROR,
                status_code=response.status_code, text=response.text, error=error,
            )

        result = RequestResult(method, url, RequestOutcome.SUCCESS, status_code=response.status_code, text=response.text)
        if callback is not None:
            outcome = callback(response.text)
            if inspect.isawaitable(outcome):
                await outcome
        return result

    async def close(self):
        """HTTP istemcisini kapat"""
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
