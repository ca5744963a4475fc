"""
HTTP client for the secrets service.

Processes one request per call; retries and TLS handling are left to httpx.
"""

import logging
import ssl
from typing import Optional, Union

import httpx

from credkit.config import Config
from credkit.errors import ConfigError, ResponseShapeError, TransportError, translate_error
from credkit.models import GeneratedSecretBase, GenerateRequest, parse_secret

logger = logging.getLogger(__name__)


class CredkitClient:
    """Thin wrapper around httpx.Client speaking the data API."""

    def __init__(
        self,
        api_url: str,
        access_token: Optional[str] = None,
        verify: Union[bool, ssl.SSLContext] = True,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._http = httpx.Client(
            base_url=api_url,
            headers=headers,
            verify=verify,
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: Config, transport: Optional[httpx.BaseTransport] = None) -> "CredkitClient":
        verify: Union[bool, ssl.SSLContext] = True
        if config.skip_tls_validation:
            verify = False
        elif config.ca_cert:
            try:
                verify = ssl.create_default_context(cafile=str(config.ca_cert))
            except OSError as e:
                msg = f"Could not load CA certificate {config.ca_cert}: {e}"
                raise ConfigError(msg) from e
        return cls(
            config.require_api_url(),
            access_token=config.access_token,
            verify=verify,
            timeout=config.timeout,
            transport=transport,
        )

    def __enter__(self) -> "CredkitClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def generate(self, request: GenerateRequest) -> GeneratedSecretBase:
        """
        Ask the server to generate a secret.

        Args:
            request: The generation request to send

        Returns:
            The generated secret.

        Raises:
            TransportError: If the request did not complete.
            ServerError: If the server rejected the request.
            ResponseShapeError: If the reply is not a known secret.
        """
        logger.debug("POST %s", request.path)
        try:
            response = self._http.post(request.path, json=request.to_payload())
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed: %s", self.api_url, e)
            msg = f"Could not reach the API at {self.api_url}. Check the URL and your network connection."
            raise TransportError(msg) from e

        logger.debug("Response status %s", response.status_code)
        if not response.is_success:
            raise translate_error(response.content, response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            msg = "The server response is not valid JSON."
            raise ResponseShapeError(msg) from e
        return parse_secret(payload)
