"""
Geolocation Service Module
Country lookups against ipstack (API key) or ip-api.com (keyless)
"""

import logging
from dataclasses import dataclass

import requests

from config import Config
from models.record import UNKNOWN_COUNTRY
from services.errors import ProviderError

logger = logging.getLogger(__name__)


def _country_or_unknown(value):
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN_COUNTRY


def _describe_failure(exc):
    status = getattr(exc.response, "status_code", None)
    if status is not None:
        return f"{type(exc).__name__} (HTTP {status})"
    return type(exc).__name__


@dataclass(frozen=True)
class IPStackResponse:
    """Subset of the ipstack payload the service reads"""

    country_name: str
    success: bool = True
    error_info: str = ""

    @classmethod
    def from_payload(cls, payload):
        success = payload.get("success") is not False
        error = payload.get("error")
        info = ""
        if not success and isinstance(error, dict):
            info = str(error.get("info") or error.get("type") or "")
        return cls(
            country_name=_country_or_unknown(payload.get("country_name")),
            success=success,
            error_info=info,
        )


@dataclass(frozen=True)
class IPApiResponse:
    """Subset of the ip-api.com payload the service reads"""

    country: str

    @classmethod
    def from_payload(cls, payload):
        return cls(country=_country_or_unknown(payload.get("country")))


class GeoProvider:
    """Base class for country lookup providers"""

    name = "base"

    def __init__(self, timeout=None):
        self.timeout = timeout if timeout is not None else Config.PROVIDER_TIMEOUT

    def lookup(self, ip):
        """
        Lookup the country for an IP address

        Args:
            ip: IP address to lookup

        Returns:
            Country name, or "Unknown" when the provider has no answer

        Raises:
            ProviderError: network, HTTP or decode failure
        """
        raise NotImplementedError

    def _get_json(self, url, ip, params=None):
        """Single GET returning a decoded JSON object; no retries"""
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            # str(e) carries the request URL, which holds the ipstack access key
            raise ProviderError(f"{self.name} request failed: {_describe_failure(e)}", address=ip) from e
        except ValueError as e:
            raise ProviderError(f"{self.name} returned invalid JSON: {e}", address=ip) from e

        if not isinstance(payload, dict):
            raise ProviderError(
                f"{self.name} returned unexpected payload type {type(payload).__name__}",
                address=ip
            )
        return payload


class IPStackProvider(GeoProvider):
    """Paid provider, requires an ipstack access key"""

    name = "ipstack"

    def __init__(self, api_key, timeout=None):
        super().__init__(timeout)
        self.api_key = api_key
        self.api_url = Config.IPSTACK_API

    def lookup(self, ip):
        payload = self._get_json(
            self.api_url.format(ip=ip), ip, params={"access_key": self.api_key}
        )
        result = IPStackResponse.from_payload(payload)
        if not result.success:
            logger.warning("ipstack error for %s: %s", ip, result.error_info or "no details")
        return result.country_name


class IPApiProvider(GeoProvider):
    """Free fallback provider, no key required"""

    name = "ip-api"

    def __init__(self, timeout=None):
        super().__init__(timeout)
        self.api_url = Config.IP_GEO_API

    def lookup(self, ip):
        payload = self._get_json(self.api_url.format(ip=ip), ip)
        return IPApiResponse.from_payload(payload).country


def build_provider(api_key=None, timeout=None):
    """
    Pick the provider once, at startup

    Args:
        api_key: ipstack key; blank or None selects the keyless provider
        timeout: Per-request transport timeout in seconds (optional)

    Returns:
        GeoProvider instance
    """
    if api_key and api_key.strip():
        return IPStackProvider(api_key.strip(), timeout=timeout)
    return IPApiProvider(timeout=timeout)
