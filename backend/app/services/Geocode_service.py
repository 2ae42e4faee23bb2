"""
Address -> coordinates through an ordered chain of geocoding providers.

Kakao Local is tried first since captions are overwhelmingly Korean; Nominatim
covers everything else. Providers run one after another, never concurrently,
and the first usable hit wins.
"""
import httpx
import logging
from abc import ABC, abstractmethod
from app.core.config import settings
from app.core.exceptions import GeocodeError, ProviderTransportError, ValidationError
from app.core.logger import logs
from app.models.places_model import Coordinate, GeocodeCandidate


def _to_candidate(lat, lng, label=None) -> GeocodeCandidate | None:
    """Providers return coordinates as strings; unparseable or out-of-range pairs are dropped."""
    try:
        return GeocodeCandidate(lat=float(lat), lng=float(lng), label=label)
    except (TypeError, ValueError):
        return None


class BaseGeocodeProvider(ABC):
    name = "base"

    def __init__(self, timeout: float | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout if timeout is not None else settings.GEOCODE_TIMEOUT
        self.transport = transport

    def is_configured(self) -> bool:
        return True

    @abstractmethod
    async def search(self, query: str) -> list[GeocodeCandidate]:
        """Candidates in provider rank order. Raises ProviderTransportError."""
        pass

    async def _get_json(self, url: str, params: dict, headers: dict):
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                resp = await client.get(url, params=params, headers=headers, timeout=self.timeout)
                resp.raise_for_status()
                return resp.json()
            except (httpx.HTTPError, ValueError) as e:
                raise ProviderTransportError(self.name, str(e) or type(e).__name__) from e


class KakaoGeocodeProvider(BaseGeocodeProvider):
    """Kakao Local keyword search, then address search when the keyword search is empty."""
    name = "kakao"

    def __init__(self, api_key: str | None = None, keyword_url: str | None = None,
                 address_url: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key if api_key is not None else settings.KAKAO_REST_API_KEY
        self.keyword_url = keyword_url or settings.KAKAO_KEYWORD_URL
        self.address_url = address_url or settings.KAKAO_ADDRESS_URL

    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def search(self, query: str) -> list[GeocodeCandidate]:
        for url in (self.keyword_url, self.address_url):
            candidates = await self._search_endpoint(url, query)
            if candidates:
                return candidates
        return []

    async def _search_endpoint(self, url: str, query: str) -> list[GeocodeCandidate]:
        data = await self._get_json(
            url,
            params={"query": query},
            headers={"Authorization": f"KakaoAK {self.api_key}"},
        )

        documents = data.get("documents") if isinstance(data, dict) else None
        if not isinstance(documents, list):
            raise ProviderTransportError(self.name, "response has no documents list")

        candidates = []
        for doc in documents:
            if not isinstance(doc, dict):
                continue
            # Kakao puts latitude in y and longitude in x
            candidate = _to_candidate(
                doc.get("y"), doc.get("x"),
                label=doc.get("place_name") or doc.get("address_name"),
            )
            if candidate:
                candidates.append(candidate)
        return candidates


class NominatimGeocodeProvider(BaseGeocodeProvider):
    """OpenStreetMap Nominatim free-text search."""
    name = "nominatim"

    def __init__(self, url: str | None = None, user_agent: str | None = None,
                 email: str | None = None, **kwargs):
        super().__init__(**kwargs)
        self.url = url or settings.NOMINATIM_URL
        self.user_agent = user_agent or settings.NOMINATIM_USER_AGENT
        self.email = email if email is not None else settings.NOMINATIM_EMAIL

    async def search(self, query: str) -> list[GeocodeCandidate]:
        params = {"q": query, "format": "jsonv2", "limit": 1}
        if self.email:
            params["email"] = self.email

        data = await self._get_json(self.url, params=params, headers={"User-Agent": self.user_agent})

        if not isinstance(data, list):
            raise ProviderTransportError(self.name, "response is not a list")

        candidates = []
        for item in data:
            if not isinstance(item, dict):
                continue
            candidate = _to_candidate(item.get("lat"), item.get("lon"), label=item.get("display_name"))
            if candidate:
                candidates.append(candidate)
        return candidates


GEOCODE_PROVIDERS = {
    "kakao": KakaoGeocodeProvider,
    "nominatim": NominatimGeocodeProvider,
}


def build_provider_chain(names: list[str] | None = None) -> list[BaseGeocodeProvider]:
    chain = []
    for name in names if names is not None else settings.GEOCODER_CHAIN:
        provider_cls = GEOCODE_PROVIDERS.get(name.strip().lower())
        if provider_cls is None:
            logs.log(logging.WARNING, f"Unknown geocoding provider '{name}' in GEOCODER_CHAIN, skipping")
            continue
        chain.append(provider_cls())
    return chain


class GeocodeResolver:
    def __init__(self, providers: list[BaseGeocodeProvider] | None = None):
        self.providers = providers if providers is not None else build_provider_chain()

    async def resolve(self, address: str) -> Coordinate:
        if not address or not address.strip():
            raise ValidationError("invalid input")

        for provider in self.providers:
            if not provider.is_configured():
                logs.log(logging.WARNING, f"Geocoder '{provider.name}' has no credentials, skipping")
                continue

            try:
                candidates = await provider.search(address)
            except ProviderTransportError as e:
                # A failed provider counts as empty
                logs.log(logging.ERROR, f"Geocoder '{provider.name}' failed: {e.detail}", extra={"address": address})
                continue

            if candidates:
                first = candidates[0]
                logs.log(logging.INFO, f"✓ Geocoded via {provider.name}: {address} -> ({first.lat}, {first.lng})")
                return Coordinate(lat=first.lat, lng=first.lng)

            logs.log(logging.INFO, f"✗ Geocoder '{provider.name}' found nothing for: {address}")

        raise GeocodeError("not found")
