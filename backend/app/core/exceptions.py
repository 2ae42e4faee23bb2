"""
Domain errors. Each carries the HTTP status the API answers with;
app.main renders them as {"success": false, "error": message}.
"""


class PlaceParserError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(PlaceParserError):
    """Missing or empty required input."""
    status_code = 400


class ExtractionError(PlaceParserError):
    """The completion service failed or its output held no JSON object."""
    status_code = 502


class GeocodeError(PlaceParserError):
    """Every geocoding provider came back empty."""
    status_code = 404


class PlaceNotFoundError(PlaceParserError):
    status_code = 404


class StorageError(PlaceParserError):
    status_code = 500


class ProviderTransportError(Exception):
    """A single geocoding provider failed. Never leaves the resolver."""

    def __init__(self, provider: str, detail: str):
        super().__init__(f"{provider}: {detail}")
        self.provider = provider
        self.detail = detail
