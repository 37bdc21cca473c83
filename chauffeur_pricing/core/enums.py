from enum import Enum


class VehicleType(str, Enum):
    GREEN = "green"
    PREMIUM = "premium"
    SEDAN = "sedan"
    VAN = "van"

    def __str__(self):
        return self.value


class ResponseProjection(str, Enum):
    FULL = "full"
    ESTIMATE = "estimate"

    def __str__(self):
        return self.value


class FallbackReason(str, Enum):
    MISSING_PLACE_ID = "missing_place_id"
    MISSING_API_KEY = "missing_api_key"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    PROVIDER_STATUS = "provider_status"
    MALFORMED_RESPONSE = "malformed_response"
    UNEXPECTED = "unexpected"

    def __str__(self):
        return self.value
