"""Request validation for price estimates and bookings.

Validators never raise and never touch their input: every rule is checked
independently and all violations are returned together so the client can
fix them in one go.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional

from chauffeur_pricing.core.enums import VehicleType
from chauffeur_pricing.schemas.booking import BookingRequest
from chauffeur_pricing.schemas.estimate import PriceEstimateRequest, ValidationResult

MIN_PASSENGERS = 1
MAX_PASSENGERS = 10

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PICKUP_PLACE_REQUIRED = "L'ID du lieu de départ est obligatoire"
DROPOFF_PLACE_REQUIRED = "L'ID du lieu d'arrivée est obligatoire"
PICKUP_ADDRESS_REQUIRED = "L'adresse de départ est obligatoire"
DROPOFF_ADDRESS_REQUIRED = "L'adresse d'arrivée est obligatoire"
PICKUP_DATE_REQUIRED = "La date et l'heure de départ sont obligatoires"
PICKUP_DATE_INVALID = "Le format de la date et heure de départ est invalide"
PICKUP_DATE_PAST = "La date de départ doit être dans le futur"
PASSENGERS_REQUIRED = "Le nombre de passagers est obligatoire"
PASSENGERS_TOO_FEW = "Le nombre de passagers doit être d'au moins 1"
PASSENGERS_TOO_MANY = "Le nombre de passagers ne peut pas dépasser 10"
LUGGAGE_INVALID = "Le nombre de bagages doit être un nombre positif"
RETURN_DATE_REQUIRED = "La date et l'heure de retour sont obligatoires pour un aller-retour"
RETURN_DATE_INVALID = "Le format de la date et heure de retour est invalide"
RETURN_DATE_BEFORE_PICKUP = "La date de retour doit être postérieure à la date de départ"
VEHICLE_TYPE_REQUIRED = "Le type de véhicule est obligatoire"
VEHICLE_TYPE_INVALID = "Type de véhicule invalide"
CUSTOMER_INFO_REQUIRED = "Les informations client sont obligatoires"
CUSTOMER_NAME_REQUIRED = "Le nom du client est obligatoire"
CUSTOMER_EMAIL_REQUIRED = "L'email du client est obligatoire"
CUSTOMER_EMAIL_INVALID = "Le format de l'email est invalide"
CUSTOMER_PHONE_REQUIRED = "Le téléphone du client est obligatoire"
PRICE_ESTIMATE_REQUIRED = "L'estimation du prix est obligatoire"


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp; naive values are read as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_passengers(value: Any, errors: list) -> None:
    passengers = parse_int(value)
    if passengers is None or passengers < MIN_PASSENGERS:
        errors.append(PASSENGERS_TOO_FEW)
    elif passengers > MAX_PASSENGERS:
        errors.append(PASSENGERS_TOO_MANY)


def _check_luggage(value: Any, errors: list) -> None:
    luggage = parse_int(value)
    if luggage is None or luggage < 0:
        errors.append(LUGGAGE_INVALID)


def _check_pickup(value: Any, now: datetime, errors: list) -> Optional[datetime]:
    if _is_blank(value):
        errors.append(PICKUP_DATE_REQUIRED)
        return None

    pickup = parse_datetime(value)
    if pickup is None:
        errors.append(PICKUP_DATE_INVALID)
    elif pickup <= now:
        errors.append(PICKUP_DATE_PAST)
    return pickup


def _check_return(value: Any, pickup: Optional[datetime], errors: list) -> None:
    if _is_blank(value):
        errors.append(RETURN_DATE_REQUIRED)
        return

    return_at = parse_datetime(value)
    if return_at is None:
        errors.append(RETURN_DATE_INVALID)
    elif pickup is not None and return_at <= pickup:
        errors.append(RETURN_DATE_BEFORE_PICKUP)


def _is_known_vehicle(value: str) -> bool:
    return value in {vt.value for vt in VehicleType}


def validate_price_request(
    request: PriceEstimateRequest,
    now: Optional[datetime] = None,
) -> ValidationResult:
    now = now or datetime.now(timezone.utc)
    errors: list[str] = []

    if _is_blank(request.pickup_place_id):
        errors.append(PICKUP_PLACE_REQUIRED)
    if _is_blank(request.dropoff_place_id):
        errors.append(DROPOFF_PLACE_REQUIRED)

    pickup = _check_pickup(request.pickup_date_time, now, errors)

    if request.passengers is not None:
        _check_passengers(request.passengers, errors)
    if request.luggage is not None:
        _check_luggage(request.luggage, errors)

    # Absent means the default tariff; anything else must be a known type
    if request.vehicle_type is not None and not _is_known_vehicle(request.vehicle_type):
        errors.append(VEHICLE_TYPE_INVALID)

    if request.round_trip:
        _check_return(request.return_date_time, pickup, errors)

    return ValidationResult(valid=not errors, errors=errors)


def _join_date_time(date_part: Optional[str], time_part: Optional[str]) -> Optional[str]:
    if _is_blank(date_part) or _is_blank(time_part):
        return None
    return f"{date_part.strip()}T{time_part.strip()}"


def validate_booking_request(
    request: BookingRequest,
    now: Optional[datetime] = None,
) -> ValidationResult:
    now = now or datetime.now(timezone.utc)
    errors: list[str] = []

    if _is_blank(request.pickup_address):
        errors.append(PICKUP_ADDRESS_REQUIRED)
    if _is_blank(request.dropoff_address):
        errors.append(DROPOFF_ADDRESS_REQUIRED)

    pickup = _check_pickup(_join_date_time(request.pickup_date, request.pickup_time), now, errors)

    if _is_blank(request.passengers):
        errors.append(PASSENGERS_REQUIRED)
    else:
        _check_passengers(request.passengers, errors)
    if request.luggage is not None:
        _check_luggage(request.luggage, errors)

    if _is_blank(request.vehicle_type):
        errors.append(VEHICLE_TYPE_REQUIRED)
    elif not _is_known_vehicle(request.vehicle_type):
        errors.append(VEHICLE_TYPE_INVALID)

    customer = request.customer_info
    if customer is None:
        errors.append(CUSTOMER_INFO_REQUIRED)
    else:
        if _is_blank(customer.name):
            errors.append(CUSTOMER_NAME_REQUIRED)
        if _is_blank(customer.email):
            errors.append(CUSTOMER_EMAIL_REQUIRED)
        elif not EMAIL_RE.match(customer.email):
            errors.append(CUSTOMER_EMAIL_INVALID)
        if _is_blank(customer.phone):
            errors.append(CUSTOMER_PHONE_REQUIRED)

    if request.round_trip:
        _check_return(_join_date_time(request.return_date, request.return_time), pickup, errors)

    if not request.price_estimate:
        errors.append(PRICE_ESTIMATE_REQUIRED)

    return ValidationResult(valid=not errors, errors=errors)
