from decimal import Decimal
from typing import NamedTuple, Optional

from chauffeur_pricing.core.enums import VehicleType
from chauffeur_pricing.schemas.estimate import PriceBreakdown, PriceDetails, PriceEstimate
from chauffeur_pricing.utils.formatting import format_distance, format_duration, round_half_up


class Tariff(NamedTuple):
    base_fare: Decimal
    per_km_rate: Decimal
    min_chargeable_km: Decimal


TARIFFS = {
    VehicleType.GREEN: Tariff(Decimal("10"), Decimal("2.30"), Decimal("0")),
    VehicleType.PREMIUM: Tariff(Decimal("18"), Decimal("2.90"), Decimal("0")),
    VehicleType.SEDAN: Tariff(Decimal("45"), Decimal("3.80"), Decimal("10")),
    VehicleType.VAN: Tariff(Decimal("28"), Decimal("3.10"), Decimal("0")),
}
DEFAULT_VEHICLE_TYPE = VehicleType.PREMIUM

CURRENCY = "EUR"
MIN_PRICE_FACTOR = Decimal("0.95")
MAX_PRICE_FACTOR = Decimal("1.05")
ROUND_TRIP_FACTOR = 2


def get_tariff(vehicle_type: Optional[str]) -> tuple[VehicleType, Tariff]:
    """Resolve a vehicle type to its tariff, defaulting to premium for unknown types."""
    try:
        resolved = VehicleType(vehicle_type)
    except ValueError:
        resolved = DEFAULT_VEHICLE_TYPE
    return resolved, TARIFFS[resolved]


def calculate_price(
    distance_meters: int,
    duration_seconds: int,
    vehicle_type: Optional[str] = DEFAULT_VEHICLE_TYPE.value,
    round_trip: bool = False,
    distance_text: Optional[str] = None,
    duration_text: Optional[str] = None,
) -> PriceEstimate:
    """Price a trip from its route figures.

    The total (base fare included) is doubled for round trips. Amounts are
    only rounded once, on the final exact price, and the min/max band is
    derived from that rounded value.
    """
    distance_km = Decimal(distance_meters) / 1000
    duration_minutes = Decimal(duration_seconds) / 60

    resolved_type, tariff = get_tariff(vehicle_type)
    chargeable_km = max(distance_km, tariff.min_chargeable_km)
    distance_charge = chargeable_km * tariff.per_km_rate

    total = tariff.base_fare + distance_charge
    if round_trip:
        total *= ROUND_TRIP_FACTOR

    exact_price = round_half_up(total, 2)
    min_price = round_half_up(exact_price * MIN_PRICE_FACTOR, 2)
    max_price = round_half_up(exact_price * MAX_PRICE_FACTOR, 2)

    breakdown = PriceBreakdown(
        base_fare=float(tariff.base_fare),
        distance_charge=float(distance_charge),
        actual_distance_km=float(distance_km),
        chargeable_distance_km=float(chargeable_km),
        price_per_km=float(tariff.per_km_rate),
        round_trip=round_trip,
        vehicle_type=resolved_type.value,
    )
    details = PriceDetails(
        distance_in_km=float(round_half_up(distance_km, 1)),
        chargeable_distance_in_km=float(round_half_up(chargeable_km, 1)),
        duration_in_minutes=int(round_half_up(duration_minutes)),
        formatted_distance=distance_text or format_distance(distance_meters),
        formatted_duration=duration_text or format_duration(duration_seconds),
    )
    return PriceEstimate(
        exact_price=float(exact_price),
        min_price=float(min_price),
        max_price=float(max_price),
        currency=CURRENCY,
        breakdown=breakdown,
        details=details,
    )
