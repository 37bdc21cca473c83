from decimal import Decimal, ROUND_HALF_UP


def round_half_up(value, places: int = 0) -> Decimal:
    exponent = Decimal(1).scaleb(-places)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)


def format_distance(meters) -> str:
    """Human readable distance: metres below 1 km, one decimal below 10 km."""
    km = Decimal(str(meters)) / 1000
    if km < 1:
        return f"{round_half_up(meters)} m"
    if km < 10:
        return f"{round_half_up(km, 1)} km"
    return f"{round_half_up(km)} km"


def format_duration(seconds) -> str:
    minutes = int(seconds) // 60
    if minutes < 60:
        return f"{minutes} min"

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f"{hours} h"
    return f"{hours} h {remaining} min"
