"""
Flight service: travel readiness of a trip's roster.
"""
from datetime import date
from typing import Any, Dict, List, Optional
from fairway.core.utils import format_time
from fairway.models.flight import LegType
from fairway.models.trip import Golfer


def is_confirmed(golfer: Golfer) -> bool:
    """A golfer is confirmed when driving or when both legs are booked."""
    if golfer.is_driving:
        return True
    legs = {f.leg_type for f in golfer.flights}
    return LegType.ARRIVAL in legs and LegType.DEPARTURE in legs


def build_flight_status(golfers: List[Golfer], today: Optional[date] = None) -> Dict[str, Any]:
    """Counts plus arrival and departure boards sorted by time."""
    today = today or date.today()

    arrivals_today = 0
    confirmed = 0
    arrivals = []
    departures = []

    for golfer in golfers:
        if is_confirmed(golfer):
            confirmed += 1
        if not golfer.is_driving and any(
            f.leg_type == LegType.ARRIVAL and f.arrival_time.date() == today for f in golfer.flights
        ):
            arrivals_today += 1

        for flight in golfer.flights:
            is_arrival = flight.leg_type == LegType.ARRIVAL
            entry = {
                "id": flight.id,
                "golfer_name": golfer.name,
                "airline": flight.airline,
                "flight_number": flight.flight_number,
                "airport": flight.arrival_airport if is_arrival else flight.departure_airport,
                "time": flight.arrival_time if is_arrival else flight.departure_time,
            }
            entry["time_label"] = format_time(entry["time"])
            (arrivals if is_arrival else departures).append(entry)

    arrivals.sort(key=lambda e: e["time"])
    departures.sort(key=lambda e: e["time"])

    return {
        "total_golfers": len(golfers),
        "arrivals_today": arrivals_today,
        "confirmed": confirmed,
        "missing_info": len(golfers) - confirmed,
        "arrivals": arrivals,
        "departures": departures,
    }
