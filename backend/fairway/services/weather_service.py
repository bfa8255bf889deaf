"""
Weather service for tee-time forecasts.

Uses the OpenWeather 5-day / 3-hour forecast endpoint and picks the block
closest to each round's tee time on the round's date.
"""
import logging
from datetime import date, time
from typing import Any, Dict, List, Optional
import httpx
from fairway.core.config import settings
from fairway.core.exceptions import ExternalServiceError
from fairway.core.utils import combine_local, parse_local_datetime
from fairway.models.golf import Round

logger = logging.getLogger(__name__)


def location_query(city: Optional[str], zip_code: Optional[str]) -> Optional[str]:
    """Zip code wins over city; None when the course has neither."""
    if zip_code:
        return f"{zip_code.strip()},us"
    if city:
        return city.strip()
    return None


async def fetch_forecast(query: str) -> List[Dict[str, Any]]:
    """Fetch forecast blocks for a location query."""
    api_key = getattr(settings, 'WEATHER_API_KEY', '')
    if not api_key:
        raise ExternalServiceError("weather", "WEATHER_API_KEY is not configured")

    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(
                settings.WEATHER_API_URL,
                params={"q": query, "units": settings.WEATHER_UNITS, "appid": api_key}
            )
            response.raise_for_status()
            data = response.json()
    except httpx.HTTPStatusError as e:
        logger.error(f"Weather API returned {e.response.status_code} for '{query}'")
        raise ExternalServiceError("weather", f"HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.error(f"Weather API request failed for '{query}': {e}")
        raise ExternalServiceError("weather", str(e))

    if str(data.get("cod")) != "200":
        raise ExternalServiceError("weather", f"Unexpected response code {data.get('cod')}")
    return data.get("list", [])


def pick_closest_block(blocks: List[Dict[str, Any]], round_date: date, tee_time: Optional[time]) -> Optional[Dict[str, Any]]:
    """Forecast block on round_date closest to the tee time (noon if unknown)."""
    target = combine_local(round_date, tee_time or time(12, 0))
    closest = None
    min_diff = None
    for block in blocks:
        block_time = parse_local_datetime(block["dt_txt"])
        if block_time.date() != round_date:
            continue
        diff = abs((block_time - target).total_seconds())
        if min_diff is None or diff < min_diff:
            min_diff = diff
            closest = block
    return closest


async def round_weather(rnd: Round, forecasts: Dict[str, List[Dict[str, Any]]], today: Optional[date] = None) -> Dict[str, Any]:
    """
    Forecast summary for one round.

    forecasts caches blocks per location query so several rounds at the same
    course only hit the API once. Failures leave the weather fields empty.
    """
    today = today or date.today()
    course = rnd.course
    result = {
        "round_id": rnd.id,
        "course_name": course.name if course else "Unknown Course",
        "date": rnd.round_date,
        "tee_time": rnd.tee_time,
    }

    query = location_query(course.city, course.zip_code) if course else None
    if not query:
        return result

    if query not in forecasts:
        try:
            forecasts[query] = await fetch_forecast(query)
        except ExternalServiceError as e:
            logger.warning(f"No forecast for round {rnd.id}: {e}")
            forecasts[query] = []

    block = pick_closest_block(forecasts[query], rnd.round_date, rnd.tee_time)
    if block is None:
        result["is_too_far"] = rnd.round_date > today
        return result

    weather = (block.get("weather") or [{}])[0]
    result.update({
        "temp": round(block["main"]["temp"]),
        "description": weather.get("main", ""),
        "icon": weather.get("icon", ""),
        "wind_speed": round(block.get("wind", {}).get("speed", 0)),
        "pop": block.get("pop"),
    })
    return result
