import logging
from typing import Any, Dict, List

from openmeteo_weather_mcp.client import GEOCODING_URL, OpenMeteoClient
from openmeteo_weather_mcp.errors import FormattingError, UpstreamError
from openmeteo_weather_mcp.models import Coordinates, LocationMatch, LocationQuery
from openmeteo_weather_mcp.validation import MAX_SEARCH_LIMIT

logger = logging.getLogger("openmeteo_weather.location")


# Common ways of writing a country that are neither Open-Meteo's English
# name nor the ISO 3166-1 alpha-2 code it reports
COUNTRY_ALIASES = {
    "usa": "US",
    "united states of america": "US",
    "america": "US",
    "uk": "GB",
    "great britain": "GB",
    "britain": "GB",
    "england": "GB",
    "scotland": "GB",
    "wales": "GB",
    "northern ireland": "GB",
    "uae": "AE",
    "deutschland": "DE",
    "holland": "NL",
    "the netherlands": "NL",
    "nederland": "NL",
    "españa": "ES",
    "espana": "ES",
    "italia": "IT",
    "schweiz": "CH",
    "suisse": "CH",
    "österreich": "AT",
    "osterreich": "AT",
    "nippon": "JP",
    "south korea": "KR",
    "korea": "KR",
    "russia": "RU",
    "czech republic": "CZ",
    "brasil": "BR",
    "méxico": "MX",
}


def _normalize(value: str) -> str:
    return " ".join(value.replace(".", "").casefold().split())


def _matches_country(result: Dict[str, Any], country: str) -> bool:
    """Match on country name, ISO code, a known alias, or the region (admin1)"""
    wanted = _normalize(country)
    if not wanted:
        return True

    code = result.get("country_code")
    if isinstance(code, str) and code:
        code = code.casefold()
        alias = COUNTRY_ALIASES.get(wanted)
        if code == wanted or (alias is not None and code == alias.casefold()):
            return True

    for field in ("country", "admin1"):
        value = result.get(field)
        if not isinstance(value, str):
            continue
        name = _normalize(value)
        # Two-letter input is a code; prefixes like "in" match too many names
        if name == wanted or (len(wanted) > 2 and name.startswith(wanted)):
            return True
    return False


def parse_location(result: Dict[str, Any]) -> LocationMatch:
    """Build a LocationMatch from one geocoding result; name and coordinates are required"""
    name = result.get("name")
    if not isinstance(name, str) or not name.strip():
        raise FormattingError("name")

    latitude = result.get("latitude")
    longitude = result.get("longitude")
    if not isinstance(latitude, (int, float)) or not isinstance(longitude, (int, float)):
        raise FormattingError("latitude/longitude")

    population = result.get("population")
    elevation = result.get("elevation")
    return LocationMatch(
        name=name.strip(),
        country=result.get("country") or None,
        country_code=result.get("country_code") or None,
        admin1=result.get("admin1") or None,
        coordinates=Coordinates(latitude=latitude, longitude=longitude),
        elevation=float(elevation) if isinstance(elevation, (int, float)) else None,
        timezone=result.get("timezone") or None,
        population=int(population) if isinstance(population, (int, float)) and population > 0 else None,
    )


async def search_locations(client: OpenMeteoClient, query: LocationQuery) -> List[LocationMatch]:
    """Search Open-Meteo geocoding for the query's city, filtered by country when given"""
    # The geocoding API matches names only; country filtering happens here.
    count = MAX_SEARCH_LIMIT if query.country else query.limit
    params = {"name": query.city, "count": count, "language": "en", "format": "json"}

    data = await client.get_json(GEOCODING_URL, params)

    results = data.get("results") or []
    if not isinstance(results, list):
        raise UpstreamError("Unexpected OpenMeteo geocoding response: 'results' is not a list")

    if query.country:
        results = [r for r in results if isinstance(r, dict) and _matches_country(r, query.country)]
        logger.debug(f"{len(results)} results left after filtering on country '{query.country}'")

    matches = []
    for result in results[: query.limit]:
        if not isinstance(result, dict):
            raise UpstreamError("Unexpected OpenMeteo geocoding response: malformed result entry")
        try:
            matches.append(parse_location(result))
        except (FormattingError, ValueError) as e:
            logger.error(f"Unusable geocoding result {result}: {str(e)}")
            raise UpstreamError(f"Unexpected OpenMeteo geocoding response: {str(e)}") from e

    logger.info(f"Found {len(matches)} locations for '{query.query}'")
    return matches
