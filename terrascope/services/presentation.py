"""Pure lookups shared by presentation layers (CLI, web front-ends)."""

from __future__ import annotations

from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

MAJOR_CURRENCIES: Tuple[str, ...] = ("USD", "EUR", "GBP", "JPY", "CNY", "AUD", "CAD", "CHF")

FLAG_URL_TEMPLATE = "https://flagcdn.com/w640/{iso}.png"

TILE_URLS: Dict[str, str] = {
    "dark": "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png",
    "light": "https://{s}.basemaps.cartocdn.com/rastertiles/voyager/{z}/{x}/{y}{r}.png",
}
TILE_ATTRIBUTION = "© OpenStreetMap contributors © CARTO"

# Checked in order; first keyword hit wins.
_LANDMARK_KEYWORDS: Sequence[Tuple[str, Tuple[str, ...]]] = (
    ("nature", ("nature", "mountain", "river", "park")),
    ("historical", ("history", "ancient", "temple", "museum")),
    ("urban", ("urban", "city", "modern", "tower")),
    ("coastal", ("beach", "coast", "sea", "island")),
)

_WMO_LABELS: Dict[int, str] = {
    0: "Clear Sky",
    1: "Mainly Clear",
    2: "Partly Cloudy",
    3: "Overcast",
    45: "Foggy",
    48: "Foggy",
    51: "Drizzle",
    53: "Drizzle",
    55: "Drizzle",
    56: "Freezing Drizzle",
    57: "Freezing Drizzle",
    61: "Rain",
    63: "Rain",
    65: "Rain",
    66: "Freezing Rain",
    67: "Freezing Rain",
    71: "Snow",
    73: "Snow",
    75: "Snow",
    77: "Snow Grains",
    80: "Rain Showers",
    81: "Rain Showers",
    82: "Rain Showers",
    85: "Snow Showers",
    86: "Snow Showers",
    95: "Thunderstorm",
    96: "Thunderstorm & Hail",
    99: "Thunderstorm & Hail",
}

_COMPASS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")


def landmark_category(landmark_type: Optional[str]) -> str:
    """Map a free-form landmark type to a display category; ``other`` otherwise."""
    text = (landmark_type or "").lower()
    for category, keywords in _LANDMARK_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category
    return "other"


def weather_label(code: int) -> str:
    return _WMO_LABELS.get(code, "Unknown")


def wind_direction(degrees: float) -> str:
    return _COMPASS[int(degrees / 45.0 + 0.5) % 8]


def to_fahrenheit(celsius: float) -> int:
    return round(celsius * 9 / 5 + 32)


def risk_level(score: float) -> str:
    if score < 2.5:
        return "Low Risk"
    if score < 3.5:
        return "Medium Risk"
    if score < 4.5:
        return "High Risk"
    return "Extreme Warning"


def display_rates(
    rates: Mapping[str, float],
    base_code: str,
    targets: Iterable[str] = MAJOR_CURRENCIES,
) -> Dict[str, float]:
    """Rates to show for ``base_code``: the target list minus the base itself.

    Targets missing from ``rates`` are left out rather than shown as zero.
    """
    base = (base_code or "").upper()
    return {code: rates[code] for code in targets if code != base and code in rates}


def format_rate(rate: float) -> str:
    return f"{rate:.4f}" if rate < 0.01 else f"{rate:.2f}"


def flag_url(iso_alpha2: str) -> str:
    return FLAG_URL_TEMPLATE.format(iso=iso_alpha2.lower())


def tile_url(theme: str) -> str:
    return TILE_URLS.get(theme, TILE_URLS["light"])
