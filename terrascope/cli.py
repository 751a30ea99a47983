"""
Terminal front-end for the TerraScope dashboard core.

Usage:
  terrascope Japan
  terrascope Japan --translate Spanish
  terrascope --url "http://localhost:5173/?country=Peru"
  terrascope France --compare Germany Italy --json
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .config import get_settings
from .models import CountryProfile, FetchStatus
from .services.http_pool import close_http_pool
from .services.panels import DashboardPanels
from .services.presentation import (
    flag_url,
    format_rate,
    landmark_category,
    risk_level,
    to_fahrenheit,
    weather_label,
    wind_direction,
)
from .services.view_state import ViewState, ViewStateCoordinator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="terrascope", description="AI-powered country profiles in the terminal.")
    parser.add_argument("country", nargs="?", help="Country to look up")
    parser.add_argument("--language", help="Content language (defaults to DEFAULT_LANGUAGE)")
    parser.add_argument("--translate", metavar="LANGUAGE", help="Translate description and fun facts")
    parser.add_argument("--compare", nargs="+", metavar="COUNTRY", default=[], help="Countries to compare with")
    parser.add_argument("--url", help="Deep link to start from (reads its 'country' parameter)")
    parser.add_argument("--no-panels", action="store_true", help="Skip weather, news and exchange-rate panels")
    parser.add_argument("--json", action="store_true", help="Print the view state as JSON")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _state_to_dict(state: ViewState, panels: DashboardPanels, share_url: Optional[str]) -> Dict[str, Any]:
    payload = asdict(state)
    payload["status"] = state.status.value
    payload["translation_status"] = state.translation_status.value
    payload["active_profile"] = state.active_profile.model_dump() if state.active_profile else None
    payload["translated_content"] = state.translated_content.model_dump() if state.translated_content else None
    payload["comparison"] = [profile.model_dump() for profile in state.comparison]
    payload["panels"] = {
        name: {
            "status": slot.status.value,
            "data": slot.data.model_dump() if hasattr(slot.data, "model_dump") else slot.data,
        }
        for name, slot in panels.slots().items()
    }
    payload["share_url"] = share_url
    return payload


def _render_profile(coordinator: ViewStateCoordinator) -> List[str]:
    profile = coordinator.active_profile
    if profile is None:
        return []
    overlay = coordinator.overlay
    lines = [
        f"{profile.name} ({profile.isoAlpha2}) - {profile.officialName}",
        f"  Region: {profile.region}    Flag: {flag_url(profile.isoAlpha2)}",
        f"  Capital: {profile.capital}    Population: {profile.population}",
        f"  Currency: {profile.currency.name} ({profile.currency.code}, {profile.currency.symbol})",
        f"  Languages: {', '.join(profile.languages)}",
        f"  Timezone: {profile.primary_timezone or '-'}    Calling code: {profile.callingCode}    TLD: {profile.internetTLD}",
        "",
        overlay.description or "",
    ]
    if overlay.status == FetchStatus.ERROR:
        lines.append(f"  [translation into {coordinator.selected_content_language} failed]")
    if overlay.fun_facts:
        lines.append("")
        lines.append("Fun facts:")
        lines.extend(f"  * {fact}" for fact in overlay.fun_facts)

    if profile.economicHistory:
        lines.append("")
        lines.append("Economy (GDP growth / inflation, %):")
        for metric in profile.economicHistory:
            lines.append(f"  {metric.year}: {metric.gdp}  /  {metric.inflation}")

    if profile.landmarks:
        lines.append("")
        lines.append("Landmarks:")
        for landmark in profile.landmarks:
            emoji = f"{landmark.emoji} " if landmark.emoji else ""
            lines.append(f"  {emoji}{landmark.name} [{landmark_category(landmark.type)}] {landmark.url or ''}".rstrip())

    advisory = profile.safetyAdvisory
    numbers = profile.emergencyNumbers
    lines.extend(
        [
            "",
            f"Safety: {risk_level(advisory.score)} ({advisory.score:.1f}/5.0) - {advisory.message}",
            f"  Emergency: police {numbers.police}, ambulance {numbers.ambulance}, fire {numbers.fire}",
            f"  Visa: {advisory.visaInfo}",
        ]
    )
    return lines


def _render_panels(coordinator: ViewStateCoordinator) -> List[str]:
    panels = coordinator.panels
    profile = coordinator.active_profile
    lines: List[str] = []

    weather = panels.weather.data
    if panels.weather.available and weather is not None:
        lines.append(
            f"Weather in {profile.capital}: {weather_label(weather.weatherCode)}, "
            f"{round(weather.temperature)}°C / {to_fahrenheit(weather.temperature)}°F "
            f"(feels {round(weather.feelsLike)}°C), humidity {weather.humidity}%, "
            f"wind {weather.windSpeed} km/h {wind_direction(weather.windDirection)}"
        )

    rates = panels.exchange.data
    if panels.exchange.available and rates:
        quoted = ", ".join(f"{code} {format_rate(rate)}" for code, rate in rates.items())
        lines.append(f"1 {profile.currency.code} = {quoted}")

    advisory = panels.advisory.data
    if panels.advisory.available and advisory is not None:
        lines.append(f"Live advisory: {advisory.score:.1f}/5.0 - {advisory.message}")

    news = panels.news.data
    if panels.news.available and news is not None:
        lines.append("")
        lines.append("News:")
        lines.append(news.content)
        lines.extend(f"  - {source.title}: {source.uri}" for source in news.sources)
    return lines


def _render_comparison(entries: List[CountryProfile]) -> List[str]:
    rows = [
        ("Country", lambda p: f"{p.name} ({p.isoAlpha2})"),
        ("Capital", lambda p: p.capital),
        ("Population", lambda p: p.population),
        ("Currency", lambda p: f"{p.currency.code} {p.currency.symbol}"),
        ("Languages", lambda p: ", ".join(p.primary_languages()) + (f" +{len(p.languages) - 3}" if len(p.languages) > 3 else "")),
        ("TLD", lambda p: p.internetTLD),
        ("Climate", lambda p: p.climate),
        ("Safety", lambda p: f"{p.safetyAdvisory.score:.1f}/5.0"),
    ]
    lines = ["Comparison:"]
    for label, getter in rows:
        lines.append(f"  {label:<11}" + " | ".join(getter(profile) for profile in entries))
    return lines


async def run_dashboard(args: argparse.Namespace) -> int:
    settings = get_settings()
    coordinator = ViewStateCoordinator.from_settings(settings, url=args.url)
    if args.language:
        coordinator.set_app_language(args.language)

    load_panels = not args.no_panels
    try:
        if args.country:
            await coordinator.search(args.country, load_panels=load_panels)
        else:
            await coordinator.initialize(load_panels=load_panels)

        if coordinator.active_profile is None:
            print(coordinator.snapshot().error_message or "No country given.", file=sys.stderr)
            return 1

        if args.compare:
            coordinator.add_to_comparison()
            for other in args.compare:
                if await coordinator.search(other, load_panels=False):
                    coordinator.add_to_comparison()
            coordinator.toggle_compare_mode()
        elif args.translate:
            await coordinator.translate_content(args.translate)

        if args.json:
            print(json.dumps(_state_to_dict(coordinator.snapshot(), coordinator.panels, coordinator.share_url()), ensure_ascii=False, indent=2))
            return 0

        state = coordinator.snapshot()
        lines: List[str] = []
        if state.is_compare_mode:
            lines.extend(_render_comparison(list(state.comparison)))
            lines.append("")
        if state.show_detail:
            lines.extend(_render_profile(coordinator))
            lines.append("")
            lines.extend(_render_panels(coordinator))
        share = coordinator.share_url()
        if share:
            lines.append("")
            lines.append(f"Share: {share}")
        print("\n".join(lines))
        return 0
    finally:
        await close_http_pool()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    try:
        return asyncio.run(run_dashboard(args))
    except ValueError as exc:
        # Missing GEMINI_API_KEY surfaces here.
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
