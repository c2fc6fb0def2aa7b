"""CLI runner for ranking listings against a buyer profile.

Run via: python -m leadmatch.cli buyer.json --properties listings.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .analysis.matcher import LeadMatcher, summarize
from .config import reload_config
from .exceptions import InputError
from .models.buyer import BuyerProfile, parse_buyer
from .models.match import CompatibilityScore
from .models.property import PropertyListing, parse_listing
from .storage.listings import default_listings, load_listings

console = Console()
logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with Rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def load_request(
    buyer_path: Path, properties_path: Optional[Path] = None
) -> tuple[BuyerProfile, list[PropertyListing]]:
    """Read the buyer (and optionally listings) from JSON files.

    The buyer file may hold a bare buyer profile or a full match request
    ``{"buyer": ..., "properties": [...]}``.
    """
    try:
        raw = json.loads(Path(buyer_path).read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise InputError(f"Buyer file not found: {buyer_path}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Buyer file {buyer_path} is not valid JSON: {e}") from e

    embedded = []
    if isinstance(raw, dict) and "buyer" in raw:
        embedded = raw.get("properties") or []
        raw = raw["buyer"]

    buyer = parse_buyer(raw)

    if properties_path:
        listings = load_listings(properties_path)
    elif embedded:
        listings = [parse_listing(item) for item in embedded]
    else:
        listings = default_listings()

    return buyer, listings


def print_matches(
    matches: list[CompatibilityScore],
    listings: dict[str, PropertyListing],
) -> None:
    """Print ranked matches as a Rich table followed by reasoning."""
    if not matches:
        console.print("[yellow]No listings to match.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Property", max_width=35)
    table.add_column("Location")
    table.add_column("Price", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Action")
    table.add_column("Interest")
    table.add_column("P/L/F/S/T", justify="right")

    for rank, match in enumerate(matches, 1):
        listing = listings.get(match.property_id)

        if match.overall_score >= 80:
            score_str = f"[green]{match.overall_score}[/green]"
        elif match.overall_score >= 60:
            score_str = f"[yellow]{match.overall_score}[/yellow]"
        else:
            score_str = f"[red]{match.overall_score}[/red]"

        b = match.breakdown
        breakdown_str = (
            f"{b.price_match:.0f}/{b.location_match:.0f}/{b.features_match:.0f}/"
            f"{b.size_match:.0f}/{b.timeline_match:.0f}"
        )

        table.add_row(
            str(rank),
            (listing.title or listing.address or listing.id)[:35] if listing else match.property_id,
            listing.location if listing else "",
            f"${listing.price:,.0f}" if listing else "",
            score_str,
            match.recommended_action.value,
            match.estimated_interest_level.value,
            breakdown_str,
        )

    console.print(table)
    console.print()

    for rank, match in enumerate(matches, 1):
        source = "AI" if match.ai_enriched else "template"
        console.print(f"[bold]{rank}. {match.property_id}[/bold] [dim]({source})[/dim]")
        console.print(f"   {match.reasoning}")


def build_matcher(use_ai: bool = True) -> LeadMatcher:
    """Matcher for the CLI.

    ``--no-ai`` forces template reasoning; otherwise settings decide.
    """
    return LeadMatcher(enable_ai_reasoning=None if use_ai else False)


async def run_matching(
    buyer: BuyerProfile,
    listings: list[PropertyListing],
    limit: Optional[int] = None,
    use_ai: bool = True,
) -> list[CompatibilityScore]:
    """Rank listings for a buyer."""
    matcher = build_matcher(use_ai)
    return await matcher.rank_matches(buyer, listings, limit=limit)


def main() -> None:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="LeadMatch buyer/property ranking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m leadmatch.cli buyer.json
  python -m leadmatch.cli buyer.json --properties listings.json --limit 5
  python -m leadmatch.cli request.json --no-ai --json
        """,
    )

    parser.add_argument("buyer", type=Path, help="Buyer profile or match request JSON")
    parser.add_argument(
        "--properties",
        type=Path,
        default=None,
        help="Listings JSON (default: listings in the request, then the catalog)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of matches to show (default: LEADMATCH_DEFAULT_MATCH_LIMIT, 10)",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip Gemini reasoning and use template text",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print matches as JSON instead of a table",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    load_dotenv(Path("backend/.env"))
    reload_config()
    setup_logging(verbose=args.verbose)

    try:
        buyer, listings = load_request(args.buyer, args.properties)
    except InputError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(2)

    try:
        matches = asyncio.run(
            run_matching(buyer, listings, limit=args.limit, use_ai=not args.no_ai)
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)

    if args.json:
        payload = {
            "matches": [m.model_dump(mode="json", by_alias=True) for m in matches],
            "count": len(matches),
        }
        console.print_json(data=payload)
        return

    console.print(
        f"[bold]Top {len(matches)} of {len(listings)} listings for {buyer.name}[/bold]"
    )
    console.print()
    print_matches(matches, {listing.id: listing for listing in listings})

    stats = summarize(matches)
    console.print()
    console.print(
        f"[dim]Average score {stats['avg_score']}/100, "
        f"{stats['ai_enriched']} AI-explained[/dim]"
    )


if __name__ == "__main__":
    main()
