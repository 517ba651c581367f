"""
run_listing_example.py - Tenant Guardian Demonstration

Runs a scam-looking and a plain listing through the analysis, then a
geocode lookup and a streamed chat reply. Uses Gemini when
GEMINI_API_KEY is set, canned demo replies otherwise.
"""

import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from api.mock_data import MockTransport
from tenant_guardian import config
from tenant_guardian.adapters import analyze_listing, resolve_coordinates
from tenant_guardian.chat import stream_chat
from tenant_guardian.exceptions import AnalysisFailed, ChatStreamError
from tenant_guardian.model_client import GeminiTransport
from tenant_guardian.report import format_assessment_report, summarize_assessment
from tests.synthetic_data import generate_listing, generate_scam_listing


def print_separator(title: str = ""):
    print("\n" + "=" * 60)
    if title:
        print(f"  {title}")
        print("=" * 60)


def make_transport():
    if config.DEMO_MODE:
        print("(demo mode: canned replies)")
        return MockTransport()
    return GeminiTransport()


async def run_listing_examples(transport):
    """Analyze one suspicious and one ordinary listing."""
    print_separator("LISTING ANALYSIS")

    for name, listing in [("scam", generate_scam_listing()), ("plain", generate_listing())]:
        print(f"\n[{name}] {listing.title}")
        try:
            assessment = await analyze_listing(listing, transport)
        except AnalysisFailed as exc:
            print(f"  {exc.user_message}")
            continue
        print(json.dumps(summarize_assessment(assessment), indent=2, ensure_ascii=False))

    assessment = await analyze_listing(generate_scam_listing(), transport)
    print("\n" + format_assessment_report(assessment))


async def run_geocode_example(transport):
    print_separator("MAP LOOKUP")
    details = await resolve_coordinates(12.9716, 77.5946, transport)
    print(f"  Address: {details.address}")
    print(f"  Place:   {details.owner_name or '-'}")


async def run_chat_example(transport):
    """Print the reply fragment by fragment."""
    print_separator("CHAT")
    stream = stream_chat(transport, "Is it normal to pay a deposit before viewing?")
    try:
        async for fragment in stream:
            print(fragment, end="", flush=True)
    except ChatStreamError as exc:
        print(f"\n  Chat failed: {exc}")
    print()


async def main():
    print("\n" + "=" * 60)
    print("  TENANT GUARDIAN - Demo")
    print("=" * 60)

    transport = make_transport()
    await run_listing_examples(transport)
    await run_geocode_example(transport)
    await run_chat_example(transport)

    print_separator("DEMO COMPLETE")


if __name__ == "__main__":
    asyncio.run(main())
