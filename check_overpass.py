#!/usr/bin/env python3
"""Manual script to verify Overpass and Nominatim connectivity with a live church search."""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from fides.config import settings
from fides.models.domain import Coordinate
from fides.services.churches.overpass_client import check_health
from fides.services.churches.service import SearchOrchestrator

# Praça da Sé, São Paulo
SAMPLE_ORIGIN = Coordinate(-23.5505, -46.6333)


def main():
    print("=" * 60)
    print("Overpass Connection Test")
    print("=" * 60)
    print()

    print("1. Checking configuration...")
    print(f"   [OK] Overpass URL: {settings.overpass_url}")
    print(f"   [OK] Nominatim URL: {settings.nominatim_base_url}")
    print(f"   [OK] User-Agent: {settings.http_user_agent}")
    print()

    print("2. Testing Overpass health check...")
    try:
        if check_health():
            print("   [OK] Overpass is reachable!")
        else:
            print("   [ERROR] Overpass is not responding")
            return 1
    except Exception as e:
        print(f"   [ERROR] Error during health check: {e}")
        return 1
    print()

    print("3. Running a church search around Praça da Sé (2 km)...")
    try:
        outcome = SearchOrchestrator().search_detailed(SAMPLE_ORIGIN, 2000)
    except Exception as e:
        print(f"   [ERROR] Search failed: {e}")
        return 1
    tier = outcome.tier.value if outcome.tier else "none"
    print(f"   [OK] {len(outcome.places)} churches found (tier: {tier})")
    for place in outcome.places[:5]:
        print(f"   - {place.name} ({place.distance_formatted}) {place.address}")
    print()

    print("=" * 60)
    print("[SUCCESS] Overpass is connected and working!")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
