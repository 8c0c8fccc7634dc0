"""
Look up one summoner from the CLI and print the profile (or error envelope) as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys

from app.acquisition.errors import TotalFailure
from app.acquisition.logging_utils import configure_logging
from app.domain.player_profile import ALL_SOURCES, PREFERRED_SOURCE_CHOICES, Identity
from app.services.summoner_service import SummonerLookupService


def main() -> int:
    parser = argparse.ArgumentParser(description="Fetch a player's profile through the source failover chain.")
    parser.add_argument("summoner_name", help="Riot ID game name, e.g. 'Faker'.")
    parser.add_argument("tag_line", help="Riot ID tag line, e.g. 'KR1'.")
    parser.add_argument("--region", default="na", help="Region code such as na, euw, eune, kr, oce.")
    parser.add_argument(
        "--source",
        dest="source",
        default=ALL_SOURCES,
        choices=sorted(PREFERRED_SOURCE_CHOICES),
        help="Restrict the lookup to one source.",
    )
    parser.add_argument(
        "--use-riot-api",
        action="store_true",
        help="Try the authenticated Riot API first (requires RIOT_API_KEY).",
    )
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Write the profile and source audit rows to the database.",
    )
    parser.add_argument("--log-level", default=None, help="Overrides LOG_LEVEL.")
    args = parser.parse_args()

    configure_logging(args.log_level)

    try:
        identity = Identity(
            summoner_name=args.summoner_name,
            tag_line=args.tag_line,
            region=args.region,
            preferred_source=args.source,
            allow_authenticated_source=args.use_riot_api,
        )
    except ValueError as exc:
        parser.error(str(exc))

    service = SummonerLookupService(persistence_enabled=args.persist)
    try:
        outcome = service.lookup(identity)
    except TotalFailure as failure:
        service.persist_total_failure(failure)
        print(json.dumps(failure.to_envelope(), indent=2), file=sys.stderr)
        return 2

    service.persist_outcome(outcome)
    print(json.dumps(outcome.profile.to_dict(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
