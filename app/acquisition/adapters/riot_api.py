"""
app/acquisition/adapters/riot_api.py

Authenticated Riot Games API adapter.

Account and match lookups run on the regional cluster host, summoner and
league lookups on the platform host. Every payload is validated with pydantic
before it reaches the normalizer.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import TypeAdapter

from app.acquisition.adapters.base import FetchScope, SourceAdapter
from app.acquisition.errors import ErrorKind, ParseFailure, SourceError
from app.domain.player_profile import SourceName
from app.domain.source_results import RiotApiResult, RiotMatchSnapshot
from app.schemas.riot_api import RiotAccount, RiotLeagueEntry, RiotMatch, RiotSummoner

DEFAULT_CLUSTER = "americas"

_LEAGUE_ENTRIES = TypeAdapter(list[RiotLeagueEntry])
_MATCH_IDS = TypeAdapter(list[str])


class RiotApiAdapter(SourceAdapter):
    source_name = SourceName.RIOT_API

    def platform_code(self, region: str) -> str:
        return self.config.region_code(region)

    def cluster_for(self, platform: str) -> str:
        return self.config.cluster_map.get(platform, DEFAULT_CLUSTER)

    def platform_host(self, platform: str) -> str:
        return self.config.platform_hosts.get(platform) or self.config.url_template.format(host=platform)

    def cluster_host(self, cluster: str) -> str:
        return self.config.cluster_hosts.get(cluster) or self.config.url_template.format(host=cluster)

    def _fetch(self, scope: FetchScope) -> RiotApiResult:
        identity = scope.identity
        platform = self.platform_code(identity.region)
        platform_host = self.platform_host(platform)
        cluster_host = self.cluster_host(self.cluster_for(platform))

        account_url = (
            f"{cluster_host}/riot/account/v1/accounts/by-riot-id/"
            f"{quote(identity.summoner_name, safe='')}/{quote(identity.tag_line, safe='')}"
        )
        account = self._call(
            scope,
            "FETCH_ACCOUNT",
            lambda: RiotAccount.model_validate(self._get_json(scope, account_url)),
            url=account_url,
        )

        summoner_url = f"{platform_host}/lol/summoner/v4/summoners/by-puuid/{account.puuid}"
        summoner = self._call(
            scope,
            "FETCH_SUMMONER",
            lambda: RiotSummoner.model_validate(self._get_json(scope, summoner_url)),
            url=summoner_url,
        )

        ranked_url = f"{platform_host}/lol/league/v4/entries/by-puuid/{account.puuid}"
        league_entries = self._call(
            scope,
            "FETCH_RANKED",
            lambda: _LEAGUE_ENTRIES.validate_python(self._get_json(scope, ranked_url)),
            url=ranked_url,
        )

        match_ids_url = f"{cluster_host}/lol/match/v5/matches/by-puuid/{account.puuid}/ids"
        match_ids = self._call(
            scope,
            "FETCH_MATCH_IDS",
            lambda: _MATCH_IDS.validate_python(
                self._get_json(
                    scope,
                    match_ids_url,
                    params={"start": 0, "count": self.config.match_count},
                )
            ),
            url=match_ids_url,
        )

        matches = tuple(
            self._fetch_match(scope, cluster_host, match_id, account.puuid)
            for match_id in match_ids[: self.config.match_count]
        )

        return RiotApiResult(
            region=identity.region,
            account=account,
            summoner=summoner,
            league_entries=tuple(league_entries),
            matches=matches,
        )

    def _fetch_match(
        self,
        scope: FetchScope,
        cluster_host: str,
        match_id: str,
        puuid: str,
    ) -> RiotMatchSnapshot:
        url = f"{cluster_host}/lol/match/v5/matches/{quote(match_id, safe='')}"

        def load() -> RiotMatchSnapshot:
            match = RiotMatch.model_validate(self._get_json(scope, url))
            participant = next(
                (item for item in match.info.participants if item.puuid == puuid),
                None,
            )
            if participant is None:
                raise ParseFailure(f"Match {match_id} has no participant for the requested player")
            return RiotMatchSnapshot(
                match_id=match_id,
                champion_name=participant.champion_name,
                win=participant.win,
                kills=participant.kills,
                deaths=participant.deaths,
                assists=participant.assists,
                total_minions_killed=participant.total_minions_killed,
                game_duration_seconds=match.info.game_duration,
            )

        return self._call(scope, "FETCH_MATCH_DETAILS", load, url=url, match_id=match_id)

    def _get_json(
        self,
        scope: FetchScope,
        url: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        response = self._get(scope, url, params=params, headers={"X-Riot-Token": self._api_key()})
        return response.json()

    def _api_key(self) -> str:
        api_key = self.context.settings.riot_api_key
        if not api_key:
            raise SourceError(ErrorKind.CLIENT_ERROR, "Riot API key not configured")
        return api_key
