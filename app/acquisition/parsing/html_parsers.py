"""
BeautifulSoup-based parsing layer for scraped summoner pages.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from bs4 import BeautifulSoup, Tag

from app.acquisition.config.models import SourceConfig
from app.acquisition.errors import ParseFailure
from app.domain.player_profile import Identity

TIER_REGEX = re.compile(
    r"\b(Iron|Bronze|Silver|Gold|Platinum|Emerald|Diamond|Master|Grandmaster|Challenger)\b"
    r"(?:\s*(IV|V|I{1,3})\b)?",
    flags=re.IGNORECASE,
)
LP_REGEX = re.compile(r"(\d+)\s*LP", flags=re.IGNORECASE)
KDA_SPLIT_REGEX = re.compile(r"\s*[/\-]\s*")
KDA_TRIPLE_REGEX = re.compile(r"(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)\s*/\s*(\d+(?:\.\d+)?)")
INT_REGEX = re.compile(r"\d+")
FLOAT_REGEX = re.compile(r"\d+(?:\.\d+)?")
DURATION_REGEX = re.compile(r"(\d+):(\d{2})")

# Tiers without divisions.
APEX_TIERS = frozenset({"MASTER", "GRANDMASTER", "CHALLENGER"})

ResultT = TypeVar("ResultT")


class HTMLExtraction:
    """
    Deterministic extraction helpers shared by every page parser.
    """

    @staticmethod
    def select_elements(root: BeautifulSoup | Tag, selectors: list[str]) -> list[Tag]:
        found: list[Tag] = []
        seen: set[int] = set()
        for selector in selectors:
            for node in root.select(selector):
                if id(node) in seen:
                    continue
                seen.add(id(node))
                found.append(node)
        return found[:200]

    @staticmethod
    def select_first(root: BeautifulSoup | Tag, selectors: list[str]) -> Tag | None:
        for selector in selectors:
            node = root.select_one(selector)
            if node is not None:
                return node
        return None

    @classmethod
    def first_text(cls, root: BeautifulSoup | Tag, selectors: list[str]) -> str:
        node = cls.select_first(root, selectors)
        if node is None:
            return ""
        return cls.clean_text(node.get_text(" ", strip=True))

    @staticmethod
    def closest(node: Tag, selectors: list[str]) -> Tag | None:
        for selector in selectors:
            match = node.css.closest(selector)
            if match is not None:
                return match
        return None

    @staticmethod
    def clean_text(value: str) -> str:
        return re.sub(r"\s+", " ", value).strip()

    @staticmethod
    def first_int(text: str, default: int = 0) -> int:
        match = INT_REGEX.search(text)
        return int(match.group(0)) if match else default

    @staticmethod
    def first_float(text: str, default: float = 0.0) -> float:
        match = FLOAT_REGEX.search(text)
        return float(match.group(0)) if match else default

    @staticmethod
    def split_kda(text: str) -> tuple[int, int, int]:
        """
        Read ``"k / d / a"`` (or ``k-d-a``); missing or non-numeric parts are 0.
        """

        parts = [part for part in KDA_SPLIT_REGEX.split(text.strip()) if part]
        values: list[int] = []
        for part in parts[:3]:
            match = INT_REGEX.match(part)
            values.append(int(match.group(0)) if match else 0)
        while len(values) < 3:
            values.append(0)
        return values[0], values[1], values[2]

    @staticmethod
    def match_tier(text: str) -> tuple[str, str] | None:
        match = TIER_REGEX.search(text)
        if match is None:
            return None
        tier = match.group(1).upper()
        division = (match.group(2) or "").upper()
        if tier in APEX_TIERS:
            division = division or "I"
        return tier, division

    @staticmethod
    def duration_minutes(text: str) -> float | None:
        match = DURATION_REGEX.search(text)
        if match is None:
            return None
        minutes = int(match.group(1)) + int(match.group(2)) / 60
        return minutes if minutes > 0 else None


class PageParser(ABC, Generic[ResultT]):
    """
    Turns one fetched summoner page into a typed source result.

    Selectors come from the source configuration so markup changes only need a
    config update.
    """

    def __init__(self, config: SourceConfig) -> None:
        self.config = config

    def selectors(self, field_name: str) -> list[str]:
        return self.config.selectors_for(field_name)

    def parse(self, *, html: str, identity: Identity, source_url: str) -> ResultT:
        if not html or not html.strip():
            raise ParseFailure(f"Empty page returned by {self.config.name}: {source_url}")
        soup = BeautifulSoup(html, "html.parser")
        if soup.body is None and not soup.get_text(strip=True):
            raise ParseFailure(f"Page from {self.config.name} has no readable content: {source_url}")
        return self.parse_document(soup=soup, identity=identity, source_url=source_url)

    @abstractmethod
    def parse_document(
        self,
        *,
        soup: BeautifulSoup,
        identity: Identity,
        source_url: str,
    ) -> ResultT:
        """
        Extract the source-specific result from a parsed document.
        """
