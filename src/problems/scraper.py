"""Scrape title and difficulty from a problem page.

The archive site does not expose a stable API, so difficulty is found by
looking, in order, at element text that is exactly a difficulty label, at
embedded JSON fields (``"difficulty"`` / ``"level"``), and finally at the word
following a "difficulty" or "level" mention anywhere in the page.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup

from .errors import ScrapeError
from .models import Difficulty

logger = logging.getLogger(__name__)

TITLE_SUFFIXES = (' - LeetCode',)

_LABELS = '|'.join(d.value for d in Difficulty)
_JSON_FIELD_RE = re.compile(rf'"(?:difficulty|level)"\s*:\s*"({_LABELS})"', re.IGNORECASE)
_CONTEXT_RE = re.compile(rf'(?:difficulty|level)[\s\S]{{0,100}}?\b({_LABELS})\b', re.IGNORECASE)


@dataclass
class ScrapedProblem:
    title: Optional[str]
    difficulty: Optional[Difficulty]


def _as_difficulty(label: str) -> Optional[Difficulty]:
    label = label.strip().capitalize()
    try:
        return Difficulty(label)
    except ValueError:
        return None


def parse_title(soup: BeautifulSoup) -> Optional[str]:
    if not soup.title or not soup.title.string:
        return None
    title = soup.title.string.strip()
    for suffix in TITLE_SUFFIXES:
        if title.endswith(suffix):
            title = title[:-len(suffix)].strip()
    return title or None


def parse_difficulty(html: str, soup: Optional[BeautifulSoup] = None) -> Optional[Difficulty]:
    """Find the difficulty label in a problem page."""
    soup = soup or BeautifulSoup(html, "html.parser")

    # Class hints first: elements styled as difficulty badges
    for element in soup.find_all(class_=re.compile(r'difficulty|text-difficulty', re.IGNORECASE)):
        difficulty = _as_difficulty(element.get_text())
        if difficulty:
            return difficulty

    for element in soup.find_all(['div', 'span']):
        if element.find(True):
            continue
        difficulty = _as_difficulty(element.get_text())
        if difficulty:
            return difficulty

    for pattern in (_JSON_FIELD_RE, _CONTEXT_RE):
        match = pattern.search(html)
        if match:
            return _as_difficulty(match.group(1))

    return None


def scrape_problem(
    url: str,
    session: Optional[requests.Session] = None,
    timeout: int = 15,
) -> ScrapedProblem:
    """Fetch a problem page and extract its title and difficulty.

    Raises:
        ScrapeError: If the page cannot be fetched or neither field is found
    """
    if session is None:
        with requests.Session() as own_session:
            return scrape_problem(url, session=own_session, timeout=timeout)

    try:
        response = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise ScrapeError(url, str(e)) from e

    if not response.ok:
        raise ScrapeError(url, f"HTTP {response.status_code}: {response.reason}")

    html = response.text
    soup = BeautifulSoup(html, "html.parser")
    scraped = ScrapedProblem(title=parse_title(soup), difficulty=parse_difficulty(html, soup))

    if scraped.title is None and scraped.difficulty is None:
        raise ScrapeError(url, "Difficulty not found on page")

    logger.debug(f"Scraped {url}: title={scraped.title!r}, difficulty={scraped.difficulty}")
    return scraped
