"""Transcript extraction through the Zyte browser-rendering API.

The watch page is rendered remotely, the transcript panel is opened by a
short script of browser actions, and the returned HTML is handed to an
ordered chain of parsers. The first parser that yields segments wins.
"""

import logging
import re
from typing import Callable

import requests
from bs4 import BeautifulSoup

from vidboard.exceptions import ConfigError, TranscriptUnavailableError, UpstreamError
from vidboard.http_client import get_session
from vidboard.models.youtube import TranscriptSegment

logger = logging.getLogger(__name__)

ZYTE_API_URL = "https://api.zyte.com/v1/extract"

TRANSCRIPT_PANEL = "ytd-transcript-renderer"
CUE_GROUP = "ytd-transcript-renderer div.cue-group"
CUE_TIME = ".cue-group-start-offset"
CUE_TEXT = ".cue"
GENERIC_CONTAINER = "div.ytd-transcript-renderer"

TIMESTAMP_RE = re.compile(r"^\d+(?::\d{2}){1,2}")

# Kebab menu, "Show transcript" entry, then the panel itself.
BROWSER_ACTIONS = [
    {
        "action": "click",
        "selector": {"type": "css", "value": "ytd-menu-renderer yt-icon-button"},
        "onError": "return",
    },
    {"action": "waitForTimeout", "timeout": 0.5},
    {
        "action": "click",
        "selector": {"type": "css", "value": "ytd-menu-service-item-renderer"},
        "onError": "return",
    },
    {"action": "waitForTimeout", "timeout": 2},
    {
        "action": "waitForSelector",
        "selector": {"type": "css", "value": TRANSCRIPT_PANEL},
        "timeout": 15,
        "onError": "return",
    },
]

Parser = Callable[[BeautifulSoup], list[TranscriptSegment] | None]


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def parse_cue_groups(soup: BeautifulSoup) -> list[TranscriptSegment] | None:
    """Structured panel: one cue group per caption, timestamp and text in child nodes."""
    segments = []
    for group in soup.select(CUE_GROUP):
        time_node = group.select_one(CUE_TIME)
        text_node = group.select_one(CUE_TEXT)
        text = text_node.get_text().strip() if text_node else ""
        if not text:
            continue
        time = time_node.get_text().strip() if time_node else ""
        segments.append(TranscriptSegment(text=text, time=time or None))
    return segments or None


def require_transcript_container(soup: BeautifulSoup) -> list[TranscriptSegment] | None:
    """Stops the chain when the page has no transcript UI at all."""
    if not soup.select(CUE_GROUP) and not soup.select(GENERIC_CONTAINER):
        raise TranscriptUnavailableError("This video has no transcript available right now. Try again later.")
    return None


def pair_timestamped_lines(text: str) -> list[TranscriptSegment]:
    """Pair each leading timestamp line with the line after it.

    Lines that are not claimed by a timestamp become text-only segments.
    Best effort: a caption spread over several lines keeps only its first
    line next to the timestamp.
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    segments = []
    i = 0
    while i < len(lines):
        match = TIMESTAMP_RE.match(lines[i])
        if match and i + 1 < len(lines):
            segments.append(TranscriptSegment(time=match.group(0), text=lines[i + 1]))
            i += 2
        else:
            segments.append(TranscriptSegment(text=lines[i]))
            i += 1
    return segments


def parse_container_text(soup: BeautifulSoup) -> list[TranscriptSegment] | None:
    """Degraded panel: no cue markup, only raw text inside the container."""
    containers = soup.select(TRANSCRIPT_PANEL) or soup.select(GENERIC_CONTAINER)
    text = "\n".join(container.get_text("\n") for container in containers)
    return pair_timestamped_lines(text) or None


PARSERS: tuple[Parser, ...] = (
    parse_cue_groups,
    require_transcript_container,
    parse_container_text,
)


def parse_transcript(html: str, parsers: tuple[Parser, ...] = PARSERS) -> list[TranscriptSegment]:
    soup = BeautifulSoup(html, "html.parser")
    for parser in parsers:
        segments = parser(soup)
        if segments:
            return segments
    return []


class TranscriptExtractor:
    """Fetches rendered watch pages from Zyte and parses their transcript panel.

    ``timeout`` is handed to requests, so it bounds the connect and each read,
    not the whole call.
    """

    def __init__(self, api_key: str, api_url: str = ZYTE_API_URL, timeout: float = 90.0):
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout

    def _payload(self, video_id: str) -> dict:
        return {
            "url": watch_url(video_id),
            "browserHtml": True,
            "actions": BROWSER_ACTIONS,
        }

    def fetch_html(self, video_id: str) -> str:
        if not self._api_key:
            raise ConfigError("Zyte API key not configured. Set ZYTE_API_KEY in .env.")
        try:
            resp = get_session().post(
                self._api_url,
                json=self._payload(video_id),
                auth=(self._api_key, ""),
                timeout=self._timeout,
            )
        except requests.Timeout as e:
            logger.warning("Transcript extraction timed out for %s after %ss", video_id, self._timeout)
            raise TranscriptUnavailableError(
                "Transcript extraction timed out. Try again in a moment."
            ) from e
        except requests.RequestException as e:
            logger.warning("Transcript extraction request failed for %s: %s", video_id, e)
            raise UpstreamError("Could not reach the extraction service. Try again.") from e

        if resp.status_code != 200:
            logger.error("Zyte API returned %s for %s: %s", resp.status_code, video_id, resp.text[:500])
            raise UpstreamError("The extraction service rejected the transcript request.")
        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamError("The extraction service returned an unreadable response.") from e
        if not isinstance(data, dict):
            logger.error("Zyte API returned a non-object body for %s", video_id)
            raise UpstreamError("The extraction service returned an unreadable response.")
        return data.get("browserHtml") or ""

    def get_transcript(self, video_id: str) -> list[TranscriptSegment]:
        segments = parse_transcript(self.fetch_html(video_id))
        logger.info("Extracted %d transcript segments for %s", len(segments), video_id)
        return segments
