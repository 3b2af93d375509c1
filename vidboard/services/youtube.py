import logging

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from vidboard.exceptions import ConfigError, NotFoundError, UnprocessableError, UpstreamError
from vidboard.models.youtube import ChannelDetails, SearchKind, SearchResult, VideoDetails

logger = logging.getLogger(__name__)

QUOTA_REASONS = {"quotaExceeded", "dailyLimitExceeded", "rateLimitExceeded"}


def _best_thumbnail(thumbnails: dict) -> str:
    """Highest quality non-empty thumbnail URL: high, then medium, then default."""
    for key in ("high", "medium", "default"):
        url = (thumbnails.get(key) or {}).get("url")
        if url:
            return url
    return ""


def _optional_int(stats: dict, key: str) -> int | None:
    value = stats.get(key)
    if value in (None, ""):
        return None
    return int(value)


def _error_reason(e: HttpError) -> str:
    details = getattr(e, "error_details", None) or []
    if isinstance(details, list):
        for detail in details:
            if isinstance(detail, dict) and detail.get("reason"):
                return detail["reason"]
    return ""


def _handle_api_error(e: Exception, action: str):
    if isinstance(e, HttpError):
        logger.warning("YouTube API error while trying to %s: status=%s %s", action, e.resp.status, e)
        if e.resp.status == 403 and _error_reason(e) in QUOTA_REASONS:
            raise UpstreamError(f"YouTube API quota exhausted while trying to {action}. Try again later.") from e
        raise UpstreamError(f"Failed to {action}. Check the YouTube API key and try again.") from e
    logger.warning("Network error while trying to %s: %s", action, e)
    raise UpstreamError(f"Could not reach YouTube to {action}. Try again.") from e


def _video_from_item(item: dict, fallback_id: str = "", fallback_channel_id: str = "") -> VideoDetails:
    snippet = item.get("snippet", {})
    stats = item.get("statistics", {})
    return VideoDetails(
        id=item.get("id") or fallback_id,
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        thumbnail_url=_best_thumbnail(snippet.get("thumbnails", {})),
        published_at=snippet.get("publishedAt", ""),
        channel_id=snippet.get("channelId") or fallback_channel_id,
        channel_title=snippet.get("channelTitle", ""),
        view_count=_optional_int(stats, "viewCount"),
        like_count=_optional_int(stats, "likeCount"),
    )


def _search_result_from_item(item: dict) -> SearchResult | None:
    ids = item.get("id", {})
    if ids.get("videoId"):
        kind, result_id = "video", ids["videoId"]
    elif ids.get("channelId"):
        kind, result_id = "channel", ids["channelId"]
    else:
        return None
    snippet = item.get("snippet", {})
    return SearchResult(
        id=result_id,
        kind=kind,
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        thumbnail_url=_best_thumbnail(snippet.get("thumbnails", {})),
        published_at=snippet.get("publishedAt") or None,
        channel_id=snippet.get("channelId"),
        channel_title=snippet.get("channelTitle"),
    )


class YouTubeClient:
    """Read-only client for the YouTube Data API v3, authenticated by API key.

    Every call is a single attempt. Upstream failures surface as
    ``UpstreamError``; ids the API has never heard of surface as
    ``NotFoundError``.
    """

    def __init__(self, api_key: str):
        self._api_key = api_key
        self._resource = None

    def _service(self):
        if not self._api_key:
            raise ConfigError("YouTube API key not configured. Set YOUTUBE_API_KEY in .env.")
        if self._resource is None:
            self._resource = build("youtube", "v3", developerKey=self._api_key, cache_discovery=False)
        return self._resource

    def search(self, query: str, max_results: int = 25, kind: SearchKind = "all") -> list[SearchResult]:
        service = self._service()
        try:
            result = service.search().list(
                q=query,
                part="snippet",
                type="video,channel" if kind == "all" else kind,
                maxResults=max_results,
            ).execute()
        except (HttpError, httplib2.HttpLib2Error, OSError) as e:
            _handle_api_error(e, "search YouTube")
        results = []
        for item in result.get("items", []):
            parsed = _search_result_from_item(item)
            if parsed is not None:
                results.append(parsed)
        return results

    def get_video_details(self, video_id: str) -> VideoDetails:
        service = self._service()
        try:
            result = service.videos().list(id=video_id, part="snippet,statistics").execute()
        except (HttpError, httplib2.HttpLib2Error, OSError) as e:
            _handle_api_error(e, "fetch video details")
        items = result.get("items", [])
        if not items:
            raise NotFoundError(f"Video not found: {video_id}")
        return _video_from_item(items[0], fallback_id=video_id)

    def get_channel_details(self, channel_id: str) -> ChannelDetails:
        service = self._service()
        try:
            result = service.channels().list(id=channel_id, part="snippet,statistics").execute()
        except (HttpError, httplib2.HttpLib2Error, OSError) as e:
            _handle_api_error(e, "fetch channel details")
        items = result.get("items", [])
        if not items:
            raise NotFoundError(f"Channel not found: {channel_id}")
        item = items[0]
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        return ChannelDetails(
            id=item.get("id") or channel_id,
            title=snippet.get("title", ""),
            description=snippet.get("description", ""),
            thumbnail_url=_best_thumbnail(snippet.get("thumbnails", {})),
            subscriber_count=_optional_int(stats, "subscriberCount"),
            video_count=_optional_int(stats, "videoCount"),
        )

    def get_channel_videos(self, channel_id: str, max_results: int = 20) -> list[VideoDetails]:
        """Latest uploads of a channel: uploads playlist, then its items, then one batch of video details."""
        service = self._service()
        try:
            channels = service.channels().list(id=channel_id, part="contentDetails").execute()
            items = channels.get("items", [])
            if not items:
                raise NotFoundError(f"Channel not found: {channel_id}")
            related = items[0].get("contentDetails", {}).get("relatedPlaylists", {})
            uploads_id = related.get("uploads")
            if not uploads_id:
                raise UnprocessableError(f"Channel {channel_id} has no uploads playlist")

            playlist = service.playlistItems().list(
                playlistId=uploads_id,
                part="snippet,contentDetails",
                maxResults=max_results,
            ).execute()
            video_ids = [
                entry.get("contentDetails", {}).get("videoId")
                for entry in playlist.get("items", [])
            ]
            video_ids = [video_id for video_id in video_ids if video_id][:max_results]
            if not video_ids:
                return []

            videos = service.videos().list(id=",".join(video_ids), part="snippet,statistics").execute()
        except (HttpError, httplib2.HttpLib2Error, OSError) as e:
            _handle_api_error(e, "fetch channel videos")
        return [
            _video_from_item(item, fallback_channel_id=channel_id)
            for item in videos.get("items", [])
        ]
