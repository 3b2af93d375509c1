from vidboard.config import Settings
from vidboard.exceptions import ValidationError
from vidboard.models.youtube import (
    ChannelDetails,
    SearchKind,
    SearchResult,
    TranscriptResponse,
    VideoDetails,
)
from vidboard.services.transcripts import TranscriptExtractor
from vidboard.services.youtube import YouTubeClient

MAX_RESULTS_LIMIT = 50
SEARCH_KINDS = ("video", "channel", "all")


def _require_id(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} is required", field=field)
    return value


def _check_max_results(max_results: int) -> int:
    if not 1 <= max_results <= MAX_RESULTS_LIMIT:
        raise ValidationError(
            f"maxResults must be between 1 and {MAX_RESULTS_LIMIT}", field="maxResults"
        )
    return max_results


class YouTubeAggregator:
    """Entry point for the YouTube endpoints.

    Holds one metadata client and one transcript extractor, both built once
    at startup and shared by every request. Nothing is cached: each call
    goes upstream.
    """

    def __init__(self, client: YouTubeClient, extractor: TranscriptExtractor):
        self.client = client
        self.extractor = extractor

    @classmethod
    def from_settings(cls, settings: Settings) -> "YouTubeAggregator":
        return cls(
            YouTubeClient(settings.youtube_api_key),
            TranscriptExtractor(
                settings.zyte_api_key,
                api_url=settings.zyte_api_url,
                timeout=settings.transcript_timeout,
            ),
        )

    def search(self, query: str, max_results: int = 25, kind: SearchKind = "all") -> list[SearchResult]:
        query = _require_id(query, "query")
        if kind not in SEARCH_KINDS:
            raise ValidationError(f"type must be one of {', '.join(SEARCH_KINDS)}", field="type")
        return self.client.search(query, _check_max_results(max_results), kind)

    def get_video_details(self, video_id: str) -> VideoDetails:
        return self.client.get_video_details(_require_id(video_id, "videoId"))

    def get_channel_details(self, channel_id: str) -> ChannelDetails:
        return self.client.get_channel_details(_require_id(channel_id, "channelId"))

    def get_channel_videos(self, channel_id: str, max_results: int = 20) -> list[VideoDetails]:
        channel_id = _require_id(channel_id, "channelId")
        return self.client.get_channel_videos(channel_id, _check_max_results(max_results))

    def get_transcript(self, video_id: str) -> TranscriptResponse:
        video_id = _require_id(video_id, "videoId")
        segments = self.extractor.get_transcript(video_id)
        return TranscriptResponse(
            video_id=video_id,
            transcription=segments,
            segments_count=len(segments),
        )
