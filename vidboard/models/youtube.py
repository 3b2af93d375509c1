from typing import Literal

from vidboard.models.common import CamelModel

SearchKind = Literal["video", "channel", "all"]


class SearchResult(CamelModel):
    id: str
    kind: Literal["video", "channel"]
    title: str
    description: str
    thumbnail_url: str
    published_at: str | None = None
    channel_id: str | None = None
    channel_title: str | None = None


class VideoDetails(CamelModel):
    id: str
    title: str
    description: str
    thumbnail_url: str
    published_at: str
    channel_id: str
    channel_title: str
    view_count: int | None = None
    like_count: int | None = None


class ChannelDetails(CamelModel):
    id: str
    title: str
    description: str
    thumbnail_url: str
    subscriber_count: int | None = None
    video_count: int | None = None


class TranscriptSegment(CamelModel):
    text: str
    time: str | None = None


class TranscriptResponse(CamelModel):
    video_id: str
    transcription: list[TranscriptSegment]
    segments_count: int
