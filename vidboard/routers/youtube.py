from fastapi import APIRouter, Depends, Query

from vidboard.dependencies import get_aggregator
from vidboard.models.youtube import (
    ChannelDetails,
    SearchKind,
    SearchResult,
    TranscriptResponse,
    VideoDetails,
)
from vidboard.services.aggregator import MAX_RESULTS_LIMIT, YouTubeAggregator

router = APIRouter(prefix="/api/youtube", tags=["youtube"])


@router.get("/search")
def search(
    query: str = Query(min_length=1),
    kind: SearchKind = Query("all", alias="type"),
    max_results: int = Query(25, alias="maxResults", ge=1, le=MAX_RESULTS_LIMIT),
    aggregator: YouTubeAggregator = Depends(get_aggregator),
) -> list[SearchResult]:
    return aggregator.search(query, max_results, kind)


@router.get("/videos/{video_id}")
def get_video(video_id: str, aggregator: YouTubeAggregator = Depends(get_aggregator)) -> VideoDetails:
    return aggregator.get_video_details(video_id)


@router.get("/videos/{video_id}/transcription")
def get_transcription(video_id: str, aggregator: YouTubeAggregator = Depends(get_aggregator)) -> TranscriptResponse:
    return aggregator.get_transcript(video_id)


@router.get("/channels/{channel_id}")
def get_channel(channel_id: str, aggregator: YouTubeAggregator = Depends(get_aggregator)) -> ChannelDetails:
    return aggregator.get_channel_details(channel_id)


@router.get("/channels/{channel_id}/videos")
def get_channel_videos(
    channel_id: str,
    max_results: int = Query(20, alias="maxResults", ge=1, le=MAX_RESULTS_LIMIT),
    aggregator: YouTubeAggregator = Depends(get_aggregator),
) -> list[VideoDetails]:
    return aggregator.get_channel_videos(channel_id, max_results)
