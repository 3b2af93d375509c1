from datetime import datetime, timezone

from vidboard.models.favorites import SaveChannelRequest, SaveVideoRequest, SavedChannel, SavedVideo
from vidboard.store import JsonStore

VIDEOS = "favorite_videos"
CHANNELS = "favorite_channels"


def _key(user_id: str, item_id: str) -> str:
    return f"{user_id}:{item_id}"


def save_video(store: JsonStore, request: SaveVideoRequest) -> SavedVideo:
    """Upsert: saving the same video twice for a user refreshes the entry."""
    saved = SavedVideo(**request.model_dump(), saved_at=datetime.now(timezone.utc))
    store.put(VIDEOS, _key(saved.user_id, saved.id), saved.model_dump(mode="json"))
    return saved


def save_channel(store: JsonStore, request: SaveChannelRequest) -> SavedChannel:
    saved = SavedChannel(**request.model_dump(), saved_at=datetime.now(timezone.utc))
    store.put(CHANNELS, _key(saved.user_id, saved.id), saved.model_dump(mode="json"))
    return saved


def list_videos(store: JsonStore, user_id: str) -> list[SavedVideo]:
    videos = [SavedVideo.model_validate(r) for r in store.values(VIDEOS) if r.get("user_id") == user_id]
    return sorted(videos, key=lambda v: v.saved_at, reverse=True)


def list_channels(store: JsonStore, user_id: str) -> list[SavedChannel]:
    channels = [SavedChannel.model_validate(r) for r in store.values(CHANNELS) if r.get("user_id") == user_id]
    return sorted(channels, key=lambda c: c.saved_at, reverse=True)


def delete_video(store: JsonStore, user_id: str, video_id: str) -> None:
    store.delete(VIDEOS, _key(user_id, video_id))


def delete_channel(store: JsonStore, user_id: str, channel_id: str) -> None:
    store.delete(CHANNELS, _key(user_id, channel_id))
