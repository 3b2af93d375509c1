from fastapi import APIRouter, Depends, Response

from vidboard.dependencies import get_store, require_bearer_token
from vidboard.models.favorites import SaveChannelRequest, SaveVideoRequest, SavedChannel, SavedVideo
from vidboard.services import favorites as favorites_service
from vidboard.store import JsonStore

router = APIRouter(tags=["favorites"])


@router.post("/api/youtube/videos/favorites", dependencies=[Depends(require_bearer_token)])
def save_video(request: SaveVideoRequest, store: JsonStore = Depends(get_store)) -> SavedVideo:
    return favorites_service.save_video(store, request)


@router.post("/api/youtube/channels/favorites", dependencies=[Depends(require_bearer_token)])
def save_channel(request: SaveChannelRequest, store: JsonStore = Depends(get_store)) -> SavedChannel:
    return favorites_service.save_channel(store, request)


@router.get("/api/users/{user_id}/favorites/videos")
def list_videos(user_id: str, store: JsonStore = Depends(get_store)) -> list[SavedVideo]:
    return favorites_service.list_videos(store, user_id)


@router.get("/api/users/{user_id}/favorites/channels")
def list_channels(user_id: str, store: JsonStore = Depends(get_store)) -> list[SavedChannel]:
    return favorites_service.list_channels(store, user_id)


@router.delete("/api/users/{user_id}/favorites/videos/{video_id}", dependencies=[Depends(require_bearer_token)])
def delete_video(user_id: str, video_id: str, store: JsonStore = Depends(get_store)) -> Response:
    favorites_service.delete_video(store, user_id, video_id)
    return Response(status_code=204)


@router.delete("/api/users/{user_id}/favorites/channels/{channel_id}", dependencies=[Depends(require_bearer_token)])
def delete_channel(user_id: str, channel_id: str, store: JsonStore = Depends(get_store)) -> Response:
    favorites_service.delete_channel(store, user_id, channel_id)
    return Response(status_code=204)
