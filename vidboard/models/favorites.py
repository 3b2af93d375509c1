from datetime import datetime

from pydantic import Field

from vidboard.models.youtube import ChannelDetails, VideoDetails


class SaveVideoRequest(VideoDetails):
    user_id: str = Field(min_length=1)


class SaveChannelRequest(ChannelDetails):
    user_id: str = Field(min_length=1)


class SavedVideo(VideoDetails):
    user_id: str
    saved_at: datetime


class SavedChannel(ChannelDetails):
    user_id: str
    saved_at: datetime
