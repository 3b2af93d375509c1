import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from vidboard.config import Settings

requires_youtube = pytest.mark.skipif(
    not os.environ.get("YOUTUBE_API_KEY"),
    reason="YOUTUBE_API_KEY not set; live YouTube API tests skipped",
)


# --- Canned API responses ---

THUMBNAILS = {
    "default": {"url": "https://i.ytimg.com/vi/vid1/default.jpg"},
    "medium": {"url": "https://i.ytimg.com/vi/vid1/mqdefault.jpg"},
    "high": {"url": "https://i.ytimg.com/vi/vid1/hqdefault.jpg"},
}

SEARCH_VIDEO_ITEM = {
    "id": {"kind": "youtube#video", "videoId": "vid1"},
    "snippet": {
        "title": "Cats being cats",
        "description": "A compilation",
        "publishedAt": "2025-01-01T00:00:00Z",
        "channelId": "UC_cats",
        "channelTitle": "Cat Channel",
        "thumbnails": THUMBNAILS,
    },
}

SEARCH_CHANNEL_ITEM = {
    "id": {"kind": "youtube#channel", "channelId": "UC_cats"},
    "snippet": {
        "title": "Cat Channel",
        "description": "All about cats",
        "publishedAt": "2020-05-01T00:00:00Z",
        "channelId": "UC_cats",
        "channelTitle": "Cat Channel",
        "thumbnails": {"default": {"url": "https://yt3.ggpht.com/cat.jpg"}},
    },
}

SEARCH_MALFORMED_ITEM = {
    "id": {"kind": "youtube#playlist"},
    "snippet": {"title": "No usable id"},
}

VIDEO_ITEM = {
    "id": "vid1",
    "snippet": {
        "title": "Cats being cats",
        "description": "A compilation",
        "publishedAt": "2025-01-01T00:00:00Z",
        "channelId": "UC_cats",
        "channelTitle": "Cat Channel",
        "thumbnails": THUMBNAILS,
    },
    "statistics": {"viewCount": "1500", "likeCount": "42", "commentCount": "7"},
}

CHANNEL_ITEM = {
    "id": "UC_cats",
    "snippet": {
        "title": "Cat Channel",
        "description": "All about cats",
        "thumbnails": {"medium": {"url": "https://yt3.ggpht.com/cat_m.jpg"}},
    },
    "statistics": {"subscriberCount": "1000", "videoCount": "25", "viewCount": "99999"},
}

CHANNEL_CONTENT_ITEM = {
    "id": "UC_cats",
    "contentDetails": {"relatedPlaylists": {"uploads": "UU_cats"}},
}

PLAYLIST_ITEMS = {
    "items": [
        {"contentDetails": {"videoId": "vid1"}},
        {"contentDetails": {"videoId": ""}},
        {"contentDetails": {"videoId": "vid2"}},
    ],
}


def video_item(video_id: str, **stats) -> dict:
    return {**VIDEO_ITEM, "id": video_id, "statistics": stats}


# --- Rendered watch pages ---

STRUCTURED_TRANSCRIPT_HTML = """
<html><body>
<ytd-transcript-renderer>
  <div class="ytd-transcript-renderer">
    <div class="cue-group">
      <div class="cue-group-start-offset">0:00</div>
      <div class="cue">Hello and welcome</div>
    </div>
    <div class="cue-group">
      <div class="cue-group-start-offset">0:04</div>
      <div class="cue">   </div>
    </div>
    <div class="cue-group">
      <div class="cue-group-start-offset"></div>
      <div class="cue">to the show</div>
    </div>
  </div>
</ytd-transcript-renderer>
</body></html>
"""

DEGRADED_TRANSCRIPT_HTML = (
    "<html><body><ytd-transcript-renderer>"
    '<div class="ytd-transcript-renderer">0:05\nHello world\nGeneral comment</div>'
    "</ytd-transcript-renderer></body></html>"
)

NO_TRANSCRIPT_HTML = "<html><body><div id='player'>Video</div></body></html>"

# Cue markup present but every cue is blank; the container text still holds the caption.
EMPTY_CUES_TRANSCRIPT_HTML = (
    "<html><body><ytd-transcript-renderer>"
    '<div class="cue-group"><div class="cue-group-start-offset">0:01</div><div class="cue"></div></div>'
    "<p>Hello there</p>"
    "</ytd-transcript-renderer></body></html>"
)


# --- Fixtures ---

@pytest.fixture
def mock_youtube_build(mocker):
    mock_svc = MagicMock()
    mocker.patch("vidboard.services.youtube.build", return_value=mock_svc)
    return mock_svc


@pytest.fixture
def youtube_client(mock_youtube_build):
    from vidboard.services.youtube import YouTubeClient
    return YouTubeClient("test-key")


@pytest.fixture
def mock_session(mocker):
    session = MagicMock()
    mocker.patch("vidboard.services.transcripts.get_session", return_value=session)
    return session


@pytest.fixture
def settings(tmp_path):
    return Settings(
        youtube_api_key="yt-key",
        zyte_api_key="zyte-key",
        store_file=tmp_path / "store.json",
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    from vidboard.main import create_app
    return create_app(settings)


@pytest.fixture
def mock_aggregator(app):
    from vidboard.dependencies import get_aggregator
    aggregator = MagicMock()
    app.dependency_overrides[get_aggregator] = lambda: aggregator
    yield aggregator
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(app):
    """FastAPI TestClient for router tests."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"Authorization": "Bearer test-token"}
