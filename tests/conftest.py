# tests/conftest.py
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Додаємо src в sys.path, щоб працював імпорт "songbot.…" без встановлення пакета
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from songbot.domain.music.entities import Platform, Track  # noqa: E402
from songbot.domain.music.interfaces import PromptResult  # noqa: E402


class FakeSession:
    """In-memory IChatSession: записує все надіслане, відповідає заготовленими репліками."""

    def __init__(self, replies: Optional[List] = None, platform: str = "telegram") -> None:
        self.platform = platform
        self.replies = list(replies or [])
        self.texts: List[str] = []
        self.images: List[tuple] = []
        self.audios: List[tuple] = []
        self.deleted: List[int] = []
        self.prompts: List[int] = []
        self._next_id = 100

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def send_text(self, text):
        self.texts.append(text)
        return self._id()

    async def send_image(self, image, caption):
        self.images.append((image, caption))
        return self._id()

    async def send_audio(self, audio, *, title=None, performer=None, filename=None):
        self.audios.append((audio, title, performer, filename))
        return self._id()

    async def prompt(self, timeout_ms):
        self.prompts.append(timeout_ms)
        if not self.replies:
            return PromptResult.timeout()
        reply = self.replies.pop(0)
        return reply if isinstance(reply, PromptResult) else PromptResult(reply=reply)

    async def delete_message(self, message_id):
        self.deleted.append(message_id)


def make_track(
    name: str,
    artist: str = "Artist",
    *,
    page_url: str = "",
    track_id: Optional[int] = None,
    song_id: Optional[int] = None,
    platform: Optional[Platform] = None,
    src: str = "https://cdn.example/a.mp3",
) -> Track:
    return Track(
        display_name=name,
        artist=artist,
        page_url=page_url,
        playable_source=src,
        track_id=track_id,
        song_id=song_id,
        source_platform=platform,
    )


@pytest.fixture
def fake_session():
    return FakeSession
