# 🎚️ songbot/infrastructure/audio/ffmpeg_transcoder.py
"""
🎚️ FfmpegTranscoder — будь-яке аудіо → сирий PCM через бінарник ffmpeg.

Дані йдуть pipe:0 → pipe:1, без тимчасових файлів.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from typing import List

from songbot.shared.errors import TranscodeError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.ffmpeg")


class FfmpegTranscoder:
    def __init__(self, binary: str = "ffmpeg", *, timeout_sec: float = 60.0) -> None:
        self._binary = binary
        self._timeout = float(timeout_sec)

    @staticmethod
    def is_available(binary: str = "ffmpeg") -> bool:
        """Чи знайдено бінарник у PATH."""
        return shutil.which(binary) is not None

    def build_args(self, *, sample_rate: int, channels: int, sample_format: str) -> List[str]:
        return [
            self._binary,
            "-hide_banner", "-loglevel", "error",
            "-i", "pipe:0",
            "-ar", str(sample_rate),
            "-ac", str(channels),
            "-f", sample_format,
            "pipe:1",
        ]

    async def to_pcm(self, data: bytes, *, sample_rate: int, channels: int, sample_format: str) -> bytes:
        args = self.build_args(sample_rate=sample_rate, channels=channels, sample_format=sample_format)
        logger.debug("🎚️ ffmpeg %s (%d B на вході)", " ".join(args[1:]), len(data))
        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise TranscodeError("ffmpeg could not be started", details=str(exc)) from exc

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(data), timeout=self._timeout)
        except asyncio.TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise TranscodeError("ffmpeg timed out", details=f"{self._timeout:g}s") from exc

        if proc.returncode != 0:
            err = (stderr or b"").decode("utf-8", "replace").strip()[-300:]
            raise TranscodeError(f"ffmpeg exited with code {proc.returncode}", details=err)
        if not stdout:
            raise TranscodeError("ffmpeg produced no audio")

        logger.debug("✅ PCM: %d B", len(stdout))
        return stdout
