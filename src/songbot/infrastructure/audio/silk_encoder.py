# 🎙️ songbot/infrastructure/audio/silk_encoder.py
"""🎙️ PCM s16le → SILK (голосові повідомлення) через `pysilk` у робочому потоці."""

from __future__ import annotations

import asyncio
import io
import logging

import pysilk

from songbot.shared.errors import EncodeError
from songbot.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.silk")

DEFAULT_BIT_RATE = 24000


class SilkEncoder:
    def __init__(self, *, bit_rate: int = DEFAULT_BIT_RATE) -> None:
        self._bit_rate = int(bit_rate)

    async def encode(self, pcm: bytes, sample_rate: int) -> bytes:
        if not pcm:
            raise EncodeError("pcm is empty")
        try:
            encoded = await asyncio.to_thread(self._encode_sync, pcm, sample_rate)
        except Exception as exc:  # noqa: BLE001
            raise EncodeError("silk encoding failed", details=str(exc)) from exc
        logger.debug("🎙️ SILK: %d B PCM → %d B", len(pcm), len(encoded))
        return encoded

    def _encode_sync(self, pcm: bytes, sample_rate: int) -> bytes:
        source = io.BytesIO(pcm)
        target = io.BytesIO()
        pysilk.encode(source, target, sample_rate, self._bit_rate)
        return target.getvalue()
