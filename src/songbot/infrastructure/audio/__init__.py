"""🔊 Доставка аудіо: завантаження, ffmpeg, SILK."""

from .audio_delivery import AudioDelivery
from .audio_downloader import AudioDownloader
from .ffmpeg_transcoder import FfmpegTranscoder
from .silk_encoder import SilkEncoder

__all__ = ["AudioDelivery", "AudioDownloader", "FfmpegTranscoder", "SilkEncoder"]
