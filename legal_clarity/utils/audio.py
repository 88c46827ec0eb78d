"""Audio packaging helpers"""
import io
import wave

from ..config import AUDIO_CHANNELS, AUDIO_SAMPLE_RATE, AUDIO_SAMPLE_WIDTH


def pcm_to_wav(pcm_data: bytes, channels: int = AUDIO_CHANNELS,
               sample_rate: int = AUDIO_SAMPLE_RATE,
               sample_width: int = AUDIO_SAMPLE_WIDTH) -> bytes:
    """Wrap raw little-endian PCM in a WAV container (44-byte RIFF header)."""
    frame_size = channels * sample_width
    usable = len(pcm_data) - (len(pcm_data) % frame_size)

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(channels)
        writer.setsampwidth(sample_width)
        writer.setframerate(sample_rate)
        writer.writeframes(pcm_data[:usable])
    return buffer.getvalue()
