"""Header of a PCM WAVE file."""

from __future__ import annotations

import struct

__all__ = ["WAVE_HEADER_SIZE", "wav_header"]

WAVE_HEADER_SIZE = 44

_U32 = 0xFFFFFFFF
_U16 = 0xFFFF


def wav_header(channels: int, sample_rate: int, bits_per_sample: int, data_size: int) -> bytes:
    """The 44-byte RIFF header for ``data_size`` bytes of linear PCM.

    Samples are one byte wide when ``bits_per_sample`` is 8 and two bytes
    wide otherwise; the channel count is stored in a single byte.
    """
    sample_width = 1 if bits_per_sample == 8 else 2
    byte_rate = channels * sample_width * sample_rate
    block_align = channels * sample_width
    chunk_size = data_size + 36

    return struct.pack(
        "<4sI4s4sIHHIIHH4sI",
        b"RIFF",
        chunk_size & _U32,
        b"WAVE",
        b"fmt ",
        16,
        1,
        channels & 0xFF,
        sample_rate & _U32,
        byte_rate & _U32,
        block_align & _U16,
        bits_per_sample & _U16,
        b"data",
        data_size & _U32,
    )