# Octatrack .ot のデータモデルとバイナリレイアウト定数
from dataclasses import dataclass
from enum import IntEnum

# 全フィールド詰め込み・ビッグエンディアン、固定長
OT_SIZE = 0x340
SLICE_CAPACITY = 64
SLICE_SIZE = 12

HEADER_BYTES = b'FORM\x00\x00\x00\x00DPS1SMPA'
RESERVED_BYTES = b'\x00\x00\x00\x00\x00\x02\x00'

OFF_HEADER = 0x00
OFF_RESERVED = 0x10
OFF_TEMPO = 0x17        # BPM*24
OFF_TRIM_LEN = 0x1B     # value*100
OFF_LOOP_LEN = 0x1F     # value*100
OFF_STRETCH = 0x23
OFF_LOOP = 0x27
OFF_GAIN = 0x2B         # 0x30 = 0dB
OFF_QUANTIZE = 0x2D
OFF_TRIM_START = 0x2E
OFF_TRIM_END = 0x32
OFF_LOOP_POINT = 0x36
OFF_SLICES = 0x3A       # 0x3A - 0x339
OFF_SLICE_COUNT = 0x33A
OFF_CHECKSUM = 0x33E

GAIN_ZERO_DB = 0x30


class StretchMode(IntEnum):
    OFF = 0
    NORMAL = 2
    BEAT = 3


class LoopMode(IntEnum):
    OFF = 0
    NORMAL = 1
    PINGPONG = 2


class QuantizeMode(IntEnum):
    PATTERN = 0
    S_1 = 1
    S_2 = 2
    S_3 = 3
    S_4 = 4
    S_6 = 5
    S_8 = 6
    S_12 = 7
    S_16 = 8
    S_24 = 9
    S_32 = 10
    S_48 = 11
    S_64 = 12
    S_96 = 13
    S_128 = 14
    S_192 = 15
    S_256 = 16
    DIRECT = 0xFF

    @property
    def steps(self) -> int | None:
        """ステップ数 (PATTERN / DIRECT は None)"""
        if self in (QuantizeMode.PATTERN, QuantizeMode.DIRECT):
            return None
        return int(self.name[2:])


def _member(enum_cls, raw: int):
    try:
        return enum_cls(raw)
    except ValueError:
        return None


@dataclass(frozen=True)
class Slice:
    start_point: int
    end_point: int
    loop_point: int

    @property
    def length(self) -> int:
        # start > end のデータもそのまま通す
        return self.end_point - self.start_point


@dataclass(frozen=True)
class OTData:
    """
    デコード済みの .ot 1 ファイル分。値はすべてホストの整数で、
    生の値を保持し、意味づけはプロパティで行う。
    slices は常に 64 個、有効なのは先頭 slice_count 個だけ。
    """
    header: bytes
    reserved: bytes
    tempo: int
    trim_len: int
    loop_len: int
    stretch: int
    loop: int
    gain: int
    quantize: int
    trim_start: int
    trim_end: int
    loop_point: int
    slices: tuple[Slice, ...]
    slice_count: int
    checksum: int

    @property
    def bpm(self) -> float:
        return self.tempo / 24

    @property
    def trim_length(self) -> float:
        return self.trim_len / 100

    @property
    def loop_length(self) -> float:
        return self.loop_len / 100

    @property
    def gain_db(self) -> float:
        # 0x00 = -24dB, 0x30 = 0dB, 0x60 = +24dB
        return (self.gain - GAIN_ZERO_DB) / 2

    @property
    def stretch_mode(self) -> StretchMode | None:
        return _member(StretchMode, self.stretch)

    @property
    def loop_mode(self) -> LoopMode | None:
        return _member(LoopMode, self.loop)

    @property
    def quantize_mode(self) -> QuantizeMode | None:
        return _member(QuantizeMode, self.quantize)

    @property
    def active_slices(self) -> tuple[Slice, ...]:
        return self.slices[:self.slice_count]

    @property
    def has_valid_header(self) -> bool:
        return self.header == HEADER_BYTES
