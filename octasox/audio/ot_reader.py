# Octatrack .ot バイナリ読込
import struct
from pathlib import Path
from octasox.model.ot_data import (
    OTData, Slice, OT_SIZE, SLICE_CAPACITY, SLICE_SIZE, HEADER_BYTES,
    OFF_HEADER, OFF_RESERVED, OFF_TEMPO, OFF_TRIM_LEN, OFF_LOOP_LEN,
    OFF_STRETCH, OFF_LOOP, OFF_GAIN, OFF_QUANTIZE, OFF_TRIM_START,
    OFF_TRIM_END, OFF_LOOP_POINT, OFF_SLICES, OFF_SLICE_COUNT, OFF_CHECKSUM,
)


class OTFileError(Exception):
    """.ot を読めなかった (path は分かる場合のみ)"""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class SizeMismatch(OTFileError, ValueError):
    def __init__(self, actual: int, path: Path | None = None):
        super().__init__(f"This is not a valid .ot file ({actual} bytes, expected {OT_SIZE})", path)
        self.expected, self.actual = OT_SIZE, actual


class InvalidMagic(OTFileError, ValueError):
    def __init__(self, header: bytes, path: Path | None = None):
        super().__init__(f"Unexpected header {header.hex(' ')}", path)
        self.header = header


class InvalidSliceCount(OTFileError, ValueError):
    def __init__(self, count: int, path: Path | None = None):
        super().__init__(f"Slice count {count} exceeds capacity {SLICE_CAPACITY}", path)
        self.count = count


class IoFailure(OTFileError):
    pass


def _u32(mv, off: int) -> int:
    return struct.unpack_from('>I', mv, off)[0]

def _u16(mv, off: int) -> int:
    return struct.unpack_from('>H', mv, off)[0]


def decode(buf: bytes, strict: bool = False, path: Path | None = None) -> OTData:
    """
    buf    : .ot ファイルの中身そのまま (OT_SIZE バイト)
    strict : True ならヘッダ署名も検証する
    戻り値 : OTData (部分的な結果は返さない)
    """
    if len(buf) != OT_SIZE:
        raise SizeMismatch(len(buf), path)
    mv = memoryview(buf)

    header = bytes(mv[OFF_HEADER:OFF_RESERVED])
    if strict and header != HEADER_BYTES:
        raise InvalidMagic(header, path)

    slice_count = _u32(mv, OFF_SLICE_COUNT)
    if slice_count > SLICE_CAPACITY:
        raise InvalidSliceCount(slice_count, path)

    # 未使用スロットも変換するが、参照されるのは先頭 slice_count 個のみ
    slices = tuple(
        Slice(*struct.unpack_from('>III', mv, OFF_SLICES + i * SLICE_SIZE))
        for i in range(SLICE_CAPACITY)
    )

    return OTData(
        header=header,
        reserved=bytes(mv[OFF_RESERVED:OFF_TEMPO]),
        tempo=_u32(mv, OFF_TEMPO),
        trim_len=_u32(mv, OFF_TRIM_LEN),
        loop_len=_u32(mv, OFF_LOOP_LEN),
        stretch=_u32(mv, OFF_STRETCH),
        loop=_u32(mv, OFF_LOOP),
        gain=_u16(mv, OFF_GAIN),
        quantize=mv[OFF_QUANTIZE],
        trim_start=_u32(mv, OFF_TRIM_START),
        trim_end=_u32(mv, OFF_TRIM_END),
        loop_point=_u32(mv, OFF_LOOP_POINT),
        slices=slices,
        slice_count=slice_count,
        checksum=_u16(mv, OFF_CHECKSUM),
    )


def load(path, strict: bool = False) -> OTData:
    path = Path(path)
    try:
        buf = path.read_bytes()
    except OSError as e:
        raise IoFailure(e.strerror or str(e), path) from e
    return decode(buf, strict=strict, path=path)
