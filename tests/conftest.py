# テスト用 .ot バイナリ生成
import struct
import pytest
from octasox.model.ot_data import (
    OT_SIZE, SLICE_CAPACITY, SLICE_SIZE, HEADER_BYTES, RESERVED_BYTES, OFF_SLICES, OFF_CHECKSUM,
)


def make_ot(slices=(), bpm=120, tempo=None, trim_len=0, loop_len=0, stretch=0, loop=0,
            gain=0x30, quantize=0, trim_start=0, trim_end=0, loop_point=0,
            slice_count=None, header=HEADER_BYTES, garbage=False) -> bytes:
    buf = bytearray(OT_SIZE)
    mv = memoryview(buf)
    mv[:16] = header; mv[0x10:0x17] = RESERVED_BYTES
    struct.pack_into('>I', mv, 0x17, bpm*24 if tempo is None else tempo)
    struct.pack_into('>III', mv, 0x1B, trim_len, loop_len, stretch)
    struct.pack_into('>I', mv, 0x27, loop)
    struct.pack_into('>HB', mv, 0x2B, gain, quantize)
    struct.pack_into('>III', mv, 0x2E, trim_start, trim_end, loop_point)
    slices = list(slices)
    if garbage:
        # 未使用スロットをゴミで埋める
        for i in range(len(slices), SLICE_CAPACITY):
            mv[OFF_SLICES+i*SLICE_SIZE:OFF_SLICES+(i+1)*SLICE_SIZE] = b'\xDE\xAD\xBE\xEF' * 3
    for i,(st,en,lp) in enumerate(slices):
        struct.pack_into('>III', mv, OFF_SLICES+i*SLICE_SIZE, st,en,lp)
    count = len(slices) if slice_count is None else slice_count
    struct.pack_into('>I', mv, 0x33A, count)
    checksum = (0xFFFF - sum(mv[:-2]) & 0xFFFF); struct.pack_into('>H', mv, OFF_CHECKSUM, checksum)
    return bytes(buf)


@pytest.fixture
def build_ot():
    return make_ot


@pytest.fixture
def write_ot(tmp_path):
    def write(name='loop.ot', **kwargs):
        path = tmp_path / name
        path.write_bytes(make_ot(**kwargs))
        return path
    return write
