# スライス表 → (index, start, end) の列
from typing import NamedTuple
from octasox.model.ot_data import OTData


class SliceSpan(NamedTuple):
    index: int
    start: int
    end: int

    def label(self, width: int = 2) -> str:
        return f"{self.index:0{width}d}"


def extract_slices(data: OTData) -> list[SliceSpan]:
    """先頭 slice_count 個だけをインデックス順に返す"""
    return [
        SliceSpan(i, s.start_point, s.end_point)
        for i, s in enumerate(data.active_slices)
    ]


def slice_name(base: str, span: SliceSpan) -> str:
    return f"{base}{span.label()}.wav"
