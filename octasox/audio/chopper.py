# スライスごとに wav を書き出す (soundfile)
from pathlib import Path
import soundfile as sf
from octasox.model.sample_item import SampleItem
from octasox.audio.slicer import SliceSpan, slice_name


def read_sample(path) -> SampleItem:
    path = Path(path)
    data, sr = sf.read(path, always_2d=False)
    subtype = sf.info(str(path)).subtype
    return SampleItem(path.name, data, sr, path, subtype=subtype)


def export_slices(item: SampleItem, spans: list[SliceSpan], out_dir, base: str | None = None):
    """
    item    : 元のオーディオ
    spans   : extract_slices() の結果
    out_dir : 書き出し先 (無ければ作る)
    base    : 出力名の接頭辞 (既定は元ファイルの stem)
    戻り値  : (書き出したパス, 空でスキップした SliceSpan)
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    base = base if base is not None else item.path.stem

    # wav に入らない subtype (VORBIS 等) は soundfile の既定に任せる
    subtype = item.subtype if item.subtype and sf.check_format('WAV', item.subtype) else None

    written, skipped = [], []
    for span in spans:
        # 範囲外はクリップ、start >= end は空
        seg = item.data[span.start:span.end]
        if len(seg) == 0:
            skipped.append(span)
            continue
        out = out_dir / slice_name(base, span)
        sf.write(out, seg, item.sr, subtype=subtype)
        written.append(out)
    return written, skipped
