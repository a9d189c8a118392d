# 1 サンプルのメタ＋波形を保持
from pathlib import Path
import numpy as np

class SampleItem:
    def __init__(self, name: str, data: np.ndarray, sr: int, path: Path, subtype: str | None = None):
        self.name, self.data, self.sr, self.path = name, data, sr, path
        self.subtype = subtype

    @property
    def frames(self) -> int:
        return len(self.data)

    @property
    def ot_path(self) -> Path:
        """対応する .ot のパス"""
        return self.path.with_suffix('.ot')
