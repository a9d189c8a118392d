# sox 用 trim コマンド行 (xargs -L1 sox に流す)
from octasox.audio.slicer import SliceSpan

def command_line(input_wav: str, output_wav: str, span: SliceSpan) -> str:
    return f"{input_wav} {output_wav} trim {span.start}s ={span.end}s"
