# コマンドライン: .ot のスライスから sox の trim 行を出力 / wav を書き出す
import argparse
import sys
from pathlib import Path
from octasox.audio import ot_reader, sox, chopper
from octasox.audio.slicer import extract_slices, slice_name

OT_EXT = '.ot'


def _mode_name(mode, raw: int) -> str:
    return mode.name.lower() if mode is not None else f"0x{raw:02X}"


def describe(path: str, data) -> str:
    return (f"{path}: {data.bpm:g} BPM, gain {data.gain_db:+g} dB, "
            f"stretch {_mode_name(data.stretch_mode, data.stretch)}, "
            f"loop {_mode_name(data.loop_mode, data.loop)}, "
            f"quantize {_mode_name(data.quantize_mode, data.quantize)}, "
            f"{data.slice_count} slices")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='octasox',
        description="Generate sox command lines that chop samples based on Octatrack slices.",
    )
    parser.add_argument('otfiles', nargs='+', metavar='OTFILE', help='Octatrack .ot settings file')
    parser.add_argument('--strict', action='store_true', help='Reject files without the Octatrack header')
    parser.add_argument('--info', action='store_true', help='Print a summary of each file to stderr')
    parser.add_argument('--export', metavar='DIR', help='Write the slices as wav files into DIR instead of printing')
    parser.add_argument('--wav', metavar='PATH', help='Audio file to chop (default: OTFILE with .wav)')
    return parser


def process(settings_file: str, args) -> None:
    data = ot_reader.load(settings_file, strict=args.strict)
    if args.info:
        print(describe(settings_file, data), file=sys.stderr)

    name = settings_file[:-len(OT_EXT)]
    input_wav = args.wav or name + '.wav'
    spans = extract_slices(data)

    if args.export:
        if not spans:
            print(f"No slices in {settings_file}, nothing to export.", file=sys.stderr)
            return
        item = chopper.read_sample(input_wav)
        written, skipped = chopper.export_slices(item, spans, args.export, base=Path(name).name)
        for span in skipped:
            print(f"Empty slice {span.label()} in {settings_file} "
                  f"({span.start}-{span.end}), not written.", file=sys.stderr)
        print(f"Saved {len(written)} slices from {input_wav}", file=sys.stderr)
        return

    for span in spans:
        print(sox.command_line(input_wav, slice_name(name, span), span))


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.wav and len(args.otfiles) > 1:
        parser.error('--wav can only be used with a single OTFILE')

    failed = 0
    for settings_file in args.otfiles:
        if not settings_file.endswith(OT_EXT) or len(settings_file) <= len(OT_EXT):
            print(f"Skipping {settings_file}: Only .ot files are supported.", file=sys.stderr)
            continue
        try:
            process(settings_file, args)
        except ot_reader.OTFileError as e:
            print(f"Skipping {settings_file}: {e}", file=sys.stderr)
            failed += 1
        except (OSError, RuntimeError, ValueError) as e:
            # 書き出し先 / 元の wav が読めない
            print(f"Skipping {settings_file}: {e}", file=sys.stderr)
            failed += 1
    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
