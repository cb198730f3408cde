"""
multirate-dsp command line tool

Usage:
    multirate-dsp upsample <input.raw> <input sample rate> <ptime ms> [--out-dir DIR]

Reads raw 16-bit mono PCM at 8 or 16 kHz frame by frame and writes, for
every stage of the 48 kHz pipeline, a raw file named after the frame time:

    <ptime>ms_x.raw         input
    <ptime>ms_x_u.raw       upsampled (zero-stuffed)
    <ptime>ms_x_u_f.raw     upsampled, filtered
    <ptime>ms_x_u_f_d.raw   upsampled, filtered, downsampled
"""

import argparse
import logging
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import List, Optional

from .config import DSPConfig
from .converter import FrameUpsampler
from .pcm import read_frames, to_int16, write_frame

logger = logging.getLogger(__name__)

STAGE_SUFFIXES = ("x", "x_u", "x_u_f", "x_u_f_d")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multirate-dsp",
        description="Frame-wise upsampling of raw 16-bit PCM to 48 kHz",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    up = sub.add_parser("upsample", help="upsample, filter and downsample a raw PCM file")
    up.add_argument("input", type=Path, help="raw 16-bit little-endian mono PCM file")
    up.add_argument("rate", type=int, help="input sample rate in Hz (8000 or 16000)")
    up.add_argument("ptime", type=int, help="frame length in ms")
    up.add_argument("--out-dir", type=Path, default=Path("."), help="output directory")
    up.add_argument("--plot", type=Path, default=None,
                    help="save the filter's frequency response to this image")
    return parser


def run_upsample(input_path: Path, rate: int, ptime_ms: int, out_dir: Path,
                 config: DSPConfig, plot_path: Optional[Path] = None) -> int:
    """Run the pipeline over a file; returns the number of frames processed."""
    upsampler = FrameUpsampler(rate, ptime_ms, config)

    print(f"sampling rate={rate}, frame ms={ptime_ms}, frame samples={upsampler.samples_in}, "
          f"upsampling factor={upsampler.factor}")

    if plot_path is not None:
        import matplotlib.pyplot as plt

        from .analysis import plot_frequency_response
        fig = plot_frequency_response(upsampler.filter, plot_path)
        plt.close(fig)

    out_dir.mkdir(parents=True, exist_ok=True)
    frames = 0
    samples = 0
    with ExitStack() as stack:
        outputs = [
            stack.enter_context(open(out_dir / f"{ptime_ms}ms_{suffix}.raw", "wb"))
            for suffix in STAGE_SUFFIXES
        ]
        for frame in read_frames(input_path, upsampler.samples_in):
            result = upsampler.process_frame(frame)
            write_frame(outputs[0], frame)
            write_frame(outputs[1], result.upsampled)
            write_frame(outputs[2], to_int16(result.filtered))
            write_frame(outputs[3], to_int16(result.downsampled))
            frames += 1
            samples += len(frame)

    print(f"Done. (frames: {frames}, bytes total: {samples * 2})")
    return frames


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = DSPConfig.from_env()
        run_upsample(args.input, args.rate, args.ptime, args.out_dir, config, args.plot)
    except (ValueError, OSError) as exc:
        logger.debug("upsample failed", exc_info=True)
        print(f"{exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
