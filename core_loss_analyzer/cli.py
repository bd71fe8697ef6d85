"""Command-line entry point: IGSE core loss of one waveform file."""

from __future__ import annotations

import sys
from dataclasses import replace
from typing import Optional, Sequence

from core_loss_analyzer.analysis.igse import analyze_waveform
from core_loss_analyzer.errors import InvalidCoefficientError, InvalidWaveformError, LoopCountOverflowError
from core_loss_analyzer.ingest.readers_waveform import WaveformReader, WaveformReaderConfig
from core_loss_analyzer.models.profile import SteinmetzProfile
from core_loss_analyzer.util.exit_codes import ExitCode
from core_loss_analyzer.util.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _column(s: Optional[str]):
    if s is None:
        return None
    return int(s) if s.isdigit() else s


def _build_profile(args) -> SteinmetzProfile:
    if args.profile:
        profile = SteinmetzProfile.from_json_file(args.profile)
    else:
        missing = [n for n in ("alpha", "beta", "k") if getattr(args, n) is None]
        if missing:
            raise InvalidCoefficientError(
                "Missing Steinmetz coefficient(s): " + ", ".join(f"--{n}" for n in missing)
            )
        profile = SteinmetzProfile(alpha=args.alpha, beta=args.beta, k=args.k)

    overrides = {}
    for name in ("alpha", "beta", "k"):
        if args.profile and getattr(args, name) is not None:
            overrides[name] = getattr(args, name)
    if args.tol is not None:
        overrides["periodicity_tol"] = args.tol
    return replace(profile, **overrides) if overrides else profile


def main(argv: Optional[Sequence[str]] = None) -> int:
    import argparse
    import textwrap

    p = argparse.ArgumentParser(
        prog="core-loss-igse",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=textwrap.dedent(
            """\
            Compute core loss density (W/m^3) with the improved generalized
            Steinmetz equation (IGSE) from one cycle of a flux-density waveform.

            The file must hold time [s] and flux density [T] columns, evenly
            sampled over exactly one period. Over-sampled simulation output
            gives the best accuracy: minor-loop crossings are not interpolated.
            """
        ),
    )

    p.add_argument("file", help="Waveform file (CSV or whitespace-delimited text)")
    p.add_argument("--alpha", type=float, default=None, help="Steinmetz coefficient alpha")
    p.add_argument("--beta", type=float, default=None, help="Steinmetz coefficient beta")
    p.add_argument("--k", type=float, default=None, help="Steinmetz coefficient k (mW/cm^3 units)")
    p.add_argument("--profile", default=None, help="JSON file with SteinmetzProfile fields")
    p.add_argument("--tol", type=float, default=None, help="Flux periodicity tolerance (default 0.1)")
    p.add_argument("--time-col", default=None, help="Time column name or 0-based index (default: first)")
    p.add_argument("--flux-col", default=None, help="Flux column name or 0-based index (default: second)")
    p.add_argument("--time-scale", type=float, default=1.0, help="Multiply time by this factor after reading")
    p.add_argument("--flux-scale", type=float, default=1.0, help="Multiply flux by this factor after reading")
    p.add_argument("--loops", action="store_true", help="Also print the per-loop energy table")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default) or ERROR")

    args = p.parse_args(argv)
    configure_logging(level=args.log_level)

    reader = WaveformReader(
        WaveformReaderConfig(
            time_col=_column(args.time_col),
            flux_col=_column(args.flux_col),
            time_scale=args.time_scale,
            flux_scale=args.flux_scale,
        )
    )

    try:
        profile = _build_profile(args)
        frame = reader.read(args.file)
        result = analyze_waveform(frame, profile)
    except LoopCountOverflowError as e:
        logger.error("%s", e)
        return ExitCode.LOOP_OVERFLOW
    except (InvalidCoefficientError, InvalidWaveformError, FileNotFoundError, ValueError) as e:
        # ValueError also covers malformed profile JSON and unknown profile keys.
        logger.error("%s", e)
        return ExitCode.INVALID_INPUT

    print(f"{result.loss_W_per_m3:.9g}")
    if args.loops:
        print(result.loop_table.to_string(index=False))
    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
