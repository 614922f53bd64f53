"""huffpack CLI.

This is the stable CLI entrypoint (console-script: ``huffpack``).

UX policy:
  - Diagnostics go to stderr with a ``[huffpack]`` prefix.
  - ``--debug`` re-raises errors to show stack traces.
  - Exit codes come from ``huffpack.errors``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from huffpack.core.codec_registry import CODEC_IDS
from huffpack.errors import EXIT_GENERIC, EXIT_USAGE, HuffpackError
from huffpack.pipeline_spec import PipelineSpecError, load_pipeline_spec


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_verbose_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument("--verbose", action="store_true", help="Print a size summary to stderr")


def _report_sizes(verb: str, n_in: int, n_out: int) -> None:
    ratio = (n_out / n_in) if n_in else 0.0
    print(f"[huffpack] {verb}: {n_in} -> {n_out} byte (ratio {ratio:.3f})", file=sys.stderr)


def _cmd_compress(
    input_path: Path,
    output_path: Path,
    *,
    codec: str,
    level: int | None,
    pipeline_arg: str | None,
    verbose: bool,
) -> int:
    """Lossless compress.

    The pipeline spec, when given, is the source of truth for codec/level.
    """
    from huffpack.engine.container import compress_file

    if pipeline_arg is not None:
        spec = load_pipeline_spec(pipeline_arg)
        codec, level = spec.codec, spec.level

    n_in, n_out = compress_file(input_path, output_path, codec_id=codec, level=level)
    if verbose:
        _report_sizes("compress", n_in, n_out)
    return 0


def _cmd_decompress(input_path: Path, output_path: Path, *, verbose: bool) -> int:
    from huffpack.engine.container import decompress_file

    n_in, n_out = decompress_file(input_path, output_path)
    if verbose:
        _report_sizes("decompress", n_in, n_out)
    return 0


def _cmd_verify(input_path: Path, *, full: bool) -> int:
    from huffpack.verify import verify_container_file

    verify_container_file(input_path, full=full)
    print("OK")
    return 0


def _cmd_show(input_path: Path) -> int:
    from huffpack.core.report import describe_package, render_report
    from huffpack.engine.container import unpack_container

    info, package = unpack_container(input_path.read_bytes())
    print(f"container: v{info.version} codec={info.codec_id} body={info.body_len}/{info.comp_len}")
    print(render_report(describe_package(package)), end="")
    return 0


def _cmd_pipeline_validate(pipeline_arg: str) -> int:
    # load is the validation
    load_pipeline_spec(pipeline_arg)
    print("OK")
    return 0


def _cmd_exit_codes() -> int:
    from huffpack.errors import render_exit_codes_markdown

    print(render_exit_codes_markdown(), end="")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffpack", description="Huffman text compressor")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Lossless compress a UTF-8 text file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    p_c.add_argument(
        "--pipeline",
        default=None,
        help=(
            "Pipeline spec (JSON). Use '@file.json' to load from file, or pass JSON inline. "
            "When set, --codec/--level are ignored."
        ),
    )
    p_c.add_argument(
        "--codec",
        default="raw",
        choices=list(CODEC_IDS),
        help="Post-codec applied to the container body (default: raw)",
    )
    p_c.add_argument("--level", type=int, default=None, help="Codec level (zlib 0..9, zstd 1..22)")
    _add_verbose_arg(p_c)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Lossless decompress a container file")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_verbose_arg(p_d)
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Verify a container file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the message and check sha256")
    _add_common_args(p_v)

    p_s = sub.add_parser("show", help="Show code table and stats of a container file")
    p_s.add_argument("input", type=Path)
    _add_common_args(p_s)

    p_pv = sub.add_parser("pipeline-validate", help="Validate a pipeline spec (v1)")
    p_pv.add_argument("pipeline", help="Pipeline spec JSON (@file.json or inline JSON)")
    _add_common_args(p_pv)

    p_ec = sub.add_parser("exit-codes", help="Print the exit code table (markdown)")
    _add_common_args(p_ec)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _cmd_compress(
                ns.input,
                ns.output,
                codec=ns.codec,
                level=ns.level,
                pipeline_arg=ns.pipeline,
                verbose=bool(ns.verbose),
            )
        if ns.cmd == "decompress":
            return _cmd_decompress(ns.input, ns.output, verbose=bool(ns.verbose))
        if ns.cmd == "verify":
            return _cmd_verify(ns.input, full=bool(ns.full))
        if ns.cmd == "show":
            return _cmd_show(ns.input)
        if ns.cmd == "pipeline-validate":
            return _cmd_pipeline_validate(str(ns.pipeline))
        if ns.cmd == "exit-codes":
            return _cmd_exit_codes()
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except PipelineSpecError as e:
        # Treat as usage/config error.
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e}", file=sys.stderr)
        return EXIT_USAGE
    except HuffpackError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffpack] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
