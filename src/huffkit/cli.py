"""huffkit CLI.

This is the stable CLI entrypoint (console-script: ``huffkit``).

UX policy:
  - INPUT may be a path or '-' for stdin.
  - Results go to stdout, errors to stderr as ``[huffkit] <message>``.
  - The code table travels as JSON (see huffkit.codes_spec).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from huffkit.errors import EXIT_GENERIC, EXIT_USAGE, HuffkitError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces and debug logs on errors")


def _add_jobs_arg(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Parallel jobs for frequency counting (default: 1). Only large inputs are split.",
    )


def _read_input(arg: str) -> bytes:
    if arg == "-":
        return sys.stdin.buffer.read()
    return Path(arg).read_bytes()


def _cmd_codes(input_arg: str, *, as_json: bool, jobs: int) -> int:
    from huffkit.api import codes_for
    from huffkit.codes_spec import dump_code_table
    from huffkit.report import format_codes

    codes = codes_for(_read_input(input_arg), jobs=jobs)
    if as_json:
        sys.stdout.write(dump_code_table(codes))
    else:
        print(format_codes(codes))
    return 0


def _cmd_encode(input_arg: str, *, codes_out: Path | None, bits: bool, jobs: int) -> int:
    from huffkit.api import codes_for, encode, encode_text
    from huffkit.codes_spec import dump_code_table

    data = _read_input(input_arg)
    codes = codes_for(data, jobs=jobs)
    if codes_out is not None:
        codes_out.write_text(dump_code_table(codes), encoding="utf-8")
    if bits:
        print(encode(data, codes).bits())
    else:
        print(encode_text(data, codes))
    return 0


def _cmd_decode(encoded_arg: str, output_path: Path, *, codes_arg: str, bits: bool) -> int:
    from huffkit.api import EncodedPayload, decode, decode_text
    from huffkit.codes_spec import load_code_table

    codes = load_code_table(codes_arg)
    text = _read_input(encoded_arg).decode("ascii", errors="replace").strip("\r\n")
    if bits:
        data = decode(EncodedPayload.from_bits(text), codes)
    else:
        data = decode_text(text, codes)
    output_path.write_bytes(data)
    return 0


def _cmd_report(input_arg: str | None, text: str | None, *, bits_per_symbol: int, jobs: int) -> int:
    from huffkit.report import build_report, render_report

    if text is not None:
        data = text.encode("utf-8")
    elif input_arg is not None:
        data = _read_input(input_arg)
    else:
        raise ValueError("report: pass INPUT or --text")
    sys.stdout.write(render_report(build_report(data, bits_per_symbol=bits_per_symbol, jobs=jobs)))
    return 0


def _cmd_compare(input_arg: str, *, jobs: int) -> int:
    from huffkit.baselines import compare_sizes

    rows = compare_sizes(_read_input(input_arg), jobs=jobs)
    raw = rows[0].size
    for r in rows:
        pct = f"{r.size * 100.0 / raw:6.2f}%" if raw else "     -"
        print(f"{r.name:<8} {r.size:>10}  {pct}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="huffkit", description="Huffman coding toolkit")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_codes = sub.add_parser("codes", help="Print the Huffman code table of an input")
    p_codes.add_argument("input", help="Input file or '-' for stdin")
    p_codes.add_argument("--json", action="store_true", help="Emit the code table as JSON")
    _add_jobs_arg(p_codes)
    _add_common_args(p_codes)

    p_enc = sub.add_parser("encode", help="Encode an input, print the encoded text")
    p_enc.add_argument("input", help="Input file or '-' for stdin")
    p_enc.add_argument(
        "--codes-out", type=Path, default=None, help="Write the code table JSON to this path"
    )
    p_enc.add_argument(
        "--bits", action="store_true", help="Print one undelimited 0/1 string instead of space separated codes"
    )
    _add_jobs_arg(p_enc)
    _add_common_args(p_enc)

    p_dec = sub.add_parser("decode", help="Decode encoded text back to bytes")
    p_dec.add_argument("input", help="Encoded text file or '-' for stdin")
    p_dec.add_argument("output", type=Path)
    p_dec.add_argument(
        "--codes",
        required=True,
        help="Code table JSON. Use '@file.json' to load from file, or pass JSON inline.",
    )
    p_dec.add_argument("--bits", action="store_true", help="Input is an undelimited 0/1 string")
    _add_common_args(p_dec)

    p_rep = sub.add_parser("report", help="Full report: binary, frequencies, codes, ratio, round-trip")
    p_rep.add_argument("input", nargs="?", default=None, help="Input file or '-' for stdin")
    p_rep.add_argument("--text", default=None, help="Use this string as input instead of a file")
    p_rep.add_argument(
        "--bits-per-symbol",
        type=int,
        default=8,
        help="Bits per input symbol used as the uncompressed size (default: 8)",
    )
    _add_jobs_arg(p_rep)
    _add_common_args(p_rep)

    p_cmp = sub.add_parser("compare", help="Compare Huffman payload size with zlib/zstd")
    p_cmp.add_argument("input", help="Input file or '-' for stdin")
    _add_jobs_arg(p_cmp)
    _add_common_args(p_cmp)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    if getattr(ns, "debug", False):
        logging.basicConfig(level=logging.DEBUG, format="[huffkit] %(name)s: %(message)s")

    try:
        if ns.cmd == "codes":
            return _cmd_codes(ns.input, as_json=bool(ns.json), jobs=ns.jobs)
        if ns.cmd == "encode":
            return _cmd_encode(ns.input, codes_out=ns.codes_out, bits=bool(ns.bits), jobs=ns.jobs)
        if ns.cmd == "decode":
            return _cmd_decode(ns.input, ns.output, codes_arg=str(ns.codes), bits=bool(ns.bits))
        if ns.cmd == "report":
            return _cmd_report(
                ns.input, ns.text, bits_per_symbol=int(ns.bits_per_symbol), jobs=ns.jobs
            )
        if ns.cmd == "compare":
            return _cmd_compare(ns.input, jobs=ns.jobs)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except HuffkitError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffkit] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except (ValueError, OSError) as e:
        # argomenti/file: errore d'uso
        if getattr(ns, "debug", False):
            raise
        print(f"[huffkit] {e}", file=sys.stderr)
        return EXIT_USAGE
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[huffkit] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
