import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .codec import STYLE_REGISTRY
from .ecc import DEFAULT_ECC_SYMBOLS, ErrorCorrection
from .log import log_info, log_warn, set_verbose
from .stream import decode, encode
from .styles import Style

DEFAULT_STYLE = Style.NLBB.value
DEFAULT_COLUMNS = 64
STDIN_PATH = "-"

EXIT_MISSING_PATH = 1
EXIT_NOT_A_FILE = 2


def list_styles():
    """Print all available styles."""
    print("\nAvailable Styles:")
    print("=" * 60)
    for style, codec in STYLE_REGISTRY.items():
        marker = "*" if style.value == DEFAULT_STYLE else " "
        print(f" {marker}{codec.name:<8} {codec.description}")
    print("=" * 60)
    print(f"\nTotal: {len(STYLE_REGISTRY)} style(s) registered.")


def build_parser() -> argparse.ArgumentParser:
    style_help = "\n".join(f"  {s.value:<8}: {s.description}" for s in Style)

    parser = argparse.ArgumentParser(
        prog="bbd",
        description="Binary Braille Dump\n\n"
                    "Encode/decode data to/from Braille Patterns Unicode Block characters",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument("-d", "--decode", action="store_true",
                            help="Decode Braille characters to bytes using the given style; ignores wrapping")
    mode_group.add_argument("-m", "--markdown", action="store_true",
                            help="Markdown output")
    mode_group.add_argument("-l", "--list", action="store_true",
                            help="List all available styles")

    parser.add_argument("-s", "--style", choices=[s.value for s in Style], default=DEFAULT_STYLE,
                        metavar="STYLE",
                        help=f"Byte to dot layout (default: {DEFAULT_STYLE}).\n{style_help}")
    parser.add_argument("-c", "--columns", type=int, default=DEFAULT_COLUMNS, metavar="N",
                        help=f"Wrap to N columns (\"bytes\") per line; 0: disable wrapping (default: {DEFAULT_COLUMNS})")
    parser.add_argument("--strict", action="store_true",
                        help="Reject characters outside the Braille block when decoding")

    # ECC options
    parser.add_argument("--ecc-symbols", type=int, default=DEFAULT_ECC_SYMBOLS, metavar="N",
                        help="Reed-Solomon ECC symbols (default: 0, disabled).\n"
                             "On decode, any non-zero value enables repair of protected dumps.")

    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable verbose output (info and warning messages)")
    parser.add_argument("-o", "--output", help="Output file path")
    parser.add_argument("files", nargs="*", metavar="PATH",
                        help=f"Input file(s) (default: \"{STDIN_PATH}\" (stdin))")
    return parser


def check_paths(files: List[str]):
    """Exit before producing any output if an input path is unusable."""
    for name in files:
        if name == STDIN_PATH:
            continue
        path = Path(name)
        if not path.exists():
            print(f"File path `{name}` does not exist!", file=sys.stderr)
            sys.exit(EXIT_MISSING_PATH)
        if not path.is_file():
            print(f"File path `{name}` is not a file!", file=sys.stderr)
            sys.exit(EXIT_NOT_A_FILE)


def read_bytes(name: str) -> bytes:
    if name == STDIN_PATH:
        return sys.stdin.buffer.read()
    return Path(name).read_bytes()


def read_text(name: str) -> str:
    if name == STDIN_PATH:
        return sys.stdin.buffer.read().decode("utf-8")
    # Bytes first: text mode would fold \r\n into \n before decoding.
    return Path(name).read_bytes().decode("utf-8")


def render_markdown(name: str, text: str) -> str:
    return f"`{name}`:\n\n```\n{text}\n```\n"


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    set_verbose(args.verbose)

    if args.list:
        list_styles()
        sys.exit(0)

    if args.columns < 0:
        parser.error("--columns must be 0 or greater")
    if args.ecc_symbols < 0:
        parser.error("--ecc-symbols must be 0 or greater")

    files = args.files or [STDIN_PATH]
    check_paths(files)

    codec = STYLE_REGISTRY[Style(args.style)]
    encode_byte, decode_byte = codec.encode_byte, codec.decode_byte
    log_info(f"Style '{codec.name}', {len(files)} input(s).")

    # 1. TRANSCODE EACH INPUT
    chunks = []
    if args.decode:
        for name in files:
            try:
                data = decode(read_text(name), decode_byte, strict=args.strict)
            except (ValueError, UnicodeDecodeError) as e:
                sys.exit(f"Decode Error ({name}): {e}")

            if args.ecc_symbols > 0:
                data, had_ecc, errors = ErrorCorrection.recover(data)
                if not had_ecc:
                    log_warn(f"{name}: no ECC header found, output is unrepaired.")
                elif errors > 0:
                    log_info(f"{name}: corrected {errors} error(s) using Reed-Solomon.")
                elif errors < 0:
                    log_warn(f"{name}: data corruption detected but could not be repaired.")

            log_info(f"{name}: decoded {len(data)} byte(s).")
            chunks.append(data)
    else:
        prev_content_length = 0
        for name in files:
            content = read_bytes(name)
            try:
                content = ErrorCorrection.protect(content, args.ecc_symbols)
                text = encode(content, encode_byte, args.columns, prev_content_length)
            except ValueError as e:
                sys.exit(f"Encode Error ({name}): {e}")

            log_info(f"{name}: encoded {len(content)} byte(s).")
            prev_content_length += len(content)
            if args.markdown:
                text = render_markdown(name, text)
            chunks.append((text + "\n").encode("utf-8"))

    # 2. WRITE OUTPUT
    if args.output:
        try:
            with open(args.output, "wb") as f:
                for chunk in chunks:
                    f.write(chunk)
        except OSError as e:
            sys.exit(f"Error writing output: {e}")
    else:
        sys.stdout.flush()
        for chunk in chunks:
            sys.stdout.buffer.write(chunk)
        sys.stdout.buffer.flush()


if __name__ == "__main__":
    main()
