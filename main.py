#!/usr/bin/env python3
"""
sketchlogic - Block logic codec for visual programming projects

Main entry point. Decrypts project logic files, prints their decoded block
chains, and re-encodes them to check that nothing is lost on the way.
"""

import logging
import sys
import argparse
from pathlib import Path
from typing import List

from sketchlogic import envelope
from sketchlogic.config import config
from sketchlogic.errors import SketchLogicError, UnrecognizedColorError
from sketchlogic.loaders import LogicFileLoader
from sketchlogic.models import Blocks


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(log_file)
        ]
    )


def render_blocks(blocks: Blocks, depth: int = 0) -> List[str]:
    """
    Render a chain as indented text, one line per block.

    Args:
        blocks: The chain to render
        depth: Current nesting level

    Returns:
        The rendered lines
    """
    lines = []
    indent = "| |   " * depth

    for block in blocks.chain():
        try:
            category = block.category.value
        except UnrecognizedColorError:
            category = f"unknown {block.color}"
        lines.append(f"{indent}[ {block.spec} ]: {block.op_code} ({category})")

        if block.sub_stack1 is not None:
            lines.extend(render_blocks(block.sub_stack1, depth + 1))
            lines.append(f"{indent}[        ]")

        if block.sub_stack2 is not None:
            lines.extend(render_blocks(block.sub_stack2, depth + 1))
            lines.append(f"{indent}[      ]")

    return lines


def run_show(args) -> int:
    """Print every decoded container of a logic file."""
    loader = LogicFileLoader(args.path, encrypted=not args.plain)
    report = loader.load_containers()

    for header, blocks in report.decoded.items():
        if args.container and header != args.container:
            continue
        print(f"@{header}")
        for line in render_blocks(blocks):
            print(line)
        print()

    for header, message in report.failures.items():
        print(f"Failed to decode {header}: {message}", file=sys.stderr)

    return 0 if report.ok else 1


def run_roundtrip(args) -> int:
    """Decode and re-encode every container, writing the result to a new file."""
    loader = LogicFileLoader(args.path, encrypted=not args.plain)
    report = loader.load_containers()

    if not report.ok:
        for header, message in report.failures.items():
            print(f"Failed to decode {header}: {message}", file=sys.stderr)
        if not args.skip_failures:
            return 1

    output = LogicFileLoader(args.output, encrypted=not args.plain)
    logic = loader.load_logic()
    for header, blocks in report.decoded.items():
        expected_hash = blocks.content_hash()
        records = loader.codec.encode(blocks, renumber=args.renumber)
        if loader.codec.decode(records, header).content_hash() != expected_hash:
            logging.error(f"Container {header} did not survive the round trip")
            return 1
        logic.set_records(header, records)

    output.save_logic(logic)
    print(f"Wrote {len(report.decoded)} container(s) to {args.output}")
    return 0


def run_decrypt(args) -> int:
    data = envelope.decrypt_file(args.path)
    Path(args.output).write_bytes(data)
    print(f"Decrypted {args.path} -> {args.output}")
    return 0


def run_encrypt(args) -> int:
    data = Path(args.path).read_bytes()
    envelope.encrypt_file(args.output, data)
    print(f"Encrypted {args.path} -> {args.output}")
    return 0


def parse_arguments(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="sketchlogic - Block logic codec for visual programming projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py show data/601/logic                      # Print all block containers
  python main.py show logic.txt --plain --container MainActivity.java_onCreate_initializeLogic
  python main.py roundtrip data/601/logic logic.out       # Decode, re-encode and write
  python main.py decrypt data/601/logic logic.txt         # Strip the encryption envelope
        """
    )

    parser.add_argument(
        "--version",
        action="version",
        version="sketchlogic 0.1.0"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    show = subparsers.add_parser("show", help="Print decoded block chains")
    show.add_argument("path", help="Path to the logic file")
    show.add_argument("--plain", action="store_true", help="The file is not encrypted")
    show.add_argument("--container", help="Only print this container header")
    show.set_defaults(handler=run_show)

    roundtrip = subparsers.add_parser("roundtrip", help="Decode and re-encode a logic file")
    roundtrip.add_argument("path", help="Path to the logic file")
    roundtrip.add_argument("output", help="Where to write the re-encoded file")
    roundtrip.add_argument("--plain", action="store_true", help="The files are not encrypted")
    roundtrip.add_argument(
        "--renumber",
        action="store_true",
        default=None,
        help="Renumber block ids sequentially (default: codec.renumber_on_save)"
    )
    roundtrip.add_argument(
        "--skip-failures",
        action="store_true",
        help="Write the file even if some containers failed to decode (they are left untouched)"
    )
    roundtrip.set_defaults(handler=run_roundtrip)

    decrypt = subparsers.add_parser("decrypt", help="Decrypt a project file")
    decrypt.add_argument("path")
    decrypt.add_argument("output")
    decrypt.set_defaults(handler=run_decrypt)

    encrypt = subparsers.add_parser("encrypt", help="Encrypt a project file")
    encrypt.add_argument("path")
    encrypt.add_argument("output")
    encrypt.set_defaults(handler=run_encrypt)

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    try:
        sys.exit(args.handler(args))
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(130)
    except (SketchLogicError, OSError) as e:
        logging.error(f"{args.command} failed: {e}")
        print(f"\n{args.command} failed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
