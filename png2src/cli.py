"""Command-line interface generating WASM-4 sprite source code."""
from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from pathlib import Path
from typing import Iterable, List, TextIO

from .encoding import unpack_indices
from .errors import Png2SrcError
from .file_scanner import build_sprite_modules_tree, collect_sprite_files
from .processing import convert_png_file
from .variables import SpriteVariables


logger = logging.getLogger(__name__)

_PREVIEW_CHARS = " .+#"


def setup_debug_logging() -> Path | None:
    """Log to a file when ``PNG2SRC_DEBUG`` is set; stay silent otherwise."""

    if not os.environ.get("PNG2SRC_DEBUG"):
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        return None
    log_path = Path(os.environ.get("PNG2SRC_DEBUG_LOG", "png2src_debug.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    # remove existing file handlers to avoid duplicates
    root_logger.handlers = [h for h in root_logger.handlers if not isinstance(h, logging.FileHandler)]
    root_logger.addHandler(handler)
    root_logger.info("png2src debug logging enabled at %s", log_path)
    return log_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="png2src", description="Convert indexed PNG sprites to WASM-4 Rust source"
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--binary",
        action="store_true",
        help="Write sprite bytes as binary literals instead of hexadecimal",
    )
    common.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Destination file (defaults to stdout)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sprite = subparsers.add_parser(
        "sprite", parents=[common], help="Convert individual PNG files"
    )
    sprite.add_argument("inputs", nargs="+", type=Path, help="PNG files or folders")
    sprite.add_argument(
        "--preview",
        action="store_true",
        help="Print an ASCII preview of each decoded sprite to stderr",
    )

    tree = subparsers.add_parser(
        "tree", parents=[common], help="Convert sprite folders into nested modules"
    )
    tree.add_argument("inputs", nargs="+", type=Path, help="Sprite folders")
    tree.add_argument(
        "--flatten",
        action="store_true",
        help="Put every sprite in the top-level module",
    )
    tree.add_argument(
        "--cargo",
        action="store_true",
        help="Emit cargo:rerun-if-changed lines before the code",
    )
    return parser


def _expand_inputs(inputs: Iterable[Path]) -> List[Path]:
    files: List[Path] = []
    for path in inputs:
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(collect_sprite_files([path]))
        else:
            raise FileNotFoundError(path)
    return files


def render_preview(variables: SpriteVariables) -> str:
    indices = unpack_indices(
        variables.data, variables.width, variables.height, variables.flags.bits_per_pixel
    )
    rows = ["".join(_PREVIEW_CHARS[value] for value in row) for row in indices.tolist()]
    return "\n".join(rows) + "\n"


def _run_sprites(args: argparse.Namespace, out: TextIO) -> int:
    try:
        files = _expand_inputs(args.inputs)
    except FileNotFoundError as exc:
        print(f"[FAIL] Input path not found: {exc}", file=sys.stderr)
        return 1
    except Png2SrcError as exc:
        print(f"[FAIL] {exc}", file=sys.stderr)
        return 1

    for path in files:
        try:
            variables = convert_png_file(path)
        except Png2SrcError as exc:
            print(f"[FAIL] {path}: {exc}", file=sys.stderr)
            return 1
        out.write(variables.render(alternate=args.binary))
        out.write("\n")
        if args.preview:
            sys.stderr.write(f"{path.name} ({variables.width}x{variables.height})\n")
            sys.stderr.write(render_preview(variables))
        logger.debug("sprite %s -> %s bytes", path, len(variables.data))
    return 0


def _run_tree(args: argparse.Namespace, out: TextIO) -> int:
    for directory in args.inputs:
        try:
            module = build_sprite_modules_tree(directory)
            if args.flatten:
                module = module.flatten()
            parsed = module.parse()
        except Png2SrcError as exc:
            print(f"[FAIL] {directory}: {exc}", file=sys.stderr)
            return 1
        if args.cargo:
            module.write_cargo_build_instructions(out)
        out.write(parsed.render(alternate=args.binary))
    return 0


def main(argv: list[str] | None = None) -> int:
    setup_debug_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    runner = _run_sprites if args.command == "sprite" else _run_tree

    if args.output is None:
        return runner(args, sys.stdout)
    # Output is buffered so a failed run leaves no partial file behind.
    buffer = io.StringIO()
    status = runner(args, buffer)
    if status == 0:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(buffer.getvalue(), encoding="utf-8")
    return status


if __name__ == "__main__":
    raise SystemExit(main())
