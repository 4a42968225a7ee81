import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .core.converter import ConversionError, convert_file


def setup_logging(log_level: str = "WARNING") -> None:
    """Configure application logging (stderr; stdout carries the diagram)."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


logger = logging.getLogger(__name__)


def output_path_for(input_path: Path, output_dir: Optional[str]) -> Path:
    """Where ``--save`` writes: next to the input, or inside ``output_dir``."""
    filename = input_path.with_suffix(".mermaid").name
    if output_dir:
        target_dir = Path(output_dir).resolve()
        target_dir.mkdir(parents=True, exist_ok=True)
        return target_dir / filename
    return input_path.with_suffix(".mermaid")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for tsdiagram."""
    parser = argparse.ArgumentParser(
        prog="tsdiagram",
        description="Convert TypeScript type declarations to a Mermaid class diagram",
    )
    parser.add_argument(
        "file",
        help="Path to the TypeScript file (.ts, .tsx, .mts, .cts)"
    )
    parser.add_argument(
        "--save",
        nargs="?",
        const="",
        default=None,
        metavar="OUTPUT_DIR",
        help="Also write <name>.mermaid, next to the input or into OUTPUT_DIR"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    input_path = Path(args.file).resolve()
    if not input_path.is_file():
        print(f"File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        diagram = convert_file(str(input_path))
    except ConversionError as e:
        print(e, file=sys.stderr)
        return 1

    print(diagram)

    if args.save is not None:
        output_path = output_path_for(input_path, args.save or None)
        output_path.write_text(diagram, encoding="utf-8")
        logger.info(f"Wrote {output_path}")
        print(f"\nSaved to: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
