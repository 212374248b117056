"""
cli.py — командная строка: шаблон JSON -> файл команд принтера.

EN: Command-line front end. Reads a saved template (editor JSON), optionally a
product record, and writes the ZPL/EPL/TSPL buffer to a file or stdout.

    thermal-label price_tag.json --product item.json --language TSPL -o tag.prn

``--product`` may hold one JSON object, or a list of objects for a batch;
each list item may carry a ``quantity`` (default 1).
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

from . import get_logger, load_config
from .errors import ThermalPrintError
from .model.print_config import ThermalPrintConfig
from .model.template import LabelTemplate
from .printer.assembler import generate, generate_batch

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="thermal-label",
        description="Generate thermal printer commands (ZPL, EPL, TSPL) from a label template.",
    )
    parser.add_argument("template", type=Path, help="Template JSON saved by the label editor.")
    parser.add_argument("--product", type=Path, default=None, help="Product JSON (object or list for a batch).")

    printer_group = parser.add_argument_group("Printer")
    printer_group.add_argument("--language", default=None, help="ZPL, EPL or TSPL.")
    printer_group.add_argument("--dpi", type=int, default=None, help="Printer resolution.")
    printer_group.add_argument("--width", type=float, default=None, help="Label width in mm.")
    printer_group.add_argument("--height", type=float, default=None, help="Label height in mm.")
    printer_group.add_argument("--speed", type=int, default=None, help="Print speed 1-10.")
    printer_group.add_argument("--darkness", type=int, default=None, help="Darkness (language scale).")
    printer_group.add_argument("--copies", type=int, default=None, help="Copies of each label.")

    parser.add_argument("--config", type=Path, default=None, help="Settings file (default: thermal_label.json).")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output file (default: stdout).")
    return parser


def build_print_config(args: argparse.Namespace, template: LabelTemplate) -> ThermalPrintConfig:
    """CLI flags over settings file over the template's own size."""
    settings = load_config(args.config)
    width_mm, height_mm = template.config.size_mm()
    return ThermalPrintConfig(
        language=args.language or settings["default_language"],
        dpi=args.dpi if args.dpi is not None else settings["default_dpi"],
        label_width=args.width if args.width is not None else width_mm,
        label_height=args.height if args.height is not None else height_mm,
        print_speed=args.speed,
        darkness=args.darkness,
        copies=args.copies if args.copies is not None else settings["default_copies"],
        gap_mm=settings["gap_mm"],
        encoding=settings["encoding"],
    )


def _read_json(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _batch_items(products: List[Any]) -> List[Tuple[Any, int]]:
    return [(item, int(item.get("quantity", 1)) if isinstance(item, dict) else 1) for item in products]


def _write_output(buffer: bytes, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.buffer.write(buffer)
        sys.stdout.buffer.flush()
        return
    output.write_bytes(buffer)
    logger.info("Wrote %d bytes to %s", len(buffer), output)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        template = LabelTemplate.from_dict(_read_json(args.template))
        config = build_print_config(args, template)
        product = _read_json(args.product) if args.product else None
        if isinstance(product, list):
            buffer = generate_batch(template, _batch_items(product), config)
        else:
            buffer = generate(template, config, product=product)
        _write_output(buffer, args.output)
    except (ThermalPrintError, ValueError, KeyError, OSError) as e:
        logger.debug("Generation failed", exc_info=True)
        print(f"thermal-label: error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
