"""Command line entry point: encode text and print or save the symbol."""

import argparse
import logging
import sys
from pathlib import Path

from qrlive.config import DEFAULT_SETTINGS
from qrlive.errors import QrError
from qrlive.export import ExportFormat, export
from qrlive.symbol import encode

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='qrlive', description='Generate QR codes from text or URLs')
    parser.add_argument('text', help='Text or URL to encode')
    parser.add_argument('-o', '--output', type=Path,
                        help='Output file; prints to the terminal when omitted')
    parser.add_argument('-f', '--format',
                        help='vector, raster-lossless, raster-lossy or document '
                             '(default: from the output extension)')
    parser.add_argument('-l', '--level', choices=['L', 'M', 'Q', 'H'],
                        default=DEFAULT_SETTINGS.level,
                        help='Error correction level: L=7%%, M=15%%, Q=25%%, H=30%% '
                             '(default: %(default)s)')
    parser.add_argument('--size', type=int, default=DEFAULT_SETTINGS.raster_size,
                        help='Raster size in pixels (default: %(default)s)')
    parser.add_argument('--border', type=int, default=DEFAULT_SETTINGS.border,
                        help='Quiet zone in modules (default: %(default)s)')
    parser.add_argument('--mask', type=int, choices=range(8),
                        help='Force a mask pattern instead of the lowest penalty')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    )
    settings = DEFAULT_SETTINGS.replace(
        level=args.level, raster_size=args.size, border=args.border)

    try:
        symbol = encode(args.text, args.level, mask=args.mask)
        logger.info("Version %d-%s, mask %d", symbol.version, symbol.level.value, symbol.mask)

        if args.output is None:
            print(symbol.to_string(border=settings.border))
            return 0

        fmt = args.format or args.output.suffix
        result = export(symbol, fmt, settings)
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(result.data)
        logger.info("Saved QR code to %s (%s)", args.output, result.mime_type)
    except (QrError, ValueError) as e:
        print(f"Error generating QR code: {e}", file=sys.stderr)
        return 1
    return 0
