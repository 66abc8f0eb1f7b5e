import argparse
import logging
import sys
from typing import Optional

from psd_structure import PSD
from psd_structure.exceptions import DecodeError
from psd_structure.psd import ChannelData, LayerRecord
from psd_structure.version import __version__

try:
    from IPython.lib.pretty import pprint
except ImportError:
    from pprint import pprint

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-structure command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument(
        "--encoding",
        default="macroman",
        help="Charset of pascal strings in the file (default: macroman).",
    )
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser("show", help="Show the file content")
    show_parser.add_argument("input_file", help="Input PSD file")

    layers_parser = subparsers.add_parser("layers", help="List layer records")
    layers_parser.add_argument("input_file", help="Input PSD file")

    debug_parser = subparsers.add_parser(
        "debug", help="Decode the file with debug logging"
    )
    debug_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def format_layer(
    index: int, record: LayerRecord, channels: list[ChannelData]
) -> str:
    """One line summary of a layer record and its payloads."""
    rect = record.rect
    compression = ",".join(
        getattr(channel.compression, "name", str(channel.compression))
        for channel in channels
    )
    return "%d\t%s\t(%d, %d, %d, %d)\t%d\t%s" % (
        index,
        record.name,
        rect.top,
        rect.left,
        rect.bottom,
        rect.right,
        len(record.channel_info),
        compression,
    )


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("psd_structure")
    if args.verbose or args.command == "debug":
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    try:
        psd = PSD.open(args.input_file, encoding=args.encoding)
    except DecodeError as e:
        logger.error("%s: %s" % (args.input_file, e))
        return 1

    if args.command == "show":
        pprint(psd)

    elif args.command == "layers":
        for index, (record, channels) in enumerate(psd.iter_layers()):
            print(format_layer(index, record, channels))

    elif args.command == "debug":
        logger.debug("decoded %s" % args.input_file)
        pprint(psd.header)

    return None


if __name__ == "__main__":
    sys.exit(main())
