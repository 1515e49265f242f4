import argparse
import logging
import os
import sys
from typing import Optional

from psd_export.api.layers import LayerTreeNode
from psd_export.api.psd_io import open_document
from psd_export.api.tree import build_tree, tree_statistics
from psd_export.constants import ExportFormat
from psd_export.errors import ValidationError
from psd_export.export import ExportOptions, StaticPicker, export_document
from psd_export.version import __version__

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="psd-export command line utility.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Be more verbose.")
    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", required=True)

    export_parser = subparsers.add_parser("export", help="Export layers to a folder")
    export_parser.add_argument("input_file", help="Input PSD file")
    export_parser.add_argument("output_dir", help="Output directory")
    export_parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.PNG.value,
        help="Output format (default: png)",
    )
    export_parser.add_argument(
        "-q", "--quality", type=float, default=None, help="JPEG quality in (0, 1]"
    )
    export_parser.add_argument(
        "-s",
        "--structure",
        action="store_true",
        help="Mirror groups as directories",
    )
    export_parser.add_argument(
        "--hide",
        type=int,
        action="append",
        default=[],
        metavar="INDEX",
        help="Layer index to leave out; repeatable",
    )

    show_parser = subparsers.add_parser("show", help="Show the indexed layer tree")
    show_parser.add_argument("input_file", help="Input PSD file")

    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> Optional[int]:
    args = parse_args(argv)

    logging.basicConfig(level=logging.WARNING)
    package_logger = logging.getLogger("psd_export")
    if args.verbose:
        package_logger.setLevel(logging.DEBUG)
    else:
        package_logger.setLevel(logging.INFO)

    document = open_document(args.input_file)
    tree = build_tree(document.children)

    if args.command == "export":
        try:
            options = ExportOptions(
                format=args.format,
                quality=args.quality,
                preserve_structure=args.structure,
            )
        except ValidationError as e:
            logger.error(str(e))
            return 2
        output_dir = os.path.abspath(args.output_dir)
        os.makedirs(output_dir, exist_ok=True)
        result = export_document(
            tree, options, StaticPicker(output_dir), hidden=set(args.hide)
        )
        print("Exported %d, failed %d" % (result.success, result.failed))
        if result.failed:
            return 1

    elif args.command == "show":
        print("%s (%dx%d)" % (args.input_file, document.width, document.height))
        for node in tree:
            _print_node(node, 1)
        stats = tree_statistics(tree.children)
        print(
            "%d nodes, %d groups, %d layers, depth %d"
            % (stats["total"], stats["groups"], stats["layers"], stats["max_depth"])
        )

    return None


def _print_node(node: LayerTreeNode, depth: int) -> None:
    kind = "group" if node.is_group else (node.layer.kind if node.layer else "")
    marker = "*" if node.raster is not None else " "
    print(
        "%s[%s]%s %s (%s, %dx%d)"
        % ("  " * depth, node.index, marker, node.name, kind, node.width, node.height)
    )
    for child in node.children:
        _print_node(child, depth + 1)


if __name__ == "__main__":
    sys.exit(main())
