import argparse
import json
import logging
import os
import sys

# Add project root to sys.path
sys.path.append(os.getcwd())

from header_tree import ColumnTemplate, HeaderTreeError, save_template
from header_tree.config import DEFAULT_SHEET_TITLE

logger = logging.getLogger("build_template")


def build_template(config_path, output_path, title):
    with open(config_path, encoding='utf-8') as f:
        config = json.load(f)

    template = ColumnTemplate.from_dict(config)
    logger.info(
        "Column tree: %d header rows, %d columns, %d merges",
        template.header_row_count, len(template.columns), len(template.merges)
    )

    save_template(template, output_path, title=title)
    print(f"Template written to {output_path}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build an .xlsx header template from a JSON column config.")
    parser.add_argument("config", help="JSON file with the column tree ('key', 'columns', ...)")
    parser.add_argument("output", help="Path of the .xlsx file to write")
    parser.add_argument("--title", default=DEFAULT_SHEET_TITLE, help="Worksheet title")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        build_template(args.config, args.output, args.title)
    except (HeaderTreeError, OSError, json.JSONDecodeError) as e:
        logger.error("Could not build template: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
