import argparse
import json
import logging
import os
import sys

# Add project root to sys.path
sys.path.append(os.getcwd())

from header_tree import HeaderTreeError, load_records

logger = logging.getLogger("read_sheet")


def read_sheet(workbook_path, config_path, sheet=None, skip_example=False):
    with open(config_path, encoding='utf-8') as f:
        config = json.load(f)

    records = load_records(workbook_path, config, sheet=sheet, skip_example_row=skip_example)
    logger.info("Read %d records from %s", len(records), workbook_path)
    return records


def main(argv=None):
    parser = argparse.ArgumentParser(description="Read data rows of a header template back as JSON records.")
    parser.add_argument("workbook", help=".xlsx file written from the column config")
    parser.add_argument("config", help="JSON file with the column tree")
    parser.add_argument("--sheet", default=None, help="Sheet name (default: active sheet)")
    parser.add_argument("--skip-example", action="store_true", help="Do not return the sample row as a record")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )

    try:
        records = read_sheet(args.workbook, args.config, sheet=args.sheet, skip_example=args.skip_example)
    except (HeaderTreeError, OSError, KeyError, json.JSONDecodeError) as e:
        logger.error("Could not read sheet: %s", e)
        return 1

    # Dates and other cell types fall back to their string form
    print(json.dumps(records, indent=2, default=str))
    return 0


if __name__ == '__main__':
    sys.exit(main())
