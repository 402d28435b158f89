"""
Entry point for the WXR import tool.
"""

import argparse
import sys

from wxr_importer.import_tool import WXRImportTool

CONFIG_FILE = "config/import_config.json"


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Parse a WordPress WXR export into an import-ready JSON aggregate.")
    parser.add_argument("source", help="Path or http(s) URL of the WXR export")
    parser.add_argument("--config", default=CONFIG_FILE, help="JSON configuration file")
    parser.add_argument("--report-dir", help="Directory for logs and output files")
    parser.add_argument("--dry-run", action="store_true", help="Parse only; do not write output files")
    return parser


def main(argv=None):
    """
    Main function to run the WXR import tool.
    """
    args = build_arg_parser().parse_args(argv)

    tool = WXRImportTool(config_file=args.config)
    if args.report_dir:
        tool.config["import"]["report_dir"] = args.report_dir
    if args.dry_run:
        tool.config["import"]["dry_run"] = True

    tool.log_message(f"Starting import of {args.source}.")
    aggregate = tool.import_export(args.source)
    if aggregate is None:
        tool.log_message("Import failed.", level="ERROR")
        return 1

    tool.log_message("Import finished.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
