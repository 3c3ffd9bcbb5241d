"""Decode the secret message hidden in a published Google Doc table"""
import argparse
import logging
import os
import sys
import traceback

from table_decoder import Config, TableDecodePipeline
from table_decoder.pipeline import STATUS_NO_DATA
from table_decoder.utils import set_package_log_level


PROMPT = "What's the google doc url? "


def ask_url():
    """Prompt for a document URL; returns None when input is closed."""
    try:
        return input(PROMPT).strip()
    except EOFError:
        return None


def build_config(args):
    return Config(
        request_timeout=args.timeout,
        prefer_formatted=args.prefer_formatted,
        prefer_formatted_dates=args.prefer_formatted_dates,
        x_field=args.x_field,
        y_field=args.y_field,
        char_field=args.char_field,
        save_csv=args.save_csv,
        save_json=args.save_json,
        save_text=args.save_text,
        output_dir=args.output_dir,
        api_host=args.api_host,
        api_port=args.api_port,
    )


def build_parser():
    defaults = Config()
    parser = argparse.ArgumentParser(description="Render the character grid encoded in a published document table")
    parser.add_argument("url", nargs="?", help="Published document URL. If empty, prompts for it.")
    parser.add_argument("--prefer-formatted", action="store_true", help="Keep numeric cells as their source text.")
    parser.add_argument("--prefer-formatted-dates", action="store_true", help="Keep date cells as their source text.")
    parser.add_argument("--timeout", type=float, default=defaults.request_timeout, help="HTTP timeout in seconds.")
    parser.add_argument("--x-field", default=defaults.x_field, help="Column holding the x-coordinate.")
    parser.add_argument("--y-field", default=defaults.y_field, help="Column holding the y-coordinate.")
    parser.add_argument("--char-field", default=defaults.char_field, help="Column holding the character.")
    parser.add_argument("--save-csv", action="store_true", help="Write records.csv to the output directory.")
    parser.add_argument("--save-json", action="store_true", help="Write records.json to the output directory.")
    parser.add_argument("--save-text", action="store_true", help="Write message.txt to the output directory.")
    parser.add_argument("-o", "--output-dir", default=defaults.output_dir, help="Directory for saved results.")
    parser.add_argument("--loglevel", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Log verbosity (default: WARNING)")
    parser.add_argument("--serve-api", action="store_true", help="Start the HTTP API server instead of decoding a URL.")
    parser.add_argument("--api-host", default=defaults.api_host, help="Host for the API server.")
    parser.add_argument("--api-port", type=int, default=defaults.api_port, help="Port for the API server.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    set_package_log_level(getattr(logging, args.loglevel))

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    if args.serve_api:
        from api import create_app

        print(f"Starting API server on {config.api_host}:{config.api_port} ...")
        create_app(config).run(host=config.api_host, port=config.api_port)
        return 0

    url = args.url or ask_url()
    if not url:
        print("A document url is required.", file=sys.stderr)
        return 2

    try:
        pipeline = TableDecodePipeline(config)
        save = config.save_csv or config.save_json or config.save_text
        result = pipeline.decode(url, output_dir=config.output_dir if save else None)
    except Exception as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        traceback.print_exc()
        return 1

    print("The secret message is...")
    if not result.displayable:
        reason = "no table data could be retrieved" if result.status == STATUS_NO_DATA else "nothing to display"
        print(f"({reason})")
        return 1

    for line in result.lines:
        print(line)
    if save:
        print(f"Results saved in: {os.path.abspath(config.output_dir)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
