"""Lightweight HTTP API for table decoding.

Exposes:
- GET /api/decode   → health check
- POST /api/decode  → fetch a published document and render its table
"""

import time
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request

from table_decoder import Config, DEFAULT_CONFIG, NormalizeOptions, TableDecodePipeline
from table_decoder.pipeline import STATUS_NO_DATA
from table_decoder.utils import setup_logger


logger = setup_logger(__name__)


def parse_bool(value: Any, default: bool) -> bool:
    """Parse flexible boolean inputs from strings or native bools."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return default


def request_options() -> Dict[str, Any]:
    """Merge JSON body and form fields into one options dict."""
    opts: Dict[str, Any] = request.form.to_dict(flat=True)
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        opts.update(payload)
    return opts


def create_app(config: Optional[Config] = None, pipeline: Optional[TableDecodePipeline] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Configuration object (uses DEFAULT_CONFIG if None)
        pipeline: Optional pre-built pipeline (tests inject one with a fake fetcher)
    """
    app = Flask(__name__)
    base_config = config or DEFAULT_CONFIG
    app.config["DECODE_PIPELINE"] = pipeline or TableDecodePipeline(base_config)

    @app.after_request
    def add_cors_headers(response):
        """Simple CORS headers for dev usage."""
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = "Content-Type, Authorization"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        return response

    @app.route("/api/decode", methods=["GET"])
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    @app.route("/api/decode", methods=["POST"])
    def decode():
        opts = request_options()
        url = opts.get("url")
        if not isinstance(url, str) or not url.strip():
            return jsonify({"error": "url is required"}), 400

        pipeline: TableDecodePipeline = app.config["DECODE_PIPELINE"]
        options = NormalizeOptions(
            prefer_formatted=parse_bool(opts.get("prefer_formatted"), pipeline.config.prefer_formatted),
            prefer_formatted_dates=parse_bool(opts.get("prefer_formatted_dates"),
                                              pipeline.config.prefer_formatted_dates),
        )

        t0 = time.perf_counter()
        try:
            result = pipeline.decode(url, options=options)
        except Exception as e:
            logger.error(f"Decoding failed for {url}: {e}")
            return jsonify({"error": str(e)}), 500
        elapsed = time.perf_counter() - t0

        body = {
            "status": result.status,
            "url": url,
            "seconds": round(elapsed, 3),
            "params": {
                "prefer_formatted": options.prefer_formatted,
                "prefer_formatted_dates": options.prefer_formatted_dates,
            },
            "records": len(result.records),
            "skipped_rows": result.skipped_rows,
            "lines": result.lines,
        }
        if result.displayable:
            return jsonify(body), 200
        if result.status == STATUS_NO_DATA:
            return jsonify(body), 502
        return jsonify(body), 422

    return app


app = create_app()


if __name__ == "__main__":
    config = Config()
    app.run(host=config.api_host, port=config.api_port)
