"""Flask web interface for the by-date and by-log-ID queries."""

import logging
import re

from flask import Flask, jsonify, request

from logretrieval.config import Config
from logretrieval.errors import InvalidDate, LogRetrievalError
from logretrieval.models import entry_to_dict
from logretrieval.queries import query_by_date, query_by_log_id

logger = logging.getLogger(__name__)

INVALID_INPUT = "INVALID_INPUT"
INTERNAL_ERROR = "INTERNAL_ERROR"

_LOG_ID_RE = re.compile(r"[A-Za-z0-9._-]+")


def _error(status: int, message: str, error_type: str):
    return jsonify(success=False, error={"message": message, "type": error_type}), status


def create_app(config: Config | None = None) -> Flask:
    """Flask application factory."""
    app = Flask(__name__)
    app.config["RETRIEVAL"] = config or Config()

    def _config() -> Config:
        return app.config["RETRIEVAL"]

    @app.route("/api/v1/log/byDate/<path:date>")
    def logs_by_date(date):
        date = date.strip()
        if not date:
            return _error(400, "Date is required", INVALID_INPUT)

        try:
            entries, total = query_by_date(_config().catalog(), date)
        except InvalidDate:
            return _error(400, "Invalid date format. Expected YYYY-MM-DD", INVALID_INPUT)
        except LogRetrievalError as exc:
            logger.error("Failed to read logs for %s: %s", date, exc)
            return _error(500, str(exc), INTERNAL_ERROR)

        page = max(request.args.get("page", 1, type=int), 1)
        limit = max(request.args.get("limit", 0, type=int), 0)
        if limit:
            start = (page - 1) * limit
            entries = entries[start:start + limit]

        return jsonify(success=True, data={
            "logs": [entry_to_dict(e) for e in entries],
            "total": total,
            "page": page,
            "limit": limit,
        })

    @app.route("/api/v1/log/byId/<path:log_id>")
    def logs_by_id(log_id):
        if not log_id.strip():
            return _error(400, "Log ID is required", INVALID_INPUT)
        if not _LOG_ID_RE.fullmatch(log_id):
            return _error(
                400,
                "Invalid log ID format. Only alphanumeric characters, hyphens, "
                "underscores, and dots are allowed",
                INVALID_INPUT,
            )

        cfg = _config()
        try:
            entries = query_by_log_id(
                cfg.catalog(), log_id,
                max_workers=cfg.max_workers,
                lookback_days=cfg.lookback_days or None,
            )
        except LogRetrievalError as exc:
            logger.error("Failed to read logs for log_id=%s: %s", log_id, exc)
            return _error(500, str(exc), INTERNAL_ERROR)

        logger.info("Read %d entries for log_id=%s", len(entries), log_id)
        return jsonify(success=True, data=[entry_to_dict(e) for e in entries])

    @app.route("/health")
    def health():
        catalog = _config().catalog()
        return jsonify(status="ok", log_dir=catalog.log_dir, log_dir_exists=catalog.exists())

    return app
