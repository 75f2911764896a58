from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, current_app, jsonify, request

from .config import load_config
from .errors import ConfigError, DecodeError, UpstreamHttpError, UpstreamTimeoutError
from .external_api import OmdbClient
from .models import LookupRequest, SearchRequest
from .utils import serialize_lookup_result, serialize_search_result

logger = logging.getLogger(__name__)


def _omdb_client() -> OmdbClient:
    return current_app.extensions["omdb_client"]


def api_search_omdb(movie_name: str, page: str) -> Any:
    result = _omdb_client().search_by_title(SearchRequest(search=movie_name, page=page))
    return jsonify(serialize_search_result(result))


def api_lookup_omdb() -> Any:
    args = request.args
    lookup = LookupRequest(
        imdb_id=args.get("i", ""),
        title=args.get("t", ""),
        type=args.get("type", ""),
        year=args.get("y", ""),
        plot=args.get("plot", ""),
        return_type=args.get("r", ""),
        callback=args.get("callback", ""),
        version=args.get("v", ""),
    )
    result = _omdb_client().lookup_by_id_or_title(lookup)
    return jsonify(serialize_lookup_result(result))


def health() -> Any:
    return jsonify({"status": "ok"})


def _upstream_failed(exc: UpstreamHttpError) -> Any:
    return jsonify({"error": "omdb_fetch_failed", "detail": str(exc)}), 502


def _upstream_timeout(exc: UpstreamTimeoutError) -> Any:
    return jsonify({"error": "omdb_timeout", "detail": str(exc)}), 504


def _decode_failed(exc: DecodeError) -> Any:
    return jsonify({"error": "omdb_decode_failed", "detail": str(exc)}), 500


def create_app(test_config: Mapping[str, Any] | None = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    if test_config:
        app.config.update(test_config)
    if not app.config["OMDB_API_KEY"]:
        raise ConfigError("OMDB_API_KEY is not set")

    logging.getLogger(__package__).setLevel(app.config["LOG_LEVEL"])
    # Keep OMDB's field order in responses.
    app.json.sort_keys = False

    app.extensions["omdb_client"] = OmdbClient(
        api_key=app.config["OMDB_API_KEY"],
        base_url=app.config["OMDB_BASE_URL"],
        timeout=app.config["OMDB_TIMEOUT"],
        retries=app.config["OMDB_RETRIES"],
        backoff_base=app.config["OMDB_BACKOFF_BASE"],
    )

    app.add_url_rule("/health", view_func=health)
    app.add_url_rule("/api/SearchOmdb/<movie_name>/<page>", view_func=api_search_omdb)
    app.add_url_rule("/api/LookupOmdb", view_func=api_lookup_omdb)

    app.register_error_handler(UpstreamHttpError, _upstream_failed)
    app.register_error_handler(UpstreamTimeoutError, _upstream_timeout)
    app.register_error_handler(DecodeError, _decode_failed)

    logger.info("OMDB proxy ready, upstream %s", app.config["OMDB_BASE_URL"])
    return app
