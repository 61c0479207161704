import logging
import sqlite3

from flask import Blueprint, request, jsonify, current_app

from config import Config
from services.errors import ProviderError, ValidationError
from services.resolver import LOOKUP_ERROR
from services import metrics
from utils.validators import normalize_ip

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api/v1')


def _resolver():
    return current_app.extensions['resolver']


# ============================================================================
# Geolocation Endpoints
# ============================================================================

@api_bp.route('/geolocate/<ip>', methods=['GET'])
def geolocate_ip(ip):
    """
    Resolve the country of one IP address

    Request:
        GET /api/v1/geolocate/8.8.8.8

    Response:
        {
            "ip": "8.8.8.8",
            "country": "United States",
            "cached_at": "2025-01-01T00:00:00.000000+00:00"
        }
    """
    with metrics.REQUEST_DURATION.labels(source='api').time():
        try:
            record, source = _resolver().resolve(ip)
        except ValidationError:
            return jsonify({"error": "Invalid IP address"}), 400
        except ProviderError as e:
            metrics.record_failed_lookup()
            logger.error("Failed to get location for %s: %s", ip, e)
            return jsonify({"error": "Failed to get location"}), 500

        metrics.record_resolution(record, source)
        return jsonify(record.to_dict())


@api_bp.route('/geolocate/bulk', methods=['POST'])
def geolocate_bulk():
    """
    Resolve up to 100 IP addresses in one call

    Request:
        POST /api/v1/geolocate/bulk
        Body: {"ips": ["8.8.8.8", "1.1.1.1"]}

    Response:
        {"results": [{"ip": ..., "country": ..., "cached_at": ...}, ...]}
        Entries that could not be resolved carry "Invalid IP" or "Error"
        as their country and a null cached_at.
    """
    data = request.get_json(silent=True)
    ips = data.get('ips') if isinstance(data, dict) else None
    if not isinstance(ips, list) or not all(isinstance(ip, str) for ip in ips):
        return jsonify({"error": "Invalid request format"}), 400

    try:
        entries = _resolver().resolve_all(ips)
    except ValidationError:
        return jsonify({"error": f"Maximum {Config.MAX_BULK_IPS} IPs allowed per request"}), 400

    for entry in entries:
        if entry.ok:
            metrics.record_resolution(entry.record, entry.source)
        elif entry.error == LOOKUP_ERROR:
            metrics.record_failed_lookup()

    return jsonify({"results": [entry.to_dict() for entry in entries]})


# ============================================================================
# Cache Management Endpoints
# ============================================================================

@api_bp.route('/cached', methods=['GET'])
def cached_ips():
    """
    List the most recently refreshed cache entries

    Response:
        {"cached_ips": [...], "count": 2}
    """
    try:
        records = _resolver().store.get_recent_locations(limit=Config.CACHED_LIST_LIMIT)
    except sqlite3.Error:
        logger.exception("Failed to retrieve cached data")
        return jsonify({"error": "Failed to retrieve cached data"}), 500

    return jsonify({
        "cached_ips": [record.to_dict() for record in records],
        "count": len(records)
    })


@api_bp.route('/cache/<ip>', methods=['DELETE'])
def clear_cache_ip(ip):
    """
    Remove one address from the cache

    Response:
        200 {"message": "Cache cleared for IP", "ip": "8.8.8.8"}
        404 when the address was not cached
    """
    address = normalize_ip(ip)
    if address is None:
        return jsonify({"error": "Invalid IP address"}), 400

    try:
        existed = _resolver().store.delete_location(address)
    except sqlite3.Error:
        logger.exception("Failed to clear cache for %s", address)
        return jsonify({"error": "Failed to clear cache"}), 500

    if not existed:
        return jsonify({"error": "IP not found in cache"}), 404

    logger.info("Cache cleared for %s", address)
    return jsonify({"message": "Cache cleared for IP", "ip": ip})


@api_bp.route('/cache', methods=['DELETE'])
def clear_all_cache():
    """
    Remove every cached address

    Response:
        {"message": "All cache cleared", "rows_affected": 42}
    """
    try:
        removed = _resolver().store.delete_all_locations()
    except sqlite3.Error:
        logger.exception("Failed to clear all cache")
        return jsonify({"error": "Failed to clear all cache"}), 500

    logger.info("All cache cleared (%d rows)", removed)
    return jsonify({
        "message": "All cache cleared",
        "rows_affected": removed
    })
