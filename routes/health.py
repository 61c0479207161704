"""
Health and Metrics Routes Module
Unauthenticated monitoring endpoints
"""

from flask import Blueprint, Response, jsonify

from services.metrics import render_latest

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health():
    """
    Health check endpoint for monitoring

    Response:
        {"status": "healthy"}
    """
    return jsonify({"status": "healthy"})


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """Prometheus text exposition of the service counters"""
    body, content_type = render_latest()
    return Response(body, content_type=content_type)
