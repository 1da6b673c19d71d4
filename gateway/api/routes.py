"""Route handlers for the /api blueprint.

Handlers only pull query parameters off the request, call the service and
serialize the result. Errors propagate to the handlers registered in server.py.
"""

from flask import Blueprint, jsonify, request

from gateway.discovery.categories import DEFAULT_CATEGORY
from gateway.discovery.queries import DEFAULT_DISTANCE
from gateway.discovery.service import DiscoveryService


def create_blueprint(service: DiscoveryService) -> Blueprint:
    """Build the /api blueprint bound to one DiscoveryService."""
    api = Blueprint("api", __name__)

    @api.get("/search")
    def search():
        # GET /api/search?keyword=...&distance=...&category=...&lat=..&lng=..
        rows = service.search(
            keyword=request.args.get("keyword", ""),
            distance=request.args.get("distance", DEFAULT_DISTANCE),
            category=request.args.get("category", DEFAULT_CATEGORY),
            lat=request.args.get("lat"),
            lng=request.args.get("lng"),
        )
        return jsonify([row.to_client() for row in rows])

    @api.get("/event/<event_id>")
    def event_detail(event_id: str):
        return jsonify(service.get_event_detail(event_id).to_client())

    @api.get("/venue")
    def venue():
        # GET /api/venue?name=The%20Forum
        info = service.get_venue(request.args.get("name", ""))
        return jsonify(info.to_client() if info is not None else None)

    @api.get("/suggest")
    def suggest():
        return jsonify(service.suggest(request.args.get("keyword", "")))

    return api
