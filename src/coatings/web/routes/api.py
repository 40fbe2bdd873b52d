from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from coatings.events.types import EVENT_TYPES
from coatings.model.page import ContentModel
from coatings.specification.parser import validate_save

api_bp = Blueprint("api", __name__)


@api_bp.route("/applications")
def list_applications():
    """List every application with its version hash and source pages."""
    repository = current_app.extensions["repository"]
    return jsonify([
        {
            "id": bundle.application_id,
            "base_page_id": bundle.base_page_id,
            "version": bundle.version_hash(),
            "pages": bundle.referenced_pages(),
            "unresolved": bundle.unresolved_pages(),
        }
        for bundle in repository.get_applications().values()
    ])


@api_bp.route("/events/<kind>", methods=["POST"])
def page_event(kind: str):
    """Report a page lifecycle event so dependent caches are invalidated."""
    event_type = EVENT_TYPES.get(kind)
    if event_type is None:
        return jsonify({"error": f"unknown event kind {kind!r}"}), 400
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get("title"), str) or not data["title"].strip():
        return jsonify({"error": "title required"}), 400

    trigger = current_app.extensions["trigger"]
    invalidated = trigger.handle(event_type(title=data["title"]))
    return jsonify({"title": data["title"], "invalidated": invalidated}), 202


@api_bp.route("/validate", methods=["POST"])
def validate():
    """Validate an applications page before it is saved."""
    data = request.get_json(silent=True)
    if not data or not isinstance(data.get("text"), str):
        return jsonify({"error": "text required"}), 400

    repository = current_app.extensions["repository"]
    content_model = data.get("content_model", ContentModel.APPLICATION_LIST.value)
    diagnostics = validate_save(data["text"], content_model, repository.accessor)
    valid = not any(d.is_error for d in diagnostics)
    body = {"valid": valid, "diagnostics": [d.to_dict() for d in diagnostics]}
    return jsonify(body), 200 if valid else 422
