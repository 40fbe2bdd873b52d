"""JSON encoding of application bundles for the cache store."""

from __future__ import annotations

from typing import Any

from coatings.model.application import ApplicationBundle, PreloadDirective


def encode_bundle(bundle: ApplicationBundle) -> dict[str, Any]:
    return {
        "application_id": bundle.application_id,
        "base_page_id": bundle.base_page_id,
        "compiled_styles": list(bundle.compiled_styles),
        "source_revisions": dict(bundle.source_revisions),
        "variables": [dict(v) for v in bundle.variables],
        "preload": [d.to_dict() for d in bundle.preload],
    }


def decode_bundle(data: dict[str, Any]) -> ApplicationBundle:
    return ApplicationBundle(
        application_id=data["application_id"],
        base_page_id=data.get("base_page_id", 0),
        compiled_styles=tuple(data["compiled_styles"]),
        source_revisions=dict(data["source_revisions"]),
        variables=tuple(dict(v) for v in data.get("variables", [])),
        preload=tuple(PreloadDirective.from_dict(d) for d in data.get("preload", [])),
    )


def encode_applications(applications: dict[str, ApplicationBundle]) -> dict[str, Any]:
    """Encode the map as a list; list order is application order."""
    return {"bundles": [encode_bundle(b) for b in applications.values()]}


def decode_applications(data: dict[str, Any]) -> dict[str, ApplicationBundle]:
    bundles = [decode_bundle(b) for b in data.get("bundles", [])]
    return {bundle.application_id: bundle for bundle in bundles}
