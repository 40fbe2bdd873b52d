from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Response, abort, current_app, request

from coatings.model.application import PreloadDirective
from coatings.output.links import format_link_header
from coatings.output.modules import StyleModule
from coatings.output.selection import select_applications

styles_bp = Blueprint("styles", __name__)


def _css_response(css: str, preload: Iterable[PreloadDirective]) -> Response:
    response = Response(css, mimetype="text/css")
    seen: set[str] = set()
    for directive in preload:
        if directive.href in seen:
            continue
        seen.add(directive.href)
        response.headers.add("Link", format_link_header(directive))
    return response


@styles_bp.route("/<app_id>.css")
def application_css(app_id: str):
    """Serve one application's compiled CSS."""
    config = current_app.extensions["coatings_config"]
    if not config.skin_allowed(request.args.get("skin")):
        abort(404)

    module = StyleModule(current_app.extensions["repository"], app_id)
    bundle = module.bundle()
    if bundle is None:
        abort(404)

    response = _css_response(bundle.css, module.get_preload_directives())
    response.set_etag(bundle.version_hash())
    return response.make_conditional(request)


@styles_bp.route("")
def page_css():
    """Serve the combined CSS of every application a page should load."""
    config = current_app.extensions["coatings_config"]
    repository = current_app.extensions["repository"]
    selected = select_applications(
        repository,
        page=request.args.get("page"),
        template_titles=request.args.getlist("template"),
        skin=request.args.get("skin"),
        config=config,
    )

    blocks: list[str] = []
    preload: list[PreloadDirective] = []
    for application_id in selected:
        module = StyleModule(repository, application_id)
        blocks.extend(module.get_styles())
        preload.extend(module.get_preload_directives())

    response = _css_response("\n".join(blocks), preload)
    response.headers["X-Coatings-Applications"] = ",".join(selected)
    return response
