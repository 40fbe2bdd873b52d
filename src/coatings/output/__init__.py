from coatings.output.links import format_link_header, preload_link_attributes, render_link_tags
from coatings.output.modules import StyleModule, module_name
from coatings.output.selection import select_applications

__all__ = [
    "StyleModule",
    "module_name",
    "select_applications",
    "preload_link_attributes",
    "format_link_header",
    "render_link_tags",
]
