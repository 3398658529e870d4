"""
Target selection: pick the main editor page out of /json/list.

Matching is plain case-sensitive substring matching on titles and URLs,
exactly as the editor renders them. A title change in the editor breaks it;
keep the predicates small so they can be replaced without touching the
transport.
"""

import logging
from typing import Iterable, Sequence

from antigravity_remote.errors import NoEditorTarget
from antigravity_remote.models.target import Target

logger = logging.getLogger(__name__)

PRODUCT_NAME = "Antigravity"
SECONDARY_SURFACE_MARKERS: tuple[str, ...] = ("Launchpad",)
INSPECTOR_URL_MARKER = "devtools"


def is_page(target: Target) -> bool:
    return target.type == "page"


def is_inspector_target(target: Target) -> bool:
    """True for the DevTools frontend's own pages."""
    return INSPECTOR_URL_MARKER in target.url


def is_editor_title(
    title: str,
    product_name: str = PRODUCT_NAME,
    excluded: Iterable[str] = SECONDARY_SURFACE_MARKERS,
) -> bool:
    if product_name not in title:
        return False
    return not any(marker in title for marker in excluded)


def select_editor_target(targets: Sequence[Target], product_name: str = PRODUCT_NAME) -> Target:
    """Main editor page, else the first page, else NoEditorTarget."""
    for target in targets:
        if is_page(target) and is_editor_title(target.title, product_name) and not is_inspector_target(target):
            logger.debug("Selected editor target %s (%r)", target.id, target.title)
            return target

    for target in targets:
        if is_page(target):
            logger.debug("No %s editor page, falling back to %s (%r)", product_name, target.id, target.title)
            return target

    raise NoEditorTarget(f"No page target among {len(targets)} CDP targets")
