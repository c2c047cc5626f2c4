"""Extension lookup over a Concept's extension tree."""

import logging

from nvc_bundle.constants import MAX_EXTENSION_DEPTH
from nvc_bundle.models.model_nvc import Concept, Extension

logger = logging.getLogger(__name__)


def _normalize_url(url: str) -> str:
    return url.strip().lower()


def find_extensions(
    extensions: list[Extension],
    target_url: str,
    max_depth: int = MAX_EXTENSION_DEPTH,
) -> list[Extension]:
    """Depth-first search for extensions whose url matches *target_url*.

    Urls are compared trimmed and case-insensitively. Children are searched
    whether or not their parent matched, so a match and its matching
    descendants are all returned, parents first.
    """
    target = _normalize_url(target_url)
    found: list[Extension] = []

    def walk(nodes: list[Extension], depth: int) -> None:
        if depth > max_depth:
            logger.debug("Extension tree deeper than %d; not descending", max_depth)
            return
        for node in nodes:
            if _normalize_url(node.url) == target:
                found.append(node)
            if node.extension:
                walk(node.extension, depth + 1)

    walk(extensions, 0)
    return found


def get_extension_values(concept: Concept, target_url: str) -> list[dict[str, str]]:
    """Collect the codings of every extension matching *target_url*.

    Returns ``[{code: display, ...}]`` merged across all matches (a later
    coding overwrites an earlier one with the same code), or ``[]`` when
    nothing matched or the matches carry no codings.
    """
    values: dict[str, str] = {}
    for extension in find_extensions(concept.extension, target_url):
        concept_value = extension.value_codeable_concept
        if concept_value is None:
            continue
        for coding in concept_value.coding:
            if coding.code is None:
                continue
            values[coding.code] = coding.display
    return [values] if values else []
