from __future__ import annotations

"""
Naming Policy.

Derives a content-kind classifier (language tag) from a node name so the
editing surface can pick its highlighting mode.
"""

from workspace_vfs.domain.constants import FALLBACK_LANGUAGE, LANGUAGE_BY_EXTENSION


def classify(name: str) -> str:
    """
    Map a file name to its language tag.

    Only the final dot-delimited segment is significant and matching is
    case-insensitive. Names without a suffix, or with an unknown one,
    fall back to 'plaintext'.

    Args:
        name: File name (any string).

    Returns:
        str: Language tag.
    """
    if "." not in name:
        return FALLBACK_LANGUAGE
    suffix = name.rsplit(".", 1)[-1].lower()
    return LANGUAGE_BY_EXTENSION.get(suffix, FALLBACK_LANGUAGE)
