"""
Censor Metadata Module

Helpers for the JSON blobs returned by the external text moderation
service. A blob is stored verbatim; whether the text passed moderation is
always derived from the stored blob.
"""

import json
from typing import Any, Optional, Union

CensorBlob = Optional[Union[str, bytes]]


def _as_text(raw: CensorBlob) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def _load(raw: CensorBlob) -> Any:
    text = _as_text(raw)
    if not text:
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None


def check_text_censor_response_valid(raw: CensorBlob) -> bool:
    """
    Check whether a moderation response is complete enough to be stored.

    A response is accepted only when it is non-empty, is not ``null``,
    decodes to a JSON object and names the moderation source in a
    non-empty ``source_name`` string. Partial or failed upstream calls
    fail this check and must not replace previously stored metadata.

    Args:
        raw: Raw response body

    Returns:
        True if the response may replace the stored metadata
    """
    text = _as_text(raw).strip()
    if not text or text.lower() == "null":
        return False

    response = _load(text)
    if not isinstance(response, dict):
        return False

    source_name = response.get("source_name")
    return isinstance(source_name, str) and source_name != ""


def censor_pass(raw: CensorBlob) -> bool:
    """True iff the stored blob is a JSON object whose ``pass`` member is ``true``."""
    response = _load(raw)
    return isinstance(response, dict) and response.get("pass") is True


def normalize_blob(raw: CensorBlob) -> Optional[str]:
    """Convert an accepted blob to the text form kept in storage."""
    text = _as_text(raw)
    return text or None
