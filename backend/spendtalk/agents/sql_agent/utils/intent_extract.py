from __future__ import annotations
from typing import Any, Dict, List, Optional
import json

from spendtalk.constants.regex_constants import _JSON_FENCE, _THINK_TAGS


def extract_intent_json(s: str) -> Optional[Dict[str, Any]]:
    """Last JSON object in a model reply, fenced or bare; None when there is none."""
    if not s:
        return None
    s = _THINK_TAGS.sub("", s)
    candidates: List[Dict[str, Any]] = []

    for b in _JSON_FENCE.findall(s):
        obj = _first_object(b)
        if obj is not None:
            candidates.append(obj)

    if not candidates:
        obj = _first_object(s)
        if obj is not None:
            candidates.append(obj)

    return candidates[-1] if candidates else None


def _first_object(block: str) -> Optional[Dict[str, Any]]:
    decoder = json.JSONDecoder()
    i = block.find("{")
    while i != -1:
        try:
            obj, _ = decoder.raw_decode(block, i)
        except json.JSONDecodeError:
            i = block.find("{", i + 1)
            continue
        if isinstance(obj, dict):
            return obj
        i = block.find("{", i + 1)
    return None
