"""
Shared clean-ups and schema normalisation.
"""
from __future__ import annotations
import re
from typing import Any, Dict, List

from cvreflow.schema_resume import CV_SCHEMA

_FENCE = re.compile(r"```(?:json)?")

# ───────────────────────────────────────── helpers ──
def strip_code_fences(text: str) -> str:
    """Drop markdown code-fence markers wherever the model put them."""
    return _FENCE.sub("", text or "").strip()

def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""

def _items(value: Any, template: Any) -> List[Any]:
    if not isinstance(value, list):
        return []
    return [_project(v, template) for v in value]

def _project(value: Any, template: Any) -> Any:
    if isinstance(template, dict):
        src = value if isinstance(value, dict) else {}
        # unknown keys are dropped: only template keys survive
        return {k: _project(src.get(k), t) for k, t in template.items()}
    if isinstance(template, list):
        return _items(value, template[0])
    return _text(value)

# ───────────────────────────────────────── cleaner ──
def normalise_record(data: Any) -> Dict[str, Any]:
    """Project any parsed JSON value onto CV_SCHEMA.

    Missing or mistyped scalars become "", missing or mistyped lists
    become [], and list items are normalised the same way.
    """
    return _project(data, CV_SCHEMA)
