# uiquery/core/query_loader.py
from __future__ import annotations

"""Query file schema and loader
-------------------------------
Pydantic models for declarative element checks and a loader for (multi-doc)
YAML files, with ${ENV} substitution. A file looks like:

    name: logged_in_header
    url: /dashboard
    checks:
      - locator: "css:.user"
        conditions: {count: 1, text: alice}
      - locator: {strategy: button, value: Sign out}
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from uiquery.core.conditions import ANY
from uiquery.core.errors import BadMetadata
from uiquery.selectors.locator import Locator


# ---------- Models ----------


class CheckSpec(BaseModel):
    locator: Locator
    conditions: Dict[str, Any] = Field(default_factory=dict)
    timeout_ms: Optional[int] = Field(default=None, ge=0)

    @field_validator("locator", mode="before")
    @classmethod
    def _parse_locator(cls, v: Any) -> Any:
        if isinstance(v, (str, tuple, list)):
            return Locator.parse(tuple(v) if isinstance(v, list) else v)
        return v

    @field_validator("conditions")
    @classmethod
    def _check_conditions(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        count = v.get("count")
        if count is not None and count != ANY:
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise ValueError(f"count must be a non-negative integer or '{ANY}', got {count!r}")

        if "visible" in v and not isinstance(v["visible"], bool):
            raise ValueError(f"visible must be true or false, got {v['visible']!r}")

        # YAML reads `text: 2024` as a number
        text = v.get("text")
        if isinstance(text, (int, float)) and not isinstance(text, bool):
            v = {**v, "text": str(text)}
        elif "text" in v and not isinstance(text, str):
            raise ValueError(f"text must be a string, got {text!r}")
        return v


class QuerySpec(BaseModel):
    name: str = Field(..., description="Label used in reports")
    url: str = Field(..., description="Absolute URL, or a path relative to BASE_URL")
    description: Optional[str] = None
    checks: List[CheckSpec] = Field(..., min_length=1)

    @field_validator("name", "url")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v


# ---------- Helpers ----------

_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _subst_env(obj: Any) -> Any:
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def _describe(ve: ValidationError, header: str) -> str:
    lines = [header]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        lines.append(f"  - {loc}: {e.get('msg', 'invalid value')}")
    return "\n".join(lines)


# ---------- Public API ----------


def load_query_file(path: Union[Path, str]) -> List[QuerySpec]:
    """
    Load every query document in a YAML file.

    Raises:
        FileNotFoundError if the file does not exist.
        BadMetadata for YAML syntax errors, non-mapping documents,
        schema violations, or a file with no documents.
    """
    qf_path = Path(path)
    if not qf_path.exists():
        raise FileNotFoundError(f"Query file not found: {qf_path}")

    try:
        docs = list(yaml.safe_load_all(qf_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as ye:
        raise BadMetadata(f"YAML parse error in {qf_path}: {ye}") from ye

    out: List[QuerySpec] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise BadMetadata(f"Document {idx} in {qf_path} must be a mapping/object.")
        try:
            out.append(QuerySpec.model_validate(_subst_env(data)))
        except ValidationError as ve:
            raise BadMetadata(_describe(ve, f"Invalid query file '{qf_path}' (document {idx}):")) from ve

    if not out:
        raise BadMetadata(f"No query documents found in {qf_path}")
    return out


def find_query_files(root: Path, recursive: bool = True) -> List[Path]:
    if recursive:
        return sorted(list(root.rglob("*.yaml")) + list(root.rglob("*.yml")))
    return sorted(list(root.glob("*.yaml")) + list(root.glob("*.yml")))


__all__ = [
    "CheckSpec",
    "QuerySpec",
    "load_query_file",
    "find_query_files",
]
