#!/usr/bin/env python3
"""
K8SPLIT NAMING - Name Derivation & Filename Assignment
------------------------------------------------------
Turns a manifest's identity (`kind` + `metadata.name`) into an output
filename, numbering repeats through a per-run NameRegistry:

    pod-foo.yaml, pod-foo_1.yaml, pod-foo_2.yaml, ...

Author: K8Split Team
Date: 2026-10-19
"""

from collections.abc import Mapping
from typing import Any, Optional, Tuple

from k8split.core.errors import FieldTypeError, MissingFieldError
from k8split.core.models import NameRegistry

OUTPUT_SUFFIX = ".yaml"


def _require(doc: Mapping, key: str, path: str, label: str, expected: type,
             index: Optional[int]) -> Any:
    where = f"yaml document {index}" if index is not None else "yaml document"
    value = doc.get(key)
    if value is None:
        raise MissingFieldError(
            f"no `{label}` field specified for {where} in this file.", path, index)
    if not isinstance(value, expected):
        raise FieldTypeError(
            f"`{label}` field of {where} must be a {_describe(expected)}, "
            f"got {type(value).__name__}", path, index)
    return value


def _describe(expected: type) -> str:
    return "mapping" if expected is Mapping else "string"


def extract_identity(doc: Mapping, index: Optional[int] = None) -> Tuple[str, str]:
    """Returns (kind, metadata.name) or raises a SchemaError."""
    kind = _require(doc, "kind", "kind", "Kind", str, index)
    metadata = _require(doc, "metadata", "metadata", "Metadata", Mapping, index)
    name = _require(metadata, "name", "metadata.name", "Metadata.name", str, index)
    return str(kind), str(name)


def base_name(kind: str, name: str) -> str:
    # Case is kept here; lower-casing happens when the filename is formed.
    return f"{kind}-{name}"


def assign_filename(base: str, registry: NameRegistry) -> str:
    """
    Picks the filename for the next document sharing `base` and records
    the occurrence. The registry only ever grows.
    """
    count = registry.bump(base)
    stem = base.lower()
    if count == 0:
        return f"{stem}{OUTPUT_SUFFIX}"
    return f"{stem}_{count}{OUTPUT_SUFFIX}"
