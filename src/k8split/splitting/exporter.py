#!/usr/bin/env python3
"""
K8SPLIT EXPORTER - Round-Trip Serialization
-------------------------------------------
Converts a decoded CommentedMap back to YAML text for its own file.

Author: K8Split Team
Date: 2026-10-19
"""

import io
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from k8split.core.errors import WriteError
from k8split.splitting.decoder import build_yaml


class ManifestExporter:
    """
    Serializes one document. By default the key order of the source is kept;
    with `canonical_order` the well-known top-level fields lead.
    """

    def __init__(self, canonical_order: bool = False, yaml: Optional[YAML] = None):
        self.yaml = yaml or build_yaml()
        self.canonical_order = canonical_order
        self.preferred_order = ["apiVersion", "kind", "metadata", "spec", "data", "status"]

    def _ordered(self, data: Any) -> Any:
        """
        Returns `data` with the preferred keys leading at every mapping level.
        Other keys keep their source order and comments stay with their key.

        Mappings are rebuilt, so anchors and `<<:` merge keys do not survive:
        merged entries come out as plain keys of the new mapping. The content
        is unchanged, only the aliasing is lost.
        """
        if isinstance(data, CommentedMap):
            rank = {key: pos for pos, key in enumerate(self.preferred_order)}
            ordered = CommentedMap()
            if data.ca.comment:
                ordered.ca.comment = data.ca.comment
            # sorted() is stable, so unranked keys keep their source order
            for key in sorted(data, key=lambda k: rank.get(k, len(rank))):
                ordered[key] = self._ordered(data[key])
                if key in data.ca.items:
                    ordered.ca.items[key] = data.ca.items[key]
            return ordered
        if isinstance(data, list):
            # In place, so a CommentedSeq keeps its own comments
            for i, item in enumerate(data):
                data[i] = self._ordered(item)
        return data

    def export(self, doc: Any, index: Optional[int] = None) -> str:
        """Returns the full document as YAML text."""
        where = f"document {index}" if index is not None else "document"
        stream = io.StringIO()
        try:
            if self.canonical_order:
                doc = self._ordered(doc)
            self.yaml.dump(doc, stream)
        except YAMLError as e:
            raise WriteError(f"error creating yaml for {where}: {e}", index) from e
        except RecursionError as e:
            raise WriteError(f"error creating yaml for {where}: nesting too deep", index) from e
        return stream.getvalue()
