#!/usr/bin/env python3
"""
K8SPLIT ENGINE SUITE - Integration Verification
-----------------------------------------------
Runs complete splits into a temporary output directory:
1. Duplicate names and numbering
2. Empty documents
3. Fail-fast on schema and decode errors
4. Dry runs, permissions and truncation

Author: K8Split Team
Date: 2026-10-19
"""

import io
import logging
import os
import sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import pytest
from ruamel.yaml import YAML

from k8split.core.engine import SplitEngine
from k8split.core.errors import ArgumentError, DecodeError, MissingFieldError, WriteError
from k8split.core.models import NameRegistry, SplitConfig

COMPOSITE = """\
apiVersion: v1
kind: Namespace
metadata:
  name: shop
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: Web
  namespace: shop
spec:
  replicas: 2
  template:
    spec:
      containers:
        - name: web
          image: nginx:1.25
---
---
apiVersion: v1
kind: Service
metadata:
  name: web
  namespace: shop
spec:
  ports:
    - port: 80
      targetPort: 8080
"""


def _engine(out_dir, **kwargs):
    return SplitEngine(SplitConfig(out_dir=out_dir, **kwargs))


def _load_all(text):
    return [d for d in YAML(typ='safe').load_all(text) if d]


def test_each_document_gets_its_own_file(tmp_path):
    result = _engine(tmp_path).run(COMPOSITE.encode())

    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "deployment-web.yaml", "namespace-shop.yaml", "service-web.yaml"]
    assert [f.filename for f in result.files] == [
        "namespace-shop.yaml", "deployment-web.yaml", "service-web.yaml"]
    assert [f.index for f in result.files] == [0, 1, 3]
    assert result.documents_read == 4
    assert result.skipped == 1
    assert result.written == 3


def test_written_files_round_trip(tmp_path):
    """
    ROUND-TRIP TEST: the split files, read back, equal the source documents.
    """
    _engine(tmp_path).run(COMPOSITE.encode())
    source = _load_all(COMPOSITE)

    for filename, expected in zip(
            ["namespace-shop.yaml", "deployment-web.yaml", "service-web.yaml"], source):
        assert YAML(typ='safe').load((tmp_path / filename).read_text()) == expected


def test_duplicate_documents_are_numbered(tmp_path):
    pod = "kind: Pod\nmetadata:\n  name: foo\n"
    _engine(tmp_path).run(f"{pod}---\n{pod}---\n{pod}".encode())

    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "pod-foo.yaml", "pod-foo_1.yaml", "pod-foo_2.yaml"]


def test_missing_kind_stops_the_run(tmp_path):
    data = (
        "kind: Pod\nmetadata:\n  name: first\n"
        "---\n"
        "---\n"
        "metadata:\n  name: nameless\n"
        "---\n"
        "kind: Pod\nmetadata:\n  name: never\n"
    )

    with pytest.raises(MissingFieldError) as exc:
        _engine(tmp_path).run(data.encode())

    # Position in the stream, the skipped empty document included
    assert exc.value.index == 2
    assert exc.value.field == "kind"
    assert [p.name for p in tmp_path.iterdir()] == ["pod-first.yaml"]


def test_malformed_document_keeps_earlier_files(tmp_path):
    data = (
        "kind: Pod\nmetadata:\n  name: ok\n"
        "---\n"
        "kind: Pod\nmetadata:\n  name: bad\n  labels:\n    app: x\nspec: [unclosed\n"
    )

    with pytest.raises(DecodeError) as exc:
        _engine(tmp_path).run(data.encode())

    assert exc.value.index == 1
    assert [p.name for p in tmp_path.iterdir()] == ["pod-ok.yaml"]


def test_empty_stream_writes_nothing(tmp_path):
    result = _engine(tmp_path).run(b"---\n---\n")

    assert list(tmp_path.iterdir()) == []
    assert result.documents_read == 2
    assert result.skipped == 2


def test_dry_run_writes_nothing(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="k8split")
    result = _engine(tmp_path, dry_run=True).run(COMPOSITE.encode())

    assert list(tmp_path.iterdir()) == []
    assert result.written == 0
    assert len(result.files) == 3
    assert "Would write file: service-web.yaml" in caplog.text


def test_each_write_is_logged(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="k8split")
    _engine(tmp_path).run(b"kind: Pod\nmetadata:\n  name: foo\n")

    assert "Writing file: pod-foo.yaml" in caplog.text


def test_existing_file_is_truncated_with_fixed_mode(tmp_path):
    stale = tmp_path / "pod-foo.yaml"
    stale.write_text("stale: " + "x" * 500 + "\n")
    _engine(tmp_path).run(b"kind: Pod\nmetadata:\n  name: foo\n")

    assert YAML(typ='safe').load(stale.read_text()) == {"kind": "Pod", "metadata": {"name": "foo"}}

    umask = os.umask(0)
    os.umask(umask)
    _engine(tmp_path).run(b"kind: Pod\nmetadata:\n  name: fresh\n")
    assert (tmp_path / "pod-fresh.yaml").stat().st_mode & 0o777 == 0o644 & ~umask


def test_write_failure_raises(tmp_path):
    with pytest.raises(WriteError, match="error writing file"):
        _engine(tmp_path / "gone").run(b"kind: Pod\nmetadata:\n  name: foo\n")


def test_registry_is_fresh_per_run_unless_shared(tmp_path):
    pod = b"kind: Pod\nmetadata:\n  name: foo\n"
    engine = _engine(tmp_path, dry_run=True)

    assert engine.run(pod).files[0].filename == "pod-foo.yaml"
    assert engine.run(pod).files[0].filename == "pod-foo.yaml"

    registry = NameRegistry()
    engine.run(pod, registry)
    assert engine.run(pod, registry).files[0].filename == "pod-foo_1.yaml"


class ExplodingStream(io.BytesIO):
    def read(self, *args):
        raise AssertionError("input must not be read")


def test_out_dir_is_checked_before_input(tmp_path):
    engine = _engine(tmp_path / "missing")

    with pytest.raises(ArgumentError, match="output directory"):
        engine.split_stream([], stdin=ExplodingStream())


def test_split_stream_reads_named_file(tmp_path):
    source = tmp_path / "all.yaml"
    source.write_text(COMPOSITE)
    out = tmp_path / "out"
    out.mkdir()

    result = _engine(out).split_stream([str(source)])

    assert result.written == 3


def test_name_escaping_out_dir_is_warned(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="k8split")
    out = tmp_path / "out"
    out.mkdir()
    engine = _engine(out, dry_run=True)

    engine.run(b"kind: Pod\nmetadata:\n  name: safe\n")
    assert "lands outside" not in caplog.text

    result = engine.run(b"kind: Pod\nmetadata:\n  name: x/../../evil\n")
    assert result.files[0].filename == "pod-x/../../evil.yaml"
    assert "lands outside" in caplog.text
