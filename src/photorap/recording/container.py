"""Recording container: a ZIP archive holding the recording tree and its binaries.

Layout:
    recording.json      recording tree (ids, metadata, captures, binary manifest)
    binaries/<n>        raw binary payloads, numbered depth-first

Writes are all-or-nothing: the archive is built in a sibling temp file and
renamed over the destination only once it is complete.
"""

from __future__ import annotations

import json
import logging
import os
import stat
import tempfile
import zipfile
from pathlib import Path
from typing import Any

from .captures import CaptureCollection, EulerCapture, EventCapture, PositionCapture
from .metadata import MetadataBlock
from .recording import Binary, BinaryReference, Recording

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
MANIFEST_NAME = "recording.json"


# ── Encoding ─────────────────────────────────────────────────────────

def _capture_to_dict(kind: str, capture) -> dict[str, Any]:
    if kind == "position":
        return {"time": capture.time, "value": [capture.x, capture.y, capture.z]}
    if kind == "euler":
        return {"time": capture.time, "value": [capture.x, capture.y, capture.z], "order": capture.order}
    return {"time": capture.time, "name": capture.name, "metadata": capture.metadata.to_dict()}


def _recording_to_dict(recording: Recording, payloads: list[bytes]) -> dict[str, Any]:
    binaries = []
    for b in recording.binaries:
        binaries.append({
            "name": b.name,
            "entry": f"binaries/{len(payloads)}",
            "size": len(b.data),
            "metadata": b.metadata.to_dict(),
        })
        payloads.append(b.data)

    return {
        "id": recording.id,
        "name": recording.name,
        "metadata": recording.metadata.to_dict(),
        "collections": [
            {
                "name": c.name,
                "kind": c.kind,
                "captures": [_capture_to_dict(c.kind, cap) for cap in c.captures],
            }
            for c in recording.capture_collections
        ],
        "binaries": binaries,
        "binary_references": [
            {"name": r.name, "uri": r.uri, "size": r.size, "metadata": r.metadata.to_dict()}
            for r in recording.binary_references
        ],
        "recordings": [_recording_to_dict(r, payloads) for r in recording.recordings],
    }


def _output_mode(path: Path) -> int:
    """Permission bits for the finished file.

    An existing destination keeps its mode; a new file gets 0666 minus umask,
    as a plain open() would. mkstemp alone would leave it at 0600.
    """
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_recording(recording: Recording, path: Path) -> int:
    """Write ``recording`` to ``path``. Returns the number of bytes written."""
    path = Path(path)
    payloads: list[bytes] = []
    tree = _recording_to_dict(recording, payloads)
    manifest = {"version": FORMAT_VERSION, "recording": tree}

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    os.close(fd)
    try:
        with zipfile.ZipFile(tmp_name, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            zf.writestr(MANIFEST_NAME, json.dumps(manifest))
            for i, data in enumerate(payloads):
                zf.writestr(f"binaries/{i}", data)
        os.chmod(tmp_name, _output_mode(path))
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    size = path.stat().st_size
    logger.info(f"Wrote recording '{recording.id}' ({len(payloads)} binaries, {size} bytes) -> {path}")
    return size


# ── Decoding ─────────────────────────────────────────────────────────

def _collection_from_dict(raw: dict[str, Any]) -> CaptureCollection:
    kind = raw["kind"]
    captures: list = []
    for c in raw["captures"]:
        if kind == "position":
            captures.append(PositionCapture(c["time"], *c["value"]))
        elif kind == "euler":
            captures.append(EulerCapture(c["time"], *c["value"], order=c.get("order", "ZXY")))
        elif kind == "event":
            captures.append(EventCapture(c["time"], c["name"], MetadataBlock.from_dict(c["metadata"])))
        else:
            raise ValueError(f"Unknown capture collection kind: {kind}")
    return CaptureCollection(name=raw["name"], kind=kind, captures=tuple(captures))


def _recording_from_dict(raw: dict[str, Any], zf: zipfile.ZipFile) -> Recording:
    return Recording(
        id=raw["id"],
        name=raw["name"],
        capture_collections=tuple(_collection_from_dict(c) for c in raw["collections"]),
        recordings=tuple(_recording_from_dict(r, zf) for r in raw["recordings"]),
        metadata=MetadataBlock.from_dict(raw["metadata"]),
        binaries=tuple(
            Binary(b["name"], zf.read(b["entry"]), MetadataBlock.from_dict(b["metadata"]))
            for b in raw["binaries"]
        ),
        binary_references=tuple(
            BinaryReference(r["name"], r["uri"], r["size"], MetadataBlock.from_dict(r["metadata"]))
            for r in raw["binary_references"]
        ),
    )


def read_recording(path: Path) -> Recording:
    """Read a container written by :func:`write_recording`."""
    with zipfile.ZipFile(path) as zf:
        manifest = json.loads(zf.read(MANIFEST_NAME))
        if manifest.get("version") != FORMAT_VERSION:
            raise ValueError(f"Unsupported recording container version: {manifest.get('version')}")
        return _recording_from_dict(manifest["recording"], zf)
