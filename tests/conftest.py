"""Shared fixtures for slplint tests."""

import json

import pytest


def snap_id(index: int) -> str:
    return f"11111111-1111-1111-1111-{index:012d}"


def make_pipeline(snap_count: int = 3, link_count: int | None = None) -> dict:
    """Linear pipeline with snap_count snaps and, by default, snap_count - 1 links."""
    if link_count is None:
        link_count = max(snap_count - 1, 0)

    snap_map = {}
    for index in range(snap_count):
        snap_map[snap_id(index)] = {
            "class_id": "com-snaplogic-snaps-transform-datatransform",
            "class_version": 1,
            "instance_id": snap_id(index),
            "instance_version": 1,
            "property_map": {
                "info": {"label": {"value": f"Mapper {index}"}},
                "input": {} if index == 0 else {"input0": {"view_type": {"value": "document"}}},
                "output": {} if index == snap_count - 1 else {"output0": {"view_type": {"value": "document"}}},
                "settings": {},
            },
        }

    link_map = {}
    for index in range(link_count):
        link_map[f"link{index}"] = {
            "src_id": snap_id(index),
            "src_view_id": "output0",
            "dst_id": snap_id(index + 1),
            "dst_view_id": "input0",
        }

    return {
        "class_id": "com-snaplogic-pipeline",
        "class_version": 8,
        "instance_id": "3b8f3c6a-6f0e-4c1e-9a55-0d2b6e0f9a11",
        "property_map": {
            "info": {
                "label": {"value": "Customer Sync"},
                "author": {"value": "data-team@example.com"},
                "notes": {"value": "Reads customers and writes them to the warehouse"},
            },
            "settings": {},
        },
        "snap_map": snap_map,
        "link_map": link_map,
        "render_map": {"detail_map": {}},
    }


@pytest.fixture
def pipeline():
    """Valid three-snap linear pipeline as a dict."""
    return make_pipeline()


@pytest.fixture
def pipeline_text(pipeline):
    """Valid pipeline serialized the way SnapLogic exports it."""
    return json.dumps(pipeline, indent=4)


@pytest.fixture
def pipeline_file(tmp_path, pipeline_text):
    """Valid pipeline written to a .slp file."""
    path = tmp_path / "customer_sync.slp"
    path.write_text(pipeline_text, encoding="utf-8")
    return path
