"""
HTTP surface of the overlay service, exercised with FastAPI's TestClient.
"""
import time

import pytest
from fastapi.testclient import TestClient

from bodybox.annotator import Point3D
from bodybox.service import ServiceConfig, create_overlay_app


@pytest.fixture
def client():
    app = create_overlay_app(ServiceConfig(service_name="Test Overlay Service", read_timeout=0.01))
    with TestClient(app) as test_client:
        yield test_client


def _wait_for_frame(client, frame_id, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        body = client.get("/overlays").json()
        if body["frame_id"] == frame_id:
            return body
        time.sleep(0.02)
    raise AssertionError(f"frame {frame_id} never reached the overlay layer")


def test_annotate_returns_viewport_boxes(client, frame_payload):
    response = client.post("/annotate", json=frame_payload(frame_id=1))

    assert response.status_code == 200
    body = response.json()
    assert body["applied"] is True
    assert body["image_orientation"] == "right"
    assert len(body["overlays"]) == 1
    box = body["overlays"][0]["box"]
    assert box["x"] == pytest.approx(156.0)
    assert box["y"] == pytest.approx(84.4)
    assert box["width"] == pytest.approx(78.0)
    assert box["height"] == pytest.approx(675.2)


def test_annotate_replaces_current_overlays(client, frame_payload, make_detection_payload):
    client.post("/annotate", json=frame_payload(
        frame_id=1, detections=[make_detection_payload(), make_detection_payload()]))
    assert len(client.get("/overlays").json()["overlays"]) == 2

    client.post("/annotate", json=frame_payload(frame_id=2, detections=[]))
    body = client.get("/overlays").json()
    assert body == {"frame_id": 2, "overlays": []}


def test_stale_frame_is_not_applied(client, frame_payload):
    client.post("/annotate", json=frame_payload(frame_id=10))
    response = client.post("/annotate", json=frame_payload(frame_id=9, detections=[]))

    assert response.json()["applied"] is False
    assert client.get("/overlays").json()["frame_id"] == 10


def test_annotate_mixed_detection_kinds(client, frame_payload, make_detection_payload):
    detections = [
        {"kind": "face", "box": {"x": 0.2, "y": 0.3, "width": 0.1, "height": 0.1}},
        {"kind": "human_rect", "box": {"x": 0.2, "y": 0.3, "width": 0.1, "height": 0.1},
         "upper_body_only": True},
        make_detection_payload(confidence=0.2),
    ]
    body = client.post("/annotate", json=frame_payload(
        detections=detections, orientation="landscapeRight", width=1000, height=2000)).json()

    assert [o["kind"] for o in body["overlays"]] == ["face", "human_rect"]
    assert body["partial_count"] == 1
    assert body["image_orientation"] == "down"
    box = body["overlays"][0]["box"]
    assert (box["x"], box["y"]) == (pytest.approx(600), pytest.approx(1400))
    assert body["overlays"][1]["color"] == [0, 255, 255]


@pytest.mark.parametrize("viewport", [{"width": 0, "height": 844}, {"width": 390}])
def test_annotate_rejects_bad_viewport(client, frame_payload, viewport):
    payload = frame_payload()
    payload["viewport"] = viewport
    assert client.post("/annotate", json=payload).status_code == 422


def test_annotate_rejects_unknown_detection_kind(client, frame_payload):
    payload = frame_payload(detections=[{"kind": "hand"}])
    assert client.post("/annotate", json=payload).status_code == 422


def test_annotate_rejects_undecodable_image(client, frame_payload):
    payload = frame_payload(image_bytes="bm90IGEganBlZw==")
    assert client.post("/annotate", json=payload).status_code == 422


def test_clear_overlays(client, frame_payload):
    client.post("/annotate", json=frame_payload(frame_id=3))
    body = client.delete("/overlays").json()
    assert body == {"frame_id": None, "overlays": []}


def test_frames_are_annotated_in_background(client, frame_payload):
    response = client.post("/frames", json=frame_payload(frame_id=7))
    assert response.status_code == 202
    assert response.json()["accepted"] is True

    body = _wait_for_frame(client, 7)
    assert len(body["overlays"]) == 1


def test_distance(client):
    response = client.post("/distance", json={
        "camera": {"x": 0, "y": 0, "z": 0},
        "target": {"x": 3, "y": 4, "z": 0},
    })
    assert response.json()["meters"] == pytest.approx(5.0)


def test_health(client, frame_payload):
    client.post("/annotate", json=frame_payload(frame_id=5))
    body = client.get("/health").json()

    assert body["healthy"] is True
    assert body["worker_running"] is True
    assert body["service"] == "Test Overlay Service"
    assert body["frames_annotated"] == 1
    assert body["current_frame_id"] == 5
    assert body["overlays_shown"] == 1


def test_metrics_endpoint(client, frame_payload):
    client.post("/annotate", json=frame_payload())
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "bodybox_full_body_detections" in response.text


def test_distances_reported_with_raycaster(frame_payload):
    app = create_overlay_app(ServiceConfig(read_timeout=0.01),
                             raycaster=lambda x, y: Point3D(0.0, 0.0, -2.0))
    with TestClient(app) as client:
        body = client.post("/annotate", json=frame_payload(
            camera_position={"x": 0, "y": 0, "z": 0})).json()

    assert body["distances"] == [{"index": 0, "meters": pytest.approx(2.0)}]


def test_annotate_rejects_non_finite_viewport(client, frame_payload):
    payload = frame_payload()
    payload["viewport"] = {"width": "inf", "height": 100}

    assert client.post("/annotate", json=payload).status_code == 422
    assert client.get("/overlays").json()["frame_id"] is None


def test_annotate_rejects_empty_image(client, frame_payload):
    response = client.post("/annotate", json=frame_payload(image_bytes="===="))
    assert response.status_code == 422


def test_bad_frame_does_not_stop_background_worker(client, frame_payload):
    frame_input = client.app.state.frame_input
    client.post("/frames", json=frame_payload(frame_id=1, image_bytes="===="))
    deadline = time.monotonic() + 5.0
    while frame_input.has_pending() and time.monotonic() < deadline:
        time.sleep(0.02)

    client.post("/frames", json=frame_payload(frame_id=2))

    body = _wait_for_frame(client, 2)
    assert len(body["overlays"]) == 1
    assert client.get("/health").json()["worker_running"] is True
