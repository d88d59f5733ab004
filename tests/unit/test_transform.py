"""
Normalized box -> viewport pixels for each device orientation.

All cases use the normalized box minX=0.2, minY=0.3, maxX=0.3, maxY=0.4
over a 1000x2000 viewport.
"""
import pytest

from bodybox.annotator import BoundingBox, FrameAnnotator, Orientation, Viewport

BOX = BoundingBox(x=0.2, y=0.3, width=0.1, height=0.1)
VIEWPORT = Viewport(width=1000, height=2000)


def _as_tuple(box):
    return box.x, box.y, box.width, box.height


@pytest.mark.parametrize("orientation, expected", [
    (Orientation.PORTRAIT, (200, 1200, 100, 200)),
    (Orientation.LANDSCAPE_RIGHT, (600, 1400, 200, 100)),
    (Orientation.LANDSCAPE_LEFT, (300, 400, 200, 100)),
    (Orientation.PORTRAIT_UPSIDE_DOWN, (700, 600, 100, 200)),
])
def test_transform_per_orientation(orientation, expected):
    result = FrameAnnotator().transform(BOX, orientation, VIEWPORT)
    assert _as_tuple(result) == pytest.approx(expected)


@pytest.mark.parametrize("orientation", [Orientation.UNKNOWN, Orientation.FACE_UP, Orientation.FACE_DOWN])
def test_flat_and_unknown_orientations_fall_back_to_portrait(orientation):
    annotator = FrameAnnotator()
    portrait = annotator.transform(BOX, Orientation.PORTRAIT, VIEWPORT)
    assert annotator.transform(BOX, orientation, VIEWPORT) == portrait


def test_transform_is_deterministic():
    annotator = FrameAnnotator()
    for orientation in Orientation:
        first = annotator.transform(BOX, orientation, VIEWPORT)
        second = annotator.transform(BOX, orientation, VIEWPORT)
        assert first == second


def test_landscape_swaps_size_axes():
    annotator = FrameAnnotator()
    tall = BoundingBox(x=0.1, y=0.1, width=0.1, height=0.5)
    result = annotator.transform(tall, Orientation.LANDSCAPE_LEFT, Viewport(800, 400))
    assert result.width == pytest.approx(0.1 * 400)
    assert result.height == pytest.approx(0.5 * 800)


def test_full_frame_box_in_portrait_covers_viewport():
    result = FrameAnnotator().transform(BoundingBox(0, 0, 1, 1), Orientation.PORTRAIT, Viewport(390, 844))
    assert _as_tuple(result) == pytest.approx((0, 0, 390, 844))


def test_viewport_must_be_positive():
    with pytest.raises(ValueError):
        Viewport(0, 100)
    with pytest.raises(ValueError):
        Viewport(100, -1)


@pytest.mark.parametrize("width, height", [(float('inf'), 100), (100, float('nan'))])
def test_viewport_must_be_finite(width, height):
    with pytest.raises(ValueError):
        Viewport(width, height)
