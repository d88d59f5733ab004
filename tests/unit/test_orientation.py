import pytest

from bodybox.annotator import ImageOrientation, Orientation, image_orientation, parse_orientation


@pytest.mark.parametrize("orientation, expected", [
    (Orientation.PORTRAIT, ImageOrientation.RIGHT),
    (Orientation.LANDSCAPE_RIGHT, ImageOrientation.DOWN),
    (Orientation.PORTRAIT_UPSIDE_DOWN, ImageOrientation.LEFT),
    (Orientation.LANDSCAPE_LEFT, ImageOrientation.UP),
    (Orientation.UNKNOWN, ImageOrientation.UP),
    (Orientation.FACE_UP, ImageOrientation.UP),
    (Orientation.FACE_DOWN, ImageOrientation.UP),
])
def test_image_orientation(orientation, expected):
    assert image_orientation(orientation) == expected


@pytest.mark.parametrize("value, expected", [
    ("portrait", Orientation.PORTRAIT),
    ("landscapeLeft", Orientation.LANDSCAPE_LEFT),
    ("landscape-right", Orientation.LANDSCAPE_RIGHT),
    ("portraitUpsideDown", Orientation.PORTRAIT_UPSIDE_DOWN),
    ("FACE_UP", Orientation.FACE_UP),
    (Orientation.FACE_DOWN, Orientation.FACE_DOWN),
    ("sideways", Orientation.UNKNOWN),
    (None, Orientation.UNKNOWN),
    ("", Orientation.UNKNOWN),
])
def test_parse_orientation(value, expected):
    assert parse_orientation(value) == expected


def test_only_left_and_right_are_landscape():
    landscape = {o for o in Orientation if o.is_landscape}
    assert landscape == {Orientation.LANDSCAPE_LEFT, Orientation.LANDSCAPE_RIGHT}
