import numpy as np
import pytest

from mandelgrid.surfaces import ImageSurface, RecordingSurface, to_rgb


def test_to_rgb_understands_policy_colors():
    assert to_rgb("black") == (0, 0, 0)
    assert to_rgb((1, 2, 3)) == (1, 2, 3)
    r, g, b = to_rgb("hsl(0, 30%, 60%)")
    assert r > g == b


def test_image_surface_writes_pixels():
    surface = ImageSurface(3, 2)
    surface.set_pixel(2, 1, (10, 20, 30))
    pixels = surface.pixels()
    assert pixels.shape == (2, 3, 3)
    assert tuple(pixels[1, 2]) == (10, 20, 30)
    assert np.count_nonzero(pixels) == 3
    img = surface.image()
    assert img.size == (3, 2)
    assert img.getpixel((2, 1)) == (10, 20, 30)


def test_ansi_uses_one_line_per_two_rows():
    surface = ImageSurface(4, 3)
    text = surface.to_ansi()
    lines = text.split("\n")
    assert len(lines) == 2
    assert all(line.endswith("\033[0m") for line in lines)
    assert lines[0].count("▀") == 4


def test_recording_surface_rejects_out_of_range():
    surface = RecordingSurface(2, 2)
    surface.set_pixel(1, 1, "black")
    with pytest.raises(IndexError):
        surface.set_pixel(2, 0, "black")
    assert surface.writes == [(1, 1, "black")]
