import numpy as np
import pytest

from perseus.imageutils import (
    flip_colours,
    gray_to_rgba,
    load_gray_image,
    load_image,
    overlay,
    rgba_to_gray,
    save_image,
    scale_to_gray,
)


def _sample_rgba():
    rng = np.random.default_rng(7)
    image = rng.integers(0, 256, size=(5, 6, 4), dtype=np.uint8)
    image[..., 3] = 255
    return image


def test_flip_colours_swaps_first_and_third_channels():
    image = _sample_rgba()
    flipped = flip_colours(image)
    assert np.array_equal(flipped[..., 0], image[..., 2])
    assert np.array_equal(flipped[..., 2], image[..., 0])
    assert np.array_equal(flipped[..., 1], image[..., 1])


def test_flip_colours_twice_is_identity():
    image = _sample_rgba()
    assert np.array_equal(flip_colours(flip_colours(image)), image)


def test_gray_to_rgba_copies_grey_into_colour_channels():
    grey = np.arange(12, dtype=np.uint8).reshape(3, 4) * 20
    rgba = gray_to_rgba(grey)
    for channel in range(3):
        assert np.array_equal(rgba[..., channel], grey)
    assert np.all(rgba[..., 3] == 255)


def test_rgba_to_gray_fixed_value_marks_lit_pixels():
    image = np.zeros((2, 2, 4), dtype=np.uint8)
    image[0, 0, 0] = 9
    image[1, 1, 1] = 3
    grey = rgba_to_gray(image, 77)
    assert grey[0, 0] == 77
    assert grey[1, 1] == 77
    assert grey[0, 1] == 0


def test_rgba_to_gray_fixed_value_ignores_third_channel():
    image = np.zeros((1, 1, 4), dtype=np.uint8)
    image[0, 0, 2] = 200
    assert rgba_to_gray(image, 50)[0, 0] == 0


def test_rgba_to_gray_weighted_stays_near_equal_channels():
    grey = np.arange(0, 256, dtype=np.uint8).reshape(16, 16)
    result = rgba_to_gray(gray_to_rgba(grey))
    assert result.dtype == np.uint8
    diff = grey.astype(int) - result.astype(int)
    assert np.all((diff >= 0) & (diff <= 1))


def test_rgba_to_gray_rejects_grey_input():
    with pytest.raises(ValueError):
        rgba_to_gray(np.zeros((3, 3), dtype=np.uint8))


def test_scale_to_gray_spans_full_range():
    source = np.array([[-2.0, 0.0], [1.0, 6.0]], dtype=np.float32)
    result = scale_to_gray(source)
    assert result[0, 0, 0] == 0
    assert result[1, 1, 0] == 255
    assert np.all(result[..., 3] == 255)
    assert np.array_equal(result[..., 0], result[..., 1])
    assert np.array_equal(result[..., 1], result[..., 2])


def test_scale_to_gray_preserves_order():
    source = np.linspace(-3.0, 5.0, 20, dtype=np.float32).reshape(4, 5)
    result = scale_to_gray(source)
    grey = [int(value) for value in result[..., 0].ravel()]
    assert grey[0] == 0
    assert grey[-1] == 255
    assert grey == sorted(grey)


def test_scale_to_gray_constant_image_is_blank():
    source = np.full((3, 3), 4.5, dtype=np.float32)
    assert not scale_to_gray(source).any()


def test_scale_to_gray_does_not_modify_input():
    source = np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32)
    kept = source.copy()
    scale_to_gray(source)
    assert np.array_equal(source, kept)


def test_overlay_default_colour_goes_to_third_channel():
    base = _sample_rgba()
    mask = np.zeros(base.shape[:2], dtype=np.uint8)
    mask[2, 3] = 255
    result = overlay(mask, base)
    assert result[2, 3, 2] == 255
    assert result[2, 3, 1] == 0
    assert result[2, 3, 0] == 0
    assert result[2, 3, 3] == 255


def test_overlay_keeps_pixels_outside_mask():
    base = _sample_rgba()
    mask = np.zeros(base.shape[:2], dtype=np.uint8)
    mask[0, 0] = 128
    result = overlay(mask, base, 10, 20, 30)
    assert np.array_equal(result[1:], base[1:])
    assert np.array_equal(base, _sample_rgba())


def test_overlay_full_mask_uses_given_colour():
    base = _sample_rgba()
    mask = np.full(base.shape[:2], 255, dtype=np.uint8)
    result = overlay(mask, base, 10, 20, 30)
    expected = np.empty_like(base)
    expected[..., 0] = 30
    expected[..., 1] = 20
    expected[..., 2] = 10
    expected[..., 3] = 255
    assert np.array_equal(result, expected)


def test_overlay_size_mismatch_raises():
    with pytest.raises(ValueError):
        overlay(np.zeros((2, 2), dtype=np.uint8), np.zeros((3, 3, 4), dtype=np.uint8))


def test_save_and_load_round_trip(tmp_path):
    image = _sample_rgba()
    path = tmp_path / "picture.png"
    save_image(image, path)
    assert np.array_equal(load_image(path), image)


def test_load_gray_image_with_fixed_value(tmp_path):
    image = np.zeros((4, 4, 4), dtype=np.uint8)
    image[..., 3] = 255
    image[1, 2, :3] = 200
    path = tmp_path / "mask.png"
    save_image(image, path)
    grey = load_gray_image(path, 1)
    assert grey[1, 2] == 1
    assert int(grey.sum()) == 1


def test_save_unknown_extension_raises(tmp_path):
    with pytest.raises(ValueError):
        save_image(_sample_rgba(), tmp_path / "picture.unknownformat")


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        load_image(tmp_path / "absent.png")