"""Tests for image_utils.py helpers."""

import io

import pytest
from PIL import Image

from image_variants.core.image_utils import (
    WEBP_QUALITY,
    SourceImage,
    encode_webp,
    open_image,
    resize_to_width,
    to_webp_mode,
    variant_height,
)
from image_variants.testing.fakes import create_test_image


class TestVariantHeight:
    """Tests for variant_height."""

    @pytest.mark.parametrize(
        "source, width, expected",
        [
            ((1600, 1200), 400, 300),
            ((1600, 1200), 800, 600),
            ((1600, 1200), 1200, 900),
            ((600, 900), 400, 600),
            ((1000, 333), 400, 133),
            ((1000, 335), 400, 134),
        ],
    )
    def test_variant_height(self, source, width, expected):
        assert variant_height(source[0], source[1], width) == expected

    def test_half_rounds_up(self):
        # 801 * 400 / 1600 == 200.25, 802 * 400 / 1600 == 200.5
        assert variant_height(1600, 801, 400) == 200
        assert variant_height(1600, 802, 400) == 201

    def test_never_below_one_pixel(self):
        assert variant_height(5000, 1, 400) == 1


class TestOpenImage:
    """Tests for open_image."""

    def test_open_image_loads_dimensions(self):
        image = open_image(create_test_image(120, 80))
        assert image.size == (120, 80)

    def test_open_image_rejects_garbage(self):
        with pytest.raises(Exception):
            open_image(b"not an image")


class TestToWebpMode:
    """Tests for to_webp_mode."""

    def test_rgb_untouched(self):
        image = Image.new("RGB", (10, 10))
        assert to_webp_mode(image) is image

    def test_grayscale_becomes_rgb(self):
        assert to_webp_mode(Image.new("L", (10, 10))).mode == "RGB"

    def test_grayscale_alpha_becomes_rgba(self):
        assert to_webp_mode(Image.new("LA", (10, 10))).mode == "RGBA"

    def test_palette_with_transparency_becomes_rgba(self):
        image = Image.new("P", (10, 10))
        image.info["transparency"] = 0
        assert to_webp_mode(image).mode == "RGBA"


class TestResizeToWidth:
    """Tests for resize_to_width."""

    def test_landscape_resize_keeps_aspect_ratio(self):
        resized = resize_to_width(Image.new("RGB", (1600, 1200)), 400)
        assert resized.size == (400, 300)

    def test_portrait_resize_bounds_width(self):
        resized = resize_to_width(Image.new("RGB", (600, 900)), 400)
        assert resized.size == (400, 600)

    def test_never_enlarges(self):
        image = Image.new("RGB", (300, 200))
        resized = resize_to_width(image, 800)
        assert resized.size == (300, 200)
        assert resized is not image

    def test_equal_width_keeps_size(self):
        resized = resize_to_width(Image.new("RGB", (400, 250)), 400)
        assert resized.size == (400, 250)


class TestEncodeWebp:
    """Tests for encode_webp."""

    def test_quality_constant(self):
        assert WEBP_QUALITY == 82

    def test_output_is_webp(self):
        data = encode_webp(Image.new("RGB", (40, 30), color="green"))
        decoded = Image.open(io.BytesIO(data))
        assert decoded.format == "WEBP"
        assert decoded.size == (40, 30)


class TestSourceImage:
    """Tests for the SourceImage container."""

    def test_dimensions_come_from_image(self):
        data = create_test_image(64, 48)
        source = SourceImage(data=data, image=open_image(data))
        assert (source.width, source.height) == (64, 48)
        assert source.data == data
