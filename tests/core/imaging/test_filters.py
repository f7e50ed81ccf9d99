"""Unit tests for colour filters."""

from PIL import Image as PILImage

from imagetransform.core.imaging.filters import apply_grayscale, apply_sepia


class TestGrayscale:
    def test_channels_are_equal(self) -> None:
        result = apply_grayscale(PILImage.new("RGB", (4, 4), (10, 200, 60)))

        r, g, b = result.getpixel((0, 0))
        assert r == g == b
        assert result.mode == "RGB"

    def test_is_idempotent(self) -> None:
        source = PILImage.new("RGB", (3, 1))
        source.putdata([(255, 0, 0), (12, 180, 99), (250, 250, 3)])

        once = apply_grayscale(source)
        twice = apply_grayscale(once)

        assert list(twice.getdata()) == list(once.getdata())

    def test_uses_perceptual_weights(self) -> None:
        green = apply_grayscale(PILImage.new("RGB", (1, 1), (0, 255, 0))).getpixel((0, 0))
        blue = apply_grayscale(PILImage.new("RGB", (1, 1), (0, 0, 255))).getpixel((0, 0))

        assert green[0] > blue[0]

    def test_preserves_alpha(self) -> None:
        result = apply_grayscale(PILImage.new("RGBA", (2, 2), (255, 0, 0, 77)))

        assert result.mode == "RGBA"
        assert result.getpixel((1, 1))[3] == 77


class TestSepia:
    def test_black_stays_black(self) -> None:
        result = apply_sepia(PILImage.new("RGB", (2, 2), (0, 0, 0)))

        assert result.getpixel((0, 0)) == (0, 0, 0)

    def test_white_clamps_red_and_green(self) -> None:
        result = apply_sepia(PILImage.new("RGB", (2, 2), (255, 255, 255)))

        assert result.getpixel((0, 0)) == (255, 255, 238)

    def test_values_are_truncated(self) -> None:
        result = apply_sepia(PILImage.new("RGB", (1, 1), (100, 100, 100)))

        # 135.1, 120.3 and 93.7 before truncation
        assert result.getpixel((0, 0)) == (135, 120, 93)

    def test_preserves_alpha(self) -> None:
        result = apply_sepia(PILImage.new("RGBA", (2, 2), (100, 100, 100, 10)))

        assert result.mode == "RGBA"
        assert result.getpixel((0, 0)) == (135, 120, 93, 10)

    def test_grayscale_then_sepia_is_tinted(self) -> None:
        result = apply_sepia(apply_grayscale(PILImage.new("RGB", (1, 1), (30, 160, 220))))

        r, g, b = result.getpixel((0, 0))
        assert r >= g >= b
