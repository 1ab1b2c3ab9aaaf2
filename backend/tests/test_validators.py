"""Tests for input validation."""

import pytest

from backend.pixelperfect.config import Config
from backend.pixelperfect.constants import ID_PRESETS, get_preset
from backend.pixelperfect.enums import ResizeMode
from backend.pixelperfect.exceptions import ValidationError
from backend.pixelperfect.validators import validate_dimensions, validate_file_path


class TestValidateDimensions:
    def test_valid_dimensions(self):
        assert validate_dimensions(295, 413) == (295, 413)

    def test_numeric_strings_accepted(self):
        assert validate_dimensions("600", " 800 ") == (600, 800)

    def test_floats_truncated(self):
        assert validate_dimensions(100.7, 200.0) == (100, 200)

    def test_zero_width_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            validate_dimensions(0, 100)

    def test_negative_height_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            validate_dimensions(100, -50)

    def test_fraction_below_one_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            validate_dimensions(0.5, 100)

    @pytest.mark.parametrize("value", ["", "abc", None, "nan", float("inf"), True])
    def test_non_numeric_rejected(self, value):
        with pytest.raises(ValidationError):
            validate_dimensions(value, 100)

    def test_oversized_rejected(self):
        with pytest.raises(ValidationError, match="exceed maximum"):
            validate_dimensions(Config.MAX_IMAGE_SIZE + 1, 100)

    def test_boundary_max(self):
        validate_dimensions(Config.MAX_IMAGE_SIZE, Config.MAX_IMAGE_SIZE)

    def test_boundary_min(self):
        assert validate_dimensions(1, 1) == (1, 1)


class TestValidateFilePath:
    def test_nonexistent_file_rejected(self):
        with pytest.raises(ValidationError, match="File not found"):
            validate_file_path("/nonexistent/path/photo.jpg")

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(ValidationError, match="File not found"):
            validate_file_path(str(tmp_path))

    def test_existing_file_accepted(self, tmp_path):
        path = tmp_path / "photo.bmp"
        path.write_bytes(b"whatever")
        validate_file_path(str(path))


class TestPresets:
    def test_catalog_sizes(self):
        assert [(p.width, p.height) for p in ID_PRESETS] == [
            (295, 413),
            (413, 579),
            (413, 626),
        ]

    def test_get_preset(self):
        preset = get_preset("2inch")
        assert preset.label == "2 Inch (2寸)"
        assert preset.description == "35mm x 49mm @ 300dpi - Passport/Visa"

    def test_presets_center_crop(self):
        spec = get_preset("1inch").to_target()
        assert spec.size == (295, 413)
        assert spec.mode == ResizeMode.CROP_CENTER

    def test_unknown_preset_raises(self):
        with pytest.raises(ValidationError, match="Unknown preset"):
            get_preset("3inch")
