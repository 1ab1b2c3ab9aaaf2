"""Tests for the geometry transform."""

import pytest

from backend.pixelperfect.composition.geometry import plan_draw
from backend.pixelperfect.enums import ResizeMode
from backend.pixelperfect.exceptions import ValidationError
from backend.pixelperfect.models import Rect


class TestStretch:
    def test_uses_full_source_and_full_canvas(self):
        plan = plan_draw((1000, 800), (295, 413), ResizeMode.STRETCH)
        assert plan.source_rect == Rect(0, 0, 1000, 800)
        assert plan.dest_rect == Rect(0, 0, 295, 413)
        assert plan.canvas_size == (295, 413)

    @pytest.mark.parametrize("target", [(1, 1), (300, 10), (10, 300), (4000, 3000)])
    def test_canvas_matches_target_regardless_of_aspect(self, target):
        plan = plan_draw((640, 480), target, ResizeMode.STRETCH)
        assert plan.canvas_size == target
        assert plan.dest_rect.width == target[0]
        assert plan.dest_rect.height == target[1]


class TestCropCenter:
    def test_wider_source_crops_width(self):
        """1000x800 -> 295x413: trim the sides, keep full height."""
        plan = plan_draw((1000, 800), (295, 413), ResizeMode.CROP_CENTER)
        src = plan.source_rect
        assert src.height == 800
        assert src.width == pytest.approx(571.4, abs=0.1)
        assert src.x == pytest.approx(214.3, abs=0.1)
        assert src.y == 0
        assert plan.dest_rect == Rect(0, 0, 295, 413)

    def test_taller_source_crops_height(self):
        plan = plan_draw((600, 1200), (400, 400), ResizeMode.CROP_CENTER)
        src = plan.source_rect
        assert src.x == 0
        assert src.width == 600
        assert src.height == pytest.approx(600)
        assert src.y == pytest.approx(300)

    def test_equal_aspect_needs_no_crop(self):
        plan = plan_draw((800, 400), (200, 100), ResizeMode.CROP_CENTER)
        assert plan.source_rect.to_box() == pytest.approx((0, 0, 800, 400))

    @pytest.mark.parametrize(
        "source,target",
        [
            ((1000, 800), (295, 413)),
            ((413, 626), (295, 413)),
            ((3000, 2000), (413, 579)),
            ((37, 1001), (413, 626)),
            ((500, 500), (1, 2)),
        ],
    )
    def test_crop_has_target_aspect_and_is_centered(self, source, target):
        plan = plan_draw(source, target, ResizeMode.CROP_CENTER)
        src = plan.source_rect
        assert src.aspect == pytest.approx(target[0] / target[1])
        # Centered: equal margins on both sides of each axis
        assert src.x == pytest.approx(source[0] - src.x2)
        assert src.y == pytest.approx(source[1] - src.y2)
        assert src.x >= 0 and src.y >= 0
        assert src.x2 <= source[0] + 1e-9
        assert src.y2 <= source[1] + 1e-9
        # No letterbox
        assert plan.dest_rect == Rect(0, 0, target[0], target[1])


class TestFitContain:
    def test_taller_source_into_square(self):
        """400x600 -> 800x800: scale 1.333, pillarboxed."""
        plan = plan_draw((400, 600), (800, 800), ResizeMode.FIT_CONTAIN)
        dest = plan.dest_rect
        assert dest.width == pytest.approx(533.3, abs=0.1)
        assert dest.height == pytest.approx(800)
        assert dest.x == pytest.approx(133.3, abs=0.1)
        assert dest.y == 0
        assert plan.source_rect == Rect(0, 0, 400, 600)

    @pytest.mark.parametrize(
        "source,target",
        [((1000, 800), (295, 413)), ((50, 50), (800, 200)), ((1920, 1080), (413, 626))],
    )
    def test_whole_source_visible_and_centered(self, source, target):
        plan = plan_draw(source, target, ResizeMode.FIT_CONTAIN)
        dest = plan.dest_rect
        assert plan.source_rect == Rect(0, 0, source[0], source[1])
        assert dest.aspect == pytest.approx(source[0] / source[1])
        assert dest.x >= 0 and dest.y >= 0
        assert dest.x2 <= target[0] + 1e-9
        assert dest.y2 <= target[1] + 1e-9
        # One axis touches the canvas edges
        assert dest.width == pytest.approx(target[0]) or dest.height == pytest.approx(target[1])
        assert dest.x == pytest.approx(target[0] - dest.x2)
        assert dest.y == pytest.approx(target[1] - dest.y2)


class TestBackgroundAndErrors:
    @pytest.mark.parametrize("mode", list(ResizeMode))
    def test_background_is_opaque_white(self, mode):
        plan = plan_draw((100, 100), (50, 80), mode)
        assert plan.background == (255, 255, 255)

    def test_zero_target_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            plan_draw((100, 100), (0, 50), ResizeMode.STRETCH)

    def test_negative_target_rejected(self):
        with pytest.raises(ValidationError, match="positive"):
            plan_draw((100, 100), (50, -1), ResizeMode.CROP_CENTER)

    def test_empty_source_rejected(self):
        with pytest.raises(ValidationError):
            plan_draw((0, 100), (50, 50), ResizeMode.FIT_CONTAIN)
