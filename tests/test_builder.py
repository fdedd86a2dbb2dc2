"""
Tests for PipelineBuilder.
"""
import pytest

from cropkit import (
    Driver,
    InvalidDriverError,
    InvalidOptionError,
    MissingCapabilityError,
    PipelineBuilder,
    PipelineConfig,
)


@pytest.fixture
def builder(capabilities) -> PipelineBuilder:
    return PipelineBuilder(capabilities)


class TestDriverOption:
    """Tests for backend selection."""

    def test_default_inherits_host(self, builder):
        assert builder.build().driver is None

    def test_imagick(self, builder):
        assert builder.driver("imagick").build().driver is Driver.IMAGICK

    def test_gd(self, builder):
        assert builder.driver("gd").build().driver is Driver.GD

    def test_invalid_driver_raises(self, builder):
        with pytest.raises(InvalidDriverError):
            builder.driver("webp")

    def test_invalid_driver_keeps_previous(self, builder):
        builder.driver("imagick")

        with pytest.raises(InvalidDriverError):
            builder.driver("webp")

        assert builder.build().driver is Driver.IMAGICK


class TestCroppingOptions:
    """Tests for croppable and crop_aspect_ratio."""

    def test_croppable_defaults(self, builder):
        config = builder.croppable().build()

        assert config.cropping_enabled is True
        assert config.crop_aspect_ratio is None
        assert config.min_crop_box_width == 0
        assert config.min_crop_box_height == 0

    def test_croppable_min_bounds(self, builder):
        config = builder.croppable(True, 120, 80).build()

        assert config.min_crop_box_width == 120
        assert config.min_crop_box_height == 80

    def test_aspect_ratio_enables_cropping(self, builder):
        config = builder.crop_aspect_ratio(2.5).build()

        assert config.crop_aspect_ratio == 2.5
        assert config.cropping_enabled is True

    def test_integer_aspect_ratio_stored_as_float(self, builder):
        config = builder.crop_aspect_ratio(1).build()

        assert config.crop_aspect_ratio == 1.0
        assert isinstance(config.crop_aspect_ratio, float)

    def test_disabling_keeps_aspect_ratio(self, builder):
        config = builder.crop_aspect_ratio(2.5).croppable(False).build()

        assert config.cropping_enabled is False
        assert config.crop_aspect_ratio == 2.5

    def test_croppable_overwrites_min_bounds(self, builder):
        config = builder.crop_aspect_ratio(1.0, 300, 300).croppable(True).build()

        assert config.min_crop_box_width == 0
        assert config.min_crop_box_height == 0

    @pytest.mark.parametrize("ratio", [0, -1.5, float("nan"), float("inf"), True, "2.5", None])
    def test_invalid_aspect_ratio_raises(self, builder, ratio):
        with pytest.raises(InvalidOptionError):
            builder.crop_aspect_ratio(ratio)

    def test_invalid_aspect_ratio_leaves_builder_unchanged(self, builder):
        builder.croppable(False, 10, 10)

        with pytest.raises(InvalidOptionError):
            builder.crop_aspect_ratio(-1, 50, 50)

        config = builder.build()
        assert config.cropping_enabled is False
        assert config.crop_aspect_ratio is None
        assert config.min_crop_box_width == 10

    @pytest.mark.parametrize("bound", [-1, 1.5, None])
    def test_invalid_min_bound_raises(self, builder, bound):
        with pytest.raises(InvalidOptionError):
            builder.croppable(True, bound, 0)

    def test_no_crop_box_resize(self, builder):
        assert builder.no_crop_box_resize().build().crop_box_resizable is False

    @pytest.mark.parametrize("enabled", [2.5, 1, "yes", None])
    def test_non_bool_enabled_raises(self, builder, enabled):
        with pytest.raises(InvalidOptionError, match="crop_aspect_ratio"):
            builder.croppable(enabled)

        config = builder.build()
        assert config.cropping_enabled is False
        assert config.crop_aspect_ratio is None

    def test_enable_crop_zoom(self, builder):
        assert builder.enable_crop_zoom().build().crop_zoom_enabled is True


class TestResizeOption:
    """Tests for target dimensions."""

    def test_width_only(self, builder):
        config = builder.resize(width=640).build()

        assert config.target_width == 640
        assert config.target_height is None
        assert config.resize_enabled is True

    def test_both(self, builder):
        config = builder.resize(640, 480).build()

        assert (config.target_width, config.target_height) == (640, 480)

    def test_no_arguments_disables(self, builder):
        config = builder.resize(640).resize().build()

        assert config.resize_enabled is False

    @pytest.mark.parametrize("width", [0, -10, 12.5, True])
    def test_invalid_width_raises(self, builder, width):
        with pytest.raises(InvalidOptionError):
            builder.resize(width=width)


class TestAutoOrientate:
    """Tests for the EXIF capability check."""

    def test_enabled_with_exif(self, builder):
        assert builder.auto_orientate().build().auto_orientate is True

    def test_missing_exif_raises(self, no_exif_capabilities):
        builder = PipelineBuilder(no_exif_capabilities)

        with pytest.raises(MissingCapabilityError):
            builder.auto_orientate()

        assert builder.build().auto_orientate is False


class TestBuild:
    """Tests for chaining and snapshots."""

    def test_chaining_returns_builder(self, builder):
        assert builder.croppable() is builder
        assert builder.crop_aspect_ratio(1.0) is builder
        assert builder.no_crop_box_resize() is builder
        assert builder.enable_crop_zoom() is builder
        assert builder.resize(10) is builder
        assert builder.auto_orientate() is builder
        assert builder.driver("gd") is builder

    def test_full_chain(self, builder):
        config = (
            builder
            .driver("imagick")
            .crop_aspect_ratio(16 / 9, 160, 90)
            .no_crop_box_resize()
            .enable_crop_zoom()
            .resize(width=1920)
            .auto_orientate()
            .build()
        )

        assert config == PipelineConfig(
            driver=Driver.IMAGICK,
            cropping_enabled=True,
            crop_aspect_ratio=16 / 9,
            min_crop_box_width=160,
            min_crop_box_height=90,
            crop_box_resizable=False,
            crop_zoom_enabled=True,
            target_width=1920,
            target_height=None,
            auto_orientate=True,
        )

    def test_snapshot_not_affected_by_later_calls(self, builder):
        snapshot = builder.resize(100).build()

        builder.resize(200).croppable()

        assert snapshot.target_width == 100
        assert snapshot.cropping_enabled is False
