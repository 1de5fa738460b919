"""Tests for the segmentation steps — full pipeline through stages 0-3."""

# Import all steps to trigger registration
import graylab.engine.stage0.s0_01_median_smoothing
import graylab.engine.stage0.s0_02_contrast_stretch
import graylab.engine.stage1.s1_01_otsu_threshold
import graylab.engine.stage1.s1_02_binarize
import graylab.engine.stage2.s2_01_label_regions
import graylab.engine.stage2.s2_02_region_props
import graylab.engine.stage3.s3_01_best_region
import graylab.engine.stage3.s3_02_mask_source

from graylab.engine.config import PipelineConfig
from graylab.engine.context import AnalysisContext
from graylab.engine.pipeline import Pipeline
from graylab.engine.registry import Stage, get_registry
from graylab.models.grid import PixelGrid
from tests.conftest import SEGMENT_ROWS, STANDING_BAR


def test_registers_8_steps():
    reg = get_registry()
    assert reg.count == 8
    stages = [s.stage for s in reg.all()]
    assert stages.count(Stage.PREPROCESS) == 2
    assert stages.count(Stage.SELECT) == 2


def test_default_run_keeps_the_standing_bar(segment_grid):
    ctx = Pipeline().run(AnalysisContext(source=segment_grid))

    assert not ctx.errors
    assert len(ctx.completed_steps) == 6
    assert ctx.threshold == 20
    assert ctx.labeling_ok
    assert ctx.label_max == 2
    assert [p.area for p in ctx.regions] == [21, 33]
    assert ctx.best_label == 2
    assert ctx.masked

    assert (ctx.source.samples[STANDING_BAR] == 200).all()
    ctx.source.samples[STANDING_BAR] = 0
    assert not ctx.source.samples.any()


def test_intermediate_grids_are_separate(segment_grid):
    ctx = Pipeline().run(AnalysisContext(source=segment_grid))
    assert ctx.working is not ctx.source
    assert ctx.labeled is ctx.binary
    assert ctx.working.samples.tolist() == SEGMENT_ROWS


def test_preprocessing_enabled(segment_grid):
    config = PipelineConfig(smooth=True, stretch_contrast=True)
    ctx = Pipeline(config=config).run(AnalysisContext(source=segment_grid))

    assert not ctx.errors
    assert len(ctx.completed_steps) == 8
    # stretched to 0 / 255 before thresholding
    assert ctx.threshold == 0
    assert ctx.best_label == 2
    assert ctx.masked


def test_queue_overflow_leaves_source_untouched(segment_grid):
    config = PipelineConfig(queue_capacity=1)
    ctx = Pipeline(config=config).run(AnalysisContext(source=segment_grid))

    assert "S2.01" in ctx.errors
    assert "larger queue capacity" in ctx.errors["S2.01"]
    assert not ctx.labeling_ok
    assert ctx.labeled is None
    assert ctx.best_label is None
    assert not ctx.masked
    assert ctx.source.samples.tolist() == SEGMENT_ROWS


def test_uniform_image_selects_nothing():
    grid = PixelGrid.zeros(10, 10, 255)
    grid.samples[:] = 40
    ctx = Pipeline().run(AnalysisContext(source=grid))

    assert ctx.threshold == 255
    assert ctx.label_max == 0
    assert ctx.best_label is None
    assert not ctx.masked
    assert (ctx.source.samples == 40).all()


def test_label_space_exhaustion_is_reported():
    grid = PixelGrid.from_rows([[3, 0, 3, 0, 3]], 3)
    ctx = Pipeline(config=PipelineConfig(queue_capacity=None)).run(AnalysisContext(source=grid))

    assert ctx.label_max == 2
    assert not ctx.labeling_ok
    assert "label space exhausted" in ctx.errors["S2.01"]
    assert "queue capacity" not in ctx.errors["S2.01"]
    assert not ctx.masked
