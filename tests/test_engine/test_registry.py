"""Tests for the step registry."""

import pytest

from graylab.engine.context import AnalysisContext
from graylab.engine.registry import Stage, StepRegistry, StepSpec


def _noop(ctx: AnalysisContext) -> None:
    pass


def test_register():
    reg = StepRegistry()
    spec = StepSpec(id="S0.01", stage=Stage.PREPROCESS, fn=_noop)
    reg.register(spec)
    assert reg.all() == [spec]
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StepRegistry()
    reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop))


def test_all_sorts_by_stage_then_id():
    reg = StepRegistry()
    reg.register(StepSpec(id="S1.02", stage=Stage.BINARIZE, fn=_noop))
    reg.register(StepSpec(id="S0.01", stage=Stage.PREPROCESS, fn=_noop))
    reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop))
    ordered = reg.all()
    assert [s.id for s in ordered] == ["S0.01", "S1.01", "S1.02"]


def test_resolve_order_with_deps():
    reg = StepRegistry()
    reg.register(StepSpec(id="S2.02", stage=Stage.SEGMENT, fn=_noop, dependencies=["S2.01"]))
    reg.register(StepSpec(id="S2.01", stage=Stage.SEGMENT, fn=_noop, dependencies=["S1.01"]))
    reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop))
    ids = [s.id for s in reg.resolve_order(None)]
    assert ids == ["S1.01", "S2.01", "S2.02"]


def test_resolve_order_drops_unrequested_dependencies():
    reg = StepRegistry()
    reg.register(StepSpec(id="S0.02", stage=Stage.PREPROCESS, fn=_noop))
    reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop, dependencies=["S0.02"]))
    order = reg.resolve_order({"S1.01"})
    assert [s.id for s in order] == ["S1.01"]


def test_resolve_order_detects_cycles():
    reg = StepRegistry()
    reg.register(StepSpec(id="S3.01", stage=Stage.SELECT, fn=_noop, dependencies=["S3.02"]))
    reg.register(StepSpec(id="S3.02", stage=Stage.SELECT, fn=_noop, dependencies=["S3.01"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order(None)


def test_resolve_order_runs_ready_steps_by_id():
    reg = StepRegistry()
    reg.register(StepSpec(id="S3.01", stage=Stage.SELECT, fn=_noop))
    reg.register(StepSpec(id="S2.02", stage=Stage.SEGMENT, fn=_noop, dependencies=["S3.01"]))
    reg.register(StepSpec(id="S1.01", stage=Stage.BINARIZE, fn=_noop))
    ids = [s.id for s in reg.resolve_order(None)]
    assert ids == ["S1.01", "S3.01", "S2.02"]
