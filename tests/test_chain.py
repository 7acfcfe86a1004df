import pytest

from agentflow.chain import ChainFunc, ChainPipeline


def test_chain_func_calls_function():
    chain = ChainFunc(lambda value: value * 2)
    assert chain.run(21) == 42


def test_pipeline_applies_steps_in_order():
    pipeline = ChainPipeline(
        ChainFunc(lambda s: s + "a"),
        ChainFunc(lambda s: s + "b"),
        ChainFunc(str.upper),
    )
    assert pipeline.run("x") == "XAB"


def test_empty_pipeline_returns_input():
    assert ChainPipeline().run("same") == "same"


def test_pipeline_stops_at_first_error():
    seen = []

    def fail(_):
        raise RuntimeError("boom")

    pipeline = ChainPipeline(ChainFunc(fail), ChainFunc(seen.append))
    with pytest.raises(RuntimeError, match="boom"):
        pipeline.run("input")
    assert seen == []


def test_pipelines_nest():
    inner = ChainPipeline(ChainFunc(lambda n: n + 1))
    outer = ChainPipeline(inner, inner)
    assert outer.run(0) == 2