import logging

import numpy as np

from pswarm.engine.algorithm.pso import SwarmOptimizer
from pswarm.foundation.observer import LoggingObserver, NullObserver, Observer, RunContext
from pswarm.foundation.problem import make_objective


def test_observers_satisfy_protocol():
    assert isinstance(NullObserver(), Observer)
    assert isinstance(LoggingObserver(), Observer)


def test_logging_observer_reports_progress(caplog):
    observer = LoggingObserver(every=5)
    opt = SwarmOptimizer(population_size=3, max_iterations=10, tolerance=0.0, random_source=0)
    with caplog.at_level(logging.INFO, logger="pswarm"):
        opt.run(make_objective("sphere"), np.ones((2, 1)), observer=observer)

    messages = [r.getMessage() for r in caplog.records if r.name == "pswarm.foundation.observer"]
    assert messages[0].startswith("PSO start")
    assert sum("PSO iteration" in m for m in messages) == 2
    assert messages[-1].startswith("PSO end")


def test_run_context_carries_configuration():
    captured = {}

    class Capture(NullObserver):
        def on_start(self, ctx: RunContext) -> None:
            captured["ctx"] = ctx

    opt = SwarmOptimizer(population_size=2, max_iterations=1)
    opt.run(make_objective("sphere"), np.ones((4, 1)), observer=Capture())
    ctx = captured["ctx"]
    assert ctx.optimizer is opt
    assert ctx.shape == (4, 1)
    assert ctx.config["population_size"] == 2
    assert ctx.config["velocity_policy"] == "inertia_weight"
