# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "astroprop"]
#
# [tool.uv.sources]
# astroprop = { path = ".." }
# ///
"""Propagate a circular LEO orbit with Earth, Sun and Moon gravity.

Composes the force models, propagates for the requested duration, and
optionally stops at the first ascending-node crossing (z rising through 0).

Requires astroprop to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/propagate_leo.py [OPTIONS]

Examples:
    # One orbit with the full force model
    uv run examples/propagate_leo.py --duration 5800

    # Point-mass Earth only, larger step
    uv run examples/propagate_leo.py --no-third-body-sun --no-third-body-moon --timestep 30

    # Stop at the first ascending node
    uv run examples/propagate_leo.py --stop-at-node --inclination 51.6
"""

import math
import time
from typing import Annotated

import jax.numpy as jnp
import typer

from astroprop.constants import DEG2RAD, GM_EARTH, R_EARTH
from astroprop.dynamics import (
    CentralBodyGravity,
    PositionDerivative,
    ThirdBodyGravity,
    get_dynamical_equations,
)
from astroprop.environment import GravitationalModelType, earth, moon, sun
from astroprop.epoch import Epoch
from astroprop.event_conditions import Criteria, RealEventCondition
from astroprop.solvers import NumericalSolver, SolverConfig


def main(
    epoch: Annotated[str, typer.Option(help="Initial epoch (ISO 8601, UTC)")] = "2021-03-20T12:00:00Z",
    altitude: Annotated[float, typer.Option(help="Orbit altitude in km")] = 500.0,
    inclination: Annotated[float, typer.Option(help="Orbit inclination in degrees")] = 0.0,
    duration: Annotated[float, typer.Option(help="Propagation duration in seconds")] = 5800.0,
    timestep: Annotated[float, typer.Option(help="Integration timestep in seconds")] = 10.0,
    j2: Annotated[bool, typer.Option(help="Include Earth's J2 zonal term")] = False,
    third_body_sun: Annotated[bool, typer.Option(help="Enable Sun perturbation")] = True,
    third_body_moon: Annotated[bool, typer.Option(help="Enable Moon perturbation")] = True,
    stop_at_node: Annotated[bool, typer.Option(help="Stop at the first ascending node")] = False,
) -> None:
    epc = Epoch(epoch)

    model = GravitationalModelType.J2 if j2 else GravitationalModelType.SPHERICAL
    dynamics = [PositionDerivative(), CentralBodyGravity(earth(model))]
    if third_body_sun:
        dynamics.append(ThirdBodyGravity(sun()))
    if third_body_moon:
        dynamics.append(ThirdBodyGravity(moon()))

    print(f"── Force model at {epc} ──")
    for d in dynamics:
        print(f"  {d.name}")

    sma = R_EARTH + altitude * 1e3
    v = math.sqrt(GM_EARTH / sma)
    inc = inclination * DEG2RAD
    x0 = jnp.array([sma, 0.0, 0.0, 0.0, v * math.cos(inc), v * math.sin(inc)])

    system = get_dynamical_equations(dynamics, epc)
    solver = NumericalSolver(SolverConfig(step_size=timestep))

    t0 = time.perf_counter()
    if stop_at_node:
        node = RealEventCondition("Ascending Node", Criteria.POSITIVE_CROSSING, lambda x, t: x[2])
        solution = solver.integrate_time_with_condition(x0, 0.0, duration, system, node)
        if not solution.condition_is_satisfied:
            print(f"No ascending node within {duration:.0f} s")
        else:
            print(
                f"Ascending node at {epc + solution.time} "
                f"(t = {solution.time:.3f} s, {solution.iteration_count} bisection iterations)"
            )
        x = solution.state
    else:
        x = solver.integrate_duration(x0, duration, system)
    elapsed = time.perf_counter() - t0

    r = float(jnp.linalg.norm(x[0:3]))
    print(f"\n── Final state ({elapsed:.2f}s wall time) ──")
    print(f"  Position [m]:   {[f'{c:.3f}' for c in x[0:3].tolist()]}")
    print(f"  Velocity [m/s]: {[f'{c:.6f}' for c in x[3:6].tolist()]}")
    print(f"  Radius change:  {r - sma:.3f} m")


if __name__ == "__main__":
    typer.run(main)
