"""
CLI commands for continuous-time Markov chains
"""

import json
import click
import numpy as np
import pandas as pd

from ..diffusion import brownian_motion, geometric_brownian_motion, ornstein_uhlenbeck
from ..markov_engine import (
    ContinuousTimeMarkovChain,
    random_sample,
    stationary_series,
    trajectory_frame,
)
from ..utils.exceptions import MarkovChainError


def load_chain(path: str, labeled: bool) -> ContinuousTimeMarkovChain:
    """Read a generator from CSV; a labeled file has state names in its header and first column"""
    if labeled:
        frame = pd.read_csv(path, index_col=0)
        states = list(frame.columns)
    else:
        frame = pd.read_csv(path, header=None)
        states = None
    return ContinuousTimeMarkovChain(frame.to_numpy(dtype=np.float64), states)


def _emit(results: dict, frame: pd.DataFrame, output, output_format: str) -> None:
    if output:
        if output_format == "json":
            with open(output, 'w') as f:
                json.dump(results, f, indent=2)
        elif output_format == "csv":
            frame.to_csv(output, index=False)
        click.echo(f"Results saved to {output}")
    else:
        if output_format == "json":
            click.echo(json.dumps(results, indent=2))
        else:
            click.echo(frame.to_csv(index=False), nl=False)


def _solve(ctx, chain, step_size, max_iterations, tolerance) -> pd.Series:
    settings = ctx.obj["settings"]
    return stationary_series(
        chain,
        step_size=settings.step_size if step_size is None else step_size,
        max_iterations=settings.max_iterations if max_iterations is None else max_iterations,
        tolerance=settings.tolerance if tolerance is None else tolerance
    )


def _stationary_results(chain: ContinuousTimeMarkovChain, distribution: pd.Series):
    results = {
        "n_states": chain.n_states,
        "states": [str(s) for s in chain.states],
        "probabilities": [float(p) for p in distribution.to_numpy()]
    }
    frame = pd.DataFrame({
        "state": results["states"],
        "probability": results["probabilities"]
    })
    return results, frame


@click.command()
@click.argument("generator", type=click.Path(exists=True, dir_okay=False))
@click.option("--labeled", is_flag=True, help="CSV has state labels in header and first column")
@click.pass_context
def show(ctx, generator, labeled):
    """Display a Markov chain read from a generator CSV"""
    try:
        chain = load_chain(generator, labeled)
    except MarkovChainError as e:
        raise click.ClickException(str(e)) from e

    click.echo(chain.describe(ctx.obj["settings"].display_limit))


@click.command()
@click.argument("generator", type=click.Path(exists=True, dir_okay=False))
@click.option("--labeled", is_flag=True, help="CSV has state labels in header and first column")
@click.option("--step-size", type=float, default=None, help="Implicit step size")
@click.option("--max-iterations", type=int, default=None, help="Maximum number of iterations")
@click.option("--tolerance", type=float, default=None, help="Convergence tolerance")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--format", "output_format", default="json", type=click.Choice(["json", "csv"]))
@click.pass_context
def stationary(ctx, generator, labeled, step_size, max_iterations, tolerance, output, output_format):
    """Compute the stationary distribution of a generator CSV"""
    try:
        chain = load_chain(generator, labeled)
        distribution = _solve(ctx, chain, step_size, max_iterations, tolerance)
    except MarkovChainError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    results, frame = _stationary_results(chain, distribution)
    _emit(results, frame, output, output_format)


@click.command()
@click.argument("generator", type=click.Path(exists=True, dir_okay=False))
@click.option("--labeled", is_flag=True, help="CSV has state labels in header and first column")
@click.option("--start", "-s", type=int, default=None, help="Index of the initial state")
@click.option("--draws", "-n", type=int, default=None, help="Number of jumps")
@click.option("--seed", type=int, default=None, help="Random seed")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--format", "output_format", default="json", type=click.Choice(["json", "csv"]))
@click.pass_context
def sample(ctx, generator, labeled, start, draws, seed, output, output_format):
    """Sample a trajectory from a generator CSV"""
    settings = ctx.obj["settings"]
    start = settings.start_index if start is None else start
    draws = settings.num_draws if draws is None else draws
    seed = settings.random_seed if seed is None else seed

    try:
        chain = load_chain(generator, labeled)
        times, states = random_sample(chain, start=start, num_draws=draws, random_state=seed)
    except MarkovChainError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    frame = trajectory_frame(chain, times, states)
    frame["state"] = frame["state"].astype(str)
    results = {
        "parameters": {"start": start, "draws": draws, "seed": seed},
        # Infinite times are written as null
        "times": [float(t) if np.isfinite(t) else None for t in times],
        "states": [int(s) for s in states],
        "labels": frame["state"].tolist()
    }
    _emit(results, frame, output, output_format)


@click.command()
@click.option("--process", "-p", default="ornstein-uhlenbeck",
              type=click.Choice(["brownian", "ornstein-uhlenbeck", "geometric"]))
@click.option("--drift", "-d", default=0.0, help="Drift (brownian, geometric)")
@click.option("--volatility", "-v", default=1.0, help="Volatility")
@click.option("--kappa", default=1.0, help="Mean reversion speed (ornstein-uhlenbeck)")
@click.option("--theta", default=0.0, help="Long-run mean (ornstein-uhlenbeck)")
@click.option("--lower", default=-3.0, help="Lowest grid point")
@click.option("--upper", default=3.0, help="Highest grid point")
@click.option("--points", default=61, help="Number of grid points")
@click.option("--output", "-o", type=click.Path(), help="Output file path")
@click.option("--format", "output_format", default="json", type=click.Choice(["json", "csv"]))
@click.pass_context
def diffusion(ctx, process, drift, volatility, kappa, theta, lower, upper, points, output, output_format):
    """Stationary distribution of a diffusion approximated on a uniform grid"""
    try:
        if process == "brownian":
            dp = brownian_motion(drift=drift, volatility=volatility)
        elif process == "geometric":
            dp = geometric_brownian_motion(drift=drift, volatility=volatility)
        else:
            dp = ornstein_uhlenbeck(kappa=kappa, theta=theta, volatility=volatility)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    click.echo(f"Approximating {process} process on {points} grid points...", err=True)

    try:
        chain = ContinuousTimeMarkovChain.from_diffusion(dp, np.linspace(lower, upper, points))
        distribution = _solve(ctx, chain, None, None, None)
    except MarkovChainError as e:
        raise click.ClickException(str(e)) from e

    results, frame = _stationary_results(chain, distribution)
    results["process"] = process
    _emit(results, frame, output, output_format)
