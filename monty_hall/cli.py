"""
Command-line interface for the Monty Hall simulator.
"""

import click
import math
import json
import logging

from .types import InvalidArgumentError
from .config import (
    SimulationConfig,
    RUN_PRESETS,
    RUN_METHODS,
    get_preset,
    load_config_from_json,
)
from .pipeline import run_simulation
from .diagnostics import format_diagnostics


@click.command()
@click.option(
    '--n-trials', '-n',
    type=int,
    default=None,
    help='Number of games to play (default: 100)'
)
@click.option(
    '--seed',
    type=int,
    default=None,
    help='Random seed for reproducibility'
)
@click.option(
    '--workers', '-w',
    type=int,
    default=None,
    help='Worker threads for the loop method (default: 1)'
)
@click.option(
    '--method',
    type=click.Choice(list(RUN_METHODS)),
    default=None,
    help='Run method: loop (one game at a time, default) or vectorized (numpy batch)'
)
@click.option(
    '--decimals',
    type=int,
    default=None,
    help='Decimal places in the proportions table (default: 2)'
)
@click.option(
    '--preset', '-p',
    type=click.Choice(list(RUN_PRESETS.keys())),
    help='Use a preset run configuration'
)
@click.option(
    '--config', '-c', 'config_file',
    type=click.Path(exists=True),
    help='Run configuration JSON file'
)
@click.option(
    '--output', '-o',
    type=click.Path(),
    help='Output file for results JSON'
)
@click.option(
    '--diagnostics/--no-diagnostics',
    default=True,
    help='Show confidence intervals and independence test'
)
@click.option(
    '--verbose/--quiet', '-v/-q',
    default=False,
    help='Verbose output'
)
def main(
    n_trials,
    seed,
    workers,
    method,
    decimals,
    preset,
    config_file,
    output,
    diagnostics,
    verbose
):
    """
    Simulate the Monty Hall game and compare staying with switching.
    """
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    # Load base configuration
    if config_file:
        try:
            base = load_config_from_json(config_file)
        except InvalidArgumentError as e:
            raise click.BadParameter(str(e), param_hint="'--config'")
    elif preset:
        base = get_preset(preset)
    else:
        base = SimulationConfig()

    # Command-line values override the file or preset
    try:
        config = SimulationConfig(
            n_trials=n_trials if n_trials is not None else base.n_trials,
            seed=seed if seed is not None else base.seed,
            n_workers=workers if workers is not None else base.n_workers,
            method=method if method is not None else base.method,
            decimals=decimals if decimals is not None else base.decimals,
            confidence=base.confidence,
        )
    except InvalidArgumentError as e:
        raise click.BadParameter(str(e))

    results = run_simulation(config, verbose=verbose)
    summary = results['summary']

    click.echo("\n" + "=" * 60)
    click.echo("RESULTS")
    click.echo("=" * 60)
    click.echo(f"Games played: {summary.n_trials}")
    click.echo("\nRaw counts:")
    click.echo(summary.counts.to_string())
    click.echo("\nProportions:")
    click.echo(summary.rounded(config.decimals).to_string())

    if diagnostics:
        click.echo("")
        click.echo(format_diagnostics(results['diagnostics']))

    if output:
        output_data = {
            'summary': summary.to_dict(),
            'diagnostics': results['diagnostics'],
            'metadata': results['metadata'],
        }
        with open(output, 'w') as f:
            json.dump(_json_safe(output_data), f, indent=2, allow_nan=False)
        click.echo(f"\nResults saved to {output}")


def _json_safe(value):
    """Replace NaN and infinities with None so the file is strict JSON."""
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


if __name__ == '__main__':
    main()
