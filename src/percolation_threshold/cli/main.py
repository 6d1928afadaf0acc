"""
Command-line interface for percolation_threshold.

Batch Pattern:
    1. percolation jobs create-list --grid-size 200 --trials 1000 --seed 7 --output jobs.txt
    2. percolation jobs chunk --job-list jobs.txt --chunks-dir chunks/ --chunk-size 100
    3. percolation run-trials --chunk-file chunks/chunk_0001_of_0010.txt --output-dir results/
    4. percolation results combine --temp-dir results/ --output samples.csv
    5. percolation results summarize --input samples.csv --output summary.csv

Config-driven runs:
    percolation run prepare --config run.yaml
    percolation run status  --config run.yaml

Interactive Commands:
    percolation stats 200 100
    percolation grid show 3 --open 1,1 --open 2,1
"""

import click
from pathlib import Path


@click.group()
@click.version_option(package_name='percolation_threshold')
def cli():
    """Percolation Threshold - Monte Carlo estimation of the site percolation threshold."""
    pass


# ============================================================================
# Interactive Commands
# ============================================================================

@cli.command('stats')
@click.argument('n', type=int)
@click.argument('t', type=int)
@click.option('--seed', type=int, help='Random seed (default: fresh entropy)')
def stats(n, t, seed):
    """Run T trials on an N-by-N grid and print threshold statistics."""
    from ..percolation.experiment import run_experiments
    from ..percolation.statistics import summarize

    try:
        samples = run_experiments(n, t, seed=seed)
    except ValueError as e:
        raise click.BadParameter(str(e))

    click.echo(summarize(samples).format_report())


@cli.group()
def grid():
    """Grid inspection commands."""
    pass


def _parse_site(value: str):
    try:
        i, j = (int(p) for p in value.split(','))
    except ValueError:
        raise click.BadParameter(f"Expected 'row,col', got {value!r}")
    return i, j


@grid.command('show')
@click.argument('n', type=int)
@click.option('--open', '-o', 'sites', multiple=True,
              help="Site to open as 'row,col' (1-indexed, repeatable)")
def grid_show(n, sites):
    """Open the given sites on an N-by-N grid and print it (F=full, O=open, B=blocked)."""
    from ..percolation.grid import PercolationGrid

    try:
        g = PercolationGrid(n)
        for site in sites:
            g.open(*_parse_site(site))
    except (ValueError, IndexError) as e:
        raise click.ClickException(str(e))

    click.echo(g.render())
    click.echo(f"Open sites: {g.number_of_open_sites}")
    click.echo(f"Percolates: {g.percolates()}")


# ============================================================================
# Job Management Commands
# ============================================================================

@cli.group()
def jobs():
    """Job list and chunk management."""
    pass


@jobs.command('create-list')
@click.option('--grid-size', '-n', 'grid_sizes', required=True, type=int, multiple=True,
              help='Grid side length (repeatable)')
@click.option('--trials', '-t', required=True, type=int, help='Trials per grid size')
@click.option('--seed', type=int, help='Base seed (default: drawn once and written to the list)')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output job list file')
def jobs_create_list(grid_sizes, trials, seed, output):
    """Create a trial job list."""
    from ..jobs.job_generator import generate_trial_jobs, write_job_list

    try:
        job_list = generate_trial_jobs(list(grid_sizes), trials, seed=seed)
    except ValueError as e:
        raise click.BadParameter(str(e))

    write_job_list(job_list, output)
    click.echo(f"Created job list with {len(job_list)} jobs")
    click.echo(f"Chunk with: percolation jobs chunk --job-list {output} --chunks-dir <dir>")


@jobs.command('chunk')
@click.option('--job-list', '-j', required=True, type=click.Path(exists=True),
              help='Job list file')
@click.option('--chunks-dir', '-c', required=True, type=click.Path(),
              help='Output directory for chunk files')
@click.option('--chunk-size', '-s', default=1000, type=int,
              help='Jobs per chunk')
def jobs_chunk(job_list, chunks_dir, chunk_size):
    """Split a job list into chunk files."""
    from ..jobs.job_generator import chunk_job_list_file

    try:
        num_chunks, chunks_path = chunk_job_list_file(job_list, chunks_dir, chunk_size)
    except ValueError as e:
        raise click.BadParameter(str(e))

    click.echo(f"\nCreated {num_chunks} chunk(s) in {chunks_path}")
    click.echo(f"Run each with: percolation run-trials --chunk-file <chunk> --output-dir <dir>")


# ============================================================================
# Results Commands
# ============================================================================

@cli.group()
def results():
    """Result aggregation commands."""
    pass


@results.command('combine')
@click.option('--temp-dir', '-t', required=True, type=click.Path(exists=True),
              help='Directory containing chunk_result_*.csv files')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output CSV file')
@click.option('--cleanup', is_flag=True, help='Remove chunk result files after combining')
def results_combine(temp_dir, output, cleanup):
    """Combine chunk results into a single samples CSV."""
    from ..percolation.analysis import combine_chunk_results

    df = combine_chunk_results(temp_dir, output, cleanup)

    if len(df) > 0:
        click.echo(f"\nCombined {len(df)} trials")
    else:
        click.echo("No results to combine", err=True)


@results.command('summarize')
@click.option('--input', '-i', 'samples_csv', required=True, type=click.Path(exists=True),
              help='Samples CSV (from results combine)')
@click.option('--output', '-o', required=True, type=click.Path(),
              help='Output summary CSV')
def results_summarize(samples_csv, output):
    """Threshold statistics per grid size."""
    from ..percolation.analysis import summarize_samples_csv

    df = summarize_samples_csv(samples_csv, output)

    for row in df.itertuples(index=False):
        click.echo(f"\nn = {row.grid_size} ({row.trials} trials)")
        click.echo(f"  mean =                  {row.mean}")
        click.echo(f"  stddev =                {row.stddev}")
        click.echo(f"  95% confidence interval {row.confidence_lo}, {row.confidence_hi}")


# ============================================================================
# Run Commands (config-driven)
# ============================================================================

@cli.group()
def run():
    """Config-driven run management."""
    pass


@run.command('prepare')
@click.option('--config', '-c', 'config_path', required=True, type=click.Path(exists=True),
              help='Run config YAML file')
def run_prepare(config_path):
    """Generate the job list and chunks for a run."""
    from ..run import ExperimentConfig, RunOrchestrator

    try:
        config = ExperimentConfig.from_yaml(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    _, chunk_files = RunOrchestrator(config).prepare()
    click.echo(f"\nCreated {len(chunk_files)} chunk(s) in {config.chunks_dir}")
    click.echo(f"Results go to: {config.results_dir}")


@run.command('status')
@click.option('--config', '-c', 'config_path', required=True, type=click.Path(exists=True),
              help='Run config YAML file')
def run_status(config_path):
    """Check which chunks of a run have results."""
    from ..run import ExperimentConfig, RunOrchestrator

    try:
        config = ExperimentConfig.from_yaml(config_path)
    except ValueError as e:
        raise click.ClickException(str(e))

    RunOrchestrator(config).print_progress()


# ============================================================================
# Workers
# ============================================================================

@cli.command('run-trials')
@click.option('--chunk-file', '-f', required=True, type=click.Path(exists=True),
              help='Chunk file with trial jobs (trial_id\\tgrid_size\\tseed)')
@click.option('--output-dir', '-o', required=True, type=click.Path(),
              help='Directory for chunk_result_*.csv files')
def run_trials(chunk_file, output_dir):
    """Worker for running the percolation trials in a chunk file."""
    from ..percolation.worker import process_trial_chunk

    processed = process_trial_chunk(chunk_file, Path(output_dir))
    click.echo(f"Completed {processed} trial jobs")


if __name__ == '__main__':
    cli()
