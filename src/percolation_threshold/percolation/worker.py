"""
Percolation worker for processing trial chunk files.

This worker runs every trial listed in a chunk file and saves one CSV row per
trial.
"""

import sys
from pathlib import Path
from typing import Union

import pandas as pd

from .experiment import ExperimentRunner
from ..jobs.job_generator import read_job_lines, parse_trial_job

RESULT_COLUMNS = ['trial_id', 'grid_size', 'seed', 'opened_sites', 'threshold']


def result_file_for_chunk(chunk_file: Union[str, Path], output_dir: Union[str, Path]) -> Path:
    """chunk_0001_of_0004.txt -> <output_dir>/chunk_result_0001_of_0004.csv"""
    stem = Path(chunk_file).stem
    suffix = stem[len('chunk_'):] if stem.startswith('chunk_') else stem
    return Path(output_dir) / f"chunk_result_{suffix}.csv"


def process_trial_chunk(
    chunk_file: Union[str, Path],
    output_dir: Union[str, Path],
) -> int:
    """
    Run the trials listed in a chunk file.

    This worker:
    1. Reads trial job lines (trial_id, grid_size, seed) from the chunk
    2. Runs one percolation trial per line, seeded with [seed, trial_id]
    3. Writes chunk_result_<chunk>.csv with one row per trial

    Malformed job lines are skipped with a message on stderr.

    Args:
        chunk_file: Path to chunk file containing trial job lines
        output_dir: Output directory for chunk result CSVs

    Returns:
        Number of trials processed
    """
    chunk_file = Path(chunk_file)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    jobs = read_job_lines(chunk_file)
    print(f"Processing {len(jobs)} trial jobs from chunk")

    rows = []
    for job in jobs:
        try:
            trial = parse_trial_job(job)
            runner = ExperimentRunner(trial.grid_size, seed=trial.seed)
        except ValueError as e:
            print(f"  Skipping malformed job: {job} ({e})", file=sys.stderr)
            continue

        opened_sites = runner.open_until_percolation(trial.trial_id)
        rows.append({
            'trial_id': trial.trial_id,
            'grid_size': trial.grid_size,
            'seed': trial.seed,
            'opened_sites': opened_sites,
            'threshold': opened_sites / (trial.grid_size * trial.grid_size),
        })

    output_file = result_file_for_chunk(chunk_file, output_dir)
    pd.DataFrame(rows, columns=RESULT_COLUMNS).to_csv(output_file, index=False)

    print(f"✓ Processed {len(rows)}/{len(jobs)} trials -> {output_file}")
    return len(rows)
