"""
Percolation result aggregation.

Combines the per-chunk trial CSVs written by the worker and reduces them to
threshold statistics per grid size.
"""

import glob
from pathlib import Path
from typing import Union

import pandas as pd

from .statistics import summarize
from .worker import RESULT_COLUMNS

SUMMARY_COLUMNS = ['grid_size', 'trials', 'mean', 'stddev', 'confidence_lo', 'confidence_hi']


def combine_chunk_results(
    temp_dir: Union[str, Path],
    output_file: Union[str, Path],
    cleanup: bool = False,
) -> pd.DataFrame:
    """
    Combine chunk_result_*.csv files into a single samples CSV.

    Args:
        temp_dir: Directory containing chunk_result_*.csv files
        output_file: Path for combined output CSV
        cleanup: If True, remove chunk files after combining

    Returns:
        Combined DataFrame sorted by grid_size and trial_id
    """
    temp_dir = Path(temp_dir)
    output_file = Path(output_file)

    pattern = str(temp_dir / "chunk_result_*.csv")
    temp_files = sorted(glob.glob(pattern))

    if not temp_files:
        print(f"No chunk result files found in {temp_dir}")
        return pd.DataFrame(columns=RESULT_COLUMNS)

    print(f"Found {len(temp_files)} chunk result files")

    dfs = []
    failed_files = []

    for temp_file in temp_files:
        try:
            df = pd.read_csv(temp_file)
        except (pd.errors.EmptyDataError, pd.errors.ParserError):
            failed_files.append(temp_file)
            continue

        missing = [col for col in RESULT_COLUMNS if col not in df.columns]
        if missing:
            failed_files.append(temp_file)
            continue

        dfs.append(df)

    if failed_files:
        print(f"Warning: Failed to load {len(failed_files)} files")
        for f in failed_files[:5]:
            print(f"  {f}")

    if not dfs:
        print("No valid data to combine")
        return pd.DataFrame(columns=RESULT_COLUMNS)

    combined_df = pd.concat(dfs, ignore_index=True)
    combined_df = combined_df.sort_values(['grid_size', 'trial_id']).reset_index(drop=True)

    output_file.parent.mkdir(parents=True, exist_ok=True)
    combined_df.to_csv(output_file, index=False)

    print(f"\n=== SUMMARY ===")
    print(f"Total trials: {len(combined_df)}")
    print(f"Grid sizes: {sorted(combined_df['grid_size'].unique().tolist())}")
    print(f"\nSaved to: {output_file}")

    if cleanup:
        for temp_file in temp_files:
            Path(temp_file).unlink(missing_ok=True)
        print(f"Cleaned up {len(temp_files)} temp files")

    return combined_df


def summarize_samples(samples_df: pd.DataFrame) -> pd.DataFrame:
    """
    Threshold statistics for each grid size in a samples table.

    Args:
        samples_df: DataFrame with at least 'grid_size' and 'threshold' columns

    Returns:
        DataFrame with one row per grid size (SUMMARY_COLUMNS)
    """
    rows = []
    for grid_size, group in samples_df.groupby('grid_size', sort=True):
        stats = summarize(group['threshold'].to_numpy())
        rows.append({
            'grid_size': int(grid_size),
            'trials': stats.trials,
            'mean': stats.mean,
            'stddev': stats.stddev,
            'confidence_lo': stats.confidence_lo,
            'confidence_hi': stats.confidence_hi,
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def summarize_samples_csv(
    samples_csv: Union[str, Path],
    output_file: Union[str, Path],
) -> pd.DataFrame:
    """
    Read a combined samples CSV, summarize per grid size and save.

    Args:
        samples_csv: CSV produced by combine_chunk_results
        output_file: Output CSV for the summary table

    Returns:
        Summary DataFrame
    """
    samples_df = pd.read_csv(samples_csv)
    summary_df = summarize_samples(samples_df)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    summary_df.to_csv(output_file, index=False)

    print(f"Summarized {len(samples_df)} trials over {len(summary_df)} grid size(s)")
    print(f"Saved to: {output_file}")

    return summary_df
