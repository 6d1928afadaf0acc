"""
Trial job lists and chunk files.

Job List Format:
    Each line holds the parameters for one trial, tab separated:

        trial_id\tgrid_size\tseed

    The trial's random source is seeded with [seed, trial_id], the same stream
    ExperimentRunner uses in-process, so every trial in a job list is
    reproducible on its own, on any worker.

Workflow:
    1. Generate job list: percolation jobs create-list --grid-size 20 --trials 1000 ...
    2. Chunk job list:    percolation jobs chunk --job-list jobs.txt --chunk-size 100
    3. Run each chunk:    percolation run-trials --chunk-file chunk_0001_of_0010.txt ...
    4. Combine results:   percolation results combine --temp-dir results/ ...
"""

import math
from pathlib import Path
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple, Union
from datetime import datetime

import numpy as np

from ..percolation.experiment import draw_base_seed


class TrialJob(NamedTuple):
    """Parameters of a single trial."""
    trial_id: int
    grid_size: int
    seed: int

    def to_line(self) -> str:
        return f"{self.trial_id}\t{self.grid_size}\t{self.seed}"


def parse_trial_job(job: str) -> TrialJob:
    """
    Parse one job line.

    Raises:
        ValueError: If the line does not hold three integer fields, or the
            trial id or seed is negative
    """
    parts = job.split('\t')
    if len(parts) != 3:
        raise ValueError(f"Expected 3 tab-separated fields, got {len(parts)}: {job!r}")
    trial_id, grid_size, seed = (int(p) for p in parts)
    if trial_id < 0 or seed < 0:
        raise ValueError(f"Trial id and seed must be >= 0: {job!r}")
    return TrialJob(trial_id, grid_size, seed)


def read_job_lines(job_list_file: Union[str, Path]) -> List[str]:
    """Job lines of a file, without blank lines and '#' comments."""
    with open(job_list_file, 'r') as f:
        stripped = (line.strip() for line in f)
        return [line for line in stripped if line and not line.startswith('#')]


def read_trial_jobs(job_list_file: Union[str, Path]) -> List[TrialJob]:
    """
    Parse every trial in a job list file.

    Raises:
        ValueError: On the first malformed line, naming its file and position
    """
    jobs = []
    for lineno, line in enumerate(read_job_lines(job_list_file), start=1):
        try:
            jobs.append(parse_trial_job(line))
        except ValueError as e:
            raise ValueError(f"{job_list_file}: job {lineno}: {e}") from e
    return jobs


def write_job_list(jobs: Iterable[TrialJob], output_file: Union[str, Path]) -> Path:
    """
    Write trials to a job list file, one line each.

    Returns:
        Path to created file
    """
    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    n_jobs = 0
    with open(output_file, 'w') as f:
        for job in jobs:
            f.write(job.to_line() + '\n')
            n_jobs += 1

    print(f"Wrote {n_jobs} trial jobs to {output_file}")
    return output_file


def generate_trial_jobs(
    grid_sizes: Union[int, Sequence[int]],
    trials: int,
    seed: Optional[int] = None,
) -> List[TrialJob]:
    """
    Trials 0..trials-1 for each grid size, all sharing one base seed.

    Args:
        grid_sizes: Grid side length, or several of them
        trials: Number of trials per grid size
        seed: Non-negative base seed. If None, one is drawn so the job list
            itself is reproducible.

    Returns:
        List of TrialJob, ordered by grid size then trial id
    """
    if isinstance(grid_sizes, (int, np.integer)):
        grid_sizes = [grid_sizes]

    for n in grid_sizes:
        if n <= 0:
            raise ValueError(f"Grid size must be > 0, got {n}")
    if trials <= 0:
        raise ValueError(f"Number of trials must be > 0, got {trials}")
    if seed is not None and seed < 0:
        raise ValueError(f"Seed must be >= 0, got {seed}")

    if seed is None:
        seed = draw_base_seed()

    return [TrialJob(t, int(n), int(seed)) for n in grid_sizes for t in range(trials)]


def _describe_chunk(jobs: Sequence[TrialJob]) -> str:
    """'n=4 trials 0-2, n=6 trials 0-0' style summary of a chunk's contents."""
    parts = []
    for n in dict.fromkeys(job.grid_size for job in jobs):
        ids = [job.trial_id for job in jobs if job.grid_size == n]
        parts.append(f"n={n} trials {min(ids)}-{max(ids)}")
    return ', '.join(parts)


def create_chunk_files(
    jobs: Sequence[TrialJob],
    output_dir: Union[str, Path],
    chunk_size: int = 1000,
) -> Tuple[List[Path], Path]:
    """
    Split trials into chunk files of at most chunk_size trials.

    Chunk files are named chunk_0001_of_0004.txt and so on. A
    chunks_summary.txt next to them records which grid sizes and trial ids
    each chunk holds.

    Args:
        jobs: Trials to distribute
        output_dir: Directory to save chunk files
        chunk_size: Maximum trials per chunk

    Returns:
        Tuple of (list of chunk file paths, summary file path)
    """
    if chunk_size <= 0:
        raise ValueError(f"Chunk size must be > 0, got {chunk_size}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    num_chunks = math.ceil(len(jobs) / chunk_size)
    print(f"Splitting {len(jobs)} trials into {num_chunks} chunk(s) of up to {chunk_size}")

    chunk_files = []
    descriptions = []
    for k in range(num_chunks):
        chunk_jobs = jobs[k * chunk_size:(k + 1) * chunk_size]
        chunk_path = output_dir / f"chunk_{k + 1:04d}_of_{num_chunks:04d}.txt"
        with open(chunk_path, 'w') as f:
            f.writelines(job.to_line() + '\n' for job in chunk_jobs)

        chunk_files.append(chunk_path)
        descriptions.append(f"{chunk_path.name}: {len(chunk_jobs)} trials ({_describe_chunk(chunk_jobs)})")
        print(f"  {descriptions[-1]}")

    grid_sizes = sorted({job.grid_size for job in jobs})
    summary_path = output_dir / "chunks_summary.txt"
    with open(summary_path, 'w') as f:
        f.write(f"Total trials: {len(jobs)}\n")
        f.write(f"Grid sizes: {', '.join(str(n) for n in grid_sizes)}\n")
        f.write(f"Trials per chunk: {chunk_size}\n")
        f.write(f"Number of chunks: {num_chunks}\n")
        f.write(f"Created: {datetime.now().isoformat()}\n\n")
        f.writelines(line + '\n' for line in descriptions)

    return chunk_files, summary_path


def chunk_job_list_file(
    job_list_file: Union[str, Path],
    chunks_dir: Union[str, Path],
    chunk_size: int = 1000,
) -> Tuple[int, Path]:
    """
    Validate a job list file and split it into chunks.

    Returns:
        Tuple of (number of chunks, chunks directory path)
    """
    jobs = read_trial_jobs(job_list_file)
    if not jobs:
        print(f"No trial jobs in {job_list_file}")
        return 0, Path(chunks_dir)

    chunk_files, _ = create_chunk_files(jobs, chunks_dir, chunk_size)
    return len(chunk_files), Path(chunks_dir)


def list_chunk_files(chunks_dir: Union[str, Path]) -> List[Path]:
    """Sorted chunk files in a directory."""
    return sorted(Path(chunks_dir).glob("chunk_*_of_*.txt"))
