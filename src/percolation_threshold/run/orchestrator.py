"""
Run orchestrator - generates the trial job list and chunks from an ExperimentConfig.

Usage:
    orchestrator = RunOrchestrator(config)
    orchestrator.prepare()            # Job list + chunk files
    orchestrator.pending_chunks()     # Chunks without a result CSV yet
"""

from pathlib import Path
from typing import List, Tuple

from .config import ExperimentConfig
from ..jobs.job_generator import (
    generate_trial_jobs, write_job_list, create_chunk_files, list_chunk_files,
)
from ..percolation.experiment import draw_base_seed
from ..percolation.worker import result_file_for_chunk


class RunOrchestrator:
    """
    Prepares and tracks a chunked percolation run.

    Example:
        config = ExperimentConfig.from_yaml('config/square_grid.yaml')
        orch = RunOrchestrator(config)
        orch.prepare()
    """

    def __init__(self, config: ExperimentConfig):
        self.config = config

    def prepare(self) -> Tuple[Path, List[Path]]:
        """
        Write the job list and split it into chunk files.

        Stale chunk files from an earlier prepare are removed first so the
        chunk set always matches the job list.

        Returns:
            Tuple of (job list path, chunk file paths)
        """
        config = self.config
        seed = config.seed
        if seed is None:
            seed = draw_base_seed()
            print(f"No seed configured, using {seed}")

        print(f"=== Preparing run: {config.run_name} ===")
        print(f"Grid sizes: {config.grid_sizes}")
        print(f"Trials per grid size: {config.trials}")

        jobs = generate_trial_jobs(config.grid_sizes, config.trials, seed=seed)
        job_list = write_job_list(jobs, config.job_list_file)

        for stale in list_chunk_files(config.chunks_dir):
            stale.unlink()

        chunk_files, _ = create_chunk_files(jobs, config.chunks_dir, config.chunk_size)
        return job_list, chunk_files

    def pending_chunks(self) -> List[Path]:
        """Chunk files whose result CSV does not exist yet."""
        return [
            chunk for chunk in list_chunk_files(self.config.chunks_dir)
            if not result_file_for_chunk(chunk, self.config.results_dir).exists()
        ]

    def print_progress(self) -> None:
        chunks = list_chunk_files(self.config.chunks_dir)
        pending = self.pending_chunks()
        done = len(chunks) - len(pending)

        print(f"=== {self.config.run_name} ===")
        if not chunks:
            print("No chunks prepared yet")
            return

        pct = 100.0 * done / len(chunks)
        print(f"Chunks completed: {done}/{len(chunks)} ({pct:.1f}%)")
        for chunk in pending[:5]:
            print(f"  pending: {chunk.name}")
        if len(pending) > 5:
            print(f"  ... and {len(pending) - 5} more")
