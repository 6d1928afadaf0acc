"""Trial job lists and chunk files for batch runs."""

from .job_generator import (
    TrialJob, parse_trial_job, read_job_lines, read_trial_jobs, write_job_list,
    generate_trial_jobs, create_chunk_files, chunk_job_list_file, list_chunk_files,
)

__all__ = [
    'TrialJob', 'parse_trial_job', 'read_job_lines', 'read_trial_jobs', 'write_job_list',
    'generate_trial_jobs', 'create_chunk_files', 'chunk_job_list_file', 'list_chunk_files',
]
