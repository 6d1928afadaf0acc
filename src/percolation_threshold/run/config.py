"""
Run configuration.

The ExperimentConfig loads a YAML run definition: which grid sizes to
simulate, how many trials per size, the base seed, and where the job lists,
chunk results and summaries go.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional


class ExperimentConfig:
    """
    Loads and validates a run configuration YAML.

    Example:
        config = ExperimentConfig.from_yaml('config/square_grid.yaml')
        print(config.run_name)
        print(config.grid_sizes)
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data
        self._validate()

    @classmethod
    def from_yaml(cls, path: str) -> 'ExperimentConfig':
        """Load run config from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Run config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Run config must be a mapping: {path}")

        return cls(data)

    def _validate(self):
        """Validate required config sections and values."""
        required_sections = ['run_name', 'experiment', 'output']
        for section in required_sections:
            if section not in self._data:
                raise ValueError(f"Missing required config section: '{section}'")
        for section in ['experiment', 'output', 'steps']:
            value = self._data.get(section)
            if section == 'steps' and value is None:
                continue
            if not isinstance(value, dict):
                raise ValueError(f"Config section '{section}' must be a mapping, got {value!r}")

        if 'base_dir' not in self._data['output']:
            raise ValueError("Missing required config key: 'output.base_dir'")

        if not self.grid_sizes:
            raise ValueError("experiment.grid_sizes must list at least one grid size")
        for n in self.grid_sizes:
            if n <= 0:
                raise ValueError(f"Grid sizes must be > 0, got {n}")
        if self.trials <= 0:
            raise ValueError(f"experiment.trials must be > 0, got {self.trials}")
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"experiment.seed must be >= 0, got {self.seed}")
        if self.chunk_size <= 0:
            raise ValueError(f"steps.trials.chunk_size must be > 0, got {self.chunk_size}")

    # --- Properties ---

    @property
    def run_name(self) -> str:
        return self._data['run_name']

    @property
    def description(self) -> str:
        return self._data.get('description', '')

    # --- Experiment ---

    @property
    def grid_sizes(self) -> List[int]:
        """Grid side lengths; a single `grid_size` is accepted as well."""
        experiment = self._data['experiment']
        if 'grid_sizes' in experiment:
            return [int(n) for n in experiment['grid_sizes']]
        if 'grid_size' in experiment:
            return [int(experiment['grid_size'])]
        return []

    @property
    def trials(self) -> int:
        return int(self._data['experiment'].get('trials', 0))

    @property
    def seed(self) -> Optional[int]:
        seed = self._data['experiment'].get('seed')
        return None if seed is None else int(seed)

    # --- Output paths ---

    @property
    def base_dir(self) -> Path:
        return Path(self._data['output']['base_dir'])

    @property
    def jobs_dir(self) -> Path:
        return self.base_dir / self._data['output'].get('jobs_dir', 'jobs')

    @property
    def job_list_file(self) -> Path:
        return self.jobs_dir / 'jobs.txt'

    @property
    def chunks_dir(self) -> Path:
        return self.jobs_dir / 'chunks'

    @property
    def results_dir(self) -> Path:
        return self.base_dir / self._data['output'].get('results_dir', 'results')

    @property
    def samples_csv(self) -> Path:
        return self.base_dir / self._data['output'].get('samples_csv', 'samples.csv')

    @property
    def summary_csv(self) -> Path:
        return self.base_dir / self._data['output'].get('summary_csv', 'summary.csv')

    # --- Steps ---

    @property
    def chunk_size(self) -> int:
        steps = self._data.get('steps') or {}
        return int((steps.get('trials') or {}).get('chunk_size', 1000))
