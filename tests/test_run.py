"""Tests for run configuration and orchestration."""

from pathlib import Path

import pytest
import yaml

from percolation_threshold.jobs.job_generator import read_trial_jobs
from percolation_threshold.percolation.worker import process_trial_chunk
from percolation_threshold.run import ExperimentConfig, RunOrchestrator


def _make_config_data(base_dir: Path, **experiment) -> dict:
    data = {
        "run_name": "test_run",
        "experiment": {"grid_sizes": [3, 4], "trials": 5, "seed": 17},
        "output": {"base_dir": str(base_dir)},
        "steps": {"trials": {"chunk_size": 4}},
    }
    data["experiment"].update(experiment)
    return data


class TestExperimentConfig:
    """Tests for ExperimentConfig."""

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text(yaml.safe_dump(_make_config_data(tmp_path / "out")))

        config = ExperimentConfig.from_yaml(str(path))

        assert config.run_name == "test_run"
        assert config.grid_sizes == [3, 4]
        assert config.trials == 5
        assert config.seed == 17
        assert config.chunk_size == 4
        assert config.description == ''

    def test_default_paths(self, tmp_path):
        config = ExperimentConfig(_make_config_data(tmp_path))

        assert config.jobs_dir == tmp_path / "jobs"
        assert config.job_list_file == tmp_path / "jobs" / "jobs.txt"
        assert config.chunks_dir == tmp_path / "jobs" / "chunks"
        assert config.results_dir == tmp_path / "results"
        assert config.samples_csv == tmp_path / "samples.csv"
        assert config.summary_csv == tmp_path / "summary.csv"

    def test_single_grid_size_and_defaults(self, tmp_path):
        data = {
            "run_name": "single",
            "experiment": {"grid_size": 10, "trials": 2},
            "output": {"base_dir": str(tmp_path)},
        }

        config = ExperimentConfig(data)

        assert config.grid_sizes == [10]
        assert config.seed is None
        assert config.chunk_size == 1000

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ExperimentConfig.from_yaml(str(tmp_path / "nope.yaml"))

    @pytest.mark.parametrize("section", ["run_name", "experiment", "output"])
    def test_missing_section(self, tmp_path, section):
        data = _make_config_data(tmp_path)
        del data[section]

        with pytest.raises(ValueError, match=section):
            ExperimentConfig(data)

    @pytest.mark.parametrize("override", [
        {"grid_sizes": []},
        {"grid_sizes": [5, 0]},
        {"trials": 0},
        {"seed": -1},
    ])
    def test_invalid_values(self, tmp_path, override):
        with pytest.raises(ValueError):
            ExperimentConfig(_make_config_data(tmp_path, **override))

    @pytest.mark.parametrize("section", ["experiment", "output"])
    def test_empty_section(self, tmp_path, section):
        data = _make_config_data(tmp_path)
        data[section] = None

        with pytest.raises(ValueError, match="must be a mapping"):
            ExperimentConfig(data)

    def test_section_not_a_mapping(self, tmp_path):
        data = _make_config_data(tmp_path)
        data["output"] = ["out"]

        with pytest.raises(ValueError, match="must be a mapping"):
            ExperimentConfig(data)

    def test_empty_steps(self, tmp_path):
        data = _make_config_data(tmp_path)
        data["steps"] = None

        assert ExperimentConfig(data).chunk_size == 1000

    def test_empty_section_in_yaml(self, tmp_path):
        path = tmp_path / "run.yaml"
        path.write_text("run_name: r\nexperiment:\noutput:\n  base_dir: out\n")

        with pytest.raises(ValueError, match="'experiment' must be a mapping"):
            ExperimentConfig.from_yaml(str(path))


class TestRunOrchestrator:
    """Tests for RunOrchestrator."""

    def test_prepare(self, tmp_path):
        config = ExperimentConfig(_make_config_data(tmp_path))

        job_list, chunk_files = RunOrchestrator(config).prepare()

        jobs = read_trial_jobs(job_list)
        assert len(jobs) == 10
        assert {j.seed for j in jobs} == {17}
        assert len(chunk_files) == 3

    def test_prepare_replaces_stale_chunks(self, tmp_path):
        config = ExperimentConfig(_make_config_data(tmp_path))
        config.chunks_dir.mkdir(parents=True)
        (config.chunks_dir / "chunk_0009_of_0009.txt").write_text("0\t3\t1\n")

        _, chunk_files = RunOrchestrator(config).prepare()

        assert sorted(config.chunks_dir.glob("chunk_*_of_*.txt")) == sorted(chunk_files)

    def test_prepare_without_seed(self, tmp_path):
        data = _make_config_data(tmp_path)
        del data["experiment"]["seed"]
        config = ExperimentConfig(data)

        job_list, _ = RunOrchestrator(config).prepare()

        seeds = {j.seed for j in read_trial_jobs(job_list)}
        assert len(seeds) == 1

    def test_pending_chunks(self, tmp_path, capsys):
        config = ExperimentConfig(_make_config_data(tmp_path))
        orch = RunOrchestrator(config)
        _, chunk_files = orch.prepare()

        assert orch.pending_chunks() == chunk_files

        process_trial_chunk(chunk_files[0], config.results_dir)

        assert orch.pending_chunks() == chunk_files[1:]

        orch.print_progress()
        out = capsys.readouterr().out
        assert "Chunks completed: 1/3" in out
        assert chunk_files[1].name in out
