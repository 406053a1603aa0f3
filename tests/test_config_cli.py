"""
Configuration and command-line tests.
"""
import json

import pytest
from click.testing import CliRunner

from monty_hall.types import InvalidArgumentError
from monty_hall.config import (
    SimulationConfig,
    RUN_PRESETS,
    config_from_dict,
    get_preset,
    load_config_from_json,
    save_config_to_json,
)
from monty_hall.pipeline import run_simulation
from monty_hall.cli import main


class TestSimulationConfig:

    def test_defaults(self):
        config = SimulationConfig()
        assert config.n_trials == 100
        assert config.seed is None
        assert config.method == "loop"
        assert config.decimals == 2

    @pytest.mark.parametrize("kwargs", [
        {'n_trials': -5},
        {'n_trials': 1.5},
        {'n_workers': 0},
        {'method': 'magic'},
        {'confidence': 1.0},
        {'decimals': -1},
        {'decimals': '2'},
        {'decimals': True},
        {'decimals': 2.0},
        {'confidence': 'high'},
        {'confidence': True},
        {'seed': 'abc'},
        {'seed': -1},
        {'seed': 1.5},
        {'seed': False},
        {'method': 'vectorized', 'n_workers': 2},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(InvalidArgumentError):
            SimulationConfig(**kwargs)

    def test_json_round_trip(self, tmp_path):
        path = tmp_path / "run.json"
        config = SimulationConfig(n_trials=500, seed=3, method="vectorized")
        save_config_to_json(config, str(path))
        assert load_config_from_json(str(path)) == config

    def test_missing_keys_use_defaults(self):
        config = config_from_dict({'n_trials': 42})
        assert config.n_trials == 42
        assert config.n_workers == 1
        assert config.confidence == 0.95

    def test_rejects_unknown_version(self):
        with pytest.raises(InvalidArgumentError):
            config_from_dict({'version': '9.9'})

    def test_presets(self):
        for name in RUN_PRESETS:
            assert isinstance(get_preset(name), SimulationConfig)
        with pytest.raises(InvalidArgumentError):
            get_preset('nope')

    def test_preset_copy_is_independent(self):
        config = get_preset('quick')
        config.n_trials = 1
        assert RUN_PRESETS['quick'].n_trials == 100


class TestPipeline:

    def test_run_simulation(self):
        out = run_simulation(SimulationConfig(n_trials=300, seed=1))
        assert len(out['results']) == 300
        assert out['summary'].n_trials == 300
        assert set(out['diagnostics']['strategies']) == {'stay', 'switch'}
        assert out['metadata']['seed'] == 1


class TestCli:

    def test_prints_table(self):
        result = CliRunner().invoke(main, ['--n-trials', '200', '--seed', '4'])
        assert result.exit_code == 0, result.output
        assert "Proportions:" in result.output
        assert "stay" in result.output
        assert "switch" in result.output
        assert "DIAGNOSTICS" in result.output

    def test_no_diagnostics(self):
        result = CliRunner().invoke(main, ['-n', '50', '--seed', '4', '--no-diagnostics'])
        assert result.exit_code == 0, result.output
        assert "DIAGNOSTICS" not in result.output

    def test_negative_trials_rejected(self):
        result = CliRunner().invoke(main, ['-n', '-3'])
        assert result.exit_code != 0

    def test_json_output(self, tmp_path):
        out_path = tmp_path / "out.json"
        result = CliRunner().invoke(main, [
            '-n', '100', '--seed', '5', '--method', 'vectorized', '-o', str(out_path)
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(out_path.read_text())
        assert data['summary']['n_trials'] == 100
        assert data['metadata']['method'] == 'vectorized'

    def test_config_file(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({'n_trials': 30, 'seed': 2, 'n_workers': 2}))
        result = CliRunner().invoke(main, ['--config', str(path)])
        assert result.exit_code == 0, result.output
        assert "Games played: 30" in result.output

    def test_config_file_bad_value_is_usage_error(self, tmp_path):
        path = tmp_path / "run.json"
        path.write_text(json.dumps({'n_trials': 30, 'confidence': 'high'}))
        result = CliRunner().invoke(main, ['--config', str(path)])
        assert result.exit_code == 2
        assert "confidence" in result.output

    def test_workers_with_vectorized_is_usage_error(self):
        result = CliRunner().invoke(main, ['-n', '10', '--method', 'vectorized', '-w', '2'])
        assert result.exit_code == 2

    def test_empty_run_writes_strict_json(self, tmp_path):
        out_path = tmp_path / "out.json"
        result = CliRunner().invoke(main, ['-n', '0', '-o', str(out_path)])
        assert result.exit_code == 0, result.output

        def reject_constant(token):
            raise ValueError(f"non-standard JSON constant {token}")

        data = json.loads(out_path.read_text(), parse_constant=reject_constant)
        assert data['summary']['n_trials'] == 0
        assert data['summary']['proportions']['stay']['WIN'] is None
        assert data['diagnostics']['chi2'] is None
