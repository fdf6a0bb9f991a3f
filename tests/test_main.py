# tests/test_main.py

import pytest
from pathlib import Path
import sys

# Add src to path
sys.path.append(str(Path(__file__).parent.parent / 'src'))

from floatmap.config import Config
from floatmap.exceptions import UnknownFloatError
from floatmap.main import FloatMapSystem, main


class TestFloatMapSystem:
    """Test cases for the command-line system controller"""

    @pytest.fixture(autouse=True)
    def setup_system(self, tmp_path):
        cfg = Config(str(tmp_path / 'missing.yaml'))
        self.system = FloatMapSystem(cfg, dark_mode=False)
        assert self.system.initialize_system()

        yield

        self.system.shutdown()

    def test_initialization_starts_timer(self):
        status = self.system.get_status()
        assert status['running']
        assert status['timer_running']
        assert status['floats'] == 10

    def test_shutdown_stops_timer(self):
        self.system.shutdown()
        phase = self.system.controller.animation_phase
        assert not self.system.timer.is_running
        assert not self.system.is_running
        assert self.system.controller.animation_phase == phase

        # Second shutdown is a no-op
        self.system.shutdown()

    def test_commands(self, capsys):
        assert self.system.handle_command(['hover', 'ARG002'])
        assert self.system.handle_command(['select', 'ARG004'])
        status = self.system.get_status()
        assert status['hovered'] == 'ARG002'
        assert status['selected'] == 'ARG004'

        self.system.handle_command(['select', 'ARG004'])
        assert self.system.get_status()['selected'] is None

        self.system.handle_command(['select', 'ARG001'])
        self.system.handle_command(['dismiss'])
        self.system.handle_command(['leave'])
        status = self.system.get_status()
        assert status['selected'] is None
        assert status['hovered'] is None

        assert not self.system.handle_command(['exit'])

    def test_unknown_float_command(self):
        with pytest.raises(UnknownFloatError):
            self.system.handle_command(['select', 'ARG999'])

    def test_legend_and_frame_output(self):
        legend = self.system.format_legend()
        assert 'Active (8)' in legend
        assert 'Maintenance (1)' in legend
        assert 'Inactive (1)' in legend

        self.system.handle_command(['select', 'ARG009'])
        frame_text = self.system.format_frame()
        assert '8 ripples, 9 connectors' in frame_text
        assert 'Selected ARG009 (Arabian Sea)' in frame_text

    def test_export(self, tmp_path):
        output = self.system.export_figure(str(tmp_path / 'out' / 'map.html'))
        assert output.exists()
        assert 'plotly' in output.read_text(encoding='utf-8').lower()

    def test_requires_initialization(self):
        system = FloatMapSystem(Config(), dark_mode=False)
        with pytest.raises(RuntimeError):
            system.current_frame()

    def test_interactive_mode_survives_unwritable_export(self, tmp_path, monkeypatch, capsys):
        blocker = tmp_path / 'blocker'
        blocker.write_text('not a directory', encoding='utf-8')
        commands = iter([f"export {blocker / 'map.html'}", 'select ARG003', 'exit'])
        monkeypatch.setattr('builtins.input', lambda prompt='': next(commands))

        self.system.run_interactive_mode()

        output = capsys.readouterr().out
        assert 'Error:' in output
        assert self.system.controller.state.selected_id == 'ARG003'
        assert not self.system.is_running
        assert not self.system.timer.is_running

    def test_interactive_flag_removed(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(['--interactive'])
        assert excinfo.value.code == 2
        assert 'unrecognized arguments' in capsys.readouterr().err
