"""
Unit Tests for the Demo Script
==============================

Runs the demo control loop for a handful of cycles and checks that every
claim it takes is given back.

Author: Robot HW Interfaces Team
License: MIT
"""

import importlib.util

import pytest

from src.transmission_interface import load_transmission_configs


@pytest.fixture(scope="module")
def demo(project_root_path):
    """Load scripts/demo.py as a module."""
    path = project_root_path / "scripts" / "demo.py"
    module_spec = importlib.util.spec_from_file_location("transmission_demo", path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


class TestDemo:
    """Tests for the demo control loop."""

    @pytest.mark.filterwarnings("error::ResourceWarning")
    def test_run_releases_claims(self, demo, project_root_path, capsys):
        """Test a short run refuses the second controller and leaks no claims."""
        configs = load_transmission_configs(project_root_path / "config" / "transmissions.yaml")

        demo.run_demo(configs, cycles=5, dt=0.01)

        output = capsys.readouterr().out
        assert "Second controller refused" in output
        assert "Reached" in output
