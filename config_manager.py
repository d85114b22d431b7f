"""JSON-backed settings for the min-conflicts benchmark suite.

``ConfigManager`` reads one JSON document and hands out its sections as plain
dictionaries. ``minconflicts.analysis.cli.apply_configuration`` copies those
values into ``minconflicts.analysis.settings`` before a benchmark starts.

Sections
--------
- solver_settings: ``max_points``, ``max_iter`` (0 means n^3/2) and ``seed``
  (base seed, or null for unseeded runs).
- experiment_settings: ``N_values``, ``runs_final`` and ``output_dir``.
- timeout_settings: ``solve_time_limit`` per run and ``experiment_timeout``
  for the whole bundle, in seconds (null disables either limit).
- profiles: constraint profile labels such as ``"attack+angle"``.

Missing sections come back empty; interpreting the values is left to callers.
"""
import json
from pathlib import Path

DEFAULT_PROFILES = ["attack"]


class ConfigManager:
    """Read and update a benchmark configuration file.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Location of the JSON document. It must exist when the manager is built.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Parse the JSON document at ``config_path`` and return it as a dict."""
        if not self.config_path.is_file():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Copy config.json from the repository root as a starting point"
            )
        with self.config_path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def save_config(self):
        """Write the in-memory configuration back to ``config_path``."""
        with self.config_path.open("w", encoding="utf-8") as f:
            json.dump(self.config, f, indent=2)
            f.write("\n")

    def section(self, name):
        return self.config.get(name) or {}

    def get_solver_settings(self):
        """Line capacity, iteration budget and base seed."""
        return self.section("solver_settings")

    def get_experiment_settings(self):
        """Board sizes, runs per (profile, N) and output directory."""
        return self.section("experiment_settings")

    def get_timeout_settings(self):
        return self.section("timeout_settings")

    def get_profiles(self):
        """Constraint profile labels, ``["attack"]`` when none are configured."""
        return list(self.config.get("profiles") or DEFAULT_PROFILES)

    def update_setting(self, section, key, value):
        """Set ``section.key`` to ``value`` and save the file right away."""
        self.config.setdefault(section, {})[key] = value
        self.save_config()
