from __future__ import annotations

import json
import os
import tempfile
import unittest

from hanoi_towers.config import (
    DEFAULT_CONFIG,
    load_config,
    merge_dicts,
    resolve_config,
)
from hanoi_towers.errors import ConfigurationError


class TestConfig(unittest.TestCase):
    def test_load_config_expands_env_vars(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            os.environ["HT_TEST_SEED"] = "42"
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"seed": "$HT_TEST_SEED", "n_disks": 4}, f)
            loaded = load_config(path)
            self.assertEqual(loaded, {"seed": "42", "n_disks": 4})
            self.assertEqual(resolve_config(loaded)["seed"], 42)

    def test_load_config_rejects_non_objects(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([1, 2], f)
            with self.assertRaises(ConfigurationError):
                load_config(path)

    def test_merge_dicts_nested(self) -> None:
        base = {"a": 1, "nested": {"x": 1, "y": 2}}
        override = {"nested": {"y": 3, "z": 4}}
        merged = merge_dicts(base, override)
        self.assertEqual(merged, {"a": 1, "nested": {"x": 1, "y": 3, "z": 4}})

    def test_resolve_config_defaults(self) -> None:
        self.assertEqual(resolve_config(), DEFAULT_CONFIG)
        self.assertEqual(resolve_config({})["shuffle_factor"], 200)

    def test_resolve_config_coerces_strings(self) -> None:
        config = resolve_config({"arbitrary": "true", "max_steps": "500"})
        self.assertIs(config["arbitrary"], True)
        self.assertEqual(config["max_steps"], 500)

    def test_resolve_config_rejects_bad_values(self) -> None:
        for bad in (
            {"n_disks": 0},
            {"n_disks": True},
            {"max_steps": 0},
            {"strategy": "astar"},
            {"arbitrary": "maybe"},
            {"colour": "red"},
        ):
            with self.subTest(bad=bad):
                with self.assertRaises(ConfigurationError):
                    resolve_config(bad)


if __name__ == "__main__":
    unittest.main()
