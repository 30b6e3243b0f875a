import os
import sys
import unittest
import yaml
sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import YamlConfig
from settings_schema import validate_settings
from localization import Translator


class YamlConfigTest(unittest.TestCase):
    def setUp(self) -> None:
        self.yaml_path = "test_config.yaml"
        if os.path.exists(self.yaml_path):
            os.remove(self.yaml_path)

    def tearDown(self) -> None:
        if os.path.exists(self.yaml_path):
            os.remove(self.yaml_path)

    def test_missing_file_uses_defaults(self) -> None:
        cfg = YamlConfig(self.yaml_path)
        self.assertEqual(cfg.load(), {})
        settings = cfg.settings()
        self.assertEqual(settings.storage_key, "gym-log-workouts-v1")
        self.assertEqual(settings.top_exercise_limit, 10)
        self.assertEqual(settings.default_reps, 10)
        self.assertEqual(settings.default_weight, 0.0)

    def test_save_and_load(self) -> None:
        cfg = YamlConfig(self.yaml_path)
        cfg.save({"top_exercise_limit": 5, "language": "es"})
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            self.assertEqual(yaml.safe_load(f)["top_exercise_limit"], 5)
        settings = cfg.settings()
        self.assertEqual(settings.top_exercise_limit, 5)
        self.assertEqual(settings.language, "es")

    def test_invalid_settings(self) -> None:
        with self.assertRaises(ValueError):
            validate_settings({"top_exercise_limit": 0})
        with self.assertRaises(ValueError):
            validate_settings({"default_weight": -1})


class TranslatorTest(unittest.TestCase):
    def test_gettext(self) -> None:
        tr = Translator()
        self.assertEqual(tr.gettext("History"), "History")
        tr.set_language("es")
        self.assertEqual(tr.gettext("History"), "Historial")
        self.assertEqual(tr.gettext("Unknown"), "Unknown")


if __name__ == "__main__":
    unittest.main()
