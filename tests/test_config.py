import os
import unittest
from unittest import mock

from potstirrers.config import AIConfig, Config, RulesConfig, env_flag


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        cfg = Config()
        self.assertEqual(cfg.TRACK_LENGTH, 60)
        self.assertEqual(cfg.LAST_SAFETY, 5)
        self.assertEqual(cfg.TRACK_ENTRY, [2, 17, 32, 47])
        self.assertEqual(cfg.HOME_ENTRY, [0, 15, 30, 45])
        self.assertEqual(len(cfg.BASE_DECK), 16)
        self.assertEqual(len(cfg.SLIDES), 8)

    def test_rejects_bad_topology(self):
        with self.assertRaises(ValueError):
            Config(TRACK_ENTRY=[1, 2, 3])
        with self.assertRaises(ValueError):
            Config(HOME_ENTRY=[0, 15, 30, 99])
        with self.assertRaises(ValueError):
            Config(SLIDES=[(7, 5, 0)])

    def test_rules_validation(self):
        self.assertEqual(RulesConfig(win_rule="final_cell").win_rule, "final_cell")
        with self.assertRaises(ValueError):
            RulesConfig(win_rule="first_pawn")
        with self.assertRaises(ValueError):
            RulesConfig(frame_delay_ms=-1)

    def test_env_flag(self):
        cases = [("1", True), ("true", True), ("True", True), ("0", False), ("false", False)]
        for raw, expected in cases:
            with mock.patch.dict(os.environ, {"CAPTURE_OWN_COLOR": raw}):
                self.assertIs(env_flag("CAPTURE_OWN_COLOR", True), expected)
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertTrue(env_flag("CAPTURE_OWN_COLOR", True))
            self.assertFalse(env_flag("CAPTURE_OWN_COLOR", False))

    def test_ai_weights(self):
        weights = AIConfig()
        self.assertEqual(weights.capture_bonus, 120.0)
        self.assertEqual(weights.own_landing_penalty, 1000.0)
        self.assertEqual(weights.exit_start_bonus, 100.0)


if __name__ == "__main__":
    unittest.main()
