# tests/test_storage.py

import json
import os
import tempfile
import unittest

from backend.leaderboard import LeaderboardRanker, ScoreEntry
from backend.storage import LeaderboardStore


class TestLeaderboardStore(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "scores.json")
        self.store = LeaderboardStore(self.path, key="scores")

    def tearDown(self):
        self.tmp.cleanup()

    def write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_missing_file_is_empty(self):
        self.assertEqual(self.store.load(), [])

    def test_missing_key_is_empty(self):
        self.write(json.dumps({"other": []}))
        self.assertEqual(self.store.load(), [])

    def test_save_then_load(self):
        entries = [ScoreEntry("ALICE", 50), ScoreEntry("BOB", 12)]
        self.store.save(entries)
        self.assertEqual(self.store.load(), entries)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"scores": [{"name": "ALICE", "tiles": 50}, {"name": "BOB", "tiles": 12}]})

    def test_save_keeps_other_keys(self):
        self.write(json.dumps({"other": [1, 2, 3]}))
        self.store.save([ScoreEntry("ZED", 1)])
        with open(self.path, encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data["other"], [1, 2, 3])
        self.assertEqual(data["scores"], [{"name": "ZED", "tiles": 1}])

    def test_malformed_json_is_empty(self):
        self.write("{not json")
        with self.assertLogs("backend.storage", level="WARNING"):
            self.assertEqual(self.store.load(), [])

    def test_malformed_records_are_empty(self):
        for payload in ({"scores": "oops"}, {"scores": [{"name": "A"}]},
                        {"scores": [{"name": 3, "tiles": 4}]}, {"scores": [{"name": "A", "tiles": "9"}]},
                        {"scores": 7}, ["not", "an", "object"]):
            self.write(json.dumps(payload))
            with self.assertLogs("backend.storage", level="WARNING"):
                self.assertEqual(self.store.load(), [], payload)

    def test_unnormalized_names_are_malformed(self):
        for name in ("alice", "ALICEX", " BOB", ""):
            self.write(json.dumps({"scores": [{"name": "ZED", "tiles": 60}, {"name": name, "tiles": 50}]}))
            with self.assertLogs("backend.storage", level="WARNING"):
                self.assertEqual(self.store.load(), [], name)

    def test_names_stay_unique_after_loading_bad_name(self):
        self.write(json.dumps({"scores": [{"name": "alice", "tiles": 50}]}))
        with self.assertLogs("backend.storage", level="WARNING"):
            ranker = LeaderboardRanker(store=self.store)
        accepted, entries = ranker.submit("alice", 40)
        self.assertTrue(accepted)
        self.assertEqual(entries, [ScoreEntry("ALICE", 40)])
        self.assertEqual(self.store.load(), [ScoreEntry("ALICE", 40)])

    def test_save_over_malformed_file(self):
        self.write("garbage")
        self.store.save([ScoreEntry("AMY", 3)])
        self.assertEqual(self.store.load(), [ScoreEntry("AMY", 3)])
        self.assertEqual(os.listdir(self.tmp.name), ["scores.json"])


if __name__ == "__main__":
    unittest.main()
