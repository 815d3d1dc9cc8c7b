import io
import json
import os
import pathlib
import sys
import tempfile
import unittest
from unittest import mock

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))
from debug_log import DEBUG_LOG_ENV, dbg
from field import NotInvertibleError
from hypercomplex import Modulus
from multicomp import MultiComp
from transcript import StreamExhaustedError


class DebugLogTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = pathlib.Path(self.tmp.name) / "debug.log"

    def tearDown(self):
        self.tmp.cleanup()

    def lines(self):
        return [json.loads(line) for line in self.path.read_text(encoding="utf-8").splitlines()]

    def test_disabled_without_env(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            dbg("here", "nothing", {"x": 1})
            Modulus(11).deterministic(io.BytesIO(b"\x00"), 1)
        self.assertFalse(self.path.exists())

    def test_ndjson_record(self):
        with mock.patch.dict(os.environ, {DEBUG_LOG_ENV: str(self.path)}):
            dbg("here", "msg", {"x": 1})
        (rec,) = self.lines()
        self.assertEqual(rec["location"], "here")
        self.assertEqual(rec["message"], "msg")
        self.assertEqual(rec["data"], {"x": 1})
        self.assertIsInstance(rec["timestamp"], int)

    def test_algebra_events(self):
        m = Modulus(11)
        with mock.patch.dict(os.environ, {DEBUG_LOG_ENV: str(self.path)}):
            m.deterministic(io.BytesIO(b"\x00\x01"), 2)
            with self.assertRaises(NotInvertibleError):
                m.inverse(MultiComp([0, 0]))
            with self.assertRaises(StreamExhaustedError):
                m.deterministic(io.BytesIO(b""), 1)
        recs = self.lines()
        self.assertEqual([r["message"] for r in recs], ["sampled", "not invertible", "stream exhausted"])
        self.assertEqual(recs[0]["data"], {"size": 2, "bytes_read": 2})
        self.assertEqual(recs[1]["location"], "hypercomplex.inverse")
        self.assertTrue(recs[1]["data"]["zero"])


if __name__ == "__main__":
    unittest.main()
