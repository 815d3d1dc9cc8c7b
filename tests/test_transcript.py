import hashlib
import pathlib
import sys
import unittest


ROOT = pathlib.Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from hypercomplex import Modulus
from multicomp import MultiComp
from transcript import Blake2bTranscript


class TranscriptTests(unittest.TestCase):
    def test_init_matches_blake2b_padded_label(self):
        label = b"hyper"
        expected = hashlib.blake2b(label + b"\x00" * (32 - len(label)), digest_size=32).digest()
        t = Blake2bTranscript.new(label)
        self.assertEqual(t.state, expected)
        self.assertEqual(t.n_rounds, 0)

    def test_label_constraints(self):
        with self.assertRaises(ValueError):
            Blake2bTranscript.new(b"a" * 33)
        t = Blake2bTranscript.new(b"ok")
        with self.assertRaises(ValueError):
            t.raw_append_label_with_len(b"a" * 25, 0)

    def test_round_count_append_and_challenge(self):
        t = Blake2bTranscript.new(b"hyper")
        t.append_u64(b"lbl", 7)
        self.assertEqual(t.n_rounds, 2)
        t.append_bytes(b"b", b"\x01\x02\x03")
        self.assertEqual(t.n_rounds, 4)
        _ = t.challenge_bytes(16)
        self.assertEqual(t.n_rounds, 5)
        _ = t.challenge_bytes(33)
        self.assertEqual(t.n_rounds, 7)

    def test_append_multicomp_reduces_and_counts_rounds(self):
        m = Modulus(11)
        t1 = Blake2bTranscript.new(b"hyper")
        t2 = t1.copy()
        t1.append_multicomp(b"g", m, MultiComp([3, 4, 5, 6]))
        t2.append_multicomp(b"g", m, MultiComp([14, 15, 16, 17]))
        self.assertEqual(t1.n_rounds, 5)
        self.assertEqual(t1.state, t2.state)

    def test_read_is_challenge_bytes(self):
        base = Blake2bTranscript.new(b"hyper")
        a, b = base.copy(), base.copy()
        self.assertEqual(a.read(40), b.challenge_bytes(40))
        self.assertEqual(a.state_hex(), b.state_hex())

    def test_challenge_multicomp_draws_one_block_per_coordinate(self):
        m = Modulus(11)
        base = Blake2bTranscript.new(b"hyper")
        base.append_u64(b"n", 4)
        t = base.copy()
        expected = [t.challenge_bytes(1)[0] % 10 + 1 for _ in range(4)]
        got = base.challenge_multicomp(m, 4)
        self.assertEqual(got.to_ints(), expected)
        self.assertEqual(base.state, t.state)


if __name__ == "__main__":
    unittest.main()
