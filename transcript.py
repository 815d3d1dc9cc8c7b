import hashlib  # blake2b + SHAKE primitives
import os  # OS entropy

from field import byte_len, to_bytes  # fixed-width coordinate encoding
from multicomp import HypercomplexError  # shared error base

class StreamExhaustedError(HypercomplexError, EOFError):  # Byte source ran dry before n bytes.
    pass

def read_exact(source, n):  # Read exactly n bytes from `source.read` or raise.
    n = int(n)
    out = bytearray()
    while len(out) < n:
        chunk = source.read(n - len(out))
        if not chunk:
            raise StreamExhaustedError(f"needed {n} bytes, source supplied {len(out)}")
        out += chunk
    return bytes(out)

class UrandomStream:  # Non-deterministic byte source backed by os.urandom.
    def read(self, n):
        return os.urandom(int(n))

class ShakeStream:  # Sequential reader over SHAKE-128/256 extendable output.
    def __init__(self, seed, bits=256):  # Absorb seed once; output is squeezed lazily.
        if bits not in (128, 256):
            raise ValueError("bits must be 128 or 256")
        self._xof = hashlib.shake_128() if bits == 128 else hashlib.shake_256()
        self._xof.update(seed.encode() if isinstance(seed, str) else bytes(seed))
        self.bits = bits
        self.offset = 0

    def read(self, n):  # Next n bytes of XOF output.
        n = int(n)
        # hashlib has no incremental squeeze; re-derive the prefix and slice.
        out = self._xof.digest(self.offset + n)[self.offset :]
        self.offset += n
        return out

class Blake2bTranscript:  # Fiat-Shamir transcript; also usable as a byte source via read().
    def __init__(self, label):  # Initialize transcript state from domain label.
        label_b = label.encode() if isinstance(label, str) else bytes(label)
        if len(label_b) > 32:
            raise ValueError("label must be <= 32 bytes")
        label_padded = label_b + b"\x00" * (32 - len(label_b))
        self.state = hashlib.blake2b(label_padded, digest_size=32).digest()
        self.n_rounds = 0

    new = classmethod(lambda cls, label: cls(label))  # Constructor alias.

    def copy(self):  # Return a cheap clone for tests/debugging.
        t = object.__new__(type(self))
        t.state = self.state
        t.n_rounds = self.n_rounds
        return t

    def state_hex(self):  # Return current 32-byte state as lowercase hex.
        return self.state.hex()

    @staticmethod
    def _label_word(label_b):  # Encode label as 32-byte right-padded word.
        if len(label_b) > 32:
            raise ValueError("label must be <= 32 bytes")
        return label_b + b"\x00" * (32 - len(label_b))

    @staticmethod
    def _label_with_len_word(label_b, n):  # Encode 24-byte label + u64(be) length in 32 bytes.
        if len(label_b) > 24:
            raise ValueError("label must be <= 24 bytes for length-prefixed methods")
        return label_b + b"\x00" * (24 - len(label_b)) + int(n).to_bytes(8, "big")

    def _round_tag(self):  # Encode the 32-byte round tag (zero28 || be_u32(n_rounds)).
        return b"\x00" * 28 + int(self.n_rounds).to_bytes(4, "big")

    def _absorb(self, payload):  # Update state := H(state || round_tag || payload), increment round.
        h = hashlib.blake2b(digest_size=32)
        h.update(self.state)
        h.update(self._round_tag())
        h.update(payload)
        self.state = h.digest()
        self.n_rounds += 1

    def _challenge_block32(self):  # Draw 32 bytes: rand := H(state || round_tag), then state := rand.
        h = hashlib.blake2b(digest_size=32)
        h.update(self.state)
        h.update(self._round_tag())
        rand = h.digest()
        self.state = rand
        self.n_rounds += 1
        return rand

    def raw_append_label(self, label):  # Append fixed-size label word (one absorb).
        label_b = label.encode() if isinstance(label, str) else bytes(label)
        self._absorb(self._label_word(label_b))

    def raw_append_label_with_len(self, label, n):  # Append packed label+len prefix (one absorb).
        label_b = label.encode() if isinstance(label, str) else bytes(label)
        self._absorb(self._label_with_len_word(label_b, n))

    def append_bytes(self, label, data):  # Append labeled bytes with length prefix (two absorbs).
        data_b = bytes(data)
        self.raw_append_label_with_len(label, len(data_b))
        self._absorb(data_b)

    def append_u64(self, label, x):  # Append labeled u64 (two absorbs).
        self.raw_append_label(label)
        self._absorb(b"\x00" * 24 + int(x).to_bytes(8, "big"))

    def append_multicomp(self, label, modulus, m):  # Append labeled element (1 + N absorbs).
        width = max(1, byte_len(modulus.p))
        self.raw_append_label_with_len(label, len(m))
        for c in m:
            self._absorb(to_bytes(c % modulus.p, width))

    def challenge_bytes(self, n):  # Draw n bytes using ceil(n/32) blocks.
        n = int(n)
        out = bytearray(n)
        remaining = n
        start = 0
        while remaining > 32:
            out[start : start + 32] = self._challenge_block32()
            start += 32
            remaining -= 32
        full = self._challenge_block32()
        out[start : start + remaining] = full[:remaining]
        return bytes(out)

    read = challenge_bytes  # byte-source protocol for Modulus.deterministic

    def challenge_multicomp(self, modulus, size):  # Draw an element with nonzero coordinates.
        return modulus.deterministic(self, size)
