"""Arithmetic on hyper-complex numbers modulo a prime P.

Elements are `MultiComp` values of power-of-two length n. Multiplication
splits both operands into (real, imaginary) halves and recurses:

    (ar, ai) * (br, bi) = (ar*br - ai*bi, ar*bi + ai*br)

down to ordinary modular multiplication at n == 1. Every operation returns a
fresh, fully reduced element and leaves its arguments untouched.
"""

from dataclasses import dataclass  # immutable modulus context

from debug_log import dbg  # NDJSON debug sink
from field import byte_len, inv_mod, NotInvertibleError  # scalar primitives
from multicomp import InvalidLengthError, LengthMismatchError, MultiComp, is_pow2  # element container
from transcript import ShakeStream, StreamExhaustedError, UrandomStream, read_exact  # byte sources


@dataclass(frozen=True)
class Modulus:  # Operation set over (Z/pZ)-valued hyper-complex numbers.
    p: int  # prime modulus (primality is not checked)

    def __post_init__(self):
        if isinstance(self.p, bool) or not isinstance(self.p, int):
            raise TypeError("modulus must be an int")
        if self.p < 2:
            raise ValueError("modulus must be >= 2")

    # -- element factories -------------------------------------------------

    def zero(self, n):  # Additive identity of length n.
        if not is_pow2(n):
            raise InvalidLengthError(f"length must be a power of two, got {n}")
        return MultiComp._wrap([0] * n)

    def one(self, n):  # Multiplicative identity of length n.
        z = self.zero(n)
        z.coeffs[0] = 1 % self.p
        return z

    def element(self, coeffs):  # Build an element and reduce its coordinates.
        return self.reduce(MultiComp(coeffs))

    def reduce(self, a):  # Canonical copy with coordinates in [0, p).
        p = self.p
        return MultiComp._wrap([c % p for c in a.coeffs])

    # -- list-level kernels (lengths already checked) ----------------------

    def _add(self, a, b):
        p = self.p
        return [(x + y) % p for x, y in zip(a, b)]

    def _sub(self, a, b):
        p = self.p
        return [(x - y) % p for x, y in zip(a, b)]

    def _neg(self, a):
        p = self.p
        return [(-x) % p for x in a]

    def _mul(self, a, b):  # Recursive doubling product.
        h = len(a) // 2
        if h == 0:
            return [(a[0] * b[0]) % self.p]
        ar, ai = a[:h], a[h:]
        br, bi = b[:h], b[h:]
        cr = self._sub(self._mul(ar, br), self._mul(ai, bi))
        ci = self._add(self._mul(ar, bi), self._mul(ai, br))
        return cr + ci

    def _counterpart(self, a):  # (r, i) -> (r, -i); scalars unchanged.
        h = len(a) // 2
        if h == 0:
            return [a[0] % self.p]
        return [x % self.p for x in a[:h]] + self._neg(a[h:])

    def _inv(self, a):  # a^-1 = cp * (a * cp)^-1 with cp = counterpart(a); a is reduced.
        h = len(a) // 2
        if h == 0:
            return [inv_mod(a[0], self.p)]
        ar, ai = a[:h], a[h:]
        if not any(ai):
            return self._inv(ar) + ai
        cp = self._counterpart(a)
        prod = self._mul(a, cp)
        # imag(a * counterpart(a)) == 0, so only the real half needs inverting.
        prod = self._inv(prod[:h]) + prod[h:]
        return self._mul(prod, cp)

    # -- public operations -------------------------------------------------

    @staticmethod
    def _check_pair(a, b):
        if len(a) != len(b):
            raise LengthMismatchError(f"operand lengths differ: {len(a)} != {len(b)}")

    def add(self, a, b):  # Coordinate-wise (a + b) mod p.
        self._check_pair(a, b)
        return MultiComp._wrap(self._add(a.coeffs, b.coeffs))

    def sub(self, a, b):  # Coordinate-wise (a - b) mod p.
        self._check_pair(a, b)
        return MultiComp._wrap(self._sub(a.coeffs, b.coeffs))

    def neg(self, a):  # Coordinate-wise -a mod p.
        return MultiComp._wrap(self._neg(a.coeffs))

    def multiply(self, a, b):  # Doubling product (see module docstring).
        self._check_pair(a, b)
        return MultiComp._wrap(self._mul(a.coeffs, b.coeffs))

    def counterpart(self, a):  # Generalized conjugate: negate the imaginary half.
        return MultiComp._wrap(self._counterpart(a.coeffs))

    def inverse(self, a):  # Multiplicative inverse; NotInvertibleError if none is found.
        try:
            return MultiComp._wrap(self._inv([c % self.p for c in a.coeffs]))
        except NotInvertibleError as e:
            dbg("hypercomplex.inverse", "not invertible",
                {"n": len(a), "modulus_bits": self.p.bit_length(), "zero": not any(c % self.p for c in a.coeffs)})
            raise NotInvertibleError(f"element of length {len(a)} is not invertible: {e}") from e

    def is_invertible(self, a):  # Probe inverse() without raising.
        try:
            self.inverse(a)
        except NotInvertibleError:
            return False
        return True

    def divide(self, a, b):  # a * b^-1.
        self._check_pair(a, b)
        return self.multiply(a, self.inverse(b))

    def exp(self, g, exponent):  # g^e, e given as big-endian bytes; square-and-multiply MSB first.
        v = self.one(len(g)).coeffs
        gc = g.coeffs
        for k in bytes(exponent):
            for _ in range(8):
                v = self._mul(v, v)
                if k & 0x80:
                    v = self._mul(v, gc)
                k = (k << 1) & 0xFF
        return MultiComp._wrap(v)

    def pow(self, g, e):  # Integer exponent; negative e uses the inverse.
        e = int(e)
        if e < 0:
            return self.pow(self.inverse(g), -e)
        return self.exp(g, e.to_bytes(byte_len(e), "big"))

    # -- sampling ------------------------------------------------------------

    def deterministic(self, source, size):  # Sample coordinates uniformly from [1, p-1].
        """Draw an element of length `size` from a byte source.

        Each coordinate reads byte_len(p - 1) bytes, interprets them big-endian,
        reduces mod (p - 1) and adds 1, so zero is never produced. Meant for
        SHAKE-style XOF readers (reproducible parameters) but any object with
        `read(n)` works, including `transcript.UrandomStream`.
        """
        if not is_pow2(size):
            raise InvalidLengthError(f"size must be a power of two, got {size}")
        re = self.p - 1
        width = byte_len(re)
        out = []
        for i in range(size):
            try:
                buf = read_exact(source, width)
            except StreamExhaustedError:
                dbg("hypercomplex.deterministic", "stream exhausted", {"size": size, "coordinate": i, "width": width})
                raise
            out.append(int.from_bytes(buf, "big") % re + 1)
        dbg("hypercomplex.deterministic", "sampled", {"size": size, "bytes_read": size * width})
        return MultiComp._wrap(out)

    def derive(self, seed, size, label=b"", bits=256):  # Reproducible element from a seed via SHAKE.
        label_b = label.encode() if isinstance(label, str) else bytes(label)
        seed_b = seed.encode() if isinstance(seed, str) else bytes(seed)
        prefix = len(label_b).to_bytes(8, "big") + label_b
        return self.deterministic(ShakeStream(prefix + seed_b, bits=bits), size)

    def random(self, size):  # Fresh element from OS entropy.
        return self.deterministic(UrandomStream(), size)
