class HypercomplexError(Exception):  # Base class for every error raised by this library.
    pass

class InvalidLengthError(HypercomplexError, ValueError):  # Length is not a power of two.
    pass

class LengthMismatchError(HypercomplexError, ValueError):  # Binary operands have different lengths.
    pass

def is_pow2(n):  # True for 1, 2, 4, 8, ...
    n = int(n)
    return n > 0 and (n & (n - 1)) == 0

def log2_pow2(n):  # Compute log2(n) for n a power of two.
    if not is_pow2(n):
        raise InvalidLengthError(f"expected power-of-two length, got {n}")
    return int(n).bit_length() - 1

def _as_int(x):  # Accept ints and int-like values, reject floats/str.
    if isinstance(x, bool) or not hasattr(x, "__index__"):
        raise TypeError(f"expected integer coordinate, got {type(x).__name__}")
    return x.__index__()

class MultiComp:
    """Hyper-complex number with coordinates in Z/PZ.

    The coordinates form a list whose length is a power of two. A length-1
    element is an ordinary residue; otherwise the first half is the real part
    and the second half the imaginary part, each again a MultiComp.
    Coordinates are not reduced here; the algebra in `hypercomplex.Modulus`
    reduces every output.
    """

    __slots__ = ("coeffs",)
    __hash__ = None  # mutable storage

    def __init__(self, coeffs):  # Copy coordinates into a fresh list.
        coeffs = [_as_int(c) for c in coeffs]
        if not is_pow2(len(coeffs)):
            raise InvalidLengthError(f"length must be a power of two, got {len(coeffs)}")
        self.coeffs = coeffs

    @classmethod
    def _wrap(cls, coeffs):  # Adopt a list we already own (no validation).
        m = object.__new__(cls)
        m.coeffs = coeffs
        return m

    @classmethod
    def join(cls, real, imag):  # Concatenate real and imaginary halves.
        if len(real) != len(imag):
            raise LengthMismatchError(f"halves differ in length: {len(real)} != {len(imag)}")
        return cls._wrap(list(real.coeffs) + list(imag.coeffs))

    def length(self):
        return len(self.coeffs)

    def depth(self):  # Recursion depth log2(n).
        return len(self.coeffs).bit_length() - 1

    def bit_length(self):  # Sum of coordinate bit lengths (rough magnitude).
        return sum(c.bit_length() for c in self.coeffs)

    def debug_string(self):  # "[A,1F,0]" style hex dump for logs.
        return "[" + ",".join(f"{c:X}" for c in self.coeffs) + "]"

    def copy(self):  # Same values, independent storage.
        return self._wrap(list(self.coeffs))

    def _half(self):
        n = len(self.coeffs)
        if n == 1:
            raise InvalidLengthError("a scalar has no real/imaginary halves")
        return n // 2

    def real(self):  # First half.
        return self._wrap(self.coeffs[: self._half()])

    def imag(self):  # Second half.
        return self._wrap(self.coeffs[self._half() :])

    def is_zero(self):  # Every coordinate is literally 0 (no reduction).
        return not any(self.coeffs)

    def to_ints(self):
        return list(self.coeffs)

    def __len__(self):
        return len(self.coeffs)

    def __iter__(self):
        return iter(self.coeffs)

    def __getitem__(self, i):
        return self.coeffs[i]

    def __eq__(self, other):
        if isinstance(other, MultiComp):
            return self.coeffs == other.coeffs
        return NotImplemented

    def __str__(self):
        return self.debug_string()

    def __repr__(self):
        return f"MultiComp({self.coeffs!r})"
