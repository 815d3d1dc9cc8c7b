from multicomp import HypercomplexError  # shared error base

BN254_FQ = 21888242871839275222246405745257275088696311157297823662689037894645226208583  # BN254 base field modulus
BN254_FR = 21888242871839275222246405745257275088548364400416034343698204186575808495617  # BN254 scalar field modulus
P25519 = 2**255 - 19  # Curve25519 field prime.
M127 = 2**127 - 1  # Mersenne prime.
SMALL = 11  # Small prime for hand-checked examples.

class NotInvertibleError(HypercomplexError, ZeroDivisionError):  # Raised when an inverse does not exist.
    pass

def reduce(x, p):  # Euclidean residue in [0, p).
    return x % p

def inv_mod(x, p):  # Modular inverse of a scalar residue.
    x %= p
    if x == 0:
        raise NotInvertibleError("cannot invert zero")
    try:
        return pow(x, -1, p)
    except ValueError:
        raise NotInvertibleError(f"{x} has no inverse modulo {p}") from None

def byte_len(x):  # Big-endian byte length of a non-negative int (0 -> 0).
    if x < 0:
        raise ValueError("byte_len expects a non-negative integer")
    return (x.bit_length() + 7) // 8

def to_bytes(x, n):  # Fixed-width big-endian encoding of a residue.
    return int(x).to_bytes(n, "big")
