from dataclasses import dataclass  # immutable curve descriptors

from field import F13, F13_4, F43, F43_6  # pedagogical base and embedding fields
from polynomials import prime_factors  # small-integer factorization

def largest_prime_factor(n):  # Largest prime dividing n (n >= 2).
    if n < 2:
        raise ValueError("expected n >= 2")
    return prime_factors(n)[-1]

def embedding_degree(r, q):  # Smallest k >= 1 with r | q^k - 1.
    if q % r == 0:
        raise ValueError(f"embedding degree undefined: {r} divides {q}")
    k, t = 1, q % r
    while t != 1:
        k, t = k + 1, (t * q) % r
    return k

def extended_order(q, order, n):  # #E(F_{q^n}) from #E(F_q) via s_i = t*s_{i-1} - q*s_{i-2}.
    t = q + 1 - order
    s0, s1 = 2, t
    for _ in range(n - 1):
        s0, s1 = s1, t * s1 - q * s0
    return q ** n + 1 - s1

@dataclass(frozen=True)
class EllipticCurve:  # Short Weierstrass curve y^2 = x^3 + a*x + b over `field`.
    field: type  # PrimeField or ExtensionField subclass
    a: object
    b: object
    order: int | None = None  # number of points over `field`, identity included
    r: int | None = None  # prime subgroup order (largest prime factor of the base curve order)
    k: int | None = None  # embedding degree of r with respect to q
    q: int | None = None  # base field size of the non-extended curve
    name: str = ""

    def __post_init__(self):  # Coerce coefficients and derive r, k, q where omitted.
        F = self.field
        a, b = F.coerce(self.a), F.coerce(self.b)
        object.__setattr__(self, "a", a)
        object.__setattr__(self, "b", b)
        if (a * a * a * 4 + b * b * 27).is_zero():
            raise ValueError(f"singular curve: y^2 = x^3 + {a}x + {b}")
        if self.q is None:
            object.__setattr__(self, "q", F.ORDER)
        if self.r is None and self.order is not None:
            object.__setattr__(self, "r", largest_prime_factor(self.order))
        if self.order is not None and self.r is not None and self.order % self.r:
            raise ValueError(f"r = {self.r} does not divide the curve order {self.order}")
        if self.k is None and self.r is not None:
            object.__setattr__(self, "k", embedding_degree(self.r, self.q))

    def is_on_curve(self, x, y):
        return y * y == x * x * x + self.a * x + self.b

    def point(self, x, y):  # Validated affine point.
        x, y = self.field.coerce(x), self.field.coerce(y)
        if not self.is_on_curve(x, y):
            raise ValueError(f"({x}, {y}) is not on {self}")
        return Point(self, x, y)

    def infinity(self):  # Group identity.
        return Point(self, None, None)

    def extend(self, ext_field):  # Same curve over an extension of `field`.
        n, size = 1, self.field.ORDER
        while size < ext_field.ORDER:
            n, size = n + 1, size * self.field.ORDER
        if size != ext_field.ORDER:
            raise ValueError(f"{ext_field.__name__} is not an extension of {self.field.__name__}")
        order = None if self.order is None else extended_order(self.field.ORDER, self.order, n)
        name = f"{self.name}/{ext_field.__name__}" if self.name else ""
        return EllipticCurve(ext_field, self.a, self.b, order=order, r=self.r, k=self.k, q=self.q, name=name)

    def points(self):  # All points of a prime-field curve, identity first.
        F = self.field
        if F.DEGREE != 1:
            raise TypeError("point enumeration needs a prime field")
        roots = {}
        for y in range(F.MODULUS):
            roots.setdefault((y * y) % F.MODULUS, []).append(y)
        out = [self.infinity()]
        for x in range(F.MODULUS):
            rhs = int(F(x) ** 3 + self.a * x + self.b)
            out.extend(Point(self, F(x), F(y)) for y in roots.get(rhs, ()))
        return out

    def __str__(self):
        eq = f"y^2 = x^3 + {self.a}x + {self.b} over {self.field.__name__}"
        return f"{self.name}: {eq}" if self.name else eq

class Point:  # Affine point; x = y = None is the point at infinity.
    __slots__ = ("curve", "x", "y")

    def __init__(self, curve, x, y):  # Trusted constructor; use EllipticCurve.point to validate.
        self.curve, self.x, self.y = curve, x, y

    def is_infinity(self): return self.x is None

    def _check(self, other):
        if not isinstance(other, Point):
            raise TypeError(f"expected Point, got {type(other).__name__}")
        if other.curve is not self.curve and other.curve != self.curve:
            raise ValueError("points lie on different curves")

    def __eq__(self, other):  # Infinity equals only infinity; otherwise coordinate-wise.
        if not isinstance(other, Point):
            return NotImplemented
        if self.is_infinity() or other.is_infinity():
            return self.is_infinity() and other.is_infinity()
        return self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash(None) if self.is_infinity() else hash((self.x, self.y))

    def __neg__(self):
        return self if self.is_infinity() else Point(self.curve, self.x, -self.y)

    def double(self):  # Tangent rule; vertical tangent (y = 0) gives infinity.
        if self.is_infinity() or self.y.is_zero():
            return self.curve.infinity()
        x, y = self.x, self.y
        m = (x * x * 3 + self.curve.a) / (y * 2)
        nx = m * m - x - x
        return Point(self.curve, nx, m * (x - nx) - y)

    def __add__(self, other):  # Chord rule.
        self._check(other)
        if self == other:
            return self.double()
        if self == -other:
            return self.curve.infinity()
        if self.is_infinity() or other.is_infinity():
            return other if self.is_infinity() else self
        x1, y1, x2, y2 = self.x, self.y, other.x, other.y
        m = (y2 - y1) / (x2 - x1)
        nx = m * m - x1 - x2
        return Point(self.curve, nx, m * (x1 - nx) - y1)

    def __sub__(self, other):
        return self + (-other)

    def __mul__(self, n):  # Double-and-add, most significant bit first.
        if not isinstance(n, int):
            return NotImplemented
        if n < 0:
            return (-self) * (-n)
        if n == 0 or self.is_infinity():
            return self.curve.infinity()
        out = self
        for bit in bin(n)[3:]:  # leading 1 is the starting value
            out = out.double()
            if bit == "1":
                out = out + self
        return out

    __rmul__ = __mul__

    def order(self):  # Smallest n >= 1 with n*P = infinity (linear search, small curves only).
        n, acc = 1, self
        while not acc.is_infinity():
            n, acc = n + 1, acc + self
        return n

    def lift(self, curve):  # Same point viewed on `curve` (usually an extension of this one).
        if self.is_infinity():
            return curve.infinity()
        return curve.point(self.x, self.y)

    def frobenius(self):  # (x^q, y^q) with q the base field size of the non-extended curve.
        if self.is_infinity():
            return self
        q = self.curve.q
        return Point(self.curve, self.x ** q, self.y ** q)

    def trace(self):  # Sum of the first k Frobenius images.
        out, p = self.curve.infinity(), self
        for _ in range(self.curve.k):
            out, p = out + p, p.frobenius()
        return out

    def __repr__(self):
        return "Point(inf)" if self.is_infinity() else f"Point({self.x}, {self.y})"

TINY_JUBJUB = EllipticCurve(F13, 8, 8, order=20, name="TinyJubJub")  # r = 5, k = 4
TINY_JUBJUB_EXT = TINY_JUBJUB.extend(F13_4)
TINY_JUBJUB_G1 = TINY_JUBJUB.point(8, 8)  # order-5 point fixed by Frobenius
TINY_JUBJUB_G2 = TINY_JUBJUB_EXT.point(F13_4([7, 0, 4]), F13_4([0, 10, 0, 5]))  # (4t^2 + 7, 5t^3 + 10t), trace zero

BLS6_6 = EllipticCurve(F43, 0, 6, order=39, name="BLS6_6")  # r = 13, k = 6
BLS6_6_EXT = BLS6_6.extend(F43_6)
BLS6_6_G1 = BLS6_6.point(13, 15)
BLS6_6_G2 = BLS6_6_EXT.point(F43_6([0, 0, 7]), F43_6([0, 0, 0, 16]))  # (7v^2, 16v^3)

PRESETS = {  # preset name -> (G1, G2)
    "tinyjubjub": (TINY_JUBJUB_G1, TINY_JUBJUB_G2),
    "bls6_6": (BLS6_6_G1, BLS6_6_G2),
}
