from polynomials import Polynomial, is_irreducible  # coefficient polynomials for extension elements

_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)  # deterministic below 3.3e24

def is_prime(n):  # Miller-Rabin primality test.
    if n < 2:
        return False
    for p in _MR_BASES:
        if n % p == 0:
            return n == p
    d, s = n - 1, 0
    while d % 2 == 0:
        d, s = d // 2, s + 1
    for a in _MR_BASES:
        x = pow(a, d, n)
        if x in (1, n - 1):
            continue
        for _ in range(s - 1):
            x = x * x % n
            if x == n - 1:
                break
        else:
            return False
    return True

def _pow(x, e, one):  # Square-and-multiply over the bits of e, most significant first.
    if e < 0:
        return _pow(x.inv(), -e, one)
    if e == 0:
        return one
    out = x
    for bit in bin(e)[3:]:  # leading 1 is the starting value
        out = out * out
        if bit == "1":
            out = out * x
    return out

class PrimeField:  # Element of Z/pZ for a prime MODULUS.
    MODULUS = None

    def __init_subclass__(cls):  # Validate the modulus and record field constants per subclass.
        if "MODULUS" not in cls.__dict__:
            return
        p = cls.MODULUS
        if not isinstance(p, int) or not is_prime(p):
            raise ValueError(f"MODULUS must be a prime integer, got {p!r}")
        cls.PRIME, cls.ORDER, cls.DEGREE = p, p, 1

    def __init__(self, x=0):  # Reduce an int (or copy a same-field element) into [0, MODULUS).
        if isinstance(x, type(self)):
            x = x.v
        elif not isinstance(x, int):
            raise TypeError(f"expected {type(self).__name__} or int, got {type(x).__name__}")
        self.v = x % type(self).MODULUS

    zero = classmethod(lambda cls: cls(0))  # Additive identity.

    one = classmethod(lambda cls: cls(1))  # Multiplicative identity.

    @classmethod
    def _c(cls, x):  # Coerce int/same-type operand, None if unsupported.
        if isinstance(x, cls):
            return x
        if isinstance(x, int):
            return cls(x)
        return None

    @classmethod
    def coerce(cls, x):  # Coerce or raise TypeError.
        out = cls._c(x)
        if out is None:
            raise TypeError(f"expected {cls.__name__} or int, got {type(x).__name__}")
        return out

    def to_int(self): return self.v  # Canonical integer in [0, MODULUS).

    def __int__(self): return self.v

    def bits(self):  # Binary digits of the canonical integer, most significant first.
        return [int(b) for b in bin(self.v)[2:]]

    def is_zero(self): return self.v == 0

    def inv(self):  # Multiplicative inverse via the extended Euclidean algorithm.
        if self.v == 0:
            raise ZeroDivisionError(f"cannot invert zero in {type(self).__name__}")
        r0, r1, t0, t1 = type(self).MODULUS, self.v, 0, 1
        while r1:
            q = r0 // r1
            r0, r1 = r1, r0 - q * r1
            t0, t1 = t1, t0 - q * t1
        return type(self)(t0)

    def __add__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else type(self)(self.v + o.v)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else type(self)(self.v - o.v)

    def __rsub__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else type(self)(o.v - self.v)

    def __mul__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else type(self)(self.v * o.v)

    __rmul__ = __mul__

    def __truediv__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else self * o.inv()

    def __rtruediv__(self, other):
        o = self._c(other)
        return NotImplemented if o is None else o * self.inv()

    def __neg__(self):
        return type(self)(-self.v)

    def __pow__(self, e):
        return _pow(self, int(e), type(self).one())

    def __eq__(self, other):  # Equality with same-field elements or ints (compared mod p).
        if isinstance(other, type(self)):
            return self.v == other.v
        return self.v == other % type(self).MODULUS if isinstance(other, int) else NotImplemented

    def __hash__(self):  # Same as the canonical int, which compares equal.
        return hash(self.v)

    def __str__(self): return str(self.v)

    def __repr__(self): return f"{type(self).__name__}({self.v})"

class ExtensionField:  # Element of BASE[x] / (MODULUS), stored as a reduced Polynomial over BASE.
    BASE, MODULUS = None, ()  # MODULUS: monic coefficients, lowest degree first, leading 1 included
    CHECK_IRREDUCIBLE = True

    def __init_subclass__(cls):  # Validate the modulus polynomial and record tower constants.
        if "MODULUS" not in cls.__dict__:
            return
        base = cls.BASE
        m = Polynomial(cls.MODULUS, base)
        if m.degree() < 1:
            raise ValueError(f"{cls.__name__}: modulus must have degree >= 1")
        if m.leading() != 1:
            raise ValueError(f"{cls.__name__}: modulus must be monic")
        if cls.CHECK_IRREDUCIBLE and not is_irreducible(m, base.ORDER):
            raise ValueError(f"{cls.__name__}: {m} is reducible over {base.__name__}")
        cls.MOD = m
        cls.DEGREE = m.degree()
        cls.PRIME = base.PRIME
        cls.ORDER = base.ORDER ** cls.DEGREE

    def __init__(self, coeffs=()):  # Build from a Polynomial or coefficient list, reducing mod MOD.
        cls = type(self)
        p = coeffs if isinstance(coeffs, Polynomial) else Polynomial(coeffs, cls.BASE)
        if p.field is not cls.BASE:
            raise TypeError(f"expected polynomial over {cls.BASE.__name__}")
        self.poly = p if p.degree() < cls.DEGREE else p.div_mod(cls.MOD)[1]

    zero = classmethod(lambda cls: cls([]))  # Additive identity.

    one = classmethod(lambda cls: cls([cls.BASE.one()]))  # Multiplicative identity.

    @classmethod
    def _c(cls, x):  # Coerce same-type, polynomial, or anything lower in the tower.
        if isinstance(x, cls):
            return x
        if isinstance(x, Polynomial) and x.field is cls.BASE:
            return cls(x)
        b = cls.BASE._c(x)
        return None if b is None else cls([b])

    @classmethod
    def coerce(cls, x):
        out = cls._c(x)
        if out is None:
            raise TypeError(f"cannot embed {type(x).__name__} into {cls.__name__}")
        return out

    embed = coerce  # base-field element -> constant polynomial

    def to_base(self):  # Inverse of embed: only defined for constant elements.
        if self.poly.degree() != 0:
            raise ValueError(f"{self!r} does not lie in {type(self).BASE.__name__}")
        return self.poly.coeffs[0]

    def coefficients(self):  # DEGREE base-field coefficients, lowest degree first.
        cs = list(self.poly.coeffs)
        return cs + [type(self).BASE.zero()] * (type(self).DEGREE - len(cs))

    def is_zero(self): return self.poly.is_zero()

    def __add__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else type(self)(self.poly + o.poly)

    __radd__ = __add__

    def __sub__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else type(self)(self.poly - o.poly)

    def __rsub__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else type(self)(o.poly - self.poly)

    def __neg__(self):
        return type(self)(-self.poly)

    def __mul__(self, o):  # Polynomial product reduced mod MOD.
        o = self._c(o)
        return NotImplemented if o is None else type(self)(self.poly * o.poly)

    __rmul__ = __mul__

    def inv(self):  # Extended Euclid on polynomials, normalized by the final remainder's constant.
        if self.is_zero():
            raise ZeroDivisionError(f"cannot invert zero in {type(self).__name__}")
        cls = type(self)
        r0, r1 = cls.MOD, self.poly
        t0, t1 = Polynomial.zero(cls.BASE), Polynomial.one(cls.BASE)
        while not r1.is_zero():
            q, r = r0.div_mod(r1)
            r0, r1 = r1, r
            t0, t1 = t1, t0 - q * t1
        if r0.degree() != 0:  # only reachable when MOD is reducible
            raise ZeroDivisionError(f"{self!r} shares the factor {r0.monic()} with the modulus")
        return cls(t0.scale(r0.leading().inv()))

    def __truediv__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else self * o.inv()

    def __rtruediv__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else o * self.inv()

    def __pow__(self, e):
        return _pow(self, int(e), type(self).one())

    def __eq__(self, o):  # Equality of reduced representations.
        o = self._c(o)
        return NotImplemented if o is None else self.poly == o.poly

    def __hash__(self):  # Constants hash like their base-field value (and so like the int), matching __eq__.
        cs = self.poly.coeffs
        return hash(cs[0]) if len(cs) == 1 else hash((type(self).__name__, cs))

    def __str__(self): return str(self.poly)

    def __repr__(self): return f"{type(self).__name__}({self.poly})"

def prime_field(modulus, name=None):  # Field descriptor for Z/pZ built at run time.
    return type(name or f"F{modulus}", (PrimeField,), {"MODULUS": modulus})

def extension_field(base, modulus, name=None, check_irreducible=True):  # Field descriptor for base[x]/(modulus).
    coeffs = modulus.coeffs if isinstance(modulus, Polynomial) else modulus
    attrs = {"BASE": base, "MODULUS": tuple(coeffs), "CHECK_IRREDUCIBLE": check_irreducible}
    return type(name or f"{base.__name__}_{len(coeffs) - 1}", (ExtensionField,), attrs)

class F13(PrimeField):  # TinyJubJub base field.
    MODULUS = 13

class F13_2(ExtensionField):  # F13[x] / (x^2 + 2).
    BASE, MODULUS = F13, (2, 0, 1)

class F13_4(ExtensionField):  # F13[t] / (t^4 + 2), TinyJubJub embedding field (k = 4).
    BASE, MODULUS = F13, (2, 0, 0, 0, 1)

class F43(PrimeField):  # BLS6_6 base field.
    MODULUS = 43

class F43_6(ExtensionField):  # F43[v] / (v^6 + 6), BLS6_6 embedding field (k = 6).
    BASE, MODULUS = F43, (6, 0, 0, 0, 0, 0, 1)
