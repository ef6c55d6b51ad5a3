def prime_factors(n):  # Distinct prime factors of a small positive integer, ascending.
    n = int(n)
    if n < 1:
        raise ValueError("expected positive integer")
    out, d = [], 2
    while d * d <= n:
        if n % d == 0:
            out.append(d)
            while n % d == 0:
                n //= d
        d += 1
    if n > 1:
        out.append(n)
    return out

class Polynomial:  # Coefficients in ascending order (c0, c1, ...) over `field`.
    def __init__(self, coeffs, field):  # Coerce coefficients and strip trailing zeros.
        self.field = field
        cs = [field.coerce(c) for c in coeffs]
        while len(cs) > 1 and cs[-1].is_zero():
            cs.pop()
        self.coeffs = tuple(cs) if cs else (field.zero(),)

    zero = classmethod(lambda cls, field: cls([], field))  # Zero polynomial (degree 0 by convention).

    one = classmethod(lambda cls, field: cls([field.one()], field))  # Constant polynomial 1.

    @classmethod
    def monomial(cls, c, n, field):  # c * x^n.
        return cls([field.zero()] * n + [c], field)

    def degree(self):  # Index of the highest non-zero coefficient; 0 for the zero polynomial.
        return len(self.coeffs) - 1

    def leading(self):  # Coefficient of the highest-degree term.
        return self.coeffs[-1]

    def is_zero(self):
        return len(self.coeffs) == 1 and self.coeffs[0].is_zero()

    def _c(self, o):  # Same-field polynomial, a scalar as a constant polynomial, or None if unsupported.
        if isinstance(o, Polynomial):
            if o.field is not self.field:
                raise TypeError(f"polynomials over {self.field.__name__} and {o.field.__name__}")
            return o
        c = self.field._c(o)
        return None if c is None else Polynomial([c], self.field)

    def __add__(self, o):  # Coefficient-wise addition, shorter operand padded with zeros.
        o = self._c(o)
        if o is None:
            return NotImplemented
        a, b, z = self.coeffs, o.coeffs, self.field.zero()
        n = max(len(a), len(b))
        return Polynomial([(a[i] if i < len(a) else z) + (b[i] if i < len(b) else z) for i in range(n)], self.field)

    __radd__ = __add__

    def __neg__(self):
        return Polynomial([-c for c in self.coeffs], self.field)

    def __sub__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else self + (-o)

    def __rsub__(self, o):
        o = self._c(o)
        return NotImplemented if o is None else o - self

    def scale(self, c):  # Multiply every coefficient by the scalar c.
        c = self.field.coerce(c)
        return Polynomial([x * c for x in self.coeffs], self.field)

    def __mul__(self, o):  # Convolution of coefficient sequences.
        p = self._c(o)
        if p is None:
            return NotImplemented
        a, b = self.coeffs, p.coeffs
        out = [self.field.zero()] * (len(a) + len(b) - 1)
        for i, x in enumerate(a):
            if x.is_zero():
                continue
            for j, y in enumerate(b):
                out[i + j] = out[i + j] + x * y
        return Polynomial(out, self.field)

    def __rmul__(self, o):  # scalar * polynomial.
        p = self._c(o)
        return NotImplemented if p is None else self * p

    def div_mod(self, divisor):  # Long division: (quotient, remainder) with deg(rem) < deg(divisor).
        d = self._c(divisor)
        if d is None:
            raise TypeError(f"cannot divide a polynomial over {self.field.__name__} by {type(divisor).__name__}")
        divisor = d
        if divisor.is_zero():
            raise ZeroDivisionError("polynomial division by zero")
        zero, dd = self.field.zero(), divisor.degree()
        inv_lead = divisor.leading().inv()
        rem = list(self.coeffs)
        quo = [zero] * max(len(rem) - dd, 1)
        while len(rem) > dd:
            c = rem[-1] * inv_lead
            if not c.is_zero():
                k = len(rem) - 1 - dd
                quo[k] = c
                for i in range(dd):
                    rem[k + i] = rem[k + i] - c * divisor.coeffs[i]
            rem.pop()  # leading term cancels exactly
        return Polynomial(quo, self.field), Polynomial(rem, self.field)

    def __floordiv__(self, o):
        return self.div_mod(o)[0]

    def __mod__(self, o):
        return self.div_mod(o)[1]

    def monic(self):  # Scale so the leading coefficient is 1 (zero stays zero).
        return self if self.is_zero() else self.scale(self.leading().inv())

    def evaluate(self, x):  # Horner evaluation at x.
        out = self.field.zero()
        for c in reversed(self.coeffs):
            out = out * x + c
        return out

    def __eq__(self, o):
        return isinstance(o, Polynomial) and o.field is self.field and self.coeffs == o.coeffs

    def __hash__(self):
        return hash((self.field, self.coeffs))

    def __str__(self):  # Highest degree first, e.g. "12x^3 + 5x + 1".
        terms = []
        for i in range(len(self.coeffs) - 1, -1, -1):
            c = self.coeffs[i]
            if c.is_zero() and len(self.coeffs) > 1:
                continue
            s = str(c)
            if " " in s:
                s = f"({s})"
            if i == 0:
                terms.append(s)
            else:
                coeff = "" if c == 1 else s
                terms.append(f"{coeff}x" if i == 1 else f"{coeff}x^{i}")
        return " + ".join(terms)

    def __repr__(self):
        return f"Polynomial({self}, {self.field.__name__})"

def poly_gcd(a, b):  # Monic greatest common divisor via Euclid.
    while not b.is_zero():
        a, b = b, a % b
    return a.monic()

def pow_mod(base, e, modulus):  # base^e mod modulus by right-to-left square-and-multiply.
    out, t = Polynomial.one(base.field) % modulus, base % modulus
    while e:
        if e & 1:
            out = (out * t) % modulus
        t, e = (t * t) % modulus, e >> 1
    return out

def is_irreducible(f, q):  # Rabin's test for f over a field with q elements.
    n = f.degree()
    if n < 1:
        return False
    if n == 1:
        return True
    x = Polynomial.monomial(f.field.one(), 1, f.field)

    def frob(k):  # x^(q^k) mod f.
        y = x
        for _ in range(k):
            y = pow_mod(y, q, f)
        return y

    for d in prime_factors(n):
        if poly_gcd(frob(n // d) - x, f).degree() != 0:
            return False
    return ((frob(n) - x) % f).is_zero()
