import logging  # Miller-loop phase trace at DEBUG
from dataclasses import dataclass  # trace records

logger = logging.getLogger(__name__)

class PairingError(Exception):  # Raised when pairing inputs violate the r-torsion preconditions.
    pass

@dataclass(frozen=True)
class MillerStep:  # One phase of Miller's loop, for pedagogical inspection.
    bit: int  # bit of r being processed
    op: str  # "double" or "add"
    slope: object  # line slope, None for a vertical line
    line: object  # line value at Q
    f: object  # accumulator after this phase
    point: object  # accumulator point after this phase

def linefunc(P1, P2, T):  # Line through P1,P2 evaluated at T; returns (slope, value).
    if P1.is_infinity() or P2.is_infinity() or T.is_infinity():
        raise ValueError("line through the point at infinity")
    x1, y1 = P1.x, P1.y
    x2, y2 = P2.x, P2.y
    xt, yt = T.x, T.y
    if x1 != x2:
        m = (y2 - y1) / (x2 - x1)
    elif y1 == y2 and not y1.is_zero():
        m = (x1 * x1 * 3 + P1.curve.a) / (y1 * 2)
    else:
        return None, xt - x1  # vertical line
    return m, m * (xt - x1) - (yt - y1)

def _record(trace, bit, op, m, v, f, R):
    logger.debug("bit=%d op=%s slope=%s line=%s f=%s point=%s", bit, op, m, v, f, R)
    if trace is not None:
        trace.append(MillerStep(bit, op, m, v, f, R))

def miller_loop(P, Q, trace=None):  # f_{r,P}(Q), computing r*P by double-and-add along the way.
    curve = Q.curve
    r, F = curve.r, curve.field
    P = P.lift(curve)
    R, f = P, F.one()
    for bit in bin(r)[3:]:  # leading bit is the starting value
        if R.is_infinity():
            raise PairingError(f"P reached infinity before r*P; it is not of order {r}")
        m, v = linefunc(R, R, Q)
        f, R = f * f * v, R.double()
        _record(trace, int(bit), "double", m, v, f, R)
        if bit == "1":
            if R.is_infinity():
                raise PairingError(f"P reached infinity before r*P; it is not of order {r}")
            m, v = linefunc(R, P, Q)
            f, R = f * v, R + P
            _record(trace, 1, "add", m, v, f, R)
    if not R.is_infinity():
        raise PairingError(f"r*P != infinity for r = {r}: P is not in the {r}-torsion")
    return f

def final_exponentiate(f, curve):  # f^((q^k - 1) / r), projecting onto the order-r subgroup.
    n = curve.q ** curve.k - 1
    if n % curve.r:
        raise PairingError(f"r = {curve.r} does not divide q^k - 1")
    return f ** (n // curve.r)

def _validate_pair(P, Q, i=None):  # Subgroup checks for one (P, Q) input.
    tag = f"pair[{i}] " if i is not None else ""
    if P.curve.r != Q.curve.r:
        raise PairingError(f"{tag}P and Q belong to curves with different r")
    if not (Q * Q.curve.r).is_infinity():
        raise PairingError(f"{tag}Q is not in the {Q.curve.r}-torsion")
    if Q.frobenius() == Q:
        raise PairingError(f"{tag}Q is fixed by Frobenius, so it lies in the same subgroup as P")

def pairing(P, Q, trace=None, validate=True):  # e(P, Q) with P in the base-field subgroup, Q in the trace-zero one.
    if P.is_infinity() or Q.is_infinity():
        return Q.curve.field.one()
    if validate:
        _validate_pair(P, Q)
    return final_exponentiate(miller_loop(P, Q, trace), Q.curve)

def multi_pairing(pairs, validate=True):  # Product of pairings with one final exponentiation.
    pairs = list(pairs)
    if not pairs:
        raise ValueError("multi_pairing needs at least one pair")
    curve = pairs[0][1].curve
    f = curve.field.one()
    for i, (P, Q) in enumerate(pairs):
        if Q.curve != curve:
            raise PairingError(f"pair[{i}] is on {Q.curve.name or Q.curve}, expected {curve.name or curve}")
        if P.is_infinity() or Q.is_infinity():
            continue
        if validate:
            _validate_pair(P, Q, i)
        f = f * miller_loop(P, Q)
    return final_exponentiate(f, curve)
