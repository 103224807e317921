"""Internal linear system solvers for curve fitting.

Both solvers take the three diagonals of the system separately. Row i reads

    a[i] * x[i-1] + b[i] * x[i] + c[i] * x[i+1] = d[i]

For the plain solver a[0] and c[-1] are ignored. For the cyclic solver the
indices wrap, so a[0] multiplies x[-1] and c[-1] multiplies x[0].
Not intended for public use.
"""


def solve_tridiagonal(
    a: list[float], b: list[float], c: list[float], d: list[float]
) -> list[float]:
    """Solve a tridiagonal system with the Thomas algorithm.

    Raises:
        ZeroDivisionError: If the system is singular
    """
    n = len(b)
    if n == 0:
        return []

    c_prime = [0.0] * n
    d_prime = [0.0] * n

    c_prime[0] = c[0] / b[0]
    d_prime[0] = d[0] / b[0]
    for i in range(1, n):
        denom = b[i] - a[i] * c_prime[i - 1]
        c_prime[i] = c[i] / denom if i < n - 1 else 0.0
        d_prime[i] = (d[i] - a[i] * d_prime[i - 1]) / denom

    x = [0.0] * n
    x[-1] = d_prime[-1]
    for i in range(n - 2, -1, -1):
        x[i] = d_prime[i] - c_prime[i] * x[i + 1]
    return x


def solve_cyclic_tridiagonal(
    a: list[float], b: list[float], c: list[float], d: list[float]
) -> list[float]:
    """Solve a cyclic tridiagonal system via the Sherman-Morrison formula.

    Raises:
        ValueError: If fewer than two unknowns are given
        ZeroDivisionError: If the system is singular
    """
    n = len(b)
    if n < 2:
        raise ValueError(f"Cyclic system needs at least 2 unknowns, got {n}")

    if n == 2:
        # Both off-diagonal terms of a row hit the same unknown
        m00, m01 = b[0], a[0] + c[0]
        m10, m11 = a[1] + c[1], b[1]
        det = m00 * m11 - m01 * m10
        return [
            (d[0] * m11 - m01 * d[1]) / det,
            (m00 * d[1] - d[0] * m10) / det,
        ]

    alpha = c[n - 1]
    beta = a[0]
    gamma = -b[0]

    bb = list(b)
    bb[0] = b[0] - gamma
    bb[n - 1] = b[n - 1] - alpha * beta / gamma

    x = solve_tridiagonal(a, bb, c, d)

    u = [0.0] * n
    u[0] = gamma
    u[n - 1] = alpha
    z = solve_tridiagonal(a, bb, c, u)

    fact = (x[0] + beta * x[n - 1] / gamma) / (1.0 + z[0] + beta * z[n - 1] / gamma)
    return [xi - fact * zi for xi, zi in zip(x, z, strict=True)]
