"""Batched upper half-plane operations on torch tensors.

Convention: points are tensors of shape (..., 2) holding (re, im) with im > 0
for interior points. Numpy arrays are accepted and converted with
torch.as_tensor. Unlike the scalar API, inputs are not validated; the point
at infinity is only produced (never consumed) as (inf, inf).
"""

import math

import torch

from .mobius import Mobius

MIN_NORM = 1e-15


def _as_tensor(x):
    # Convert numpy arrays (and nested sequences) to tensors
    if not torch.is_tensor(x):
        x = torch.as_tensor(x)
    if not x.is_floating_point():
        x = x.to(torch.get_default_dtype())
    return x


# =============================================================================
# Metric
# =============================================================================


def distance(z, w):
    """Compute hyperbolic distance between batches of UHP points.

    Formula: d(z, w) = 2 * asinh(|z - w| / (2 * sqrt(z_im * w_im)))

    Args:
        z, w: torch.tensor of broadcastable shapes (..., 2)

    Returns:
        torch.tensor of shape (...)
    """
    z, w = _as_tensor(z), _as_tensor(w)
    euc = torch.linalg.norm(z - w, dim=-1)
    denom = 2 * torch.sqrt((z[..., 1] * w[..., 1]).clamp_min(MIN_NORM))
    return 2 * torch.asinh(euc / denom)


# =============================================================================
# Mobius action
# =============================================================================


def apply_mobius(m: Mobius, z):
    """Apply a Mobius transformation to a batch of points.

    Args:
        m: Mobius transformation
        z: torch.tensor of shape (..., 2) - finite points

    Returns:
        torch.tensor of shape (..., 2); entries whose denominator c*z + d is
        below MIN_NORM in magnitude are (inf, inf)
    """
    z = _as_tensor(z)
    complex_dtype = torch.complex128 if z.dtype == torch.float64 else torch.complex64
    coeffs = torch.as_tensor(m.as_matrix(), dtype=complex_dtype, device=z.device)
    a, b, c, d = coeffs.reshape(-1)

    zc = torch.complex(z[..., 0], z[..., 1]).to(complex_dtype)
    numerator = a * zc + b
    denominator = c * zc + d

    degenerate = denominator.abs() < MIN_NORM
    safe = torch.where(degenerate, torch.ones_like(denominator), denominator)
    image = numerator / safe

    out = torch.stack((image.real, image.imag), dim=-1).to(z.dtype)
    return torch.where(degenerate.unsqueeze(-1), torch.full_like(out, math.inf), out)


# =============================================================================
# Poincare disk
# =============================================================================


def to_poincare(z):
    """Map UHP points to the Poincare disk with the Cayley map (z - i) / (z + i).

    Args:
        z: torch.tensor of shape (..., 2) - UHP coordinates

    Returns:
        torch.tensor of shape (..., 2) - Poincare disk coordinates
    """
    z = _as_tensor(z)
    re, im = z[..., 0], z[..., 1]
    denom = (re * re + (im + 1) ** 2).clamp_min(MIN_NORM)
    return torch.stack((re * re + im * im - 1, -2 * re), dim=-1) / denom.unsqueeze(-1)


def from_poincare(x):
    """Map Poincare disk points back to the UHP with i * (1 + x) / (1 - x).

    Args:
        x: torch.tensor of shape (..., 2) - Poincare disk coordinates

    Returns:
        torch.tensor of shape (..., 2) - UHP coordinates
    """
    x = _as_tensor(x)
    u, v = x[..., 0], x[..., 1]
    denom = ((1 - u) ** 2 + v * v).clamp_min(MIN_NORM)
    return torch.stack((-2 * v, 1 - u * u - v * v), dim=-1) / denom.unsqueeze(-1)
