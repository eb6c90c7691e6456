"""Orthonormal bases transverse to wavevectors."""

import numpy as np

# arbitrary reference vector used to construct the transverse plane
N0 = np.array([1.0, 1.0, 1.0])

# orthogonal pair used when the wavevector is (anti-)parallel to N0
E1_PARALLEL = np.array([-1.0, 1.0, 0.0])
E2_PARALLEL = np.array([1.0, 1.0, -2.0])

MAX_ANGLE = 1e-3


def transverse_basis(ek: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    r"""Construct two unit vectors spanning the plane orthogonal to each wavevector.

    For a wavevector :math:`\boldsymbol{k}` the basis is :math:`\boldsymbol{e}_1 = \boldsymbol{n}_0 \times
    \boldsymbol{k}`, :math:`\boldsymbol{e}_2 = \boldsymbol{k} \times \boldsymbol{e}_1` with
    :math:`\boldsymbol{n}_0 = (1, 1, 1)`, both normalized. Where :math:`\boldsymbol{k}` is within ``1e-3`` rad of
    :math:`\pm\boldsymbol{n}_0` the cross product degenerates, and the fixed pair :math:`(-1, 1, 0)`,
    :math:`(1, 1, -2)` is used instead.

    Parameters
    ----------
    ek : np.ndarray
        Wavevector(s) of shape ``(..., 3)``; need not be normalized.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The unit vectors ``e1`` and ``e2``, each of the same shape as ``ek``.

    Raises
    ------
    ValueError
        If any wavevector is zero.
    """
    ek = np.asarray(ek, dtype=np.float64)
    norm = np.linalg.norm(ek, axis=-1)
    if np.any(norm == 0.0):
        raise ValueError("The transverse plane of a zero wavevector is undefined.")

    cos_angle = np.clip(ek @ N0 / (norm * np.linalg.norm(N0)), -1.0, 1.0)
    angle = np.arccos(cos_angle)
    degenerate = (angle < MAX_ANGLE) | (angle > np.pi - MAX_ANGLE)

    e1 = np.cross(N0, ek)
    e2 = np.cross(ek, e1)
    e1[degenerate] = E1_PARALLEL
    e2[degenerate] = E2_PARALLEL

    e1 /= np.linalg.norm(e1, axis=-1, keepdims=True)
    e2 /= np.linalg.norm(e2, axis=-1, keepdims=True)
    return e1, e2
