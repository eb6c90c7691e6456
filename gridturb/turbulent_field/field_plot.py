"""
Common utilities and Plotly integration for visualizing synthesized turbulent fields.
"""

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

FIELD_COLORSCALE = "RdBu_r"


def create_grid(spacing: tuple[float, float, float], shape: tuple[int, int, int]) -> np.ndarray:
    """Creates a 3D grid (meshgrid) of cell centres from the given spacing and shape.

    Parameters
    ----------
    spacing : tuple[float, float, float]
        Spacing of the cells along each axis.
    shape : tuple[int, int, int]
        Number of cells along each axis.

    Returns
    -------
    np.ndarray
       np.meshgrid object of the cell centres. This is 'ij' indexed (not Cartesian!).
    """
    x, y, z = [spacing[i] * (np.arange(shape[i]) + 0.5) for i in range(3)]

    return np.meshgrid(x, y, z, indexing="ij")


def format_field(field: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    r"""Creates C-layout copies of the three components of the given field; this is a wrapper around np.copy.

    Parameters
    ----------
    field : np.ndarray
        Vector field of shape :math:`(Nx, Ny, Nz, 3)`.

    Returns
    -------
    tuple[np.ndarray, np.ndarray, np.ndarray]
        Triple consisting of the field values in each x, y, z direction.
    """
    return tuple([np.copy(field[..., i], order="C") for i in range(3)])


def plot_field_components(
    spacing: tuple[float, float, float],
    field: np.ndarray,
    surface_count: int = 25,
) -> go.Figure:
    """Plots x, y, z components of the given field as volume plots.

    Parameters
    ----------
    spacing : tuple[float, float, float]
        Spacing of the cells along each axis.
    field : np.ndarray
        Vector field of shape (Nx, Ny, Nz, 3).
    surface_count : int, optional
        Number of iso-surfaces to be used for each component, by default 25

    Returns
    -------
    go.Figure
        Plotly Figure object to be used in visualization.
    """
    X, Y, Z = create_grid(spacing, field.shape[:3])

    components = format_field(field)

    fig = make_subplots(
        rows=1,
        cols=3,
        subplot_titles=("x Component", "y Component", "z Component"),
        specs=[[{"type": "volume"}, {"type": "volume"}, {"type": "volume"}]],
        horizontal_spacing=0.01,
    )

    for i, component in enumerate(components):
        fig.add_trace(
            go.Volume(
                x=X.flatten(),
                y=Y.flatten(),
                z=Z.flatten(),
                value=component.flatten(),
                surface_count=surface_count,
                coloraxis="coloraxis",
                opacity=0.5,
            ),
            row=1,
            col=i + 1,
        )

    fig.update_layout(coloraxis={"colorscale": FIELD_COLORSCALE})

    return fig


def plot_field_magnitude(
    spacing: tuple[float, float, float],
    field: np.ndarray,
    surf_count: int = 75,
    transparent: bool = False,
) -> go.Figure:
    """Produces a 3D plot of the field magnitude.

    Parameters
    ----------
    spacing : tuple[float, float, float]
        Spacing of the cells along each axis.
    field : np.ndarray
        Vector field of shape (Nx, Ny, Nz, 3).
    surf_count : int, optional
        Number of iso-surfaces to be used, by default 75
    transparent : bool, optional
        Whether to lower the opacity of the iso-surfaces, by default False

    Returns
    -------
    go.Figure
        Plotly Figure object to be used in visualization.
    """
    X, Y, Z = create_grid(spacing, field.shape[:3])

    magnitude = np.linalg.norm(field, axis=-1)

    fig = go.Figure(
        data=go.Volume(
            x=X.flatten(),
            y=Y.flatten(),
            z=Z.flatten(),
            value=magnitude.flatten(),
            isomin=magnitude.min(),
            isomax=magnitude.max(),
            opacity=0.1 if transparent else 0.6,
            surface_count=surf_count,
            colorscale=FIELD_COLORSCALE,
            colorbar={"title": "|B|"},
        )
    )

    fig.update_layout(
        scene={"xaxis_title": "x", "yaxis_title": "y", "zaxis_title": "z", "aspectmode": "data"},
    )

    return fig
