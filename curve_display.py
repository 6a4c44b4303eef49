"""
Information-plane rendering for traced bottleneck curves.

Display modes:
  - "ib"   Tishby's information plane, I(X;T) vs I(T;Y)
  - "dib"  Strouse's deterministic plane, H(T) vs I(T;Y)
  - "gib"  picks the plane matching (α, γ), falling back to the
           generalized plane H_γ(T) - α·H(T|X) vs I(T;Y)
  - "all"  ib, dib and generalized planes side by side
  - "none" nothing
"""

import os
import numpy as np
import matplotlib
import matplotlib.pyplot as plt
from typing import List, Optional, Tuple

from ib_errors import InvalidParameterError

DISPLAY_MODES = ("ib", "dib", "gib", "all", "none")
_PLANE_FIELDS = {"ib": "ixt", "dib": "ht", "gib": "hga"}


def resolve_planes(display: str, alpha: float, gamma: float) -> List[str]:
    """
    Translate a display mode into the list of planes to draw

    Args:
        display: One of DISPLAY_MODES
        alpha: Weight of H(T|X) used for the curve
        gamma: Renyi order used for the curve

    Returns:
        Plane names among 'ib', 'dib' and 'gib'
    """
    if display not in DISPLAY_MODES:
        raise InvalidParameterError("display", "must be one of 'ib', 'dib', 'gib', 'all', or 'none'")
    if display == "none":
        return []
    if display == "all":
        return ["ib", "dib", "gib"]
    if display == "gib":
        if gamma == 1 and alpha == 1:
            return ["ib"]
        if gamma == 1 and alpha == 0:
            return ["dib"]
    return [display]


def _plane_axes(curve, plane: str) -> Tuple[np.ndarray, float, str, str]:
    if plane == "ib":
        return curve.Ixt, curve.hx, "I(X;T) [bits]", "IB Information Plane"
    if plane == "dib":
        return curve.Ht, curve.hx, "H(T) [bits]", "DIB Information Plane"
    label = f"$H_{{{curve.gamma:.2f}}}(T) - {curve.alpha:.2f}\\,H(T|X)$ [bits]"
    return curve.Hga, curve.hgx, label, f"Generalized Information Plane (γ = {curve.gamma:.2f}, α = {curve.alpha:.2f})"


def plot_plane(ax, curve, plane: str, annotate_betas: bool = False) -> None:
    """Draw one information plane of ``curve`` onto ``ax``"""
    horizontal, x_max, x_label, title = _plane_axes(curve, plane)
    vertical = curve.Iyt
    approximate = curve.approximate
    finite = np.isfinite(horizontal) & np.isfinite(vertical)

    ax.plot(horizontal[finite], vertical[finite], '-k', linewidth=1.5, label='Bottleneck curve')
    exact = finite & ~approximate
    ax.scatter(horizontal[exact], vertical[exact], color='tab:blue', s=30, zorder=3, label='Exact')
    if np.any(finite & approximate):
        ax.scatter(horizontal[finite & approximate], vertical[finite & approximate],
                   facecolors='none', edgecolors='tab:red', s=50, zorder=3, label='Approximate')

    ax.axhline(y=curve.ixy, color='gray', linestyle='--', alpha=0.6)
    ax.axvline(x=x_max, color='gray', linestyle='--', alpha=0.6)

    if annotate_betas:
        # One label per distinct Hga; a flat run of the curve shares the β of its first point
        field = _PLANE_FIELDS[plane]
        for point in curve.unique_points():
            x, y = getattr(point, field), point.iyt
            if np.isfinite(x) and np.isfinite(y):
                ax.annotate(f"{point.beta:.3g}", (x, y), textcoords="offset points", xytext=(4, 4), fontsize=7)

    ax.set_xlabel(x_label, fontsize=11)
    ax.set_ylabel('I(T;Y) [bits]', fontsize=11)
    ax.set_title(title, fontsize=12)
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize=8, loc='lower right')


def display_curve(curve, display: str = "all", plots_dir: Optional[str] = "ib_plots",
                  show: bool = False, annotate_betas: bool = False) -> List[str]:
    """
    Render the information planes selected by ``display``

    Args:
        curve: BottleneckCurve to render
        display: One of DISPLAY_MODES
        plots_dir: Directory receiving the PNG files (None saves nothing)
        show: Whether to call plt.show() before closing
        annotate_betas: Label each distinct Hga value with its β (useful to pick a kink)

    Returns:
        Paths of the saved figures
    """
    planes = resolve_planes(display, curve.alpha, curve.gamma)
    if not planes:
        return []

    fig, axes = plt.subplots(1, len(planes), figsize=(6 * len(planes), 5), squeeze=False)
    for ax, plane in zip(axes[0], planes):
        plot_plane(ax, curve, plane, annotate_betas=annotate_betas)
    fig.tight_layout()

    saved = []
    if plots_dir is not None:
        os.makedirs(plots_dir, exist_ok=True)
        gamma_tag = f"{curve.gamma:g}".replace('.', '_')
        filename = os.path.join(plots_dir, f"plane_{display}_gamma_{gamma_tag}.png")
        fig.savefig(filename, dpi=150)
        saved.append(filename)

    if show and matplotlib.get_backend().lower() != 'agg':
        plt.show()
    plt.close(fig)
    return saved
