import os

import matplotlib.pyplot as plt
import numpy as np
import pytest

from bottlecurve import CurveConfig, assemble_curve, preprocess_distribution, trace_curve, trivial_points
from curve_display import display_curve, plot_plane, resolve_planes
from ib_errors import InvalidParameterError


@pytest.mark.parametrize("display,alpha,gamma,expected", [
    ("ib", 0.5, 2.0, ["ib"]),
    ("dib", 1.0, 1.0, ["dib"]),
    ("gib", 1.0, 1.0, ["ib"]),
    ("gib", 0.0, 1.0, ["dib"]),
    ("gib", 1.0, 2.0, ["gib"]),
    ("all", 1.0, 1.0, ["ib", "dib", "gib"]),
    ("none", 1.0, 1.0, []),
])
def test_resolve_planes(display, alpha, gamma, expected):
    assert resolve_planes(display, alpha, gamma) == expected


def test_resolve_planes_rejects_unknown_mode():
    with pytest.raises(InvalidParameterError):
        resolve_planes("3d", 1.0, 1.0)


@pytest.fixture
def traced_curve(correlated_joint, smooth_solver):
    return trace_curve(correlated_joint, CurveConfig(n_points=4, max_workers=1), solver=smooth_solver)


def test_display_all_saves_one_figure(traced_curve, tmp_path):
    saved = display_curve(traced_curve, "all", plots_dir=str(tmp_path), annotate_betas=True)
    assert len(saved) == 1
    assert os.path.exists(saved[0])
    assert saved[0].endswith("plane_all_gamma_1.png")


def test_display_none_draws_nothing(traced_curve, tmp_path):
    assert display_curve(traced_curve, "none", plots_dir=str(tmp_path)) == []
    assert os.listdir(tmp_path) == []


def test_trace_curve_renders_when_plots_dir_given(correlated_joint, smooth_solver, tmp_path):
    plots_dir = tmp_path / "planes"
    trace_curve(correlated_joint, CurveConfig(n_points=2, gamma=2.0, display="gib", max_workers=1),
                solver=smooth_solver, plots_dir=str(plots_dir))
    assert os.listdir(plots_dir) == ["plane_gib_gamma_2.png"]


def test_beta_labels_skip_repeated_hga(correlated_joint):
    bounds = preprocess_distribution(correlated_joint)
    zero, _ = trivial_points(bounds)
    points = [zero._replace(beta=1.0, hga=0.5, ixt=0.5, iyt=0.5),
              zero._replace(beta=2.0, hga=0.5, ixt=0.5, iyt=0.5),
              zero._replace(beta=4.0, hga=0.8, ixt=0.8, iyt=0.8)]
    curve = assemble_curve(points, bounds, CurveConfig().validate())
    fig, ax = plt.subplots()
    try:
        plot_plane(ax, curve, "gib", annotate_betas=True)
        labels = [text.get_text() for text in ax.texts]
    finally:
        plt.close(fig)
    assert labels == ["0", "1", "4", "inf"]


def test_display_tolerates_failed_points(correlated_joint, tmp_path):
    def flaky_solver(joint_xy, gamma, alpha, beta, epsilon):
        if beta > 2:
            raise ArithmeticError("diverged")
        return np.eye(2)

    with pytest.warns(UserWarning):
        curve = trace_curve(correlated_joint, CurveConfig(betas=[1.0, 5.0], max_workers=1),
                            solver=flaky_solver)
    assert np.isnan(curve.Hga).any()
    assert len(display_curve(curve, "ib", plots_dir=str(tmp_path))) == 1
