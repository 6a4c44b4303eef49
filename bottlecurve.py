"""
Generalized Information Bottleneck Curve

Computes the bottleneck curve of a joint distribution P(x,y) for the
functional

    L = H_γ(T) - α·H(T|X) - β·I(T;Y)

The horizontal axis Hga = H_γ(T) - α·H(T|X) is partitioned into N equal
segments between 0 (β = 0) and H_γ(X) (β = ∞). For every interior partition
value a bracketed binary search finds the β whose optimal encoder lands
within δ of it. If explicit β values are given, the curve is evaluated at
those instead and N is ignored.

The search is only valid if the solver's Hga is non-decreasing in β. That is
a precondition on the solver, not something checked here.
"""

import os
import threading
import multiprocessing
import time
import numbers
import warnings
import numpy as np
from concurrent.futures import ProcessPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple
from tqdm import tqdm

from curve_display import DISPLAY_MODES, display_curve
from ib_errors import (CurveCancelledError, CurveTimeoutError, DegenerateDistributionError,
                       InvalidParameterError, SearchDidNotConvergeError, SolverError)
from ib_solver import optimal_bottle
from ib_stats import entropy, make_distribution, mutual_information, plane_statistics, renyi_entropy

# solver(Pxy, gamma, alpha, beta, epsilon) -> Q(T|X), rows summing to one
Solver = Callable[[np.ndarray, float, float, float, float], np.ndarray]


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class CurveConfig:
    """
    Picklable configuration of one curve request.

    Default table: N = 10, α = 1, γ = 1, δ = 1e-8, ε = 1e-8,
    display = "all", betas = []. The remaining fields bound the β search
    and the worker pool.
    """

    def __init__(self, n_points=10, alpha=1.0, gamma=1.0, delta=1e-8, epsilon=1e-8,
                 display="all", betas=None, initial_beta=1.0, max_expansions=64,
                 max_iterations=200, search_timeout=None, curve_timeout=None,
                 max_workers=None, verbose=False):
        self.n_points = n_points
        self.alpha = alpha
        self.gamma = gamma
        self.delta = delta
        self.epsilon = epsilon
        self.display = display
        self.betas = [] if betas is None else list(betas)
        self.initial_beta = initial_beta
        self.max_expansions = max_expansions
        self.max_iterations = max_iterations
        self.search_timeout = search_timeout
        self.curve_timeout = curve_timeout
        self.max_workers = max_workers
        self.verbose = verbose

    def validate(self) -> "CurveConfig":
        """
        Check every field before any numeric work

        Sorts ``betas`` ascending once they are known to be valid.

        Raises:
            InvalidParameterError: naming the first offending field
        """
        if not isinstance(self.n_points, (int, np.integer)) or isinstance(self.n_points, bool) \
                or self.n_points <= 0:
            raise InvalidParameterError("N", "must be a positive integer.")
        if not _is_real(self.alpha) or not 0 <= self.alpha < np.inf:
            raise InvalidParameterError("alpha", "must be in [0,Inf[")
        if not _is_real(self.gamma) or not 0 < self.gamma < np.inf:
            raise InvalidParameterError("gamma", "must be in ]0,Inf[")
        if not _is_real(self.delta) or not self.delta > 0:
            raise InvalidParameterError("delta", "must be positive non-zero.")
        if not _is_real(self.epsilon) or not self.epsilon > 0:
            raise InvalidParameterError("epsilon", "must be positive non-zero.")
        if not isinstance(self.display, str) or self.display not in DISPLAY_MODES:
            raise InvalidParameterError(
                "display", "must be one of 'ib', 'dib', 'gib', 'all', or 'none'.")
        for beta in self.betas:
            if not _is_real(beta) or not beta >= 0:
                raise InvalidParameterError("betas", "must all be non-negative values.")

        if not _is_real(self.initial_beta) or not 0 < self.initial_beta < np.inf:
            raise InvalidParameterError("initial_beta", "must be in ]0,Inf[")
        if not isinstance(self.max_expansions, (int, np.integer)) or self.max_expansions < 0:
            raise InvalidParameterError("max_expansions", "must be a non-negative integer.")
        if not isinstance(self.max_iterations, (int, np.integer)) or self.max_iterations < 1:
            raise InvalidParameterError("max_iterations", "must be a positive integer.")
        for name in ("search_timeout", "curve_timeout"):
            value = getattr(self, name)
            if value is not None and (not _is_real(value) or not value > 0):
                raise InvalidParameterError(name, "must be positive or None.")
        if self.max_workers is not None and (not isinstance(self.max_workers, (int, np.integer))
                                             or self.max_workers < 1):
            raise InvalidParameterError("max_workers", "must be a positive integer or None.")

        self.betas = sorted(float(beta) for beta in self.betas)
        return self


class DistributionBounds(NamedTuple):
    """Marginals and axis ceilings derived from P(x,y)"""
    p_x: np.ndarray
    p_y_given_x: np.ndarray
    hx: float
    hgx: float
    ixy: float


class CurvePoint(NamedTuple):
    """One point of the bottleneck curve"""
    beta: float
    hga: float
    ixt: float
    ht: float
    hgt: float
    iyt: float
    approximate: bool = False
    error: Optional[str] = None


class BottleneckCurve:
    """
    Assembled bottleneck curve, ordered by β.

    Iterating or calling :meth:`as_tuple` gives ``(Ixt, Ht, Hgt, Iyt, Bs)``.
    """

    def __init__(self, points: List[CurvePoint], gamma: float, alpha: float,
                 hx: float, hgx: float, ixy: float, status: str = "complete"):
        self.points = points
        self.gamma = gamma
        self.alpha = alpha
        self.hx = hx
        self.hgx = hgx
        self.ixy = ixy
        self.status = status

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self):
        return iter(self.as_tuple())

    def _column(self, name: str) -> np.ndarray:
        return np.array([getattr(point, name) for point in self.points], dtype=float)

    @property
    def Ixt(self) -> np.ndarray:
        return self._column('ixt')

    @property
    def Ht(self) -> np.ndarray:
        return self._column('ht')

    @property
    def Hgt(self) -> np.ndarray:
        return self._column('hgt')

    @property
    def Iyt(self) -> np.ndarray:
        return self._column('iyt')

    @property
    def Hga(self) -> np.ndarray:
        return self._column('hga')

    @property
    def Bs(self) -> np.ndarray:
        return self._column('beta')

    @property
    def approximate(self) -> np.ndarray:
        return np.array([point.approximate for point in self.points], dtype=bool)

    def as_tuple(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
        return self.Ixt, self.Ht, self.Hgt, self.Iyt, self.Bs

    def unique_points(self) -> List[CurvePoint]:
        """Points with repeated Hga values collapsed, keeping the first"""
        unique = []
        for point in self.points:
            if unique and point.hga == unique[-1].hga:
                continue
            unique.append(point)
        return unique

    def to_record(self) -> Dict[str, object]:
        """Per-run record consumed by the downstream kink analysis"""
        return {
            'gamma': self.gamma,
            'alpha': self.alpha,
            'betas': self.Bs,
            'Hga': self.Hga,
            'Iyt': self.Iyt,
            'Ixt': self.Ixt,
            'Ht': self.Ht,
            'Hgt': self.Hgt,
            'approximate': self.approximate,
        }


def preprocess_distribution(joint_xy, gamma: float = 1.0) -> DistributionBounds:
    """
    Derive P(x), P(y|x) and the axis ceilings H(X), H_γ(X), I(X;Y)

    Args:
        joint_xy: Joint distribution P(x,y), shape (|X|, |Y|)
        gamma: Renyi order of the horizontal axis

    Returns:
        DistributionBounds of the input

    Raises:
        DegenerateDistributionError: if P(x) carries no mass
        InvalidParameterError: if P(x,y) is not a probability matrix
    """
    joint_xy = np.asarray(joint_xy, dtype=float)
    if joint_xy.ndim != 2 or joint_xy.size == 0:
        raise InvalidParameterError("Pxy", "must be a non-empty |X| x |Y| matrix.")
    if not np.all(np.isfinite(joint_xy)) or np.any(joint_xy < 0):
        raise InvalidParameterError("Pxy", "must contain finite non-negative probabilities.")

    row_mass = joint_xy.sum(axis=1)
    if not np.any(row_mass > 0):
        raise DegenerateDistributionError("BottleCurve: P(x) is zero everywhere; the curve bounds are undefined.")
    if not np.isclose(joint_xy.sum(), 1.0, atol=1e-6):
        raise InvalidParameterError("Pxy", f"must sum to 1 (sums to {joint_xy.sum():.6g}).")

    # Get the distribution of X, the upper limits of the horizontal axes
    p_x = make_distribution(row_mass)
    hx = entropy(p_x)
    hgx = renyi_entropy(p_x, gamma)

    # I(X;Y) is the upper limit of the vertical axis on every plane
    p_y_given_x = make_distribution(joint_xy, axis=1)
    ixy = mutual_information(p_y_given_x, p_x)

    if not all(np.isfinite(value) for value in (hx, hgx, ixy)):
        raise DegenerateDistributionError("BottleCurve: distribution bounds are not finite.")
    return DistributionBounds(p_x, p_y_given_x, hx, hgx, ixy)


def plan_targets(bounds: DistributionBounds, config: CurveConfig) -> Tuple[List[float], List[float]]:
    """
    Turn the request into work items

    Returns:
        (targets, betas): interior Hga partition values to search for, or the
        explicit β values to evaluate. Exactly one of them is used.
    """
    if config.betas:
        return [], list(config.betas)

    # Partition goes from 0 to H_γ(X); both ends are the trivial β = 0 and
    # β = ∞ points, so only k = 1..N-1 are searched
    partition_dist = bounds.hgx / config.n_points
    targets = [k * partition_dist for k in range(1, config.n_points)]
    return targets, []


def trivial_points(bounds: DistributionBounds) -> Tuple[CurvePoint, CurvePoint]:
    """The β = 0 point (T constant) and the β = ∞ point (T = X)"""
    zero = CurvePoint(beta=0.0, hga=0.0, ixt=0.0, ht=0.0, hgt=0.0, iyt=0.0)
    infinite = CurvePoint(beta=np.inf, hga=bounds.hgx, ixt=bounds.hx, ht=bounds.hx,
                          hgt=bounds.hgx, iyt=bounds.ixy)
    return zero, infinite


def evaluate_beta(joint_xy: np.ndarray, bounds: DistributionBounds, beta: float,
                  config: CurveConfig, solver: Solver = optimal_bottle) -> CurvePoint:
    """
    Run the solver at ``beta`` and derive the plane coordinates

    Raises:
        SolverError: if the solver fails or returns a malformed encoder
    """
    if beta == 0 or np.isinf(beta):
        zero, infinite = trivial_points(bounds)
        return zero if beta == 0 else infinite

    try:
        p_t_given_x = solver(joint_xy, config.gamma, config.alpha, beta, config.epsilon)
    except SolverError:
        raise
    except Exception as e:
        raise SolverError(f"Solver raised {type(e).__name__}: {e}", beta=beta) from e

    p_t_given_x = np.asarray(p_t_given_x, dtype=float)
    if p_t_given_x.ndim != 2 or p_t_given_x.shape[0] != bounds.p_x.shape[0]:
        raise SolverError(f"Solver returned an encoder of shape {p_t_given_x.shape}", beta=beta)
    if not np.all(np.isfinite(p_t_given_x)):
        raise SolverError("Solver returned a non-finite encoder", beta=beta)

    stats = plane_statistics(p_t_given_x, bounds.p_x, bounds.p_y_given_x, config.gamma, config.alpha)
    if not all(np.isfinite(value) for value in stats.values()):
        raise SolverError("Encoder statistics are not finite", beta=beta)
    return CurvePoint(beta=float(beta), hga=stats['Hga'], ixt=stats['Ixt'], ht=stats['Ht'],
                      hgt=stats['Hgt'], iyt=stats['Iyt'])


def _check_interrupt(cancel_event=None, deadline: Optional[float] = None) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise CurveCancelledError("Curve computation was cancelled.")
    if deadline is not None and time.time() > deadline:
        raise CurveTimeoutError("Curve computation exceeded its time budget.")


def search_beta(joint_xy: np.ndarray, bounds: DistributionBounds, target: float,
                config: CurveConfig, solver: Solver = optimal_bottle,
                cancel_event=None, deadline: Optional[float] = None) -> CurvePoint:
    """
    Find β whose optimal encoder has |Hga(β) - target| ≤ δ

    The bracket starts at [0, initial_beta] and the upper end is doubled
    until Hga(high) exceeds the target, then the bracket is bisected.

    Args:
        joint_xy: Joint distribution P(x,y)
        bounds: Output of preprocess_distribution
        target: Hga value to reach
        config: Validated CurveConfig
        solver: Solver collaborator
        cancel_event: Object with ``is_set()``; checked between iterations
        deadline: Absolute time.time() after which the whole curve is abandoned

    Returns:
        CurvePoint at the resolved β

    Raises:
        SearchDidNotConvergeError: budget exhausted; carries the best candidate
        SolverError: solver failed; carries the best candidate so far
        CurveCancelledError, CurveTimeoutError: curve-level interruption
    """
    start_time = time.time()
    # Seeded by the first solver call, so a failed search never reports β = 0
    best = None

    def evaluate(beta: float) -> CurvePoint:
        nonlocal best
        try:
            point = evaluate_beta(joint_xy, bounds, beta, config, solver)
        except SolverError as e:
            raise SolverError(e.message, beta=beta, target=target, best=best) from e
        if best is None or abs(point.hga - target) < abs(best.hga - target):
            best = point
        return point

    def check_budget():
        _check_interrupt(cancel_event, deadline)
        if best is None:
            return
        if config.search_timeout is not None and time.time() - start_time > config.search_timeout:
            raise SearchDidNotConvergeError(target, best.beta, best, reason="time budget exhausted")

    # Bracket expansion: Hga(low) ≤ target ≤ Hga(high)
    low_beta = 0.0
    high_beta = float(config.initial_beta)
    expansions = 0
    while True:
        check_budget()
        point = evaluate(high_beta)
        if abs(point.hga - target) <= config.delta:
            return point
        if point.hga > target:
            break
        low_beta = high_beta
        if expansions >= config.max_expansions:
            raise SearchDidNotConvergeError(target, best.beta, best,
                                            reason=f"no upper bracket below β={high_beta:.6g}")
        high_beta *= 2
        expansions += 1
        if config.verbose:
            print(f"  Hga={target:.6f}: expanding bracket to β ∈ [{low_beta:.6g}, {high_beta:.6g}]")

    # Bisection
    for iteration in range(config.max_iterations):
        check_budget()
        mid_beta = (low_beta + high_beta) / 2
        if mid_beta <= low_beta or mid_beta >= high_beta:
            raise SearchDidNotConvergeError(target, best.beta, best,
                                            reason="bracket collapsed to float resolution")
        point = evaluate(mid_beta)
        if config.verbose:
            print(f"  Hga={target:.6f}: iteration {iteration + 1}, β = {mid_beta:.10g}, Hga = {point.hga:.10f}")
        if point.hga < target - config.delta:
            low_beta = mid_beta
        elif point.hga > target + config.delta:
            high_beta = mid_beta
        else:
            return point

    raise SearchDidNotConvergeError(target, best.beta, best)


def resolve_task(task: tuple) -> Tuple[CurvePoint, bool]:
    """
    Standalone wrapper, usable in worker processes, resolving one work item

    Args:
        task: (kind, value, joint_xy, bounds, config, solver, cancel_event, deadline)
            where kind is 'target' (search for Hga = value) or 'beta'
            (evaluate at β = value)

    Returns:
        (point, solver_failed). Failed searches come back as approximate
        points carrying the error message.
    """
    kind, value, joint_xy, bounds, config, solver, cancel_event, deadline = task
    try:
        if kind == 'target':
            return search_beta(joint_xy, bounds, value, config, solver, cancel_event, deadline), False
        _check_interrupt(cancel_event, deadline)
        return evaluate_beta(joint_xy, bounds, value, config, solver), False
    except SearchDidNotConvergeError as e:
        return e.best._replace(approximate=True, error=str(e)), False
    except SolverError as e:
        if e.best is not None:
            return e.best._replace(approximate=True, error=str(e)), True
        nan = float('nan')
        beta = float(value) if e.beta is None else float(e.beta)
        return CurvePoint(beta=beta, hga=nan, ixt=nan, ht=nan, hgt=nan, iyt=nan,
                          approximate=True, error=str(e)), True


def _run_tasks(tasks: Sequence[Tuple[str, float]], joint_xy: np.ndarray, bounds: DistributionBounds,
               config: CurveConfig, solver: Solver, cancel_event=None,
               deadline: Optional[float] = None) -> List[Tuple[CurvePoint, bool]]:
    """Resolve every task, serially or in a process pool, keeping task order"""
    results = [None] * len(tasks)
    max_workers = config.max_workers or os.cpu_count() or 1

    if max_workers == 1 or len(tasks) <= 1:
        iterator = enumerate(tasks)
        if config.verbose:
            iterator = tqdm(iterator, total=len(tasks), desc="Resolving curve points")
        for i, (kind, value) in iterator:
            _check_interrupt(cancel_event, deadline)
            results[i] = resolve_task((kind, value, joint_xy, bounds, config, solver, cancel_event, deadline))
        return results

    # Threading primitives do not cross process boundaries; workers watch a
    # manager-backed event that mirrors the caller's
    manager = worker_event = mirror = None
    stop_mirror = threading.Event()
    if cancel_event is not None:
        manager = multiprocessing.Manager()
        worker_event = manager.Event()
        mirror = threading.Thread(target=_mirror_event, args=(cancel_event, worker_event, stop_mirror),
                                  daemon=True)
        mirror.start()

    executor = ProcessPoolExecutor(max_workers=min(max_workers, len(tasks)))
    try:
        futures = {
            executor.submit(resolve_task, (kind, value, joint_xy, bounds, config, solver,
                                           worker_event, deadline)): i
            for i, (kind, value) in enumerate(tasks)
        }
        timeout = None if deadline is None else max(0.0, deadline - time.time())
        completed = as_completed(futures, timeout=timeout)
        if config.verbose:
            completed = tqdm(completed, total=len(futures), desc="Resolving curve points")
        for future in completed:
            results[futures[future]] = future.result()
            _check_interrupt(cancel_event, deadline)
    except FuturesTimeoutError:
        _stop_workers(executor, worker_event)
        raise CurveTimeoutError("Curve computation exceeded its time budget.")
    except BaseException:
        _stop_workers(executor, worker_event)
        raise
    finally:
        stop_mirror.set()
        if mirror is not None:
            mirror.join()
        if manager is not None:
            manager.shutdown()
    executor.shutdown()
    return results


def _mirror_event(source, target, stop: threading.Event, interval: float = 0.05):
    """Forward the caller's cancel signal to the event the workers watch"""
    while True:
        if source.is_set():
            target.set()
            return
        if stop.wait(interval):
            return


def _stop_workers(executor: ProcessPoolExecutor, worker_event=None):
    if worker_event is not None:
        worker_event.set()
    executor.shutdown(wait=False, cancel_futures=True)


def assemble_curve(points: Sequence[CurvePoint], bounds: DistributionBounds,
                   config: CurveConfig, status: str = "complete") -> BottleneckCurve:
    """
    Merge the trivial endpoints with the resolved points

    Points are stably sorted by β; adjacent equal β values are collapsed,
    keeping the first. A dropped duplicate that was approximate marks the
    kept point approximate and hands over its error message.
    """
    zero, infinite = trivial_points(bounds)
    ordered = sorted([zero, *points, infinite], key=lambda point: point.beta)

    curve_points = []
    for point in ordered:
        if curve_points and point.beta == curve_points[-1].beta:
            kept = curve_points[-1]
            if point.approximate:
                errors = [e for e in (kept.error, point.error) if e]
                curve_points[-1] = kept._replace(approximate=True,
                                                 error="; ".join(dict.fromkeys(errors)) or None)
            continue
        curve_points.append(point)

    return BottleneckCurve(curve_points, gamma=config.gamma, alpha=config.alpha,
                           hx=bounds.hx, hgx=bounds.hgx, ixy=bounds.ixy, status=status)


def trace_curve(joint_xy, config: Optional[CurveConfig] = None, solver: Solver = optimal_bottle,
                cancel_event=None, plots_dir: Optional[str] = None) -> BottleneckCurve:
    """
    Compute the generalized bottleneck curve of ``joint_xy``

    Args:
        joint_xy: Joint distribution P(x,y), shape (|X|, |Y|)
        config: CurveConfig (defaults to the default table)
        solver: Picklable callable ``solver(Pxy, gamma, alpha, beta, epsilon) -> Q(T|X)``.
            Arguments are positional in that order; note β comes after γ and α.
            It must be importable by worker processes when max_workers != 1.
        cancel_event: Object with ``is_set()``, e.g. threading.Event. In pool mode it is
            mirrored into a manager event so running searches see it too
        plots_dir: If given and display is not "none", save the planes there

    Returns:
        BottleneckCurve. Cancelled or timed-out requests return an empty
        curve with status "cancelled" / "timed_out".

    Raises:
        InvalidParameterError, DegenerateDistributionError: malformed request
        SolverError: if the solver failed for every point it was asked for
    """
    config = CurveConfig() if config is None else config
    config.validate()
    bounds = preprocess_distribution(joint_xy, config.gamma)
    joint_xy = np.asarray(joint_xy, dtype=float)

    start_time = time.time()
    deadline = None if config.curve_timeout is None else start_time + config.curve_timeout

    targets, betas = plan_targets(bounds, config)
    tasks = [('target', target) for target in targets] + [('beta', beta) for beta in betas]

    if config.verbose:
        print(f"H(X) = {bounds.hx:.6f} bits, H_γ(X) = {bounds.hgx:.6f} bits, I(X;Y) = {bounds.ixy:.6f} bits")
        if targets:
            print(f"Searching β for {len(targets)} interior partition values of Hga")
        else:
            print(f"Evaluating {len(betas)} explicit β values")

    try:
        results = _run_tasks(tasks, joint_xy, bounds, config, solver, cancel_event, deadline)
    except CurveCancelledError:
        if config.verbose:
            print("Curve computation cancelled; discarding completed points.")
        return BottleneckCurve([], config.gamma, config.alpha, bounds.hx, bounds.hgx, bounds.ixy,
                               status="cancelled")
    except CurveTimeoutError:
        if config.verbose:
            print(f"Curve computation exceeded {config.curve_timeout}s; discarding completed points.")
        return BottleneckCurve([], config.gamma, config.alpha, bounds.hx, bounds.hgx, bounds.ixy,
                               status="timed_out")

    solver_tasks = [i for i, (kind, value) in enumerate(tasks)
                    if kind == 'target' or not (value == 0 or np.isinf(value))]
    failed = [i for i in solver_tasks if results[i][1]]
    if solver_tasks and len(failed) == len(solver_tasks):
        raise SolverError(f"Solver failed for all {len(failed)} points; first failure: "
                          f"{results[failed[0]][0].error}")

    points = [point for point, _ in results]
    for point in points:
        if point.approximate:
            warnings.warn(f"Approximate curve point at β={point.beta:.6g}: {point.error}")

    curve = assemble_curve(points, bounds, config)
    if config.verbose:
        print(f"Curve computed with {len(curve)} points in {time.time() - start_time:.2f}s")

    if plots_dir is not None and config.display != "none":
        display_curve(curve, config.display, plots_dir)
    return curve


def compute_curve(joint_xy, n_points: int = 10, alpha: float = 1, gamma: float = 1,
                  delta: float = 1e-8, epsilon: float = 1e-8, display: str = "all",
                  betas: Optional[Sequence[float]] = None, solver: Solver = optimal_bottle,
                  cancel_event=None, plots_dir: Optional[str] = None, **options):
    """
    Compute the bottleneck curve and return ``(Ixt, Ht, Hgt, Iyt, Bs)``

    Extra keyword arguments are forwarded to CurveConfig (search budgets,
    worker count, verbosity).

    Raises:
        CurveCancelledError, CurveTimeoutError: when the request was interrupted
    """
    config = CurveConfig(n_points=n_points, alpha=alpha, gamma=gamma, delta=delta,
                         epsilon=epsilon, display=display, betas=betas, **options)
    curve = trace_curve(joint_xy, config, solver=solver, cancel_event=cancel_event, plots_dir=plots_dir)
    if curve.status == "cancelled":
        raise CurveCancelledError("Curve computation was cancelled.")
    if curve.status == "timed_out":
        raise CurveTimeoutError("Curve computation exceeded its time budget.")
    return curve.as_tuple()


def create_noisy_channel_distribution(cardinality: int = 4, noise: float = 0.2) -> np.ndarray:
    """
    Joint distribution of a uniform X sent through a symmetric noisy channel

    Args:
        cardinality: |X| = |Y|
        noise: Probability mass spread over the wrong symbols

    Returns:
        P(x,y) of shape (cardinality, cardinality)
    """
    channel = np.full((cardinality, cardinality), noise / (cardinality - 1))
    np.fill_diagonal(channel, 1.0 - noise)
    return channel / cardinality


def main():
    """
    Trace the bottleneck curve of a small noisy channel
    """
    print("=" * 80)
    print("Generalized Information Bottleneck Curve")
    print("=" * 80)

    joint_xy = create_noisy_channel_distribution()
    config = CurveConfig(n_points=8, alpha=1.0, gamma=1.0, delta=1e-6, epsilon=1e-10, verbose=True)
    curve = trace_curve(joint_xy, config, plots_dir="ib_plots")

    print(f"\n{'β':>12} {'Hga':>10} {'I(X;T)':>10} {'H(T)':>10} {'H_γ(T)':>10} {'I(T;Y)':>10}")
    for point in curve.points:
        marker = " *" if point.approximate else ""
        print(f"{point.beta:>12.6g} {point.hga:>10.6f} {point.ixt:>10.6f} {point.ht:>10.6f} "
              f"{point.hgt:>10.6f} {point.iyt:>10.6f}{marker}")
    print("\nSee ib_plots/ directory for visualization results.")


if __name__ == "__main__":
    main()
