"""
Continuous-time Markov chain defined by its infinitesimal generator
"""
import numpy as np
import pandas as pd
from scipy import sparse
from scipy.linalg import expm
from scipy.sparse.linalg import expm as sparse_expm
from typing import Any, Hashable, Optional, Sequence, Tuple, Union
import logging

from ..diffusion.ito_process import ItoDiffusionProcess
from ..diffusion.generator_builder import build_generator, validate_grid
from ..utils import constants
from ..utils.exceptions import (
    NotSquareError,
    PositiveDiagonalError,
    RowSumNonzeroError,
    SizeMismatchError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GeneratorLike = Union[np.ndarray, sparse.spmatrix, Sequence[Sequence[float]]]


class ContinuousTimeMarkovChain:
    """
    Continuous-time Markov chain over a finite, labelled state space.

    Off-diagonal entry ``generator[i, j]`` is the intensity of jumping from
    state ``i`` to state ``j``; every row sums to zero and every diagonal
    element is negative or zero. These conditions are checked once, here,
    and a chain that fails them is never created. The chain is not modified
    afterwards.

    See also https://en.wikipedia.org/wiki/Continuous-time_Markov_chain
    """

    def __init__(
        self,
        generator: GeneratorLike,
        states: Optional[Sequence[Any]] = None
    ):
        """
        Args:
            generator: Square dense or scipy.sparse intensity matrix
            states: Labels of the rows/columns; defaults to 1..n
        """
        if sparse.issparse(generator):
            generator = generator.copy()
            if generator.format in ("lil", "dok"):
                # Entries live in Python containers that cannot be locked
                generator = generator.tocsr()
        else:
            try:
                generator = np.array(generator, copy=True)
            except ValueError as e:
                raise NotSquareError("Infinitesimal generator rows have unequal lengths.") from e

        _check_generator(generator)

        n = generator.shape[0]
        if states is None:
            states = range(1, n + 1)
        states = tuple(states)

        if len(states) != n:
            raise SizeMismatchError(
                f"Size mismatch between the infinitesimal generator ({n}x{n}) "
                f"and the state vector ({len(states)} states)."
            )

        sparse_generator = sparse.csr_matrix(generator, dtype=np.float64, copy=True)
        sparse_generator.sum_duplicates()
        sparse_generator.sort_indices()

        self._generator = _read_only(generator)
        self._states = states
        self._sparse_generator = _read_only(sparse_generator)

        logger.debug(f"Continuous Markov chain created with {n} states")

    @classmethod
    def from_diffusion(
        cls,
        process: ItoDiffusionProcess,
        grid: Union[Sequence[float], np.ndarray]
    ) -> "ContinuousTimeMarkovChain":
        """
        Approximate a one-dimensional diffusion by a chain on the grid points.

        The grid values become the state labels.
        """
        grid = validate_grid(grid)
        generator = build_generator(process, grid)
        chain = cls(generator, grid)
        logger.info(f"Diffusion approximated by a continuous Markov chain with {grid.size} states")
        return chain

    @property
    def generator(self) -> Union[np.ndarray, sparse.spmatrix]:
        """Infinitesimal generator in the format it was supplied"""
        return self._generator

    @property
    def states(self) -> Tuple[Any, ...]:
        return self._states

    @property
    def n_states(self) -> int:
        return len(self._states)

    @property
    def sparse_generator(self) -> sparse.csr_matrix:
        """Float64 CSR copy of the generator, shared by the solvers"""
        return self._sparse_generator

    def __len__(self) -> int:
        return self.n_states

    def exit_rates(self) -> np.ndarray:
        """Total intensity of leaving each state (negated diagonal)"""
        return -self._sparse_generator.diagonal()

    def expected_holding_time(self, index: int) -> float:
        """Mean time spent in a state before jumping; infinite for absorbing states"""
        rate = self.exit_rates()[index]
        return 1.0 / rate if rate > 0 else np.inf

    def transition_rate(self, from_index: int, to_index: int) -> float:
        """Intensity of the jump from one state to another"""
        if from_index == to_index:
            return 0.0
        return float(self._sparse_generator[from_index, to_index])

    def transition_matrix(self, t: float) -> np.ndarray:
        """Transition probabilities over a horizon t, P(t) = exp(Qt)"""
        if t < 0:
            raise ValueError("Time horizon must be non-negative")

        if sparse.issparse(self._generator):
            return sparse_expm(self._sparse_generator.tocsc() * t).toarray()
        return expm(np.asarray(self._generator, dtype=np.float64) * t)

    def index_of(self, label: Hashable) -> int:
        """Position of a state label"""
        for idx, state in enumerate(self._states):
            if state == label:
                return idx
        raise KeyError(f"Unknown state: {label!r}")

    def to_frame(self, limit: Optional[int] = None) -> pd.DataFrame:
        """Generator as a labelled DataFrame, optionally only the first few states"""
        n = self.n_states if limit is None else min(limit, self.n_states)
        block = self._sparse_generator[:n, :n].toarray()
        labels = list(self._states[:n])
        return pd.DataFrame(block, index=labels, columns=labels)

    def __repr__(self) -> str:
        kind = "sparse" if sparse.issparse(self._generator) else "dense"
        return f"ContinuousTimeMarkovChain(n_states={self.n_states}, generator={kind})"

    def __str__(self) -> str:
        return self.describe()

    def describe(self, display_limit: int = constants.DISPLAY_LIMIT) -> str:
        """Text rendering of the generator and state space, truncated for large chains"""
        lines = ["Continuous Time Markov Chain object."]
        limit = None
        if self.n_states > display_limit:
            limit = display_limit
            lines.append("Stored objects are too large. Showing only first few elements.")

        lines.append("")
        lines.append("Infinitesimal generator:")
        lines.append(self.to_frame(limit).to_string())
        lines.append("")
        lines.append("State space:")
        shown = self._states if limit is None else self._states[:limit]
        lines.append(", ".join(str(state) for state in shown))

        return "\n".join(lines)


def _check_generator(generator: Union[np.ndarray, sparse.spmatrix]) -> None:
    """Raise the matching ValidationError if the matrix is not a valid generator"""
    dtype = generator.dtype
    is_integer = np.issubdtype(dtype, np.integer)
    if not (is_integer or np.issubdtype(dtype, np.floating)):
        raise ValidationError(
            f"Infinitesimal generator must be real-valued, got dtype {dtype}.",
            error_code="not_real"
        )

    if generator.ndim != 2 or generator.shape[0] != generator.shape[1]:
        raise NotSquareError(
            f"Infinitesimal generator must be a square matrix, got shape {generator.shape}."
        )

    if generator.shape[0] == 0:
        raise ValidationError("Infinitesimal generator must have at least one state.", error_code="empty")

    if sparse.issparse(generator):
        row_sums = np.asarray(generator.sum(axis=1)).ravel()
        diagonal = np.asarray(generator.diagonal()).ravel()
    else:
        row_sums = generator.sum(axis=1)
        diagonal = np.diagonal(generator)

    # Integer rows must sum to exactly zero. Real rows may miss zero by the
    # machine precision around the diagonal element, plus two orders of magnitude.
    if is_integer:
        bad_rows = np.flatnonzero(row_sums != 0)
    else:
        atol = constants.ROW_SUM_ULPS * np.spacing(np.abs(diagonal))
        bad_rows = np.flatnonzero(~(np.abs(row_sums) <= atol))

    if bad_rows.size > 0:
        row = int(bad_rows[0])
        raise RowSumNonzeroError(
            f"Rows of the infinitesimal generator must sum to 0 (row {row} sums to {row_sums[row]})."
        )

    positive = np.flatnonzero(diagonal > 0)
    if positive.size > 0:
        row = int(positive[0])
        raise PositiveDiagonalError(
            f"Diagonal elements of the infinitesimal generator must be negative or zero "
            f"(element {row} is {diagonal[row]})."
        )


def _read_only(matrix: Union[np.ndarray, sparse.spmatrix]) -> Union[np.ndarray, sparse.spmatrix]:
    """Lock the arrays backing a dense or sparse matrix against writes"""
    if not sparse.issparse(matrix):
        matrix.setflags(write=False)
        return matrix

    for name in ("data", "indices", "indptr", "row", "col", "offsets"):
        array = getattr(matrix, name, None)
        if isinstance(array, np.ndarray):
            array.setflags(write=False)
    return matrix
