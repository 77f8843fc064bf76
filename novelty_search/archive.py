# novelty_search/archive.py
"""
Novelty archive for generation-based novelty search.

Each generation follows a strict cycle:
  1) record(behavior, genome) once per evaluated genome,
  2) compute_sparsities() to score every recorded behavior,
  3) finalize_generation() to archive novel behaviors, prune the archive
     and clear the generation so the next one can be recorded.

Sparsity of a behavior is the mean distance to its k nearest neighbours,
drawn from the archive and from the other behaviors of the same generation.
"""

import copy
import logging
import math
import numbers
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence

import numpy as np

from core.interfaces import ArchiveConfig, BehaviorArchive, DistanceFn
from .distances import euclidean_distance
from .exceptions import BehaviorShapeError, ConfigurationError, ProtocolError

logger = logging.getLogger(__name__)

# sparsity of a behavior with nothing to compare against
MAX_SPARSITY = math.inf


class GenerationState(Enum):
    COLLECTING = "collecting"   # record() allowed
    COMPUTED = "computed"       # sparsities cached, waiting for finalize_generation()


class ArchivedBehavior(NamedTuple):
    behavior: List[float]
    genome: str


def _as_positive_int(value, name: str, optional: bool = False) -> Optional[int]:
    if value is None and optional:
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be an integer greater than zero, got {value!r}")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, numbers.Integral) or value <= 0:
        raise ConfigurationError(f"{name} must be an integer greater than zero, got {value!r}")
    return int(value)


class NoveltyArchive(BehaviorArchive):
    """
    Archive of novel behaviors plus the behaviors of the current generation.

    Args:
        k_nearest_neighbors: Number of nearest neighbours averaged into a sparsity
        archive_threshold: Behaviors with sparsity >= this value are archived
        distance_function: Callable(behavior0, behavior1) -> float, defaults to
            euclidean distance
        max_archive_size: Oldest archived behaviors are dropped beyond this size,
            unbounded when None
    """

    def __init__(
        self,
        k_nearest_neighbors: int,
        archive_threshold: int,
        distance_function: Optional[DistanceFn] = None,
        max_archive_size: Optional[int] = None,
    ):
        self.k_nearest_neighbors = _as_positive_int(k_nearest_neighbors, "k_nearest_neighbors")
        self.archive_threshold = _as_positive_int(archive_threshold, "archive_threshold")
        if distance_function is None:
            distance_function = euclidean_distance
        elif not callable(distance_function):
            raise ConfigurationError("distance_function must be callable or None")
        self.distance_function = distance_function
        self.max_archive_size = _as_positive_int(max_archive_size, "max_archive_size", optional=True)

        self._archive: List[ArchivedBehavior] = []
        self._recent: List[ArchivedBehavior] = []   # current generation, recording order
        self._sparsities: List[float] = []
        self._dimensionality: Optional[int] = None
        self._state = GenerationState.COLLECTING

    @classmethod
    def from_config(cls, cfg: ArchiveConfig) -> "NoveltyArchive":
        return cls(
            k_nearest_neighbors=cfg.k_nearest_neighbors,
            archive_threshold=cfg.archive_threshold,
            distance_function=cfg.distance_function,
            max_archive_size=cfg.max_archive_size,
        )

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def dimensionality(self) -> Optional[int]:
        return self._dimensionality

    @property
    def generation_size(self) -> int:
        return len(self._recent)

    # ------------------------------------------------------------------
    # generation cycle
    # ------------------------------------------------------------------

    def record(self, behavior: Sequence[float], genome: str) -> None:
        """Add a behavior and genome pair to the current generation."""
        if self._state is not GenerationState.COLLECTING:
            raise ProtocolError(
                "behaviors must be archived and cleared with finalize_generation() after "
                "compute_sparsities() before behaviors of the next generation are recorded"
            )
        values = self._check_behavior(behavior)
        if not isinstance(genome, str):
            raise BehaviorShapeError(f"genome must be a string, got {type(genome).__name__}")

        if self._dimensionality is None:
            self._dimensionality = len(values)
        elif len(values) != self._dimensionality:
            raise BehaviorShapeError(
                f"behavior dimensionality must match prior behavior dimensionalities: "
                f"{self._dimensionality}, got {len(values)}"
            )

        self._recent.append(ArchivedBehavior(values, genome))

    def compute_sparsities(self) -> List[float]:
        """Sparsities of this generation's behaviors, in recording order."""
        self._calculate_sparsities()
        return list(self._sparsities)

    def finalize_generation(self) -> List[str]:
        """
        Archive novel behaviors of the current generation and clear out the rest.
        Also prunes the archive down to max_archive_size.
        Use this before recording behaviors of the next generation.

        Returns:
            Genomes archived from this generation, in recording order
        """
        self._calculate_sparsities()

        archived = []
        for observation, sparsity in zip(self._recent, self._sparsities):
            if sparsity >= self.archive_threshold:
                self._archive.append(observation)
                archived.append(observation.genome)

        logger.debug(
            "finalized generation of %d behaviors, %d archived",
            len(self._recent), len(archived),
        )

        self._prune_archive()
        self._clear_generation()
        return archived

    def discard_generation(self) -> None:
        """Drop the current generation without archiving any of its behaviors."""
        if self._recent:
            logger.debug("discarded generation of %d behaviors", len(self._recent))
        self._clear_generation()

    # ------------------------------------------------------------------
    # archive access
    # ------------------------------------------------------------------

    def snapshot_archive(self) -> List[ArchivedBehavior]:
        """Copy of the archived behaviors and genomes, oldest first."""
        return copy.deepcopy(self._archive)

    def archive_length(self) -> int:
        return len(self._archive)

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _check_behavior(self, behavior) -> List[float]:
        if isinstance(behavior, np.ndarray):
            if behavior.ndim != 1:
                raise BehaviorShapeError(f"behavior must be one-dimensional, got shape {behavior.shape}")
        elif not isinstance(behavior, (list, tuple)):
            raise BehaviorShapeError(
                f"behavior must be a list, tuple or 1-D array, got {type(behavior).__name__}"
            )
        for value in behavior:
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise BehaviorShapeError(f"behavior values must be real numbers, got {value!r}")
        return [float(value) for value in behavior]

    def _clear_generation(self) -> None:
        self._recent = []
        self._sparsities = []
        self._state = GenerationState.COLLECTING

    def _prune_archive(self) -> None:
        # drop the earliest archived behaviors, leaving max_archive_size
        if self.max_archive_size is None:
            return
        overflow = len(self._archive) - self.max_archive_size
        if overflow > 0:
            del self._archive[:overflow]
            logger.info("pruned %d oldest behaviors from archive", overflow)

    def _calculate_sparsities(self) -> None:
        if len(self._recent) == 0:
            raise ProtocolError("recent behavior count must be greater than zero")

        if len(self._sparsities) != len(self._recent):
            self._sparsities = [self._measure_sparsity(i) for i in range(len(self._recent))]
            logger.debug("computed sparsities for %d behaviors", len(self._sparsities))

        self._state = GenerationState.COMPUTED

    def _measure_sparsity(self, index: int) -> float:
        # sparsity relative to the archive and the rest of the current generation
        behavior = self._recent[index].behavior

        distances = [self.distance_function(archived.behavior, behavior) for archived in self._archive]
        distances.extend(
            self.distance_function(other.behavior, behavior)
            for i, other in enumerate(self._recent)
            if i != index
        )

        k = min(self.k_nearest_neighbors, len(distances))
        if k == 0:
            return MAX_SPARSITY
        near = np.sort(np.asarray(distances, dtype=float))[:k]
        return float(np.mean(near))
