# core/interfaces.py
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

DistanceFn = Callable[[Sequence[float], Sequence[float]], float]


@dataclass(frozen=True)
class ArchiveConfig:
    k_nearest_neighbors: int                      # neighbours averaged into a sparsity
    archive_threshold: int                        # sparsity cutoff for archiving
    distance_function: Optional[DistanceFn] = None  # None -> euclidean
    max_archive_size: Optional[int] = None        # None -> unbounded


class BehaviorArchive:
    """
    All novelty archives must implement one generation cycle:
    - record(behavior, genome): note a behavior of one genome in this generation
    - compute_sparsities(): sparsity per recorded behavior, in recording order
    - finalize_generation(): archive novel behaviors, prune, clear the generation
    and expose the archive through snapshot_archive() / archive_length().
    """

    def record(self, behavior: Sequence[float], genome: str) -> None:
        raise NotImplementedError

    def compute_sparsities(self) -> List[float]:
        raise NotImplementedError

    def finalize_generation(self) -> List[str]:
        raise NotImplementedError

    def snapshot_archive(self) -> List[Any]:
        raise NotImplementedError

    def archive_length(self) -> int:
        raise NotImplementedError

    def __len__(self):
        return self.archive_length()
