# novelty_search/wrappers.py
"""
Novelty Search wrapper for generation-based evolutionary loops.

Adds novelty scoring to an existing loop by:
  1) computing a behavior for every genome of a generation (callable you pass),
  2) recording the behaviors in a NoveltyArchive,
  3) computing sparsities against the archive and the generation,
  4) finalizing the generation so novel behaviors are remembered.
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

import numpy as np

from .archive import NoveltyArchive

logger = logging.getLogger(__name__)


class NoveltyWrapper:
    def __init__(
        self,
        behavior_fn: Callable[[str], Sequence[float]],
        archive: Optional[NoveltyArchive] = None,
    ):
        self.behavior_fn = behavior_fn
        if archive is None:
            archive = NoveltyArchive(k_nearest_neighbors=15, archive_threshold=1)
        self.archive = archive
        self.generations = 0

        # Diagnostic tracking
        self.diagnostics = {
            'mean_sparsities': [],
            'archived_counts': [],
            'archive_lengths': [],
        }

    def score_generation(self, genomes: Iterable[str]) -> Dict[str, float]:
        """
        Score one generation of genomes by novelty.

        Args:
            genomes: Genome identifiers of the generation, in evaluation order

        Returns:
            Mapping genome -> sparsity. A genome listed more than once is recorded
            once per occurrence; the mapping keeps the sparsity of its last occurrence.

        If a behavior cannot be computed or recorded, the partial generation is
        discarded and the archive is left as it was before the call.
        """
        genomes = list(genomes)
        behaviors = [self.behavior_fn(genome) for genome in genomes]

        try:
            for behavior, genome in zip(behaviors, genomes):
                self.archive.record(behavior, genome)
            sparsities = self.archive.compute_sparsities()
        except Exception:
            self.archive.discard_generation()
            raise
        archived = self.archive.finalize_generation()

        self.generations += 1
        finite = [s for s in sparsities if np.isfinite(s)]
        mean_sparsity = float(np.mean(finite)) if finite else float("inf")
        self.diagnostics['mean_sparsities'].append(mean_sparsity)
        self.diagnostics['archived_counts'].append(len(archived))
        self.diagnostics['archive_lengths'].append(len(self.archive))

        logger.debug(
            "generation %d: mean sparsity %.4f, %d archived, archive length %d",
            self.generations, mean_sparsity, len(archived), len(self.archive),
        )
        return dict(zip(genomes, sparsities))

    def get_diagnostics(self) -> Dict[str, List[float]]:
        return {k: list(v) for k, v in self.diagnostics.items()}

    def __len__(self):
        return len(self.archive)
