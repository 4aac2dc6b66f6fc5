from dataclasses import dataclass
from typing import Tuple

from match3.components.cluster import Cluster


@dataclass(frozen=True, slots=True)
class SwapResult:
    """Outcome of a single swap attempt.

    ``clusters_formed`` holds the clusters the swap itself created; clusters
    from later cascade passes are only reflected in ``score_delta`` and
    ``cascade_depth``.
    """
    accepted: bool
    score_delta: int = 0
    clusters_formed: Tuple[Cluster, ...] = ()
    cascade_depth: int = 0
