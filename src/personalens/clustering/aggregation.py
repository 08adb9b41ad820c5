"""Group records by cluster and summarize each group."""

from dataclasses import dataclass, field
from typing import Sequence

from personalens.clustering.features import Record, is_numeric
from personalens.errors import ClusteringError


@dataclass
class ClusterGroup:
    """Records assigned to one cluster plus their numeric feature means."""

    cluster_id: int
    members: list[Record] = field(default_factory=list)
    means: dict[str, float] = field(default_factory=dict)

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def is_empty(self) -> bool:
        return not self.members


def feature_means(members: Sequence[Record], id_field: str) -> dict[str, float]:
    """Mean of every numeric field across members, identifier excluded.

    Each field is averaged over the members holding a numeric value for it;
    strings, bools and nulls are ignored. Keys follow first-seen order.
    """
    totals: dict[str, float] = {}
    counts: dict[str, int] = {}
    for record in members:
        for key, value in record.items():
            if key == id_field or not is_numeric(value):
                continue
            totals[key] = totals.get(key, 0.0) + float(value)
            counts[key] = counts.get(key, 0) + 1
    return {key: totals[key] / counts[key] for key in totals}


def aggregate_clusters(
    records: Sequence[Record],
    assignments: Sequence[int | None],
    k: int,
    id_field: str = "customer_id",
) -> list[ClusterGroup]:
    """Build k cluster groups from per-row assignments.

    Rows without an assignment (None, or past the end of ``assignments``)
    are dropped. Empty groups are kept, with no means.

    Args:
        records: Original records
        assignments: Cluster index per record, by position
        k: Number of clusters
        id_field: Identifier field excluded from the means

    Returns:
        k groups ordered by cluster id

    Raises:
        ClusteringError: If an assignment is outside [0, k)
    """
    groups = [ClusterGroup(cluster_id=i) for i in range(k)]
    for row_index, record in enumerate(records):
        if row_index >= len(assignments) or assignments[row_index] is None:
            continue
        cluster_id = assignments[row_index]
        if not 0 <= cluster_id < k:
            raise ClusteringError(
                f"Row {row_index} assigned to cluster {cluster_id}, outside [0, {k})."
            )
        groups[cluster_id].members.append(record)

    for group in groups:
        if not group.is_empty:
            group.means = feature_means(group.members, id_field)
    return groups
