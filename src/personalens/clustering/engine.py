"""Partition feature vectors into k clusters."""

from abc import ABC, abstractmethod

import numpy as np
from sklearn.cluster import KMeans

from personalens.errors import ClusteringError, InsufficientDataError


class ClusterEngine(ABC):
    """Abstract interface for "partition N vectors into k groups"."""

    @abstractmethod
    def assign(self, vectors: np.ndarray, k: int) -> list[int]:
        """Assign each vector to a cluster.

        Args:
            vectors: (n_records, n_features) matrix
            k: Number of clusters

        Returns:
            Cluster index in [0, k) per input row, by position
        """
        pass


class KMeansClusterEngine(ClusterEngine):
    """k-means with k-means++ initialization and a fixed seed."""

    def __init__(
        self,
        random_state: int = 42,
        n_init: int = 10,
        max_iter: int = 300,
    ) -> None:
        self.random_state = random_state
        self.n_init = n_init
        self.max_iter = max_iter

    def assign(self, vectors: np.ndarray, k: int) -> list[int]:
        if len(vectors) < k:
            raise InsufficientDataError(record_count=len(vectors), k=k)

        model = KMeans(
            n_clusters=k,
            init="k-means++",
            n_init=self.n_init,
            max_iter=self.max_iter,
            random_state=self.random_state,
        )
        try:
            labels = model.fit_predict(vectors)
        except ValueError as e:
            raise ClusteringError(f"k-means failed: {e}") from e

        return [int(label) for label in labels]
