"""Feature preparation, k-means clustering, and cluster aggregation."""

from personalens.clustering.aggregation import ClusterGroup, aggregate_clusters
from personalens.clustering.engine import ClusterEngine, KMeansClusterEngine
from personalens.clustering.features import FeatureSchema, FeatureVectorizer, Record

__all__ = [
    "Record",
    "FeatureSchema",
    "FeatureVectorizer",
    "ClusterEngine",
    "KMeansClusterEngine",
    "ClusterGroup",
    "aggregate_clusters",
]
