"""Project customer records onto numeric feature vectors."""

from dataclasses import dataclass
from numbers import Real
from typing import Any, Mapping, Sequence

import numpy as np

from personalens.errors import InputError

# One customer row: field name -> string, number, or None
Record = Mapping[str, Any]


def is_numeric(value: Any) -> bool:
    """True for int/float values; bools are not treated as numbers."""
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class FeatureSchema:
    """Ordered feature keys fixed once per run."""

    id_field: str
    keys: tuple[str, ...]
    dropped: tuple[str, ...] = ()

    @property
    def dimension(self) -> int:
        return len(self.keys)


class FeatureVectorizer:
    """Convert records to fixed-length numeric vectors.

    The key order comes from the first record's fields (insertion order),
    minus the identifier. Columns holding any non-numeric, non-null value are
    left out of the schema. Every record must carry every schema key; a null
    value becomes 0.0.
    """

    def __init__(self, id_field: str = "customer_id") -> None:
        self.id_field = id_field

    def build_schema(self, records: Sequence[Record]) -> FeatureSchema:
        """Derive the feature schema from a record set.

        Raises:
            InputError: If there are no records or no numeric feature columns
        """
        if not records:
            raise InputError("No records to vectorize.")

        candidates = [key for key in records[0] if key != self.id_field]
        keys: list[str] = []
        dropped: list[str] = []
        for key in candidates:
            if all(r.get(key) is None or is_numeric(r.get(key)) for r in records):
                keys.append(key)
            else:
                dropped.append(key)

        if not keys:
            raise InputError("No numeric feature columns found in the data.")
        return FeatureSchema(id_field=self.id_field, keys=tuple(keys), dropped=tuple(dropped))

    def transform(self, records: Sequence[Record], schema: FeatureSchema) -> np.ndarray:
        """Map records to an (n_records, n_features) float matrix, row-aligned.

        Raises:
            InputError: If a record lacks a schema key
        """
        vectors = np.zeros((len(records), schema.dimension), dtype=np.float64)
        for row_index, record in enumerate(records):
            for col_index, key in enumerate(schema.keys):
                if key not in record:
                    raise InputError(
                        f"Record {row_index} is missing feature '{key}'."
                    )
                value = record[key]
                if value is not None:
                    vectors[row_index, col_index] = float(value)
        return vectors

    def fit_transform(self, records: Sequence[Record]) -> tuple[FeatureSchema, np.ndarray]:
        """Build the schema and vectorize in one step."""
        schema = self.build_schema(records)
        return schema, self.transform(records, schema)
