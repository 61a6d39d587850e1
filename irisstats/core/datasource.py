"""
Named-column DataSource for irisstats.

DataSource is the "I have a table" abstraction. It holds named numeric
columns of equal length where NaN marks a missing cell, and knows how to
hand out aligned column blocks. It doesn't know which analysis consumes
them.

Usage:
    from irisstats.core.datasource import DataSource

    ds = DataSource.from_arrays(height=h, weight=w, age=a)
    ds = DataSource.from_columns({'height': h, 'weight': w})
    ds = DataSource.from_dataframe(df)

    ds.keys()                          # ('height', 'weight', 'age')
    block = ds.select(['height', 'age'])       # (n, 2), NaN kept
    block, rows = ds.complete(['height', 'age'])  # listwise deletion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray

from irisstats.core.exceptions import DimensionError, ValidationError, EmptyInputError
from irisstats.core.validation import check_array, check_1d, check_no_inf

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Table of named numeric columns. Domain-agnostic.

    Construct via factory classmethods, not directly. Column order is
    insertion order; every column has the same length.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> tuple[str, ...]:
        """Column names in insertion order."""
        return tuple(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            DimensionError: If the name does not resolve to a column,
                with a message listing the available names
        """
        if key not in self._data:
            raise DimensionError(
                f"DataSource has no column '{key}'. Available: {self.keys()}"
            )
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    @property
    def n_observations(self) -> int:
        """Number of rows (cases)."""
        return self._metadata.get('n_observations', 0)

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Block Extraction ===

    def select(self, names: Sequence[str]) -> NDArray[np.floating[Any]]:
        """
        Stack the named columns into an (n, k) matrix. NaN cells are kept.

        Raises:
            ValidationError: If no names are given
            DimensionError: If any name is unknown
        """
        if len(names) == 0:
            raise ValidationError("select: at least one column name is required")
        cols = [self[name] for name in names]
        return np.column_stack(cols)

    def complete(
        self, names: Sequence[str]
    ) -> tuple[NDArray[np.floating[Any]], NDArray[np.intp]]:
        """
        Listwise deletion: rows where every named column is present.

        Returns:
            block: (m, k) matrix of complete rows
            rows: Original row indices of the kept rows, shape (m,)
        """
        block = self.select(names)
        mask = ~np.any(np.isnan(block), axis=1)
        return block[mask], np.flatnonzero(mask)

    # === Factory Methods ===

    @classmethod
    def from_columns(cls, columns: Mapping[str, Any]) -> DataSource:
        """Construct from a mapping of column name -> 1D array-like."""
        if len(columns) == 0:
            raise EmptyInputError("DataSource requires at least one column")

        storage: dict[str, NDArray[np.floating[Any]]] = {}
        for name, values in columns.items():
            arr = check_array(values, str(name))
            check_1d(arr, str(name))
            check_no_inf(arr, str(name))
            arr = arr.copy()
            arr.setflags(write=False)
            storage[str(name)] = arr

        lengths = {name: arr.shape[0] for name, arr in storage.items()}
        if len(set(lengths.values())) > 1:
            details = ", ".join(f"{k}={v}" for k, v in lengths.items())
            raise DimensionError(f"Inconsistent column lengths: {details}")

        n_obs = next(iter(lengths.values()))
        return cls(
            _data=storage,
            _metadata={'n_observations': n_obs, 'source': 'columns'},
        )

    @classmethod
    def from_arrays(cls, **named_arrays: Any) -> DataSource:
        """Construct from keyword arrays: DataSource.from_arrays(x=..., y=...)."""
        return cls.from_columns(named_arrays)

    @classmethod
    def from_matrix(
        cls, data: Any, columns: Sequence[str] | None = None
    ) -> DataSource:
        """
        Construct from an (n, k) matrix. Columns default to V1..Vk.
        """
        arr = check_array(data, 'data')
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        if arr.ndim != 2:
            raise DimensionError(f"data: expected 1D or 2D array, got {arr.ndim}D")
        k = arr.shape[1]
        if columns is None:
            columns = [f"V{i + 1}" for i in range(k)]
        if len(columns) != k:
            raise DimensionError(
                f"Got {len(columns)} column names for {k} data columns"
            )
        return cls.from_columns({name: arr[:, i] for i, name in enumerate(columns)})

    @classmethod
    def from_dataframe(cls, df: 'pd.DataFrame') -> DataSource:
        """Construct from a pandas DataFrame (non-numeric cells become NaN upstream)."""
        ds = cls.from_columns(
            {str(col): df[col].to_numpy(dtype=np.float64) for col in df.columns}
        )
        ds._metadata['source'] = 'dataframe'
        return ds

    def __repr__(self) -> str:
        return f"DataSource(n={self.n_observations}, columns={list(self.keys())})"
