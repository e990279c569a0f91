# gpinc/core/buffers.py
# --------------------------------------------------------------
# Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
# Copyright (c) 2022-2026, CentraleSupelec
# License: GPLv3 (see LICENSE)
# --------------------------------------------------------------
"""
Arrays that grow by appending rows.

Storage is over-allocated (capacity grows by a factor 1.5) so that n
successive appends cost O(n) amortized copies. Rows beyond the current
length are never visible; appending writes them first and then moves
the length, so a failed append leaves the visible content unchanged.
"""
import gpinc.num as gnp

_GROWTH = 1.5


def _grown_capacity(capacity, required):
    return max(required, int(_GROWTH * capacity), 4)


class ExtendableArray:
    """Array of shape (n, ...) with amortized O(1) appends along axis 0."""

    def __init__(self, data, capacity=None):
        data = gnp.asarray(data)
        self._n = data.shape[0]
        capacity = self._n if capacity is None else max(capacity, self._n)
        self._data = gnp.zeros((capacity,) + data.shape[1:])
        self._data[: self._n] = data

    @classmethod
    def empty(cls, trailing_shape=(), capacity=0):
        return cls(gnp.zeros((0,) + tuple(trailing_shape)), capacity=capacity)

    def __len__(self):
        return self._n

    @property
    def shape(self):
        return (self._n,) + self._data.shape[1:]

    @property
    def capacity(self):
        return self._data.shape[0]

    @property
    def view(self):
        """Visible content, as a view on the storage."""
        return self._data[: self._n]

    def append(self, rows):
        rows = gnp.asarray(rows).reshape((-1,) + self._data.shape[1:])
        required = self._n + rows.shape[0]
        if required > self.capacity:
            data = gnp.zeros((_grown_capacity(self.capacity, required),) + self._data.shape[1:])
            data[: self._n] = self._data[: self._n]
            self._data = data
        self._data[self._n : required] = rows
        self._n = required

    def truncate(self, n):
        """Drop the rows beyond n."""
        if not 0 <= n <= self._n:
            raise ValueError(f"cannot truncate length {self._n} to {n}")
        self._n = n

    def copy(self):
        return gnp.copy(self.view)


class ExtendableTriangular:
    """Lower-triangular (n, n) matrix extended one row at a time."""

    def __init__(self, L, capacity=None):
        L = gnp.asarray(L)
        self._n = L.shape[0]
        capacity = self._n if capacity is None else max(capacity, self._n)
        self._data = gnp.zeros((capacity, capacity))
        self._data[: self._n, : self._n] = gnp.tril(L)

    def __len__(self):
        return self._n

    @property
    def capacity(self):
        return self._data.shape[0]

    @property
    def view(self):
        return self._data[: self._n, : self._n]

    def append_row(self, r, d):
        """Extend the factor by the row [rᵀ, d]."""
        n = self._n
        if n + 1 > self.capacity:
            capacity = _grown_capacity(self.capacity, n + 1)
            data = gnp.zeros((capacity, capacity))
            data[:n, :n] = self._data[:n, :n]
            self._data = data
        self._data[n, :n] = r
        self._data[n, n] = d
        self._data[n, n + 1 :] = 0.0
        self._n = n + 1

    def truncate(self, n):
        if not 0 <= n <= self._n:
            raise ValueError(f"cannot truncate size {self._n} to {n}")
        self._n = n

    def copy(self):
        return gnp.copy(self.view)
