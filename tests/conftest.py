#!/usr/bin/env python3
"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path

import pytest

from rasterfakers.errors import CollaboratorError


class RecordingCollaborator:
    """Stands in for GDAL and records every call made by the encoder."""

    def __init__(
        self,
        fail_on: str | None = None,
        fail_at_band: int | None = None,
        close_error: Exception | None = None,
    ):
        self.calls = []
        self.close_error = close_error
        self.bands = {}
        self.fail_on = fail_on
        self.fail_at_band = fail_at_band
        self.dataset = object()

    def _record(self, name, *args):
        self.calls.append((name, *args))
        if name == self.fail_on and (
            self.fail_at_band is None or (args and args[0] == self.fail_at_band)
        ):
            raise CollaboratorError(f"simulated {name} failure", name)

    @property
    def call_names(self):
        return [call[0] for call in self.calls]

    def create(self, path, width, height, band_count, pixel_kind, options):
        self._record("create", path, width, height, band_count, pixel_kind, list(options))
        return self.dataset

    def set_projection(self, dataset, projection):
        assert dataset is self.dataset
        self._record("set_projection", projection)

    def set_geo_transform(self, dataset, geo_transform):
        assert dataset is self.dataset
        self._record("set_geo_transform", tuple(geo_transform))

    def write_band(self, dataset, band_index, origin, size, data):
        assert dataset is self.dataset
        self._record("write_band", band_index, origin, size)
        self.bands[band_index] = data

    def build_overviews(self, dataset, resampling, factors, bands=None):
        assert dataset is self.dataset
        self._record("build_overviews", resampling, list(factors), bands)

    def close(self, dataset):
        assert dataset is self.dataset
        self._record("close")
        if self.close_error is not None:
            raise self.close_error

    def options(self):
        return next(call[6] for call in self.calls if call[0] == "create")


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def recorder():
    """Return a fresh recording collaborator."""
    return RecordingCollaborator()


@pytest.fixture
def make_recorder():
    """Return a factory for recording collaborators that fail on demand."""
    return RecordingCollaborator
