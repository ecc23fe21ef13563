import pytest

from mean_filter.bands import Band, partition_rows
from mean_filter.errors import ConfigurationError


@pytest.mark.parametrize(
    "height, workers",
    [(1, 1), (4, 2), (10, 3), (7, 7), (100, 6), (13, 4), (5, 1)],
)
def test_bands_cover_every_row_once(height, workers):
    bands = partition_rows(height, workers)

    assert len(bands) == workers
    covered = [y for band in bands for y in band.rows()]
    assert covered == list(range(height))


@pytest.mark.parametrize("height, workers", [(10, 3), (13, 4), (100, 6), (9, 9)])
def test_band_sizes(height, workers):
    bands = partition_rows(height, workers)
    base = height // workers

    for band in bands[:-1]:
        assert len(band) == base
    assert len(bands[-1]) == height - (workers - 1) * base


def test_last_band_absorbs_remainder():
    assert partition_rows(10, 3) == [
        Band(index=0, first_row=0, last_row=3),
        Band(index=1, first_row=3, last_row=6),
        Band(index=2, first_row=6, last_row=10),
    ]


def test_single_worker_gets_whole_image():
    assert partition_rows(42, 1) == [Band(index=0, first_row=0, last_row=42)]


@pytest.mark.parametrize("workers", [0, -1])
def test_non_positive_worker_count_rejected(workers):
    with pytest.raises(ConfigurationError):
        partition_rows(10, workers)


def test_more_workers_than_rows_rejected():
    with pytest.raises(ConfigurationError, match="workers"):
        partition_rows(3, 4)


def test_empty_height_rejected():
    with pytest.raises(ConfigurationError):
        partition_rows(0, 1)
