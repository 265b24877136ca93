import pytest

from vocaplan.domain.dwell import DwellBand, classify


@pytest.mark.parametrize(
    "dwell,band",
    [
        (0.0, DwellBand.VERY_FAST),
        (1.99, DwellBand.VERY_FAST),
        (2.0, DwellBand.FAST),
        (4.99, DwellBand.FAST),
        (5.0, DwellBand.MEDIUM),
        (8.0, DwellBand.SLOW),
        (9.99, DwellBand.SLOW),
        (10.0, DwellBand.VERY_SLOW),
        (120.0, DwellBand.VERY_SLOW),
    ],
)
def test_classify_half_open_bands(dwell, band):
    assert classify(dwell) is band


def test_band_bounds_follow_order():
    bounds = [band.lower_bound for band in DwellBand]
    assert bounds == sorted(bounds)
    assert DwellBand.VERY_FAST.lower_bound == 0.0
    assert DwellBand.VERY_SLOW.lower_bound == 10.0


def test_band_labels():
    assert DwellBand.VERY_FAST.label == "<2s"
    assert DwellBand.VERY_SLOW.label == ">10s"
    assert DwellBand.SLOW.display_name == "difficult"


def test_difficult_bands():
    assert not DwellBand.VERY_FAST.is_difficult
    assert not DwellBand.FAST.is_difficult
    assert DwellBand.MEDIUM.is_difficult
    assert DwellBand.VERY_SLOW.is_difficult
