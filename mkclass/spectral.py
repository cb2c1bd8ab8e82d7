"""Module 4: MK spectral type and subtype from effective temperature."""

import logging
from collections import namedtuple

import numpy as np

logger = logging.getLogger(__name__)

TemperatureBand = namedtuple("TemperatureBand", ["spectral_type", "teff_min_K", "teff_max_K"])

# Hot -> cool. Lower bound inclusive, upper bound exclusive.
TEMPERATURE_BANDS = (
    TemperatureBand("O", 30000.0, np.inf),
    TemperatureBand("B", 10000.0, 30000.0),
    TemperatureBand("A", 7500.0, 10000.0),
    TemperatureBand("F", 6000.0, 7500.0),
    TemperatureBand("G", 5200.0, 6000.0),
    TemperatureBand("K", 3700.0, 5200.0),
    TemperatureBand("M", 2400.0, 3700.0),
    TemperatureBand("L", 1300.0, 2400.0),
    TemperatureBand("T", 550.0, 1300.0),
    TemperatureBand("Y", 0.0, 550.0),
)
SPECTRAL_SEQUENCE = tuple(b.spectral_type for b in TEMPERATURE_BANDS)

# Stand-in upper edge of the O band for subtype interpolation
HOT_CEILING_K = 50000.0
SPAN_EPSILON_K = 1e-9


def band_for(teff_K):
    """Return the temperature band containing teff_K.

    Falls back to the coolest band instead of failing.
    """
    hottest = TEMPERATURE_BANDS[0]
    if teff_K >= hottest.teff_min_K:
        return hottest
    for band in TEMPERATURE_BANDS[1:]:
        if band.teff_min_K <= teff_K < band.teff_max_K:
            return band
    logger.warning("Teff=%r K matched no band; falling back to %s", teff_K,
                   TEMPERATURE_BANDS[-1].spectral_type)
    return TEMPERATURE_BANDS[-1]


def subtype_for(teff_K, band):
    """Subtype digit 0 (hot edge) .. 9 (cool edge) within a band."""
    hi = band.teff_max_K
    lo = band.teff_min_K
    if np.isinf(hi):
        hi = HOT_CEILING_K

    if hi - lo < SPAN_EPSILON_K:
        return 0

    x = (hi - teff_K) / (hi - lo)
    subtype = int(np.floor(10.0 * x))
    return min(max(subtype, 0), 9)


def classify_spectrum(teff_K):
    """Estimate the MK spectral class of a star.

    Parameters
    ----------
    teff_K : float
        Effective temperature in Kelvin (> 0, validated upstream).

    Returns
    -------
    dict
        spectral_type, spectral_subtype and the combined spectral_label
        (e.g. "G2").
    """
    band = band_for(teff_K)
    subtype = subtype_for(teff_K, band)
    label = f"{band.spectral_type}{subtype}"

    logger.info("Teff=%.0f K -> spectral class %s", teff_K, label)
    return {
        "spectral_type": band.spectral_type,
        "spectral_subtype": subtype,
        "spectral_label": label,
    }
