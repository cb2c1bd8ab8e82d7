"""Module 3: Main-sequence mass-luminosity baseline."""

import logging
import numpy as np

logger = logging.getLogger(__name__)


def estimate_main_sequence_luminosity(mass_Msun):
    """Expected main-sequence luminosity for a given mass.

    Piecewise power law; above 20 Msun radiation pressure flattens the
    relation to linear.

    Parameters
    ----------
    mass_Msun : float
        Stellar mass in solar masses (> 0).

    Returns
    -------
    float
        Luminosity in solar units.
    """
    m = mass_Msun
    if m < 0.43:
        return 0.23 * m**2.3
    if m < 2.0:
        return m**4.0
    if m < 20.0:
        return 1.5 * m**3.5
    return 3200.0 * m


def main_sequence_delta(mass_Msun, luminosity_Lsun):
    """log10(L) - log10(L_ms(M)); near zero for a main-sequence star."""
    l_ms = estimate_main_sequence_luminosity(mass_Msun)
    delta = float(np.log10(luminosity_Lsun) - np.log10(l_ms))
    logger.debug("M=%.3f Msun: L_ms=%.4g Lsun, delta=%.3f", mass_Msun, l_ms, delta)
    return delta
