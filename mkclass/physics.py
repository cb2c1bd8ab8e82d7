"""Module 1: Stefan-Boltzmann luminosity and star-only derived quantities.

Everything here follows from mass, radius and temperature: radiant flux,
habitable zone, irradiance at a distance, the Earth-equivalent distance (where
the star delivers the solar constant), and the orbital period, angular size
and apparent magnitude that go with it.
"""

import logging
import numpy as np
from astropy import constants as const

logger = logging.getLogger(__name__)

# IAU 2015 B3 nominal solar values
R_SUN_M = const.R_sun.value
L_SUN_W = const.L_sun.value
M_SUN_KG = const.M_sun.value
SIGMA_SB = const.sigma_sb.value
G_SI = const.G.value
AU_M = const.au.value
T_EFF_SUN = 5778.0  # K

SOLAR_CONSTANT_W_M2 = 1361.0
SUN_APPARENT_MAG = -26.74
SUN_ANGULAR_SIZE_DEG = 0.53
SECONDS_PER_DAY = 86400.0

# Conservative habitable zone edges in units of sqrt(L/Lsun) AU
HZ_INNER_FACTOR = 0.95
HZ_OUTER_FACTOR = 1.37


def radiant_flux_W(radius_Rsun, teff_K):
    """Total radiant power emitted by a blackbody sphere.

    Parameters
    ----------
    radius_Rsun : float
        Stellar radius in solar radii.
    teff_K : float
        Effective temperature in Kelvin.

    Returns
    -------
    float
        Radiant flux in watts, L = sigma * 4 pi R^2 * T^4.
    """
    radius_m = radius_Rsun * R_SUN_M
    surface_area = 4.0 * np.pi * radius_m**2
    return float(SIGMA_SB * surface_area * teff_K**4)


def luminosity_ratio(radius_Rsun, teff_K):
    """Luminosity in solar units from radius and temperature."""
    lum = radiant_flux_W(radius_Rsun, teff_K) / L_SUN_W
    logger.debug("R=%.4f Rsun, Teff=%.0f K -> L=%.5g Lsun", radius_Rsun, teff_K, lum)
    return lum


def habitable_zone_AU(luminosity_Lsun):
    """Inner and outer habitable zone edges in AU."""
    base = float(np.sqrt(luminosity_Lsun))
    return base * HZ_INNER_FACTOR, base * HZ_OUTER_FACTOR


def irradiance_W_m2(radius_Rsun, teff_K, distance_AU=1.0):
    """Stellar flux received per unit area at a distance."""
    distance_m = distance_AU * AU_M
    return radiant_flux_W(radius_Rsun, teff_K) / (4.0 * np.pi * distance_m**2)


def earth_equivalent_distance_AU(radius_Rsun, teff_K):
    """Distance at which the star delivers the same irradiance the Sun gives Earth.

    Uses the relative form sqrt(R^2 (T/Tsun)^4), so the Sun sits at exactly 1 AU.
    """
    return float(np.sqrt(radius_Rsun**2 * (teff_K / T_EFF_SUN)**4))


def orbital_period_days(mass_Msun, orbit_AU):
    """Kepler's third law period for a test body around a star of the given mass."""
    r = orbit_AU * AU_M
    m = mass_Msun * M_SUN_KG
    period_s = 2.0 * np.pi * np.sqrt(r**3 / (G_SI * m))
    return float(period_s / SECONDS_PER_DAY)


def angular_size_deg(radius_Rsun, distance_AU):
    """Full angular diameter of the star seen from a distance."""
    radius_m = radius_Rsun * R_SUN_M
    distance_m = distance_AU * AU_M
    return float(2.0 * np.degrees(np.arctan(radius_m / distance_m)))


def apparent_magnitude_1AU(radius_Rsun, teff_K):
    """Apparent magnitude at 1 AU, scaled from the Sun's -26.74."""
    rel_lum = radius_Rsun**2 * (teff_K / T_EFF_SUN)**4
    return float(-2.5 * np.log10(rel_lum) + SUN_APPARENT_MAG)


def compute_derived_properties(mass_Msun, radius_Rsun, teff_K, luminosity_Lsun):
    """Star-only derived quantities for reporting.

    Parameters
    ----------
    mass_Msun, radius_Rsun, teff_K : float
        Validated stellar parameters.
    luminosity_Lsun : float
        Luminosity used for the habitable zone (computed or supplied).

    Returns
    -------
    dict
        Habitable zone, irradiance at 1 AU, Earth-equivalent distance and the
        orbital period and angular size at that distance, apparent magnitude
        at 1 AU.
    """
    hz_inner, hz_outer = habitable_zone_AU(luminosity_Lsun)
    eed = earth_equivalent_distance_AU(radius_Rsun, teff_K)
    irradiance = irradiance_W_m2(radius_Rsun, teff_K, 1.0)
    angular_size = angular_size_deg(radius_Rsun, eed)

    result = {
        "hz_inner_AU": hz_inner,
        "hz_outer_AU": hz_outer,
        "irradiance_1AU_W_m2": irradiance,
        "irradiance_1AU_rel_earth": irradiance / SOLAR_CONSTANT_W_M2,
        "earth_equivalent_distance_AU": eed,
        "orbital_period_eed_days": orbital_period_days(mass_Msun, eed),
        "angular_size_eed_deg": angular_size,
        "angular_size_eed_rel_sun": angular_size / SUN_ANGULAR_SIZE_DEG,
        "apparent_magnitude_1AU": apparent_magnitude_1AU(radius_Rsun, teff_K),
    }
    logger.info(
        "HZ=[%.3f, %.3f] AU, EED=%.3f AU, P_eed=%.1f d, S_1AU=%.4g W/m^2",
        hz_inner, hz_outer, eed, result["orbital_period_eed_days"], irradiance,
    )
    return result
