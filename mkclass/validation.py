"""Module 2: Input validation for star records before classification."""

import logging
import numbers
from collections.abc import Mapping

import numpy as np

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("mass_Msun", "radius_Rsun", "teff_K")

# Plausibility limits; exceeding them is flagged, not rejected
PHYSICAL_LIMITS = {
    "mass_Msun": (150.0, "theoretical stellar mass limit"),
    "radius_Rsun": (2000.0, "largest known stellar radius (~1700 Rsun)"),
    "teff_K": (200000.0, "hottest known stars (~150000 K)"),
}


def _check_positive_finite(name, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValueError(f"{name} must be a number, got {value!r}")
    if not np.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")


def validate_star(star_dict):
    """Check that a star record is usable for classification.

    Parameters
    ----------
    star_dict : dict
        Star record with mass_Msun, radius_Rsun, teff_K and optionally
        luminosity_Lsun.

    Returns
    -------
    str
        Input flag: "ok", or "outside_physical_range" when a value exceeds
        the plausibility limits.

    Raises
    ------
    ValueError
        If the record is missing or not a mapping, a required field is
        absent, or a value is not a positive finite number.
    """
    if star_dict is None:
        raise ValueError("star record is required")
    if not isinstance(star_dict, Mapping):
        raise ValueError(f"star record must be a mapping, got {star_dict!r}")

    missing = [f for f in REQUIRED_FIELDS if star_dict.get(f) is None]
    if missing:
        raise ValueError(f"star record missing required fields: {missing}")

    for field in REQUIRED_FIELDS:
        _check_positive_finite(field, star_dict[field])

    if star_dict.get("luminosity_Lsun") is not None:
        _check_positive_finite("luminosity_Lsun", star_dict["luminosity_Lsun"])

    flag = "ok"
    for field, (limit, description) in PHYSICAL_LIMITS.items():
        if star_dict[field] > limit:
            flag = "outside_physical_range"
            logger.warning("%s=%.4g exceeds %s (limit %.4g)",
                           field, star_dict[field], description, limit)
    return flag
