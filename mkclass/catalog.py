"""Reference stars with well-known MK classifications.

Values are rounded literature parameters, good enough to exercise every
branch of the classifiers. ``mk_type`` is the published type for comparison,
not an expected output of the heuristics.
"""

import logging

logger = logging.getLogger(__name__)

REFERENCE_STARS = [
    {
        "name": "Sun",
        "aliases": ["sol"],
        "mass_Msun": 1.0,
        "radius_Rsun": 1.0,
        "teff_K": 5778.0,
        "mk_type": "G2V",
    },
    {
        "name": "Sirius A",
        "aliases": ["alpha cma a", "hd 48915"],
        "mass_Msun": 2.06,
        "radius_Rsun": 1.71,
        "teff_K": 9940.0,
        "mk_type": "A1V",
    },
    {
        "name": "Sirius B",
        "aliases": ["alpha cma b"],
        "mass_Msun": 1.02,
        "radius_Rsun": 0.0084,
        "teff_K": 25000.0,
        "mk_type": "DA2",
    },
    {
        "name": "Procyon A",
        "aliases": ["alpha cmi a", "hd 61421"],
        "mass_Msun": 1.50,
        "radius_Rsun": 2.05,
        "teff_K": 6530.0,
        "mk_type": "F5IV-V",
    },
    {
        "name": "Proxima Centauri",
        "aliases": ["proxima cen", "alpha cen c"],
        "mass_Msun": 0.122,
        "radius_Rsun": 0.154,
        "teff_K": 3042.0,
        "mk_type": "M5.5V",
    },
    {
        "name": "Barnard's Star",
        "aliases": ["barnards star", "gj 699"],
        "mass_Msun": 0.16,
        "radius_Rsun": 0.196,
        "teff_K": 3278.0,
        "mk_type": "M4V",
    },
    {
        "name": "Arcturus",
        "aliases": ["alpha boo", "hd 124897"],
        "mass_Msun": 1.08,
        "radius_Rsun": 25.4,
        "teff_K": 4286.0,
        "mk_type": "K1.5III",
    },
    {
        "name": "Betelgeuse",
        "aliases": ["alpha ori", "hd 39801"],
        "mass_Msun": 16.5,
        "radius_Rsun": 764.0,
        "teff_K": 3600.0,
        "mk_type": "M1-M2Ia-ab",
    },
    {
        "name": "Rigel",
        "aliases": ["beta ori", "hd 34085"],
        "mass_Msun": 21.0,
        "radius_Rsun": 78.9,
        "teff_K": 12100.0,
        "mk_type": "B8Ia",
    },
]


def get_stars():
    """Return a copy of the reference star list."""
    return [dict(s) for s in REFERENCE_STARS]


def get_star(name):
    """Look up a reference star by name or alias (case-insensitive).

    Returns None if not found.
    """
    key = name.strip().lower()
    for star in REFERENCE_STARS:
        if star["name"].lower() == key or key in star["aliases"]:
            return dict(star)
    logger.debug("No reference star named '%s'", name)
    return None
