"""Module 5: MK luminosity class from radius, luminosity and mass.

Luminosity class is a spectroscopic surface-gravity indicator. Without a
spectrum we estimate it from three signals:

* radius (evolutionary regime),
* log luminosity from the Stefan-Boltzmann law,
* the offset ``delta`` between the actual luminosity and the main-sequence
  mass-luminosity baseline (Module 3).

Detectors run in a fixed order and the first match wins. Every detection
carries a confidence in [0, 1] and a short rationale.
"""

import logging
from collections import namedtuple

import numpy as np

from mkclass.main_sequence import estimate_main_sequence_luminosity, main_sequence_delta

logger = logging.getLogger(__name__)

SUPERGIANT = "supergiant"
BRIGHT_GIANT = "bright giant"
GIANT = "giant"
SUBGIANT = "subgiant"
MAIN_SEQUENCE = "main sequence (dwarf)"
SUBDWARF = "subdwarf"
WHITE_DWARF = "white dwarf (compact)"

MK_LABELS = {
    SUPERGIANT: "I",
    BRIGHT_GIANT: "II",
    GIANT: "III",
    SUBGIANT: "IV",
    MAIN_SEQUENCE: "V",
    SUBDWARF: "VI",
    WHITE_DWARF: "VII",
}

# Compact objects
WD_RADIUS_MAX = 0.05
WD_LOG_L_MAX = -1.0
WD_CONF_BASE = 0.75

# Main sequence
MS_RADIUS_RANGE = (0.10, 15.0)
MS_DELTA_STRICT = 0.60
MS_CONF_BASE = 0.70

# Subdwarfs
SD_DELTA_MAX = -0.60
SD_RADIUS_MAX = 1.5
SD_DELTA_SCALE = 1.5
SD_CONF_BASE = 0.65
SD_CONF_SPAN = 0.25

FALLBACK_CONFIDENCE = 0.55

ClassificationInputs = namedtuple("ClassificationInputs", [
    "mass_Msun", "radius_Rsun", "teff_K", "luminosity_Lsun", "log_L", "delta_log_L_ms",
])

Detection = namedtuple("Detection", ["luminosity_class", "confidence", "rationale"])

EvolvedRule = namedtuple("EvolvedRule", [
    "luminosity_class", "radius_min", "log_L_min", "radius_high_conf",
    "conf_low", "conf_high", "rationale",
])

# Most extreme first. Order is the precedence; do not sort.
EVOLVED_RULES = (
    EvolvedRule(SUPERGIANT, 100.0, 5.0, 100.0, 0.90, 0.90,
                "Extremely large radius and/or very high luminosity."),
    EvolvedRule(BRIGHT_GIANT, 30.0, 4.0, 50.0, 0.75, 0.85,
                "Large radius/high luminosity consistent with bright giants."),
    EvolvedRule(GIANT, 10.0, 2.5, 15.0, 0.70, 0.80,
                "Expanded radius and elevated luminosity consistent with giants."),
    EvolvedRule(SUBGIANT, 3.0, 1.2, 4.0, 0.60, 0.70,
                "Moderately expanded radius suggests subgiant evolution."),
)


def clamp01(value):
    return float(np.clip(value, 0.0, 1.0))


def strength(value, threshold):
    """Linear ramp: 0 at the threshold, saturating at 1 one threshold beyond it."""
    return clamp01((value - threshold) / threshold)


# -- Detectors ---------------------------------------------------------------

def detect_white_dwarf(inputs):
    if not (inputs.radius_Rsun < WD_RADIUS_MAX and inputs.log_L < WD_LOG_L_MAX):
        return None

    boost = strength(inputs.radius_Rsun, WD_RADIUS_MAX) * strength(-inputs.log_L, -WD_LOG_L_MAX)
    conf = clamp01(WD_CONF_BASE + (1.0 - WD_CONF_BASE) * boost)
    return Detection(WHITE_DWARF, conf,
                     "Very small radius and low luminosity suggest a compact object "
                     "(white dwarf regime).")


def detect_main_sequence(inputs):
    r_lo, r_hi = MS_RADIUS_RANGE
    if not (r_lo <= inputs.radius_Rsun <= r_hi):
        return None
    abs_delta = abs(inputs.delta_log_L_ms)
    if abs_delta > MS_DELTA_STRICT:
        return None

    conf = MS_CONF_BASE + (1.0 - MS_CONF_BASE) * (1.0 - min(1.0, abs_delta / MS_DELTA_STRICT))
    return Detection(MAIN_SEQUENCE, clamp01(conf),
                     "Consistent with the main-sequence mass-luminosity baseline "
                     "(|delta logL_MS| <= 0.6).")


def detect_subdwarf(inputs):
    if not (inputs.delta_log_L_ms <= SD_DELTA_MAX and inputs.radius_Rsun < SD_RADIUS_MAX):
        return None

    conf = SD_CONF_BASE + SD_CONF_SPAN * (1.0 - min(1.0, abs(inputs.delta_log_L_ms) / SD_DELTA_SCALE))
    return Detection(SUBDWARF, clamp01(conf),
                     "Under-luminous for its mass with a compact radius suggests a "
                     "subdwarf (metal-poor/high-gravity) regime.")


def first_matching_rule(rules, radius_Rsun, log_L):
    """Return the first rule whose radius OR luminosity threshold is met, else None."""
    for rule in rules:
        if radius_Rsun >= rule.radius_min or log_L >= rule.log_L_min:
            return rule
    return None


def detect_evolved(inputs, rules=EVOLVED_RULES):
    rule = first_matching_rule(rules, inputs.radius_Rsun, inputs.log_L)
    if rule is None:
        return None

    # Confidence keys on radius only, even when luminosity triggered the match
    conf = rule.conf_high if inputs.radius_Rsun >= rule.radius_high_conf else rule.conf_low
    return Detection(rule.luminosity_class, clamp01(conf), rule.rationale)


def fallback_detection():
    return Detection(MAIN_SEQUENCE, FALLBACK_CONFIDENCE,
                     "Falls outside strong giant/compact regimes; defaulting to "
                     "dwarf/main-sequence classification.")


DETECTORS = (
    detect_white_dwarf,
    detect_main_sequence,
    detect_subdwarf,
    detect_evolved,
)


def detect(inputs, detectors=DETECTORS):
    """Run detectors in order and return the first Detection, or the fallback."""
    for detector in detectors:
        detection = detector(inputs)
        if detection is not None:
            logger.debug("%s matched: %s", detector.__name__, detection.luminosity_class)
            return detection
    logger.debug("No detector matched; using fallback")
    return fallback_detection()


def build_inputs(mass_Msun, radius_Rsun, teff_K, luminosity_Lsun):
    """Derive log L and the main-sequence delta once and bundle all signals."""
    log_L = float(np.log10(luminosity_Lsun))
    delta = main_sequence_delta(mass_Msun, luminosity_Lsun)
    return ClassificationInputs(mass_Msun, radius_Rsun, teff_K, luminosity_Lsun, log_L, delta)


def classify_luminosity(mass_Msun, radius_Rsun, teff_K, luminosity_Lsun):
    """Estimate the MK luminosity class of a star.

    Parameters
    ----------
    mass_Msun : float
        Mass in solar masses.
    radius_Rsun : float
        Radius in solar radii.
    teff_K : float
        Effective temperature in Kelvin.
    luminosity_Lsun : float
        Luminosity in solar units.

    All inputs are assumed positive and finite (see mkclass.validation).

    Returns
    -------
    dict
        Luminosity class, MK label, confidence, rationale and the derived
        log L, expected main-sequence luminosity and delta.
    """
    inputs = build_inputs(mass_Msun, radius_Rsun, teff_K, luminosity_Lsun)
    detection = detect(inputs)

    logger.info(
        "M=%.3f Msun, R=%.4f Rsun, logL=%.3f, delta=%.3f -> %s (conf=%.2f)",
        mass_Msun, radius_Rsun, inputs.log_L, inputs.delta_log_L_ms,
        detection.luminosity_class, detection.confidence,
    )
    return {
        "luminosity_class": detection.luminosity_class,
        "luminosity_class_label": MK_LABELS[detection.luminosity_class],
        "luminosity_class_confidence": detection.confidence,
        "luminosity_class_rationale": detection.rationale,
        "log_L": inputs.log_L,
        "L_ms_expected_Lsun": estimate_main_sequence_luminosity(mass_Msun),
        "delta_log_L_ms": inputs.delta_log_L_ms,
    }
