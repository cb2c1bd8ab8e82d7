"""Pipeline orchestration: validation -> luminosity -> spectral and luminosity class -> derived properties."""

import argparse
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path

from mkclass.validation import validate_star
from mkclass.physics import luminosity_ratio, compute_derived_properties
from mkclass.spectral import classify_spectrum
from mkclass.luminosity_class import classify_luminosity

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

logger = logging.getLogger(__name__)

# Fields with default fallback values
DEFAULTS = {
    "source_id": "unknown",
    "luminosity_Lsun": None,
}


def configure_logging(log_name, level=logging.INFO):
    """Log to stderr and to logs/<log_name>."""
    LOG_DIR.mkdir(exist_ok=True)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(LOG_DIR / log_name),
            logging.StreamHandler(),
        ],
    )


def _apply_defaults(star_dict):
    """Fill in missing optional fields. Returns a new dict."""
    out = dict(star_dict)
    for key, default in DEFAULTS.items():
        if out.get(key) is None:
            out[key] = default
    return out


def process_star(star_dict):
    """Classify a single star record.

    Parameters
    ----------
    star_dict : dict
        Record with mass_Msun, radius_Rsun, teff_K and optionally
        luminosity_Lsun (computed from radius and Teff when absent) and
        source_id.

    Returns
    -------
    dict
        Inputs, derived luminosity, spectral class, luminosity class and the
        combined MK label (e.g. "G2V"), plus habitable zone, irradiance and
        Earth-equivalent orbit quantities from Module 1.

    Raises
    ------
    ValueError
        If the record is not a mapping or fails validation.
    """
    if not isinstance(star_dict, Mapping):
        raise ValueError(f"star record must be a mapping, got {star_dict!r}")
    star = _apply_defaults(star_dict)
    source_id = star["source_id"]
    logger.info("Processing star %s", source_id)

    input_flag = validate_star(star)

    mass = star["mass_Msun"]
    radius = star["radius_Rsun"]
    teff = star["teff_K"]

    result = {
        "source_id": source_id,
        "mass_Msun": mass,
        "radius_Rsun": radius,
        "teff_K": teff,
        "input_flag": input_flag,
    }

    luminosity = star["luminosity_Lsun"]
    if luminosity is None:
        luminosity = luminosity_ratio(radius, teff)
        result["luminosity_method"] = "stefan_boltzmann"
    else:
        result["luminosity_method"] = "supplied"
    result["luminosity_Lsun"] = luminosity

    result.update(classify_spectrum(teff))
    result.update(classify_luminosity(mass, radius, teff, luminosity))
    result["mk_label"] = result["spectral_label"] + result["luminosity_class_label"]
    result.update(compute_derived_properties(mass, radius, teff, luminosity))

    logger.info("Finished star %s: %s", source_id, result["mk_label"])
    return result


def format_result(name, result):
    """Format a single star result for display."""
    lines = []
    lines.append(f"  {'Star':20s}: {name}")
    lines.append(f"  {'Source ID':20s}: {result.get('source_id', '?')}")

    if "error" in result:
        lines.append(f"  {'Error':20s}: {result['error']}")
        return "\n".join(lines)

    lines.append(f"  {'Inputs':20s}: M={result['mass_Msun']:.2f} Msun, "
                 f"R={result['radius_Rsun']:.2f} Rsun, T={result['teff_K']:.0f} K")
    flag = result.get("input_flag", "ok")
    if flag != "ok":
        lines.append(f"  {'  input flag':20s}: {flag}")

    lines.append(f"  {'Luminosity':20s}: {result['luminosity_Lsun']:.3f} Lsun  "
                 f"({result.get('luminosity_method', '?')})")
    lines.append(f"  {'Spectral class':20s}: {result['spectral_label']}")
    lines.append(f"  {'Luminosity class':20s}: {result['luminosity_class_label']} "
                 f"({result['luminosity_class']})")
    lines.append(f"  {'  confidence':20s}: {result['luminosity_class_confidence'] * 100.0:.0f}%")
    lines.append(f"  {'  delta logL_MS':20s}: {result['delta_log_L_ms']:.2f}")
    rationale = result.get("luminosity_class_rationale")
    if rationale:
        lines.append(f"  {'  rationale':20s}: {rationale}")
    lines.append(f"  {'MK type':20s}: {result['mk_label']}")

    if "hz_inner_AU" in result:
        lines.append(f"  {'Habitable zone':20s}: {result['hz_inner_AU']:.2f} - {result['hz_outer_AU']:.2f} AU")
        lines.append(f"  {'Irradiance at 1 AU':20s}: {result['irradiance_1AU_W_m2']:.4g} W/m^2  "
                     f"({result['irradiance_1AU_rel_earth'] * 100.0:.1f}% of Earth)")
        lines.append(f"  {'Earth-equiv. dist.':20s}: {result['earth_equivalent_distance_AU']:.3f} AU")
        lines.append(f"  {'  orbital period':20s}: {result['orbital_period_eed_days']:.1f} d")
        lines.append(f"  {'  angular size':20s}: {result['angular_size_eed_deg']:.2f} deg  "
                     f"({result['angular_size_eed_rel_sun'] * 100.0:.1f}% of the Sun)")
        lines.append(f"  {'Apparent mag (1 AU)':20s}: {result['apparent_magnitude_1AU']:.2f}")

    return "\n".join(lines)


def process_batch(stars):
    """Classify a list of records; invalid records yield an error entry."""
    results = []
    for star in stars:
        try:
            results.append(process_star(star))
        except ValueError as e:
            source_id = "unknown"
            if isinstance(star, Mapping):
                source_id = star.get("source_id") or "unknown"
            logger.error("Error processing %s: %s", source_id, e)
            results.append({"source_id": source_id, "error": str(e)})
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(description="MK Stellar Classification Pipeline")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--json-file", type=str, help="Path to JSON file (single star or list)")
    group.add_argument("--json-str", type=str, help="Inline JSON string")
    parser.add_argument("--output", type=str, default=None, help="Output file path (default: stdout)")
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args(argv)

    configure_logging("pipeline.log", level=getattr(logging, args.log_level))

    if args.json_file:
        with open(args.json_file, "r") as f:
            data = json.load(f)
    else:
        data = json.loads(args.json_str)

    # Accept single star or list
    if isinstance(data, dict):
        data = [data]

    results = process_batch(data)
    output_json = json.dumps(results, indent=2)

    if args.output:
        with open(args.output, "w") as f:
            f.write(output_json)
        logger.info("Results written to %s", args.output)
    else:
        sys.stdout.write(output_json + "\n")


if __name__ == "__main__":
    main()
