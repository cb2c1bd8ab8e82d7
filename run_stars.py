"""Run the MK classification pipeline on reference or custom stars."""

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent))

from mkclass.catalog import get_star, get_stars
from mkclass.pipeline import configure_logging, format_result, process_star

logger = logging.getLogger(__name__)


def custom_star(mass, radius, teff, name="custom"):
    """Build a star record from command-line values."""
    return {
        "name": name,
        "source_id": name,
        "mass_Msun": mass,
        "radius_Rsun": radius,
        "teff_K": teff,
    }


def run(star_names=None, custom=None, output_path=None):
    """Classify reference stars by name and/or one custom star."""
    print("=" * 60)
    print("MK Stellar Classification")
    print("=" * 60)

    stars = []
    if star_names is None and custom is None:
        stars = get_stars()
    for name in (star_names or []):
        star = get_star(name)
        if star is None:
            available = ", ".join(s["name"] for s in get_stars())
            logger.warning("Unknown reference star: %s (available: %s)", name, available)
            continue
        stars.append(star)
    if custom is not None:
        stars.append(custom)

    results = {}
    for star in stars:
        name = star["name"]
        record = dict(star)
        record.setdefault("source_id", name)
        print(f"\n--- {name} ---")
        try:
            result = process_star(record)
        except ValueError as e:
            logger.error("Error processing %s: %s", name, e)
            result = {"source_id": record["source_id"], "error": str(e)}
        else:
            if star.get("mk_type"):
                result["reference_mk_type"] = star["mk_type"]
        results[name] = result
        print(format_result(name, result))
        if result.get("reference_mk_type"):
            print(f"  {'Published type':20s}: {result['reference_mk_type']}")

    if output_path is None:
        output_path = Path(__file__).resolve().parent / "output" / "results.json"
    output_path = Path(output_path)
    output_path.parent.mkdir(exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)
    logger.info("Full results saved to %s", output_path)

    return results


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="MK Stellar Classification")
    parser.add_argument("stars", nargs="*", help="Reference star names (e.g. sun, 'Sirius B', arcturus)")
    parser.add_argument("--custom", nargs=3, type=float, metavar=("MASS", "RADIUS", "TEFF"),
                        help="Classify a custom star: mass [Msun], radius [Rsun], Teff [K]")
    parser.add_argument("--output", type=str, default=None, help="JSON output path")
    args = parser.parse_args()

    configure_logging("run_stars.log")

    names = args.stars if args.stars else None
    custom = custom_star(*args.custom) if args.custom else None
    run(star_names=names, custom=custom, output_path=args.output)
