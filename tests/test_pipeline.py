"""Integration tests: full classification pipeline on reference stars."""

import json

import pytest
from mkclass.catalog import get_star, get_stars, REFERENCE_STARS
from mkclass.physics import (
    radiant_flux_W, luminosity_ratio, L_SUN_W, habitable_zone_AU, irradiance_W_m2,
    earth_equivalent_distance_AU, orbital_period_days, angular_size_deg,
    apparent_magnitude_1AU, compute_derived_properties,
)
from mkclass.pipeline import process_star, process_batch, format_result, main


class TestPhysics:

    def test_sun_luminosity(self):
        """Nominal R_sun at 5778 K gives ~1 Lsun (L_sun is defined at 5772 K)."""
        assert luminosity_ratio(1.0, 5778.0) == pytest.approx(1.0, rel=0.01)

    def test_flux_scaling(self):
        base = radiant_flux_W(1.0, 5778.0)
        assert radiant_flux_W(2.0, 5778.0) == pytest.approx(4.0 * base)
        assert radiant_flux_W(1.0, 2 * 5778.0) == pytest.approx(16.0 * base)

    def test_ratio_consistent_with_flux(self):
        assert luminosity_ratio(3.0, 4000.0) == pytest.approx(radiant_flux_W(3.0, 4000.0) / L_SUN_W)


class TestDerivedProperties:
    """Habitable zone, irradiance and Earth-equivalent orbit quantities."""

    def test_habitable_zone_scales_with_sqrt_luminosity(self):
        inner, outer = habitable_zone_AU(1.0)
        assert inner == pytest.approx(0.95)
        assert outer == pytest.approx(1.37)
        inner4, outer4 = habitable_zone_AU(4.0)
        assert inner4 == pytest.approx(1.90)
        assert outer4 == pytest.approx(2.74)

    def test_sun_irradiance_at_1AU(self):
        """Close to the solar constant (1361 W/m^2)."""
        assert irradiance_W_m2(1.0, 5778.0, 1.0) == pytest.approx(1361.0, rel=0.01)

    def test_irradiance_inverse_square(self):
        near = irradiance_W_m2(1.0, 5778.0, 1.0)
        assert irradiance_W_m2(1.0, 5778.0, 2.0) == pytest.approx(near / 4.0)

    def test_sun_earth_equivalent_distance(self):
        assert earth_equivalent_distance_AU(1.0, 5778.0) == pytest.approx(1.0)

    def test_hotter_star_farther_earth_equivalent(self):
        # L = 16 Lsun -> sqrt(16) = 4 AU
        assert earth_equivalent_distance_AU(1.0, 2 * 5778.0) == pytest.approx(4.0)

    def test_orbital_period_one_year(self):
        assert orbital_period_days(1.0, 1.0) == pytest.approx(365.25, rel=0.001)

    def test_orbital_period_kepler_scaling(self):
        # P ~ a^1.5 / sqrt(M)
        base = orbital_period_days(1.0, 1.0)
        assert orbital_period_days(1.0, 4.0) == pytest.approx(8.0 * base)
        assert orbital_period_days(4.0, 1.0) == pytest.approx(0.5 * base)

    def test_sun_angular_size(self):
        assert angular_size_deg(1.0, 1.0) == pytest.approx(0.533, abs=0.002)

    def test_sun_apparent_magnitude(self):
        assert apparent_magnitude_1AU(1.0, 5778.0) == pytest.approx(-26.74)

    def test_brighter_star_smaller_magnitude(self):
        # 100x luminosity -> 5 magnitudes brighter
        assert apparent_magnitude_1AU(10.0, 5778.0) == pytest.approx(-31.74)

    def test_compute_derived_properties_sun(self):
        props = compute_derived_properties(1.0, 1.0, 5778.0, 1.0)
        assert props["hz_inner_AU"] == pytest.approx(0.95)
        assert props["earth_equivalent_distance_AU"] == pytest.approx(1.0)
        assert props["orbital_period_eed_days"] == pytest.approx(365.25, rel=0.001)
        assert props["irradiance_1AU_rel_earth"] == pytest.approx(1.0, rel=0.01)
        assert props["angular_size_eed_rel_sun"] == pytest.approx(1.0, rel=0.01)

    def test_process_star_includes_derived(self):
        result = process_star(get_star("sun"))
        assert result["hz_inner_AU"] == pytest.approx(0.95, rel=0.01)
        assert result["hz_outer_AU"] == pytest.approx(1.37, rel=0.01)
        assert result["angular_size_eed_deg"] == pytest.approx(0.533, abs=0.002)

    def test_habitable_zone_uses_supplied_luminosity(self):
        star = {"mass_Msun": 1.0, "radius_Rsun": 1.0, "teff_K": 5778.0, "luminosity_Lsun": 100.0}
        result = process_star(star)
        assert result["hz_inner_AU"] == pytest.approx(9.5)


class TestCatalog:

    def test_lookup_by_name(self):
        star = get_star("Arcturus")
        assert star is not None
        assert star["mk_type"] == "K1.5III"

    def test_lookup_case_insensitive_alias(self):
        star = get_star("ALPHA ORI")
        assert star["name"] == "Betelgeuse"

    def test_lookup_not_found(self):
        assert get_star("Vega") is None

    def test_get_stars_returns_copies(self):
        stars = get_stars()
        stars[0]["mass_Msun"] = 99.0
        assert REFERENCE_STARS[0]["mass_Msun"] == 1.0


class TestSun:

    def test_mk_label(self):
        result = process_star(get_star("sun"))
        assert result["spectral_label"] == "G2"
        assert result["luminosity_class_label"] == "V"
        assert result["mk_label"] == "G2V"
        assert result["luminosity_method"] == "stefan_boltzmann"
        assert result["input_flag"] == "ok"

    def test_confidence(self):
        result = process_star(get_star("sun"))
        assert result["luminosity_class_confidence"] == pytest.approx(1.0, abs=0.01)


class TestReferenceStars:
    """Heuristic luminosity classes for the reference catalog."""

    @pytest.mark.parametrize("name,expected", [
        ("Sirius A", "V"),
        ("Procyon A", "V"),
        ("Proxima Centauri", "V"),
        ("Barnard's Star", "V"),
        ("Sirius B", "VII"),
        ("Arcturus", "III"),
        ("Betelgeuse", "I"),
        ("Rigel", "I"),
    ])
    def test_luminosity_class(self, name, expected):
        result = process_star(get_star(name))
        assert result["luminosity_class_label"] == expected

    def test_spectral_types(self):
        assert process_star(get_star("Proxima Centauri"))["spectral_type"] == "M"
        assert process_star(get_star("Rigel"))["spectral_type"] == "B"
        assert process_star(get_star("Arcturus"))["spectral_type"] == "K"

    def test_arcturus_high_confidence_giant(self):
        result = process_star(get_star("Arcturus"))
        assert result["luminosity_class_confidence"] == pytest.approx(0.80)

    def test_rigel_luminosity_triggered(self):
        """Rigel's radius is below 100 Rsun; log L >= 5 triggers the supergiant rule."""
        result = process_star(get_star("Rigel"))
        assert result["radius_Rsun"] < 100.0
        assert result["log_L"] >= 5.0
        assert result["luminosity_class_confidence"] == pytest.approx(0.90)


class TestProcessStar:

    def test_supplied_luminosity_used(self):
        star = {"mass_Msun": 1.0, "radius_Rsun": 1.0, "teff_K": 5778.0, "luminosity_Lsun": 100.0}
        result = process_star(star)
        assert result["luminosity_method"] == "supplied"
        assert result["luminosity_Lsun"] == 100.0
        assert result["delta_log_L_ms"] == pytest.approx(2.0)

    def test_default_source_id(self):
        result = process_star({"mass_Msun": 1.0, "radius_Rsun": 1.0, "teff_K": 5778.0})
        assert result["source_id"] == "unknown"

    def test_invalid_star_raises(self):
        with pytest.raises(ValueError):
            process_star({"mass_Msun": 1.0, "radius_Rsun": 0.0, "teff_K": 5778.0})

    def test_none_star_raises(self):
        with pytest.raises(ValueError):
            process_star(None)

    def test_does_not_mutate_input(self):
        star = {"mass_Msun": 1.0, "radius_Rsun": 1.0, "teff_K": 5778.0}
        process_star(star)
        assert star == {"mass_Msun": 1.0, "radius_Rsun": 1.0, "teff_K": 5778.0}

    def test_idempotent(self):
        star = get_star("Betelgeuse")
        assert process_star(star) == process_star(star)


class TestBatchAndCli:

    def test_batch_records_errors(self):
        stars = [get_star("sun"), {"source_id": "bad", "mass_Msun": -1.0,
                                   "radius_Rsun": 1.0, "teff_K": 5000.0}]
        results = process_batch(stars)
        assert results[0]["mk_label"] == "G2V"
        assert results[1]["source_id"] == "bad"
        assert "mass_Msun" in results[1]["error"]

    def test_format_result(self):
        text = format_result("Sun", process_star(get_star("sun")))
        assert "G2V" in text
        assert "100%" in text
        assert "Habitable zone" in text
        assert "0.95 - 1.37 AU" in text

    @pytest.mark.parametrize("entry", [5, "sun", None, [1.0, 2.0]])
    def test_batch_non_mapping_entry(self, entry):
        """A malformed entry becomes an error record; the rest still run."""
        results = process_batch([entry, get_star("sun")])
        assert results[0]["source_id"] == "unknown"
        assert "error" in results[0]
        assert results[1]["mk_label"] == "G2V"

    def test_non_mapping_error_message(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            process_star(5)

    def test_format_error(self):
        text = format_result("bad", {"source_id": "bad", "error": "mass_Msun must be positive"})
        assert "mass_Msun must be positive" in text

    def test_cli_json_str(self, tmp_path, monkeypatch):
        monkeypatch.setattr("mkclass.pipeline.LOG_DIR", tmp_path / "logs")
        out = tmp_path / "out.json"
        payload = json.dumps({"source_id": "s1", "mass_Msun": 1.0,
                              "radius_Rsun": 1.0, "teff_K": 5778.0})
        main(["--json-str", payload, "--output", str(out)])
        data = json.loads(out.read_text())
        assert len(data) == 1
        assert data[0]["mk_label"] == "G2V"
