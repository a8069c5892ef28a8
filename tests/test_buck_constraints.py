"""Tests for buck converter sizing (dcdc_tools.design.buck)."""

import logging
import math

import pytest

from dcdc_tools.design import BuckConstraints, BuckSolution, ConductionMode
from dcdc_tools.exceptions import DesignValidationError
from dcdc_tools.types import ToleranceRange


def _design(**overrides) -> BuckConstraints:
    params = {
        "input_voltage": 12.0,
        "output_voltage": 5.0,
        "input_ripple_max": 0.1,
        "output_ripple_max": 0.05,
        "output_current": 1.0,
        "frequency": 500e3,
        "ripple_ratio": 0.3,
    }
    params.update(overrides)
    return BuckConstraints(**params)


class TestValidation:
    """Constructor checks on every field."""

    def test_scalars_lifted_to_exact_ranges(self):
        design = _design()
        assert design.input_voltage == ToleranceRange.exact(12.0)
        assert design.frequency == ToleranceRange.exact(500e3)

    @pytest.mark.parametrize(
        "field", ["input_voltage", "output_voltage", "output_current", "frequency"]
    )
    def test_range_fields_reject_zero(self, field):
        with pytest.raises(DesignValidationError) as exc_info:
            _design(**{field: 0.0})
        assert exc_info.value.field == field

    @pytest.mark.parametrize("field", ["input_ripple_max", "output_ripple_max", "ripple_ratio"])
    def test_scalar_fields_reject_non_positive(self, field):
        with pytest.raises(DesignValidationError):
            _design(**{field: -0.1})

    def test_scalar_fields_reject_infinity(self):
        with pytest.raises(DesignValidationError):
            _design(ripple_ratio=math.inf)

    def test_zero_frequency_rejected(self):
        with pytest.raises(DesignValidationError, match="frequency"):
            _design(frequency=ToleranceRange(0.0, 500e3))

    def test_output_current_may_start_at_zero(self):
        design = _design(output_current=ToleranceRange.between(0.0, 2.0, typ=1.0))
        assert design.output_current.min == 0.0

    def test_negative_output_current_rejected(self):
        with pytest.raises(DesignValidationError, match="output_current"):
            _design(output_current=ToleranceRange(-1.0, 2.0))

    def test_output_current_all_zero_rejected(self):
        with pytest.raises(DesignValidationError):
            _design(output_current=ToleranceRange.exact(0.0))

    def test_non_numeric_field_rejected(self):
        with pytest.raises(DesignValidationError, match="must be a number"):
            _design(input_voltage="12V")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            _design(frequency=-1.0)

    def test_frozen(self):
        design = _design()
        with pytest.raises(AttributeError):
            design.frequency = 1e6  # type: ignore[misc]

    def test_warns_when_output_can_reach_input(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dcdc_tools"):
            _design(input_voltage=ToleranceRange(4.5, 5.5), output_voltage=5.0)
        assert "duty cycle may reach 100%" in caplog.text

    def test_no_warning_for_normal_design(self, caplog):
        with caplog.at_level(logging.WARNING, logger="dcdc_tools"):
            _design()
        assert caplog.text == ""


class TestUnits:
    """Ranges carrying units feed the same equations as plain numbers."""

    @pytest.fixture
    def unit_design(self) -> BuckConstraints:
        return BuckConstraints(
            input_voltage=ToleranceRange.from_center_abs(12.0, 0.5, "V"),
            output_voltage=5.0,
            input_ripple_max=0.1,
            output_ripple_max=0.05,
            output_current=ToleranceRange.between(0.0, 2.0, typ=1.0, unit="A"),
            frequency=ToleranceRange.exact(500e3, "Hz"),
            ripple_ratio=0.3,
        )

    def test_units_dropped_on_construction(self, unit_design):
        assert unit_design.input_voltage.unit == ""
        assert unit_design.output_current.unit == ""
        assert unit_design.frequency == ToleranceRange.exact(500e3)

    def test_full_chain_matches_unitless(self, unit_design, reference_design):
        pairs = [
            (unit_design.duty_cycle(), reference_design.duty_cycle()),
            (unit_design.target_ripple_current(), reference_design.target_ripple_current()),
            (unit_design.compute_l(), reference_design.compute_l()),
            (
                unit_design.compute_ripple_current(22e-6),
                reference_design.compute_ripple_current(22e-6),
            ),
            (unit_design.compute_rms_current(22e-6), reference_design.compute_rms_current(22e-6)),
            (
                unit_design.compute_input_rms_current(),
                reference_design.compute_input_rms_current(),
            ),
            (unit_design.output_power(), reference_design.output_power()),
        ]
        for with_units, plain in pairs:
            assert with_units == plain

        assert unit_design.compute_peak_current(22e-6) == reference_design.compute_peak_current(
            22e-6
        )
        assert unit_design.compute_min_cout(22e-6) == reference_design.compute_min_cout(22e-6)
        assert unit_design.compute_min_cin() == reference_design.compute_min_cin()
        assert unit_design.compute_max_esr(22e-6) == reference_design.compute_max_esr(22e-6)
        assert unit_design.compute_critical_inductance(1.0) == pytest.approx(
            reference_design.compute_critical_inductance(1.0)
        )
        assert unit_design.is_ccm(22e-6) is reference_design.is_ccm(22e-6)
        assert unit_design.solve(22e-6) == reference_design.solve(22e-6)

    def test_every_field_with_units(self):
        design = _design(
            input_voltage=ToleranceRange.exact(12.0, "V"),
            output_voltage=ToleranceRange.exact(5.0, "V"),
            output_current=ToleranceRange.exact(1.0, "A"),
        )
        assert design.compute_rms_current(22e-6) == _design().compute_rms_current(22e-6)

    def test_inductance_with_unit(self, reference_design):
        ripple = reference_design.compute_ripple_current(ToleranceRange.exact(22e-6, "H"))
        assert ripple == reference_design.compute_ripple_current(22e-6)


class TestEquations:
    """Equation chain on the 12V -> 5V reference design."""

    def test_duty_cycle(self, reference_design):
        duty = reference_design.duty_cycle()
        assert duty.min == pytest.approx(5.0 / 12.5)
        assert duty.max == pytest.approx(5.0 / 11.5)
        assert duty.typ == pytest.approx(5.0 / 12.0)

    def test_target_ripple_current(self, reference_design):
        target = reference_design.target_ripple_current()
        assert target.min == 0.0
        assert target.typ == pytest.approx(0.3)
        assert target.max == pytest.approx(0.6)

    def test_compute_l_reference_design(self, reference_design):
        inductance = reference_design.compute_l()
        assert inductance.min > 0
        assert inductance.min == pytest.approx(8.667e-6, rel=1e-3)
        assert inductance.typ == pytest.approx(19.44e-6, rel=1e-3)
        assert inductance.max == math.inf

    def test_compute_l_bounded_with_minimum_load(self, loaded_design):
        inductance = loaded_design.compute_l()
        assert inductance.is_bounded
        assert inductance.max == pytest.approx(43.48e-6, rel=1e-3)

    def test_ripple_of_computed_inductance_meets_target(self, reference_design):
        ripple = reference_design.compute_ripple_current(reference_design.compute_l().typ)
        target = reference_design.target_ripple_current()
        assert ripple.typ == pytest.approx(target.typ)

    def test_ripple_round_trip_exact_inputs(self):
        design = _design()
        ripple = design.compute_ripple_current(design.compute_l())
        target = design.target_ripple_current()
        assert ripple.min == pytest.approx(target.min)
        assert ripple.max == pytest.approx(target.max)

    def test_ripple_current_value(self, reference_design):
        ripple = reference_design.compute_ripple_current(22e-6)
        assert ripple.typ == pytest.approx((5.0 / 12.0) * 7.0 / (500e3 * 22e-6))

    def test_ripple_current_frequency_override(self, reference_design):
        base = reference_design.compute_ripple_current(22e-6)
        doubled = reference_design.compute_ripple_current(22e-6, frequency=1e6)
        assert doubled.typ == pytest.approx(base.typ / 2)

    def test_ripple_current_rejects_zero_frequency(self, reference_design):
        with pytest.raises(DesignValidationError, match="frequency"):
            reference_design.compute_ripple_current(22e-6, frequency=0.0)

    def test_ripple_current_rejects_zero_inductance(self, reference_design):
        with pytest.raises(DesignValidationError, match="inductance"):
            reference_design.compute_ripple_current(0.0)

    def test_ripple_current_rejects_range_touching_zero(self, reference_design):
        with pytest.raises(DesignValidationError):
            reference_design.compute_ripple_current(ToleranceRange(0.0, 22e-6))

    def test_peak_current(self, reference_design):
        ripple = reference_design.compute_ripple_current(22e-6)
        peak = reference_design.compute_peak_current(22e-6)
        assert peak == pytest.approx(2.0 + ripple.max / 2)
        assert peak >= reference_design.output_current.typ

    def test_rms_current_bounds(self, reference_design):
        rms = reference_design.compute_rms_current(22e-6)
        ripple = reference_design.compute_ripple_current(22e-6)
        assert rms.min >= 0
        assert rms.max == pytest.approx(math.sqrt(2.0**2 + ripple.max**2 / 12))
        assert rms.typ >= reference_design.output_current.typ

    def test_min_cout(self, reference_design):
        ripple = reference_design.compute_ripple_current(22e-6)
        cout = reference_design.compute_min_cout(22e-6)
        assert cout == pytest.approx(ripple.max / (8 * 0.05 * 500e3))

    def test_min_cin(self, reference_design):
        assert reference_design.compute_min_cin() == pytest.approx(1.0435e-5, rel=1e-3)

    def test_larger_inductance_needs_less_output_capacitance(self, reference_design):
        assert reference_design.compute_min_cout(47e-6) < reference_design.compute_min_cout(
            22e-6
        )


class TestConductionMode:
    def test_is_ccm_false_at_nominal_load(self, reference_design):
        assert reference_design.is_ccm(22e-6) is False
        assert reference_design.conduction_mode(22e-6) == ConductionMode.CCM

    def test_is_ccm_true_at_light_load(self, reference_design):
        assert reference_design.is_ccm(22e-6, load_current=0.05) is True
        assert reference_design.conduction_mode(22e-6, load_current=0.05) == ConductionMode.DCM

    def test_is_ccm_boundary_is_strict(self, reference_design):
        boundary = reference_design.compute_ripple_current(22e-6).max / 2
        assert reference_design.is_ccm(22e-6, load_current=boundary) is False
        assert reference_design.is_ccm(22e-6, load_current=boundary * 0.999) is True

    def test_critical_inductance(self, reference_design):
        critical = reference_design.compute_critical_inductance()
        assert critical == pytest.approx(3.2609e-6, rel=1e-3)
        assert reference_design.conduction_mode(critical * 1.1) == ConductionMode.CCM
        assert reference_design.conduction_mode(critical * 0.9) == ConductionMode.DCM

    def test_critical_inductance_rejects_zero_load(self, reference_design):
        with pytest.raises(DesignValidationError):
            reference_design.compute_critical_inductance(load_current=0.0)


class TestAdditionalQuantities:
    def test_max_esr(self, reference_design):
        ripple = reference_design.compute_ripple_current(22e-6)
        assert reference_design.compute_max_esr(22e-6) == pytest.approx(0.05 / ripple.max)

    def test_input_rms_current(self, reference_design):
        irms = reference_design.compute_input_rms_current()
        assert irms.min == 0.0
        assert irms.max == pytest.approx(2.0 * math.sqrt(0.26087), rel=1e-3)

    def test_output_power(self, reference_design):
        power = reference_design.output_power()
        assert (power.min, power.typ, power.max) == (0.0, 5.0, 10.0)


class TestSolve:
    def test_solve_with_explicit_inductance(self, reference_design):
        solution = reference_design.solve(22e-6)
        assert solution.inductance == 22e-6
        assert solution.input_capacitance == pytest.approx(12e-6)
        assert solution.output_capacitance == pytest.approx(1.5e-6)

    def test_solve_rounds_inductance_up(self, loaded_design):
        solution = loaded_design.solve()
        assert solution.inductance == pytest.approx(47e-6)
        assert solution.inductance >= loaded_design.compute_l().max

    def test_solve_meets_capacitance_minimums(self, loaded_design):
        solution = loaded_design.solve(series="E24")
        assert solution.input_capacitance >= loaded_design.compute_min_cin()
        assert solution.output_capacitance >= loaded_design.compute_min_cout(
            solution.inductance
        )

    def test_solve_requires_inductance_when_unbounded(self, reference_design):
        with pytest.raises(DesignValidationError, match="unbounded"):
            reference_design.solve()

    def test_solve_unknown_series(self, loaded_design):
        with pytest.raises(ValueError, match="Unknown series"):
            loaded_design.solve(series="E3")


class TestBuckSolution:
    def test_valid(self):
        solution = BuckSolution(22e-6, 10e-6, 4.7e-6)
        assert solution.inductance == 22e-6

    @pytest.mark.parametrize(
        "values", [(0.0, 1e-6, 1e-6), (1e-6, -1e-6, 1e-6), (1e-6, 1e-6, math.inf)]
    )
    def test_invalid(self, values):
        with pytest.raises(DesignValidationError):
            BuckSolution(*values)
