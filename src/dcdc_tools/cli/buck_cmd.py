"""Buck command: size a buck converter from a design file and assemble it.

Usage:
    dcdc-tools buck rail_5v.yaml
    dcdc-tools buck rail_5v.yaml --inductance 22uH
    dcdc-tools buck rail_5v.yaml --format json
"""

from __future__ import annotations

import argparse
import json
import math
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from dcdc_tools.circuit import Circuit, buck_converter_bundle
from dcdc_tools.converters import BuckArchitecture, bootstrap_capacitor, low_side_element
from dcdc_tools.design import BuckConstraints, BuckSolution
from dcdc_tools.exceptions import InterfaceShapeError
from dcdc_tools.logging import enable_verbose
from dcdc_tools.spec import BuckDesignSpec, format_unit_value, load_spec, parse_quantity
from dcdc_tools.types import ToleranceRange, UnitError


def run_buck(args: argparse.Namespace) -> int:
    """Run the buck command."""
    if args.verbose:
        enable_verbose("DEBUG")

    design_path = Path(args.design)

    try:
        spec = load_spec(design_path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Error: invalid design file {design_path}:\n{e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        inductance = spec.inductance
        if args.inductance:
            inductance = parse_quantity(args.inductance, "H")
        constraints = spec.to_constraints()
        solution = constraints.solve(inductance, args.series or spec.series)
        circuit, outputs = _assemble(spec, solution)
        report = _build_report(spec, constraints, solution)
    except (ValueError, ArithmeticError, UnitError, InterfaceShapeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    report["netlist"] = circuit.netlist()
    report["outputs"] = {name: net.name for name, net in outputs.items()}

    if args.format == "json":
        print(json.dumps(report, indent=2))
    else:
        _output_text(report)
    return 0


def _assemble(spec: BuckDesignSpec, solution: BuckSolution):
    options = spec.architecture
    architecture = BuckArchitecture.from_solution(
        solution,
        input_caps=options.input_caps,
        output_caps=options.output_caps,
        bootstrap=bootstrap_capacitor(options.bootstrap) if options.bootstrap else None,
        low_side=low_side_element(options.low_side) if options.low_side else None,
    )
    circuit = Circuit(spec.name)
    controller = buck_converter_bundle(circuit, bootstrap=options.bootstrap is not None)
    outputs = architecture.assemble(circuit, controller)
    return circuit, outputs


def _number(value: float) -> float | None:
    return value if math.isfinite(value) else None


def _range(value: ToleranceRange) -> dict[str, float | None]:
    return {"min": _number(value.min), "typ": _number(value.typ), "max": _number(value.max)}


def _build_report(
    spec: BuckDesignSpec, constraints: BuckConstraints, solution: BuckSolution
) -> dict:
    inductance = solution.inductance
    return {
        "name": spec.name,
        "duty_cycle": _range(constraints.duty_cycle()),
        "target_ripple_current": _range(constraints.target_ripple_current()),
        "min_inductance": _range(constraints.compute_l()),
        "ripple_current": _range(constraints.compute_ripple_current(inductance)),
        "peak_current": constraints.compute_peak_current(inductance),
        "rms_current": _range(constraints.compute_rms_current(inductance)),
        "input_rms_current": _range(constraints.compute_input_rms_current()),
        "min_input_capacitance": constraints.compute_min_cin(),
        "min_output_capacitance": constraints.compute_min_cout(inductance),
        "max_output_esr": constraints.compute_max_esr(inductance),
        "conduction_mode": constraints.conduction_mode(inductance).value,
        "solution": {
            "inductance": solution.inductance,
            "input_capacitance": solution.input_capacitance,
            "output_capacitance": solution.output_capacitance,
        },
    }


def _format_range(value: dict, unit: str) -> str:
    def fmt(v: float | None) -> str:
        return "∞" if v is None else format_unit_value(v, unit)

    return f"{fmt(value['min'])} / {fmt(value['typ'])} / {fmt(value['max'])}"


def _output_text(report: dict) -> None:
    """Output the design report as formatted tables."""
    console = Console()

    console.print(f"\n[bold]Buck Converter Design: {report['name']}[/bold]\n")

    table = Table(title="Design Quantities (min / typ / max)")
    table.add_column("Quantity", style="dim")
    table.add_column("Value")

    table.add_row("Duty cycle", _format_range(report["duty_cycle"], ""))
    table.add_row("Target ripple current", _format_range(report["target_ripple_current"], "A"))
    table.add_row("Minimum inductance", _format_range(report["min_inductance"], "H"))
    table.add_row("Ripple current", _format_range(report["ripple_current"], "A"))
    table.add_row("Peak current", format_unit_value(report["peak_current"], "A"))
    table.add_row("RMS current", _format_range(report["rms_current"], "A"))
    table.add_row("Input capacitor RMS current", _format_range(report["input_rms_current"], "A"))
    table.add_row(
        "Minimum input capacitance", format_unit_value(report["min_input_capacitance"], "F")
    )
    table.add_row(
        "Minimum output capacitance", format_unit_value(report["min_output_capacitance"], "F")
    )
    table.add_row("Maximum output ESR", format_unit_value(report["max_output_esr"], "Ω"))

    mode = report["conduction_mode"]
    color = "green" if mode == "ccm" else "yellow"
    table.add_row("Conduction mode (nominal load)", f"[{color}]{mode.upper()}[/{color}]")
    console.print(table)

    solution = report["solution"]
    chosen = Table(title="Chosen Values", show_header=False)
    chosen.add_column("Part", style="dim")
    chosen.add_column("Value")
    chosen.add_row("Inductor", format_unit_value(solution["inductance"], "H"))
    chosen.add_row("Input capacitance", format_unit_value(solution["input_capacitance"], "F"))
    chosen.add_row("Output capacitance", format_unit_value(solution["output_capacitance"], "F"))
    console.print(chosen)

    netlist = Table(title="Netlist")
    netlist.add_column("Net")
    netlist.add_column("Pins")
    for net, pins in report["netlist"].items():
        netlist.add_row(net, ", ".join(pins))
    console.print(netlist)
    console.print()
