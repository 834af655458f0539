"""
Block catalog

Default ports and params per block type, using the port and parameter names
the control runtime reads (in1/in2/out, in/q, preset_ms, ...).
Unknown block types fall back to a single float in -> out block.
"""
from dataclasses import dataclass, field
from typing import Dict, Tuple

from petra_designer.features.nodes.domain.payloads import PortSpec


@dataclass(frozen=True)
class BlockSpec:
    block_type: str
    title: str
    category: str
    inputs: Tuple[PortSpec, ...]
    outputs: Tuple[PortSpec, ...]
    params: Dict[str, float] = field(default_factory=dict)

    def default_params(self) -> Dict[str, float]:
        return dict(self.params)


def _p(*specs: str) -> Tuple[PortSpec, ...]:
    """'name:type' shorthand"""
    return tuple(PortSpec(*s.split(":")) for s in specs)


_BINARY_BOOL = (_p("in1:bool", "in2:bool"), _p("out:bool"))
_COMPARE = (_p("in1:float", "in2:float"), _p("out:bool"))
_ARITHMETIC = (_p("in1:float", "in2:float"), _p("out:float"))
_TIMER = (_p("in:bool"), _p("q:bool", "elapsed:float"))
_EDGE = (_p("clk:bool"), _p("q:bool"))

TIMER_BLOCK_TYPES = frozenset({"ON_DELAY", "OFF_DELAY", "TON", "TOF", "PULSE"})
GENERATOR_BLOCK_TYPES = frozenset({"DATA_GENERATOR"})


def _spec(block_type, title, category, ports, params=None) -> BlockSpec:
    inputs, outputs = ports
    return BlockSpec(block_type, title, category, inputs, outputs, dict(params or {}))


BLOCK_CATALOG: Dict[str, BlockSpec] = {s.block_type: s for s in (
    _spec("AND", "AND Gate", "Logic", _BINARY_BOOL),
    _spec("OR", "OR Gate", "Logic", _BINARY_BOOL),
    _spec("XOR", "XOR Gate", "Logic", _BINARY_BOOL),
    _spec("NOT", "NOT Gate", "Logic", (_p("in:bool"), _p("out:bool"))),
    _spec("GT", "Greater Than", "Comparison", _COMPARE),
    _spec("LT", "Less Than", "Comparison", _COMPARE),
    _spec("GTE", "Greater Or Equal", "Comparison", _COMPARE),
    _spec("LTE", "Less Or Equal", "Comparison", _COMPARE),
    _spec("EQ", "Equal", "Comparison", _COMPARE),
    _spec("NEQ", "Not Equal", "Comparison", _COMPARE),
    _spec("ADD", "Add", "Math", _ARITHMETIC),
    _spec("SUB", "Subtract", "Math", _ARITHMETIC),
    _spec("MUL", "Multiply", "Math", _ARITHMETIC),
    _spec("DIV", "Divide", "Math", _ARITHMETIC),
    _spec("ON_DELAY", "Timer On Delay", "Timer", _TIMER, {"preset_ms": 1000}),
    _spec("OFF_DELAY", "Timer Off Delay", "Timer", _TIMER, {"preset_ms": 1000}),
    _spec("TON", "Timer On Delay", "Timer", _TIMER, {"preset_ms": 1000}),
    _spec("TOF", "Timer Off Delay", "Timer", _TIMER, {"preset_ms": 1000}),
    _spec("PULSE", "Pulse", "Timer", _TIMER, {"preset_ms": 1000}),
    _spec("R_TRIG", "Rising Edge", "Edge", _EDGE),
    _spec("F_TRIG", "Falling Edge", "Edge", _EDGE),
    _spec("SR_LATCH", "SR Latch", "Memory", (_p("set:bool", "reset:bool"), _p("q:bool"))),
    _spec("COUNTER", "Counter", "Counter",
          (_p("count_up:bool", "reset:bool"), _p("count:int", "done:bool")), {"preset": 10}),
    _spec("DATA_GENERATOR", "Data Generator", "Generator",
          (_p("enable:bool"), _p("sine_out:float", "count_out:int")),
          {"frequency": 1.0, "amplitude": 1.0, "offset": 0.0}),
    _spec("PID", "PID Controller", "Control",
          (_p("setpoint:float", "process_var:float", "enable:bool"), _p("output:float")),
          {"kp": 1.0, "ki": 0.1, "kd": 0.01, "output_min": 0.0, "output_max": 100.0}),
)}

FALLBACK_SPEC = BlockSpec("", "Custom Block", "Custom", _p("in:float"), _p("out:float"))


def get_block_spec(block_type: str) -> BlockSpec:
    """Catalog entry for block_type (case-insensitive), or the fallback spec."""
    spec = BLOCK_CATALOG.get((block_type or "").upper())
    if spec is None:
        return BlockSpec(block_type, FALLBACK_SPEC.title, FALLBACK_SPEC.category,
                         FALLBACK_SPEC.inputs, FALLBACK_SPEC.outputs)
    return spec


def is_known_block_type(block_type: str) -> bool:
    return (block_type or "").upper() in BLOCK_CATALOG
