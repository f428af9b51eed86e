"""
Cycle Model - Vapor compression cycle from field readings

Converts gauge readings into saturation temperatures, superheat,
subcooling, compression ratio and approximate pressure-enthalpy state
points at the four cycle locations.

State point enthalpies beyond the saturation curve use a linear
extension: h = h_sat ± cp·ΔT, with the liquid cp proxy taken from the
slope of saturated-liquid enthalpy on the bracketing table segment and
the vapor cp proxy as a fixed fraction of it. Expect the correction term
to be within about ±20 % of its value; this is not an equation of state.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-03
"""

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Type

from app_hvac_diag.core.constants import (
    ATMOSPHERIC_PRESSURE_PSI,
    DEFAULT_ISENTROPIC_EFFICIENCY,
    DLT_RISE_PER_COMPRESSION_RATIO,
    FREEZING_POINT,
    MAX_COMPRESSION_RATIO,
    MAX_DESIGN_TEMP_DIFFERENCE,
    MAX_DISCHARGE_TEMP,
    RANKINE_OFFSET,
    VAPOR_CP_RATIO,
)
from app_hvac_diag.core.errors import (
    CoilFreezeRiskWarning,
    CycleWarning,
    HighCompressionRatioWarning,
    HighDischargeTemperatureWarning,
    HighTemperatureDifferenceWarning,
    NegativeSubcoolingWarning,
    NegativeSuperheatWarning,
)
from app_hvac_diag.core.metrics import (
    MetricValue,
    absent,
    from_optional,
    invalid,
    present,
)
from app_hvac_diag.core.readings import FieldReading
from app_hvac_diag.core.refrigerant_catalog import RefrigerantCatalog, SaturationProperties


class Phase(str, Enum):
    """Refrigerant phase at a state point."""
    SUBCOOLED_LIQUID = "subcooled_liquid"
    SATURATED_LIQUID = "saturated_liquid"
    TWO_PHASE = "two_phase"
    SATURATED_VAPOR = "saturated_vapor"
    SUPERHEATED_VAPOR = "superheated_vapor"
    UNKNOWN = "unknown"


# State point labels, in flow order
COMPRESSOR_SUCTION = "compressor_suction"
COMPRESSOR_DISCHARGE = "compressor_discharge"
CONDENSER_OUTLET = "condenser_outlet"
EVAPORATOR_INLET = "evaporator_inlet"

STATE_POINT_LABELS = (
    COMPRESSOR_SUCTION,
    COMPRESSOR_DISCHARGE,
    CONDENSER_OUTLET,
    EVAPORATOR_INLET,
)


@dataclass(frozen=True)
class StatePoint:
    """
    Approximate thermodynamic state at one cycle location.

    Attributes:
        label: Cycle location (see STATE_POINT_LABELS)
        pressure: Pressure [psig]
        temperature: Temperature [°F], None if not derivable
        enthalpy: Specific enthalpy [BTU/lb], None if not derivable
        phase: Refrigerant phase
        quality: Vapor quality [-] inside the two-phase region
        entropy: Specific entropy [BTU/lb/°F] where estimated
    """
    label: str
    pressure: float
    temperature: Optional[float]
    enthalpy: Optional[float]
    phase: Phase
    quality: Optional[float] = None
    entropy: Optional[float] = None

    def is_known(self) -> bool:
        return self.enthalpy is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "pressure": self.pressure,
            "temperature": self.temperature,
            "enthalpy": self.enthalpy,
            "phase": self.phase.value,
            "quality": self.quality,
            "entropy": self.entropy,
        }


@dataclass(frozen=True)
class CycleAdvisory:
    """
    Non-fatal condition found while computing the cycle.

    Attributes:
        warning: CycleWarning subclass naming the condition
        level: 'warning' or 'danger'
        message: Human readable detail
    """
    warning: Type[CycleWarning]
    level: str
    message: str

    @property
    def code(self) -> str:
        return self.warning.__name__

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "level": self.level, "message": self.message}


@dataclass(frozen=True)
class CycleState:
    """
    Cycle characteristics derived from one FieldReading.

    Never mutated after construction; recompute from the reading instead.

    Attributes:
        refrigerant_id: Catalog code
        suction_pressure: Suction pressure [psig]
        discharge_pressure: Discharge pressure [psig]
        evaporating_temp: Suction dew point temperature [°F]
        condensing_temp: Discharge bubble point temperature [°F]
        superheat: Suction superheat [°F]
        subcooling: Liquid subcooling [°F]
        compression_ratio: Absolute discharge / suction pressure [-]
        state_points: The four cycle state points in flow order
        metrics: All named metrics available to fault indicators
        advisories: Non-fatal flags
    """
    refrigerant_id: str
    suction_pressure: float
    discharge_pressure: float
    evaporating_temp: float
    condensing_temp: float
    superheat: MetricValue
    subcooling: MetricValue
    compression_ratio: float
    state_points: Tuple[StatePoint, ...]
    metrics: Mapping[str, MetricValue]
    advisories: Tuple[CycleAdvisory, ...] = ()

    def metric(self, name: str) -> MetricValue:
        """Named metric; unknown names are reported as absent."""
        value = self.metrics.get(name)
        if value is None:
            return absent(f"unknown metric {name!r}")
        return value

    def state_point(self, label: str) -> StatePoint:
        for point in self.state_points:
            if point.label == label:
                return point
        raise KeyError(label)

    def has_warning(self, warning: Type[CycleWarning]) -> bool:
        return any(issubclass(a.warning, warning) for a in self.advisories)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "refrigerant_id": self.refrigerant_id,
            "suction_pressure": self.suction_pressure,
            "discharge_pressure": self.discharge_pressure,
            "evaporating_temp": self.evaporating_temp,
            "condensing_temp": self.condensing_temp,
            "superheat": self.superheat.value,
            "subcooling": self.subcooling.value,
            "compression_ratio": self.compression_ratio,
            "state_points": [p.to_dict() for p in self.state_points],
            "metrics": {name: m.to_dict() for name, m in self.metrics.items()},
            "advisories": [a.to_dict() for a in self.advisories],
        }


def _rankine(T: float) -> float:
    return T + RANKINE_OFFSET


def _difference(measured: MetricValue, reference: float, sign: float = 1.0) -> MetricValue:
    """sign * (measured - reference), keeping the measured metric's status."""
    if not measured.is_present:
        return measured
    return present(sign * (measured.value - reference))


def _vapor_side_phase(offset: float) -> Phase:
    if offset > 0:
        return Phase.SUPERHEATED_VAPOR
    if offset == 0:
        return Phase.SATURATED_VAPOR
    return Phase.TWO_PHASE


def _liquid_side_phase(offset: float) -> Phase:
    if offset > 0:
        return Phase.SUBCOOLED_LIQUID
    if offset == 0:
        return Phase.SATURATED_LIQUID
    return Phase.TWO_PHASE


class CycleModel:
    """
    Physical model of a single-stage vapor compression cycle.

    Computes saturation temperatures from the gauge pressures and places the
    measured line temperatures relative to them. Pure: the same reading and
    catalog always give an identical CycleState.
    """

    def __init__(
        self,
        catalog: RefrigerantCatalog,
        isentropic_efficiency: float = DEFAULT_ISENTROPIC_EFFICIENCY,
        vapor_cp_ratio: float = VAPOR_CP_RATIO,
        max_design_temp_difference: float = MAX_DESIGN_TEMP_DIFFERENCE,
        max_compression_ratio: float = MAX_COMPRESSION_RATIO,
        max_discharge_temp: float = MAX_DISCHARGE_TEMP,
        freezing_point: float = FREEZING_POINT,
    ):
        """
        Args:
            catalog: Refrigerant saturation data
            isentropic_efficiency: Compressor efficiency for the estimated
                discharge state (0, 1]
            vapor_cp_ratio: Vapor / liquid specific heat proxy ratio
            max_design_temp_difference: DTD advisory limit [°F]
            max_compression_ratio: Compression ratio advisory limit [-]
            max_discharge_temp: Discharge temperature advisory limit [°F]
            freezing_point: Coil freeze advisory limit [°F]
        """
        if not 0.0 < isentropic_efficiency <= 1.0:
            raise ValueError(
                f"Isentropic efficiency must be in (0, 1], got {isentropic_efficiency}"
            )
        if vapor_cp_ratio <= 0.0:
            raise ValueError(f"Vapor cp ratio must be positive, got {vapor_cp_ratio}")
        self.catalog = catalog
        self.isentropic_efficiency = isentropic_efficiency
        self.vapor_cp_ratio = vapor_cp_ratio
        self.max_design_temp_difference = max_design_temp_difference
        self.max_compression_ratio = max_compression_ratio
        self.max_discharge_temp = max_discharge_temp
        self.freezing_point = freezing_point

    def solve(self, reading: FieldReading) -> CycleState:
        """
        Compute the cycle state for one reading.

        Args:
            reading: Field readings

        Returns:
            CycleState with metrics, state points and advisories

        Raises:
            IncompleteReadingError: Suction or discharge pressure missing
            InvalidReadingError: Physically impossible pressures
            UnknownRefrigerantError: Refrigerant not in the catalog
            OutOfRangeError: Pressure outside the saturation table
        """
        reading.validate_required()

        # Superheat is measured from the dew point, subcooling from the bubble point
        suction_dew = self.catalog.lookup_dew_point(reading.refrigerant_id, reading.suction_pressure)
        suction_bubble = self.catalog.lookup_bubble_point(reading.refrigerant_id, reading.suction_pressure)
        discharge_dew = self.catalog.lookup_dew_point(reading.refrigerant_id, reading.discharge_pressure)
        discharge_bubble = self.catalog.lookup_bubble_point(reading.refrigerant_id, reading.discharge_pressure)
        T_evap = suction_dew.temperature
        T_cond = discharge_bubble.temperature

        suction_line = from_optional(reading.suction_line_temp, "suction_line_temp")
        liquid_line = from_optional(reading.liquid_line_temp, "liquid_line_temp")
        discharge_line = from_optional(reading.discharge_line_temp, "discharge_line_temp")

        superheat = _difference(suction_line, T_evap)
        subcooling = _difference(liquid_line, T_cond, sign=-1.0)

        compression_ratio = (
            (reading.discharge_pressure + ATMOSPHERIC_PRESSURE_PSI)
            / (reading.suction_pressure + ATMOSPHERIC_PRESSURE_PSI)
        )

        p1 = self._compressor_suction(reading, suction_dew, superheat)
        p2 = self._compressor_discharge(reading, discharge_dew, discharge_line, p1)
        p3 = self._condenser_outlet(reading, discharge_bubble, subcooling)
        p4 = self._evaporator_inlet(reading, suction_bubble, suction_dew, p3)

        metrics = self._metrics(
            reading, T_evap, T_cond, superheat, subcooling,
            compression_ratio, discharge_line, (p1, p2, p3, p4),
        )
        metrics["evaporator_glide"] = present(suction_dew.temperature - suction_bubble.temperature)
        metrics["condenser_glide"] = present(discharge_dew.temperature - discharge_bubble.temperature)
        advisories = self._advisories(T_evap, superheat, subcooling, compression_ratio, metrics)

        return CycleState(
            refrigerant_id=reading.refrigerant_id,
            suction_pressure=reading.suction_pressure,
            discharge_pressure=reading.discharge_pressure,
            evaporating_temp=T_evap,
            condensing_temp=T_cond,
            superheat=superheat,
            subcooling=subcooling,
            compression_ratio=compression_ratio,
            state_points=(p1, p2, p3, p4),
            metrics=MappingProxyType(metrics),
            advisories=tuple(advisories),
        )

    # ========== State points ==========

    def _compressor_suction(self, reading: FieldReading, sat: SaturationProperties,
                            superheat: MetricValue) -> StatePoint:
        """Evaporator outlet / compressor inlet, superheated from the suction dew point."""
        if not superheat.is_present:
            return StatePoint(COMPRESSOR_SUCTION, reading.suction_pressure, None, None, Phase.UNKNOWN)

        cp_v = sat.vapor_cp(self.vapor_cp_ratio)
        T1 = reading.suction_line_temp
        h1 = sat.vapor_enthalpy + cp_v * superheat.value
        s1 = None
        if _rankine(T1) > 0:
            s1 = sat.vapor_entropy + cp_v * math.log(_rankine(T1) / _rankine(sat.temperature))
        return StatePoint(
            COMPRESSOR_SUCTION, reading.suction_pressure, T1, h1,
            _vapor_side_phase(superheat.value), entropy=s1,
        )

    def _compressor_discharge(self, reading: FieldReading, sat: SaturationProperties,
                              discharge_line: MetricValue, suction_point: StatePoint) -> StatePoint:
        """
        Compressor outlet at discharge pressure.

        Uses the measured discharge line temperature when available, else an
        isentropic compression from the suction entropy corrected by the
        isentropic efficiency. Superheat is taken from the discharge dew point.
        """
        cp_v = sat.vapor_cp(self.vapor_cp_ratio)
        T_dew = sat.temperature

        if discharge_line.is_present:
            T2 = discharge_line.value
            h2 = sat.vapor_enthalpy + cp_v * (T2 - T_dew)
            s2 = None
            if _rankine(T2) > 0:
                s2 = sat.vapor_entropy + cp_v * math.log(_rankine(T2) / _rankine(T_dew))
            return StatePoint(
                COMPRESSOR_DISCHARGE, reading.discharge_pressure, T2, h2,
                _vapor_side_phase(T2 - T_dew), entropy=s2,
            )

        if suction_point.entropy is None:
            return StatePoint(COMPRESSOR_DISCHARGE, reading.discharge_pressure, None, None, Phase.UNKNOWN)

        h1 = suction_point.enthalpy
        T2s = _rankine(T_dew) * math.exp((suction_point.entropy - sat.vapor_entropy) / cp_v) - RANKINE_OFFSET
        h2s = sat.vapor_enthalpy + cp_v * (T2s - T_dew)
        h2 = h1 + (h2s - h1) / self.isentropic_efficiency
        T2 = T_dew + (h2 - sat.vapor_enthalpy) / cp_v
        return StatePoint(
            COMPRESSOR_DISCHARGE, reading.discharge_pressure, T2, h2,
            _vapor_side_phase(T2 - T_dew),
        )

    def _condenser_outlet(self, reading: FieldReading, sat: SaturationProperties,
                          subcooling: MetricValue) -> StatePoint:
        """Liquid line, subcooled from the discharge bubble point."""
        if not subcooling.is_present:
            return StatePoint(CONDENSER_OUTLET, reading.discharge_pressure, None, None, Phase.UNKNOWN)

        h3 = sat.liquid_enthalpy - sat.liquid_cp * subcooling.value
        return StatePoint(
            CONDENSER_OUTLET, reading.discharge_pressure, reading.liquid_line_temp, h3,
            _liquid_side_phase(subcooling.value),
        )

    def _evaporator_inlet(self, reading: FieldReading, bubble: SaturationProperties,
                          dew: SaturationProperties, condenser_outlet: StatePoint) -> StatePoint:
        """
        Metering device outlet, isenthalpic expansion to suction pressure.

        Quality spans bubble-point liquid to dew-point vapor; inside the dome
        the temperature moves linearly with quality across the glide.
        """
        if not condenser_outlet.is_known():
            return StatePoint(EVAPORATOR_INLET, reading.suction_pressure, None, None, Phase.UNKNOWN)

        h4 = condenser_outlet.enthalpy
        x = (h4 - bubble.liquid_enthalpy) / (dew.vapor_enthalpy - bubble.liquid_enthalpy)

        if 0.0 < x < 1.0:
            T4 = bubble.temperature + x * (dew.temperature - bubble.temperature)
            return StatePoint(
                EVAPORATOR_INLET, reading.suction_pressure, T4, h4,
                Phase.TWO_PHASE, quality=x,
            )
        if x <= 0.0:
            T4 = bubble.temperature + (h4 - bubble.liquid_enthalpy) / bubble.liquid_cp
            phase = Phase.SATURATED_LIQUID if x == 0.0 else Phase.SUBCOOLED_LIQUID
            return StatePoint(EVAPORATOR_INLET, reading.suction_pressure, T4, h4, phase)

        cp_v = dew.vapor_cp(self.vapor_cp_ratio)
        T4 = dew.temperature + (h4 - dew.vapor_enthalpy) / cp_v
        phase = Phase.SATURATED_VAPOR if x == 1.0 else Phase.SUPERHEATED_VAPOR
        return StatePoint(EVAPORATOR_INLET, reading.suction_pressure, T4, h4, phase)

    # ========== Metrics ==========

    def _metrics(self, reading: FieldReading, T_evap: float, T_cond: float,
                 superheat: MetricValue, subcooling: MetricValue, compression_ratio: float,
                 discharge_line: MetricValue,
                 points: Tuple[StatePoint, ...]) -> Dict[str, MetricValue]:
        p1, p2, p3, p4 = points
        return_air = from_optional(reading.return_air_temp, "return_air_temp")
        supply_air = from_optional(reading.supply_air_temp, "supply_air_temp")
        ambient = from_optional(reading.ambient_temp, "ambient_temp")

        metrics: Dict[str, MetricValue] = {
            "suction_pressure": present(reading.suction_pressure),
            "discharge_pressure": present(reading.discharge_pressure),
            "evaporating_temp": present(T_evap),
            "condensing_temp": present(T_cond),
            "superheat": superheat,
            "subcooling": subcooling,
            "compression_ratio": present(compression_ratio),
            "design_temp_difference": _difference(return_air, T_evap),
            "condenser_approach": _difference(ambient, T_cond, sign=-1.0),
            "discharge_line_temp": discharge_line,
        }

        if return_air.is_present and supply_air.is_present:
            metrics["air_delta_t"] = present(return_air.value - supply_air.value)
        else:
            missing = return_air if not return_air.is_present else supply_air
            metrics["air_delta_t"] = MetricValue(missing.status, reason=missing.reason)

        if superheat.is_present:
            metrics["estimated_discharge_temp"] = present(
                T_cond + superheat.value + DLT_RISE_PER_COMPRESSION_RATIO * compression_ratio
            )
        else:
            metrics["estimated_discharge_temp"] = MetricValue(superheat.status, reason=superheat.reason)

        metrics.update(self._efficiency_metrics(p1, p2, p3, p4))
        return metrics

    @staticmethod
    def _efficiency_metrics(p1: StatePoint, p2: StatePoint, p3: StatePoint,
                            p4: StatePoint) -> Dict[str, MetricValue]:
        """Refrigeration effect, compression work, heat of rejection and COP [BTU/lb]."""
        def delta(a: StatePoint, b: StatePoint, name: str) -> MetricValue:
            if a.is_known() and b.is_known():
                return present(a.enthalpy - b.enthalpy)
            return absent(f"{name} needs {a.label} and {b.label} enthalpies")

        effect = delta(p1, p4, "refrigeration_effect")
        work = delta(p2, p1, "compression_work")
        rejection = delta(p2, p3, "heat_of_rejection")

        if not (effect.is_present and work.is_present):
            cop = absent("cop needs refrigeration effect and compression work")
        elif work.value <= 0:
            cop = invalid(f"non-positive compression work {work.value:.2f} BTU/lb")
        else:
            cop = present(effect.value / work.value)

        return {
            "refrigeration_effect": effect,
            "compression_work": work,
            "heat_of_rejection": rejection,
            "cop": cop,
        }

    # ========== Advisories ==========

    def _advisories(self, T_evap: float, superheat: MetricValue, subcooling: MetricValue,
                    compression_ratio: float,
                    metrics: Mapping[str, MetricValue]) -> List[CycleAdvisory]:
        advisories: List[CycleAdvisory] = []

        if superheat.is_present and superheat.value < 0:
            advisories.append(CycleAdvisory(
                NegativeSuperheatWarning, "danger",
                f"Superheat {superheat.value:.1f} °F: liquid flood-back to the compressor",
            ))
        if subcooling.is_present and subcooling.value < 0:
            advisories.append(CycleAdvisory(
                NegativeSubcoolingWarning, "warning",
                f"Subcooling {subcooling.value:.1f} °F: flash gas in the liquid line",
            ))

        dtd = metrics["design_temp_difference"]
        if dtd.is_present and dtd.value > self.max_design_temp_difference:
            advisories.append(CycleAdvisory(
                HighTemperatureDifferenceWarning, "warning",
                f"DTD {dtd.value:.1f} °F (>{self.max_design_temp_difference:g} °F): "
                f"severe airflow shortage or evaporator icing",
            ))

        if compression_ratio > self.max_compression_ratio:
            advisories.append(CycleAdvisory(
                HighCompressionRatioWarning, "danger",
                f"Compression ratio {compression_ratio:.1f}:1 "
                f"(>{self.max_compression_ratio:g}:1): compressor overload risk",
            ))

        discharge_temp = metrics["discharge_line_temp"]
        source = "measured"
        if not discharge_temp.is_present:
            discharge_temp = metrics["estimated_discharge_temp"]
            source = "estimated"
        if discharge_temp.is_present and discharge_temp.value > self.max_discharge_temp:
            advisories.append(CycleAdvisory(
                HighDischargeTemperatureWarning, "danger",
                f"{source.capitalize()} discharge temperature {discharge_temp.value:.0f} °F "
                f"(>{self.max_discharge_temp:g} °F): oil breakdown risk",
            ))

        if T_evap < self.freezing_point:
            advisories.append(CycleAdvisory(
                CoilFreezeRiskWarning, "warning",
                f"Evaporating temperature {T_evap:.1f} °F (<{self.freezing_point:g} °F): "
                f"evaporator icing risk",
            ))

        return advisories
