"""
Built-in fault signature library

Common vapor compression faults with their cycle metric patterns,
LBNL-style SL1-SL4 severity thresholds and field actions (Bulgurcu 2014,
ASHRAE RP-1043, Sporlan TXV troubleshooting).

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-04
"""

from functools import lru_cache

from app_hvac_diag.modules.fault_signatures.model import FaultSignatureCatalog

# Normal operating bands of the indicator metrics (°F unless noted)
SUPERHEAT_BAND = (5.0, 20.0)
SUBCOOLING_BAND = (5.0, 18.0)
CONDENSER_APPROACH_BAND = (15.0, 30.0)
DESIGN_TEMP_DIFFERENCE_BAND = (30.0, 40.0)
COMPRESSION_RATIO_BAND = (2.0, 10.0)  # [-]
DISCHARGE_TEMP_BAND = (150.0, 225.0)
EVAPORATING_TEMP_BAND = (32.0, 50.0)


def _bands(*limits):
    """SL1-SL4 bands from (min, max) pairs."""
    return [
        {"level": f"SL{i}", "min": low, "max": high}
        for i, (low, high) in enumerate(limits, start=1)
    ]


DEFAULT_SIGNATURES = [
    {
        "key": "low_charge",
        "name": "Refrigerant Undercharge / Leakage",
        "category": "refrigerant",
        "description": "Evaporating pressure drops and the superheat region expands; "
                       "little liquid is left to subcool in the condenser.",
        "indicators": [
            {"metric": "superheat", "direction": "high", "weight": 0.4,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat rises"},
            {"metric": "subcooling", "direction": "low", "weight": 0.4,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling decreases"},
            {"metric": "discharge_line_temp", "direction": "high", "weight": 0.2,
             "tolerance": DISCHARGE_TEMP_BAND, "description": "Discharge temperature rises"},
        ],
        "severity": {"metric": "superheat",
                     "bands": _bands((16, 22), (22, 28), (28, 35), (35, None))},
        "actions": [
            "Check frost line on suction pipe: retreats toward compressor",
            "Inspect sight glass: excessive bubbling indicates undercharge",
            "Leak detect all joints with electronic sniffer or soap bubbles",
            "Focus on flare nuts, service valves and brazed joints",
            "After repair: evacuate, then charge by weight per nameplate",
        ],
    },
    {
        "key": "overcharge",
        "name": "Refrigerant Overcharge",
        "category": "refrigerant",
        "description": "Both pressures rise; liquid backs up in the condenser and the "
                       "subcooling region expands.",
        "indicators": [
            {"metric": "subcooling", "direction": "high", "weight": 0.45,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling increases"},
            {"metric": "superheat", "direction": "low", "weight": 0.25,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat decreases"},
            {"metric": "condenser_approach", "direction": "high", "weight": 0.3,
             "tolerance": CONDENSER_APPROACH_BAND, "description": "Head pressure rises"},
        ],
        "severity": {"metric": "subcooling",
                     "bands": _bands((12, 15), (15, 20), (20, 25), (25, None))},
        "actions": [
            "Compare nameplate charge vs actual charge amount",
            "Recover excess refrigerant into recovery tank",
            "Recharge by weight, never judge by pressure alone",
            "Check for liquid flood-back: sweating suction line or compressor housing",
            "Verify compressor oil level",
        ],
    },
    {
        "key": "metering_restriction",
        "name": "TXV Restricted / Underfeeding",
        "category": "metering",
        "description": "Evaporating pressure drops sharply, superheat region expands "
                       "greatly and liquid accumulates in the condenser.",
        "indicators": [
            {"metric": "superheat", "direction": "high", "weight": 0.45,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat rises sharply"},
            {"metric": "subcooling", "direction": "high", "weight": 0.35,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling rises"},
            {"metric": "evaporating_temp", "direction": "low", "weight": 0.2,
             "tolerance": EVAPORATING_TEMP_BAND, "description": "Suction pressure drops"},
        ],
        "severity": {"metric": "superheat",
                     "bands": _bands((20, 28), (28, 38), (38, 50), (50, None))},
        "actions": [
            "Check filter drier temperature drop: more than 3 °F across means restricted",
            "Inspect and clean TXV inlet strainer",
            "Apply hand heat to sensing bulb and check for response",
            "Inspect external equalizer line for blockage or kinks",
            "When replacing TXV: match tonnage and refrigerant type exactly",
        ],
    },
    {
        "key": "txv_overfeed",
        "name": "TXV Stuck Open / Overfeeding",
        "category": "metering",
        "description": "Superheat vanishes and the compressor inlet moves inside the "
                       "saturation dome; liquid slugging risk.",
        "indicators": [
            {"metric": "superheat", "direction": "low", "weight": 0.6,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat near zero"},
            {"metric": "subcooling", "direction": "low", "weight": 0.2,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling decreases"},
            {"metric": "evaporating_temp", "direction": "high", "weight": 0.2,
             "tolerance": EVAPORATING_TEMP_BAND, "description": "Suction pressure rises"},
        ],
        "severity": {"metric": "superheat", "inverted": True,
                     "bands": _bands((2, 5), (0, 2), (-5, 0), (None, -5))},
        "actions": [
            "Look for liquid slugging: entire suction line or compressor housing sweating",
            "Adjust TXV superheat clockwise to increase superheat",
            "Sensing bulb at 12 to 4 o'clock on the suction line, never at 6 o'clock",
            "Verify sensing bulb insulation and external equalizer connection",
            "If adjustment fails replace the TXV",
        ],
    },
    {
        "key": "low_evaporator_airflow",
        "name": "Evaporator Fouling / Low Indoor Airflow",
        "category": "airflow",
        "description": "Evaporating pressure drops from insufficient heat transfer; "
                       "similar to low charge but subcooling stays normal.",
        "indicators": [
            {"metric": "superheat", "direction": "high", "weight": 0.35,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat rises"},
            {"metric": "design_temp_difference", "direction": "high", "weight": 0.35,
             "tolerance": DESIGN_TEMP_DIFFERENCE_BAND, "description": "DTD too large"},
            {"metric": "subcooling", "direction": "normal", "weight": 0.15,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling normal"},
            {"metric": "evaporating_temp", "direction": "low", "weight": 0.15,
             "tolerance": EVAPORATING_TEMP_BAND, "description": "Suction pressure drops"},
        ],
        "severity": {"metric": "superheat",
                     "bands": _bands((16, 20), (20, 25), (25, 30), (30, None))},
        "actions": [
            "Check air filter: replace or clean",
            "Inspect evaporator coil cleanliness",
            "Verify blower motor and fan operation",
            "Check duct connections for leaks or disconnection",
            "If coil is frozen run fan only to defrost, then fix root cause",
        ],
    },
    {
        "key": "condenser_fouling",
        "name": "Condenser Fouling / Restricted Airflow",
        "category": "airflow",
        "description": "Condensing pressure rises while evaporating pressure stays; "
                       "reduced effective area lowers subcooling.",
        "indicators": [
            {"metric": "condenser_approach", "direction": "high", "weight": 0.5,
             "tolerance": CONDENSER_APPROACH_BAND, "description": "CTOA too high"},
            {"metric": "subcooling", "direction": "low", "weight": 0.3,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling decreases"},
            {"metric": "discharge_line_temp", "direction": "high", "weight": 0.2,
             "tolerance": DISCHARGE_TEMP_BAND, "description": "Discharge temperature rises"},
        ],
        "actions": [
            "Inspect condenser coil for dust, cottonwood, leaves, insects",
            "Clean coil from inside out",
            "Verify condenser fan motor RPM, current and rotation",
            "Check clearance around condenser",
            "Subcooling low points to fouling, subcooling high to non-condensables",
        ],
    },
    {
        "key": "non_condensables",
        "name": "Non-Condensable Gas (Air/Nitrogen)",
        "category": "contamination",
        "description": "Gas occupies condenser volume: head pressure rises and liquid "
                       "is pushed deeper into the subcooling region.",
        "indicators": [
            {"metric": "condenser_approach", "direction": "high", "weight": 0.5,
             "tolerance": CONDENSER_APPROACH_BAND, "description": "CTOA too high"},
            {"metric": "subcooling", "direction": "high", "weight": 0.35,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling increases"},
            {"metric": "superheat", "direction": "normal", "weight": 0.15,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat normal"},
        ],
        "actions": [
            "Check vacuum history: was the system pulled below 500 microns",
            "Review recent brazing for missing nitrogen flow",
            "Full recovery, deep vacuum, weigh-in charge",
        ],
    },
    {
        "key": "weak_compressor",
        "name": "Compressor Valve Leak / Efficiency Loss",
        "category": "compressor",
        "description": "Discharge gas leaks back through the valves; compression "
                       "ratio drops and capacity falls.",
        "indicators": [
            {"metric": "compression_ratio", "direction": "low", "weight": 0.5,
             "tolerance": COMPRESSION_RATIO_BAND, "description": "Compression ratio low"},
            {"metric": "superheat", "direction": "low", "weight": 0.25,
             "tolerance": SUPERHEAT_BAND, "description": "Superheat decreases"},
            {"metric": "subcooling", "direction": "low", "weight": 0.25,
             "tolerance": SUBCOOLING_BAND, "description": "Subcooling decreases"},
        ],
        "actions": [
            "Calculate compression ratio (Pd+14.7)/(Ps+14.7): normal 2:1 to 10:1",
            "Measure compressor current vs RLA rating",
            "Inspect oil color: dark means overheating history",
            "Find root cause before replacing the compressor",
        ],
    },
]


@lru_cache(maxsize=1)
def default_signature_catalog() -> FaultSignatureCatalog:
    """Shared read-only catalog of the built-in signatures."""
    return FaultSignatureCatalog.from_records(DEFAULT_SIGNATURES)
