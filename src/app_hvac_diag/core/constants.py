"""Unit conversions, approximation coefficients and advisory thresholds."""

# ========== Units ==========

ATMOSPHERIC_PRESSURE_PSI = 14.696   # psi, gauge -> absolute offset
RANKINE_OFFSET = 459.67             # °F -> °R

PA_PER_PSI = 6894.757293168
J_PER_KG_PER_BTU_PER_LB = 2326.0    # enthalpy
J_PER_KG_K_PER_BTU_PER_LB_F = 4186.8  # entropy / specific heat

# ========== Cycle approximation ==========

# Vapor cp proxy as a fraction of the saturated-liquid enthalpy slope.
# Typical HFC values of cp_v / cp_l near 40 °F lie between 0.5 and 0.7.
VAPOR_CP_RATIO = 0.6

# Isentropic efficiency used to estimate the discharge state when no
# discharge line temperature was measured
DEFAULT_ISENTROPIC_EFFICIENCY = 0.7

# Rule-of-thumb discharge temperature rise per unit of compression ratio [°F]
DLT_RISE_PER_COMPRESSION_RATIO = 8.0

# ========== Advisory thresholds ==========

MAX_DESIGN_TEMP_DIFFERENCE = 40.0   # °F, return air - evaporating
MAX_COMPRESSION_RATIO = 12.0
MAX_DISCHARGE_TEMP = 275.0          # °F, oil breakdown
FREEZING_POINT = 32.0               # °F

# ========== Default refrigerant catalog ==========

# catalog id -> CoolProp fluid name
DEFAULT_REFRIGERANTS = {
    "R-22": "R22",
    "R-410A": "R410A",
    "R-32": "R32",
    "R-134a": "R134a",
    "R-404A": "R404A",
    "R-407C": "R407C",
    "R-507A": "R507A",
    "R-1234yf": "R1234yf",
    "R-290": "R290",
}

# ASHRAE 34 safety class and AR5 GWP
REFRIGERANT_METADATA = {
    "R-22": {"name": "R-22 (HCFC-22)", "safety_class": "A1", "gwp": 1810},
    "R-410A": {"name": "R-410A (R-32/R-125 50/50)", "safety_class": "A1", "gwp": 2088},
    "R-32": {"name": "R-32 (Difluoromethane)", "safety_class": "A2L", "gwp": 675},
    "R-134a": {"name": "R-134a (HFC-134a)", "safety_class": "A1", "gwp": 1430},
    "R-404A": {"name": "R-404A", "safety_class": "A1", "gwp": 3922},
    "R-407C": {"name": "R-407C", "safety_class": "A1", "gwp": 1774},
    "R-507A": {"name": "R-507A", "safety_class": "A1", "gwp": 3985},
    "R-1234yf": {"name": "R-1234yf (HFO-1234yf)", "safety_class": "A2L", "gwp": 4},
    "R-290": {"name": "R-290 (Propane)", "safety_class": "A3", "gwp": 3},
}

TABLE_MIN_TEMP = -40.0   # °F
TABLE_MAX_TEMP = 150.0   # °F
TABLE_TEMP_STEP = 5.0    # °F
CRITICAL_MARGIN = 5.0    # °F kept below the critical temperature
