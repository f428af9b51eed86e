"""
PropsService - Singleton wrapper for CoolProp

Centralizes the CoolProp calls used to build refrigerant saturation tables.
Inputs and outputs are in field units (psig, °F, BTU/lb, BTU/lb/°F); the
SI conversion happens here and nowhere else.

Author: HVAC Cycle Diagnostics Project
Date: 2026-03-02
"""

import logging
from typing import Dict, Optional, Tuple
from CoolProp.CoolProp import PropsSI

from app_hvac_diag.core.constants import (
    ATMOSPHERIC_PRESSURE_PSI,
    J_PER_KG_K_PER_BTU_PER_LB_F,
    J_PER_KG_PER_BTU_PER_LB,
    PA_PER_PSI,
)


# ========== Unit conversions ==========

def psig_to_pa(p_psig: float) -> float:
    return (p_psig + ATMOSPHERIC_PRESSURE_PSI) * PA_PER_PSI


def pa_to_psig(p_pa: float) -> float:
    return p_pa / PA_PER_PSI - ATMOSPHERIC_PRESSURE_PSI


def f_to_k(t_f: float) -> float:
    return (t_f - 32.0) * 5.0 / 9.0 + 273.15


def k_to_f(t_k: float) -> float:
    return (t_k - 273.15) * 9.0 / 5.0 + 32.0


class PropsService:
    """
    Singleton service for saturation property calculations via CoolProp.

    The service holds no reference data, only a logger; the fluid is passed
    on every call so one instance serves every refrigerant.
    """

    _instance: Optional['PropsService'] = None
    _initialized: bool = False

    def __new__(cls) -> 'PropsService':
        """Ensure only one instance exists (Singleton pattern)."""
        if cls._instance is None:
            cls._instance = super(PropsService, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logger only once."""
        if not PropsService._initialized:
            self.logger = logging.getLogger(__name__)
            PropsService._initialized = True

    def _safe_call(self, output: str, input1_name: str, input1_val: float,
                   input2_name: str, input2_val: float, fluid: str) -> float:
        """
        Safe wrapper for CoolProp PropsSI calls with error handling.

        Args:
            output: Output property name (e.g., 'H', 'S', 'P')
            input1_name: First input property name (e.g., 'T')
            input1_val: First input value [SI]
            input2_name: Second input property name
            input2_val: Second input value [SI]
            fluid: CoolProp fluid name

        Returns:
            Calculated property value [SI]

        Raises:
            ValueError: If CoolProp calculation fails or inputs are invalid
        """
        try:
            return PropsSI(output, input1_name, input1_val,
                           input2_name, input2_val, fluid)
        except Exception as e:
            error_msg = (
                f"CoolProp error: {output} | {fluid} | "
                f"{input1_name}={input1_val:.4g}, {input2_name}={input2_val:.4g} | "
                f"Error: {str(e)}"
            )
            self.logger.error(error_msg)
            raise ValueError(error_msg) from e

    # ========== Saturation properties ==========

    def Psat_T(self, fluid: str, T: float) -> float:
        """
        Saturation (bubble) pressure at given temperature.

        Args:
            fluid: CoolProp fluid name
            T: Temperature [°F]

        Returns:
            Saturation pressure [psig]
        """
        return pa_to_psig(self._safe_call('P', 'T', f_to_k(T), 'Q', 0, fluid))

    def Tsat_P(self, fluid: str, P: float) -> float:
        """
        Saturation (bubble) temperature at given pressure.

        Args:
            fluid: CoolProp fluid name
            P: Pressure [psig]

        Returns:
            Saturation temperature [°F]
        """
        return k_to_f(self._safe_call('T', 'P', psig_to_pa(P), 'Q', 0, fluid))

    def Pdew_T(self, fluid: str, T: float) -> float:
        """Dew point pressure [psig] at given temperature [°F]."""
        return pa_to_psig(self._safe_call('P', 'T', f_to_k(T), 'Q', 1, fluid))

    def Tdew_P(self, fluid: str, P: float) -> float:
        """
        Dew point temperature at given pressure.

        Differs from Tsat_P by the temperature glide for zeotropic blends
        such as R-407C.

        Args:
            fluid: CoolProp fluid name
            P: Pressure [psig]

        Returns:
            Dew point temperature [°F]
        """
        return k_to_f(self._safe_call('T', 'P', psig_to_pa(P), 'Q', 1, fluid))

    def saturation_row(self, fluid: str, T: float) -> Dict[str, float]:
        """
        Full saturation table row at given temperature.

        Args:
            fluid: CoolProp fluid name
            T: Temperature [°F]

        Returns:
            Dict with bubble and dew pressure [psig], temperature [°F],
            liquid/vapor enthalpy [BTU/lb] and liquid/vapor entropy
            [BTU/lb/°F]
        """
        T_K = f_to_k(T)
        P = self._safe_call('P', 'T', T_K, 'Q', 0, fluid)
        P_dew = self._safe_call('P', 'T', T_K, 'Q', 1, fluid)
        hl = self._safe_call('H', 'T', T_K, 'Q', 0, fluid)
        hv = self._safe_call('H', 'T', T_K, 'Q', 1, fluid)
        sl = self._safe_call('S', 'T', T_K, 'Q', 0, fluid)
        sv = self._safe_call('S', 'T', T_K, 'Q', 1, fluid)
        return {
            "pressure": pa_to_psig(P),
            "temperature": T,
            "liquid_enthalpy": hl / J_PER_KG_PER_BTU_PER_LB,
            "vapor_enthalpy": hv / J_PER_KG_PER_BTU_PER_LB,
            "liquid_entropy": sl / J_PER_KG_K_PER_BTU_PER_LB_F,
            "vapor_entropy": sv / J_PER_KG_K_PER_BTU_PER_LB_F,
            "vapor_pressure": pa_to_psig(P_dew),
        }

    def critical_point(self, fluid: str) -> Tuple[float, float]:
        """
        Critical point of the fluid.

        Args:
            fluid: CoolProp fluid name

        Returns:
            (critical pressure [psig], critical temperature [°F])
        """
        try:
            P_crit = PropsSI('pcrit', fluid)
            T_crit = PropsSI('Tcrit', fluid)
        except Exception as e:
            error_msg = f"CoolProp error: critical point | {fluid} | Error: {str(e)}"
            self.logger.error(error_msg)
            raise ValueError(error_msg) from e
        return pa_to_psig(P_crit), k_to_f(T_crit)


# Global singleton instance accessor
def get_props_service() -> PropsService:
    """
    Get the global PropsService singleton instance.

    Returns:
        PropsService singleton instance
    """
    return PropsService()
