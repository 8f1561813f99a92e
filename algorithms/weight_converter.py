from typing import Optional


class WeightConverter:
    """Utility for converting body weight and loads between kg and lb."""

    KG_TO_LB = 2.20462

    @staticmethod
    def kg_to_lb(kg: float, precision: Optional[int] = 2) -> float:
        """Convert ``kg`` to pounds, rounded unless ``precision`` is None."""
        lb = kg * WeightConverter.KG_TO_LB
        if precision is None:
            return lb
        return round(lb, precision)

    @staticmethod
    def lb_to_kg(lb: float, precision: Optional[int] = 2) -> float:
        kg = lb / WeightConverter.KG_TO_LB
        if precision is None:
            return kg
        return round(kg, precision)
