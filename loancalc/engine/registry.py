"""Registry mapping calculation types to strategy instances.

Built once, frozen, then handed to whoever needs it. There is no module-level
registry; the public calculator owns its own instance.
"""

import logging

from loancalc.engine.amortized import AmortizedStrategy
from loancalc.engine.interest_only import InterestOnlyStrategy
from loancalc.engine.simple import SimpleInterestStrategy
from loancalc.engine.strategy import CalculationStrategy
from loancalc.models.loan import CalculationType

logger = logging.getLogger(__name__)


class UnsupportedCalculationTypeError(LookupError):
    def __init__(self, calculation_type, available: list[CalculationType]):
        self.calculation_type = calculation_type
        self.available = available
        names = ", ".join(t.value for t in available) or "none"
        super().__init__(
            f"No strategy registered for calculation type: {calculation_type!r}. "
            f"Available types: {names}"
        )


class RegistryFrozenError(RuntimeError):
    pass


class StrategyRegistry:
    def __init__(self):
        self._strategies: dict[CalculationType, CalculationStrategy] = {}
        self._frozen = False

    def register(self, strategy: CalculationStrategy) -> None:
        if self._frozen:
            raise RegistryFrozenError("Strategy registry is frozen; build a new one to extend it")
        self._strategies[strategy.calculation_type] = strategy
        logger.debug("Registered %s strategy", strategy.calculation_type.value)

    def freeze(self) -> "StrategyRegistry":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _resolve(self, calculation_type) -> CalculationType | None:
        if isinstance(calculation_type, CalculationType):
            return calculation_type
        if isinstance(calculation_type, str):
            try:
                return CalculationType(calculation_type.strip().upper())
            except ValueError:
                return None
        return None

    def create(self, calculation_type) -> CalculationStrategy:
        """Return the strategy for a type or its string tag; unknown types raise."""
        resolved = self._resolve(calculation_type)
        strategy = self._strategies.get(resolved) if resolved is not None else None
        if strategy is None:
            logger.warning("Unsupported calculation type requested: %r", calculation_type)
            raise UnsupportedCalculationTypeError(calculation_type, self.available_types())
        return strategy

    def is_supported(self, calculation_type) -> bool:
        return self._resolve(calculation_type) in self._strategies

    def available_types(self) -> list[CalculationType]:
        return list(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)


def build_default_registry() -> StrategyRegistry:
    """Registry with exactly the three built-in strategies, frozen."""
    registry = StrategyRegistry()
    registry.register(SimpleInterestStrategy())
    registry.register(AmortizedStrategy())
    registry.register(InterestOnlyStrategy())
    return registry.freeze()
