"""Dispatch registries: product type -> validator, product type -> factory.

New product families register their validator and factory here; the
booking service is unchanged. Lookup is an exact match on ProductType;
a type nobody registered is reported as unsupported, never defaulted.

Usage at process start::

    validators = default_validator_registry(config)
    factories = default_factory_registry(config)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import final

from tradebook.booking.factories import (
    ExoticOptionTradeFactory,
    FXContractTradeFactory,
    SwapTradeFactory,
    TradeFactory,
    VanillaOptionTradeFactory,
)
from tradebook.booking.validators import (
    ExoticOptionValidator,
    FXContractValidator,
    ProductValidator,
    SwapValidator,
    VanillaOptionValidator,
)
from tradebook.core.errors import BusinessRuleViolation, business_rule_violation
from tradebook.core.result import Err, Ok
from tradebook.core.types import UtcDatetime
from tradebook.gateway.types import TradeBookingRequest
from tradebook.infra.config import BookingConfig
from tradebook.instrument.types import Counterparty, ProductType, Trade, product_type_name

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


@final
@dataclass
class ValidatorRegistry:
    """Product validators keyed by the product types they declare."""

    _by_type: dict[ProductType, ProductValidator] = field(default_factory=dict)

    def register(self, validator: ProductValidator) -> None:
        """Register validator for every type it covers. Overlaps are a startup error."""
        for product_type in validator.product_types:
            if product_type in self._by_type:
                raise ValueError(f"Validator already registered for {product_type.value}")
            self._by_type[product_type] = validator

    def resolve(self, product_type: ProductType) -> ProductValidator | None:
        return self._by_type.get(product_type)

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset(self._by_type)

    def validate(
        self, request: TradeBookingRequest, today: date,
    ) -> Ok[None] | Err[BusinessRuleViolation]:
        source = "booking.registries.ValidatorRegistry.validate"
        if request.product_type is None:
            return Err(business_rule_violation(
                "Product type is required", rule="PRODUCT_TYPE_REQUIRED", source=source,
            ))
        validator = self.resolve(request.product_type)
        if validator is None:
            return Err(business_rule_violation(
                f"No validator found for product type: {product_type_name(request.product_type)}",
                rule="UNSUPPORTED_PRODUCT", source=source,
            ))
        return validator.validate(request, today)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@final
@dataclass
class FactoryRegistry:
    """Trade factories keyed by the product types they declare."""

    _by_type: dict[ProductType, TradeFactory] = field(default_factory=dict)

    def register(self, factory: TradeFactory) -> None:
        for product_type in factory.product_types:
            if product_type in self._by_type:
                raise ValueError(f"Factory already registered for {product_type.value}")
            self._by_type[product_type] = factory

    def resolve(self, product_type: ProductType) -> TradeFactory | None:
        return self._by_type.get(product_type)

    @property
    def product_types(self) -> frozenset[ProductType]:
        return frozenset(self._by_type)

    def create(
        self, request: TradeBookingRequest, counterparty: Counterparty, now: UtcDatetime,
    ) -> Ok[Trade] | Err[BusinessRuleViolation]:
        source = "booking.registries.FactoryRegistry.create"
        if request.product_type is None:
            return Err(business_rule_violation(
                "Product type is required", rule="PRODUCT_TYPE_REQUIRED", source=source,
            ))
        factory = self.resolve(request.product_type)
        if factory is None:
            return Err(business_rule_violation(
                f"No factory found for product type: {product_type_name(request.product_type)}",
                rule="UNSUPPORTED_PRODUCT", source=source,
            ))
        return Ok(factory.create(request, counterparty, now))


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


def default_validator_registry(config: BookingConfig | None = None) -> ValidatorRegistry:
    cfg = config or BookingConfig()
    registry = ValidatorRegistry()
    registry.register(VanillaOptionValidator())
    registry.register(ExoticOptionValidator())
    registry.register(FXContractValidator())
    registry.register(SwapValidator(supported_indices=cfg.supported_floating_indices))
    return registry


def default_factory_registry(config: BookingConfig | None = None) -> FactoryRegistry:
    cfg = config or BookingConfig()
    registry = FactoryRegistry()
    registry.register(VanillaOptionTradeFactory())
    registry.register(ExoticOptionTradeFactory())
    registry.register(FXContractTradeFactory(spot_threshold_days=cfg.spot_threshold_days))
    registry.register(SwapTradeFactory())
    return registry
