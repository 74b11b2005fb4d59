"""Configuration management for estate-sim."""

from dataclasses import dataclass, field

from estate_sim.exceptions import ConfigurationError


@dataclass
class RentConfig:
    """Rent plan grid and tenant placement tuning."""

    lease_month_options: tuple[int, ...] = (6, 12, 18, 24, 36)
    rate_offset_options: tuple[float, ...] = (
        0.01, 0.02, 0.03, 0.04, 0.05, 0.06, 0.07, 0.08, 0.09, 0.10,
    )
    default_lease_months: int = 12
    default_rate_offset: float = 0.02
    minimum_annual_rate: float = 0.001
    vacancy_bonus_per_month: float = 0.06
    vacancy_bonus_cap: float = 0.30
    demand_adjustment_per_point: float = 0.01
    minimum_placement_probability: float = 0.01
    maximum_placement_probability: float = 0.98


@dataclass
class MaintenanceConfig:
    """Condition decay and refurbishment settings."""

    initial_percent_range: tuple[int, int] = (65, 95)
    occupied_decay_per_month: float = 1.0
    vacant_decay_per_month: float = 2.0
    refurbishment_cost_ratio: float = 0.25
    critical_threshold: float = 25.0
    work_duration_months: int = 1

    @property
    def default_percent(self) -> float:
        """Midpoint of the initial range, used for the opening listings."""
        low, high = self.initial_percent_range
        return (low + high) / 2


@dataclass
class RateModelConfig:
    """Mortgage pricing relative to the central bank rate."""

    variable_margin_base: float = 0.015
    variable_margin_deposit_factor: float = 0.08
    minimum_margin: float = 0.004
    fixed_rate_incentives: dict[int, float] = field(
        default_factory=lambda: {0: 0.0, 2: -0.0035, 5: -0.0025, 10: -0.0015, 25: 0.0}
    )


@dataclass
class FinanceConfig:
    """Mortgage product options."""

    deposit_options: tuple[float, ...] = (0.05, 0.1, 0.15, 0.2, 0.25, 0.3, 0.4, 0.5)
    term_options: tuple[int, ...] = (2, 5, 10, 25)
    fixed_period_options: tuple[int, ...] = (0, 2, 5, 10)
    default_deposit_ratio: float = 0.2
    default_term_years: int = 25
    default_fixed_period_years: int = 5
    minimum_rate: float = 0.025
    maximum_rate: float = 0.085
    negligible_balance: float = 0.5
    rate_model: RateModelConfig = field(default_factory=RateModelConfig)


@dataclass
class CentralBankConfig:
    """Central bank random-walk controller."""

    initial_rate: float = 0.0375
    minimum_rate: float = 0.005
    maximum_rate: float = 0.085
    adjustment_interval_days: int = 30
    max_step_per_adjustment: float = 0.0015


@dataclass
class MarketConfig:
    """Listing rotation limits."""

    max_size: int = 8
    min_size: int = 4
    generation_interval: int = 30
    batch_size: int = 2
    max_age: int = 120


@dataclass
class SimulationConfig:
    """Main configuration for estate-sim."""

    rent: RentConfig = field(default_factory=RentConfig)
    maintenance: MaintenanceConfig = field(default_factory=MaintenanceConfig)
    finance: FinanceConfig = field(default_factory=FinanceConfig)
    central_bank: CentralBankConfig = field(default_factory=CentralBankConfig)
    market: MarketConfig = field(default_factory=MarketConfig)
    starting_balance: float = 1000.0
    starting_day: int = 1
    days_per_month: int = 30
    history_limit: int = 80
    default_speed_ms: int = 1000
    seed: int | None = None
    log_level: str = "INFO"

    def validate(self) -> None:
        """Check cross-field constraints.

        Raises
        ------
        ConfigurationError
            If any setting is out of range.
        """
        if self.days_per_month <= 0:
            raise ConfigurationError("days_per_month must be positive")
        if self.history_limit <= 0:
            raise ConfigurationError("history_limit must be positive")
        if self.default_speed_ms <= 0:
            raise ConfigurationError("default_speed_ms must be positive")
        if self.market.min_size > self.market.max_size:
            raise ConfigurationError(
                f"market.min_size ({self.market.min_size}) exceeds "
                f"market.max_size ({self.market.max_size})"
            )
        if self.central_bank.minimum_rate > self.central_bank.maximum_rate:
            raise ConfigurationError("central_bank.minimum_rate exceeds maximum_rate")
        if self.finance.minimum_rate > self.finance.maximum_rate:
            raise ConfigurationError("finance.minimum_rate exceeds maximum_rate")
        if not self.rent.lease_month_options or not self.rent.rate_offset_options:
            raise ConfigurationError("rent options must not be empty")
        low, high = self.maintenance.initial_percent_range
        if not 0 <= low <= high <= 100:
            raise ConfigurationError(
                f"maintenance.initial_percent_range {low}-{high} is not within 0-100"
            )

    @classmethod
    def from_env(cls) -> "SimulationConfig":
        """Create config from environment variables."""
        import os

        central_bank = CentralBankConfig(
            initial_rate=float(os.getenv("ESTATE_SIM_INITIAL_RATE", "0.0375")),
            adjustment_interval_days=int(os.getenv("ESTATE_SIM_RATE_INTERVAL_DAYS", "30")),
        )

        market = MarketConfig(
            max_size=int(os.getenv("ESTATE_SIM_MARKET_MAX_SIZE", "8")),
            min_size=int(os.getenv("ESTATE_SIM_MARKET_MIN_SIZE", "4")),
            max_age=int(os.getenv("ESTATE_SIM_MARKET_MAX_AGE", "120")),
        )

        seed = os.getenv("ESTATE_SIM_SEED")

        config = cls(
            central_bank=central_bank,
            market=market,
            starting_balance=float(os.getenv("ESTATE_SIM_STARTING_BALANCE", "1000")),
            history_limit=int(os.getenv("ESTATE_SIM_HISTORY_LIMIT", "80")),
            default_speed_ms=int(os.getenv("ESTATE_SIM_SPEED_MS", "1000")),
            seed=int(seed) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
        config.validate()
        return config
