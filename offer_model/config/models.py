# offer_model/config/models.py
"""
Pydantic models for validating a job offer, the current package and the
reporting options loaded from YAML files (e.g., configs/offer.yaml).

The vesting schedule is a tagged variant: ``EqualVesting`` carries no
schedule, ``CustomVesting`` always carries one. All models are frozen so a
validated offer can be hashed and used as a cache key.
"""

import logging
from typing import Annotated, Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# --- Vesting ---


class VestingYear(BaseModel):
    """Share of the stock grant vesting in a single (1-indexed) year."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: int = Field(..., ge=1, description="Vesting year, starting at 1")
    percentage: float = Field(
        ..., ge=0.0, allow_inf_nan=False, description="Percent of the grant vesting this year (e.g., 25 for 25%)"
    )


class EqualVesting(BaseModel):
    """Grant vests in equal parts over the vesting period."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["equal"] = "equal"


class CustomVesting(BaseModel):
    """Grant vests according to an explicit per-year schedule.

    Years missing from the schedule vest 0%. Years past the offer's
    vesting period are accepted but never reached by the calculator.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    mode: Literal["custom"] = "custom"
    schedule: Tuple[VestingYear, ...] = Field(default_factory=tuple)

    @field_validator("schedule", mode="before")
    @classmethod
    def coerce_mapping(cls, value: Any) -> Any:
        """Accept ``{year: percentage}`` as shorthand for the list form."""
        if isinstance(value, dict):
            return [{"year": year, "percentage": pct} for year, pct in value.items()]
        return value

    @model_validator(mode='after')
    def check_unique_years(self) -> 'CustomVesting':
        """Reject schedules that list the same year twice."""
        seen = set()
        duplicates = set()
        for entry in self.schedule:
            if entry.year in seen:
                duplicates.add(entry.year)
            seen.add(entry.year)
        if duplicates:
            raise ValueError(
                f"Custom vesting schedule lists year(s) {sorted(duplicates)} more than once"
            )
        return self

    def percentage_for(self, year: int) -> float:
        for entry in self.schedule:
            if entry.year == year:
                return entry.percentage
        return 0.0


VestingSchedule = Annotated[Union[EqualVesting, CustomVesting], Field(discriminator="mode")]


# --- Offer & current package ---


class OfferSpec(BaseModel):
    """A job offer as entered by the user."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_salary: float = Field(
        0.0, ge=0.0, allow_inf_nan=False, description="Annual base salary in local currency"
    )
    performance_bonus_percentage: float = Field(
        0.0, ge=0.0, allow_inf_nan=False, description="Yearly performance bonus as percent of base"
    )
    joining_bonus: float = Field(0.0, ge=0.0, allow_inf_nan=False)
    relocation_bonus: float = Field(0.0, ge=0.0, allow_inf_nan=False)
    stock_grant_value: float = Field(
        0.0, ge=0.0, allow_inf_nan=False, description="Total stock grant in the foreign unit (USD)"
    )
    exchange_rate: float = Field(
        1.0, gt=0.0, allow_inf_nan=False, description="Foreign unit to local currency multiplier"
    )
    vesting_years: int = Field(4, ge=0, description="Years over which the stock grant vests")
    vesting: VestingSchedule = Field(default_factory=EqualVesting)
    pf_included_in_base: bool = Field(
        False, description="True if base_salary already embeds the employer PF contribution"
    )
    employer_pf_percentage: float = Field(0.0, ge=0.0, allow_inf_nan=False)

    @model_validator(mode='after')
    def check_schedule_within_period(self) -> 'OfferSpec':
        if isinstance(self.vesting, CustomVesting):
            beyond = [v.year for v in self.vesting.schedule if v.year > self.vesting_years]
            if beyond:
                logger.warning(
                    f"Custom vesting years {beyond} fall outside the {self.vesting_years}-year "
                    f"vesting period and will be ignored."
                )
        return self

    @property
    def vesting_mode(self) -> str:
        return self.vesting.mode

    @property
    def custom_vesting_schedule(self) -> Tuple[VestingYear, ...]:
        if isinstance(self.vesting, CustomVesting):
            return self.vesting.schedule
        return ()

    @property
    def one_time_total(self) -> float:
        """Joining plus relocation bonus, paid in year 1 only."""
        return self.joining_bonus + self.relocation_bonus

    @property
    def stock_value_local(self) -> float:
        return self.stock_grant_value * self.exchange_rate


class CurrentCompensation(BaseModel):
    """The package the offer is compared against."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_salary: float = Field(0.0, ge=0.0, allow_inf_nan=False)
    variable_pay: float = Field(0.0, ge=0.0, allow_inf_nan=False)

    @property
    def total(self) -> float:
        return self.base_salary + self.variable_pay


# --- Top-Level Configuration Models ---


class ReportingConfig(BaseModel):
    """Where and how the batch CLI writes its reports."""

    output_directory: Optional[str] = Field(
        None, description="Directory for CSV/YAML/PNG output; CLI flag overrides it"
    )
    scenario_name: str = Field("offer", min_length=1)
    plots: bool = True
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level


class OfferConfig(BaseModel):
    """The root model for an offer configuration file."""

    offer: OfferSpec
    current: CurrentCompensation = Field(default_factory=CurrentCompensation)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")
