import pytest

from offer_model.config.models import (
    CurrentCompensation,
    CustomVesting,
    EqualVesting,
    OfferSpec,
    VestingYear,
)
from offer_model.engines.calculator import (
    calculate_offer,
    calculate_offer_cached,
    pf_component,
)


@pytest.fixture
def sample_offer():
    return OfferSpec(
        base_salary=2_500_000,
        performance_bonus_percentage=10,
        joining_bonus=200_000,
        relocation_bonus=50_000,
        stock_grant_value=50_000,
        exchange_rate=83,
        vesting_years=4,
        vesting=EqualVesting(),
        pf_included_in_base=True,
        employer_pf_percentage=12,
    )


@pytest.fixture
def sample_current():
    return CurrentCompensation(base_salary=1_200_000, variable_pay=300_000)


def custom(*pairs):
    return CustomVesting(schedule=tuple(VestingYear(year=y, percentage=p) for y, p in pairs))


def test_first_year_matches_worked_example(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    first = result.yearly_breakdown[0]

    assert result.stock_value_local == pytest.approx(4_150_000)
    assert first.bonus == pytest.approx(250_000)
    assert first.stocks == pytest.approx(1_037_500)
    assert first.one_time == pytest.approx(250_000)
    assert first.total_with_pf == pytest.approx(4_037_500)
    assert first.pf_component == pytest.approx(267_857.142857, rel=1e-9)
    assert first.total_without_pf == pytest.approx(3_769_642.857143, rel=1e-9)


def test_hike_matches_worked_example(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    assert result.current_total == 1_500_000
    assert result.hike_percentage == pytest.approx(169.1666667, rel=1e-7)


def test_first_year_summary_includes_one_time_in_bonus(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    summary = result.first_year
    assert summary.base == pytest.approx(2_500_000)
    assert summary.bonus == pytest.approx(250_000 + 250_000)
    assert summary.stocks == pytest.approx(1_037_500)
    assert summary.total == pytest.approx(4_037_500)
    assert summary.total_without_pf == pytest.approx(3_769_642.857143, rel=1e-9)


def test_later_years_are_flat_without_one_time(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    for row in result.yearly_breakdown[1:]:
        assert row.one_time == 0
        assert row.base == 2_500_000
        assert row.bonus == pytest.approx(250_000)
        assert row.stocks == pytest.approx(1_037_500)
        assert row.total_with_pf == pytest.approx(3_787_500)


@pytest.mark.parametrize("years", [0, 1, 2, 3, 4, 5, 6, 7])
def test_breakdown_length_equals_vesting_years(sample_offer, sample_current, years):
    offer = sample_offer.model_copy(update={"vesting_years": years})
    result = calculate_offer(offer, sample_current)
    assert len(result.yearly_breakdown) == years
    assert [row.year for row in result.yearly_breakdown] == list(range(1, years + 1))


@pytest.mark.parametrize("years", [1, 3, 4, 6, 7])
def test_equal_vesting_always_sums_to_100(sample_offer, sample_current, years):
    offer = sample_offer.model_copy(update={"vesting_years": years})
    result = calculate_offer(offer, sample_current)
    for row in result.yearly_breakdown:
        assert row.stock_percentage == pytest.approx(100 / years)
    assert result.vesting_total_percentage == pytest.approx(100)
    assert result.vesting_is_valid


def test_zero_vesting_years_gives_empty_breakdown_and_zero_summary(sample_offer, sample_current):
    offer = sample_offer.model_copy(update={"vesting_years": 0})
    result = calculate_offer(offer, sample_current)

    assert result.yearly_breakdown == ()
    assert result.first_year.base == 0
    assert result.first_year.bonus == 0
    assert result.first_year.stocks == 0
    assert result.first_year.total == 0
    assert result.vesting_total_percentage == 0
    assert not result.vesting_is_valid
    assert result.hike_percentage == pytest.approx(-100)


def test_zero_current_compensation_gives_zero_hike(sample_offer):
    result = calculate_offer(sample_offer, CurrentCompensation())
    assert result.hike_percentage == 0


def test_zero_base_salary_does_not_raise(sample_current):
    offer = OfferSpec(base_salary=0, performance_bonus_percentage=10, employer_pf_percentage=12,
                      pf_included_in_base=True, vesting_years=3)
    result = calculate_offer(offer, sample_current)
    assert all(row.total_with_pf == 0 for row in result.yearly_breakdown)
    assert result.hike_percentage == pytest.approx(-100)


def test_custom_vesting_missing_years_default_to_zero(sample_offer, sample_current):
    offer = sample_offer.model_copy(update={"vesting": custom((1, 40), (3, 60))})
    result = calculate_offer(offer, sample_current)

    percentages = [row.stock_percentage for row in result.yearly_breakdown]
    assert percentages == [40, 0, 60, 0]
    assert result.yearly_breakdown[1].stocks == 0
    assert result.yearly_breakdown[2].stocks == pytest.approx(4_150_000 * 0.6)
    assert result.vesting_is_valid


@pytest.mark.parametrize(
    "pairs, valid",
    [
        (((1, 10), (2, 20), (3, 30), (4, 40)), True),
        (((1, 25), (2, 25), (3, 25), (4, 24.995)), True),
        (((1, 25), (2, 25), (3, 25), (4, 24.98)), False),
        (((1, 50), (2, 60)), False),
        ((), False),
    ],
)
def test_custom_vesting_validity(sample_offer, sample_current, pairs, valid):
    offer = sample_offer.model_copy(update={"vesting": custom(*pairs)})
    result = calculate_offer(offer, sample_current)
    assert result.vesting_is_valid is valid


def test_custom_years_beyond_period_are_ignored(sample_offer, sample_current):
    offer = OfferSpec(**{**sample_offer.model_dump(), "vesting_years": 2,
                         "vesting": {"mode": "custom", "schedule": [
                             {"year": 1, "percentage": 50},
                             {"year": 2, "percentage": 50},
                             {"year": 3, "percentage": 100},
                         ]}})
    result = calculate_offer(offer, sample_current)
    assert len(result.yearly_breakdown) == 2
    assert result.vesting_total_percentage == pytest.approx(100)
    assert result.vesting_is_valid


def test_pf_additive_mode(sample_offer, sample_current):
    offer = sample_offer.model_copy(update={"pf_included_in_base": False})
    result = calculate_offer(offer, sample_current)
    first = result.yearly_breakdown[0]

    assert first.pf_component == pytest.approx(300_000)
    assert first.total_without_pf == pytest.approx(4_037_500)
    assert first.total_with_pf == pytest.approx(4_337_500)


@pytest.mark.parametrize("included", [True, False])
def test_total_is_always_pf_inclusive(sample_offer, sample_current, included):
    offer = sample_offer.model_copy(update={"pf_included_in_base": included})
    result = calculate_offer(offer, sample_current)
    for row in result.yearly_breakdown:
        assert row.total == row.total_with_pf


@pytest.mark.parametrize("base", [1.0, 480_000, 2_500_000, 9_999_999])
@pytest.mark.parametrize("pf_pct", [0, 4, 12, 24])
def test_pf_modes_agree_on_total_with_pf(sample_offer, sample_current, base, pf_pct):
    embedded = sample_offer.model_copy(update={
        "base_salary": base,
        "performance_bonus_percentage": 0,
        "pf_included_in_base": True,
        "employer_pf_percentage": pf_pct,
    })
    embedded_result = calculate_offer(embedded, sample_current)

    # Base without the embedded PF, then add PF back on top of it
    derived_base = base - pf_component(base, pf_pct, True)
    additive = embedded.model_copy(update={
        "base_salary": derived_base,
        "pf_included_in_base": False,
    })
    additive_result = calculate_offer(additive, sample_current)

    for lhs, rhs in zip(embedded_result.yearly_breakdown, additive_result.yearly_breakdown):
        assert lhs.total_with_pf == pytest.approx(rhs.total_with_pf)
        assert lhs.pf_component == pytest.approx(rhs.pf_component)


def test_one_time_only_in_first_year(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    one_times = [row.one_time for row in result.yearly_breakdown]
    assert one_times == [250_000, 0, 0, 0]


def test_multi_year_totals(sample_offer, sample_current):
    result = calculate_offer(sample_offer, sample_current)
    assert result.total_with_pf == pytest.approx(4_037_500 + 3 * 3_787_500)
    assert result.total_without_pf == pytest.approx(result.total_with_pf - 4 * 2_500_000 * 12 / 112)


def test_cached_calculation_reuses_result_for_equal_inputs(sample_offer, sample_current):
    calculate_offer_cached.cache_clear()
    first = calculate_offer_cached(sample_offer, sample_current)
    same_inputs = OfferSpec(**sample_offer.model_dump())
    second = calculate_offer_cached(same_inputs, CurrentCompensation(**sample_current.model_dump()))

    assert second is first
    assert calculate_offer_cached.cache_info().hits == 1
    assert first == calculate_offer(sample_offer, sample_current)


def test_inputs_are_not_modified(sample_offer, sample_current):
    before = sample_offer.model_dump()
    calculate_offer(sample_offer, sample_current)
    assert sample_offer.model_dump() == before
