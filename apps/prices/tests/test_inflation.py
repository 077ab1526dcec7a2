import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.utils import timezone
from apps.prices.models import PriceObservation
from apps.prices.services import (
    compute_inflation,
    calculate_inflation_rate,
    InflationCalculationResult,
    InvalidDateRangeError,
    UnsupportedCurrencyError,
    ItemNotFoundError,
)
from apps.prices.services.inflation import NOT_ENOUGH_OBSERVATIONS, ZERO_STARTING_PRICE

JANUARY = {'start_date': date(2024, 1, 1), 'end_date': date(2024, 1, 31)}


class TestCalculateInflationRate:

    def test_increase(self):
        assert calculate_inflation_rate(Decimal('2.00'), Decimal('3.00')) == Decimal('50.00')

    def test_decrease(self):
        assert calculate_inflation_rate(Decimal('4.00'), Decimal('3.00')) == Decimal('-25.00')

    def test_rounds_to_two_places(self):
        assert calculate_inflation_rate(Decimal('3.00'), Decimal('4.00')) == Decimal('33.33')
        assert calculate_inflation_rate(Decimal('3.00'), Decimal('5.00')) == Decimal('66.67')


class TestResult:

    def test_insufficient_data_has_no_prices(self):
        result = InflationCalculationResult.insufficient_data(currency='EUR', **JANUARY)

        assert result.has_sufficient_data is False
        assert result.inflation_rate is None
        assert result.to_dict()['insufficient_data_message'] == NOT_ENOUGH_OBSERVATIONS


@pytest.mark.django_db
class TestComputeInflation:

    def test_rising_prices(self, item, rising_prices):
        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.has_sufficient_data
        assert result.started_price == Decimal('2.00')
        assert result.last_price == Decimal('3.00')
        assert result.price_difference == Decimal('1.00')
        assert result.inflation_rate == Decimal('50.00')
        assert result.observations_count == 3

    def test_includes_inactive_observations(self, item, rising_prices):
        result = compute_inflation(
            item_id=item.id, currency='EUR', start_date=date(2024, 1, 1), end_date=date(2024, 1, 15)
        )

        assert result.inflation_rate == Decimal('25.00')

    def test_single_observation(self, item, observe):
        observe(item, '2.00', date(2024, 1, 10))

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.has_sufficient_data is False
        assert result.observations_count == 1
        assert result.insufficient_data_message == NOT_ENOUGH_OBSERVATIONS

    def test_no_observations(self, item):
        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.has_sufficient_data is False
        assert result.observations_count == 0

    def test_zero_starting_price(self, item, observe):
        observe(item, '0.00', date(2024, 1, 1))
        observe(item, '1.00', date(2024, 1, 20))

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.has_sufficient_data is False
        assert result.insufficient_data_message == ZERO_STARTING_PRICE

    def test_ignores_other_currency_and_dates(self, item, rising_prices, observe):
        observe(item, '1.00', date(2023, 12, 31))
        observe(item, '9.00', date(2024, 2, 1))
        observe(item, '0.50', date(2024, 1, 20), currency='USD')

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.started_price == Decimal('2.00')
        assert result.last_price == Decimal('3.00')
        assert result.observations_count == 3

    def test_bounds_are_inclusive(self, item, observe):
        observe(item, '2.00', date(2024, 1, 1))
        observe(item, '2.20', date(2024, 1, 31))

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.inflation_rate == Decimal('10.00')

    def test_same_day_uses_creation_order(self, item, observe):
        first = observe(item, '2.00', date(2024, 1, 5))
        second = observe(item, '2.40', date(2024, 1, 5))
        now = timezone.now()
        PriceObservation.objects.filter(id=first.id).update(created_at=now - timedelta(minutes=5))
        PriceObservation.objects.filter(id=second.id).update(created_at=now)

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.started_price == Decimal('2.00')
        assert result.last_price == Decimal('2.40')

    def test_start_after_end(self, item):
        with pytest.raises(InvalidDateRangeError):
            compute_inflation(
                item_id=item.id, currency='EUR',
                start_date=date(2024, 2, 1), end_date=date(2024, 1, 1)
            )

    def test_start_in_future(self, item):
        tomorrow = timezone.localdate() + timedelta(days=1)
        with pytest.raises(InvalidDateRangeError):
            compute_inflation(
                item_id=item.id, currency='EUR',
                start_date=tomorrow, end_date=tomorrow + timedelta(days=5)
            )

    def test_unsupported_currency(self, item):
        with pytest.raises(UnsupportedCurrencyError):
            compute_inflation(item_id=item.id, currency='GBP', **JANUARY)

    def test_missing_currency(self, item):
        with pytest.raises(UnsupportedCurrencyError):
            compute_inflation(item_id=item.id, currency=None, **JANUARY)

    def test_other_owner(self, user, other_item):
        with pytest.raises(ItemNotFoundError):
            compute_inflation(item_id=other_item.id, currency='EUR', owner=user, **JANUARY)

    def test_inactive_item(self, item, rising_prices):
        item.is_active = False
        item.save()

        with pytest.raises(ItemNotFoundError):
            compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

    def test_extreme_price_range(self, item, observe):
        observe(item, '0.01', date(2024, 1, 1))
        observe(item, '99999999.99', date(2024, 1, 31))

        result = compute_inflation(item_id=item.id, currency='EUR', **JANUARY)

        assert result.price_difference == Decimal('99999999.98')
        assert result.inflation_rate == Decimal('999999999800.00')
