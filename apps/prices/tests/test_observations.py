import pytest
from datetime import date, timedelta
from decimal import Decimal
from django.test import override_settings
from django.utils import timezone
from apps.prices.models import PriceObservation, PriceAlert
from apps.stores import services as stores_services
from apps.prices.services import (
    PriceObservationFilter,
    find_by_filters,
    find_latest_active_price,
    record_observation,
    record_price,
    update_observation_notes,
    PriceObservationNotFoundError,
    ItemNotFoundError,
    StoreNotFoundError,
    InvalidFilterError,
    InvalidDateRangeError,
    InvalidPriceError,
    UnsupportedCurrencyError,
)


@pytest.mark.django_db
class TestLatestActivePrice:

    def test_uses_creation_time_not_observation_date(self, item, observe):
        newer_date = observe(item, '2.00', date(2024, 5, 1))
        older_date = observe(item, '1.50', date(2024, 1, 1))
        now = timezone.now()
        PriceObservation.objects.filter(id=newer_date.id).update(created_at=now - timedelta(hours=1))
        PriceObservation.objects.filter(id=older_date.id).update(created_at=now)

        assert find_latest_active_price(item_id=item.id) == older_date

    def test_skips_inactive(self, item, observe):
        active = observe(item, '2.00', date(2024, 1, 1))
        observe(item, '2.50', date(2024, 1, 2), is_active=False)

        assert find_latest_active_price(item_id=item.id) == active

    def test_none_active(self, item, observe):
        observe(item, '2.00', date(2024, 1, 1), is_active=False)

        with pytest.raises(PriceObservationNotFoundError):
            find_latest_active_price(item_id=item.id)

    def test_other_owner(self, user, other_item, observe):
        observe(other_item, '2.00', date(2024, 1, 1))

        with pytest.raises(PriceObservationNotFoundError):
            find_latest_active_price(item_id=other_item.id, owner=user)


@pytest.mark.django_db
class TestFindByFilters:

    @pytest.fixture
    def history(self, item, observe, bakery):
        return [
            observe(item, '1.00', date(2024, 1, 1)),
            observe(item, '2.00', date(2024, 2, 1), currency='USD'),
            observe(item, '3.00', date(2024, 3, 1), at=bakery),
            observe(item, '4.00', date(2024, 4, 1), is_active=False),
        ]

    def test_no_criteria_matches_all(self, history):
        page = find_by_filters(PriceObservationFilter())

        assert page.total_count == 4

    def test_criteria_are_combined(self, item, history):
        criteria = PriceObservationFilter(
            item_id=item.id,
            currency='EUR',
            min_price=Decimal('2.00'),
            is_active=True,
        )
        page = find_by_filters(criteria)

        assert [o.price for o in page.results] == [Decimal('3.00')]

    def test_store_attributes(self, history):
        assert find_by_filters(PriceObservationFilter(store_type='bakery')).total_count == 1
        assert find_by_filters(PriceObservationFilter(store_name='BIL')).total_count == 3
        assert find_by_filters(PriceObservationFilter(city='brno')).total_count == 1

    def test_date_range(self, history):
        criteria = PriceObservationFilter(date_from=date(2024, 2, 1), date_to=date(2024, 3, 1))

        assert find_by_filters(criteria).total_count == 2

    def test_owner(self, user, other_user, history, other_item, observe):
        observe(other_item, '5.00', date(2024, 1, 1))

        assert find_by_filters(PriceObservationFilter(owner_id=user.id)).total_count == 4
        assert find_by_filters(PriceObservationFilter(owner_id=other_user.id)).total_count == 1

    def test_ordering(self, history):
        page = find_by_filters(PriceObservationFilter(), ordering='-price')

        assert [o.price for o in page.results] == [
            Decimal('4.00'), Decimal('3.00'), Decimal('2.00'), Decimal('1.00')
        ]

    def test_pagination(self, history):
        page = find_by_filters(PriceObservationFilter(), page=2, page_size=3, ordering='price')

        assert page.total_count == 4
        assert page.num_pages == 2
        assert [o.price for o in page.results] == [Decimal('4.00')]
        assert page.has_previous and not page.has_next

    def test_page_past_end(self, history):
        page = find_by_filters(PriceObservationFilter(), page=5, page_size=3)

        assert page.results == []
        assert page.total_count == 4

    @override_settings(PRICES_MAX_PAGE_SIZE=2)
    def test_page_size_is_capped(self, history):
        assert find_by_filters(PriceObservationFilter(), page_size=50).page_size == 2

    def test_invalid_ordering(self, history):
        with pytest.raises(InvalidFilterError):
            find_by_filters(PriceObservationFilter(), ordering='store__owner')

    def test_invalid_page(self, history):
        with pytest.raises(InvalidFilterError):
            find_by_filters(PriceObservationFilter(), page=0)

    def test_inverted_price_range(self):
        with pytest.raises(InvalidFilterError):
            find_by_filters(PriceObservationFilter(min_price=Decimal('5'), max_price=Decimal('1')))

    def test_inverted_date_range(self):
        with pytest.raises(InvalidDateRangeError):
            find_by_filters(PriceObservationFilter(date_from=date(2024, 2, 1), date_to=date(2024, 1, 1)))

    def test_unknown_currency(self):
        with pytest.raises(UnsupportedCurrencyError):
            find_by_filters(PriceObservationFilter(currency='CZK'))


@pytest.mark.django_db
class TestRecording:

    def test_record_price_deactivates_previous(self, user, item, store, observe):
        previous = observe(item, '1.00', date(2024, 1, 1))

        observation = record_price(
            item_id=item.id, owner=user, store_id=store.id,
            price=Decimal('1.20'), currency='EUR', observation_date=date(2024, 2, 1),
        )

        previous.refresh_from_db()
        assert previous.is_active is False
        assert observation.is_active is True
        assert find_latest_active_price(item_id=item.id) == observation
        assert item.price_observations.filter(is_active=True).count() == 1

    def test_record_price_without_history(self, user, item, store):
        observation = record_price(
            item_id=item.id, owner=user, store_id=store.id,
            price=Decimal('1.20'), currency='EUR', observation_date=date(2024, 2, 1),
        )

        assert observation.is_active is True

    def test_record_price_other_users_item(self, user, other_item, store):
        with pytest.raises(ItemNotFoundError):
            record_price(
                item_id=other_item.id, owner=user, store_id=store.id,
                price=Decimal('1.20'), currency='EUR', observation_date=date(2024, 2, 1),
            )

    def test_record_price_unavailable_store(self, other_user, item, bakery):
        item.owner = other_user
        item.save()

        with pytest.raises(StoreNotFoundError):
            record_price(
                item_id=item.id, owner=other_user, store_id=bakery.id,
                price=Decimal('1.20'), currency='EUR', observation_date=date(2024, 2, 1),
            )

    def test_unavailable_store_is_also_a_stores_error(self, other_user, item, bakery):
        item.owner = other_user
        item.save()

        with pytest.raises(stores_services.StoreNotFoundError) as excinfo:
            record_price(
                item_id=item.id, owner=other_user, store_id=bakery.id,
                price=Decimal('1.20'), currency='EUR', observation_date=date(2024, 2, 1),
            )

        assert isinstance(excinfo.value, StoreNotFoundError)
        assert isinstance(excinfo.value.__cause__, stores_services.StoreNotFoundError)

    def test_record_observation_keeps_previous_active(self, item, store, observe):
        previous = observe(item, '1.00', date(2024, 1, 1))

        record_observation(
            item=item, store=store, price=Decimal('1.10'),
            currency='EUR', observation_date=date(2024, 1, 2),
        )

        previous.refresh_from_db()
        assert previous.is_active is True

    def test_rejects_non_positive_price(self, item, store):
        with pytest.raises(InvalidPriceError):
            record_observation(
                item=item, store=store, price=Decimal('0'),
                currency='EUR', observation_date=date(2024, 1, 2),
            )

    def test_rejects_future_date(self, item, store):
        with pytest.raises(InvalidDateRangeError):
            record_observation(
                item=item, store=store, price=Decimal('1.00'), currency='EUR',
                observation_date=timezone.localdate() + timedelta(days=1),
            )

    def test_observations_are_append_only(self, item, observe):
        observation = observe(item, '1.00', date(2024, 1, 1))
        observation.price = Decimal('5.00')

        with pytest.raises(ValueError):
            observation.save()
        with pytest.raises(ValueError):
            observation.save(update_fields=['price'])

    def test_update_notes(self, user, item, observe):
        observation = observe(item, '1.00', date(2024, 1, 1))

        update_observation_notes(observation_id=observation.id, owner=user, notes='on sale')

        observation.refresh_from_db()
        assert observation.notes == 'on sale'

    def test_update_notes_other_owner(self, other_user, item, observe):
        observation = observe(item, '1.00', date(2024, 1, 1))

        with pytest.raises(PriceObservationNotFoundError):
            update_observation_notes(observation_id=observation.id, owner=other_user, notes='x')

    def test_recording_fires_alerts(self, user, item, store, observe):
        observe(item, '2.00', date(2024, 1, 1))
        drop = PriceAlert.objects.create(
            user=user, item=item, alert_type='price_drop', currency='EUR',
            threshold_percentage=Decimal('10.00'),
        )

        record_price(
            item_id=item.id, owner=user, store_id=store.id,
            price=Decimal('1.50'), currency='EUR', observation_date=date(2024, 2, 1),
        )

        drop.refresh_from_db()
        assert drop.last_triggered_at is not None
