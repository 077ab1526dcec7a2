import pytest
from apps.stores.models import Store
from apps.stores.services import (
    get_available_store,
    search_stores,
    create_store,
    update_store,
    deactivate_store,
    reactivate_store,
    delete_global_store,
    StoreNotFoundError,
    DuplicateStoreError,
    StorePermissionError,
    InvalidStoreStateError,
)


@pytest.mark.django_db
class TestAvailability:

    def test_global_and_own_are_available(self, user, global_store, own_store):
        assert get_available_store(store_id=global_store.id, user=user) == global_store
        assert get_available_store(store_id=own_store.id, user=user) == own_store

    def test_other_users_store_not_available(self, user, other_store):
        with pytest.raises(StoreNotFoundError):
            get_available_store(store_id=other_store.id, user=user)

    def test_inactive_store_not_available(self, user, own_store):
        own_store.is_active = False
        own_store.save()
        with pytest.raises(StoreNotFoundError):
            get_available_store(store_id=own_store.id, user=user)


@pytest.mark.django_db
class TestSearchStores:

    def test_excludes_other_users_stores(self, user, global_store, own_store, other_store):
        result = set(search_stores(user=user))
        assert result == {global_store, own_store}

    def test_location_contains(self, user, global_store, own_store):
        assert list(search_stores(user=user, location_contains='moravia')) == [own_store]
        assert list(search_stores(user=user, location_contains='austria')) == [global_store]

    def test_has_website(self, user, global_store, own_store):
        assert list(search_stores(user=user, has_website=True)) == [global_store]
        assert list(search_stores(user=user, has_website=False)) == [own_store]

    def test_inactive_only_own(self, user, global_store, own_store):
        own_store.is_active = False
        own_store.save()
        global_store.is_active = False
        global_store.save()

        assert list(search_stores(user=user, is_active=False)) == [own_store]


@pytest.mark.django_db
class TestStoreManagement:

    def test_create_duplicate_name_case_insensitive(self, user, own_store):
        with pytest.raises(DuplicateStoreError):
            create_store(owner=user, name='farmers market')

    def test_same_name_as_other_users_store(self, user, other_store):
        store = create_store(owner=user, name=other_store.name, store_type='bakery')
        assert store.owner == user

    def test_update_not_owner(self, user, other_store):
        with pytest.raises(StorePermissionError):
            update_store(store_id=other_store.id, user=user, data={'city': 'Prague'})

    def test_cannot_update_global_store(self, user, global_store):
        with pytest.raises(StorePermissionError):
            update_store(store_id=global_store.id, user=user, data={'city': 'Prague'})

    def test_deactivate_and_reactivate(self, user, own_store):
        deactivate_store(store_id=own_store.id, user=user)
        own_store.refresh_from_db()
        assert not own_store.is_active

        with pytest.raises(InvalidStoreStateError):
            deactivate_store(store_id=own_store.id, user=user)

        reactivate_store(store_id=own_store.id, user=user)
        own_store.refresh_from_db()
        assert own_store.is_active

    def test_reactivate_name_taken(self, user, own_store):
        deactivate_store(store_id=own_store.id, user=user)
        create_store(owner=user, name=own_store.name)

        with pytest.raises(DuplicateStoreError):
            reactivate_store(store_id=own_store.id, user=user)

    def test_delete_global_store(self, global_store):
        delete_global_store(store_id=global_store.id)
        assert not Store.objects.filter(id=global_store.id).exists()

    def test_delete_global_store_rejects_owned(self, own_store):
        with pytest.raises(StoreNotFoundError):
            delete_global_store(store_id=own_store.id)
