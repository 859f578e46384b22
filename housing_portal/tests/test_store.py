import asyncio
import json

import pytest

from housing_portal.config.portal import AdminConfig, RegistrationConfig
from housing_portal.db import InMemoryStorage
from housing_portal.store import EVENTS_KEY, REGISTRATIONS_KEY, EventNotFoundError, EventStore

from .conftest import TODAY, make_event, make_registration

def stored(storage, key):
    return json.loads(storage.read(key))

def test_load_without_event_data_uses_sample_events():
    store = EventStore.load(InMemoryStorage())
    
    assert [e.id for e in store.events] == ['1', '2']
    assert store.registrations == []
    assert all(e.is_open for e in store.events)

def test_load_backfills_missing_open_flag():
    legacy = make_event('old').to_dict()
    del legacy['isOpen']
    closed = make_event('closed', is_open=False).to_dict()
    storage = InMemoryStorage({EVENTS_KEY: json.dumps([legacy, closed])})
    
    store = EventStore.load(storage)
    
    assert store.get_event('old').is_open is True
    assert store.get_event('closed').is_open is False

def test_load_reads_registrations():
    registration = make_registration('evt1', 'r1', name='Bob').to_dict()
    storage = InMemoryStorage({
        EVENTS_KEY: json.dumps([make_event().to_dict()]),
        REGISTRATIONS_KEY: json.dumps([registration]),
    })
    
    store = EventStore.load(storage)
    
    assert store.registrations[0].form_data == {'name': 'Bob'}

def test_every_event_mutation_rewrites_the_whole_collection(store, storage):
    store.add_event(make_event('a'))
    assert [e['id'] for e in stored(storage, EVENTS_KEY)] == ['a']
    
    store.add_events_batch([make_event('b'), make_event('c')])
    assert [e['id'] for e in stored(storage, EVENTS_KEY)] == ['a', 'b', 'c']
    
    store.update_event('b', {'title': 'Renamed'})
    assert stored(storage, EVENTS_KEY)[1]['title'] == 'Renamed'
    
    store.delete_event('a')
    assert [e['id'] for e in stored(storage, EVENTS_KEY)] == ['b', 'c']

def test_update_merges_only_given_fields(store):
    store.add_event(make_event('a', title='Old', location='Hall'))
    
    updated = store.update_event('a', {'title': 'New', 'is_open': False})
    
    assert updated.title == 'New'
    assert updated.location == 'Hall'
    assert updated.is_open is False
    assert store.get_event('a') == updated

def test_update_unknown_event_is_a_no_op(store):
    store.add_event(make_event('a'))
    assert store.update_event('missing', {'title': 'x'}) is None
    assert store.get_event('a').title == 'Event a'

def test_update_rejects_unknown_attributes(store):
    store.add_event(make_event('a'))
    with pytest.raises(ValueError):
        store.update_event('a', {'colour': 'red'})

def test_deleting_event_keeps_its_registrations(store):
    store.add_event(make_event('a'))
    asyncio.run(store.register_user('a', {'name': 'Alice'}))
    
    assert store.delete_event('a') is True
    
    assert store.get_event('a') is None
    orphans = store.registrations_for('a')
    assert len(orphans) == 1
    assert orphans[0].form_data == {'name': 'Alice'}

def test_batch_delete_removes_exactly_the_listed_events(store):
    store.add_events_batch([make_event(i) for i in ('a', 'b', 'c', 'd')])
    
    removed = store.delete_events_batch(['a', 'c', 'missing'])
    
    assert removed == 2
    assert [e.id for e in store.events] == ['b', 'd']

def test_register_user_prepends_and_persists(store, storage):
    store.add_event(make_event('a'))
    
    first = asyncio.run(store.register_user('a', {'name': 'Alice'}))
    second = asyncio.run(store.register_user('a', {'name': 'Bob'}))
    
    assert [r.id for r in store.registrations] == [second.id, first.id]
    assert len(first.id) == 9
    assert stored(storage, REGISTRATIONS_KEY)[0]['formData'] == {'name': 'Bob'}

def test_register_user_does_not_enforce_capacity(store):
    store.add_event(make_event('a', max_participants=1))
    asyncio.run(store.register_user('a', {'name': 'Alice'}))
    asyncio.run(store.register_user('a', {'name': 'Bob'}))
    
    status = store.get_event_status(store.get_event('a'), TODAY)
    assert status.is_full is True
    assert len(store.registrations_for('a')) == 2

def test_require_event_raises_for_unknown_id(store):
    with pytest.raises(EventNotFoundError):
        store.require_event('nope')

def test_admin_login_accepts_only_the_configured_password(store):
    assert store.login_admin('wrong') is False
    assert store.is_admin is False
    
    assert store.login_admin('admin') is True
    assert store.is_admin is True
    
    store.logout_admin()
    assert store.is_admin is False

def test_admin_password_defaults_to_admin(monkeypatch):
    monkeypatch.delenv('ADMIN_PASSWORD', raising=False)
    store = EventStore(InMemoryStorage(), registration_config=RegistrationConfig(delay_seconds=0))
    assert store.login_admin('admin') is True

def test_admin_password_can_come_from_environment(monkeypatch):
    monkeypatch.setenv('ADMIN_PASSWORD', 's3cret')
    store = EventStore(InMemoryStorage(), admin_config=AdminConfig())
    assert store.login_admin('admin') is False
    assert store.login_admin('s3cret') is True

def test_changes_from_another_store_on_the_same_storage_are_kept(storage):
    server = EventStore.load(storage, registration_config=RegistrationConfig(delay_seconds=0))
    script = EventStore.load(storage, registration_config=RegistrationConfig(delay_seconds=0))
    
    script.add_events_batch([make_event('imported')])
    server.add_event(make_event('manual'))
    
    assert [e['id'] for e in stored(storage, EVENTS_KEY)] == ['1', '2', 'imported', 'manual']
    
    script.delete_events_batch(['1'])
    server.update_event('2', {'title': 'Renamed'})
    
    assert [e['id'] for e in stored(storage, EVENTS_KEY)] == ['2', 'imported', 'manual']

def test_registrations_from_another_store_are_kept(storage):
    first = EventStore(storage, events=[make_event('a')], registration_config=RegistrationConfig(delay_seconds=0))
    second = EventStore(storage, events=[make_event('a')], registration_config=RegistrationConfig(delay_seconds=0))
    
    asyncio.run(first.register_user('a', {'name': 'Alice'}))
    asyncio.run(second.register_user('a', {'name': 'Bob'}))
    
    assert [r['formData']['name'] for r in stored(storage, REGISTRATIONS_KEY)] == ['Bob', 'Alice']

def test_negative_registration_delay_is_rejected(monkeypatch):
    monkeypatch.setenv('REGISTRATION_DELAY_SECONDS', '-2')
    with pytest.raises(ValueError):
        EventStore(InMemoryStorage())

def test_empty_admin_password_is_rejected(monkeypatch):
    monkeypatch.setenv('ADMIN_PASSWORD', '')
    with pytest.raises(ValueError):
        EventStore(InMemoryStorage(), registration_config=RegistrationConfig(delay_seconds=0))
