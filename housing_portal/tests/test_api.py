"""HTTP surface tests against an in-memory store."""

import pytest
from fastapi.testclient import TestClient

from housing_portal.api.app import create_application
from housing_portal.importers.base import EventImportError
from housing_portal.importers.openai_extractor import OpenAIEventExtractor

from .conftest import FakeExtractor, days_from_today, make_event, make_registration

@pytest.fixture
def open_event(store):
    return store.add_event(make_event(
        'open',
        date=days_from_today(10),
        deadline=days_from_today(5),
        max_participants=2,
    ))

@pytest.fixture
def client(store, fake_extractor):
    return TestClient(create_application(store=store, extractor=fake_extractor))

@pytest.fixture
def admin_client(client):
    response = client.post('/api/admin/login', json={'password': 'admin'})
    assert response.status_code == 200
    client.auth = ('admin', 'admin')
    return client

def test_health_check(client):
    response = client.get('/')
    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'

def test_public_listing(client, open_event):
    data = client.get('/api/events').json()
    assert data['message'] is None
    assert data['events'][0]['event']['id'] == 'open'
    assert data['events'][0]['badge'] == '報名中'

def test_empty_listing_message(client):
    data = client.get('/api/events').json()
    assert data['events'] == []
    assert data['message'] == '目前沒有開放報名的活動。'

def test_unknown_event_is_404(client):
    assert client.get('/api/events/missing').status_code == 404
    response = client.post('/api/events/missing/registrations', json={'formData': {'name': 'A'}})
    assert response.status_code == 404

def test_register(client, store, open_event):
    response = client.post(
        '/api/events/open/registrations',
        json={'formData': {'name': 'Alice', 'email': 'alice@example.com'}}
    )
    
    assert response.status_code == 201
    body = response.json()
    assert body['state'] == 'SUCCESS'
    assert body['confirmationEmail'] == 'alice@example.com'
    assert store.registrations_for('open')[0].form_data['name'] == 'Alice'

def test_register_missing_required_field(client, store, open_event):
    response = client.post('/api/events/open/registrations', json={'formData': {'email': 'a@x.tw'}})
    
    assert response.status_code == 422
    assert response.json()['detail']['missingFields'] == ['name']
    assert store.registrations == []

def test_register_when_full_is_refused(client, store, open_event):
    store._registrations.extend([
        make_registration('open', 'r1'),
        make_registration('open', 'r2'),
    ])
    
    response = client.post('/api/events/open/registrations', json={'formData': {'name': 'Carol'}})
    
    assert response.status_code == 409
    assert response.json()['detail'] == '名額已滿'
    assert len(store.registrations) == 2

def test_admin_routes_need_login(client):
    assert client.get('/api/admin/stats').status_code == 401
    assert client.get('/api/admin/events').status_code == 401
    assert client.post('/api/admin/events/purge-past').status_code == 401

def test_wrong_password(client, store):
    response = client.post('/api/admin/login', json={'password': 'guess'})
    assert response.status_code == 401
    assert response.json()['detail'] == '密碼錯誤，請重試。'
    assert store.is_admin is False

def test_login_does_not_unlock_admin_routes_for_other_clients(store, fake_extractor, open_event):
    app = create_application(store=store, extractor=fake_extractor)
    first = TestClient(app)
    second = TestClient(app)
    store._registrations.append(make_registration('open', 'r1', name='Alice', phone='0912'))
    
    assert first.post('/api/admin/login', json={'password': 'admin'}).status_code == 200
    
    assert second.get('/api/admin/registrations/export').status_code == 401
    assert second.delete('/api/admin/events/open').status_code == 401
    assert first.get('/api/admin/stats').status_code == 401
    assert store.get_event('open') is not None

def test_admin_routes_check_the_password_of_each_request(admin_client):
    assert admin_client.get('/api/admin/stats').status_code == 200
    
    response = admin_client.get('/api/admin/stats', auth=('admin', 'guess'))
    assert response.status_code == 401
    assert response.headers['www-authenticate'] == 'Basic'

def test_create_edit_toggle_delete(admin_client, store):
    response = admin_client.post('/api/admin/events', json={
        'title': '社區市集',
        'date': days_from_today(3),
        'maxParticipants': 20,
    })
    assert response.status_code == 201
    created = response.json()
    assert created['isOpen'] is True
    assert created['maxParticipants'] == 20
    assert [f['name'] for f in created['formFields']] == ['name', 'phone', 'email']
    event_id = created['id']
    
    response = admin_client.patch(f'/api/admin/events/{event_id}', json={'location': 'B棟'})
    assert response.json()['location'] == 'B棟'
    assert response.json()['title'] == '社區市集'
    
    assert admin_client.post(f'/api/admin/events/{event_id}/toggle').json()['isOpen'] is False
    
    assert admin_client.delete(f'/api/admin/events/{event_id}').status_code == 200
    assert store.get_event(event_id) is None
    assert admin_client.delete(f'/api/admin/events/{event_id}').status_code == 404

def test_create_requires_title_and_date(admin_client, store):
    response = admin_client.post('/api/admin/events', json={'title': 'No date'})
    assert response.status_code == 422
    assert store.events == []

def test_purge_past_events(admin_client, store, open_event):
    store.add_event(make_event('old', date=days_from_today(-3)))
    
    response = admin_client.post('/api/admin/events/purge-past')
    
    assert response.json()['deleted'] == 1
    assert [e.id for e in store.events] == ['open']

def test_event_rows_filter(admin_client, store, open_event):
    store.add_event(make_event('old', date=days_from_today(-3)))
    
    data = admin_client.get('/api/admin/events', params={'filter': 'past'}).json()
    
    assert [row['event']['id'] for row in data['events']] == ['old']
    assert data['pastCount'] == 1
    assert data['events'][0]['tags'][0] == '活動已結束'

def test_import(admin_client, store, fake_extractor):
    response = admin_client.post('/api/admin/events/import', json={'text': '十月電影夜公告'})
    
    assert response.status_code == 201
    assert response.json()['imported'] == 1
    assert store.events[0].title == '社區電影夜'
    assert fake_extractor.calls == ['十月電影夜公告']

def test_import_blank_text(admin_client, fake_extractor):
    response = admin_client.post('/api/admin/events/import', json={'text': '  '})
    assert response.status_code == 400
    assert fake_extractor.calls == []

def test_import_failure_appends_nothing(store):
    client = TestClient(create_application(
        store=store, extractor=FakeExtractor(error=EventImportError('bad json'))
    ))
    client.auth = ('admin', 'admin')
    
    response = client.post('/api/admin/events/import', json={'text': '公告'})
    
    assert response.status_code == 502
    assert response.json()['detail'] == '生成失敗，請檢查 API Key 或重試。'
    assert store.events == []

def test_import_without_api_key(store, monkeypatch):
    monkeypatch.delenv('OPENAI_API_KEY', raising=False)
    client = TestClient(create_application(store=store, extractor=OpenAIEventExtractor()))
    client.auth = ('admin', 'admin')
    
    response = client.post('/api/admin/events/import', json={'text': '公告'})
    
    assert response.status_code == 503
    assert store.events == []

def test_export_csv(admin_client, store, open_event):
    store._registrations.append(make_registration('open', 'r1', name='Alice'))
    
    response = admin_client.get('/api/admin/registrations/export', params={'event_id': 'open'})
    
    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/csv')
    assert "filename*=UTF-8''" in response.headers['content-disposition']
    assert response.content.startswith('\ufeff'.encode('utf-8'))
    assert '"Alice"' in response.content.decode('utf-8')

def test_export_empty(admin_client, open_event):
    response = admin_client.get('/api/admin/registrations/export')
    assert response.status_code == 400
    assert response.json()['detail'] == '沒有資料可匯出'

def test_registrations_listing(admin_client, store, open_event):
    store._registrations.extend([
        make_registration('open', 'r1', name='Alice'),
        make_registration('gone', 'r2', name='Bob'),
    ])
    
    data = admin_client.get('/api/admin/registrations').json()
    assert data['count'] == 2
    assert data['registrations'][1]['eventTitle'] == 'Unknown Event'
    
    data = admin_client.get('/api/admin/registrations', params={'event_id': 'open'}).json()
    assert data['heading'] == 'Event open - 報名名單'
    assert [r['name'] for r in data['registrations']] == ['Alice']
