import asyncio
from datetime import timezone

import pytest

from housing_portal.utils.csv_export import EmptyExportError
from housing_portal.views.admin import AdminDashboard, EventFilter, fill_percent

from .conftest import TODAY, FakeExtractor, make_event, make_registration

@pytest.fixture
def dashboard(store):
    store.add_events_batch([
        make_event('past1', date='2023-09-01'),
        make_event('past2', date='2023-09-19'),
        make_event('today', date='2023-09-20'),
        make_event('future', date='2023-10-01'),
        make_event('undated', date=''),
    ])
    return AdminDashboard(store, tz=timezone.utc)

def ids(events):
    return [e.id for e in events]

def test_event_filters(dashboard):
    assert len(dashboard.filtered_events(TODAY)) == 5
    
    dashboard.event_filter = EventFilter.UPCOMING
    assert ids(dashboard.filtered_events(TODAY)) == ['today', 'future']
    
    dashboard.event_filter = EventFilter.PAST
    assert ids(dashboard.filtered_events(TODAY)) == ['past1', 'past2']

def test_bulk_delete_removes_only_past_events_whatever_the_filter(dashboard, store):
    dashboard.event_filter = EventFilter.UPCOMING
    
    assert dashboard.bulk_delete_past(TODAY) == 2
    
    assert ids(store.events) == ['today', 'future', 'undated']
    assert dashboard.event_filter == EventFilter.UPCOMING

def test_bulk_delete_resets_past_filter(dashboard):
    dashboard.event_filter = EventFilter.PAST
    dashboard.bulk_delete_past(TODAY)
    assert dashboard.event_filter == EventFilter.ALL

def test_bulk_delete_keeps_registrations(dashboard, store):
    store._registrations.append(make_registration('past1'))
    dashboard.bulk_delete_past(TODAY)
    assert len(store.registrations_for('past1')) == 1

def test_toggle_status(dashboard, store):
    assert dashboard.toggle_status('future').is_open is False
    assert dashboard.toggle_status('future').is_open is True

def test_event_rows_show_fill_and_tags(dashboard, store):
    store.update_event('today', {'max_participants': 3, 'deadline': '2023-09-19', 'is_open': False})
    store._registrations.append(make_registration('today'))
    
    rows = {row.event.id: row for row in dashboard.event_rows(TODAY)}
    
    today_row = rows['today']
    assert today_row.taken == 1
    assert today_row.percent == 33
    assert today_row.tags == ['已過截止日', '手動暫停']
    assert rows['past1'].tags[0] == '活動已結束'

def test_fill_percent_rounds_half_up_and_handles_zero_capacity(store):
    event = make_event(max_participants=8)
    status = store.get_event_status(event, TODAY)._replace(remaining_spots=7)
    assert fill_percent(event, status) == 13
    
    empty = make_event(max_participants=0)
    assert fill_percent(empty, store.get_event_status(empty, TODAY)) == 100

def test_registration_rows_and_filtering(dashboard, store):
    store._registrations.extend([
        make_registration('future', 'r1', name='Alice', phone='0912', email='a@x.tw', dietary='素'),
        make_registration('deleted', 'r2', name='Bob'),
    ])
    
    rows = dashboard.registration_rows()
    assert [r.event_title for r in rows] == ['Event future', 'Unknown Event']
    assert rows[0].other_info == 'dietary: 素'
    assert rows[0].contact == {'phone': '0912', 'email': 'a@x.tw'}
    assert dashboard.registrations_heading == '所有報名資料'
    
    dashboard.view_registrations('future')
    assert [r.registration.id for r in dashboard.registration_rows()] == ['r1']
    assert dashboard.registrations_heading == 'Event future - 報名名單'
    
    dashboard.clear_registration_filter()
    assert len(dashboard.registration_rows()) == 2

def test_export_filtered_registrations(dashboard, store):
    store._registrations.append(make_registration('future', 'r1', name='Alice'))
    dashboard.view_registrations('future')
    
    filename, content = dashboard.export_csv(TODAY)
    
    assert filename == 'Event future_報名名單.csv'
    assert content.splitlines()[0] == '\ufeff活動名稱,報名時間,name'

def test_export_of_empty_selection_produces_nothing(dashboard):
    dashboard.view_registrations('future')
    with pytest.raises(EmptyExportError):
        dashboard.export_csv(TODAY)
    assert dashboard.empty_registrations_message == '此活動目前尚無報名資料。'

def test_full_export_filename_uses_the_day(dashboard, store):
    store._registrations.append(make_registration('future'))
    filename, _ = dashboard.export_csv(TODAY)
    assert filename == '完整報名清單_2023-09-20.csv'

def test_login_sets_error_flag(store):
    dashboard = AdminDashboard(store)
    
    assert dashboard.login('nope') is False
    assert dashboard.login_error is True
    assert dashboard.is_admin is False
    
    assert dashboard.login('admin') is True
    assert dashboard.login_error is False
    assert dashboard.is_admin is True

def test_import_without_extractor_is_rejected(store):
    with pytest.raises(ValueError):
        asyncio.run(AdminDashboard(store).import_from_text('text'))

def test_import_through_dashboard(store, fake_extractor):
    events = asyncio.run(AdminDashboard(store, fake_extractor).import_from_text('公告'))
    assert ids(store.events) == ids(events)

def test_stats(dashboard, store):
    store._registrations.append(make_registration('future'))
    assert dashboard.stats() == {'total_events': 5, 'total_registrations': 1}
