"""CSV export of registrations."""

import csv
import io
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..models.event import HousingEvent
from ..models.registration import Registration

# Column labels as shown in the admin dashboard
EVENT_TITLE_COLUMN = '活動名稱'
TIMESTAMP_COLUMN = '報名時間'
UNKNOWN_EVENT_TITLE = 'Unknown Event'
EMPTY_EXPORT_NOTICE = '沒有資料可匯出'

UTF8_BOM = '\ufeff'

class EmptyExportError(ValueError):
    """Raised when there is nothing to export; no file is produced."""
    
    def __init__(self, message: str = EMPTY_EXPORT_NOTICE):
        super().__init__(message)

def format_timestamp(timestamp_ms: int, tz: Optional[tzinfo] = None) -> str:
    """Format epoch milliseconds the zh-TW way, e.g. '2023/9/20 下午3:04:05'."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz)
    period = '上午' if moment.hour < 12 else '下午'
    hour = moment.hour % 12 or 12
    return (
        f"{moment.year}/{moment.month}/{moment.day} "
        f"{period}{hour}:{moment.minute:02d}:{moment.second:02d}"
    )

def registration_rows(
    registrations: Iterable[Registration],
    events: Sequence[HousingEvent],
    tz: Optional[tzinfo] = None
) -> List[Dict[str, Any]]:
    """Flatten registrations into rows keyed by event title, time and form data."""
    titles = {e.id: e.title for e in events}
    rows = []
    for reg in registrations:
        row = {
            EVENT_TITLE_COLUMN: titles.get(reg.event_id, UNKNOWN_EVENT_TITLE),
            TIMESTAMP_COLUMN: format_timestamp(reg.timestamp, tz),
        }
        row.update(reg.form_data)
        rows.append(row)
    return rows

def collect_headers(rows: Iterable[Dict[str, Any]]) -> List[str]:
    """Union of all row keys in first-seen order."""
    headers: Dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(key, None)
    return list(headers)

def rows_to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Render rows as CSV text with a leading byte-order mark.
    
    Every value is wrapped in double quotes with embedded quotes doubled;
    missing or empty values become "".
    
    Raises:
        EmptyExportError: If rows is empty
    """
    if not rows:
        raise EmptyExportError()
    
    headers = collect_headers(rows)
    buffer = io.StringIO()
    # The header row is written bare, data rows fully quoted
    buffer.write(','.join(headers))
    buffer.write('\n')
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator='\n')
    for row in rows:
        writer.writerow([row.get(h) or '' for h in headers])
    
    return UTF8_BOM + buffer.getvalue().rstrip('\n')

def export_filename(event: Optional[HousingEvent], on_day: Optional[str] = None) -> str:
    """Download name for an export, per event or for the full list."""
    if event is not None:
        return f"{event.title}_報名名單.csv"
    on_day = on_day or datetime.now().date().isoformat()
    return f"完整報名清單_{on_day}.csv"
