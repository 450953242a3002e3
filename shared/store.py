# Dot Shared Feedback Store
# SQLite persistence for client satisfaction feedback

import logging
import numbers
import os
import sqlite3
import threading

from .config import DIMENSIONS, RATING_MIN, RATING_MAX
from .errors import ValidationError, DuplicateSubmissionError, StoreUnavailableError
from .helpers import utc_now, format_timestamp

logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ['email', 'client_name', 'project']
REQUIRED_FIELDS = REQUIRED_TEXT_FIELDS + DIMENSIONS
OPTIONAL_TEXT_FIELDS = [f'{d}_suggestion' for d in DIMENSIONS] + ['global_comment']

SCHEMA = """
CREATE TABLE IF NOT EXISTS feedback (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  created_at TEXT NOT NULL,
  email TEXT NOT NULL,
  client_name TEXT NOT NULL,
  project TEXT NOT NULL,

  reactivity INTEGER NOT NULL,
  reactivity_suggestion TEXT,

  deadlines INTEGER NOT NULL,
  deadlines_suggestion TEXT,

  deliverables INTEGER NOT NULL,
  deliverables_suggestion TEXT,

  professionalism INTEGER NOT NULL,
  professionalism_suggestion TEXT,

  global_comment TEXT,

  UNIQUE(client_name, project)
)
"""

COLUMNS = ['created_at'] + REQUIRED_TEXT_FIELDS + DIMENSIONS + OPTIONAL_TEXT_FIELDS


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def parse_rating(field, value):
    """Parse a rating into an int within RATING_MIN..RATING_MAX.

    Accepts ints, integral floats and numeric strings ('4').
    """
    if isinstance(value, bool):
        raise ValidationError(f'Invalid rating for {field}: {value!r}', field=field)

    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            raise ValidationError(f'Invalid rating for {field}: {value!r}', field=field)
    elif isinstance(value, numbers.Real):
        if not float(value).is_integer():
            raise ValidationError(f'Invalid rating for {field}: {value!r}', field=field)
        value = int(value)
    else:
        raise ValidationError(f'Invalid rating for {field}: {value!r}', field=field)

    if not RATING_MIN <= value <= RATING_MAX:
        raise ValidationError(
            f'Rating for {field} must be between {RATING_MIN} and {RATING_MAX}',
            field=field
        )
    return value


def parse_submission(body):
    """Validate a raw feedback payload and return a clean record dict.

    Required: email, client_name, project and the four dimension ratings.
    Optional: one suggestion per dimension plus global_comment.
    Text is trimmed; empty optional text becomes None.

    Raises ValidationError on the first missing or bad field.
    """
    if not isinstance(body, dict):
        raise ValidationError('Request body must be a JSON object')

    for field in REQUIRED_FIELDS:
        if _is_blank(body.get(field)):
            raise ValidationError(f'Missing field: {field}', field=field)

    record = {}

    for field in REQUIRED_TEXT_FIELDS:
        value = body[field]
        if not isinstance(value, str):
            raise ValidationError(f'Field {field} must be text', field=field)
        record[field] = value.strip()

    for field in DIMENSIONS:
        record[field] = parse_rating(field, body[field])

    for field in OPTIONAL_TEXT_FIELDS:
        value = body.get(field)
        if value is None:
            record[field] = None
            continue
        if not isinstance(value, str):
            raise ValidationError(f'Field {field} must be text', field=field)
        record[field] = value.strip() or None

    return record


class FeedbackStore:
    """Append-only feedback table.

    One row per (client_name, project); rows are never updated or deleted.
    Use as a context manager to close the connection on exit.
    """

    def __init__(self, path):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.path = path
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(path, timeout=30, check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute(SCHEMA)
            self._conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(str(e))

        logger.info(f"Feedback store ready at {path}")

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def close(self):
        self._conn.close()

    def submit(self, body, created_at=None):
        """Validate and insert one feedback record.

        created_at defaults to now (UTC).
        Returns the new record id.
        """
        record = parse_submission(body)
        record['created_at'] = format_timestamp(created_at or utc_now())
        return self.insert(record)

    def insert(self, record):
        """Insert an already-validated record. Returns the new id."""
        placeholders = ', '.join('?' for _ in COLUMNS)
        sql = f"INSERT INTO feedback ({', '.join(COLUMNS)}) VALUES ({placeholders})"
        values = [record.get(column) for column in COLUMNS]

        with self._lock:
            try:
                with self._conn:
                    cursor = self._conn.execute(sql, values)
            except sqlite3.IntegrityError as e:
                if self._exists(record['client_name'], record['project']):
                    raise DuplicateSubmissionError(record['client_name'], record['project'])
                raise StoreUnavailableError(str(e))
            except sqlite3.Error as e:
                raise StoreUnavailableError(str(e))

        logger.info(
            f"Saved feedback {cursor.lastrowid}: {record['client_name']} / {record['project']}"
        )
        return cursor.lastrowid

    def _exists(self, client_name, project):
        row = self._conn.execute(
            "SELECT 1 FROM feedback WHERE client_name = ? AND project = ? LIMIT 1",
            (client_name, project)
        ).fetchone()
        return row is not None

    def get(self, record_id):
        """Fetch a single record as a dict, or None if not found.

        Read-back for single submissions; monthly reports use project_averages.
        """
        with self._lock:
            try:
                row = self._conn.execute(
                    "SELECT * FROM feedback WHERE id = ?", (record_id,)
                ).fetchone()
            except sqlite3.Error as e:
                raise StoreUnavailableError(str(e))
        return dict(row) if row else None

    def count(self):
        """Total number of stored records"""
        with self._lock:
            try:
                return self._conn.execute("SELECT COUNT(*) FROM feedback").fetchone()[0]
            except sqlite3.Error as e:
                raise StoreUnavailableError(str(e))

    def project_averages(self, start, end):
        """Per-project response count and dimension averages for
        created_at in [start, end). Overall average is the mean of the
        four dimension averages. Sorted worst first.
        """
        averages = ',\n              '.join(f'AVG({d}) AS avg_{d}' for d in DIMENSIONS)
        total = ' + '.join(f'AVG({d})' for d in DIMENSIONS)
        sql = f"""
            SELECT
              project,
              COUNT(*) AS responses,
              {averages},
              ({total}) / {float(len(DIMENSIONS))} AS avg_total
            FROM feedback
            WHERE created_at >= ? AND created_at < ?
            GROUP BY project
            ORDER BY avg_total ASC
        """

        with self._lock:
            try:
                rows = self._conn.execute(sql, (start, end)).fetchall()
            except sqlite3.Error as e:
                raise StoreUnavailableError(str(e))

        return [dict(row) for row in rows]
