"""In-memory stand-ins for the Supabase client, Stripe gateway and Resend
notifications, covering the query-builder calls the services make."""

import copy
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


class FakeResponse:
    def __init__(self, data, count=None):
        self.data = data
        self.count = count


def _like(pattern: str, value: Any) -> bool:
    regex = "^" + ".*".join(re.escape(part) for part in pattern.split("%")) + "$"
    return value is not None and re.match(regex, str(value), re.IGNORECASE) is not None


def _compare(value: Any, other: Any) -> Any:
    """Compare like Postgres would for the ISO strings and numbers we store"""
    if isinstance(value, (int, float)) and not isinstance(other, (int, float)):
        other = float(other)
    if isinstance(value, str) and not isinstance(other, str):
        other = str(other)
    return other


def _sort_key(value: Any):
    return (value is None, "" if value is None else value)


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.action = "select"
        self.payload: Any = None
        self.on_conflict: Optional[str] = None
        self.filters: List[Any] = []
        self.orders: List[Any] = []
        self.limit_count: Optional[int] = None
        self.range_bounds: Optional[Any] = None
        self.single_mode: Optional[str] = None
        self.want_count = False

    # Actions

    def select(self, columns: str = "*", count: Optional[str] = None):
        self.want_count = count is not None
        return self

    def insert(self, data):
        self.action = "insert"
        self.payload = data
        return self

    def upsert(self, data, on_conflict: Optional[str] = None, **kwargs):
        self.action = "upsert"
        self.payload = data
        self.on_conflict = on_conflict
        return self

    def update(self, data):
        self.action = "update"
        self.payload = data
        return self

    def delete(self):
        self.action = "delete"
        return self

    # Filters

    def _filter(self, predicate):
        self.filters.append(predicate)
        return self

    def eq(self, column, value):
        return self._filter(lambda row: row.get(column) == value)

    def neq(self, column, value):
        return self._filter(lambda row: row.get(column) != value)

    def gt(self, column, value):
        return self._filter(lambda row: row.get(column) is not None and row[column] > _compare(row[column], value))

    def gte(self, column, value):
        return self._filter(lambda row: row.get(column) is not None and row[column] >= _compare(row[column], value))

    def lt(self, column, value):
        return self._filter(lambda row: row.get(column) is not None and row[column] < _compare(row[column], value))

    def lte(self, column, value):
        return self._filter(lambda row: row.get(column) is not None and row[column] <= _compare(row[column], value))

    def in_(self, column, values):
        values = list(values)
        return self._filter(lambda row: row.get(column) in values)

    def ilike(self, column, pattern):
        return self._filter(lambda row: _like(pattern, row.get(column)))

    def is_(self, column, value):
        expected = None if value in (None, "null") else value
        return self._filter(lambda row: row.get(column) is expected or row.get(column) == expected)

    def or_(self, expression: str):
        clauses = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            clauses.append((column, op, value))

        def matches(row):
            for column, op, value in clauses:
                if op == "ilike" and _like(value, row.get(column)):
                    return True
                if op == "eq" and str(row.get(column)) == value:
                    return True
            return False
        return self._filter(matches)

    # Modifiers

    def order(self, column, desc: bool = False, **kwargs):
        self.orders.append((column, desc))
        return self

    def limit(self, count):
        self.limit_count = count
        return self

    def range(self, start, end):
        self.range_bounds = (start, end)
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    # Execution

    def _matching(self, table: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return [row for row in table if all(f(row) for f in self.filters)]

    def _prepare(self, row: Dict[str, Any]) -> Dict[str, Any]:
        row = copy.deepcopy(row)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        return row

    def execute(self):
        self.db.calls.append((self.table_name, self.action))
        failure = self.db.failures.get((self.table_name, self.action))
        if failure:
            raise failure
        table = self.db.tables.setdefault(self.table_name, [])

        if self.action == "insert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            inserted = [self._prepare(row) for row in new_rows]
            table.extend(inserted)
            return FakeResponse(copy.deepcopy(inserted))

        if self.action == "upsert":
            new_rows = self.payload if isinstance(self.payload, list) else [self.payload]
            keys = (self.on_conflict or "id").split(",")
            written = []
            for row in new_rows:
                existing = next(
                    (r for r in table if all(r.get(k) == row.get(k) for k in keys)), None
                )
                if existing is not None:
                    existing.update(copy.deepcopy(row))
                    written.append(copy.deepcopy(existing))
                else:
                    prepared = self._prepare(row)
                    table.append(prepared)
                    written.append(copy.deepcopy(prepared))
            return FakeResponse(written)

        if self.action == "update":
            updated = []
            for row in self._matching(table):
                row.update(copy.deepcopy(self.payload))
                updated.append(copy.deepcopy(row))
            return FakeResponse(updated)

        if self.action == "delete":
            removed = self._matching(table)
            self.db.tables[self.table_name] = [row for row in table if row not in removed]
            return FakeResponse(copy.deepcopy(removed))

        result = [copy.deepcopy(row) for row in self._matching(table)]
        for column, desc in reversed(self.orders):
            result.sort(key=lambda row: _sort_key(row.get(column)), reverse=desc)
        count = len(result) if self.want_count else None
        if self.range_bounds:
            start, end = self.range_bounds
            result = result[start:end + 1]
        if self.limit_count is not None:
            result = result[:self.limit_count]
        if self.single_mode:
            if not result:
                if self.single_mode == "single":
                    raise RuntimeError("JSON object requested, multiple (or no) rows returned")
                return FakeResponse(None)
            return FakeResponse(result[0], count)
        return FakeResponse(result, count)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, content, file_options=None):
        self.storage.files[(self.name, path)] = content
        return {"Key": path}

    def get_public_url(self, path):
        return f"https://storage.test/{self.name}/{path}"


class FakeStorage:
    def __init__(self):
        self.files: Dict[Any, bytes] = {}

    def from_(self, bucket):
        return FakeBucket(self, bucket)


class FakeSupabase:
    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(tables or {})
        self.storage = FakeStorage()
        self.calls: List[Any] = []
        self.failures: Dict[Any, Exception] = {}

    def table(self, name):
        return FakeQuery(self, name)

    def fail_on(self, table: str, action: str, error: Optional[Exception] = None):
        self.failures[(table, action)] = error or RuntimeError(f"{table} {action} failed")

    def rows(self, name):
        return self.tables.get(name, [])


class FakeGateway:
    """Records checkout sessions instead of calling Stripe"""

    def __init__(self):
        self.sessions: List[Dict[str, Any]] = []
        self.retrievable: Dict[str, Dict[str, Any]] = {}
        self.subscriptions: Dict[str, Dict[str, Any]] = {}
        self.payment_intents: List[Any] = []
        self.event: Optional[Dict[str, Any]] = None
        self.fail_with: Optional[Exception] = None

    def line_item(self, name, unit_price, quantity, description=None, images=None, recurring=None):
        return {
            "name": name,
            "unit_amount": int(round(unit_price * 100)),
            "quantity": quantity,
            "description": description,
            "images": images,
            "recurring": recurring,
        }

    def create_checkout_session(self, **kwargs):
        if self.fail_with:
            raise self.fail_with
        session_id = f"cs_test_{len(self.sessions) + 1}"
        self.sessions.append({"id": session_id, **kwargs})
        return {"id": session_id, "url": f"https://checkout.stripe.test/{session_id}"}

    def retrieve_checkout_session(self, session_id):
        return self.retrievable[session_id]

    def retrieve_subscription(self, subscription_id):
        return self.subscriptions[subscription_id]

    def create_payment_intent(self, amount, email):
        self.payment_intents.append((amount, email))
        return "pi_secret_test"

    def verify_webhook(self, payload, signature):
        from clubhub.core.payments import WebhookVerificationError

        if signature != "valid":
            raise WebhookVerificationError("bad signature")
        return self.event


class FakeNotifications:
    """Records every message the routes and services ask to send"""

    def __init__(self, fail: bool = False):
        self.sent: List[Any] = []
        self.fail = fail

    def _record(self, kind, *args):
        if self.fail:
            raise RuntimeError(f"{kind} failed")
        self.sent.append((kind, *args))

    async def send_ticket_confirmation(self, ticket_id):
        self._record("ticket", ticket_id)

    async def send_subscription_confirmation(self, subscription_id):
        self._record("subscription", subscription_id)

    def send_shop_order_confirmation(self, order_id):
        self._record("shop_order", order_id)

    def send_shop_order_admin_notification(self, order_id):
        self._record("shop_order_admin", order_id)

    def send_shop_order_shipping_confirmation(self, order_id, tracking_number):
        self._record("shop_order_shipped", order_id, tracking_number)

    def send_bulk_email(self, to, subject, html_body=None, text_body=None):
        self._record("bulk", list(to), subject)
