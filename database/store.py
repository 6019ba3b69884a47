"""
Query client over the relational store.

Every read and write of the application goes through QueryClient:
select with filters/ordering/joined relations, insert-returning,
update-returning and count. Rows are handed out as pydantic Read schemas
re-read after each write, so callers only ever see the canonical record.
Driver failures are wrapped into StoreError at this boundary.
"""
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from models import Booking, Guest, HousekeepingTask, Payment, Profile, Room, Schedule, Service
from schemas.bookings import BookingRead, PaymentRead
from schemas.guests import GuestRead
from schemas.housekeeping import TaskRead
from schemas.rooms import RoomRead
from schemas.services import ServiceRead
from schemas.staff import ScheduleRead, StaffRead


class StoreError(Exception):
    """A write or read rejected by the store."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TableSpec:
    def __init__(self, model, read_schema, default_order: Iterable[str] = (), relations: Iterable = ()):
        self.model = model
        self.read_schema = read_schema
        self.default_order = tuple(default_order)
        self.relations = tuple(relations)


TABLES: Dict[str, TableSpec] = {
    "guests": TableSpec(Guest, GuestRead, ("-created_at", "-id")),
    "rooms": TableSpec(Room, RoomRead, ("room_number",)),
    "bookings": TableSpec(
        Booking, BookingRead, ("-created_at", "-id"),
        (
            lambda: joinedload(Booking.guest),
            lambda: joinedload(Booking.room),
            lambda: selectinload(Booking.payments),
        ),
    ),
    "payments": TableSpec(Payment, PaymentRead, ("payment_date", "id")),
    "profiles": TableSpec(Profile, StaffRead, ("-created_at", "-id")),
    "staff_schedules": TableSpec(
        Schedule, ScheduleRead, ("shift_date", "start_time"),
        (lambda: joinedload(Schedule.staff),),
    ),
    "housekeeping_tasks": TableSpec(
        HousekeepingTask, TaskRead, ("-created_at", "-id"),
        (
            lambda: joinedload(HousekeepingTask.room),
            lambda: joinedload(HousekeepingTask.assigned_to_profile),
        ),
    ),
    "services": TableSpec(Service, ServiceRead, ("name",)),
}


def _table(kind: str) -> TableSpec:
    try:
        return TABLES[kind]
    except KeyError:
        raise ValueError(f"Unknown table: {kind}")


def _column(model, name: str):
    column = getattr(model, name, None)
    if column is None:
        raise ValueError(f"{model.__tablename__} has no column {name}")
    return column


def _apply_filters(query, model, filters: Optional[Dict[str, Any]]):
    """Filter keys are column names, optionally suffixed with __in, __gte, __lte or __ne."""
    for key, value in (filters or {}).items():
        name, _, op = key.partition("__")
        column = _column(model, name)
        if op == "":
            query = query.filter(column == value)
        elif op == "in":
            query = query.filter(column.in_(list(value)))
        elif op == "gte":
            query = query.filter(column >= value)
        elif op == "lte":
            query = query.filter(column <= value)
        elif op == "ne":
            query = query.filter(column != value)
        else:
            raise ValueError(f"Unsupported filter operator: {op}")
    return query


def _apply_order(query, model, order: Iterable[str]):
    for field in order:
        if field.startswith("-"):
            query = query.order_by(_column(model, field[1:]).desc())
        else:
            query = query.order_by(_column(model, field).asc())
    return query


class QueryClient:
    def __init__(self, db: Session):
        self.db = db

    # ========== READS ==========

    def select(
        self,
        kind: str,
        filters: Optional[Dict[str, Any]] = None,
        order: Optional[Iterable[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        spec = _table(kind)
        try:
            query = self.db.query(spec.model).options(*[load() for load in spec.relations])
            query = _apply_filters(query, spec.model, filters)
            query = _apply_order(query, spec.model, spec.default_order if order is None else order)
            if limit is not None:
                query = query.limit(limit)
            return [spec.read_schema.model_validate(row) for row in query.all()]
        except SQLAlchemyError as e:
            raise StoreError(f"select on {kind} failed: {e}")

    def get(self, kind: str, record_id: int) -> Optional[Any]:
        rows = self.select(kind, filters={"id": record_id}, order=())
        return rows[0] if rows else None

    def count(self, kind: str, filters: Optional[Dict[str, Any]] = None) -> int:
        spec = _table(kind)
        try:
            query = self.db.query(func.count(spec.model.id))
            query = _apply_filters(query, spec.model, filters)
            return query.scalar() or 0
        except SQLAlchemyError as e:
            raise StoreError(f"count on {kind} failed: {e}")

    # ========== WRITES ==========

    def insert(self, kind: str, values: Dict[str, Any]) -> Any:
        spec = _table(kind)
        try:
            row = spec.model(**values)
            self.db.add(row)
            self.db.commit()
            record_id = row.id
        except IntegrityError as e:
            self.db.rollback()
            raise StoreError(f"insert into {kind} violates a constraint: {e.orig}", status_code=409)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"insert into {kind} failed: {e}")
        self.db.expire_all()
        return self.get(kind, record_id)

    def update(self, kind: str, record_id: int, values: Dict[str, Any]) -> Any:
        spec = _table(kind)
        try:
            row = self.db.query(spec.model).filter(spec.model.id == record_id).first()
            if row is None:
                raise StoreError(f"{kind} {record_id} not found", status_code=404)
            for field, value in values.items():
                setattr(row, field, value)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise StoreError(f"update of {kind} {record_id} violates a constraint: {e.orig}", status_code=409)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"update of {kind} {record_id} failed: {e}")
        self.db.expire_all()
        return self.get(kind, record_id)
