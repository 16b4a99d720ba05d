from __future__ import annotations

import hashlib
from contextlib import suppress
from typing import Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import PersonRole, SessionKind
from ..core.exceptions import StorageError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import AttendanceRecord
from .repository import AdmitRule, AttendanceRepository

_COLUMNS = """
    attendance_id, card_id, scanned_at, role, person_name, staff_id,
    class_name, batch, subject, session_kind, session_key
"""


def card_lock_name(card_id: str) -> str:
    # MySQL caps lock names at 64 characters.
    return "rfid_attendance:" + hashlib.sha1(card_id.encode("utf-8")).hexdigest()


def dedup_digest(session_key: str) -> str:
    # Fixed width so the unique index never depends on label lengths.
    return hashlib.sha256(session_key.encode("utf-8")).hexdigest()


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, lock_timeout_seconds: int | None = None):
        self._conn_factory = conn_factory
        self._lock_timeout = int(lock_timeout_seconds if lock_timeout_seconds is not None else conn_factory.timeout_seconds)

    def latest_for_card(self, card_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._latest(cur, card_id)

    def insert_with_card_lock(self, record: AttendanceRecord, *, admit: AdmitRule) -> Optional[AttendanceRecord]:
        lock_name = card_lock_name(record.card_id)
        stored: Optional[AttendanceRecord] = None

        try:
            with db_cursor(self._conn_factory) as (conn, cur):
                cur.execute("SELECT GET_LOCK(%s, %s) AS acquired", (lock_name, self._lock_timeout))
                row = fetchone(cur)
                if not row or row.get("acquired") != 1:
                    raise StorageError(f"Timed out waiting for card lock after {self._lock_timeout}s")

                try:
                    # Start a fresh snapshot now that the lock is held.
                    conn.commit()
                    prior = self._latest(cur, record.card_id)
                    if not admit(prior):
                        return None
                    inserted = self._insert(cur, record, dedup_key=None)
                    conn.commit()
                    stored = inserted
                finally:
                    # The server frees named locks when the session closes.
                    with suppress(mysql.connector.Error):
                        cur.execute("DO RELEASE_LOCK(%s)", (lock_name,))
        except StorageError:
            # A committed row stays recorded even if the session drops while closing.
            if stored is None:
                raise
        return stored

    def insert_unless_session_taken(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                return self._insert(cur, record, dedup_key=dedup_digest(record.session_key))
            except mysql.connector.IntegrityError as e:
                if e.errno != errorcode.ER_DUP_ENTRY:
                    raise
                return None

    def _latest(self, cur, card_id: str) -> Optional[AttendanceRecord]:
        cur.execute(
            f"""
            SELECT {_COLUMNS}
            FROM attendance_records
            WHERE card_id=%s
            ORDER BY scanned_at DESC, attendance_id DESC
            LIMIT 1
            """,
            (card_id,),
        )
        r = fetchone(cur)
        return _to_record(r) if r else None

    def _insert(self, cur, record: AttendanceRecord, *, dedup_key: Optional[str]) -> AttendanceRecord:
        cur.execute(
            """
            INSERT INTO attendance_records(
                card_id, scanned_at, scan_date, scan_time, role, person_name, staff_id,
                class_name, batch, subject, session_kind, session_key, dedup_key
            )
            VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
            """,
            (
                record.card_id,
                record.scanned_at,
                record.scan_date,
                record.scan_time,
                record.role.value,
                record.person_name,
                record.staff_id,
                record.class_name,
                record.batch,
                record.subject,
                record.kind.value,
                record.session_key,
                dedup_key,
            ),
        )
        return AttendanceRecord(
            attendance_id=int(cur.lastrowid),
            card_id=record.card_id,
            scanned_at=record.scanned_at,
            role=record.role,
            person_name=record.person_name,
            staff_id=record.staff_id,
            class_name=record.class_name,
            batch=record.batch,
            subject=record.subject,
            kind=record.kind,
            session_key=record.session_key,
        )


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        card_id=r["card_id"],
        scanned_at=r["scanned_at"],
        role=PersonRole(r["role"]),
        person_name=r["person_name"],
        staff_id=r.get("staff_id"),
        class_name=r["class_name"],
        batch=r["batch"],
        subject=r["subject"],
        kind=SessionKind(r.get("session_kind") or SessionKind.LECTURE.value),
        session_key=r["session_key"],
    )
