import sqlite3
from datetime import datetime
from typing import Any
from uuid import UUID

from chirpy.domain.entities import Chirp, User
from chirpy.domain.errors import DuplicateEmailError


# Helper to convert sqlite rows to dicts
def dict_factory(cursor: sqlite3.Cursor, row: Any) -> dict[str, Any]:
    d = {}
    for idx, col in enumerate(cursor.description):
        d[col[0]] = row[idx]
    return d


class _SQLiteRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = dict_factory
        conn.execute("PRAGMA foreign_keys = ON;")
        return conn


class SQLiteUserRepo(_SQLiteRepo):
    def save(self, user: User) -> User:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO users (id, email, hashed_password, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    email=excluded.email,
                    hashed_password=excluded.hashed_password,
                    updated_at=excluded.updated_at
            """,
                (
                    str(user.id),
                    user.email,
                    user.hashed_password,
                    user.created_at.isoformat(),
                    user.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return user
        except sqlite3.IntegrityError as e:
            conn.rollback()
            if "users.email" in str(e):
                raise DuplicateEmailError(user.email) from e
            raise
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_email(self, email: str) -> User | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
            return self._map_row(row) if row else None
        finally:
            conn.close()

    def get_by_id(self, user_id: UUID) -> User | None:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (str(user_id),)).fetchone()
            return self._map_row(row) if row else None
        finally:
            conn.close()

    def reset_users(self) -> int:
        conn = self._get_conn()
        try:
            cursor = conn.execute("DELETE FROM users")
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()

    def _map_row(self, row: dict[str, Any]) -> User:
        return User(
            id=UUID(row["id"]),
            email=row["email"],
            hashed_password=row["hashed_password"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )


class SQLiteChirpRepo(_SQLiteRepo):
    def save(self, chirp: Chirp) -> Chirp:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO chirps (id, body, user_id, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    body=excluded.body,
                    updated_at=excluded.updated_at
            """,
                (
                    str(chirp.id),
                    chirp.body,
                    str(chirp.user_id),
                    chirp.created_at.isoformat(),
                    chirp.updated_at.isoformat(),
                ),
            )
            conn.commit()
            return chirp
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def get_by_id(self, chirp_id: UUID) -> Chirp | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM chirps WHERE id = ?", (str(chirp_id),)
            ).fetchone()
            return self._map_row(row) if row else None
        finally:
            conn.close()

    def list_all(self) -> list[Chirp]:
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM chirps ORDER BY created_at ASC, rowid ASC"
            ).fetchall()
            return [self._map_row(r) for r in rows]
        finally:
            conn.close()

    def _map_row(self, row: dict[str, Any]) -> Chirp:
        return Chirp(
            id=UUID(row["id"]),
            body=row["body"],
            user_id=UUID(row["user_id"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
