"""
Citizens Repository.

Responsibilities:
- CRUD operations for the citizens table.
- Record-source queries for duplicate detection, ordered by name.

Non-Responsibilities:
- No business logic.
- No duplicate detection.
- No scoring.

Invariant:
Repositories must not encode domain decisions. Writes are flushed,
never committed; the caller owns the transaction.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import OperationalError

from ecasystem.database import Citizen
from ecasystem.normalize import normalize_name
from ecasystem.retry import exponential_backoff, is_transient_error

_read_retry = exponential_backoff(
    max_retries=3,
    base_delay=0.1,
    exceptions=(OperationalError,),
    retry_if=is_transient_error,
)


class CitizenRepository:
    """Data access for Citizen rows bound to one session."""

    def __init__(self, session):
        self.session = session

    def _ordered(self, query):
        return query.order_by(Citizen.last_name, Citizen.first_name, Citizen.id)

    @_read_retry
    def list_all(self) -> List[Citizen]:
        """Every citizen, ordered by last name then first name."""
        return self._ordered(self.session.query(Citizen)).all()

    @_read_retry
    def list_by_status(self, status: str) -> List[Citizen]:
        return self._ordered(self.session.query(Citizen).filter(Citizen.status == status)).all()

    @_read_retry
    def list_excluding_status(self, status: str) -> List[Citizen]:
        return self._ordered(self.session.query(Citizen).filter(Citizen.status != status)).all()

    @_read_retry
    def get(self, citizen_id: int) -> Optional[Citizen]:
        return self.session.get(Citizen, citizen_id)

    @_read_retry
    def find_by_names(self, last_name: str, first_name: str, middle_name: Optional[str]) -> List[Citizen]:
        """
        Citizens sharing any one of the three name fields, case-insensitively.

        Names are stored upper-cased, so the arguments are normalized the same
        way and compared exactly. SQLite's lower() folds ASCII only.
        An absent middle name selects rows whose middle name is absent too.
        """
        conditions = [
            Citizen.last_name == normalize_name(last_name),
            Citizen.first_name == normalize_name(first_name),
        ]
        middle = normalize_name(middle_name)
        if middle:
            conditions.append(Citizen.middle_name == middle)
        else:
            conditions.append(or_(Citizen.middle_name.is_(None), Citizen.middle_name == ""))
        return self._ordered(self.session.query(Citizen).filter(or_(*conditions))).all()

    def create(self, values: Dict[str, Any]) -> Citizen:
        """Insert a citizen and flush so the id is assigned."""
        citizen = Citizen(**values)
        self.session.add(citizen)
        self.session.flush()
        return citizen

    def update(self, citizen: Citizen, values: Dict[str, Any]) -> Citizen:
        for key, value in values.items():
            if not hasattr(Citizen, key):
                raise KeyError(f"Unknown citizen column: {key}")
            setattr(citizen, key, value)
        self.session.flush()
        return citizen

    def delete(self, citizen: Citizen) -> None:
        self.session.delete(citizen)
        self.session.flush()
