"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for citizen records and the audit trail.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, Date, DateTime, Integer, JSON, String, Text
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

STATUSES = ("Encoded", "Validated", "Cleanlisted", "Paid", "Unpaid", "Liquidated", "Disqualified")


class Citizen(Base):
    """Senior citizen registered for the cash gift."""

    __tablename__ = "citizens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    last_name = Column(String, nullable=False, index=True)
    first_name = Column(String, nullable=False)
    middle_name = Column(String, nullable=True)
    extension_name = Column(String, nullable=True)  # Jr., Sr., I-V
    birth_date = Column(Date, nullable=False)
    sex = Column(String, nullable=False)  # Male, Female
    province_code = Column(String, nullable=True)
    lgu_code = Column(String, nullable=True)
    barangay_code = Column(String, nullable=True)
    status = Column(String, nullable=False, default="Encoded")
    osca_id = Column(String, nullable=False, default="N/A")
    rrn = Column(String, nullable=False, default="N/A")
    validator = Column(String, nullable=True)
    validation_date = Column(Date, nullable=True)
    specimen = Column(String, nullable=True)  # signature, thumbmark
    disability = Column(String, nullable=True)  # yes, no
    indigenous_people = Column(String, nullable=True)  # yes, no
    remarks = Column(Text, nullable=True)
    payment_date = Column(Date, nullable=True)
    encoded_by = Column(String, nullable=True)

    def to_dict(self) -> dict:
        """Column values keyed by column name, dates as ISO strings."""
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if hasattr(value, "isoformat"):
                value = value.isoformat()
            data[column.name] = value
        return data


class AuditLog(Base):
    """Who changed which record, and how."""

    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    staff_id = Column(String, nullable=True)
    action = Column(String, nullable=False)  # create, update, delete
    table_name = Column(String, nullable=True)
    record_id = Column(String, nullable=True)
    details = Column(JSON, nullable=True)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
