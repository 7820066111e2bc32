"""
Participant and race models.

Models:
- Participant: One identity per (normalized_name, distance, gender)
- Race: A single race result owned by a participant
"""

from datetime import datetime
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from noskrien.models.base import Base


class Participant(Base):
    """
    Race participant.

    normalized_name is NULL for rows imported before normalization;
    the merge service fills it in for every surviving row, and the import
    adopts such a row when its name folds to the imported key. NULLs do
    not collide in the unique constraint, so legacy duplicates can coexist
    until merged.
    """

    __tablename__ = "participants"
    __table_args__ = (
        UniqueConstraint(
            "normalized_name", "distance", "gender",
            name="uq_participants_identity",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    normalized_name = Column(String(200), nullable=True)

    distance = Column(String(20), nullable=False)  # "Tautas" | "Sporta"
    gender = Column(String(1), nullable=False)  # "V" | "S" | "U"
    season = Column(String(9), nullable=True)  # season of first import
    link = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    races = relationship(
        "Race",
        back_populates="participant",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="Race.date",
    )

    def __repr__(self):
        return f"<Participant {self.id} ({self.name}, {self.distance}/{self.gender})>"


class Race(Base):
    """Single race result."""

    __tablename__ = "races"
    __table_args__ = (
        Index("ix_races_participant_date", "participant_id", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    participant_id = Column(
        Integer,
        ForeignKey("participants.id", ondelete="CASCADE"),
        nullable=False,
    )

    date = Column(String(10), nullable=False)  # "2023-11-26"
    result = Column(String(20), nullable=False)  # "52:09"
    km = Column(String(10), nullable=False)  # "10,0"
    location = Column(String(200), nullable=False)
    season = Column(String(9), nullable=True)

    participant = relationship("Participant", back_populates="races")

    def __repr__(self):
        return f"<Race {self.date} {self.location} ({self.result})>"
