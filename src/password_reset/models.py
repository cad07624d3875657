# src/password_reset/models.py
from sqlalchemy import Column, DateTime, Integer, String

from src.database import Base


class OtpChallenge(Base):
    __tablename__ = "otp_challenges"
    # One live challenge per email; a racing insert fails on the key
    email = Column(String(100), primary_key=True)
    code_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    attempts = Column(Integer, nullable=False, default=0, server_default="0")
