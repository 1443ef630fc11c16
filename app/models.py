"""Database models for the Contatos API.

This module defines SQLAlchemy ORM models used by the application.
"""

from sqlalchemy import Column, Integer, String

from .database import Base


class Contact(Base):
    """
    SQLAlchemy model representing a contact entry.

    Emails are kept unique (case-insensitively) by the service layer
    when contacts are created; the table itself carries no unique
    constraint so that updates may reassign an email freely.
    """

    __tablename__ = "contatos"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(15), nullable=False)
    email = Column(String(255), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Contact id={self.id} email={self.email!r}>"
