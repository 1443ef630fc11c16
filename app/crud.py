"""Persistence operations for contacts.

This module contains database interaction logic for the contact
entity, isolated from FastAPI route handlers and from business rules.
"""

from typing import List, Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.orm import Session

from . import models


class ContactRepository:
    """
    Contact store bound to a single SQLAlchemy session.

    Every write commits immediately; the repository keeps no state
    besides the session it was created with.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[models.Contact]:
        """
        Retrieve every contact ordered by id.

        Returns:
            list[Contact]: All stored contacts.
        """
        return list(self.db.scalars(select(models.Contact).order_by(models.Contact.id)))

    def find_by_id(self, contact_id: int) -> Optional[models.Contact]:
        """
        Retrieve a contact by primary key.

        Args:
            contact_id (int): Contact identifier.

        Returns:
            Contact | None: Contact if found, otherwise ``None``.
        """
        return self.db.get(models.Contact, contact_id)

    def save(self, contact: models.Contact) -> models.Contact:
        """
        Insert or update a contact and reload it from the database.

        Args:
            contact (Contact): Transient or persistent contact instance.

        Returns:
            Contact: The stored contact, with ``id`` populated.
        """
        self.db.add(contact)
        self.db.commit()
        self.db.refresh(contact)
        return contact

    def delete_by_id(self, contact_id: int) -> None:
        """
        Delete a contact by id. Missing ids are ignored.

        Args:
            contact_id (int): Contact identifier.
        """
        self.db.execute(delete(models.Contact).where(models.Contact.id == contact_id))
        self.db.commit()

    def exists_by_email_ignore_case(self, email: str) -> bool:
        """
        Check whether any contact uses ``email``, ignoring case.

        Args:
            email (str): Email address to look for.

        Returns:
            bool: ``True`` if a contact with that email exists.
        """
        stmt = select(
            exists().where(func.lower(models.Contact.email) == email.lower())
        )
        return bool(self.db.scalar(stmt))

    def find_by_name_containing_ignore_case(self, text: str) -> List[models.Contact]:
        """
        Retrieve contacts whose name contains ``text``, ignoring case.

        ``%`` and ``_`` in ``text`` are matched literally.

        Args:
            text (str): Fragment of the name.

        Returns:
            list[Contact]: Matching contacts ordered by id.
        """
        stmt = (
            select(models.Contact)
            .where(models.Contact.name.icontains(text, autoescape=True))
            .order_by(models.Contact.id)
        )
        return list(self.db.scalars(stmt))

    def find_by_email_ignore_case(self, email: str) -> Optional[models.Contact]:
        """
        Retrieve the first contact whose email equals ``email``, ignoring case.

        Args:
            email (str): Email address.

        Returns:
            Contact | None: Contact if found, otherwise ``None``.
        """
        stmt = (
            select(models.Contact)
            .where(func.lower(models.Contact.email) == email.lower())
            .order_by(models.Contact.id)
            .limit(1)
        )
        return self.db.scalars(stmt).first()
