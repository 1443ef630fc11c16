"""Business rules for contacts.

``ContactService`` validates input, enforces email uniqueness on creation
and reports missing contacts. It never catches its own failures: every
``ContactError`` is left for the error handlers in :mod:`app.errors`.
"""

import logging
from typing import Any, List, Mapping, Optional, Union

from pydantic import ValidationError

from . import mapper, schemas
from .crud import ContactRepository
from .errors import ContactError

logger = logging.getLogger(__name__)

ContactInput = Union[schemas.ContactDTO, Mapping[str, Any]]


def validate_contact(data: ContactInput) -> schemas.ContactDTO:
    """
    Validate raw contact data against the transfer-shape constraints.

    Args:
        data: A ``ContactDTO`` or a mapping with ``nome``, ``telefone``
            and ``email`` keys.

    Raises:
        ContactError: ``VALIDATION_FAILED`` listing every violated field.

    Returns:
        ContactDTO: Validated transfer object.
    """
    if isinstance(data, schemas.ContactDTO):
        data = data.model_dump()
    try:
        return schemas.ContactDTO.model_validate(data)
    except ValidationError as exc:
        raise ContactError.validation_failed(exc.errors()) from exc


class ContactService:
    """Contact use cases on top of a :class:`ContactRepository`."""

    def __init__(self, repository: ContactRepository):
        self.repository = repository

    def list_all(self) -> List[schemas.ContactDTO]:
        return mapper.to_dto_list(self.repository.find_all())

    def get_by_id(self, contact_id: int) -> schemas.ContactDTO:
        """
        Retrieve a contact by id.

        Raises:
            ContactError: ``NOT_FOUND`` if no contact has this id.
        """
        contact = self.repository.find_by_id(contact_id)
        if contact is None:
            raise ContactError.not_found(contact_id)
        return mapper.to_dto(contact)

    def search(self, name_part: Optional[str]) -> List[schemas.ContactDTO]:
        """
        Find contacts whose name contains ``name_part``, ignoring case.

        An empty or missing fragment yields an empty list rather than
        every contact.
        """
        if not name_part:
            return []
        return mapper.to_dto_list(
            self.repository.find_by_name_containing_ignore_case(name_part)
        )

    def find_by_email(self, email: Optional[str]) -> Optional[schemas.ContactDTO]:
        if not email:
            return None
        contact = self.repository.find_by_email_ignore_case(email)
        return mapper.to_dto(contact) if contact is not None else None

    def create(self, contact_in: ContactInput) -> schemas.ContactDTO:
        """
        Validate and store a new contact.

        Args:
            contact_in: Contact data; any ``id`` it carries is ignored.

        Raises:
            ContactError: ``VALIDATION_FAILED`` on invalid fields,
                ``DUPLICATE_EMAIL`` if the email is already registered.

        Returns:
            ContactDTO: Stored contact with its new id.
        """
        dto = validate_contact(contact_in)
        if dto.email and self.repository.exists_by_email_ignore_case(dto.email):
            raise ContactError.duplicate_email(dto.email)

        contact = self.repository.save(mapper.to_entity(dto))
        logger.info("Created contact %s", contact.id)
        return mapper.to_dto(contact)

    def update(self, contact_id: int, contact_in: ContactInput) -> schemas.ContactDTO:
        """
        Replace name, phone and email of an existing contact.

        Email uniqueness is not checked here, only on creation.

        Raises:
            ContactError: ``NOT_FOUND`` if the contact does not exist,
                ``VALIDATION_FAILED`` on invalid fields.
        """
        contact = self.repository.find_by_id(contact_id)
        if contact is None:
            raise ContactError.not_found(contact_id)

        dto = validate_contact(contact_in)
        contact = self.repository.save(mapper.apply(dto, contact))
        logger.info("Updated contact %s", contact.id)
        return mapper.to_dto(contact)

    def delete(self, contact_id: int) -> None:
        self.repository.delete_by_id(contact_id)
        logger.info("Deleted contact %s", contact_id)
