"""Translation between ``Contact`` rows and ``ContactDTO`` transfer objects.

Column names are English (``name``, ``phone``) while the public API uses
``nome`` and ``telefone``; this module is the only place that knows both.
"""

from typing import Iterable, List

from . import models, schemas


def to_dto(contact: models.Contact) -> schemas.ContactDTO:
    """
    Convert a persisted contact into its transfer shape.

    Args:
        contact (Contact): SQLAlchemy contact instance.

    Returns:
        ContactDTO: Transfer object carrying the database id.
    """
    return schemas.ContactDTO.model_construct(
        id=contact.id,
        nome=contact.name,
        telefone=contact.phone,
        email=contact.email,
    )


def to_entity(dto: schemas.ContactDTO) -> models.Contact:
    """
    Build a new, not yet persisted contact from a transfer object.

    The ``id`` of the transfer object is never copied; the database
    assigns one on insert.

    Args:
        dto (ContactDTO): Validated transfer object.

    Returns:
        Contact: Transient SQLAlchemy instance.
    """
    return models.Contact(name=dto.nome, phone=dto.telefone, email=dto.email)


def apply(dto: schemas.ContactDTO, contact: models.Contact) -> models.Contact:
    """Overwrite the mutable fields of ``contact`` with those of ``dto``."""
    contact.name = dto.nome
    contact.phone = dto.telefone
    contact.email = dto.email
    return contact


def to_dto_list(contacts: Iterable[models.Contact]) -> List[schemas.ContactDTO]:
    return [to_dto(contact) for contact in contacts]
