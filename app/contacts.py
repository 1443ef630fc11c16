"""Contact management routes for the Contatos API."""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session
from typing import List

from . import schemas
from .crud import ContactRepository
from .database import get_db
from .errors import ContactError, ErrorKind
from .service import ContactService

router = APIRouter(prefix="/api/contatos", tags=["contatos"])

ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": schemas.ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": schemas.ErrorResponse},
    status.HTTP_409_CONFLICT: {"model": schemas.ErrorResponse},
}


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    """
    Build a contact service bound to the request's database session.

    Args:
        db (Session): Database session.

    Returns:
        ContactService: Service for the current request.
    """
    return ContactService(ContactRepository(db))


@router.get("", response_model=List[schemas.ContactDTO])
def list_contacts(service: ContactService = Depends(get_contact_service)):
    """
    Retrieve every contact.

    Returns:
        list[ContactDTO]: All contacts ordered by id.
    """
    return service.list_all()


@router.get("/busca", response_model=List[schemas.ContactDTO])
def search_contacts(
    nome: str | None = Query(None, description="Part of the name, case-insensitive"),
    service: ContactService = Depends(get_contact_service),
):
    """
    Search contacts by a fragment of their name.

    An empty or missing ``nome`` returns an empty list.

    Args:
        nome (str | None): Name fragment.
        service (ContactService): Contact service.

    Returns:
        list[ContactDTO]: Matching contacts.
    """
    return service.search(nome)


@router.get(
    "/busca/email",
    response_model=schemas.ContactDTO,
    responses={status.HTTP_404_NOT_FOUND: ERROR_RESPONSES[status.HTTP_404_NOT_FOUND]},
)
def find_contact_by_email(
    email: str = Query(..., description="Email address, case-insensitive"),
    service: ContactService = Depends(get_contact_service),
):
    """
    Retrieve the contact registered with a given email.

    Raises:
        ContactError: If no contact uses this email.

    Returns:
        ContactDTO: Contact data.
    """
    contact = service.find_by_email(email)
    if contact is None:
        raise ContactError(ErrorKind.NOT_FOUND, f"Contact with email {email} not found")
    return contact


@router.get(
    "/{contact_id}",
    response_model=schemas.ContactDTO,
    responses={status.HTTP_404_NOT_FOUND: ERROR_RESPONSES[status.HTTP_404_NOT_FOUND]},
)
def get_contact(
    contact_id: int, service: ContactService = Depends(get_contact_service)
):
    """
    Retrieve a single contact by ID.

    Args:
        contact_id (int): Contact identifier.
        service (ContactService): Contact service.

    Raises:
        ContactError: If contact is not found.

    Returns:
        ContactDTO: Contact data.
    """
    return service.get_by_id(contact_id)


@router.post(
    "",
    response_model=schemas.ContactDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        code: ERROR_RESPONSES[code]
        for code in (status.HTTP_400_BAD_REQUEST, status.HTTP_409_CONFLICT)
    },
)
def create_contact(
    contact_in: schemas.ContactDTO,
    request: Request,
    response: Response,
    service: ContactService = Depends(get_contact_service),
):
    """
    Create a new contact.

    The ``Location`` header of the response points at the new contact.

    Args:
        contact_in (ContactDTO): Contact input data.
        request (Request): Incoming request, used to build ``Location``.
        response (Response): Outgoing response.
        service (ContactService): Contact service.

    Raises:
        ContactError: If the email is already registered.

    Returns:
        ContactDTO: Created contact.
    """
    contact = service.create(contact_in)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{contact.id}"
    return contact


@router.put(
    "/{contact_id}",
    response_model=schemas.ContactDTO,
    responses={
        code: ERROR_RESPONSES[code]
        for code in (status.HTTP_400_BAD_REQUEST, status.HTTP_404_NOT_FOUND)
    },
)
def update_contact(
    contact_id: int,
    contact_in: schemas.ContactDTO,
    service: ContactService = Depends(get_contact_service),
):
    """
    Replace name, phone and email of an existing contact.

    Args:
        contact_id (int): Contact identifier.
        contact_in (ContactDTO): New contact data.
        service (ContactService): Contact service.

    Raises:
        ContactError: If contact is not found.

    Returns:
        ContactDTO: Updated contact.
    """
    return service.update(contact_id, contact_in)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def remove_contact(
    contact_id: int, service: ContactService = Depends(get_contact_service)
):
    """
    Delete a contact. Deleting a missing contact is not an error.

    Args:
        contact_id (int): Contact identifier.
        service (ContactService): Contact service.
    """
    service.delete(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
