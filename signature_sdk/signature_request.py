"""
Signature Request

The signature request resource. The same class is used to build a
request for submission and to read the request the service returns.
"""

import logging
from typing import Any, Dict, List, Optional

from .config import Config
from .exceptions import IndexOutOfRangeError, ValidationError
from .typed_document import TypedDocument
from .types import Document, FileRef, ResponseData, Signature, Signer

logger = logging.getLogger(__name__)

# Request metadata keys
REQUEST_TITLE = 'title'
REQUEST_SUBJECT = 'subject'
REQUEST_MESSAGE = 'message'
REQUEST_TEST_MODE = 'test_mode'

# Signature request keys
SIGREQ_KEY = 'signature_request'
SIGREQ_ID = 'signature_request_id'
SIGREQ_SIGNERS = 'signers'
SIGREQ_SIGNER_EMAIL = 'email_address'
SIGREQ_SIGNER_NAME = 'name'
SIGREQ_SIGNER_ORDER = 'order'
SIGREQ_CCS = 'cc_email_addresses'
SIGREQ_FILES = 'file'
SIGREQ_FORM_FIELDS = 'form_fields_per_document'
SIGREQ_IS_COMPLETE = 'is_complete'
SIGREQ_HAS_ERROR = 'has_error'
SIGREQ_RESPONSE_DATA = 'response_data'
SIGREQ_FINAL_COPY_URL = 'final_copy_url'
SIGREQ_SIGNING_URL = 'signing_url'
SIGREQ_DETAILS_URL = 'details_url'
SIGREQ_REQUESTER_EMAIL = 'requester_email_address'
SIGREQ_SIGNATURES = 'signatures'


def _same_text(expected: str, actual: Optional[str]) -> bool:
    return actual is not None and expected.lower() == actual.lower()


class SignatureRequest:
    """
    A signature request: signers, documents and CCs going out,
    status and URLs coming back.

    Usage:
        # Outgoing
        request = SignatureRequest()
        request.title = 'NDA'
        request.add_signer('jack@example.com', 'Jack')
        request.add_file(open('nda.pdf', 'rb'))
        fields = request.get_post_fields()

        # Returned by the service
        request = SignatureRequest(response_json)
        if request.is_complete:
            download(request.final_copy_url)

    Scalar values live in a TypedDocument mirroring the API payload.
    Signers and documents are held as lists owned by the request.
    """

    def __init__(
        self,
        data: Optional[Dict[str, Any]] = None,
        key: str = SIGREQ_KEY,
        document: Optional[TypedDocument] = None
    ):
        """
        Args:
            data: Parsed API response, or None for a new draft
            key: Wrapper key the request object sits under in data
            document: Pre-built TypedDocument to use instead of data
        """
        if document is None:
            document = TypedDocument(data, key)
            if data is None and Config.TEST_MODE:
                document.set(REQUEST_TEST_MODE, True)

        self._document = document
        self._signers: List[Signer] = []
        self._documents: List[Document] = []
        self.order_matters = False

    def __repr__(self) -> str:
        return f"<SignatureRequest id={self.id!r} signers={len(self._signers)} documents={len(self._documents)}>"

    # ------------------------------------------------------------------
    # Identity and metadata
    # ------------------------------------------------------------------

    @property
    def id(self) -> Optional[str]:
        return self._document.get_string(SIGREQ_ID)

    def has_id(self) -> bool:
        """
        Check whether the service has assigned an ID.

        Requests read from an API response have one; drafts built
        for submission do not.
        """
        return self._document.has(SIGREQ_ID)

    @property
    def title(self) -> Optional[str]:
        return self._document.get_string(REQUEST_TITLE)

    @title.setter
    def title(self, value: Optional[str]) -> None:
        self._document.set(REQUEST_TITLE, value)

    def has_title(self) -> bool:
        return self._document.has(REQUEST_TITLE)

    @property
    def subject(self) -> Optional[str]:
        return self._document.get_string(REQUEST_SUBJECT)

    @subject.setter
    def subject(self, value: Optional[str]) -> None:
        self._document.set(REQUEST_SUBJECT, value)

    def has_subject(self) -> bool:
        return self._document.has(REQUEST_SUBJECT)

    @property
    def message(self) -> Optional[str]:
        return self._document.get_string(REQUEST_MESSAGE)

    @message.setter
    def message(self, value: Optional[str]) -> None:
        self._document.set(REQUEST_MESSAGE, value)

    def has_message(self) -> bool:
        return self._document.has(REQUEST_MESSAGE)

    @property
    def test_mode(self) -> bool:
        return self._document.get_boolean(REQUEST_TEST_MODE)

    @test_mode.setter
    def test_mode(self, value: bool) -> None:
        self._document.set(REQUEST_TEST_MODE, bool(value))

    @property
    def requester_email(self) -> Optional[str]:
        return self._document.get_string(SIGREQ_REQUESTER_EMAIL)

    @requester_email.setter
    def requester_email(self, value: Optional[str]) -> None:
        self._document.set(SIGREQ_REQUESTER_EMAIL, value)

    def has_requester_email(self) -> bool:
        return self._document.has(SIGREQ_REQUESTER_EMAIL)

    # ------------------------------------------------------------------
    # CC recipients
    # ------------------------------------------------------------------

    @property
    def ccs(self) -> List[str]:
        """CC'd email addresses, in the order they were added."""
        return self._document.get_list(str, SIGREQ_CCS)

    def add_cc(self, email: str) -> None:
        self._document.add(SIGREQ_CCS, email)

    # ------------------------------------------------------------------
    # Signers
    # ------------------------------------------------------------------

    @property
    def signers(self) -> List[Signer]:
        """
        The live signer list. Changes made to it are sent with
        the request.
        """
        return self._signers

    @signers.setter
    def signers(self, signers: List[Signer]) -> None:
        self._signers = signers

    def add_signer(self, email: str, name: str, order: Optional[int] = None) -> None:
        """
        Add a signer to the request.

        The order is 1-based to match the API: order 1 puts the
        signer first. Without an order the signer is appended.

        Raises:
            IndexOutOfRangeError: If order is outside [1, len(signers) + 1]
        """
        signer = Signer(email=email, name=name)

        if order is None:
            self._signers.append(signer)
            logger.debug(f"Appended signer {email} at position {len(self._signers)}")
            return

        size = len(self._signers)
        if order < 1 or order > size + 1:
            raise IndexOutOfRangeError(
                f"Signer order {order} is out of range (1-{size + 1})",
                index=order,
                size=size
            )

        self._signers.insert(order - 1, signer)
        logger.debug(f"Inserted signer {email} at order {order}")

    def remove_signer(self, email: str) -> None:
        """
        Remove every signer whose email matches, ignoring case.

        Unknown emails leave the list untouched.

        Raises:
            ValidationError: If email is None or empty
        """
        if not email:
            raise ValidationError("Cannot remove null signer", field='email')

        remaining = [s for s in self._signers if not _same_text(email, s.email)]
        removed = len(self._signers) - len(remaining)

        # Slice assignment keeps references handed out by .signers valid
        self._signers[:] = remaining

        if removed:
            logger.debug(f"Removed {removed} signer(s) with email {email}")
        else:
            logger.warning(f"No signer with email {email} to remove")

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------

    @property
    def documents(self) -> List[Document]:
        """
        The live document list. Changes made to it are sent with
        the request.
        """
        return self._documents

    @documents.setter
    def documents(self, documents: List[Document]) -> None:
        self._documents = documents

    def add_file(self, file: FileRef, order: Optional[int] = None) -> None:
        """
        Wrap a file in a Document and add it.

        Args:
            file: Caller-owned file handle or path
            order: 0-based position in the document list, or None to append
        """
        self.add_document(Document(file=file), order)

    def add_document(self, doc: Document, order: Optional[int] = None) -> None:
        """
        Add a document, appending unless a 0-based order is given.

        Raises:
            ValidationError: If doc is None
            IndexOutOfRangeError: If order is outside [0, len(documents)]
        """
        if doc is None:
            raise ValidationError("Document cannot be null", field='document')

        if order is None:
            self._documents.append(doc)
            return

        size = len(self._documents)
        if order < 0 or order > size:
            raise IndexOutOfRangeError(
                f"Document order {order} is out of range (0-{size})",
                index=order,
                size=size
            )

        self._documents.insert(order, doc)
        logger.debug(f"Inserted document at position {order}")

    def clear_documents(self) -> None:
        """Remove all documents, and with them their form fields."""
        self._documents = []

    # ------------------------------------------------------------------
    # Response fields (set by the service only)
    # ------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        """True once every signer has signed."""
        return self._document.get_boolean(SIGREQ_IS_COMPLETE)

    @property
    def has_error(self) -> bool:
        return self._document.get_boolean(SIGREQ_HAS_ERROR)

    @property
    def response_data(self) -> List[ResponseData]:
        return self._document.get_list(ResponseData, SIGREQ_RESPONSE_DATA)

    @property
    def final_copy_url(self) -> Optional[str]:
        return self._document.get_string(SIGREQ_FINAL_COPY_URL)

    @property
    def signing_url(self) -> Optional[str]:
        return self._document.get_string(SIGREQ_SIGNING_URL)

    @property
    def details_url(self) -> Optional[str]:
        return self._document.get_string(SIGREQ_DETAILS_URL)

    @property
    def signatures(self) -> List[Signature]:
        return self._document.get_list(Signature, SIGREQ_SIGNATURES)

    def get_signature(self, email: str, name: str) -> Optional[Signature]:
        """
        Find the signature for an email/name pair.

        Returns:
            The matching Signature, or None if not on this request

        Raises:
            ValidationError: If email or name is None or empty
        """
        if not email:
            raise ValidationError("Email address cannot be empty", field='email')
        if not name:
            raise ValidationError("Name cannot be empty", field='name')

        return self._find_signature(email, name)

    def get_signature_by_signer(self, email: str, name: str) -> Optional[Signature]:
        """
        Find the signature for an email/name pair.

        Both are needed: a request may have several signers sharing
        an email address or a name. Missing arguments give None
        rather than an error.
        """
        if not email or not name:
            return None

        return self._find_signature(email, name)

    def _find_signature(self, email: str, name: str) -> Optional[Signature]:
        return next(
            (s for s in self.signatures
             if _same_text(email, s.email) and _same_text(name, s.name)),
            None
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def get_post_fields(self) -> Dict[str, Any]:
        """Build the POST fields for submitting this request."""
        from .field_serializer import RequestFieldSerializer

        return RequestFieldSerializer.build_post_fields(self)

    def to_dict(self) -> Dict[str, Any]:
        """The scalar payload backing this request."""
        return self._document.to_dict()
