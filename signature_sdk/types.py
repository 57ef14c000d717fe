"""
Signature SDK Type Definitions

Dataclasses for the records that hang off a signature request:
signers and documents built locally, and the signature and
response-data records returned by the service.
"""

from dataclasses import dataclass, field
from os import PathLike
from typing import IO, Any, Dict, List, Optional, Union

# A caller-owned file handle or a path to one
FileRef = Union[IO, PathLike, str]


@dataclass
class Signer:
    """
    A party expected to sign the request.

    Attributes:
        email: Signer's email address
        name: Display name
        role: Template role name, used when no name is given
    """
    email: str
    name: Optional[str] = None
    role: Optional[str] = None

    @property
    def name_or_role(self) -> Optional[str]:
        """The name sent to the API: the signer's name, else its role."""
        return self.name if self.name else self.role


@dataclass
class FormField:
    """
    A field placed on a document for a signer to fill.

    Attributes:
        api_id: Unique identifier for the field within the request
        name: Display name of the field
        type: Field type (e.g., "signature", "text", "checkbox")
        x, y: Placement on the page, in pixels
        width, height: Field size, in pixels
        required: Whether the signer must fill the field
        signer: 1-based index of the signer this field belongs to
        page: 1-based page number (None places on the first page)
    """
    api_id: str
    name: str
    type: str
    x: int
    y: int
    width: int
    height: int
    required: bool = False
    signer: Optional[int] = None
    page: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the API's form field JSON format."""
        data = {
            'api_id': self.api_id,
            'name': self.name,
            'type': self.type,
            'x': self.x,
            'y': self.y,
            'width': self.width,
            'height': self.height,
            'required': self.required
        }
        if self.signer is not None:
            data['signer'] = self.signer
        if self.page is not None:
            data['page'] = self.page
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormField':
        return cls(
            api_id=data['api_id'],
            name=data.get('name', ''),
            type=data['type'],
            x=data.get('x', 0),
            y=data.get('y', 0),
            width=data.get('width', 0),
            height=data.get('height', 0),
            required=data.get('required', False),
            signer=data.get('signer'),
            page=data.get('page')
        )


@dataclass
class Document:
    """
    A file to be signed plus the form fields placed on it.

    The file handle belongs to the caller; it is only held
    here until the request is submitted.
    """
    file: Optional[FileRef] = None
    form_fields: List[FormField] = field(default_factory=list)

    def add_form_field(self, form_field: FormField) -> None:
        self.form_fields.append(form_field)


@dataclass(frozen=True)
class ResponseData:
    """A value a signer entered into a form field, as reported by the service."""
    api_id: Optional[str] = None
    signature_id: Optional[str] = None
    name: Optional[str] = None
    value: Any = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResponseData':
        return cls(
            api_id=data.get('api_id'),
            signature_id=data.get('signature_id'),
            name=data.get('name'),
            value=data.get('value'),
            type=data.get('type')
        )


@dataclass(frozen=True)
class Signature:
    """
    Per-signer status on a submitted request.

    Timestamps are Unix epoch seconds as returned by the service.
    """
    signature_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    order: Optional[int] = None
    status_code: Optional[str] = None
    signed_at: Optional[int] = None
    last_viewed_at: Optional[int] = None
    last_reminded_at: Optional[int] = None
    error: Optional[str] = None

    @property
    def is_signed(self) -> bool:
        return self.status_code == 'signed'

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Signature':
        return cls(
            signature_id=data.get('signature_id'),
            email=data.get('signer_email_address'),
            name=data.get('signer_name'),
            order=data.get('order'),
            status_code=data.get('status_code'),
            signed_at=data.get('signed_at'),
            last_viewed_at=data.get('last_viewed_at'),
            last_reminded_at=data.get('last_reminded_at'),
            error=data.get('error')
        )
