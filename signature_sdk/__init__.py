"""
Signature SDK

The signature request resource of an e-signature API client.
Builds requests (signers, documents, CCs, form fields), reads the
requests the service sends back, and flattens outgoing requests
into the API's multipart POST fields.

Usage:
    from signature_sdk import SignatureRequest, FormField, split_multipart

    request = SignatureRequest()
    request.title = 'Lease'
    request.add_signer('tenant@example.com', 'Tenant')
    request.add_file(open('lease.pdf', 'rb'))

    data, files = split_multipart(request.get_post_fields())
"""

from .types import (
    Signer,
    FormField,
    Document,
    ResponseData,
    Signature
)

from .exceptions import (
    SignatureSDKError,
    ValidationError,
    IndexOutOfRangeError,
    SerializationError
)

from .config import Config, configure_logging
from .typed_document import TypedDocument
from .signature_request import SignatureRequest
from .field_serializer import RequestFieldSerializer, split_multipart

__all__ = [
    # Types
    'Signer',
    'FormField',
    'Document',
    'ResponseData',
    'Signature',
    
    # Exceptions
    'SignatureSDKError',
    'ValidationError',
    'IndexOutOfRangeError',
    'SerializationError',
    
    # Configuration
    'Config',
    'configure_logging',
    
    # Resources
    'TypedDocument',
    'SignatureRequest',
    'RequestFieldSerializer',
    'split_multipart',
]
