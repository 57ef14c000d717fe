"""
Request Field Serializer

Flattens a SignatureRequest into the form fields the signature
request endpoint expects, using its bracketed naming scheme:

    signers[1][email_address] = 'jack@example.com'
    signers[1][name]          = 'Jack'
    cc_email_addresses[1]     = 'legal@example.com'
    file[1]                   = <file handle>
    form_fields_per_document  = '[[{...}], []]'
"""

import json
import logging
import re
from typing import Any, Dict, List, Tuple

from .config import Config
from .exceptions import SerializationError
from .signature_request import (
    REQUEST_MESSAGE,
    REQUEST_SUBJECT,
    REQUEST_TEST_MODE,
    REQUEST_TITLE,
    SIGREQ_CCS,
    SIGREQ_FILES,
    SIGREQ_FORM_FIELDS,
    SIGREQ_REQUESTER_EMAIL,
    SIGREQ_SIGNER_EMAIL,
    SIGREQ_SIGNER_NAME,
    SIGREQ_SIGNER_ORDER,
    SIGREQ_SIGNERS,
    SignatureRequest,
)

logger = logging.getLogger(__name__)

FILE_KEY_PATTERN = re.compile(rf'^{SIGREQ_FILES}\[\d+\]$')


class RequestFieldSerializer:
    """
    Builds POST fields from a signature request.

    Takes:
        - A SignatureRequest (metadata, signers, CCs, documents)

    Returns:
        - Flat dict of field name to string, bool, int or file handle
    """

    @classmethod
    def build_post_fields(cls, request: SignatureRequest) -> Dict[str, Any]:
        """
        Build the POST fields for a signature request.

        Signers, CCs and files are keyed from 1 to match the API's
        own numbering. The request is not modified.

        Raises:
            SerializationError: If any part of the request cannot be read
        """
        try:
            fields: Dict[str, Any] = {}

            if request.has_title():
                fields[REQUEST_TITLE] = request.title
            if request.has_subject():
                fields[REQUEST_SUBJECT] = request.subject
            if request.has_message():
                fields[REQUEST_MESSAGE] = request.message

            fields.update(cls._signer_fields(request))
            fields.update(cls._cc_fields(request))
            fields.update(cls._document_fields(request))

            if request.test_mode:
                fields[REQUEST_TEST_MODE] = True
            if request.has_requester_email():
                fields[SIGREQ_REQUESTER_EMAIL] = request.requester_email

        except Exception as e:
            logger.error(f"Could not build POST fields: {e}")
            raise SerializationError(
                "Could not extract form fields from SignatureRequest.",
                cause=e
            ) from e

        logger.debug(f"Built {len(fields)} POST field(s) for signature request")
        return fields

    @classmethod
    def _signer_fields(cls, request: SignatureRequest) -> Dict[str, Any]:
        fields = {}
        for i, signer in enumerate(request.signers):
            prefix = f"{SIGREQ_SIGNERS}[{i + 1}]"
            fields[f"{prefix}[{SIGREQ_SIGNER_EMAIL}]"] = signer.email
            fields[f"{prefix}[{SIGREQ_SIGNER_NAME}]"] = signer.name_or_role

            # The API wants a 0-based order value under the 1-based key
            if request.order_matters:
                fields[f"{prefix}[{SIGREQ_SIGNER_ORDER}]"] = i
        return fields

    @classmethod
    def _cc_fields(cls, request: SignatureRequest) -> Dict[str, Any]:
        return {
            f"{SIGREQ_CCS}[{i + 1}]": cc
            for i, cc in enumerate(request.ccs)
        }

    @classmethod
    def _document_fields(cls, request: SignatureRequest) -> Dict[str, Any]:
        fields = {}

        # One entry per document, empty ones included, so positions
        # line up with the file[n] keys
        form_fields_per_document: List[List[Dict[str, Any]]] = []
        has_form_fields = False

        for i, doc in enumerate(request.documents):
            fields[f"{SIGREQ_FILES}[{i + 1}]"] = doc.file

            doc_form_fields = [ff.to_dict() for ff in doc.form_fields]
            if doc_form_fields:
                has_form_fields = True
            form_fields_per_document.append(doc_form_fields)

        if has_form_fields:
            fields[SIGREQ_FORM_FIELDS] = cls._encode_json(form_fields_per_document)

        return fields

    @staticmethod
    def _encode_json(value: Any) -> str:
        if Config.JSON_COMPACT:
            return json.dumps(value, separators=(',', ':'))
        return json.dumps(value)


def split_multipart(fields: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Split POST fields into form data and file uploads.

    The file[n] entries become upload parts and everything else is
    plain form data. Nothing is opened or read.

    Returns:
        Tuple of (data, files)
    """
    data = {}
    files = {}
    for name, value in fields.items():
        if FILE_KEY_PATTERN.match(name):
            files[name] = value
        else:
            data[name] = value
    return data, files
