"""
POST Field Serialization Tests

Checks the flat field names and values sent when submitting
a signature request.

Run with: python -m pytest tests/test_field_serializer.py -v
"""

import io
import json
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from signature_sdk import (
    Config,
    Document,
    FormField,
    RequestFieldSerializer,
    SerializationError,
    SignatureRequest,
    Signer,
    split_multipart
)


def make_form_field(api_id='name_1', signer=1):
    """Create a text form field for the first page."""
    return FormField(
        api_id=api_id,
        name='Full Name',
        type='text',
        x=100,
        y=200,
        width=150,
        height=20,
        required=True,
        signer=signer,
        page=1
    )


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Pin configuration so a local .env can't change test results."""
    monkeypatch.setattr(Config, 'TEST_MODE', False)
    monkeypatch.setattr(Config, 'JSON_COMPACT', True)


class TestScalarFields:
    """Test metadata fields."""

    def test_empty_request_has_no_fields(self):
        """Unset optional fields are omitted, not sent empty."""
        assert SignatureRequest().get_post_fields() == {}

    def test_metadata_fields(self):
        """Set metadata should be sent under its own key."""
        request = SignatureRequest()
        request.title = 'NDA'
        request.subject = 'Please sign'
        request.message = 'Thanks'
        request.requester_email = 'me@example.com'

        fields = request.get_post_fields()

        assert fields == {
            'title': 'NDA',
            'subject': 'Please sign',
            'message': 'Thanks',
            'requester_email_address': 'me@example.com'
        }

    def test_test_mode_only_when_true(self):
        """test_mode is sent as True, and only when enabled."""
        request = SignatureRequest()
        request.test_mode = False
        assert 'test_mode' not in request.get_post_fields()

        request.test_mode = True
        assert request.get_post_fields()['test_mode'] is True


class TestSignerFields:
    """Test signer and CC fields."""

    def test_signers_are_one_based(self):
        """Signer keys start at 1."""
        request = SignatureRequest()
        request.add_signer('jack@example.com', 'Jack')
        request.add_signer('jill@example.com', 'Jill')

        fields = request.get_post_fields()

        assert fields['signers[1][email_address]'] == 'jack@example.com'
        assert fields['signers[1][name]'] == 'Jack'
        assert fields['signers[2][email_address]'] == 'jill@example.com'
        assert fields['signers[2][name]'] == 'Jill'
        assert 'signers[1][order]' not in fields

    def test_order_values_are_zero_based(self):
        """With order_matters, order values start at 0 under 1-based keys."""
        request = SignatureRequest()
        request.add_signer('jack@example.com', 'Jack')
        request.add_signer('jill@example.com', 'Jill')
        request.order_matters = True

        fields = request.get_post_fields()

        assert fields['signers[1][order]'] == 0
        assert fields['signers[2][order]'] == 1

    def test_signer_role_used_without_name(self):
        """Signers with only a role send the role as their name."""
        request = SignatureRequest()
        request.signers.append(Signer('client@example.com', role='Client'))

        fields = request.get_post_fields()

        assert fields['signers[1][name]'] == 'Client'

    def test_cc_fields(self):
        """CCs are keyed from 1 in the order added."""
        request = SignatureRequest()
        request.add_cc('one@example.com')
        request.add_cc('two@example.com')

        fields = request.get_post_fields()

        assert fields['cc_email_addresses[1]'] == 'one@example.com'
        assert fields['cc_email_addresses[2]'] == 'two@example.com'


class TestDocumentFields:
    """Test file and form field serialization."""

    def test_files_are_one_based(self):
        """Each document's file handle goes under file[n]."""
        first = io.BytesIO(b'%PDF-1.4 first')
        second = io.BytesIO(b'%PDF-1.4 second')
        request = SignatureRequest()
        request.add_file(first)
        request.add_file(second)

        fields = request.get_post_fields()

        assert fields['file[1]'] is first
        assert fields['file[2]'] is second

    def test_no_form_fields_omits_key(self):
        """Without any form fields the key is left out entirely."""
        request = SignatureRequest()
        request.add_file('a.pdf')
        request.add_file('b.pdf')

        assert 'form_fields_per_document' not in request.get_post_fields()

    def test_form_fields_keep_document_positions(self):
        """Documents without fields still get an empty entry."""
        request = SignatureRequest()
        request.add_file('a.pdf')
        request.add_file('b.pdf')
        request.add_file('c.pdf')
        form_field = make_form_field()
        request.documents[1].add_form_field(form_field)

        fields = request.get_post_fields()
        per_document = json.loads(fields['form_fields_per_document'])

        assert len(per_document) == 3
        assert per_document[0] == []
        assert per_document[1] == [form_field.to_dict()]
        assert per_document[2] == []

    def test_form_field_json_shape(self):
        """Form fields are sent with the API's key names."""
        request = SignatureRequest()
        request.add_document(Document(file='a.pdf', form_fields=[make_form_field()]))

        per_document = json.loads(request.get_post_fields()['form_fields_per_document'])

        assert per_document[0][0] == {
            'api_id': 'name_1',
            'name': 'Full Name',
            'type': 'text',
            'x': 100,
            'y': 200,
            'width': 150,
            'height': 20,
            'required': True,
            'signer': 1,
            'page': 1
        }

    def test_compact_json_setting(self, monkeypatch):
        """Form field JSON is compact unless configured otherwise."""
        request = SignatureRequest()
        request.add_document(Document(file='a.pdf', form_fields=[make_form_field()]))

        assert ', ' not in request.get_post_fields()['form_fields_per_document']

        monkeypatch.setattr(Config, 'JSON_COMPACT', False)
        assert ', ' in request.get_post_fields()['form_fields_per_document']


class TestSerializationErrors:
    """Test failure handling and side effects."""

    def test_malformed_signer_raises_serialization_error(self):
        """Failures while building fields are wrapped, with the cause kept."""
        request = SignatureRequest()
        request.signers = [None]

        with pytest.raises(SerializationError) as exc_info:
            RequestFieldSerializer.build_post_fields(request)

        assert isinstance(exc_info.value.cause, AttributeError)
        assert exc_info.value.__cause__ is exc_info.value.cause

    def test_request_not_modified(self):
        """Building fields leaves the request as it was."""
        request = SignatureRequest()
        request.title = 'NDA'
        request.add_signer('jack@example.com', 'Jack')
        request.add_cc('cc@example.com')
        request.add_document(Document(file='a.pdf', form_fields=[make_form_field()]))
        before = (request.to_dict(), list(request.signers), list(request.documents))

        request.get_post_fields()

        assert (request.to_dict(), list(request.signers), list(request.documents)) == before


class TestSplitMultipart:
    """Test splitting fields into form data and uploads."""

    def test_files_separated_from_data(self):
        """file[n] entries become uploads; the rest stays form data."""
        handle = io.BytesIO(b'%PDF-1.4')
        request = SignatureRequest()
        request.title = 'NDA'
        request.add_signer('jack@example.com', 'Jack')
        request.add_file(handle)
        request.add_document(Document(file='b.pdf', form_fields=[make_form_field()]))

        data, files = split_multipart(request.get_post_fields())

        assert files == {'file[1]': handle, 'file[2]': 'b.pdf'}
        assert data['title'] == 'NDA'
        assert data['signers[1][email_address]'] == 'jack@example.com'
        assert 'form_fields_per_document' in data


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
