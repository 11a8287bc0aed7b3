"""
Signature format tests: compact hex, JWT and PGP envelope.
"""

import base64

import pytest

from ontology_client.constants import DEFAULT_SM2_ID
from ontology_client.crypto.schemes import SignatureScheme
from ontology_client.crypto.signature import PgpSignature, Signature
from ontology_client.runtime.errors import (
    InvalidParamsError,
    MalformedSignatureError,
    UnknownSchemeError,
)

VALUE = "ab" * 64
SM2_ID_HEX = DEFAULT_SM2_ID.encode("ascii").hex()


class TestCompactHex:
    """Test the [scheme][sm2 id][value] format."""

    @pytest.mark.parametrize("scheme", list(SignatureScheme))
    def test_round_trip(self, scheme):
        sig = Signature(scheme, VALUE)
        assert Signature.deserialize_hex(sig.serialize_hex()) == sig

    def test_ecdsa_layout(self):
        sig = Signature(SignatureScheme.ECDSAwithSHA256, VALUE)
        assert sig.serialize_hex() == "01" + VALUE

    def test_sm2_layout(self):
        sig = Signature(SignatureScheme.SM2withSM3, VALUE)
        assert sig.serialize_hex() == "09" + SM2_ID_HEX + "00" + VALUE

    def test_sm2_other_user_id(self):
        """Any zero terminated user id is skipped on read."""
        data = "09" + b"alice".hex() + "00" + VALUE
        sig = Signature.deserialize_hex(data)
        assert sig.algorithm is SignatureScheme.SM2withSM3
        assert sig.value == VALUE

    def test_sm2_without_terminator(self):
        with pytest.raises(MalformedSignatureError):
            Signature.deserialize_hex("09" + SM2_ID_HEX + "11" * 8)

    def test_scheme_byte_only(self):
        sig = Signature.deserialize_hex("01")
        assert sig.algorithm is SignatureScheme.ECDSAwithSHA256
        assert sig.value == ""

    @pytest.mark.parametrize("data", ["", "0"])
    def test_too_short(self, data):
        with pytest.raises(InvalidParamsError):
            Signature.deserialize_hex(data)

    def test_unknown_scheme(self):
        with pytest.raises(UnknownSchemeError):
            Signature.deserialize_hex("0b" + VALUE)

    def test_key_id_not_carried(self):
        sig = Signature(SignatureScheme.ECDSAwithSHA256, VALUE, "did:ont:x#keys-1")
        assert Signature.deserialize_hex(sig.serialize_hex()).public_key_id is None


class TestJwt:
    """Test the base64url value form."""

    def test_no_padding(self):
        sig = Signature(SignatureScheme.ECDSAwithSHA256, "ff" * 64)
        encoded = sig.serialize_jwt()
        assert "=" not in encoded
        assert "+" not in encoded and "/" not in encoded

    @pytest.mark.parametrize("value", ["ff" * 64, "fb" * 65, "01" * 66])
    def test_round_trip(self, value):
        sig = Signature(SignatureScheme.ECDSAwithSHA256, value, "did:ont:x#keys-1")
        decoded = Signature.deserialize_jwt(sig.serialize_jwt(), sig.algorithm, sig.public_key_id)
        assert decoded == sig

    def test_invalid(self):
        with pytest.raises(InvalidParamsError):
            Signature.deserialize_jwt("a", SignatureScheme.ECDSAwithSHA256, "id")


class TestPgp:
    """Test the PGP envelope."""

    def test_envelope_fields(self):
        sig = Signature(SignatureScheme.ECDSAwithSHA256, VALUE)
        envelope = sig.serialize_pgp("did:ont:x#keys-1").to_dict()
        assert envelope["PublicKeyId"] == "did:ont:x#keys-1"
        assert envelope["Format"] == "pgp"
        assert envelope["Algorithm"] == "SHA256withECDSA"
        assert base64.b64decode(envelope["Value"]).hex() == sig.serialize_hex()

    def test_absent_key_id_omitted(self):
        envelope = Signature(SignatureScheme.ECDSAwithSHA256, VALUE).serialize_pgp().to_dict()
        assert "PublicKeyId" not in envelope

    @pytest.mark.parametrize("scheme", [SignatureScheme.ECDSAwithSHA256, SignatureScheme.SM2withSM3])
    def test_round_trip(self, scheme):
        sig = Signature(scheme, VALUE)
        assert Signature.deserialize_pgp(sig.serialize_pgp("k")) == sig

    def test_from_dict(self):
        sig = Signature(SignatureScheme.EDDSAwithSHA512, VALUE)
        data = sig.serialize_pgp().to_dict()
        assert Signature.deserialize_pgp(data) == sig

    def test_populate_by_field_name(self):
        envelope = PgpSignature(algorithm="SHA256withECDSA", value="AQ==")
        assert envelope.format == "pgp"

    def test_invalid_base64(self):
        with pytest.raises(InvalidParamsError):
            Signature.deserialize_pgp({"Algorithm": "SHA256withECDSA", "Value": "!!"})

    def test_missing_value(self):
        with pytest.raises(InvalidParamsError):
            Signature.deserialize_pgp({"Algorithm": "SHA256withECDSA"})

    def test_unknown_algorithm(self):
        data = {"Algorithm": "SHA1withRSA", "Value": base64.b64encode(b"\x01\x02").decode()}
        with pytest.raises(UnknownSchemeError):
            Signature.deserialize_pgp(data)
