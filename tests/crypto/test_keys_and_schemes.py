"""
Key descriptor and signature scheme tests.

Covers hash selection, key/scheme compatibility, signing and verification
with every supported scheme, and key serialization.
"""

import pytest

from ontology_client.codec.reader import BinaryReader
from ontology_client.crypto.key import Key, KeyParameters, PrivateKey, PublicKey
from ontology_client.crypto.schemes import (
    CurveLabel,
    HashAlgorithm,
    KeyType,
    SCHEME_TABLE,
    SignatureScheme,
)
from ontology_client.runtime.errors import (
    InvalidKeyError,
    InvalidParamsError,
    UnknownSchemeError,
    UnsupportedHashAlgorithmError,
    UnsupportedSchemeError,
)

ECDSA_SCHEMES = [s for s in SignatureScheme if s.key_type is KeyType.ECDSA]

ED25519_RFC8032_PUBLIC = "d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a"


class TestSchemeTable:
    """Test scheme enumeration and lookups."""

    def test_every_scheme_has_entry(self):
        assert set(SCHEME_TABLE) == set(SignatureScheme)

    def test_ids_are_contiguous(self):
        assert sorted(s.hex for s in SignatureScheme) == list(range(11))

    @pytest.mark.parametrize("scheme", list(SignatureScheme))
    def test_lookups_round_trip(self, scheme):
        assert SignatureScheme.from_hex(scheme.hex) is scheme
        assert SignatureScheme.from_label(scheme.label) is scheme
        assert SignatureScheme.from_label_jws(scheme.label_jws) is scheme

    def test_unknown_id(self):
        with pytest.raises(UnknownSchemeError):
            SignatureScheme.from_hex(11)

    def test_unknown_label(self):
        with pytest.raises(UnknownSchemeError):
            SignatureScheme.from_label("SHA1withRSA")

    def test_key_type_and_curve_ids(self):
        assert KeyType.from_hex(0x12) is KeyType.ECDSA
        assert KeyType.from_hex(0x13) is KeyType.SM2
        assert KeyType.from_hex(0x14) is KeyType.EDDSA
        assert CurveLabel.from_hex(2) is CurveLabel.SECP256R1
        assert CurveLabel.from_hex(25) is CurveLabel.ED25519
        with pytest.raises(InvalidParamsError):
            CurveLabel.from_label("P-192")


class TestHashFor:
    """Test digest selection."""

    @pytest.mark.parametrize("scheme,expected", [
        (SignatureScheme.ECDSAwithSHA224, HashAlgorithm.SHA224),
        (SignatureScheme.ECDSAwithSHA256, HashAlgorithm.SHA256),
        (SignatureScheme.ECDSAwithSHA3_512, HashAlgorithm.SHA3_512),
        (SignatureScheme.ECDSAwithRIPEMD160, HashAlgorithm.RIPEMD160),
        (SignatureScheme.EDDSAwithSHA512, HashAlgorithm.SHA512),
    ])
    def test_hash_for(self, ecdsa_key, scheme, expected):
        assert ecdsa_key.hash_for(scheme) is expected

    def test_sm2_has_no_generic_hash(self, ecdsa_key):
        with pytest.raises(UnsupportedHashAlgorithmError):
            ecdsa_key.hash_for(SignatureScheme.SM2withSM3)

    def test_unsupported_hash_is_unsupported_scheme(self, ecdsa_key):
        with pytest.raises(UnsupportedSchemeError):
            ecdsa_key.hash_for(SignatureScheme.SM2withSM3)

    def test_non_member(self, ecdsa_key):
        with pytest.raises(UnsupportedHashAlgorithmError):
            ecdsa_key.hash_for("SHA256withECDSA")

    def test_compute_hash(self, ecdsa_key):
        digest = ecdsa_key.compute_hash("", SignatureScheme.ECDSAwithSHA256)
        assert digest == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_ripemd160_digest_length(self, ecdsa_key):
        assert len(ecdsa_key.compute_hash("00", SignatureScheme.ECDSAwithRIPEMD160)) == 40


class TestSupports:
    """Test key/scheme compatibility."""

    @pytest.mark.parametrize("scheme", list(SignatureScheme))
    @pytest.mark.parametrize("algorithm,curve", [
        (KeyType.ECDSA, CurveLabel.SECP256R1),
        (KeyType.SM2, CurveLabel.SM2P256V1),
        (KeyType.EDDSA, CurveLabel.ED25519),
    ])
    def test_supports_matrix(self, scheme, algorithm, curve):
        key = Key("00", algorithm, KeyParameters(curve))
        assert key.supports(scheme) == (scheme.key_type is algorithm)

    def test_ecdsa_schemes(self, ecdsa_key):
        assert all(ecdsa_key.is_schema_supported(s) for s in ECDSA_SCHEMES)
        assert not ecdsa_key.is_schema_supported(SignatureScheme.EDDSAwithSHA512)
        assert not ecdsa_key.is_schema_supported(SignatureScheme.SM2withSM3)

    def test_non_member_raises(self, ecdsa_key):
        with pytest.raises(UnsupportedSchemeError):
            ecdsa_key.is_schema_supported(1)


class TestKeyConstruction:
    """Test key validation and JSON form."""

    def test_algorithm_must_be_key_type(self):
        with pytest.raises(InvalidParamsError):
            Key("00", "ECDSA", KeyParameters(CurveLabel.SECP256R1))

    def test_key_must_be_hex(self):
        with pytest.raises(InvalidKeyError):
            Key("not hex", KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))

    def test_key_is_lowercased(self):
        key = Key("ABCD", KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))
        assert key.key == "abcd"

    def test_json_round_trip(self, ecdsa_key):
        data = ecdsa_key.serialize_json()
        assert data["algorithm"] == "ECDSA"
        assert data["parameters"] == {"curve": "P-256"}
        assert PrivateKey.deserialize_json(data) == ecdsa_key

    def test_insecure_default_is_p256(self, ecdsa_key):
        key = PrivateKey.insecure_default(ecdsa_key.key)
        assert key == ecdsa_key


class TestPublicKey:
    """Test public key derivation and wire form."""

    def test_p256_known_point(self, ecdsa_key):
        expected = "02d3d048aca7bdee582a611d0b8acc45642950dc6167aee63abbdcd1a5781c6319"
        assert ecdsa_key.get_public_key().key == expected

    def test_p256_is_compressed_point(self, ecdsa_key):
        pk = ecdsa_key.get_public_key()
        assert len(pk.key) == 66
        assert pk.key[:2] in ("02", "03")
        assert pk.serialize_hex() == pk.key

    def test_eddsa_matches_rfc8032(self, eddsa_key):
        pk = eddsa_key.get_public_key()
        assert pk.key == ED25519_RFC8032_PUBLIC
        assert pk.serialize_hex() == "1419" + ED25519_RFC8032_PUBLIC

    def test_other_curves_are_prefixed(self):
        key = PrivateKey.random(KeyType.ECDSA, KeyParameters(CurveLabel.SECP384R1))
        assert key.get_public_key().serialize_hex().startswith("1203")

    @pytest.mark.parametrize("fixture", ["ecdsa_key", "eddsa_key"])
    def test_deserialize_hex(self, request, fixture):
        pk = request.getfixturevalue(fixture).get_public_key()
        serialized = pk.serialize_hex()
        reader = BinaryReader(serialized)
        assert PublicKey.deserialize_hex(reader, len(serialized) // 2) == pk
        assert reader.is_empty()

    def test_invalid_private_key(self):
        key = PrivateKey("00" * 32, KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))
        with pytest.raises(InvalidKeyError):
            key.get_public_key()


class TestSignVerify:
    """Test signing and verification."""

    MSG = b"ontology".hex()

    @pytest.mark.parametrize("scheme", ECDSA_SCHEMES)
    def test_ecdsa_every_scheme(self, ecdsa_key, scheme):
        pk = ecdsa_key.get_public_key()
        sig = ecdsa_key.sign(self.MSG, scheme)
        assert sig.algorithm is scheme
        assert len(sig.value) == 128
        assert pk.verify(self.MSG, sig)

    def test_ecdsa_is_deterministic(self, ecdsa_key):
        first = ecdsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256)
        second = ecdsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256)
        assert first == second

    @pytest.mark.parametrize("curve", [CurveLabel.SECP224R1, CurveLabel.SECP384R1, CurveLabel.SECP521R1])
    def test_ecdsa_other_curves(self, curve):
        key = PrivateKey.random(KeyType.ECDSA, KeyParameters(curve))
        sig = key.sign(self.MSG, SignatureScheme.ECDSAwithSHA512)
        assert key.get_public_key().verify(self.MSG, sig)

    def test_eddsa(self, eddsa_key):
        sig = eddsa_key.sign(self.MSG, SignatureScheme.EDDSAwithSHA512)
        assert len(sig.value) == 128
        assert eddsa_key.get_public_key().verify(self.MSG, sig)

    def test_tampered_message(self, ecdsa_key):
        sig = ecdsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256)
        assert not ecdsa_key.get_public_key().verify(self.MSG + "00", sig)

    def test_wrong_key(self, ecdsa_key):
        sig = ecdsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256)
        other = PrivateKey.random(KeyType.ECDSA, KeyParameters(CurveLabel.SECP256R1))
        assert not other.get_public_key().verify(self.MSG, sig)

    def test_eddsa_tampered(self, eddsa_key):
        sig = eddsa_key.sign(self.MSG, SignatureScheme.EDDSAwithSHA512)
        assert not eddsa_key.get_public_key().verify("00" + self.MSG, sig)

    def test_scheme_mismatch(self, ecdsa_key, eddsa_key):
        with pytest.raises(UnsupportedSchemeError):
            ecdsa_key.sign(self.MSG, SignatureScheme.EDDSAwithSHA512)
        with pytest.raises(UnsupportedSchemeError):
            eddsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256)

    def test_verify_scheme_mismatch(self, ecdsa_key, eddsa_key):
        sig = eddsa_key.sign(self.MSG, SignatureScheme.EDDSAwithSHA512)
        with pytest.raises(UnsupportedSchemeError):
            ecdsa_key.get_public_key().verify(self.MSG, sig)

    def test_public_key_id_kept(self, ecdsa_key):
        sig = ecdsa_key.sign(self.MSG, SignatureScheme.ECDSAwithSHA256, "did:ont:abc#keys-1")
        assert sig.public_key_id == "did:ont:abc#keys-1"
