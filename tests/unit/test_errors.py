"""
Error Taxonomy Unit Tests
Tests for dynamerkle/schemas/errors.py.
"""
import pytest

from dynamerkle.schemas.errors import (
    ConfigException,
    EmptyInputException,
    ErrorCodes,
    InvalidElementException,
    LeafIndexOutOfRangeException,
    MerkleError,
    MerkleException,
    ProofFormatException,
    UnsupportedAlgorithmException,
)


class TestExceptionHierarchy:
    """Every library error is a MerkleException and a matching builtin."""

    @pytest.mark.parametrize(
        "exc,builtin,code",
        [
            (EmptyInputException(), ValueError, ErrorCodes.EMPTY_INPUT),
            (LeafIndexOutOfRangeException(5, 3), IndexError, ErrorCodes.INDEX_OUT_OF_RANGE),
            (InvalidElementException("bad"), TypeError, ErrorCodes.INVALID_ELEMENT),
            (UnsupportedAlgorithmException("md4"), ValueError, ErrorCodes.UNSUPPORTED_ALGORITHM),
            (ProofFormatException("bad"), ValueError, ErrorCodes.PROOF_FORMAT_ERROR),
        ],
    )
    def test_codes_and_bases(self, exc, builtin, code):
        assert isinstance(exc, MerkleException)
        assert isinstance(exc, builtin)
        assert exc.code == code

    def test_out_of_range_message(self):
        exc = LeafIndexOutOfRangeException(5, 3)

        assert str(exc) == "Leaf index 5 out of range for 3 leaves"
        assert exc.details == {"leaf_index": 5, "leaf_count": 3}

    def test_config_key_in_details(self):
        exc = ConfigException("bad value", key="proofs.max_proof_steps")

        assert exc.code == ErrorCodes.CONFIG_ERROR
        assert exc.details["key"] == "proofs.max_proof_steps"

    def test_repr(self):
        assert repr(ProofFormatException("oops")) == (
            "ProofFormatException(code='PROOF_FORMAT_ERROR', message='oops')"
        )


class TestErrorModel:
    """Tests for MerkleError <-> MerkleException conversion."""

    def test_to_error_model(self):
        model = EmptyInputException().to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == "EMPTY_INPUT"
        assert model.details == {}

    def test_to_exception(self):
        model = MerkleError(code="CUSTOM", message="custom failure", details={"k": 1})
        exc = model.to_exception()

        assert isinstance(exc, MerkleException)
        assert exc.code == "CUSTOM"
        assert exc.details == {"k": 1}
        assert str(exc) == "custom failure"

    def test_extra_fields_forbidden(self):
        with pytest.raises(Exception):
            MerkleError(code="X", message="y", unknown=True)
