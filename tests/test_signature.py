"""Tests for signature canonical form, equality, ordering and validation."""

import pytest
from pydantic import ValidationError

from scriptguard.models.signature import Signature, SignatureKind
from scriptguard.models.types import TypeInfo
from scriptguard.typesystem.registry import TypeRegistry


def parse_line(line: str) -> Signature:
    """Minimal catalog line reader used to check the text form round-trips."""
    kind, declaring_type, *rest = line.split(" ")
    kind = SignatureKind(kind)
    if kind is SignatureKind.NEW:
        return Signature(kind=kind, declaring_type=declaring_type, argument_types=tuple(rest))
    name, *arguments = rest
    return Signature(kind=kind, declaring_type=declaring_type, name=name, argument_types=tuple(arguments))


class TestCanonicalForm:
    """Tests for str() and signature_part()."""

    def test_method(self) -> None:
        s = Signature.method("java.lang.String", "substring", "int", "int")
        assert str(s) == "method java.lang.String substring int int"
        assert s.signature_part() == "java.lang.String substring int int"

    def test_method_no_arguments(self) -> None:
        assert str(Signature.method("java.lang.String", "trim")) == "method java.lang.String trim"

    def test_static_method(self) -> None:
        s = Signature.static_method("java.lang.Integer", "parseInt", "java.lang.String")
        assert str(s) == "staticMethod java.lang.Integer parseInt java.lang.String"

    def test_constructor(self) -> None:
        s = Signature.new("java.lang.String", "char[]")
        assert str(s) == "new java.lang.String char[]"
        assert s.signature_part() == "java.lang.String char[]"

    def test_constructor_no_arguments(self) -> None:
        assert str(Signature.new("java.lang.Object")) == "new java.lang.Object"

    def test_field(self) -> None:
        assert str(Signature.field("test.A", "x")) == "field test.A x"

    def test_static_field(self) -> None:
        s = Signature.static_field("java.lang.Integer", "MAX_VALUE")
        assert str(s) == "staticField java.lang.Integer MAX_VALUE"

    def test_wildcard_name(self) -> None:
        s = Signature.method("java.lang.String", "*")
        assert str(s) == "method java.lang.String *"
        assert s.is_wildcard

    def test_built_from_descriptors(self, types: TypeRegistry, string_type: TypeInfo) -> None:
        """Type descriptors are canonicalized, including arrays."""
        s = Signature.static_method(string_type, "join", types.resolve("java.lang.CharSequence"), types.resolve("java.lang.CharSequence[]"))
        assert str(s) == "staticMethod java.lang.String join java.lang.CharSequence java.lang.CharSequence[]"

    def test_repr_shows_text(self) -> None:
        assert repr(Signature.field("test.A", "x")) == "Signature('field test.A x')"


class TestRoundTrip:
    """Catalog lines read back into identical signatures."""

    @pytest.mark.parametrize(
        "signature",
        [
            Signature.method("java.lang.String", "substring", "int"),
            Signature.method("java.lang.String", "*"),
            Signature.static_method("java.lang.String", "join", "java.lang.CharSequence", "java.lang.CharSequence[]"),
            Signature.new("java.lang.String", "char[]"),
            Signature.new("java.lang.Object"),
            Signature.field("test.A", "*"),
            Signature.static_field("java.lang.Integer", "MAX_VALUE"),
        ],
    )
    def test_round_trip(self, signature: Signature) -> None:
        text = str(signature)
        parsed = parse_line(text)
        assert str(parsed) == text
        assert parsed == signature


class TestEquality:
    """Tests for equality and hashing."""

    def test_equal_inputs_equal_signatures(self) -> None:
        a = Signature.method("java.lang.String", "substring", "int")
        b = Signature.method("java.lang.String", "substring", "int")
        assert a == b
        assert hash(a) == hash(b)

    def test_string_and_descriptor_inputs_agree(self, string_type: TypeInfo, types: TypeRegistry) -> None:
        a = Signature.method(string_type, "substring", types.resolve("int"))
        b = Signature.method("java.lang.String", "substring", "int")
        assert a == b

    def test_different_kind_same_part_not_equal(self) -> None:
        """A method and a field with identical signature parts differ."""
        method = Signature.method("java.lang.String", "trim")
        field = Signature.field("java.lang.String", "trim")
        assert method.signature_part() == field.signature_part()
        assert method != field

    def test_field_and_static_field_not_equal(self) -> None:
        assert Signature.field("test.A", "x") != Signature.static_field("test.A", "x")

    def test_argument_order_matters(self) -> None:
        a = Signature.method("T", "m", "int", "long")
        b = Signature.method("T", "m", "long", "int")
        assert a != b

    def test_set_deduplicates(self) -> None:
        entries = {
            Signature.field("test.A", "x"),
            Signature.field("test.A", "x"),
            Signature.static_field("test.A", "x"),
        }
        assert len(entries) == 2

    def test_not_equal_to_text(self) -> None:
        assert Signature.field("test.A", "x") != "field test.A x"

    def test_immutable(self) -> None:
        s = Signature.field("test.A", "x")
        with pytest.raises(ValidationError):
            s.name = "y"

    def test_copy_with_update_rebuilds_text(self) -> None:
        s = Signature.method("java.lang.String", "substring", "int")
        copied = s.model_copy(update={"name": "trim", "argument_types": ()})
        assert str(copied) == "method java.lang.String trim"
        assert copied.signature_part() == "java.lang.String trim"
        assert copied == Signature.method("java.lang.String", "trim")
        assert hash(copied) == hash(Signature.method("java.lang.String", "trim"))
        assert copied != s

    def test_plain_copy_equal(self) -> None:
        s = Signature.static_field("java.lang.Integer", "MAX_VALUE")
        assert s.model_copy() == s
        assert s.model_copy(deep=True).text == s.text


class TestOrdering:
    """Signatures sort by signature part, then by full text."""

    def test_primary_key_is_signature_part(self) -> None:
        constructor = Signature.new("java.lang.String")
        method = Signature.method("java.lang.String", "trim")
        field = Signature.field("java.lang.Integer", "MAX_VALUE")
        assert sorted([method, constructor, field]) == [field, constructor, method]

    def test_tie_break_on_full_text(self) -> None:
        method = Signature.method("test.A", "x")
        field = Signature.field("test.A", "x")
        static_field = Signature.static_field("test.A", "x")
        assert sorted([static_field, method, field]) == [field, method, static_field]

    def test_compare_to(self) -> None:
        a = Signature.method("test.A", "a")
        b = Signature.method("test.A", "b")
        assert a.compare_to(b) < 0
        assert b.compare_to(a) > 0
        assert a.compare_to(Signature.method("test.A", "a")) == 0

    def test_rich_comparisons(self) -> None:
        a = Signature.method("test.A", "a")
        b = Signature.method("test.A", "b")
        assert a < b
        assert a <= b
        assert b > a
        assert b >= a


class TestValidation:
    """Malformed signatures are rejected at construction."""

    def test_whitespace_in_type(self) -> None:
        with pytest.raises(ValidationError):
            Signature.method("java lang String", "trim")

    def test_wildcard_type(self) -> None:
        with pytest.raises(ValidationError):
            Signature.method("*", "trim")

    def test_wildcard_argument_type(self) -> None:
        with pytest.raises(ValidationError):
            Signature.method("java.lang.String", "substring", "*")

    def test_empty_name(self) -> None:
        with pytest.raises(ValidationError):
            Signature.field("test.A", "")

    def test_partial_wildcard_name(self) -> None:
        with pytest.raises(ValidationError):
            Signature.method("java.lang.String", "sub*")

    def test_method_requires_name(self) -> None:
        with pytest.raises(ValidationError):
            Signature(kind=SignatureKind.METHOD, declaring_type="test.A")

    def test_constructor_rejects_name(self) -> None:
        with pytest.raises(ValidationError):
            Signature(kind=SignatureKind.NEW, declaring_type="test.A", name="init")

    def test_field_rejects_arguments(self) -> None:
        with pytest.raises(ValidationError):
            Signature(kind=SignatureKind.FIELD, declaring_type="test.A", name="x", argument_types=("int",))

    def test_unknown_kind(self) -> None:
        with pytest.raises(ValidationError):
            Signature(kind="property", declaring_type="test.A", name="x")


class TestFromMember:
    """Tests for building the signature a member would need."""

    def test_instance_method(self, string_type: TypeInfo) -> None:
        method = string_type.declared_method("substring", ("int", "int"))
        assert str(Signature.from_member(method)) == "method java.lang.String substring int int"

    def test_static_method(self, string_type: TypeInfo) -> None:
        method = string_type.declared_method("valueOf", ("java.lang.Object",))
        assert str(Signature.from_member(method)) == "staticMethod java.lang.String valueOf java.lang.Object"

    def test_constructor(self, string_type: TypeInfo) -> None:
        constructor = string_type.declared_constructor(("char[]",))
        assert str(Signature.from_member(constructor)) == "new java.lang.String char[]"

    def test_fields(self, types: TypeRegistry) -> None:
        a = types.resolve("test.A")
        assert str(Signature.from_member(a.declared_field("x"))) == "field test.A x"
        assert str(Signature.from_member(a.declared_field("CONST"))) == "staticField test.A CONST"

    def test_not_a_member(self) -> None:
        with pytest.raises(TypeError):
            Signature.from_member("java.lang.String")
