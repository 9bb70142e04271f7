"""Tests for the context_builder module."""

from pathlib import Path

from actiongen.config import GeneratorConfig
from actiongen.context_builder import (
    build_client_context,
    build_server_context,
    decoder_for,
    encoder_for,
)
from actiongen.schema_parser import extract_schema

EXAMPLES_ROOT = Path(__file__).parent.parent / "examples" / "actions"


class TestBuildContext:
    """Test both contexts against the shipped sample declarations."""

    @classmethod
    def setup_class(cls):
        """Extract the sample schema and build both contexts once."""
        cls.config = GeneratorConfig(source_root=EXAMPLES_ROOT, endpoint="/rpc")
        cls.schema = extract_schema(cls.config)
        cls.client = build_client_context(cls.schema, cls.config)
        cls.server = build_server_context(cls.schema, cls.config)

    def test_action_count(self):
        assert self.client["action_count"] == 2
        assert self.server["action_count"] == 2

    def test_struct_count(self):
        assert self.client["struct_count"] == 3

    def test_endpoint(self):
        assert self.client["endpoint"] == "/rpc"
        assert self.server["endpoint"] == "/rpc"

    def test_same_action_order(self):
        """Client bindings and dispatch arms come out in the same order."""
        client_names = [a["name"] for a in self.client["actions"]]
        server_names = [a["name"] for a in self.server["actions"]]
        assert client_names == server_names == ["get_user", "rename_user"]

    def test_client_action_types_are_mapped(self):
        get_user = self.client["actions"][0]
        assert get_user["request_type"] == "GetUserRequest"
        assert get_user["response_type"] == "GetUserResponse"

    def test_client_optional_field(self):
        rename = next(s for s in self.client["structs"] if s["name"] == "RenameUserRequest")
        optional = {f["wire_name"]: f["optional"] for f in rename["fields"]}
        assert optional == {"id": False, "name": False, "notify": True}

    def test_server_imports_declaring_module(self):
        assert self.server["modules"] == ["actions.users"]

    def test_server_action_wiring(self):
        rename = self.server["actions"][1]
        assert rename["qualname"] == "actions.users.rename_user"
        assert rename["decoder"] == "_decode_RenameUserRequest"
        assert rename["encoder"] == "_encode_GetUserResponse"
        assert rename["result_count"] == 2

    def test_server_field_helpers(self):
        request = next(s for s in self.server["structs"] if s["name"] == "GetUserRequest")
        assert request["qualname"] == "actions.users.GetUserRequest"
        assert request["fields"] == [{
            "name": "id",
            "wire_name": "id",
            "type_name": "int",
            "has_default": False,
            "decoder": "_decode_int",
            "encoder": "_encode_scalar",
        }]


class TestHelperNames:

    def test_struct_decoder(self):
        assert decoder_for("Address") == "_decode_Address"

    def test_scalar_decoder(self):
        assert decoder_for("float") == "_decode_float"

    def test_struct_encoder(self):
        assert encoder_for("Address") == "_encode_Address"

    def test_scalar_encoder(self):
        assert encoder_for("str") == "_encode_scalar"

    def test_exception_encoder(self):
        assert encoder_for("Exception") == "_encode_Exception"
