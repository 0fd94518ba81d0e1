"""
Test Extension Envelope

Namespacing of extension fields inside a message and the extension factory.
"""

import pytest
from pydantic import ValidationError

from openid_pape.core.extension import ExtensionArgs, ExtensionFactory
from openid_pape.pape import TYPE_URI, PolicyRequest, from_wire, register
from openid_pape.core.errors import MissingRequiredFieldError


class TestExtensionArgs:
    """Tests for ExtensionArgs flattening and extraction"""

    def test_to_message_fields(self):
        """Fields are placed under the namespace alias with a declaration"""
        args = ExtensionArgs(
            type_uri=TYPE_URI,
            namespace_alias="pape",
            fields={"preferred_auth_policies": "urn:p", "max_auth_age": "60"},
        )

        assert args.to_message_fields() == {
            "openid.ns.pape": TYPE_URI,
            "openid.pape.preferred_auth_policies": "urn:p",
            "openid.pape.max_auth_age": "60",
        }

    def test_custom_prefix(self):
        """The outer message prefix is configurable"""
        args = ExtensionArgs(type_uri=TYPE_URI, namespace_alias="p")

        assert args.to_message_fields(prefix="msg") == {"msg.ns.p": TYPE_URI}

    def test_from_message_fields_finds_any_alias(self):
        """The namespace alias is whatever the sender declared"""
        message = {
            "openid.mode": "checkid_setup",
            "openid.ns.ext9": TYPE_URI,
            "openid.ext9.preferred_auth_policies": "urn:p",
            "openid.ext9.auth_level.ns.nist": "urn:nist",
            "openid.ns.sreg": "http://openid.net/extensions/sreg/1.1",
            "openid.sreg.email": "a@example.com",
        }

        args = ExtensionArgs.from_message_fields(message, TYPE_URI)

        assert args.namespace_alias == "ext9"
        assert args.fields == {
            "preferred_auth_policies": "urn:p",
            "auth_level.ns.nist": "urn:nist",
        }

    def test_from_message_fields_without_declaration(self):
        """No namespace declaration means the extension is absent"""
        assert ExtensionArgs.from_message_fields({"openid.mode": "id_res"}, TYPE_URI) is None

    @pytest.mark.parametrize("alias", ["", "a.b", "a b"])
    def test_invalid_namespace_alias(self, alias):
        """Namespace aliases must be single dot-free tokens"""
        with pytest.raises(ValidationError):
            ExtensionArgs(type_uri=TYPE_URI, namespace_alias=alias)

    def test_request_round_trip_through_message(self):
        """A request survives flattening into a full message"""
        request = PolicyRequest(
            preferred_policies=["urn:p"],
            preferred_auth_level_types=["urn:level"],
        )

        message = request.to_extension_args(namespace_alias="pape2").to_message_fields()
        received = ExtensionArgs.from_message_fields(message, TYPE_URI)

        assert received.namespace_alias == "pape2"
        assert from_wire(received.fields) == request


class TestExtensionFactory:
    """Tests for ExtensionFactory"""

    def setup_method(self):
        """Setup for each test"""
        self.factory = ExtensionFactory()
        register(self.factory)

    def test_creates_request_for_request_messages(self):
        """PAPE requests are built from authentication requests"""
        extension = self.factory.create(TYPE_URI, {"preferred_auth_policies": "urn:p"}, is_request=True)

        assert isinstance(extension, PolicyRequest)
        assert extension.preferred_policies == ["urn:p"]

    def test_declines_response_messages(self):
        """A PAPE request never rides on a response"""
        assert self.factory.create(TYPE_URI, {"preferred_auth_policies": ""}, is_request=False) is None

    def test_unknown_type_uri(self):
        """Unregistered type URIs produce nothing"""
        assert not self.factory.is_registered("urn:unknown")
        assert self.factory.create("urn:unknown", {}, is_request=True) is None

    def test_protocol_errors_propagate(self):
        """Malformed fields surface to the caller"""
        with pytest.raises(MissingRequiredFieldError):
            self.factory.create(TYPE_URI, {}, is_request=True)

    def test_first_accepting_constructor_wins(self):
        """Constructors are tried in registration order"""
        factory = ExtensionFactory()
        factory.register("urn:t", lambda fields, is_request: None)
        factory.register("urn:t", lambda fields, is_request: "second")

        assert factory.create("urn:t", {}, is_request=True) == "second"
