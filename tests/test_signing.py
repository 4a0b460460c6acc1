"""
Test suite for Seewo request signing functionality

This module tests canonical parameter construction, both signature
algorithms, protocol header assembly and the signing utilities.
"""

import hashlib
import hmac
import time

import pytest

from seewo_sdk.signing import (
    # Core signing
    SeewoSigner,
    compute_signature,
    create_signer,
    sign_request,
    build_canonical_params,
    build_signing_string,
    # Types
    SeewoRequest,
    SigningConfig,
    SigningOptions,
    HttpMethod,
    SignType,
    # Configuration
    create_signing_config,
    validate_signing_config,
    # Utilities
    generate_timestamp,
    resolve_uri_template,
    md5_hex,
    validate_header_name,
    validate_header_value,
    check_header,
)
from seewo_sdk.exceptions import (
    ConfigurationError, TemplateError, HeaderError, ValidationError
)


FIXED_TS = 1700000000000


def reference_hmac(secret: str, message: str) -> str:
    return hmac.new(secret.encode(), message.encode(), hashlib.md5).hexdigest().upper()


def reference_md5(text: str) -> str:
    return hashlib.md5(text.encode()).hexdigest().upper()


@pytest.fixture
def hmac_config():
    return create_signing_config("app1", "sec1", SignType.HMAC)


@pytest.fixture
def md5_config():
    return create_signing_config("app1", "sec1", SignType.MD5)


class TestSigningUtilities:
    """Test utility functions"""

    def test_generate_timestamp(self):
        """Test millisecond timestamp generation"""
        timestamp = generate_timestamp()
        assert isinstance(timestamp, int)

        current_ms = int(time.time() * 1000)
        assert abs(timestamp - current_ms) < 2000

    def test_resolve_uri_template(self):
        """Test URI template substitution"""
        assert resolve_uri_template("/live/{x}/y", {"x": "42"}) == "/live/42/y"
        assert resolve_uri_template("/ping", {}) == "/ping"
        assert resolve_uri_template("/a/{x}/{y}", {"x": "1", "y": "2", "z": "3"}) == "/a/1/2"
        assert resolve_uri_template("/{{literal}}/{x}", {"x": "v"}) == "/{literal}/v"

    def test_resolve_uri_template_missing_variable(self):
        """Test undeclared variable fails"""
        with pytest.raises(TemplateError) as exc_info:
            resolve_uri_template("/live/{x}/y", {})

        assert exc_info.value.template == "/live/{x}/y"
        assert exc_info.value.error_code == "TEMPLATE_ERROR"

    def test_resolve_uri_template_malformed(self):
        """Test malformed templates fail"""
        with pytest.raises(TemplateError) as exc_info:
            resolve_uri_template("/live/{x", {"x": "1"})
        assert isinstance(exc_info.value.__cause__, ValueError)

        with pytest.raises(TemplateError):
            resolve_uri_template("/live/x}", {"x": "1"})

        with pytest.raises(TemplateError):
            resolve_uri_template("/live/{}", {"x": "1"})

        with pytest.raises(TemplateError):
            resolve_uri_template("/live/{x.upper}", {"x": "1"})

    def test_md5_hex(self):
        """Test uppercase MD5 digest"""
        digest = md5_hex(b'{"a":1}')
        assert digest == hashlib.md5(b'{"a":1}').hexdigest().upper()
        assert len(digest) == 32

    def test_header_validation(self):
        """Test header name and value validation"""
        assert validate_header_name("x-sw-app-id")
        assert validate_header_name("Content-Type")
        assert not validate_header_name("bad header")
        assert not validate_header_name("bad:header")
        assert not validate_header_name("")

        assert validate_header_value("plain value")
        assert validate_header_value("")
        assert validate_header_value("tab\tinside")
        assert not validate_header_value("line\nbreak")
        assert not validate_header_value("nul\x00")
        assert not validate_header_value(" leading")
        assert not validate_header_value("/live/教室")
        assert not validate_header_value("café")
        assert not validate_header_value("del\x7f")
        assert validate_header_value("~visible ascii!")

    def test_check_header_identifies_offender(self):
        """Test HeaderError carries name and value"""
        with pytest.raises(HeaderError) as exc_info:
            check_header("x-custom", "bad\r\nvalue")

        assert exc_info.value.name == "x-custom"
        assert exc_info.value.value == "bad\r\nvalue"
        assert exc_info.value.error_code == "INVALID_HEADER_VALUE"

        with pytest.raises(HeaderError) as exc_info:
            check_header("bad name", "ok")

        assert exc_info.value.error_code == "INVALID_HEADER_NAME"


class TestCanonicalParameterSet:
    """Test canonical parameter set construction"""

    def test_sorted_lexicographically(self):
        """Test pairs are sorted by key across sources"""
        params = build_canonical_params({"b": "2"}, {"a": "1"}, {"c": "3"})
        assert params == [("a", "1"), ("b", "2"), ("c", "3")]

    def test_signing_string_concatenation(self):
        """Test {"b":"2","a":"1"} serializes as a1b2"""
        params = build_canonical_params({"b": "2", "a": "1"}, {}, {})
        assert build_signing_string(params) == "a1b2"

    def test_empty_values_skipped(self):
        """Test empty values never reach the signing string"""
        params = build_canonical_params({"a": "1", "empty": ""}, {"blank": ""}, {})
        assert ("empty", "") in params
        assert build_signing_string(params) == "a1"

    def test_duplicate_key_rejected(self):
        """Test a key given by two sources is a validation error"""
        with pytest.raises(ValidationError) as exc_info:
            build_canonical_params({"k": "1"}, {"k": "2"}, {})

        assert exc_info.value.error_code == "DUPLICATE_PARAMETER"
        assert exc_info.value.details["key"] == "k"

    def test_header_case_collision_rejected(self):
        """Test header names that differ only in case are duplicates"""
        with pytest.raises(ValidationError) as exc_info:
            build_canonical_params({}, {"X-SW-App-Id": "evil"}, {"x-sw-app-id": "app1"})

        assert exc_info.value.error_code == "DUPLICATE_PARAMETER"
        assert exc_info.value.details["conflicts_with"] == "X-SW-App-Id"

        with pytest.raises(ValidationError):
            build_canonical_params({}, {"X-Trace": "1", "x-trace": "2"}, {})

    def test_query_case_is_not_folded(self):
        """Test queries keep case-sensitive keys"""
        params = build_canonical_params({"Id": "1"}, {"id": "2"}, {})
        assert params == [("Id", "1"), ("id", "2")]

    def test_empty_set(self):
        assert build_canonical_params({}, {}, {}) == []
        assert build_signing_string([]) == ""


class TestSignatureEngine:
    """Test both signature algorithms"""

    def test_salted_digest_empty_set(self):
        """Test MD5 of an empty set is MD5(secret + secret)"""
        signature = compute_signature([], "s", SignType.MD5)
        assert signature == reference_md5("ss")

    def test_salted_digest(self):
        params = [("a", "1"), ("b", "2")]
        assert compute_signature(params, "sec", SignType.MD5) == reference_md5("seca1b2sec")

    def test_keyed_hash(self):
        params = [("a", "1"), ("b", "2")]
        assert compute_signature(params, "sec", SignType.HMAC) == reference_hmac("sec", "a1b2")

    def test_uppercase_hex(self):
        for sign_type in SignType:
            signature = compute_signature([("a", "1")], "sec", sign_type)
            assert len(signature) == 32
            assert signature == signature.upper()
            int(signature, 16)

    def test_value_change_changes_signature(self):
        """Test changing any value changes the signature"""
        for sign_type in SignType:
            base = compute_signature([("a", "1"), ("b", "2")], "sec", sign_type)
            changed = compute_signature([("a", "1"), ("b", "3")], "sec", sign_type)
            assert base != changed

    def test_algorithms_differ(self):
        params = [("a", "1")]
        assert compute_signature(params, "sec", SignType.HMAC) != compute_signature(params, "sec", SignType.MD5)


class TestSigningConfiguration:
    """Test signing configuration validation"""

    def test_create_signing_config(self):
        config = create_signing_config("app1", "sec1")
        assert config.app_id == "app1"
        assert config.sign_type == SignType.HMAC

    def test_sign_type_from_string(self):
        config = create_signing_config("app1", "sec1", "md5")
        assert config.sign_type == SignType.MD5

    def test_secret_not_in_repr(self):
        config = create_signing_config("app1", "super-secret")
        assert "super-secret" not in repr(config)

    def test_invalid_configs(self):
        with pytest.raises(ConfigurationError, match="App ID"):
            create_signing_config("", "sec1")

        with pytest.raises(ConfigurationError, match="App secret"):
            create_signing_config("app1", "")

        with pytest.raises(ConfigurationError) as exc_info:
            create_signing_config("app1", "sec1", "sha1")
        assert exc_info.value.error_code == "INVALID_SIGN_TYPE"

    def test_bad_timestamp_generator(self):
        with pytest.raises(ConfigurationError, match="Timestamp generator"):
            create_signing_config("app1", "sec1", timestamp_generator=lambda: "now")

    def test_validate_rejects_other_types(self):
        with pytest.raises(ConfigurationError):
            validate_signing_config({"app_id": "app1"})

    def test_signer_validates_config(self):
        with pytest.raises(ConfigurationError):
            SeewoSigner(SigningConfig(app_id="app1", app_secret=""))


class TestSignedHeaderAssembly:
    """Test protocol header generation"""

    def test_end_to_end_ping(self, hmac_config):
        """Test the minimal GET /ping header set"""
        signer = create_signer(hmac_config)
        signed = signer.build_sw_headers(SeewoRequest(method=HttpMethod.GET, uri="/ping"))
        headers = signed.headers

        assert headers["x-sw-app-id"] == "app1"
        assert headers["x-sw-req-path"] == "/ping"
        assert headers["x-sw-version"] == "2"
        assert headers["x-sw-timestamp"].isdigit()
        assert headers["x-sw-sign-type"] == "hmac"
        assert len(headers["x-sw-sign"]) == 32
        assert headers["x-sw-sign"] == headers["x-sw-sign"].upper()
        assert "x-sw-sign-headers" not in headers
        assert "x-sw-content-md5" not in headers

    def test_known_signature(self, hmac_config):
        """Test signature over a fixed timestamp matches a reference HMAC"""
        signed = sign_request(
            SeewoRequest(uri="/ping"), hmac_config, SigningOptions(timestamp=FIXED_TS)
        )

        expected_string = (
            "x-sw-app-idapp1"
            "x-sw-req-path/ping"
            "x-sw-sign-typehmac"
            f"x-sw-timestamp{FIXED_TS}"
            "x-sw-version2"
        )
        assert signed.signing_string == expected_string
        assert signed.signature == reference_hmac("sec1", expected_string)
        assert signed.timestamp == FIXED_TS

    def test_known_signature_md5(self, md5_config):
        signed = sign_request(
            SeewoRequest(uri="/ping"), md5_config, SigningOptions(timestamp=FIXED_TS)
        )

        expected_string = (
            "x-sw-app-idapp1"
            "x-sw-req-path/ping"
            "x-sw-sign-typemd5"
            f"x-sw-timestamp{FIXED_TS}"
            "x-sw-version2"
        )
        assert signed.signature == reference_md5("sec1" + expected_string + "sec1")

    def test_signature_is_last_and_not_signed(self, hmac_config):
        signed = sign_request(SeewoRequest(uri="/ping"), hmac_config, SigningOptions(timestamp=FIXED_TS))
        assert list(signed.headers)[-1] == "x-sw-sign"
        assert "x-sw-sign" + signed.signature not in signed.signing_string

    def test_determinism(self, hmac_config, md5_config):
        """Test identical inputs and timestamp give identical signatures"""
        request = SeewoRequest(uri="/live/{x}", vars={"x": "1"}, queries={"q": "v"})
        options = SigningOptions(timestamp=FIXED_TS)

        for config in (hmac_config, md5_config):
            first = sign_request(request, config, options)
            second = sign_request(request, config, options)
            assert first.headers == second.headers

    def test_timestamp_changes_signature(self, hmac_config):
        request = SeewoRequest(uri="/ping")
        first = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))
        second = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS + 1))
        assert first.signature != second.signature

    def test_timestamp_generator(self):
        config = create_signing_config("app1", "sec1", timestamp_generator=lambda: FIXED_TS)
        signed = SeewoSigner(config).build_sw_headers(SeewoRequest(uri="/ping"))
        assert signed.headers["x-sw-timestamp"] == str(FIXED_TS)

    def test_sign_headers_preserve_order(self, hmac_config):
        """Test x-sw-sign-headers lists names in request order, unsorted"""
        request = SeewoRequest(uri="/ping", headers={"zeta": "1", "alpha": "2"})
        signed = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))
        assert signed.headers["x-sw-sign-headers"] == "zeta,alpha"

    def test_custom_headers_are_signed(self, hmac_config):
        request = SeewoRequest(uri="/ping", headers={"zeta": "1", "alpha": ""})
        signed = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))

        # alpha has an empty value, so nothing sorts ahead of the protocol headers
        assert signed.signing_string.startswith("x-sw-app-idapp1")
        assert signed.signing_string.endswith("zeta1")
        assert "x-sw-sign-headerszeta,alpha" in signed.signing_string

    def test_queries_are_signed(self, hmac_config):
        request = SeewoRequest(uri="/ping", queries={"bizId": "abc"})
        signed = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))
        assert signed.signing_string.startswith("bizIdabc")

    def test_content_md5(self, hmac_config):
        body = b'{"deviceSn":"SN1"}'
        request = SeewoRequest(method=HttpMethod.POST, uri="/ping", body=body)
        signed = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))

        assert signed.headers["x-sw-content-md5"] == hashlib.md5(body).hexdigest().upper()
        assert "x-sw-content-md5" + signed.headers["x-sw-content-md5"] in signed.signing_string

    def test_empty_body_still_hashed(self, hmac_config):
        signed = sign_request(SeewoRequest(uri="/ping", body=b""), hmac_config)
        assert signed.headers["x-sw-content-md5"] == hashlib.md5(b"").hexdigest().upper()

    def test_resolved_path_is_signed(self, hmac_config):
        request = SeewoRequest(uri="/live/{x}/y", vars={"x": "42"})
        signed = sign_request(request, hmac_config, SigningOptions(timestamp=FIXED_TS))
        assert signed.headers["x-sw-req-path"] == "/live/42/y"
        assert signed.resolved_path == "/live/42/y"

    def test_template_error_propagates(self, hmac_config):
        with pytest.raises(TemplateError):
            sign_request(SeewoRequest(uri="/live/{x}"), hmac_config)

    def test_protocol_header_collision_rejected(self, hmac_config):
        request = SeewoRequest(uri="/ping", headers={"x-sw-app-id": "other"})
        with pytest.raises(ValidationError):
            sign_request(request, hmac_config)

    @pytest.mark.parametrize("name", ["x-sw-sign", "X-SW-Sign"])
    def test_signature_header_collision_rejected(self, hmac_config, name):
        request = SeewoRequest(uri="/ping", headers={name: "forged"})

        with pytest.raises(ValidationError) as exc_info:
            sign_request(request, hmac_config)

        assert exc_info.value.details["key"] == name

    def test_build_headers_merges_custom_headers(self, hmac_config):
        request = SeewoRequest(uri="/ping", headers={"x-custom": "v"})
        headers = SeewoSigner(hmac_config).build_headers(request, SigningOptions(timestamp=FIXED_TS))

        assert headers["x-custom"] == "v"
        assert headers["x-sw-app-id"] == "app1"
        assert "x-sw-sign" in headers


class TestSeewoRequest:
    """Test logical request normalization"""

    def test_defaults(self):
        request = SeewoRequest(uri="/ping")
        assert request.method == HttpMethod.GET
        assert request.vars == {}
        assert request.queries == {}
        assert request.headers == {}
        assert request.body is None

    def test_method_from_string(self):
        assert SeewoRequest(method="post", uri="/ping").method == HttpMethod.POST

    def test_invalid_fields(self):
        with pytest.raises(ValueError):
            SeewoRequest(uri="/ping", queries=[("a", "1")])

        with pytest.raises(ValueError):
            SeewoRequest(uri="/ping", body="not bytes")
