"""Tests for cniskel.core.errors module."""

from __future__ import annotations

import io
import json

import pytest

from cniskel.core.errors import CNIError, ErrorCode, wrap_handler_error


class TestCNIError:
    def test_to_dict_omits_empty_details(self) -> None:
        err = CNIError(ErrorCode.INVALID_NETNS, "bad netns")
        assert err.to_dict() == {"code": 8, "msg": "bad netns"}

    def test_to_dict_with_details(self) -> None:
        err = CNIError(ErrorCode.INCOMPATIBLE_CNI_VERSION, "incompatible CNI versions", "config is \"0.3.0\"")
        assert err.to_dict() == {"code": 1, "msg": "incompatible CNI versions", "details": "config is \"0.3.0\""}

    def test_print_writes_indented_json(self) -> None:
        out = io.StringIO()
        CNIError(ErrorCode.INTERNAL, "boom").print(out)
        text = out.getvalue()
        assert text.endswith("}\n")
        assert '    "code": 999' in text
        assert json.loads(text) == {"code": 999, "msg": "boom"}

    def test_print_defaults_to_stdout(self, capsys) -> None:
        CNIError(ErrorCode.IO_FAILURE, "disk gone").print()
        assert json.loads(capsys.readouterr().out)["code"] == 5

    def test_str_includes_details(self) -> None:
        assert str(CNIError(4, "missing", "CNI_PATH")) == "missing; CNI_PATH"
        assert str(CNIError(4, "missing")) == "missing"

    def test_code_is_coerced_to_enum(self) -> None:
        err = CNIError(7, "bad config")
        assert err.code is ErrorCode.INVALID_NETWORK_CONFIG

    def test_plugin_specific_code_kept(self) -> None:
        err = CNIError(120, "plugin specific")
        assert err.code == 120
        assert err.to_dict()["code"] == 120

    def test_from_json_roundtrip_shape(self) -> None:
        err = CNIError.from_json(b'{"code": 11, "msg": "try later", "details": "lock held"}')
        assert err == CNIError(ErrorCode.TRY_AGAIN_LATER, "try later", "lock held")

    @pytest.mark.parametrize("payload", [b"[]", b'{"code": "x", "msg": "m"}', b"not json"])
    def test_from_json_rejects_malformed(self, payload) -> None:
        with pytest.raises(ValueError):
            CNIError.from_json(payload)


class TestWrapHandlerError:
    def test_cni_error_passes_through(self) -> None:
        err = CNIError(ErrorCode.UNSUPPORTED_FIELD, "no")
        assert wrap_handler_error(err) is err

    def test_other_exceptions_become_internal(self) -> None:
        wrapped = wrap_handler_error(RuntimeError("link down"))
        assert wrapped.code == ErrorCode.INTERNAL
        assert wrapped.message == "link down"
        assert wrapped.details == ""
