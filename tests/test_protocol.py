"""
Tests for protocol.py - request/response envelopes and their JSON codec.
"""

import json
import unittest

from transrpc.errors import DeserializationError, SerializationError
from transrpc.protocol import (
    RequestEnvelope,
    ResponseEnvelope,
    deserialize_request,
    deserialize_response,
    serialize_request,
    serialize_response,
)


class TestRequestSerialization(unittest.TestCase):

    def test_request_wire_format(self):
        envelope = RequestEnvelope("torrent-get", {"fields": ["id", "name"]}, 7)
        data = json.loads(serialize_request(envelope))
        self.assertEqual(
            data,
            {"method": "torrent-get", "arguments": {"fields": ["id", "name"]}, "tag": 7},
        )

    def test_arguments_are_opaque(self):
        for arguments in ([1, 2, 3], "text", None, 3.5, {"nested": {"a": [True]}}):
            envelope = RequestEnvelope("m", arguments, 1)
            self.assertEqual(deserialize_request(serialize_request(envelope))["arguments"], arguments)

    def test_unencodable_arguments_raise(self):
        with self.assertRaises(SerializationError):
            serialize_request(RequestEnvelope("m", {"handle": object()}, 1))

    def test_nan_is_rejected(self):
        with self.assertRaises(SerializationError):
            serialize_request(RequestEnvelope("m", {"ratio": float("nan")}, 1))

    def test_envelope_is_immutable(self):
        envelope = RequestEnvelope("m", {}, 1)
        with self.assertRaises(AttributeError):
            envelope.tag = 2


class TestResponseDeserialization(unittest.TestCase):

    def test_full_response(self):
        response = deserialize_response(
            b'{"arguments": {"version": "4.0.5"}, "result": "success", "tag": 3}'
        )
        self.assertEqual(response, ResponseEnvelope({"version": "4.0.5"}, "success", 3))
        self.assertTrue(response.succeeded)

    def test_missing_fields_take_zero_values(self):
        response = deserialize_response(b'{"result": "error string here"}')
        self.assertEqual(response.arguments, {})
        self.assertEqual(response.tag, 0)
        self.assertFalse(response.succeeded)

    def test_null_arguments_become_empty_mapping(self):
        response = deserialize_response(b'{"arguments": null, "result": "success", "tag": 1}')
        self.assertEqual(response.arguments, {})

    def test_invalid_json_raises(self):
        with self.assertRaises(DeserializationError):
            deserialize_response(b"<html>Conflict</html>")

    def test_invalid_utf8_raises(self):
        with self.assertRaises(DeserializationError):
            deserialize_response(b"\xff\xfe")

    def test_non_object_raises(self):
        with self.assertRaises(DeserializationError):
            deserialize_response(b"[1, 2]")

    def test_wrong_field_types_raise(self):
        bad_bodies = [
            b'{"arguments": [], "result": "success", "tag": 1}',
            b'{"arguments": {}, "result": 0, "tag": 1}',
            b'{"arguments": {}, "result": "success", "tag": "1"}',
            b'{"arguments": {}, "result": "success", "tag": true}',
        ]
        for body in bad_bodies:
            with self.assertRaises(DeserializationError, msg=body):
                deserialize_response(body)

    def test_nan_and_infinity_literals_raise(self):
        bad_bodies = [
            b'{"arguments": {"x": NaN}, "result": "success", "tag": 1}',
            b'{"arguments": {"x": Infinity}, "result": "success", "tag": 1}',
            b'{"arguments": {"x": -Infinity}, "result": "success", "tag": 1}',
        ]
        for body in bad_bodies:
            with self.assertRaises(DeserializationError, msg=body):
                deserialize_response(body)

    def test_serialize_response_defaults(self):
        data = json.loads(serialize_response(tag=9))
        self.assertEqual(data, {"arguments": {}, "result": "success", "tag": 9})


if __name__ == "__main__":
    unittest.main()
