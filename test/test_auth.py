#!/usr/bin/env python3
import sys
import os
import unittest
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from spinnaker_audit.auth import verify_webhook
from spinnaker_audit.errors import AuthError

from event_builders import TEST_CONFIG, basic_auth


class TestVerifyWebhook(unittest.TestCase):
    def assertRejected(self, header):
        with self.assertRaises(AuthError) as ctx:
            verify_webhook(header, TEST_CONFIG)
        self.assertEqual(ctx.exception.status_code, 401)

    def test_valid_credentials(self):
        # senha contém ':' e só o primeiro separa usuário/senha
        self.assertIsNone(verify_webhook(basic_auth(), TEST_CONFIG))

    def test_wrong_username(self):
        self.assertRejected(basic_auth(username="mallory"))

    def test_wrong_password(self):
        self.assertRejected(basic_auth(password="s3cr3t"))

    def test_empty_header(self):
        self.assertRejected("")

    def test_missing_basic_prefix(self):
        self.assertRejected(basic_auth().replace("Basic ", "Bearer "))

    def test_malformed_base64(self):
        self.assertRejected("Basic %%%not-base64%%%")

    def test_unpadded_token_is_rejected(self):
        # "echo:s3cr3t:with-colon" sem o padding final
        self.assertRejected(basic_auth().rstrip("="))

    def test_payload_without_separator(self):
        self.assertRejected("Basic ZWNobw==")  # "echo"


if __name__ == '__main__':
    unittest.main()
