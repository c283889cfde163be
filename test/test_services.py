#!/usr/bin/env python3
import sys
import os
import io
import unittest
from contextlib import redirect_stderr
from unittest.mock import Mock, patch
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from spinnaker_audit.config import AuditConfig
from spinnaker_audit.models import LogEntry
from spinnaker_audit.services import GLOBAL_RESOURCE, CloudLoggingSink, build_cloud_logger


class TestCloudLoggingSink(unittest.TestCase):
    def test_emit_writes_struct_with_severity_and_resource(self):
        logger = Mock()
        sink = CloudLoggingSink(logger, max_workers=1)
        entry = LogEntry(message="Spinnaker: Pipeline p of application a completed at now.",
                         severity="warning", application="a", pipeline="p")

        sink.emit(entry).result(timeout=5)
        sink.close()

        logger.log_struct.assert_called_once_with(
            {"message": entry.message, "application": "a", "pipeline": "p"},
            severity="WARNING",
            resource=GLOBAL_RESOURCE,
        )
        self.assertEqual(GLOBAL_RESOURCE.type, "global")

    def test_failed_write_is_reported(self):
        logger = Mock()
        logger.log_struct.side_effect = RuntimeError("backend down")
        sink = CloudLoggingSink(logger, max_workers=1)

        stderr = io.StringIO()
        with redirect_stderr(stderr):
            future = sink.emit(LogEntry(message="Spinnaker: something at now."))
            with self.assertRaises(RuntimeError):
                future.result(timeout=5)
            sink.close()

        self.assertIn("backend down", stderr.getvalue())
        self.assertIn("Spinnaker: something at now.", stderr.getvalue())


class TestBuildCloudLogger(unittest.TestCase):
    @patch("spinnaker_audit.services.cloud_logging.Client")
    def test_uses_key_file_when_configured(self, client_cls):
        config = AuditConfig(username="u", password="p", project_id="proj", key_filename="/keys/sa.json", log_name="audit")
        build_cloud_logger(config)
        client_cls.from_service_account_json.assert_called_once_with("/keys/sa.json", project="proj")
        client_cls.from_service_account_json.return_value.logger.assert_called_once_with("audit")

    @patch("spinnaker_audit.services.cloud_logging.Client")
    def test_default_credentials(self, client_cls):
        config = AuditConfig(username="u", password="p", project_id="proj")
        build_cloud_logger(config)
        client_cls.assert_called_once_with(project="proj")
        client_cls.return_value.logger.assert_called_once_with("spinnaker-audit-log")


if __name__ == '__main__':
    unittest.main()
