import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from importlib import util as importlib_util

from gst_invoice.__main__ import build_parser, config_from_args, main
from gst_invoice.config import POLICY_REJECT, SUMMARY_NONE

FPDF_AVAILABLE = importlib_util.find_spec("fpdf") is not None

INVOICE = {
    "invoice_number": "INV-9",
    "invoice_date": "2026-03-01",
    "business_name": "Seller",
    "customer_name": "Buyer",
    "items": [{"description": "Work", "quantity": 1, "rate": 99.6, "gstRate": 5}],
}


class CliTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, name: str, content: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(content)
        return path

    def _run(self, argv) -> int:
        stderr = io.StringIO()
        with redirect_stderr(stderr), redirect_stdout(io.StringIO()):
            try:
                main(argv)
            except SystemExit as exc:
                self.stderr = stderr.getvalue()
                return exc.code
        self.stderr = stderr.getvalue()
        return 0

    def test_flags_override_config(self) -> None:
        args = build_parser().parse_args(
            ["in.json", "--strategy", "none", "--brackets", "12,5", "--reject-unbracketed"]
        )
        config = config_from_args(args)

        self.assertEqual(config.summary_strategy, SUMMARY_NONE)
        self.assertEqual([str(rate) for rate in config.brackets], ["5", "12"])
        self.assertEqual(config.unbracketed_policy, POLICY_REJECT)

    def test_missing_file_exits_with_error(self) -> None:
        code = self._run([os.path.join(self.tmp.name, "absent.json")])

        self.assertEqual(code, 1)
        self.assertIn("error:", self.stderr)

    def test_invalid_json_exits_with_error(self) -> None:
        code = self._run([self._write("bad.json", '{"invoice_number":')])

        self.assertEqual(code, 1)

    def test_invalid_brackets_exit_with_error(self) -> None:
        code = self._run([self._write("in.json", json.dumps(INVOICE)), "--brackets", "abc"])

        self.assertEqual(code, 1)

    @unittest.skipUnless(FPDF_AVAILABLE, "fpdf2 is not installed")
    def test_writes_pdf(self) -> None:
        source = self._write("in.json", json.dumps(INVOICE))

        code = self._run([source, "-o", self.tmp.name])

        self.assertEqual(code, 0)
        self.assertTrue(os.path.exists(os.path.join(self.tmp.name, "invoice-INV-9.pdf")))

    @unittest.skipUnless(FPDF_AVAILABLE, "fpdf2 is not installed")
    def test_rejected_rate_exits_with_error(self) -> None:
        payload = dict(INVOICE, items=[{"description": "Work", "quantity": 1, "rate": 10, "gstRate": 3}])
        source = self._write("in.json", json.dumps(payload))

        code = self._run([source, "-o", self.tmp.name, "--reject-unbracketed"])

        self.assertEqual(code, 1)
        self.assertIn("unsupported tax rate", self.stderr)


if __name__ == "__main__":
    unittest.main()
