import io
import json
import os
import shutil
import tempfile
import unittest
from unittest import mock

from tinyschema.__main__ import main


class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.mkdtemp()
        self.schema = self.write("schema.json", {
            "name": "string",
            "age?": "integer",
            "tags": ["string", "*"]
        })

    def tearDown(self):
        shutil.rmtree(self.tmp)

    def write(self, name, obj):
        path = os.path.join(self.tmp, name)
        with open(path, "w") as fp:
            if isinstance(obj, str):
                fp.write(obj)
            else:
                json.dump(obj, fp)
        return path

    def run_main(self, *argv):
        with mock.patch("sys.stdout", new_callable=io.StringIO) as out, \
                mock.patch("sys.stderr", new_callable=io.StringIO) as err:
            code = main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_valid_document(self):
        data = self.write("data.json", {"name": "bob", "tags": ["a"]})
        code, out, _ = self.run_main(self.schema, data)

        self.assertEqual(0, code)
        self.assertEqual("OK\n", out)

    def test_invalid_document(self):
        data = self.write("data.json", {"name": "bob", "tags": [1]})
        code, out, err = self.run_main(self.schema, data)

        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertIn("'tags[0]': expected type 'string', got 'number'", err)

    def test_no_strict_flag(self):
        data = self.write("data.json", {"name": "bob", "tags": [], "x": 1})

        self.assertEqual(1, self.run_main(self.schema, data)[0])
        self.assertEqual(0, self.run_main(self.schema, data, "--no-strict")[0])

    def test_reads_document_from_stdin(self):
        stdin = io.StringIO(json.dumps({"name": "bob", "tags": []}))
        with mock.patch("sys.stdin", stdin):
            code, out, _ = self.run_main(self.schema)

        self.assertEqual(0, code)
        self.assertEqual("OK\n", out)

    def test_malformed_json(self):
        data = self.write("data.json", "{not json")
        self.assertEqual(2, self.run_main(self.schema, data)[0])

    def test_missing_file(self):
        missing = os.path.join(self.tmp, "nope.json")
        self.assertEqual(2, self.run_main(missing, missing)[0])

    def test_invalid_schema(self):
        schema = self.write("bad.json", {"name": "strnig"})
        data = self.write("data.json", {"name": "bob"})
        self.assertEqual(2, self.run_main(schema, data)[0])

    def test_max_depth(self):
        schema = self.write("deep.json", {"a": {"a": {"a": "any"}}})
        data = self.write("data.json", {"a": {"a": {"a": 1}}})

        self.assertEqual(0, self.run_main(schema, data)[0])
        self.assertEqual(0, self.run_main(schema, data, "--max-depth", "3")[0])
        # The schema itself is deeper than the limit.
        self.assertEqual(2, self.run_main(schema, data, "--max-depth", "2")[0])

    def test_deeply_nested_document(self):
        schema = self.write("any.json", "\"any\"")
        data = self.write("data.json", "[" * 100000 + "]" * 100000)

        self.assertEqual(2, self.run_main(schema, data)[0])

    def test_deeply_nested_schema(self):
        schema = self.write("deep.json", "[" * 500 + "\"any\"" + "]" * 500)
        data = self.write("data.json", [])

        self.assertEqual(2, self.run_main(schema, data)[0])
