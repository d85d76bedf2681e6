"""Path parsing, resolution and assignment."""

import unittest

from ocn_notary import assign, parse_path, resolve


class TestParsePath(unittest.TestCase):

    def test_keys_and_indices(self):
        self.assertEqual(
            parse_path("$['body']['evses'][0]['id']"),
            ["body", "evses", 0, "id"],
        )

    def test_root(self):
        self.assertEqual(parse_path("$"), [])

    def test_hyphenated_key(self):
        self.assertEqual(parse_path("$['headers']['x-correlation-id']"), ["headers", "x-correlation-id"])

    def test_key_with_newline(self):
        self.assertEqual(parse_path("$['body']['note\nline']"), ["body", "note\nline"])
        self.assertEqual(resolve({"body": {"note\nline": "x"}}, "$['body']['note\nline']"), (True, "x"))

    def test_dot_notation_is_not_understood(self):
        self.assertIsNone(parse_path("$.body.id"))
        self.assertIsNone(parse_path("body['id']"))
        self.assertIsNone(parse_path("$['body']x"))


class TestResolve(unittest.TestCase):

    def setUp(self):
        self.tree = {"body": {"id": "1", "evses": [{"id": "1234"}], "empty": None}}

    def test_found(self):
        self.assertEqual(resolve(self.tree, "$['body']['evses'][0]['id']"), (True, "1234"))

    def test_null_is_found(self):
        self.assertEqual(resolve(self.tree, "$['body']['empty']"), (True, None))

    def test_missing_key(self):
        self.assertEqual(resolve(self.tree, "$['body']['city']"), (False, None))

    def test_index_out_of_range(self):
        self.assertEqual(resolve(self.tree, "$['body']['evses'][3]['id']"), (False, None))

    def test_wrong_container(self):
        self.assertEqual(resolve(self.tree, "$['body'][0]"), (False, None))
        self.assertEqual(resolve(self.tree, "$['body']['id']['x']"), (False, None))

    def test_case_sensitive(self):
        self.assertEqual(resolve(self.tree, "$['BODY']['id']"), (False, None))


class TestAssign(unittest.TestCase):

    def test_overwrite(self):
        tree = {"body": {"id": "2"}}
        self.assertTrue(assign(tree, "$['body']['id']", "1"))
        self.assertEqual(tree, {"body": {"id": "1"}})

    def test_creates_missing_containers(self):
        tree = {"headers": {}}
        self.assertTrue(assign(tree, "$['body']['evses'][1]['id']", "X"))
        self.assertEqual(tree["body"], {"evses": [None, {"id": "X"}]})

    def test_root_cannot_be_assigned(self):
        tree = {"body": {}}
        self.assertFalse(assign(tree, "$", {"x": 1}))
        self.assertEqual(tree, {"body": {}})

    def test_index_into_mapping_fails(self):
        tree = {"body": {"id": "1"}}
        self.assertFalse(assign(tree, "$['body'][0]", "x"))

    def test_malformed_path_fails(self):
        self.assertFalse(assign({}, "$.body.id", "x"))


if __name__ == "__main__":
    unittest.main()
