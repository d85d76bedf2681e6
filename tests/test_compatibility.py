"""
Compatibility with signatures issued by the TypeScript and Kotlin notaries.

Fixed keys and requests must produce the exact hashes and signatures the
other implementations produce, and their headers must decode here.
"""

import copy
import unittest

from ocn_notary import Notary, to_checksum

from vectors import (
    COMPAT_FIELDS,
    COMPAT_HEADER,
    COMPAT_REQUEST,
    NODE_ADDRESS,
    NODE_HASH,
    NODE_PRIVATE_KEY,
    NODE_RESPONSE_URL,
    NODE_RSV,
    ORIGINAL_RESPONSE_URL,
    SECOND_NODE_HASH,
    SECOND_NODE_RSV,
    USER_ADDRESS,
    USER_HASH,
    USER_PRIVATE_KEY,
    USER_RSV,
)


class TestDeserialization(unittest.TestCase):

    def test_deserialize_foreign_header(self):
        notary = Notary.deserialize(COMPAT_HEADER)
        self.assertEqual(notary.fields, COMPAT_FIELDS)
        self.assertEqual(notary.hash, NODE_HASH)
        self.assertEqual(notary.rsv, NODE_RSV)
        self.assertEqual(notary.signatory, NODE_ADDRESS)
        self.assertEqual(len(notary.rewrites), 1)
        self.assertEqual(notary.rewrites[0].to_dict(), {
            "rewrittenFields": {"$['body']['response_url']": ORIGINAL_RESPONSE_URL},
            "hash": USER_HASH,
            "rsv": USER_RSV,
            "signatory": USER_ADDRESS,
        })

    def test_reserialized_foreign_header_decodes_identically(self):
        notary = Notary.deserialize(COMPAT_HEADER)
        self.assertEqual(Notary.deserialize(notary.serialize()), notary)

    def test_foreign_header_verifies(self):
        modified = copy.deepcopy(COMPAT_REQUEST)
        modified["body"]["response_url"] = NODE_RESPONSE_URL
        result = Notary.deserialize(COMPAT_HEADER).verify(modified)
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.error)


class TestSignVerify(unittest.TestCase):

    def test_signing(self):
        notary = Notary().sign(COMPAT_REQUEST, USER_PRIVATE_KEY)
        self.assertEqual(notary.fields, COMPAT_FIELDS)
        self.assertEqual(notary.hash, USER_HASH)
        self.assertEqual(notary.rsv, USER_RSV)
        self.assertEqual(to_checksum(notary.signatory), to_checksum(USER_ADDRESS))
        self.assertEqual(notary.rewrites, [])

    def test_verifying(self):
        notary = Notary().sign(COMPAT_REQUEST, USER_PRIVATE_KEY)
        result = notary.verify(COMPAT_REQUEST)
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.error)

    def test_verifying_rewrite(self):
        notary = Notary().sign(COMPAT_REQUEST, USER_PRIVATE_KEY)

        modified = copy.deepcopy(COMPAT_REQUEST)
        modified["body"]["response_url"] = NODE_RESPONSE_URL

        rewritten_fields = {"$['body']['response_url']": COMPAT_REQUEST["body"]["response_url"]}
        notary.stash(rewritten_fields)
        notary.sign(modified, NODE_PRIVATE_KEY)

        self.assertEqual(notary.fields, COMPAT_FIELDS)
        self.assertEqual(notary.hash, NODE_HASH)
        self.assertEqual(notary.rsv, NODE_RSV)
        self.assertEqual(to_checksum(notary.signatory), to_checksum(NODE_ADDRESS))
        self.assertEqual(len(notary.rewrites), 1)

        self.assertEqual(dict(notary.rewrites[0].rewritten_fields), rewritten_fields)
        self.assertEqual(notary.rewrites[0].hash, USER_HASH)
        self.assertEqual(notary.rewrites[0].rsv, USER_RSV)
        self.assertEqual(to_checksum(notary.rewrites[0].signatory), to_checksum(USER_ADDRESS))

        result = notary.verify(modified)
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.error)

    def test_verifying_multiple_rewrites(self):
        notary = Notary().sign(COMPAT_REQUEST, USER_PRIVATE_KEY)

        modified = copy.deepcopy(COMPAT_REQUEST)
        modified["body"]["response_url"] = NODE_RESPONSE_URL
        rewritten_fields = {"$['body']['response_url']": COMPAT_REQUEST["body"]["response_url"]}
        notary.stash(rewritten_fields)
        notary.sign(modified, NODE_PRIVATE_KEY)

        second = copy.deepcopy(modified)
        second["headers"]["ocpi-from-party-id"] = "ABC"
        second_rewritten_fields = {
            "$['headers']['ocpi-from-party-id']": COMPAT_REQUEST["headers"]["ocpi-from-party-id"]
        }
        notary.stash(second_rewritten_fields)
        notary.sign(second, NODE_PRIVATE_KEY)

        self.assertEqual(notary.fields, COMPAT_FIELDS)
        self.assertEqual(notary.hash, SECOND_NODE_HASH)
        self.assertEqual(notary.rsv, SECOND_NODE_RSV)
        self.assertEqual(to_checksum(notary.signatory), to_checksum(NODE_ADDRESS))
        self.assertEqual(len(notary.rewrites), 2)

        self.assertEqual(dict(notary.rewrites[0].rewritten_fields), rewritten_fields)
        self.assertEqual(notary.rewrites[0].hash, USER_HASH)
        self.assertEqual(notary.rewrites[0].rsv, USER_RSV)
        self.assertEqual(to_checksum(notary.rewrites[0].signatory), to_checksum(USER_ADDRESS))

        self.assertEqual(dict(notary.rewrites[1].rewritten_fields), second_rewritten_fields)
        self.assertEqual(notary.rewrites[1].hash, NODE_HASH)
        self.assertEqual(notary.rewrites[1].rsv, NODE_RSV)
        self.assertEqual(to_checksum(notary.rewrites[1].signatory), to_checksum(NODE_ADDRESS))

        result = notary.verify(second)
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.error)


if __name__ == "__main__":
    unittest.main()
