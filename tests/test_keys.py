import os
import unittest

import EdSig
from EdSig.Cryptography import Errors
from EdSig.Cryptography import Provider
from EdSig.Cryptography.Ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from .test_eddsa import seed_hex, keypair_hex, public_key_hex, signature_hex

class TestKeys(unittest.TestCase):
    def test_provider(self):
        self.assertEqual(Provider.PROVIDER, Provider.PROVIDER_INTERNAL)
        self.assertEqual(EdSig.Cryptography.backend(), "internal")
        self.assertIs(EdSig.Cryptography.Ed25519PrivateKey, Ed25519PrivateKey)
        self.assertIs(EdSig.Cryptography.Ed25519PublicKey, Ed25519PublicKey)

    def test_from_private_bytes(self):
        sk = Ed25519PrivateKey.from_private_bytes(bytes.fromhex(seed_hex))
        self.assertEqual(sk.private_bytes(), bytes.fromhex(seed_hex))
        self.assertEqual(sk.keypair_bytes(), bytes.fromhex(keypair_hex))
        self.assertEqual(sk.public_key().public_bytes(), bytes.fromhex(public_key_hex))
        self.assertEqual(sk.public_key(), Ed25519PublicKey.from_public_bytes(bytes.fromhex(public_key_hex)))

    def test_from_keypair_bytes(self):
        sk = Ed25519PrivateKey.from_keypair_bytes(bytes.fromhex(keypair_hex))
        self.assertEqual(sk.private_bytes(), bytes.fromhex(seed_hex))

        mismatched = bytes.fromhex(seed_hex)+os.urandom(32)
        self.assertRaises(ValueError, Ed25519PrivateKey.from_keypair_bytes, mismatched)
        self.assertRaises(ValueError, Ed25519PrivateKey.from_keypair_bytes, bytes(32))

    def test_generate(self):
        seed = os.urandom(32)
        sk = Ed25519PrivateKey.generate(entropy=lambda n: seed)
        self.assertEqual(sk.private_bytes(), seed)

        sk_1 = Ed25519PrivateKey.generate()
        sk_2 = Ed25519PrivateKey.generate()
        self.assertNotEqual(sk_1.private_bytes(), sk_2.private_bytes())

    def test_sign_and_verify(self):
        sk = Ed25519PrivateKey.from_private_bytes(bytes.fromhex(seed_hex))
        vk = sk.public_key()
        signature = sk.sign(b"test")
        self.assertEqual(signature, bytes.fromhex(signature_hex))
        vk.verify(signature, b"test")

        noised = sk.sign(b"test", noise=os.urandom(32))
        self.assertNotEqual(noised, signature)
        vk.verify(noised, b"test")

        with self.assertRaises(Errors.InvalidSignatureError):
            vk.verify(signature, b"TEST")

    def test_invalid_keys(self):
        self.assertRaises(ValueError, Ed25519PrivateKey.from_private_bytes, bytes(16))
        self.assertRaises(ValueError, Ed25519PublicKey.from_public_bytes, bytes(31))

        vk = Ed25519PublicKey.from_public_bytes(bytes.fromhex("0100000000000000000000000000000000000000000000000000000000000000"))
        with self.assertRaises(Errors.IdentityElementError):
            vk.verify(bytes.fromhex(signature_hex), b"test")


@unittest.skipUnless(Provider.pyca_available, "PyCA cryptography is not installed")
class TestPyCAInterop(unittest.TestCase):
    def setUp(self):
        from EdSig.Cryptography import Proxies
        self.proxies = Proxies

    def test_keys_match(self):
        seed = os.urandom(32)
        internal = Ed25519PrivateKey.from_private_bytes(seed)
        pyca = self.proxies.Ed25519PrivateKeyProxy.from_private_bytes(seed)
        self.assertEqual(pyca.private_bytes(), internal.private_bytes())
        self.assertEqual(pyca.public_key().public_bytes(), internal.public_key().public_bytes())
        self.assertEqual(pyca.keypair_bytes(), internal.keypair_bytes())

    def test_signatures_match(self):
        for i in range(5):
            seed = os.urandom(32)
            message = os.urandom(i*50)
            internal = Ed25519PrivateKey.from_private_bytes(seed)
            pyca = self.proxies.Ed25519PrivateKeyProxy.from_private_bytes(seed)
            self.assertEqual(internal.sign(message), pyca.sign(message))

    def test_cross_verification(self):
        pyca = self.proxies.Ed25519PrivateKeyProxy.generate()
        message = os.urandom(100)
        signature = pyca.sign(message)
        Ed25519PublicKey.from_public_bytes(pyca.public_key().public_bytes()).verify(signature, message)

        internal = Ed25519PrivateKey.generate()
        signature = internal.sign(message, noise=os.urandom(32))
        pyca_vk = self.proxies.Ed25519PublicKeyProxy.from_public_bytes(internal.public_key().public_bytes())
        pyca_vk.verify(signature, message)

        with self.assertRaises(Errors.InvalidSignatureError):
            pyca_vk.verify(signature, message+b"\x00")

    def test_known_signature(self):
        pyca = self.proxies.Ed25519PrivateKeyProxy.from_private_bytes(bytes.fromhex(seed_hex))
        self.assertEqual(pyca.sign(b"test"), bytes.fromhex(signature_hex))

    def test_same_api_as_internal_keys(self):
        Proxy = self.proxies.Ed25519PrivateKeyProxy
        seed = bytes.fromhex(seed_hex)

        pyca = Proxy.generate(entropy=lambda n: seed)
        self.assertEqual(pyca.keypair_bytes(), bytes.fromhex(keypair_hex))
        self.assertEqual(Proxy.from_keypair_bytes(bytes.fromhex(keypair_hex)).private_bytes(), seed)
        self.assertRaises(ValueError, Proxy.from_keypair_bytes, seed+os.urandom(32))
        self.assertRaises(ValueError, Proxy.from_keypair_bytes, seed)

        self.assertEqual(pyca.sign(b"test", noise=None), bytes.fromhex(signature_hex))
        with self.assertRaises(NotImplementedError):
            pyca.sign(b"test", noise=os.urandom(32))
        Ed25519PrivateKey.from_private_bytes(seed).sign(b"test", noise=os.urandom(32))

        self.assertEqual(pyca.public_key(), self.proxies.Ed25519PublicKeyProxy.from_public_bytes(bytes.fromhex(public_key_hex)))


if __name__ == '__main__':
    unittest.main(verbosity=2)
