# Copyright (C) 2013-2018 The python-netparams developers
#
# This file is part of python-netparams.
#
# It is subject to the license terms in the LICENSE file found in the top-level
# directory of this distribution.
#
# No part of python-netparams, including this file, may be copied, modified,
# propagated, or distributed except according to the terms contained in the
# LICENSE file.

import unittest

import netparams
import netparams.core
from netparams import *
from netparams.core import DeploymentID, CoreRegTestParams


def privnet(**kwargs):
    attrs = dict(NAME='privnet',
                 MESSAGE_START=b'\x00\x00\x00\x01',
                 BASE58_PREFIXES={'PUBKEY_ADDR':0x32,
                                  'SCRIPT_ADDR':0x30,
                                  'SECRET_KEY' :0xef,
                                  'WITNESS_PUBKEY_ADDR':0x06,
                                  'WITNESS_SCRIPT_ADDR':0x0a},
                 BIP32_PREFIXES={'PRIVATE_KEY':b'\x04\x88\xad\xe4',
                                 'PUBLIC_KEY' :b'\x04\x88\xb2\x1e'},
                 BECH32_HRP='mil',
                 DEPLOYMENTS=CoreRegTestParams.DEPLOYMENTS)
    attrs.update(kwargs)
    return ChainParams(**attrs)


class Test_params(unittest.TestCase):
    def tearDown(self):
        netparams.SelectParams('mainnet')

    def test_default_is_mainnet(self):
        self.assertEqual(netparams.params.NAME, 'mainnet')
        self.assertIs(netparams.core.coreparams, netparams.params)

    def test_select_params(self):
        for name, expected_class in (('mainnet', MainParams),
                                     ('testnet4', TestNet4Params),
                                     ('regtest', RegTestParams),
                                     ('simnet', SimNetParams)):
            netparams.SelectParams(name)
            self.assertIsInstance(netparams.params, expected_class)
            self.assertEqual(netparams.params.NAME, name)
            self.assertIs(netparams.core.coreparams, netparams.params)

    def test_select_params_aliases(self):
        netparams.SelectParams('testnet')
        self.assertEqual(netparams.params.NAME, 'testnet4')
        netparams.SelectParams('regnet')
        self.assertEqual(netparams.params.NAME, 'regtest')

    def test_select_unknown(self):
        netparams.SelectParams('regtest')
        with self.assertRaises(ValueError):
            netparams.SelectParams('nosuchnet')
        self.assertEqual(netparams.params.NAME, 'regtest')

    def test_magic_bytes(self):
        self.assertEqual(MainParams().MESSAGE_START, b'\xfb\xc0\xb6\xdb')
        self.assertEqual(TestNet4Params().MESSAGE_START, b'\xfd\xd2\xc8\xf1')
        self.assertEqual(RegTestParams().MESSAGE_START, b'\xfa\xbf\xb5\xda')
        self.assertEqual(SimNetParams().MESSAGE_START, b'\x16\x1c\x14\x12')

    def test_core_params_inherited(self):
        self.assertEqual(MainParams().SUBSIDY_HALVING_INTERVAL, 840000)
        self.assertEqual(RegTestParams().MINER_CONFIRMATION_WINDOW, 144)
        self.assertEqual(SimNetParams().PROOF_OF_WORK_LIMIT, 2**255 - 1)
        self.assertEqual(TestNet4Params().PROOF_OF_WORK_LIMIT, MainParams().PROOF_OF_WORK_LIMIT)
        self.assertEqual(MainParams().DEPLOYMENTS[DeploymentID.SEGWIT].bit_number, 1)
        self.assertEqual(SimNetParams().GENESIS_BLOCK.nNonce, 2)


class Test_builtin_registry(unittest.TestCase):
    def test_builtins_registered(self):
        for params in (MainParams(), TestNet4Params(), RegTestParams(), SimNetParams()):
            self.assertIn(params.MESSAGE_START, netparams.default_registry)
            self.assertTrue(netparams.IsPubKeyHashAddrID(params.BASE58_PREFIXES['PUBKEY_ADDR']))
            self.assertTrue(netparams.IsScriptHashAddrID(params.BASE58_PREFIXES['SCRIPT_ADDR']))
            self.assertTrue(netparams.IsBech32SegwitPrefix(params.BECH32_HRP + '1'))
            self.assertEqual(netparams.HDPrivateKeyToPublicKeyID(params.BIP32_PREFIXES['PRIVATE_KEY']),
                             params.BIP32_PREFIXES['PUBLIC_KEY'])
            self.assertEqual(netparams.ParamsForNet(params.MESSAGE_START).NAME, params.NAME)
            self.assertEqual(netparams.ParamsForName(params.NAME).MESSAGE_START, params.MESSAGE_START)

    def test_builtin_classification(self):
        self.assertTrue(netparams.IsPubKeyHashAddrID(0x32))
        self.assertTrue(netparams.IsPubKeyHashAddrID(0x6f))
        self.assertFalse(netparams.IsPubKeyHashAddrID(0x00))
        self.assertTrue(netparams.IsScriptHashAddrID(0x7b))
        self.assertFalse(netparams.IsScriptHashAddrID(0x05))
        self.assertTrue(netparams.IsBech32SegwitPrefix('MIL1'))
        self.assertTrue(netparams.IsBech32SegwitPrefix('remc21'))
        self.assertFalse(netparams.IsBech32SegwitPrefix('bc1'))
        self.assertEqual(netparams.HDPrivateKeyToPublicKeyID(b'\x04\x20\xb9\x00'), b'\x04\x20\xbd\x3a')
        with self.assertRaises(UnknownHDKeyIDError):
            netparams.HDPrivateKeyToPublicKeyID(b'\x04\x20\xb9')

    def test_builtin_duplicate(self):
        with self.assertRaises(DuplicateNetworkError):
            netparams.Register(MainParams())
        with self.assertRaises(DuplicateNetworkError):
            netparams.Register(privnet(NAME='fakemain', MESSAGE_START=b'\xfa\xbf\xb5\xda'))

    def test_unknown_net(self):
        with self.assertRaises(UnknownNetworkError):
            netparams.ParamsForNet(b'\xde\xad\xbe\xef')
        with self.assertRaises(NetParamsError):
            netparams.ParamsForName('nosuchnet')


class Test_ChainParams(unittest.TestCase):
    def test_keyword_construction(self):
        params = privnet(DEFAULT_PORT=12345, BECH32_HRP='PRIV')
        self.assertEqual(params.NAME, 'privnet')
        self.assertEqual(params.DEFAULT_PORT, 12345)
        self.assertEqual(params.BECH32_HRP, 'priv')
        self.assertEqual(params.BASE58_PREFIXES['PUBKEY_ADDR'], 0x32)
        self.assertEqual(params.CHECKPOINTS, ())
        self.assertIsNone(params.GENESIS_BLOCK)

    def test_subclass_construction(self):
        class PrivNetParams(ChainParams, CoreRegTestParams):
            NAME = 'privnet'
            MESSAGE_START = bytearray(b'\x00\x00\x00\x01')
            BASE58_PREFIXES = {'PUBKEY_ADDR':0x32,
                               'SCRIPT_ADDR':0x30,
                               'SECRET_KEY' :0xef,
                               'WITNESS_PUBKEY_ADDR':0x06,
                               'WITNESS_SCRIPT_ADDR':0x0a}
            BIP32_PREFIXES = {'PRIVATE_KEY':b'\x04\x88\xad\xe4',
                              'PUBLIC_KEY' :b'\x04\x88\xb2\x1e'}
            BECH32_HRP = 'priv'

        params = PrivNetParams()
        self.assertEqual(params.MESSAGE_START, b'\x00\x00\x00\x01')
        self.assertIsInstance(params.MESSAGE_START, bytes)
        self.assertEqual(params.SUBSIDY_HALVING_INTERVAL, 150)

        # Class attributes given as keywords override the subclass
        self.assertEqual(PrivNetParams(NAME='privnet2').NAME, 'privnet2')

    def test_immutable(self):
        params = MainParams()
        with self.assertRaises(AttributeError):
            params.BECH32_HRP = 'bc'
        with self.assertRaises(AttributeError):
            del params.NAME
        with self.assertRaises(TypeError):
            params.BASE58_PREFIXES['PUBKEY_ADDR'] = 0
        with self.assertRaises(TypeError):
            params.BIP32_PREFIXES['PRIVATE_KEY'] = b'\x00'*4
        with self.assertRaises(TypeError):
            params.DEPLOYMENTS[DeploymentID.CSV] = None

    def test_unknown_keyword(self):
        with self.assertRaises(TypeError):
            privnet(BECH32_PREFIX='priv')

    def test_invalid(self):
        def T(**kwargs):
            with self.assertRaises(ValueError):
                privnet(**kwargs)

        T(NAME=None)
        T(MESSAGE_START=None)
        T(MESSAGE_START=b'\x00\x00\x01')
        T(MESSAGE_START=b'\x00\x00\x00\x00\x01')
        T(BASE58_PREFIXES={'PUBKEY_ADDR':0x32, 'SCRIPT_ADDR':0x30, 'SECRET_KEY':0xef, 'WITNESS_PUBKEY_ADDR':0x06})
        T(BASE58_PREFIXES={'PUBKEY_ADDR':0x100, 'SCRIPT_ADDR':0x30, 'SECRET_KEY':0xef,
                           'WITNESS_PUBKEY_ADDR':0x06, 'WITNESS_SCRIPT_ADDR':0x0a})
        T(BIP32_PREFIXES={'PRIVATE_KEY':b'\x04\x88\xad\xe4'})
        T(BIP32_PREFIXES={'PRIVATE_KEY':b'\x04\x88\xad', 'PUBLIC_KEY':b'\x04\x88\xb2\x1e'})
        T(BECH32_HRP='')
        T(BECH32_HRP=b'mil')
        T(DEPLOYMENTS=None)
        T(DEPLOYMENTS={DeploymentID.CSV: CoreRegTestParams.DEPLOYMENTS[DeploymentID.CSV]})

    def test_register_custom_network(self):
        """Scenario: a private network registered alongside the built-ins"""
        registry = NetworkRegistry()
        registry.register(privnet())

        self.assertTrue(registry.is_pubkey_hash_addr_id(0x32))
        self.assertFalse(registry.is_pubkey_hash_addr_id(0x6f))
        self.assertEqual(registry.hd_private_key_to_public_key_id(bytes([0x04, 0x88, 0xad, 0xe4])),
                         bytes([0x04, 0x88, 0xb2, 0x1e]))
        self.assertTrue(registry.is_bech32_segwit_prefix('mil1'))
